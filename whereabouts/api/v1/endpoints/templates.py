"""
Weekly template endpoints.
"""

from fastapi import APIRouter, Depends, Query, status

from whereabouts.api.dependencies import get_template_service
from whereabouts.schemas.results import ApplyPatternResponse, OperationResult, TemplateResult, TemplatesResult
from whereabouts.schemas.template import ApplyTemplateRequest, TemplateCreate
from whereabouts.services.template_service import TemplateService

router = APIRouter()


@router.get("", summary="List an athlete's templates, most used first.", response_model=TemplatesResult)
def list_templates(athlete_id: str = Query(..., min_length=1),
                   service: TemplateService = Depends(get_template_service), ):
    return TemplatesResult(templates=service.list_templates(athlete_id))


@router.post("", summary="Save a weekly pattern as a template.", response_model=TemplateResult,
             status_code=status.HTTP_201_CREATED, )
def save_template(data: TemplateCreate, service: TemplateService = Depends(get_template_service)):
    return TemplateResult(template=service.save_template(data))


@router.get("/{template_id}", summary="Get a template.", response_model=TemplateResult)
def get_template(template_id: int, athlete_id: str = Query(..., min_length=1),
                 service: TemplateService = Depends(get_template_service), ):
    return TemplateResult(template=service.get_template(template_id, athlete_id))


@router.delete("/{template_id}", summary="Delete a template.", response_model=OperationResult)
def delete_template(template_id: int, athlete_id: str = Query(..., min_length=1),
                    service: TemplateService = Depends(get_template_service), ):
    service.delete_template(template_id, athlete_id)
    return OperationResult()


@router.post("/{template_id}/apply", summary="Apply a template to a quarter.", response_model=ApplyPatternResponse)
def apply_template(template_id: int, data: ApplyTemplateRequest,
                   service: TemplateService = Depends(get_template_service), ):
    result = service.apply_template(template_id, data.athlete_id, data.quarter_id, data.overwrite)
    return ApplyPatternResponse(slots_created=result.slots_created, slots_updated=result.slots_updated)
