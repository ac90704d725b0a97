"""
Shared API dependencies.

Services are built per request around the request's database session.
"""

from fastapi import Depends
from sqlmodel import Session

from whereabouts.db.session import get_db
from whereabouts.services.quarter_service import QuarterService
from whereabouts.services.template_service import TemplateService


def get_quarter_service(db: Session = Depends(get_db)) -> QuarterService:
    return QuarterService(db)


def get_template_service(db: Session = Depends(get_db)) -> TemplateService:
    return TemplateService(db)
