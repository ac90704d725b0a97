"""Add quarters, daily_slots and templates tables

Revision ID: 001
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from typing import Sequence, Union

import sqlalchemy as sa
import sqlmodel
from alembic import op

# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

quarter_name = sa.Enum('Q1', 'Q2', 'Q3', 'Q4', name='quartername')
quarter_status = sa.Enum('DRAFT', 'INCOMPLETE', 'COMPLETE', 'SUBMITTED', 'LOCKED', name='quarterstatus')
location_type = sa.Enum('HOME', 'TRAINING', 'GYM', name='locationtype')


def upgrade() -> None:
    """Create quarters, daily_slots and templates tables."""
    op.create_table('quarters', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=False),
        sa.Column('year', sa.Integer(), nullable=False),
        sa.Column('quarter', quarter_name, nullable=False),
        sa.Column('start_date', sa.Date(), nullable=False),
        sa.Column('end_date', sa.Date(), nullable=False),
        sa.Column('filing_deadline', sa.Date(), nullable=False),
        sa.Column('total_days', sa.Integer(), nullable=False),
        sa.Column('status', quarter_status, nullable=False),
        sa.Column('completion_percentage', sa.Integer(), nullable=False),
        sa.Column('days_completed', sa.Integer(), nullable=False),
        sa.Column('copied_from_quarter_id', sa.Integer(), nullable=True),
        sa.Column('submitted_at', sa.DateTime(), nullable=True),
        sa.Column('locked_at', sa.DateTime(), nullable=True),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['copied_from_quarter_id'], ['quarters.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('athlete_id', 'year', 'quarter', name='uq_quarter_athlete_year_quarter'))
    op.create_index(op.f('ix_quarters_athlete_id'), 'quarters', ['athlete_id'], unique=False)

    op.create_table('daily_slots', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('quarter_id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=False),
        sa.Column('date', sa.Date(), nullable=False),
        sa.Column('location_type', location_type, nullable=False),
        sa.Column('time_start', sqlmodel.sql.sqltypes.AutoString(length=5), nullable=False),
        sa.Column('time_end', sqlmodel.sql.sqltypes.AutoString(length=5), nullable=False),
        sa.Column('location_id', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=True),
        sa.Column('location_name', sqlmodel.sql.sqltypes.AutoString(length=255), nullable=True),
        sa.Column('location_address', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('is_competition', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('competition_id', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=True),
        sa.Column('notes', sqlmodel.sql.sqltypes.AutoString(length=1000), nullable=True),
        sa.Column('is_complete', sa.Boolean(), nullable=False, server_default='true'),
        sa.Column('modification_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.ForeignKeyConstraint(['quarter_id'], ['quarters.id'], ),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('quarter_id', 'date', name='uq_daily_slot_quarter_date'))
    op.create_index(op.f('ix_daily_slots_quarter_id'), 'daily_slots', ['quarter_id'], unique=False)
    op.create_index(op.f('ix_daily_slots_athlete_id'), 'daily_slots', ['athlete_id'], unique=False)
    op.create_index(op.f('ix_daily_slots_date'), 'daily_slots', ['date'], unique=False)

    op.create_table('templates', sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('athlete_id', sqlmodel.sql.sqltypes.AutoString(length=128), nullable=False),
        sa.Column('name', sqlmodel.sql.sqltypes.AutoString(length=100), nullable=False),
        sa.Column('description', sqlmodel.sql.sqltypes.AutoString(length=500), nullable=True),
        sa.Column('pattern', sa.JSON(), nullable=False),
        sa.Column('usage_count', sa.Integer(), nullable=False, server_default='0'),
        sa.Column('is_default', sa.Boolean(), nullable=False, server_default='false'),
        sa.Column('created_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.Column('updated_at', sa.DateTime(), nullable=False, server_default=sa.text('(CURRENT_TIMESTAMP)')),
        sa.PrimaryKeyConstraint('id'))
    op.create_index(op.f('ix_templates_athlete_id'), 'templates', ['athlete_id'], unique=False)


def downgrade() -> None:
    """Drop whereabouts tables."""
    op.drop_index(op.f('ix_templates_athlete_id'), table_name='templates')
    op.drop_table('templates')
    op.drop_index(op.f('ix_daily_slots_date'), table_name='daily_slots')
    op.drop_index(op.f('ix_daily_slots_athlete_id'), table_name='daily_slots')
    op.drop_index(op.f('ix_daily_slots_quarter_id'), table_name='daily_slots')
    op.drop_table('daily_slots')
    op.drop_index(op.f('ix_quarters_athlete_id'), table_name='quarters')
    op.drop_table('quarters')
    location_type.drop(op.get_bind(), checkfirst=True)
    quarter_status.drop(op.get_bind(), checkfirst=True)
    quarter_name.drop(op.get_bind(), checkfirst=True)
