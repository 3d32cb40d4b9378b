"""create_sponsor_tables

Revision ID: 001
Revises:
Create Date: 2026-10-17 09:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = '001'
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    bind = op.get_bind()
    inspector = sa.inspect(bind)

    if not inspector.has_table('organisations'):
        op.create_table('organisations',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.Text(), nullable=False),
        sa.Column('town_city', sa.Text(), nullable=True),
        sa.Column('county', sa.Text(), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('deleted_at', sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_organisations_id'), 'organisations', ['id'], unique=False)
        op.create_index(op.f('ix_organisations_deleted_at'), 'organisations', ['deleted_at'], unique=False)
        op.create_index('ix_organisations_identity', 'organisations', ['name', 'town_city', 'county'], unique=False)

    if not inspector.has_table('licences'):
        op.create_table('licences',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('organisation_id', sa.Integer(), nullable=False),
        sa.Column('licence_type', sa.String(length=100), nullable=False),
        sa.Column('rating', sa.String(length=100), nullable=False),
        sa.Column('route', sa.String(length=255), nullable=False),
        sa.Column('valid_from', sa.DateTime(timezone=True), nullable=True),
        sa.Column('valid_to', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['organisation_id'], ['organisations.id']),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_licences_id'), 'licences', ['id'], unique=False)
        op.create_index(op.f('ix_licences_valid_to'), 'licences', ['valid_to'], unique=False)
        op.create_index('ix_licences_lookup', 'licences', ['organisation_id', 'licence_type', 'route'], unique=False)

    if not inspector.has_table('config'):
        op.create_table('config',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('name', sa.String(length=255), nullable=False),
        sa.Column('key', sa.String(length=255), nullable=False),
        sa.Column('value', sa.Text(), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sa.UniqueConstraint('name', 'key', name='uq_config_name_key')
        )

    if not inspector.has_table('sync_runs'):
        op.create_table('sync_runs',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('start_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('end_time', sa.DateTime(timezone=True), nullable=False),
        sa.Column('bootstrap', sa.Boolean(), nullable=False),
        sa.Column('new_organisations', sa.Integer(), nullable=False),
        sa.Column('new_licences', sa.Integer(), nullable=False),
        sa.Column('changed_licences', sa.Integer(), nullable=False),
        sa.Column('closed_organisations', sa.Integer(), nullable=False),
        sa.Column('closed_licences', sa.Integer(), nullable=False),
        sa.Column('error_count', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=True),
        sa.PrimaryKeyConstraint('id')
        )
        op.create_index(op.f('ix_sync_runs_id'), 'sync_runs', ['id'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_sync_runs_id'), table_name='sync_runs')
    op.drop_table('sync_runs')
    op.drop_table('config')
    op.drop_index('ix_licences_lookup', table_name='licences')
    op.drop_index(op.f('ix_licences_valid_to'), table_name='licences')
    op.drop_index(op.f('ix_licences_id'), table_name='licences')
    op.drop_table('licences')
    op.drop_index('ix_organisations_identity', table_name='organisations')
    op.drop_index(op.f('ix_organisations_deleted_at'), table_name='organisations')
    op.drop_index(op.f('ix_organisations_id'), table_name='organisations')
    op.drop_table('organisations')
