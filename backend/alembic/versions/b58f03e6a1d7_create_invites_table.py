"""create invites table

Revision ID: b58f03e6a1d7
Revises: 7c1e4a9d2b30
Create Date: 2026-10-17 10:31:07.220914

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = 'b58f03e6a1d7'
down_revision: Union[str, Sequence[str], None] = '7c1e4a9d2b30'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        'invites',
        sa.Column('id', sa.Uuid(), nullable=False),
        sa.Column('token', sa.String(), nullable=False),
        sa.Column('event_slug', sa.String(), nullable=False),
        sa.Column('guest_name', sa.String(length=255), nullable=False),
        sa.Column('puzzle_solved', sa.Boolean(), nullable=False, server_default=sa.text('false')),
        sa.Column('rsvp_status', sa.Enum('accepted', 'declined', name='rsvpstatus'), nullable=True),
        sa.Column('rsvp_data', postgresql.JSONB(astext_type=sa.Text()), nullable=True),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column('solved_at', sa.DateTime(timezone=True), nullable=True),
        sa.Column('rsvp_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['event_slug'], ['events.slug']),
        sa.PrimaryKeyConstraint('id'),
    )
    op.create_index(op.f('ix_invites_token'), 'invites', ['token'], unique=True)
    op.create_index(op.f('ix_invites_event_slug'), 'invites', ['event_slug'], unique=False)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index(op.f('ix_invites_event_slug'), table_name='invites')
    op.drop_index(op.f('ix_invites_token'), table_name='invites')
    op.drop_table('invites')
    op.execute("DROP TYPE IF EXISTS rsvpstatus")
