"""add course notes

Revision ID: 8d4b6e21c0fa
Revises: 5c1e2f7a9b3d
Create Date: 2026-10-19 15:40:02.118934

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = '8d4b6e21c0fa'
down_revision: Union[str, None] = '5c1e2f7a9b3d'
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        'course_notes',
        sa.Column('id', sa.Integer(), nullable=False),
        sa.Column('course_id', sa.Integer(), nullable=False),
        sa.Column('author_id', sa.Integer(), nullable=False),
        sa.Column('title', sa.String(), nullable=False),
        sa.Column('content', sa.Text(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('(CURRENT_TIMESTAMP)'), nullable=True),
        sa.Column('updated_at', sa.DateTime(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(['course_id'], ['courses.id'], ondelete='CASCADE'),
        sa.ForeignKeyConstraint(['author_id'], ['users.id'], ondelete='CASCADE'),
        sa.PrimaryKeyConstraint('id')
    )
    op.create_index(op.f('ix_course_notes_id'), 'course_notes', ['id'], unique=False)
    op.create_index(op.f('ix_course_notes_course_id'), 'course_notes', ['course_id'], unique=False)
    op.create_index(op.f('ix_course_notes_author_id'), 'course_notes', ['author_id'], unique=False)


def downgrade() -> None:
    op.drop_index(op.f('ix_course_notes_author_id'), table_name='course_notes')
    op.drop_index(op.f('ix_course_notes_course_id'), table_name='course_notes')
    op.drop_index(op.f('ix_course_notes_id'), table_name='course_notes')
    op.drop_table('course_notes')
