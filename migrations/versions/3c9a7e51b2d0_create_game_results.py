"""create game_results

Revision ID: 3c9a7e51b2d0
Revises:
Create Date: 2026-10-18 09:00:00.000000

"""
from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = '3c9a7e51b2d0'
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    bind = op.get_bind()
    insp = sa.inspect(bind)
    # db.create_all() on start-up may already have created the table
    if 'game_results' in set(insp.get_table_names()):
        return

    op.create_table(
        'game_results',
        sa.Column('id', sa.Integer(), autoincrement=True, nullable=False),
        sa.Column('player_name', sa.String(length=64), nullable=False),
        sa.Column('score', sa.Integer(), nullable=False),
        sa.Column('tries', sa.Integer(), nullable=False),
        sa.Column('matches', sa.Integer(), nullable=False),
        sa.Column('created_at', sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint('id'),
        sqlite_autoincrement=True,
    )
    op.create_index('ix_game_results_created_at', 'game_results', ['created_at'])


def downgrade():
    op.drop_index('ix_game_results_created_at', table_name='game_results')
    op.drop_table('game_results')
