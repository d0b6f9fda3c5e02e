"""add_vod_episode_tables

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "bb_vod_source",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("vod_id", sa.Integer(), nullable=False),
        sa.Column("player_id", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("player_name", sa.String(64), nullable=False),
        sa.Column("sort", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_bb_vod_source_vod_id", "bb_vod_source", ["vod_id"])
    op.create_index("ix_bb_vod_source_player_id", "bb_vod_source", ["player_id"])

    # No FK on source_id: resync truncates episodes, then sources
    op.create_table(
        "bb_vod_episode",
        sa.Column("id", sa.BigInteger(), primary_key=True, autoincrement=True),
        sa.Column("vod_id", sa.Integer(), nullable=False),
        sa.Column("source_id", sa.Integer(), nullable=False),
        sa.Column("episode_num", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("url", sa.Text(), nullable=False),
        sa.Column("sort", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("updated_at", sa.Integer(), nullable=False, server_default="0"),
    )
    op.create_index("ix_bb_vod_episode_vod_id", "bb_vod_episode", ["vod_id"])
    op.create_index("ix_bb_vod_episode_source_id", "bb_vod_episode", ["source_id"])


def downgrade() -> None:
    op.drop_index("ix_bb_vod_episode_source_id", table_name="bb_vod_episode")
    op.drop_index("ix_bb_vod_episode_vod_id", table_name="bb_vod_episode")
    op.drop_table("bb_vod_episode")
    op.drop_index("ix_bb_vod_source_player_id", table_name="bb_vod_source")
    op.drop_index("ix_bb_vod_source_vod_id", table_name="bb_vod_source")
    op.drop_table("bb_vod_source")
