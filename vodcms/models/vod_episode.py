from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vodcms.database import Base
from vodcms.models.sql_types import EPISODE_ID_SQL_TYPE
from vodcms.utils.timestamps import unix_now


class VodEpisode(Base):
    """
    Single episode of a VodSource.

    ``source_id`` is not a database-level foreign key: episodes are always
    truncated before their sources, and resync inserts them right after the
    owning source.
    """
    __tablename__ = "bb_vod_episode"

    id: Mapped[int] = mapped_column(EPISODE_ID_SQL_TYPE, primary_key=True, autoincrement=True)
    vod_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    source_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # 1-based, always sort + 1
    episode_num: Mapped[int] = mapped_column(Integer, nullable=False)
    title: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    url: Mapped[str] = mapped_column(Text, nullable=False)
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Epoch seconds
    created_at: Mapped[int] = mapped_column(Integer, nullable=False, default=unix_now)
    updated_at: Mapped[int] = mapped_column(
        Integer, nullable=False, default=unix_now, onupdate=unix_now
    )
