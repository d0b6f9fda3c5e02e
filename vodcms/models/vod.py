from sqlalchemy import Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from vodcms.database import Base


class LegacyVod(Base):
    """
    Legacy video table.

    Owned by the CMS; the episode resync only reads ``vod_play_from`` and
    ``vod_play_url`` from it.
    """
    __tablename__ = "bb_vod"

    vod_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vod_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    # "player1$$$player2"
    vod_play_from: Mapped[str | None] = mapped_column(Text)
    # "ep1$url1#ep2$url2$$$ep1$url3"
    vod_play_url: Mapped[str | None] = mapped_column(Text)
