from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vodcms.database import Base
from vodcms.utils.timestamps import unix_now

ORPHAN_PLAYER_ID = 0


class VodSource(Base):
    """One player's episode list for a video (normalized from bb_vod)."""
    __tablename__ = "bb_vod_source"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    vod_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    # 0 when the player key has no bb_player row
    player_id: Mapped[int] = mapped_column(
        Integer, nullable=False, default=ORPHAN_PLAYER_ID, index=True
    )
    player_name: Mapped[str] = mapped_column(String(64), nullable=False)
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    # Epoch seconds
    created_at: Mapped[int] = mapped_column(Integer, nullable=False, default=unix_now)
    updated_at: Mapped[int] = mapped_column(
        Integer, nullable=False, default=unix_now, onupdate=unix_now
    )
