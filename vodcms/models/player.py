from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from vodcms.database import Base


class Player(Base):
    """Player registry entry. ``from_key`` is the key used in ``vod_play_from``."""
    __tablename__ = "bb_player"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    from_key: Mapped[str] = mapped_column(String(64), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, default="")
    sort: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
