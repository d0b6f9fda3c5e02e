"""Player key → bb_player.id lookup for the episode resync."""
import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from vodcms.models import Player, ORPHAN_PLAYER_ID

logger = logging.getLogger(__name__)


class PlayerResolver:
    """
    Resolves player keys from ``vod_play_from`` to registry ids.

    The registry is loaded once per run; later changes to bb_player are not
    observed. Lookups are exact and case-sensitive. Unknown keys resolve to
    ``ORPHAN_PLAYER_ID`` so orphaned sources stay visible for auditing.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self._players: dict[str, int] | None = None

    @property
    def loaded(self) -> bool:
        return self._players is not None

    async def load_all(self) -> dict[str, int]:
        """Load every player with one query. Later rows win on duplicate keys."""
        result = await self.db.execute(
            select(Player.from_key, Player.id).order_by(Player.id)
        )
        self._players = {from_key: player_id for from_key, player_id in result.all()}
        logger.info(f"Loaded {len(self._players)} players")
        return dict(self._players)

    def resolve(self, player_key: str) -> int:
        if self._players is None:
            raise RuntimeError("PlayerResolver.load_all() must be awaited before resolve()")
        return self._players.get(player_key, ORPHAN_PLAYER_ID)
