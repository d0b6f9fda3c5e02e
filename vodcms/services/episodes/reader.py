"""
Paged reader over the legacy bb_vod table.

Pages are ordered by ``vod_id`` ascending. With ``offset`` pagination rows
added or removed while a run is in progress can be skipped or visited twice;
runs are expected against a quiescent table. ``keyset`` pagination continues
after the last seen ``vod_id`` instead and does not have that problem.
"""
from collections.abc import AsyncIterator
from dataclasses import dataclass

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from vodcms.config import PaginationMode
from vodcms.models import LegacyVod


@dataclass(frozen=True, slots=True)
class LegacyVideoRecord:
    id: int
    play_from: str
    play_url: str


class LegacyVodReader:
    def __init__(self, db: AsyncSession, pagination: PaginationMode = "offset"):
        if pagination not in ("offset", "keyset"):
            raise ValueError(f"Unknown pagination mode: {pagination!r}")
        self.db = db
        self.pagination = pagination

    async def count(self) -> int:
        result = await self.db.execute(select(func.count()).select_from(LegacyVod))
        return int(result.scalar_one() or 0)

    async def fetch_page(
        self,
        limit: int,
        *,
        offset: int = 0,
        after_id: int | None = None,
    ) -> list[LegacyVideoRecord]:
        """Fetch one page of records; ``after_id`` switches to keyset lookup."""
        query = (
            select(LegacyVod.vod_id, LegacyVod.vod_play_from, LegacyVod.vod_play_url)
            .order_by(LegacyVod.vod_id.asc())
            .limit(limit)
        )
        if after_id is not None:
            query = query.where(LegacyVod.vod_id > after_id)
        else:
            query = query.offset(offset)

        result = await self.db.execute(query)
        return [
            LegacyVideoRecord(id=vod_id, play_from=play_from or "", play_url=play_url or "")
            for vod_id, play_from, play_url in result.all()
        ]

    async def pages(self, page_size: int, total: int) -> AsyncIterator[list[LegacyVideoRecord]]:
        """
        Yield ordered batches until ``total`` rows have been requested.

        Args:
            page_size: Rows per page
            total: Row count captured when the run started

        Yields:
            Non-empty lists of LegacyVideoRecord
        """
        if page_size <= 0:
            raise ValueError("page_size must be positive")

        offset = 0
        last_id: int | None = None
        while offset < total:
            if self.pagination == "keyset":
                batch = await self.fetch_page(page_size, after_id=last_id if last_id is not None else -1)
            else:
                batch = await self.fetch_page(page_size, offset=offset)
            if not batch:
                return

            yield batch

            last_id = batch[-1].id
            offset += page_size
