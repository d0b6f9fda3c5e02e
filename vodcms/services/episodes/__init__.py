"""
Episode resync services.

Rebuilds the normalized bb_vod_source / bb_vod_episode tables from the
legacy ``vod_play_from`` / ``vod_play_url`` columns of bb_vod.

Components:
- parser: legacy play data format (parse / serialize)
- PlayerResolver: player key → bb_player.id
- LegacyVodReader: ordered pages of bb_vod
- EpisodeWriter: source and episode inserts for one video
- EpisodeSyncOrchestrator: full resync run
"""
from vodcms.services.episodes.parser import (
    EpisodeEntry,
    SkippedSegment,
    SourceGroup,
    parse_episode_segment,
    parse_play_url,
    serialize_play_url,
)
from vodcms.services.episodes.player_resolver import PlayerResolver
from vodcms.services.episodes.reader import LegacyVideoRecord, LegacyVodReader
from vodcms.services.episodes.writer import EpisodeWriter, WriteStats
from vodcms.services.episodes.repository import (
    get_video_play_data,
    get_video_sources,
    save_video_sources,
    to_source_groups,
)
from vodcms.services.episodes.orchestrator import (
    EpisodeSyncOrchestrator,
    SyncProgress,
    SyncResult,
    SyncRunState,
    SyncState,
    run_episode_sync,
)

__all__ = [
    # Parser
    "EpisodeEntry",
    "SkippedSegment",
    "SourceGroup",
    "parse_episode_segment",
    "parse_play_url",
    "serialize_play_url",
    # Services
    "PlayerResolver",
    "LegacyVideoRecord",
    "LegacyVodReader",
    "EpisodeWriter",
    "WriteStats",
    "get_video_play_data",
    "get_video_sources",
    "save_video_sources",
    "to_source_groups",
    # Orchestration
    "EpisodeSyncOrchestrator",
    "SyncProgress",
    "SyncResult",
    "SyncRunState",
    "SyncState",
    "run_episode_sync",
]
