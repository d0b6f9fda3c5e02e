from vodcms.models.vod import LegacyVod
from vodcms.models.player import Player
from vodcms.models.vod_source import VodSource, ORPHAN_PLAYER_ID
from vodcms.models.vod_episode import VodEpisode

__all__ = [
    "LegacyVod",
    "Player",
    "VodSource",
    "VodEpisode",
    "ORPHAN_PLAYER_ID",
]
