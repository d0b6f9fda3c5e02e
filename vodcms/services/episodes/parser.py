"""
Parser for the legacy dual-field play data format.

A video stores its playback sources in two parallel strings:

    vod_play_from = "youku$$$qq"
    vod_play_url  = "Ep 1$http://a/1#Ep 2$http://a/2$$$Ep 1$http://b/1"

``$$$`` separates player groups (by position in both fields), ``#``
separates episodes inside a group and the first ``$`` of an episode
separates its title from its url.

Parsing is tolerant: anything that cannot be read is skipped, and the
parser never raises.
"""
from dataclasses import dataclass, field

GROUP_SEPARATOR = "$$$"
EPISODE_SEPARATOR = "#"
TITLE_URL_SEPARATOR = "$"


@dataclass(frozen=True, slots=True)
class EpisodeEntry:
    title: str
    url: str


@dataclass(frozen=True, slots=True)
class SkippedSegment:
    """An episode segment that carries no playable url."""
    raw: str
    reason: str


ParsedSegment = EpisodeEntry | SkippedSegment


@dataclass(slots=True)
class SourceGroup:
    player_key: str
    episodes: list[EpisodeEntry] = field(default_factory=list)


def parse_episode_segment(segment: str) -> ParsedSegment:
    """Split one ``title$url`` segment on its first ``$``."""
    title, separator, url = segment.partition(TITLE_URL_SEPARATOR)
    if not separator:
        return SkippedSegment(segment, "no title/url separator")
    if not url:
        return SkippedSegment(segment, "empty url")
    return EpisodeEntry(title=title, url=url)


def parse_episode_group(group: str) -> list[EpisodeEntry]:
    episodes = []
    for segment in group.split(EPISODE_SEPARATOR):
        if not segment:
            continue
        parsed = parse_episode_segment(segment)
        if isinstance(parsed, EpisodeEntry):
            episodes.append(parsed)
    return episodes


def parse_play_url(play_from: str | None, play_url: str | None) -> list[SourceGroup]:
    """
    Decode legacy play data into ordered source groups.

    Args:
        play_from: ``$$$``-separated player keys
        play_url: ``$$$``-separated episode groups, parallel to play_from

    Returns:
        One SourceGroup per non-blank player key, in field order. A group
        keeps its place even when none of its episodes survive parsing.
    """
    if not play_from or not play_url:
        return []

    player_keys = play_from.split(GROUP_SEPARATOR)
    url_groups = play_url.split(GROUP_SEPARATOR)

    result: list[SourceGroup] = []
    for index, raw_key in enumerate(player_keys):
        player_key = raw_key.strip()
        if not player_key:
            # The url group at the same position is dropped with its key.
            continue
        url_group = url_groups[index] if index < len(url_groups) else ""
        result.append(SourceGroup(player_key, parse_episode_group(url_group)))

    return result


def serialize_play_url(groups: list[SourceGroup]) -> tuple[str, str]:
    """
    Encode source groups back into ``(vod_play_from, vod_play_url)``.

    ``get_video_play_data`` uses it to hand a video's normalized sources to
    consumers that still read the legacy format.
    """
    play_from_parts = []
    play_url_parts = []
    for group in groups:
        play_from_parts.append(group.player_key)
        play_url_parts.append(
            EPISODE_SEPARATOR.join(
                f"{episode.title}{TITLE_URL_SEPARATOR}{episode.url}"
                for episode in group.episodes
            )
        )
    return GROUP_SEPARATOR.join(play_from_parts), GROUP_SEPARATOR.join(play_url_parts)
