import pytest

from vodcms.services.episodes.parser import (
    EpisodeEntry,
    SkippedSegment,
    SourceGroup,
    parse_episode_segment,
    parse_play_url,
    serialize_play_url,
)


@pytest.mark.parametrize(
    ("play_from", "play_url"),
    [
        ("", ""),
        ("", "t1$u1"),
        ("youku", ""),
        (None, "t1$u1"),
        ("youku", None),
    ],
)
def test_parse_play_url_returns_empty_list_when_either_field_is_empty(play_from, play_url):
    assert parse_play_url(play_from, play_url) == []


def test_parse_play_url_keeps_group_and_episode_order():
    groups = parse_play_url("A$$$B", "t1$u1#t2$u2$$$t3$u3")

    assert groups == [
        SourceGroup("A", [EpisodeEntry("t1", "u1"), EpisodeEntry("t2", "u2")]),
        SourceGroup("B", [EpisodeEntry("t3", "u3")]),
    ]


def test_parse_play_url_drops_blank_key_together_with_its_url_group():
    groups = parse_play_url("$$$B", "x$y$$$t$u")

    assert groups == [SourceGroup("B", [EpisodeEntry("t", "u")])]


def test_parse_play_url_trims_player_keys_and_skips_whitespace_only_keys():
    groups = parse_play_url(" youku $$$   $$$qq", "a$1$$$b$2$$$c$3")

    assert [group.player_key for group in groups] == ["youku", "qq"]
    assert groups[1].episodes == [EpisodeEntry("c", "3")]


def test_parse_play_url_discards_segments_without_url():
    groups = parse_play_url("youku", "onlytitle#$onlyurl#Ep 3$")

    assert groups == [SourceGroup("youku", [EpisodeEntry("", "onlyurl")])]


def test_parse_play_url_ignores_empty_episode_segments():
    groups = parse_play_url("youku", "#Ep 1$u1##Ep 2$u2#")

    assert groups[0].episodes == [EpisodeEntry("Ep 1", "u1"), EpisodeEntry("Ep 2", "u2")]


def test_parse_play_url_splits_title_and_url_on_first_dollar():
    groups = parse_play_url("m3u8", "Ep 1$https://cdn.example/play?sig=a$b")

    assert groups[0].episodes == [EpisodeEntry("Ep 1", "https://cdn.example/play?sig=a$b")]


def test_parse_play_url_emits_group_without_episodes_for_missing_url_group():
    groups = parse_play_url("youku$$$qq$$$m3u8", "Ep 1$u1")

    assert groups == [
        SourceGroup("youku", [EpisodeEntry("Ep 1", "u1")]),
        SourceGroup("qq", []),
        SourceGroup("m3u8", []),
    ]


def test_parse_episode_segment_returns_tagged_results():
    assert parse_episode_segment("Ep 1$u1") == EpisodeEntry("Ep 1", "u1")

    skipped = parse_episode_segment("onlytitle")
    assert isinstance(skipped, SkippedSegment)
    assert skipped.raw == "onlytitle"

    assert isinstance(parse_episode_segment("Ep 2$"), SkippedSegment)


def test_serialize_play_url_is_inverse_of_parse():
    play_from = "youku$$$qq$$$m3u8"
    play_url = "Ep 1$http://a/1#Ep 2$http://a/2$$$$http://b/1$$$"

    groups = parse_play_url(play_from, play_url)

    assert serialize_play_url(groups) == (play_from, play_url)
    assert parse_play_url(*serialize_play_url(groups)) == groups
