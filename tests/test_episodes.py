"""Unit tests for xmltv_ns season extraction."""

import pytest

from xmltv_stream.services.record_types import EpisodeNum, Programme
from xmltv_stream.utils.episodes import get_season


class TestExplicitValue:

    @pytest.mark.parametrize("ep_num, expected", [
        ("1.4/5.", 2),
        ("0.0.0/2", 1),
        ("9/10.2.", 10),
        (" 3 . 1 . ", 4),
    ])
    def test_known_seasons(self, ep_num, expected):
        assert get_season([], ep_num) == expected

    @pytest.mark.parametrize("ep_num", [
        "1.2",
        "1.2.3.4",
        ".4.",
        "/3.4.",
        "x.4.",
        "1_0.0.0",
        "١.0.0",
    ])
    def test_unknown_seasons(self, ep_num):
        assert get_season([], ep_num) is None


class TestLookup:

    def test_uses_first_xmltv_ns_entry(self):
        entries = [
            EpisodeNum(system="onscreen", value="S01E01"),
            EpisodeNum(system="xmltv_ns", value="2.3."),
            EpisodeNum(system="xmltv_ns", value="5.0."),
        ]
        assert get_season(entries) == 3

    def test_no_xmltv_ns_entry(self):
        assert get_season([EpisodeNum(system="onscreen", value="S01E01")]) is None

    def test_empty_value_falls_back_to_lookup(self):
        assert get_season([EpisodeNum(system="xmltv_ns", value="0.1.")], "") == 1

    def test_programme_method(self):
        programme = Programme(episode_num=[EpisodeNum(system="xmltv_ns", value="1.4/5.")])
        assert programme.get_season() == 2
        assert programme.get_season("4.0.") == 5
