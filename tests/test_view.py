from __future__ import annotations

from app.core.view import (
    ALL,
    CollectionStats,
    ViewFilter,
    distinct_platforms,
    empty_state,
    filter_entries,
    status_counts,
    summarize,
)
from app.models.game_entry import GameEntry, GameStatus

ZELDA = GameEntry(id=1, title="Zelda", platform="Switch", genre="Action", status=GameStatus.PLAYING)
CHESS = GameEntry(id=2, title="Chess", platform="PC", genre="Board", status=GameStatus.COMPLETED)
HADES = GameEntry(id=3, title="Hades", platform="PC", genre="Roguelike Action")
ENTRIES = [ZELDA, CHESS, HADES]


def _titles(entries) -> list[str]:
    return [e.title for e in entries]


def test_search_term_only() -> None:
    assert _titles(filter_entries([ZELDA, CHESS], "ze", ALL, ALL)) == ["Zelda"]


def test_status_filter_only() -> None:
    assert _titles(filter_entries([ZELDA, CHESS], "", ALL, "completed")) == ["Chess"]


def test_search_matches_genre_case_insensitively() -> None:
    assert _titles(filter_entries(ENTRIES, "ACTION")) == ["Zelda", "Hades"]


def test_platform_filter_is_exact_and_case_sensitive() -> None:
    assert _titles(filter_entries(ENTRIES, platform="PC")) == ["Chess", "Hades"]
    assert filter_entries(ENTRIES, platform="pc") == []


def test_predicates_are_conjunctive() -> None:
    assert _titles(filter_entries(ENTRIES, "action", "PC", ALL)) == ["Hades"]
    assert filter_entries(ENTRIES, "action", "PC", GameStatus.PLAYING) == []


def test_empty_filters_keep_insertion_order() -> None:
    assert filter_entries(ENTRIES) == ENTRIES


def test_view_filter_apply() -> None:
    view = ViewFilter(search_term="", platform="Switch", status=ALL)
    assert view.apply(ENTRIES) == [ZELDA]


def test_distinct_platforms() -> None:
    assert distinct_platforms(ENTRIES) == ["Switch", "PC"]
    assert distinct_platforms([]) == []


def test_status_counts_include_every_status() -> None:
    counts = status_counts(ENTRIES)
    assert counts == {
        GameStatus.UNPLAYED: 1,
        GameStatus.PLAYING: 1,
        GameStatus.COMPLETED: 1,
        GameStatus.ON_HOLD: 0,
    }


def test_summarize() -> None:
    assert summarize(ENTRIES) == CollectionStats(
        total=3, playing=1, completed=1, unplayed=1, on_hold=0,
    )
    assert summarize([]) == CollectionStats()


def test_empty_state() -> None:
    assert empty_state([], []) == "empty"
    assert empty_state(ENTRIES, []) == "no_match"
    assert empty_state(ENTRIES, [ZELDA]) is None
