"""Derived, read-only projections over the collection.

All functions are pure: they take a sequence of entries plus the transient
filter inputs and never touch the store.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Sequence

from app.models.game_entry import GameEntry, GameStatus

ALL = "all"
"""Filter sentinel matching every platform / status."""


def matches_search(entry: GameEntry, search_term: str) -> bool:
    """Case-insensitive substring match against title or genre."""
    term = (search_term or "").lower()
    return term in entry.title.lower() or term in entry.genre.lower()


def matches_platform(entry: GameEntry, platform: str) -> bool:
    return platform == ALL or entry.platform == platform


def matches_status(entry: GameEntry, status: GameStatus | str) -> bool:
    if status == ALL:
        return True
    value = status.value if isinstance(status, GameStatus) else status
    return entry.status.value == value


def filter_entries(
    entries: Iterable[GameEntry],
    search_term: str = "",
    platform: str = ALL,
    status: GameStatus | str = ALL,
) -> list[GameEntry]:
    """Entries satisfying all three predicates, in their original order."""
    return [
        e for e in entries
        if matches_search(e, search_term)
        and matches_platform(e, platform)
        and matches_status(e, status)
    ]


@dataclass(frozen=True)
class ViewFilter:
    """The three transient filter inputs of the collection page."""

    search_term: str = ""
    platform: str = ALL
    status: str = ALL

    def apply(self, entries: Iterable[GameEntry]) -> list[GameEntry]:
        return filter_entries(entries, self.search_term, self.platform, self.status)


def distinct_platforms(entries: Iterable[GameEntry]) -> list[str]:
    """Every platform in the collection, once each, in first-seen order."""
    seen: dict[str, None] = {}
    for e in entries:
        seen.setdefault(e.platform, None)
    return list(seen)


def status_counts(entries: Iterable[GameEntry]) -> dict[GameStatus, int]:
    """Number of entries per status; every status is present."""
    counts = {status: 0 for status in GameStatus}
    for e in entries:
        counts[e.status] += 1
    return counts


@dataclass(frozen=True)
class CollectionStats:
    """Header summary: total plus per-status counts."""

    total: int = 0
    playing: int = 0
    completed: int = 0
    unplayed: int = 0
    on_hold: int = 0


def summarize(entries: Sequence[GameEntry]) -> CollectionStats:
    counts = status_counts(entries)
    return CollectionStats(
        total=len(entries),
        playing=counts[GameStatus.PLAYING],
        completed=counts[GameStatus.COMPLETED],
        unplayed=counts[GameStatus.UNPLAYED],
        on_hold=counts[GameStatus.ON_HOLD],
    )


def empty_state(entries: Sequence[GameEntry], visible: Sequence[GameEntry]) -> str | None:
    """Which placeholder the list should show, if any.

    ``"empty"`` when the collection has no entries, ``"no_match"`` when the
    current filter hides all of them, otherwise ``None``.
    """
    if not entries:
        return "empty"
    if not visible:
        return "no_match"
    return None
