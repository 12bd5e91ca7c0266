"""Data model for catalog entries."""

from __future__ import annotations

import json
import time
from dataclasses import dataclass, replace
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any, Iterable

from loguru import logger

from app.core.errors import ValidationError


class GameStatus(str, Enum):
    """Play status of a game.  No other value is ever stored."""

    UNPLAYED = "unplayed"
    PLAYING = "playing"
    COMPLETED = "completed"
    ON_HOLD = "on-hold"

    @classmethod
    def parse(cls, value: Any) -> GameStatus:
        """Strict conversion used for user intents."""
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            raise ValidationError("status", f"Unknown status: {value!r}") from None

    @classmethod
    def coerce(cls, value: Any) -> GameStatus:
        """Lenient conversion used for stored data; unknown values become UNPLAYED."""
        try:
            return cls(value)
        except ValueError:
            return cls.UNPLAYED


_STATUS_STYLES: dict[str, str] = {
    GameStatus.UNPLAYED.value: "gray",
    GameStatus.PLAYING.value: "blue",
    GameStatus.COMPLETED.value: "green",
    GameStatus.ON_HOLD.value: "yellow",
}


def status_style(status: Any) -> str:
    """Badge colour key for *status*, falling back to the unplayed style."""
    key = status.value if isinstance(status, GameStatus) else status
    return _STATUS_STYLES.get(key, _STATUS_STYLES[GameStatus.UNPLAYED.value])


class ThemeMode(str, Enum):
    """Persisted colour theme."""

    LIGHT = "light"
    DARK = "dark"

    @classmethod
    def from_stored(cls, value: str | None) -> ThemeMode:
        """Only the literal ``"dark"`` selects the dark theme."""
        return cls.DARK if value == cls.DARK.value else cls.LIGHT

    def toggled(self) -> ThemeMode:
        return ThemeMode.LIGHT if self is ThemeMode.DARK else ThemeMode.DARK


@dataclass
class GameDraft:
    """User input for a new entry, before ``id`` / ``added_date`` exist."""

    title: str = ""
    platform: str = ""
    genre: str = ""
    status: GameStatus | str = GameStatus.UNPLAYED
    purchase_date: str = ""
    notes: str = ""

    def validate(self) -> GameDraft:
        """Return a normalized copy or raise :class:`ValidationError`."""
        title = (self.title or "").strip()
        platform = (self.platform or "").strip()
        if not title:
            raise ValidationError("title", "Title is required")
        if not platform:
            raise ValidationError("platform", "Platform is required")

        purchase_date = (self.purchase_date or "").strip()
        if purchase_date:
            try:
                if len(purchase_date) != 10:
                    raise ValueError(purchase_date)
                date.fromisoformat(purchase_date)
            except ValueError:
                raise ValidationError(
                    "purchase_date",
                    f"Purchase date must be YYYY-MM-DD: {purchase_date!r}",
                ) from None

        return GameDraft(
            title=title,
            platform=platform,
            genre=(self.genre or "").strip(),
            status=GameStatus.parse(self.status),
            purchase_date=purchase_date,
            notes=self.notes or "",
        )


@dataclass(frozen=True)
class GameEntry:
    """One catalog record."""

    id: int
    """Unique, immutable identifier (milliseconds since the epoch at creation)."""

    title: str
    platform: str
    genre: str = ""
    status: GameStatus = GameStatus.UNPLAYED
    purchase_date: str = ""
    """``YYYY-MM-DD`` or empty."""

    notes: str = ""
    added_date: str = ""
    """UTC ISO-8601 timestamp set once at creation."""

    @classmethod
    def create(
        cls,
        draft: GameDraft,
        entry_id: int,
        added_date: str | None = None,
    ) -> GameEntry:
        """Build an entry from an already validated draft."""
        return cls(
            id=entry_id,
            title=draft.title,
            platform=draft.platform,
            genre=draft.genre,
            status=GameStatus.parse(draft.status),
            purchase_date=draft.purchase_date,
            notes=draft.notes,
            added_date=added_date or utc_timestamp(),
        )

    def replace_status(self, status: GameStatus) -> GameEntry:
        return replace(self, status=status)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title,
            "platform": self.platform,
            "genre": self.genre,
            "status": self.status.value,
            "purchaseDate": self.purchase_date,
            "notes": self.notes,
            "addedDate": self.added_date,
        }

    @classmethod
    def from_dict(cls, data: dict) -> GameEntry:
        """Rebuild an entry from its stored form.

        Raises ``ValueError`` when the record cannot be a valid entry.
        """
        entry_id = data.get("id")
        if isinstance(entry_id, bool) or not isinstance(entry_id, int):
            raise ValueError(f"invalid id: {entry_id!r}")
        title = data.get("title")
        platform = data.get("platform")
        if not isinstance(title, str) or not title:
            raise ValueError("missing title")
        if not isinstance(platform, str) or not platform:
            raise ValueError("missing platform")
        return cls(
            id=entry_id,
            title=title,
            platform=platform,
            genre=_as_str(data.get("genre")),
            status=GameStatus.coerce(data.get("status")),
            purchase_date=_as_str(data.get("purchaseDate")),
            notes=_as_str(data.get("notes")),
            added_date=_as_str(data.get("addedDate")),
        )


def _as_str(value: Any) -> str:
    return value if isinstance(value, str) else ""


def utc_timestamp(now: datetime | None = None) -> str:
    """ISO-8601 UTC timestamp with millisecond precision, e.g. ``2024-05-01T09:30:00.000Z``."""
    now = now or datetime.now(timezone.utc)
    return now.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def next_entry_id(existing: Iterable[int], now_ms: int | None = None) -> int:
    """Return a fresh id: the current epoch milliseconds, bumped past any existing id."""
    candidate = now_ms if now_ms is not None else time.time_ns() // 1_000_000
    highest = max(existing, default=None)
    if highest is not None and candidate <= highest:
        candidate = highest + 1
    return candidate


# ----------------------------------------------------------------------
# Whole-collection serialization
# ----------------------------------------------------------------------

def dumps_collection(entries: Iterable[GameEntry]) -> str:
    """Serialize the full collection as a JSON array."""
    return json.dumps([e.to_dict() for e in entries], ensure_ascii=False)


def loads_collection(text: str | None) -> list[GameEntry]:
    """Deserialize a stored collection.

    Malformed documents yield an empty list.  Invalid or duplicate records
    inside a well-formed array are skipped.
    """
    if not text:
        return []
    try:
        raw = json.loads(text)
    except (ValueError, RecursionError) as e:
        logger.warning("Stored collection is not valid JSON, starting empty: {}", e)
        return []
    if not isinstance(raw, list):
        logger.warning("Stored collection is not an array, starting empty")
        return []

    entries: list[GameEntry] = []
    seen: set[int] = set()
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            logger.warning("Skipping record #{}: not an object", index)
            continue
        try:
            entry = GameEntry.from_dict(item)
        except ValueError as e:
            logger.warning("Skipping record #{}: {}", index, e)
            continue
        if entry.id in seen:
            logger.warning("Skipping record #{}: duplicate id {}", index, entry.id)
            continue
        seen.add(entry.id)
        entries.append(entry)
    return entries
