"""Collection store: the single owner of catalog entries and the theme flag.

Every mutation updates the in-memory list first and then writes the whole
collection back to the storage adapter (write-through, no batching).  A
failed write is reported as :class:`PersistenceError` but the in-memory
change stays; the next successful write or a reload reconciles the two.

Callers must not run two mutations concurrently against one store.
"""

from __future__ import annotations

from typing import Callable

from loguru import logger

from app.core.errors import PersistenceError, ValidationError
from app.core.storage import StorageAdapter
from app.models.game_entry import (
    GameDraft,
    GameEntry,
    GameStatus,
    ThemeMode,
    dumps_collection,
    loads_collection,
    next_entry_id,
    utc_timestamp,
)

COLLECTION_KEY = "game-collection"
THEME_KEY = "theme-preference"

Listener = Callable[[], None]


class CollectionStore:
    """Owns the authoritative list of :class:`GameEntry` and the theme."""

    def __init__(self, storage: StorageAdapter) -> None:
        self._storage = storage
        self._entries: list[GameEntry] = []
        self._theme = ThemeMode.LIGHT
        self._loaded = False
        self._listeners: list[Listener] = []

    # ------------------------------------------------------------------
    # Read models
    # ------------------------------------------------------------------

    @property
    def entries(self) -> tuple[GameEntry, ...]:
        """All entries in insertion order."""
        return tuple(self._entries)

    @property
    def theme(self) -> ThemeMode:
        return self._theme

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def get(self, entry_id: int) -> GameEntry | None:
        for entry in self._entries:
            if entry.id == entry_id:
                return entry
        return None

    def __len__(self) -> int:
        return len(self._entries)

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Call *listener* after every state change.  Returns an unsubscribe callable."""
        self._listeners.append(listener)

        def _unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return _unsubscribe

    # ------------------------------------------------------------------
    # Loading
    # ------------------------------------------------------------------

    async def load(self) -> None:
        """Read the collection; absent, unreadable or malformed data gives an empty one."""
        raw = await self._read(COLLECTION_KEY)
        self._entries = loads_collection(raw)
        self._loaded = True
        if raw is None:
            logger.info("No stored collection, starting empty")
        else:
            logger.info("Loaded {} entries", len(self._entries))
        self._notify()

    async def load_theme(self) -> ThemeMode:
        raw = await self._read(THEME_KEY)
        self._theme = ThemeMode.from_stored(raw)
        logger.info("Theme: {}", self._theme.value)
        self._notify()
        return self._theme

    # ------------------------------------------------------------------
    # Theme
    # ------------------------------------------------------------------

    async def set_theme(self, mode: ThemeMode | str) -> bool:
        """Apply *mode* immediately, then persist it.

        Returns whether the write succeeded.  A failed write is logged and
        the new theme stays in effect.
        """
        try:
            self._theme = ThemeMode(mode)
        except ValueError:
            raise ValidationError("theme", f"Unknown theme: {mode!r}") from None
        self._notify()
        try:
            await self._write(THEME_KEY, self._theme.value)
        except PersistenceError as e:
            logger.error("Theme not saved: {}", e)
            return False
        return True

    async def toggle_theme(self) -> bool:
        return await self.set_theme(self._theme.toggled())

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------

    async def add(self, draft: GameDraft) -> GameEntry:
        """Validate *draft*, append it as a new entry and persist.

        Raises :class:`~app.core.errors.ValidationError` before touching any
        state, or :class:`PersistenceError` after the entry was appended.
        """
        clean = draft.validate()
        entry = GameEntry.create(
            clean,
            entry_id=next_entry_id(e.id for e in self._entries),
            added_date=utc_timestamp(),
        )
        self._entries.append(entry)
        logger.info("Added '{}' ({}) as #{}", entry.title, entry.platform, entry.id)
        await self._commit()
        return entry

    async def remove(self, entry_id: int) -> bool:
        """Delete the entry with *entry_id*.  Unknown ids are a no-op.

        Returns whether an entry was removed.
        """
        remaining = [e for e in self._entries if e.id != entry_id]
        if len(remaining) == len(self._entries):
            logger.debug("Remove: no entry #{}", entry_id)
            return False
        self._entries = remaining
        logger.info("Removed entry #{}", entry_id)
        await self._commit()
        return True

    async def update_status(self, entry_id: int, status: GameStatus | str) -> GameEntry | None:
        """Replace only the ``status`` of entry *entry_id*.  Unknown ids are a no-op."""
        new_status = GameStatus.parse(status)
        for index, entry in enumerate(self._entries):
            if entry.id == entry_id:
                updated = entry.replace_status(new_status)
                self._entries[index] = updated
                logger.info("Entry #{} status: {} -> {}", entry_id, entry.status.value, new_status.value)
                await self._commit()
                return updated
        logger.debug("Update status: no entry #{}", entry_id)
        return None

    async def save(self) -> None:
        """Write the current collection in full."""
        await self._write(COLLECTION_KEY, dumps_collection(self._entries))

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    async def _commit(self) -> None:
        self._notify()
        await self.save()

    async def _read(self, key: str) -> str | None:
        try:
            return await self._storage.get(key)
        except Exception as e:
            logger.warning("Failed to read '{}', using default: {}", key, e)
            return None

    async def _write(self, key: str, value: str) -> None:
        try:
            ok = await self._storage.set(key, value)
        except OSError as e:
            logger.error("Failed to write '{}': {}", key, e)
            raise PersistenceError(key, str(e)) from e
        if ok is False:
            logger.error("Storage refused write of '{}'", key)
            raise PersistenceError(key, "storage reported failure")

    def _notify(self) -> None:
        for listener in list(self._listeners):
            listener()
