"""Application configuration management."""

import json
import platform
from pathlib import Path
from typing import Any, Optional

from loguru import logger


def _default_data_dir() -> Path:
    """Return the default data directory for the application."""
    if platform.system() == "Windows":
        return Path.home() / "Documents" / "GameCollectionManager"
    elif platform.system() == "Darwin":
        return Path.home() / "Library" / "Application Support" / "GameCollectionManager"
    else:
        return Path.home() / ".config" / "GameCollectionManager"


_DEFAULT_CONFIG: dict[str, Any] = {
    "language": "ja_JP",
    "storage_file": "storage.json",
    "log_level": "DEBUG",
}


class Config:
    """Singleton application configuration."""

    _instance: Optional["Config"] = None
    _data: dict[str, Any]
    _path: Path
    _data_dir: Path

    def __new__(
        cls,
        config_path: Optional[Path] = None,
        data_dir: Optional[Path] = None,
    ) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(
        self,
        config_path: Optional[Path] = None,
        data_dir: Optional[Path] = None,
    ) -> None:
        if self._initialized:  # type: ignore[has-type]
            return
        self._initialized = True
        self._data_dir = data_dir or _default_data_dir()
        self._data_dir.mkdir(parents=True, exist_ok=True)
        self._path = config_path or (self._data_dir / "config.json")
        self._data = dict(_DEFAULT_CONFIG)
        self._load()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def storage_path(self) -> Path:
        """File that backs the collection and theme keys."""
        p = Path(self._data.get("storage_file") or _DEFAULT_CONFIG["storage_file"])
        if p.is_absolute():
            return p
        return self._data_dir / p

    @property
    def log_dir(self) -> Path:
        return self._data_dir / "logs"

    @property
    def log_level(self) -> str:
        return str(self._data.get("log_level", "DEBUG")).upper()

    @property
    def language(self) -> str:
        return self._data.get("language", "ja_JP")

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------

    def _load(self) -> None:
        if not self._path.exists():
            # First run: write the defaults so the file can be edited by hand
            self._save()
            return
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                saved = json.load(f)
            if not isinstance(saved, dict):
                raise ValueError("config root must be an object")
            self._data.update(saved)
            logger.info("Configuration loaded from {}", self._path)
        except Exception as e:
            logger.warning("Failed to load config, using defaults: {}", e)

    def _save(self) -> None:
        self._path.parent.mkdir(parents=True, exist_ok=True)
        try:
            with open(self._path, "w", encoding="utf-8") as f:
                json.dump(self._data, f, indent=4, ensure_ascii=False)
        except Exception as e:
            logger.error("Failed to save config: {}", e)

    @classmethod
    def reset(cls) -> None:
        """Reset the singleton (for testing)."""
        cls._instance = None
