"""UI strings in Japanese and English.

Tables live next to this module as ``<lang>.json`` with nested sections,
looked up by dot-separated keys.  A key missing from the active language
falls back to ``en_US``, then to the key itself.
"""

import json
from pathlib import Path
from typing import Any, Optional

FALLBACK_LANGUAGE = "en_US"

_current_lang = "ja_JP"
_translations: dict[str, dict[str, Any]] = {}
_i18n_dir = Path(__file__).parent


def load_language(lang: str) -> None:
    lang_file = _i18n_dir / f"{lang}.json"
    if not lang_file.exists():
        raise FileNotFoundError(f"Language file not found: {lang_file}")
    with open(lang_file, "r", encoding="utf-8") as f:
        _translations[lang] = json.load(f)


def set_language(lang: str) -> None:
    global _current_lang
    if lang not in _translations:
        load_language(lang)
    _current_lang = lang


def _lookup(lang: str, key: str) -> Optional[str]:
    node: Any = _translations.get(lang, {})
    for part in key.split("."):
        if not isinstance(node, dict):
            return None
        node = node.get(part)
    return None if node is None or isinstance(node, dict) else str(node)


def t(key: str, **kwargs: str) -> str:
    """Translate *key*, substituting ``{name}`` placeholders from *kwargs*.

    Example: t("collection.confirm_delete_detail", title="Zelda")
    """
    text = _lookup(_current_lang, key)
    if text is None:
        text = _lookup(FALLBACK_LANGUAGE, key)
    if text is None:
        return key
    for name, value in kwargs.items():
        text = text.replace(f"{{{name}}}", str(value))
    return text


def get_current_language() -> str:
    return _current_lang


def get_available_languages() -> list[str]:
    return sorted(f.stem for f in _i18n_dir.glob("*.json"))


def init(lang: Optional[str] = None) -> None:
    """Load every table and activate *lang*; unknown languages keep the current one."""
    for f in _i18n_dir.glob("*.json"):
        load_language(f.stem)
    if lang and lang in _translations:
        set_language(lang)
