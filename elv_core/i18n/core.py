"""
i18n core: load_lang (cached JSON) and make_translator(lang).
Locales: RU/EN, EN default. Missing keys fall back to the key itself.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import Callable

_I18N_DIR = Path(__file__).resolve().parent
_CACHE: dict[str, dict[str, str]] = {}

DEFAULT_LANG = "EN"


def load_lang(lang: str) -> dict[str, str]:
    """Load locale JSON for lang (RU/EN). Cached."""
    key = lang.upper()
    if key not in _CACHE:
        path = _I18N_DIR / f"{key.lower()}.json"
        if path.exists():
            with path.open(encoding="utf-8") as f:
                _CACHE[key] = json.load(f)
        else:
            _CACHE[key] = {}
    return _CACHE[key]


def make_translator(lang: str = DEFAULT_LANG) -> Callable[..., str]:
    """
    Translator bound to one locale, usable as `translator=` in validation.
    Supports .format(**kwargs); a malformed template returns the raw text.
    """
    strings = load_lang(lang)

    def t(key: str, **kwargs) -> str:
        raw = strings.get(key, key)
        if not kwargs:
            return raw
        try:
            return raw.format(**kwargs)
        except (KeyError, ValueError):
            return raw

    return t
