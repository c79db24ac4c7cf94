"""i18n dictionary symmetry: RU/EN keys match and cover the built-in English table."""
from __future__ import annotations

import json
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(ROOT))

from elv_core.i18n import load_lang, make_translator
from elv_core.validation import _VALIDATION_EN

I18N_DIR = ROOT / "elv_core" / "i18n"


def _load_json(path: Path) -> dict:
    with path.open(encoding="utf-8") as f:
        return json.load(f)


def test_ru_en_keys_symmetric() -> None:
    """RU and EN dictionaries have identical key sets."""
    ru = _load_json(I18N_DIR / "ru.json")
    en = _load_json(I18N_DIR / "en.json")
    assert set(ru.keys()) == set(en.keys()), (
        f"Key mismatch: RU has {set(ru.keys()) - set(en.keys())!r} not in EN; "
        f"EN has {set(en.keys()) - set(ru.keys())!r} not in RU"
    )


def test_validation_keys_present() -> None:
    """Every validation message has a locale entry, and EN matches the fallback text."""
    en = _load_json(I18N_DIR / "en.json")
    ru = _load_json(I18N_DIR / "ru.json")
    assert not set(_VALIDATION_EN) - set(en), f"EN missing keys: {set(_VALIDATION_EN) - set(en)}"
    assert not set(_VALIDATION_EN) - set(ru), f"RU missing keys: {set(_VALIDATION_EN) - set(ru)}"
    for key, text in _VALIDATION_EN.items():
        assert en[key] == text


def test_translator_fallbacks() -> None:
    t = make_translator("EN")
    assert t("validation.field_positive", field="power") == "power must be > 0"
    assert t("no.such.key") == "no.such.key"
    # a template missing its kwarg returns the raw text
    assert t("validation.field_positive", other=1) == "{field} must be > 0"
    assert load_lang("xx") == {}
