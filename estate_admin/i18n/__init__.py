"""
Localization helpers for EN/TE user-facing messages.
"""

from __future__ import annotations

import json
import logging
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional


LOGGER = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ("en", "te")
DEFAULT_LANGUAGE = "en"

_I18N_DIR = Path(__file__).resolve().parent


def normalize_language(lang: Optional[str]) -> str:
    value = (lang or "").strip().lower()
    if value in SUPPORTED_LANGUAGES:
        return value
    if value.startswith("te"):
        return "te"
    if value.startswith("en"):
        return "en"
    return DEFAULT_LANGUAGE


@lru_cache(maxsize=8)
def load_dictionary(lang: str) -> Dict[str, Any]:
    normalized = normalize_language(lang)
    path = _I18N_DIR / f"{normalized}.json"
    if not path.exists():
        LOGGER.warning("i18n dictionary not found for lang=%s at %s", normalized, path)
        return {}
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as exc:
        LOGGER.warning("failed to load i18n dictionary lang=%s: %s", normalized, exc)
        return {}


def get_dictionary(lang: Optional[str]) -> Dict[str, Any]:
    return load_dictionary(normalize_language(lang))


def _lookup_key(data: Dict[str, Any], key: str) -> Any:
    if not isinstance(data, dict):
        return None
    node: Any = data
    for part in key.split("."):
        if not isinstance(node, dict) or part not in node:
            return None
        node = node[part]
    return node


def translate(
    key: str,
    lang: Optional[str] = None,
    /,
    default: Optional[str] = None,
    **vars: Any,
) -> str:
    normalized = normalize_language(lang)
    value = _lookup_key(get_dictionary(normalized), key)
    if value is None and normalized != DEFAULT_LANGUAGE:
        value = _lookup_key(get_dictionary(DEFAULT_LANGUAGE), key)
    if not isinstance(value, str):
        value = default if default is not None else key

    if vars:
        try:
            value = value.format(**vars)
        except (KeyError, IndexError, ValueError):
            # Keep the unformatted template if variables mismatch.
            LOGGER.debug("i18n template mismatch for key=%s", key)
    return value


def language_name(code: str, lang: Optional[str] = None) -> str:
    return translate(f"languages.{normalize_language(code)}", lang, default=code)
