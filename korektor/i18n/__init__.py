# -*- coding: utf-8 -*-
"""
Localized messages for the report core.

Errors carry a message key instead of text; tr() turns the key into Czech
or English at the boundary where the caller shows it. Day names in the
table come from here as well.
"""

import locale
import logging
from typing import Callable, List

from korektor.i18n.translations import TRANSLATIONS

logger = logging.getLogger(__name__)

SUPPORTED_LANGUAGES = ["cs", "en"]
FALLBACK_LANGUAGE = "cs"

_active = FALLBACK_LANGUAGE
_listeners: List[Callable[[str], None]] = []


def detect_system_language() -> str:
    """English for an English OS locale, Czech for anything else"""
    code = locale.getlocale()[0] or ""
    return "en" if code.lower().startswith("en") else FALLBACK_LANGUAGE


def get_language() -> str:
    return _active


def set_language(lang: str) -> None:
    """
    Switch the message language.

    'auto' follows the OS locale; unknown codes fall back to Czech.
    Registered listeners get the resolved code.
    """
    global _active
    if lang == "auto":
        lang = detect_system_language()
    _active = lang if lang in SUPPORTED_LANGUAGES else FALLBACK_LANGUAGE

    for listener in list(_listeners):
        try:
            listener(_active)
        except Exception as e:
            logger.warning(f"Language listener {listener!r} failed: {e}")


def tr(key: str, **kwargs) -> str:
    """
    Message for key in the active language.

    Unknown keys come back unchanged. Placeholders are filled from kwargs;
    a message whose placeholders do not match is returned unformatted.
    """
    table = TRANSLATIONS.get(_active) or TRANSLATIONS[FALLBACK_LANGUAGE]
    text = table.get(key, key)
    if not kwargs:
        return text
    try:
        return text.format(**kwargs)
    except (KeyError, ValueError) as e:
        logger.debug(f"Could not format message {key!r}: {e}")
        return text


def on_language_changed(callback: Callable[[str], None]) -> None:
    if callback not in _listeners:
        _listeners.append(callback)


def remove_language_callback(callback: Callable[[str], None]) -> None:
    if callback in _listeners:
        _listeners.remove(callback)
