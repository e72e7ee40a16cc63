"""
Locale: message lookup and text direction for the active language.
"""
import logging
from dataclasses import dataclass

from .messages import MESSAGES, RTL_LANGUAGES

logger = logging.getLogger(__name__)

FALLBACK_LANGUAGE = "en"


@dataclass(frozen=True)
class Locale:
    language: str = FALLBACK_LANGUAGE

    def __post_init__(self):
        if self.language not in MESSAGES:
            raise ValueError(
                f"Unsupported language {self.language!r}; expected one of {sorted(MESSAGES)}"
            )

    @property
    def direction(self) -> str:
        return "rtl" if self.language in RTL_LANGUAGES else "ltr"

    @property
    def is_rtl(self) -> bool:
        return self.direction == "rtl"

    def t(self, key: str, **params) -> str:
        """
        Look up a display string, falling back to English, then to the key.
        """
        text = MESSAGES[self.language].get(key)
        if text is None:
            text = MESSAGES[FALLBACK_LANGUAGE].get(key)
        if text is None:
            logger.debug("Missing message key %r", key)
            return key
        if params:
            return text.format(**params)
        return text

    def toggled(self) -> 'Locale':
        """Switch between English and Arabic."""
        return Locale("ar" if self.language == "en" else "en")


def get_locale(language: str = None) -> Locale:
    """Locale for a language code, falling back to English for unknown codes."""
    if not language:
        return Locale(FALLBACK_LANGUAGE)
    language = language.strip().lower().split("-")[0]
    if language not in MESSAGES:
        logger.debug("Unknown language %r, using %s", language, FALLBACK_LANGUAGE)
        return Locale(FALLBACK_LANGUAGE)
    return Locale(language)
