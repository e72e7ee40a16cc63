"""Locale subpackage - display strings and text direction."""
from .locale import Locale, get_locale

__all__ = ['Locale', 'get_locale']
