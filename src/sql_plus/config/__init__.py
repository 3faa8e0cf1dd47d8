"""Configuration management for sql-plus.

Usage:
    >>> from sql_plus.config import get_settings
    >>> settings = get_settings()
    >>> print(settings.mysql_host)
"""

from sql_plus.config.settings import Settings, get_settings

__all__ = [
    "Settings",
    "get_settings",
]
