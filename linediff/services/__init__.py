"""
Application services: settings persistence and comparison sessions.
"""

from linediff.services.session import DiffSession
from linediff.services.settings import (
    ApplicationSettings,
    ComparisonSettings,
    SettingsManager,
)

__all__ = [
    'ApplicationSettings',
    'ComparisonSettings',
    'DiffSession',
    'SettingsManager',
]
