"""
Comparison settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

from linediff.core.diff.text_diff import NormalizationPolicy
from linediff.core.models import ViewMode


logger = logging.getLogger(__name__)

# 2000 x 2000 lines
DEFAULT_MAX_TABLE_CELLS = 4_000_000


@dataclass
class ComparisonSettings:
    """Settings for text comparison and display."""
    ignore_whitespace: bool = False
    ignore_case: bool = False
    view_mode: ViewMode = ViewMode.SPLIT
    max_table_cells: Optional[int] = DEFAULT_MAX_TABLE_CELLS
    show_line_numbers: bool = True
    tab_size: int = 4
    width: int = 120
    debounce_ms: int = 300

    @property
    def policy(self) -> NormalizationPolicy:
        """Normalization policy for the current flags."""
        return NormalizationPolicy(
            ignore_whitespace=self.ignore_whitespace,
            ignore_case=self.ignore_case
        )


@dataclass
class ApplicationSettings:
    """Main settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)
    recent_comparisons: list[list[str]] = field(default_factory=list)
    recent_limit: int = 10


class SettingsManager:
    """Manager for loading/saving settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[Callable[[ApplicationSettings], None]] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'linediff' / 'settings.json'
        else:
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'linediff' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk, falling back to defaults."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Could not load settings from %s: %s", self.settings_path, e)
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            data = self._to_dict(settings)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(data, f, indent=2)
        except OSError as e:
            logger.warning("Could not save settings to %s: %s", self.settings_path, e)
            return False

        self._settings = settings
        self._notify_observers()
        return True

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in self._observers:
            try:
                callback(self._settings)
            except Exception:
                logger.exception("Settings observer %r failed", callback)

    def add_recent_comparison(self, left_path: str, right_path: str) -> None:
        """Record a compared pair, most recent first."""
        settings = self.settings
        pair = [left_path, right_path]

        recent = [p for p in settings.recent_comparisons if p != pair]
        recent.insert(0, pair)
        settings.recent_comparisons = recent[:settings.recent_limit]

        self.save()

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif hasattr(obj, '__dataclass_fields__'):
                return {k: convert(v) for k, v in asdict(obj).items()}
            elif isinstance(obj, (list, tuple)):
                return [convert(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            else:
                return obj

        return convert(settings)

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        def get_enum(enum_class: type, key: str, value: Any, default: Enum) -> Enum:
            if isinstance(value, enum_class):
                return value
            if isinstance(value, str) and value in enum_class.__members__:
                return enum_class[value]
            logger.warning("Ignoring invalid setting %s=%r", key, value)
            return default

        def get_value(section: dict, key: str, default: Any, optional: bool = False) -> Any:
            value = section.get(key, default)
            if value is None and optional:
                return None
            # bool is an int subclass, so compare exact types
            if type(value) is not type(default):
                logger.warning("Ignoring invalid setting %s=%r", key, value)
                return default
            return value

        defaults = ComparisonSettings()
        comparison_data = data.get('comparison', {})
        if not isinstance(comparison_data, dict):
            logger.warning("Ignoring invalid comparison settings %r", comparison_data)
            comparison_data = {}

        comparison = ComparisonSettings(
            ignore_whitespace=get_value(comparison_data, 'ignore_whitespace', defaults.ignore_whitespace),
            ignore_case=get_value(comparison_data, 'ignore_case', defaults.ignore_case),
            view_mode=get_enum(
                ViewMode, 'view_mode',
                comparison_data.get('view_mode', defaults.view_mode.name), defaults.view_mode
            ),
            max_table_cells=get_value(
                comparison_data, 'max_table_cells', defaults.max_table_cells, optional=True
            ),
            show_line_numbers=get_value(comparison_data, 'show_line_numbers', defaults.show_line_numbers),
            tab_size=get_value(comparison_data, 'tab_size', defaults.tab_size),
            width=get_value(comparison_data, 'width', defaults.width),
            debounce_ms=get_value(comparison_data, 'debounce_ms', defaults.debounce_ms),
        )

        app_defaults = ApplicationSettings()
        recent = get_value(data, 'recent_comparisons', app_defaults.recent_comparisons)

        return ApplicationSettings(
            comparison=comparison,
            recent_comparisons=[
                list(pair) for pair in recent
                if isinstance(pair, list) and len(pair) == 2 and all(isinstance(p, str) for p in pair)
            ],
            recent_limit=get_value(data, 'recent_limit', app_defaults.recent_limit),
        )
