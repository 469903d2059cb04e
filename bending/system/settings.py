from __future__ import annotations
import json, os
from dataclasses import dataclass, asdict, fields
from pathlib import Path
from typing import Callable, List
from bending.core.logging import logger

SETTINGS_FILENAME = ".bending_settings.json"
DEFAULT_AI_DELAY_MS = 1500

@dataclass
class SettingsData:
    log_level: str = "INFO"              # DEBUG / INFO / WARN / ERROR
    ai_delay_ms: int = DEFAULT_AI_DELAY_MS  # pause before the automated side moves
    ai_respects_cooldowns: bool = False  # automated side only picks unlocked abilities
    debug: bool = False                  # verbose per-action logging

    def normalize(self):
        if self.log_level not in {"DEBUG","INFO","WARN","ERROR"}:
            self.log_level = "INFO"
        try:
            self.ai_delay_ms = int(self.ai_delay_ms)
        except (TypeError, ValueError):
            self.ai_delay_ms = DEFAULT_AI_DELAY_MS
        if self.ai_delay_ms < 0:
            self.ai_delay_ms = DEFAULT_AI_DELAY_MS
        self.ai_respects_cooldowns = bool(self.ai_respects_cooldowns)
        self.debug = bool(self.debug)

class Settings:
    def __init__(self, data: SettingsData, path: Path):
        self.data = data
        self.path = path
        self._listeners: List[Callable[[SettingsData], None]] = []

    @classmethod
    def _resolve_path(cls) -> Path:
        home = Path(os.path.expanduser("~"))
        if home.is_dir() and os.access(home, os.W_OK):
            return home / SETTINGS_FILENAME
        return Path.cwd() / SETTINGS_FILENAME

    @classmethod
    def load(cls, path: Path | None = None) -> "Settings":
        path = path or cls._resolve_path()
        if path.exists():
            try:
                raw = json.loads(path.read_text(encoding="utf-8"))
                # Unknown keys are dropped, missing ones take defaults
                field_names = {f.name for f in fields(SettingsData)}
                data_kwargs = {k: v for k, v in raw.items() if k in field_names}
                data = SettingsData(**data_kwargs)
                data.normalize()
                logger.debug("SettingsLoaded", path=str(path))
                return cls(data, path)
            except (OSError, ValueError, TypeError, AttributeError) as e:
                logger.warn("SettingsParseFailedUsingDefaults", path=str(path), error=str(e))
        data = SettingsData()
        data.normalize()
        return cls(data, path)

    def save(self):
        try:
            self.path.write_text(json.dumps(asdict(self.data), indent=2), encoding="utf-8")
            logger.debug("SettingsSaved", path=str(self.path))
        except OSError as e:
            logger.error("SettingsSaveFailed", error=str(e))

    def apply_log_level(self):
        lvl: str = self.data.log_level
        if lvl in {"DEBUG","INFO","WARN","ERROR"}:
            logger.set_level(lvl)  # type: ignore[arg-type]

    def update(self, **changes):
        for key, value in changes.items():
            if not hasattr(self.data, key):
                raise KeyError(key)
            setattr(self.data, key, value)
        self.data.normalize()
        self.apply_log_level()
        self.save()
        self._notify()

    def on_change(self, fn: Callable[[SettingsData], None]):
        self._listeners.append(fn)

    def _notify(self):
        for fn in self._listeners:
            fn(self.data)
