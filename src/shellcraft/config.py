from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Optional, Union

import yaml
from platformdirs import user_data_dir

logger = logging.getLogger(__name__)

APP_NAME = "shellcraft"
SOUL_FILENAME = "soul.dat"
SEWER_DIRNAME = "sewer"

_DATA_PKG = "shellcraft.data"
_DEFAULTS_FILE = "default_settings.yaml"


def default_data_dir() -> Path:
    """Platform user data directory, e.g. ~/.local/share/shellcraft on Linux."""
    return Path(user_data_dir(appname=APP_NAME, appauthor=False))


@dataclass
class PathSettings:
    # Empty strings mean "use the platform default"
    soul: str = ""
    sewer: str = ""
    quests: str = ""


@dataclass
class LogSettings:
    # Level name such as "DEBUG", or a numeric logging level
    level: Union[str, int] = "INFO"


@dataclass
class Settings:
    paths: PathSettings = field(default_factory=PathSettings)
    log: LogSettings = field(default_factory=LogSettings)

    @property
    def soul_path(self) -> Path:
        if self.paths.soul:
            return Path(self.paths.soul).expanduser()
        return default_data_dir() / SOUL_FILENAME

    @property
    def sewer_path(self) -> Path:
        if self.paths.sewer:
            return Path(self.paths.sewer).expanduser()
        return default_data_dir() / SEWER_DIRNAME

    @property
    def quests_path(self) -> Optional[Path]:
        """Quest text override; None selects the packaged quests.txt."""
        if self.paths.quests:
            return Path(self.paths.quests).expanduser()
        return None

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Build settings from the bundled default_settings.yaml.

        A user YAML file at ``user_path`` overrides individual keys; sections
        it leaves out keep their bundled values. A missing user file is logged
        and ignored, and keys this version does not know are dropped with a
        warning.
        """
        bundled = resources.files(_DATA_PKG).joinpath(_DEFAULTS_FILE)
        with bundled.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if user_path is not None:
            if user_path.exists():
                data = _merge(data, _read_yaml(user_path))
                logger.info("Using settings from %s", user_path)
            else:
                logger.warning("Settings file %s does not exist; using defaults", user_path)

        settings = cls(
            paths=_section(PathSettings, data, "paths"),
            log=_section(LogSettings, data, "log"),
        )
        logger.debug("Effective settings: %s", settings)
        return settings


def _read_yaml(path: Path) -> dict:
    with path.open("r", encoding="utf-8") as f:
        return yaml.safe_load(f) or {}


def _merge(base: dict, override: dict) -> dict:
    # Nested sections merge key by key; anything else is replaced
    merged = dict(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


def _section(section_cls, data: dict, name: str):
    raw = data.get(name) or {}
    known = {f.name for f in dataclasses.fields(section_cls)}
    for key in sorted(set(raw) - known):
        logger.warning("Ignoring unknown setting %s.%s", name, key)
    return section_cls(**{k: v for k, v in raw.items() if k in known})
