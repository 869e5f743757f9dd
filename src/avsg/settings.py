from __future__ import annotations

import dataclasses
import logging
from dataclasses import dataclass, field
from importlib import resources
from pathlib import Path
from typing import Any, Dict, Optional

import yaml
from jsonschema import Draft202012Validator
from platformdirs import user_config_path

from .errors import SettingsError

logger = logging.getLogger(__name__)

APP_NAME = "avsg"
SETTINGS_FILENAME = "settings.yaml"

LOG_LEVELS = ["CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"]

SETTINGS_SCHEMA: Dict[str, Any] = {
    "$schema": "https://json-schema.org/draft/2020-12/schema",
    "type": "object",
    "additionalProperties": False,
    "properties": {
        "logging": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "level": {"type": "string", "enum": LOG_LEVELS},
            },
        },
        "decoder": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "strict": {"type": "boolean"},
            },
        },
        "input": {
            "type": "object",
            "additionalProperties": False,
            "properties": {
                "unencrypted": {"type": "boolean"},
            },
        },
    },
}


@dataclass
class LoggingSettings:
    level: str = "WARNING"

    @property
    def level_number(self) -> int:
        return getattr(logging, self.level)


@dataclass
class DecoderSettings:
    # Reject elements and attributes the schema does not know about.
    strict: bool = True


@dataclass
class InputSettings:
    # Treat input save files as plain XML unless told otherwise on the command line.
    unencrypted: bool = False


@dataclass
class Settings:
    logging: LoggingSettings = field(default_factory=LoggingSettings)
    decoder: DecoderSettings = field(default_factory=DecoderSettings)
    input: InputSettings = field(default_factory=InputSettings)

    @staticmethod
    def default_user_path() -> Path:
        return user_config_path(APP_NAME) / SETTINGS_FILENAME

    @staticmethod
    def _load_yaml(path: Path) -> dict:
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except OSError as e:
            raise SettingsError(f"Unable to read settings file {path}: {e}") from e
        except yaml.YAMLError as e:
            raise SettingsError(f"Invalid YAML in settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise SettingsError(f"Settings file {path} must contain a mapping")
        return data

    @classmethod
    def _deep_merge(cls, base: dict, overlay: dict) -> dict:
        merged = dict(base)
        for k, v in (overlay or {}).items():
            if isinstance(v, dict) and isinstance(base.get(k), dict):
                merged[k] = cls._deep_merge(base[k], v)
            else:
                merged[k] = v
        return merged

    @staticmethod
    def validate(data: dict, source: str = "<settings>") -> None:
        validator = Draft202012Validator(SETTINGS_SCHEMA)
        errors = sorted(validator.iter_errors(data), key=lambda e: list(e.path))
        if errors:
            for err in errors:
                logger.error("Settings error at %s: %s", "/".join(str(p) for p in err.path) or "<root>", err.message)
            details = "; ".join(
                f"{'/'.join(str(p) for p in e.path) or '<root>'}: {e.message}" for e in errors
            )
            raise SettingsError(f"Invalid settings in {source}: {details}")

    @classmethod
    def _from_dict(cls, data: dict) -> "Settings":
        return Settings(
            logging=LoggingSettings(**data.get("logging", {})),
            decoder=DecoderSettings(**data.get("decoder", {})),
            input=InputSettings(**data.get("input", {})),
        )

    @classmethod
    def load(cls, user_path: Optional[Path] = None) -> "Settings":
        """Load settings from the packaged defaults and an optional user file.

        An explicit ``user_path`` must exist. Without one, the per-user config
        location is used if a settings file is present there.
        """
        try:
            with resources.files("avsg").joinpath("default_settings.yaml").open("r", encoding="utf-8") as f:
                default_data = yaml.safe_load(f) or {}
        except FileNotFoundError:
            logger.warning("Default settings not found; falling back to dataclass defaults.")
            default_data = dataclasses.asdict(Settings())

        user_data: dict = {}
        if user_path is not None:
            if not user_path.exists():
                raise SettingsError(f"Settings file not found: {user_path}")
            user_data = cls._load_yaml(user_path)
            cls.validate(user_data, str(user_path))
            logger.info("Loaded user settings from %s", user_path)
        else:
            candidate = cls.default_user_path()
            if candidate.is_file():
                user_data = cls._load_yaml(candidate)
                cls.validate(user_data, str(candidate))
                logger.info("Loaded user settings from %s", candidate)

        merged = cls._deep_merge(default_data, user_data)
        cls.validate(merged)
        settings = cls._from_dict(merged)
        logger.debug("Settings merged: %s", settings)
        return settings
