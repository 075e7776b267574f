"""Configuration loading and validation for the getopt and msgfmt tools."""

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)

DUPLICATE_POLICIES = ("last-wins", "first-wins", "keep-all")


@dataclass
class GetoptConfig:
    """Settings consulted by long option descriptors.

    ``posixly_correct`` replaces the POSIXLY_CORRECT environment variable of
    the C getopt. When set, diagnostics are always reported in en-US.
    The msgfmt CLI does not use these settings. Callers that build LongOpt
    tables pass ``load_config(...).getopt`` as the ``config`` argument.
    """

    posixly_correct: bool = True
    ui_language: str = "en-US"


@dataclass
class MsgfmtConfig:
    """Catalog to resource conversion settings."""

    duplicates: str = "last-wins"
    use_fuzzy: bool = False


@dataclass
class AppConfig:
    """Top-level application configuration."""

    getopt: GetoptConfig = field(default_factory=GetoptConfig)
    msgfmt: MsgfmtConfig = field(default_factory=MsgfmtConfig)


def _read_posixly_correct(raw: dict) -> bool:
    """Read the strict mode flag, falling back to strict when unreadable."""
    value = raw.get("posixly_correct", GetoptConfig.posixly_correct)
    if isinstance(value, bool):
        return value
    logger.warning(
        "Unreadable posixly_correct value %r, defaulting to strict mode", value
    )
    return True


def load_config(config_path: str = "config.yaml") -> AppConfig:
    """Load configuration from a YAML file.

    The POSIXLY_CORRECT environment variable forces strict mode and
    GNU_UI_LANGUAGE overrides the configured message language.

    Args:
        config_path: Path to the YAML configuration file.

    Returns:
        Validated AppConfig instance.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ValueError: If configuration values are invalid.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Configuration file not found: {config_path}")

    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    if not isinstance(raw, dict):
        raise ValueError(f"Configuration root must be a mapping: {config_path}")

    getopt_raw = raw.get("getopt") or {}
    getopt = GetoptConfig(
        posixly_correct=_read_posixly_correct(getopt_raw),
        ui_language=str(getopt_raw.get("ui_language", GetoptConfig.ui_language)),
    )

    msgfmt_raw = raw.get("msgfmt") or {}
    msgfmt = MsgfmtConfig(
        duplicates=msgfmt_raw.get("duplicates", MsgfmtConfig.duplicates),
        use_fuzzy=bool(msgfmt_raw.get("use_fuzzy", MsgfmtConfig.use_fuzzy)),
    )

    config = AppConfig(getopt=getopt, msgfmt=msgfmt)
    apply_environment(config)
    _validate_config(config)
    return config


def apply_environment(config: AppConfig) -> AppConfig:
    """Apply environment variable overrides to ``config`` in place."""
    if "POSIXLY_CORRECT" in os.environ:
        config.getopt.posixly_correct = True

    env_language = os.environ.get("GNU_UI_LANGUAGE")
    if env_language:
        config.getopt.ui_language = env_language

    return config


def _validate_config(config: AppConfig) -> None:
    """Validate configuration values.

    Args:
        config: The configuration to validate.

    Raises:
        ValueError: If validation fails.
    """
    if not config.getopt.ui_language:
        raise ValueError("ui_language must not be empty.")

    if config.msgfmt.duplicates not in DUPLICATE_POLICIES:
        raise ValueError(
            f"duplicates must be one of {', '.join(DUPLICATE_POLICIES)}, "
            f"got {config.msgfmt.duplicates!r}."
        )
