"""Configuration loading and debug logging.

Configuration lives in a TOML file under a [tclcomplete] table:

    [tclcomplete]
    namespace = "::app"
    object_systems = ["oo", "nsf"]
    packages = ["Tcl 8.6"]
    startup = ["~/.tclshrc"]
    history_file = "~/.tclcomplete_history"
"""

from __future__ import annotations

import logging
import os
import tomllib
from pathlib import Path

from pydantic import BaseModel, ValidationError, field_validator

from tclcomplete.context import GLOBAL_NAMESPACE
from tclcomplete.exceptions import ConfigError
from tclcomplete.methods import DEFAULT_SYSTEMS, ObjectSystem

CONFIG_ENV = "TCLCOMPLETE_CONFIG"
DEFAULT_CONFIG_PATH = Path("~/.config/tclcomplete/config.toml")

LOG_FORMAT = "%(asctime)s [%(name)s] %(message)s"


class CompleterConfig(BaseModel):
    """Settings for the completer and the interactive shell."""

    interp: str = ""
    namespace: str = GLOBAL_NAMESPACE
    object_systems: list[ObjectSystem] = list(DEFAULT_SYSTEMS)
    packages: list[str] = []
    startup: list[Path] = []
    history_file: Path | None = None
    debug_log: Path | None = None

    @field_validator("namespace")
    @classmethod
    def _default_namespace(cls, value: str) -> str:
        return value or GLOBAL_NAMESPACE

    @field_validator("startup")
    @classmethod
    def _expand_startup(cls, value: list[Path]) -> list[Path]:
        return [p.expanduser() for p in value]

    @field_validator("history_file", "debug_log")
    @classmethod
    def _expand_path(cls, value: Path | None) -> Path | None:
        return value.expanduser() if value is not None else None


def config_path(path: Path | None = None) -> tuple[Path, bool]:
    """Resolve which file to read and whether it was asked for explicitly."""
    if path is not None:
        return path.expanduser(), True
    env = os.environ.get(CONFIG_ENV)
    if env:
        return Path(env).expanduser(), True
    return DEFAULT_CONFIG_PATH.expanduser(), False


def load_config(path: Path | None = None) -> CompleterConfig:
    """Load configuration from TOML.

    An explicitly named file (argument or $TCLCOMPLETE_CONFIG) must exist;
    a missing default file just yields the defaults.
    """
    resolved, explicit = config_path(path)
    if not resolved.exists():
        if explicit:
            raise ConfigError(f"config file not found: {resolved}")
        return CompleterConfig()

    try:
        data = tomllib.loads(resolved.read_text())
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"{resolved}: {e}", cause=e) from e

    table = data.get("tclcomplete", data)
    try:
        return CompleterConfig.model_validate(table)
    except ValidationError as e:
        raise ConfigError(f"{resolved}: {e}", cause=e) from e


def enable_debug_log(log_path: Path) -> logging.Handler:
    """Attach a FileHandler writing tclcomplete debug logs to log_path."""
    log_path.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(str(log_path))
    handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%H:%M:%S"))
    logger = logging.getLogger("tclcomplete")
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
    return handler


def disable_debug_log(handler: logging.Handler) -> None:
    """Detach and close a handler installed by enable_debug_log()."""
    logging.getLogger("tclcomplete").removeHandler(handler)
    handler.close()
