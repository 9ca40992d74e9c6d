"""Configuration for easy-ws-git."""

import json
import os
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ValidationError

from easy_ws_git.core.errors import ConfigError

CONFIG_ENV_VAR = "EASY_WS_GIT_CONFIG"
EDITOR_ENV_VAR = "EASY_WS_GIT_EDITOR"


class EasyWorkspaceConfig(BaseModel):
    """User settings, read from a JSON file."""

    editor: str = "subl"
    open_command: str = "open_easy_workspace"
    save_command: str = "save_as_easy_workspace"
    cleanup_scratch: bool = True
    open_repo_window: bool = True

    model_config = {"extra": "forbid"}


def get_config_path() -> Path:
    """Get the configuration file path, honouring ``EASY_WS_GIT_CONFIG``."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return Path(override).expanduser()
    return Path.home() / ".config" / "easy-ws-git" / "config.json"


def load_config(config_path: Optional[Path] = None) -> EasyWorkspaceConfig:
    """Load the configuration file.

    A missing file yields the defaults. ``EASY_WS_GIT_EDITOR`` overrides the
    ``editor`` setting from the file.

    Args:
        config_path: Explicit file to read instead of the default location.

    Returns:
        The loaded configuration.

    Raises:
        ConfigError: If the file is not valid JSON or has invalid settings.
    """
    path = config_path or get_config_path()

    data = {}
    if path.exists():
        try:
            data = json.loads(path.read_text(encoding="utf-8"))
        except (OSError, json.JSONDecodeError) as e:
            raise ConfigError(f"Cannot read config file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ConfigError(f"Config file {path} must contain a JSON object")

    editor = os.environ.get(EDITOR_ENV_VAR)
    if editor:
        data["editor"] = editor

    try:
        return EasyWorkspaceConfig.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid config file {path}: {e}") from e
