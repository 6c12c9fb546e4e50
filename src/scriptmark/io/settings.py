"""Settings file I/O for scriptmark.

Reads a JSON settings file at XDG_CONFIG_HOME/scriptmark/settings.json.
The "sandbox" key overrides SandboxConfig fields; other keys are free for
other consumers.

Import as: import scriptmark.io.settings
"""

import json
import os
from pathlib import Path

from scriptmark.sandbox.config import SandboxConfig


def get_config_path() -> Path:
    """Return path to settings file.

    Uses XDG_CONFIG_HOME (default ~/.config) / scriptmark / settings.json.
    """
    config_home = os.environ.get("XDG_CONFIG_HOME", os.path.expanduser("~/.config"))
    return Path(config_home) / "scriptmark" / "settings.json"


def load_settings() -> dict:
    """Load settings from JSON file. Returns empty dict on missing/corrupt file."""
    path = get_config_path()
    # [LAW:dataflow-not-control-flow] Always attempt read; empty dict is the "no data" value.
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (FileNotFoundError, json.JSONDecodeError, OSError):
        return {}
    return data if isinstance(data, dict) else {}


def load_setting(key: str, default=None):
    """Load a single setting by key. Returns default if absent."""
    return load_settings().get(key, default)


def load_sandbox_config() -> SandboxConfig:
    return SandboxConfig.from_dict(load_setting("sandbox", {}))


def load_default_profile() -> str:
    """Formatting profile used when none is given on the command line."""
    value = load_setting("profile", "content")
    return value if isinstance(value, str) else "content"
