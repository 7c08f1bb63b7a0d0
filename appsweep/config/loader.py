from __future__ import annotations

import json
import os

from result import Err, Ok, Result

from appsweep.config.defaults import default_config
from appsweep.config.schema import AppConfig, from_dict
from appsweep.services.fs import DEFAULT_FS, FileSystem

CONFIG_PATH = "~/.config/appsweep/config.json"
CONFIG_ENV = "APPSWEEP_CONFIG"


def config_path(fs: FileSystem = DEFAULT_FS) -> str:
    return os.environ.get(CONFIG_ENV) or fs.expanduser(CONFIG_PATH)


def load_config(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[AppConfig, str]:
    """Load user overrides on top of the defaults.

    A missing file is not an error. Anything else that goes wrong is reported
    as an ``Err`` message so the caller can warn and carry on with defaults.
    """
    resolved = path or config_path(fs)
    if not fs.exists(resolved):
        return Ok(default_config())

    try:
        payload = json.loads(fs.read_text(resolved))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading config at {resolved}: {exc}.")
    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")
    try:
        return Ok(from_dict(payload, default_config()))
    except (TypeError, ValueError) as exc:
        return Err(f"Invalid value in config at {resolved}: {exc}.")


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
