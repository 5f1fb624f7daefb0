from __future__ import annotations

import json
import logging
from collections.abc import Callable
from typing import Any

from result import Err, Ok, Result

from dinf.config.defaults import default_config
from dinf.config.schema import AppConfig, from_dict
from dinf.services.fs import DEFAULT_FS, FileSystem

logger = logging.getLogger(__name__)

CONFIG_PATH = "~/.config/dinf/config.json"


def _is_count(value: Any) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_globs(value: Any) -> bool:
    if isinstance(value, str):
        return True
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


# key -> (check, expected type as shown to the user)
_KEYS: dict[str, tuple[Callable[[Any], bool], str]] = {
    "topCount": (_is_count, "a non-negative integer"),
    "globPatterns": (_is_globs, "a string or a list of strings"),
    "groupByExtension": (lambda value: isinstance(value, bool), "true or false"),
    "summaryOnly": (lambda value: isinstance(value, bool), "true or false"),
    "thousandsSeparator": (lambda value: isinstance(value, str), "a string"),
}


def validate_payload(payload: dict[str, Any]) -> Result[dict[str, Any], str]:
    """Check the type of every known key; unknown keys are logged and dropped."""
    known: dict[str, Any] = {}
    for key, value in payload.items():
        rule = _KEYS.get(key)
        if rule is None:
            logger.warning("ignoring unknown config key %r", key)
            continue
        check, expected = rule
        if not check(value):
            return Err(f"'{key}' must be {expected}, got {json.dumps(value)}")
        known[key] = value
    return Ok(known)


def load_config(path: str | None = None, fs: FileSystem = DEFAULT_FS) -> Result[AppConfig, str]:
    resolved = path or fs.expanduser(CONFIG_PATH)
    if not fs.exists(resolved):
        logger.debug("no config at %s, using defaults", resolved)
        return Ok(default_config())

    try:
        payload = json.loads(fs.read_text(resolved))
    except (OSError, ValueError) as exc:
        return Err(f"Failed reading config at {resolved}: {exc}.")
    if not isinstance(payload, dict):
        return Err(f"Config at {resolved} must be a JSON object.")

    checked = validate_payload(payload)
    if isinstance(checked, Err):
        return Err(f"Invalid config at {resolved}: {checked.unwrap_err()}.")
    logger.debug("loaded config from %s", resolved)
    return Ok(from_dict(checked.unwrap(), default_config()))


def sample_config_json() -> str:
    return json.dumps(default_config().to_dict(), indent=2)
