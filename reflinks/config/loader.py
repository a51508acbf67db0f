"""YAML and env loader with fail-fast validation."""

from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Any, Mapping, Optional

import yaml
from dotenv import load_dotenv

from ..exceptions import ConfigurationError
from .settings import AppConfig, ReflinksOptions

DEFAULT_CONFIG_PATH = "config/reflinks.yaml"

_ENV_PATTERN = re.compile(r"\$\{([^}]+)\}")

# Request-style flag names accepted as aliases for option fields.
_FLAG_ALIASES: dict[str, str] = {
    "nofixcplain": "disable_captioned_bracket",
    "nofixuplain": "disable_uncaptioned_bracket",
    "nofixutemplate": "disable_minimal_template",
    "plainlink": "prefer_plain_citation_style",
    "noremovetag": "suppress_bare_url_tag_cleanup",
}

_TRUE_VALUES = {"1", "true", "yes", "on"}


def _read_yaml(path: str) -> dict:
    resolved = Path(path)
    if not resolved.exists():
        raise FileNotFoundError(f"Missing config file: {path}")
    with resolved.open("r", encoding="utf-8") as file_obj:
        loaded = yaml.safe_load(file_obj) or {}
    if not isinstance(loaded, dict):
        raise ConfigurationError(f"Expected object at root of YAML file: {path}")
    return loaded


def substitute_env_vars(value: Any) -> Any:
    """
    Recursively substitute ${VAR_NAME} placeholders with environment values.

    Unset variables are left as-is.
    """
    if isinstance(value, str):
        return _ENV_PATTERN.sub(lambda m: os.getenv(m.group(1), m.group(0)), value)
    if isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}
    if isinstance(value, list):
        return [substitute_env_vars(item) for item in value]
    return value


def load_config(config_path: Optional[str] = None) -> AppConfig:
    """
    Load the application configuration.

    The path defaults to $REFLINKS_CONFIG, then config/reflinks.yaml. A
    missing default file yields the built-in defaults; an explicitly
    requested file must exist.
    """
    load_dotenv()
    explicit = config_path or os.getenv("REFLINKS_CONFIG")
    path = explicit or DEFAULT_CONFIG_PATH

    if not explicit and not Path(path).exists():
        raw: dict = {}
    else:
        raw = substitute_env_vars(_read_yaml(path))

    # Environment overrides go through validation like file values
    user_agent = os.getenv("REFLINKS_USER_AGENT")
    if user_agent:
        raw["options"] = {**(raw.get("options") or {}), "user_agent": user_agent}
    log_level = os.getenv("LOG_LEVEL")
    if log_level:
        raw["logging"] = {**(raw.get("logging") or {}), "level": log_level}

    return AppConfig.model_validate(raw)


def options_from_mapping(
    mapping: Mapping[str, Any], base: Optional[ReflinksOptions] = None
) -> ReflinksOptions:
    """
    Build options from request-style parameters.

    Accepts both option field names and the short flag names
    (nofixcplain, nofixuplain, nofixutemplate, plainlink, noremovetag,
    noaccessdate). String values such as "1" or "true" count as set.

    Args:
        mapping: Parameters, e.g. parsed query string
        base: Options to start from

    Returns:
        New ReflinksOptions instance
    """
    data = (base or ReflinksOptions()).model_dump()
    for key, value in mapping.items():
        is_flag = key in _FLAG_ALIASES or key == "noaccessdate"
        if isinstance(value, str) and (is_flag or isinstance(data.get(key), bool)):
            value = value.strip().lower() in _TRUE_VALUES
        if key in _FLAG_ALIASES:
            data[_FLAG_ALIASES[key]] = bool(value)
        elif key == "noaccessdate":
            data["include_access_date"] = not bool(value)
        elif key in data:
            data[key] = value
    return ReflinksOptions.model_validate(data)
