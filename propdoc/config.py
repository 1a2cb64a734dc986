"""
Configuration loading.

Settings are read from TOML: an explicit ``--config`` file, else the first
of ``propdoc.toml``, ``.propdoc.toml`` or ``pyproject.toml`` (``[tool.propdoc]``)
found under the root. A config file may hold the settings at the top level or
in an ``[extract]`` table. CLI overrides win over file values, which win over
the defaults.
"""
import logging
import os
import tomllib
from dataclasses import dataclass, field, fields, replace
from typing import Any, Dict, List, Optional

from propdoc.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAMES = ("propdoc.toml", ".propdoc.toml")
PYPROJECT_FILENAME = "pyproject.toml"
ERROR_HANDLING_MODES = ("collect", "throw", "ignore")

DEFAULT_INCLUDE = ["**/*.tsx", "**/*.jsx", "**/*.ts", "**/*.js"]
DEFAULT_EXCLUDE = [
    "**/node_modules/**",
    "**/dist/**",
    "**/.next/**",
    "**/build/**",
    "**/*.test.tsx", "**/*.test.ts", "**/*.test.jsx", "**/*.test.js",
    "**/*.spec.tsx", "**/*.spec.ts", "**/*.spec.jsx", "**/*.spec.js",
]


@dataclass
class ExtractConfig:
    root: str = "."
    include: List[str] = field(default_factory=lambda: list(DEFAULT_INCLUDE))
    exclude: List[str] = field(default_factory=lambda: list(DEFAULT_EXCLUDE))
    output: str = "./metadata.json"
    error_handling: str = "collect"
    cache: bool = False
    usage_examples: bool = False
    respect_gitignore: bool = True
    workers: Optional[int] = None
    graph_dir: Optional[str] = None


_FIELD_NAMES = tuple(f.name for f in fields(ExtractConfig))
_LIST_FIELDS = ("include", "exclude")
_BOOL_FIELDS = ("cache", "usage_examples", "respect_gitignore")
_STR_FIELDS = ("root", "output")


def find_config_file(root: str) -> Optional[str]:
    for name in CONFIG_FILENAMES:
        candidate = os.path.join(root, name)
        if os.path.isfile(candidate):
            return candidate
    pyproject = os.path.join(root, PYPROJECT_FILENAME)
    if os.path.isfile(pyproject) and _read_toml(pyproject).get("tool", {}).get("propdoc") is not None:
        return pyproject
    return None


def _read_toml(path: str) -> Dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read config file {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e


def _settings_from_file(path: str) -> Dict[str, Any]:
    data = _read_toml(path)
    if os.path.basename(path) == PYPROJECT_FILENAME:
        data = data.get("tool", {}).get("propdoc", {})
    if isinstance(data.get("extract"), dict):
        data = data["extract"]
    return data


def validate(config: ExtractConfig) -> ExtractConfig:
    if config.error_handling not in ERROR_HANDLING_MODES:
        raise ConfigError(
            f"error_handling must be one of {', '.join(ERROR_HANDLING_MODES)}, got {config.error_handling!r}"
        )
    for name in _LIST_FIELDS:
        value = getattr(config, name)
        if not isinstance(value, list) or not all(isinstance(p, str) for p in value):
            raise ConfigError(f"{name} must be a list of glob strings")
    for name in _BOOL_FIELDS:
        if not isinstance(getattr(config, name), bool):
            raise ConfigError(f"{name} must be true or false")
    for name in _STR_FIELDS:
        if not isinstance(getattr(config, name), str):
            raise ConfigError(f"{name} must be a string")
    if config.graph_dir is not None and not isinstance(config.graph_dir, str):
        raise ConfigError("graph_dir must be a string")
    if config.workers is not None:
        if isinstance(config.workers, bool) or not isinstance(config.workers, int) or config.workers < 1:
            raise ConfigError("workers must be a positive integer")
    return config


def load_config(config_path: Optional[str] = None, root: Optional[str] = None,
                overrides: Optional[Dict[str, Any]] = None) -> ExtractConfig:
    search_root = root or os.getcwd()
    path = config_path or find_config_file(search_root)

    settings: Dict[str, Any] = {}
    if path is None:
        logger.info("No config file found, using defaults")
    else:
        if not os.path.isfile(path):
            raise ConfigError(f"Config file not found: {path}")
        logger.debug("Loading config from %s", path)
        for key, value in _settings_from_file(path).items():
            if key in _FIELD_NAMES:
                settings[key] = value
            else:
                logger.warning("Ignoring unknown config key %r in %s", key, path)
        # a root in the file is relative to the file
        if isinstance(settings.get("root"), str):
            settings["root"] = os.path.join(os.path.dirname(os.path.abspath(path)), settings["root"])

    for key, value in (overrides or {}).items():
        if key not in _FIELD_NAMES:
            raise ConfigError(f"Unknown config option: {key}")
        if value is not None:
            settings[key] = value

    if root is not None and "root" not in (overrides or {}):
        settings.setdefault("root", root)

    config = replace(ExtractConfig(), **settings)
    config = validate(config)
    config.root = os.path.abspath(config.root)
    return config
