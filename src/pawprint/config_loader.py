"""Load SitemapConfig from pawprint.yaml / pawprint.toml if present.

Merges file config with CLI kwargs. CLI overrides file.
"""

from __future__ import annotations

import tomllib
from pathlib import Path
from typing import Any

import yaml

from pawprint._errors import ConfigError
from pawprint.config import DebugConfig, RobotsConfig, SitemapConfig
from pawprint.sitemap.entries import SitemapEntry

CONFIG_FILENAMES: tuple[str, ...] = ("pawprint.yaml", "pawprint.yml", "pawprint.toml")

_KNOWN_KEYS: frozenset[str] = frozenset({
    "pages_dir",
    "base_url",
    "filename",
    "output",
    "default_changefreq",
    "default_priority",
    "custom_entries",
    "on_clash",
    "page_convention",
    "domain_driven",
    "robots",
    "debug",
    "host",
    "port",
    "dev_write",
})


def load_config(root: Path, **overrides: object) -> SitemapConfig:
    """Load SitemapConfig from root, optionally merging pawprint.yaml.

    Looks for pawprint.yaml, pawprint.yml, or pawprint.toml in root. If found,
    loads and merges with overrides. Overrides take precedence; overrides
    whose value is None are treated as "not given".

    Raises:
        ConfigError: If the config file is unreadable, malformed, or holds
            unknown or invalid values.

    """
    file_config = _read_config_file(root)
    merged: dict[str, Any] = {
        **file_config,
        **{k: v for k, v in overrides.items() if v is not None},
    }
    return build_config(root, merged)


def build_config(root: Path, values: dict[str, Any]) -> SitemapConfig:
    """Normalize plain (YAML/TOML/CLI) values into a SitemapConfig."""
    unknown = set(values) - _KNOWN_KEYS
    if unknown:
        msg = f"Unknown pawprint config keys: {', '.join(sorted(unknown))}"
        raise ConfigError(msg)

    values = dict(values)
    if "output" in values and not isinstance(values["output"], Path):
        values["output"] = Path(str(values["output"]))
    if "robots" in values:
        values["robots"] = _coerce_robots(values["robots"])
    if "debug" in values and not isinstance(values["debug"], DebugConfig):
        values["debug"] = _coerce_debug(values["debug"])
    if "custom_entries" in values:
        values["custom_entries"] = tuple(
            entry if isinstance(entry, SitemapEntry) else _coerce_entry(entry)
            for entry in values["custom_entries"] or ()
        )

    try:
        return SitemapConfig(root=Path(root), **values)
    except TypeError as exc:
        msg = f"Invalid pawprint config: {exc}"
        raise ConfigError(msg) from exc


def find_config_file(root: Path) -> Path | None:
    """Return the first config file present in root, in lookup order."""
    for name in CONFIG_FILENAMES:
        path = root / name
        if path.is_file():
            return path
    return None


def _read_config_file(root: Path) -> dict[str, Any]:
    """Read pawprint config from yaml/toml if present. Returns empty dict otherwise."""
    path = find_config_file(root)
    if path is None:
        return {}
    if path.suffix == ".toml":
        return _parse_toml(path)
    return _parse_yaml(path)


def _parse_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except (OSError, yaml.YAMLError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    if not isinstance(data, dict):
        msg = f"{path.name} must contain a mapping at the top level"
        raise ConfigError(msg)
    return _flatten_pawprint_section(data)


def _parse_toml(path: Path) -> dict[str, Any]:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as exc:
        msg = f"Cannot read {path.name}: {exc}"
        raise ConfigError(msg) from exc
    return _flatten_pawprint_section(data)


def _flatten_pawprint_section(data: dict[str, Any]) -> dict[str, Any]:
    """Extract pawprint.* keys into top-level config."""
    result: dict[str, Any] = {}
    section = data.get("pawprint")
    if isinstance(section, dict):
        result.update(section)
    for k, v in data.items():
        if k != "pawprint" and k in _KNOWN_KEYS:
            result[k] = v
    return result


def _coerce_robots(value: object) -> RobotsConfig | None:
    """``false`` disables robots.txt, ``true`` keeps defaults, a mapping overrides."""
    if value is None or value is False:
        return None
    if value is True:
        return RobotsConfig()
    if isinstance(value, RobotsConfig):
        return value
    if not isinstance(value, dict):
        msg = f"robots must be a mapping or false, got {type(value).__name__}"
        raise ConfigError(msg)

    disallow = value.get("disallow", {})
    cloudflare = value.get("disallow_cloudflare")
    if cloudflare is None and isinstance(disallow, dict):
        cloudflare = disallow.get("cloudflare", True)
    return RobotsConfig(
        user_agent=str(value.get("user_agent", value.get("userAgent", "*"))),
        disallow_cloudflare=bool(True if cloudflare is None else cloudflare),
    )


def _coerce_debug(value: object) -> DebugConfig:
    if not isinstance(value, dict):
        msg = f"debug must be a mapping, got {type(value).__name__}"
        raise ConfigError(msg)
    return DebugConfig(
        print_routes=bool(value.get("print_routes", False)),
        print_ignored=bool(value.get("print_ignored", False)),
    )


def _coerce_entry(value: object) -> SitemapEntry:
    if not isinstance(value, dict):
        msg = f"custom_entries items must be mappings, got {type(value).__name__}"
        raise ConfigError(msg)
    try:
        return SitemapEntry.from_mapping(value)
    except (KeyError, TypeError, ValueError) as exc:
        msg = f"Invalid custom entry {value!r}: {exc}"
        raise ConfigError(msg) from exc
