"""Configuration resolution helpers."""

from __future__ import annotations

from collections.abc import Mapping as MappingABC
from copy import deepcopy
from typing import Any, Dict, Iterable, Mapping

import yaml
from pydantic import ValidationError

from .exceptions import ConfigError
from .models import CartreeConfig

ENV_PREFIX = "CARTREE__"


def resolve_with_precedence(
    *,
    defaults: CartreeConfig,
    file_overrides: Mapping[str, Any] | None = None,
    env_overrides: Mapping[str, Any] | None = None,
    cli_overrides: Mapping[str, Any] | None = None,
) -> CartreeConfig:
    """Merge configuration sources, later sources winning over earlier ones.

    Order is defaults, then the config file, then environment variables, then
    command-line overrides.
    """
    merged = defaults.model_dump(mode="python")
    layers = (("file", file_overrides), ("environment", env_overrides), ("cli", cli_overrides))
    for source_name, layer in layers:
        if layer is not None:
            merged = _deep_merge(merged, expand_dotted_keys(layer, source_name=source_name))

    try:
        return CartreeConfig.model_validate(merged)
    except ValidationError as exc:
        raise ConfigError(f"Invalid configuration values: {exc}") from exc


def flatten_for_env(config: CartreeConfig) -> Dict[str, str]:
    """Flatten the config into `CARTREE__SECTION__KEY` environment variable mappings."""
    flat: Dict[str, str] = {}
    for section, fields in config.model_dump(mode="python").items():
        for key, value in fields.items():
            env_key = f"{ENV_PREFIX}{section.upper()}__{key.upper()}"
            if isinstance(value, (dict, list)):
                flat[env_key] = yaml.safe_dump(value, default_flow_style=True).strip()
            elif value is None:
                flat[env_key] = "null"
            else:
                flat[env_key] = str(value)
    return flat


def overrides_from_env(env: Mapping[str, str]) -> dict[str, Any]:
    """Collect `CARTREE__` prefixed variables into a nested override mapping.

    Values are parsed as YAML scalars so `true`, `3`, and `[a, b]` become typed
    values; unparsable text is kept verbatim.
    """
    overrides: dict[str, Any] = {}
    for key, raw_value in env.items():
        if not key.startswith(ENV_PREFIX):
            continue
        segments = [segment.lower() for segment in key[len(ENV_PREFIX) :].split("__") if segment]
        if not segments:
            continue
        try:
            value = yaml.safe_load(raw_value)
        except yaml.YAMLError:
            value = raw_value
        assign_path(overrides, segments, value, source_name="environment")
    return overrides


def expand_dotted_keys(source: Mapping[str, Any], *, source_name: str) -> dict[str, Any]:
    """Return a nested copy of ``source`` where `a.b` keys become `{a: {b: ...}}`."""
    if not isinstance(source, MappingABC):
        raise ConfigError(f"{source_name.capitalize()} overrides must be a mapping.")

    result: dict[str, Any] = {}
    for key, value in source.items():
        if not isinstance(key, str):
            raise ConfigError(f"{source_name.capitalize()} override keys must be strings.")
        if isinstance(value, MappingABC):
            value = expand_dotted_keys(value, source_name=source_name)
        assign_path(result, key.split("."), value, source_name=source_name)
    return result


def assign_path(
    target: dict[str, Any],
    path: Iterable[str],
    value: Any,
    *,
    source_name: str = "config",
) -> None:
    """Assign ``value`` at the nested ``path`` inside ``target``, creating mappings.

    Raises:
        ConfigError: If a non-mapping value already occupies part of the path.
    """
    segments = list(path)
    node = target
    for segment in segments[:-1]:
        child = node.setdefault(segment, {})
        if not isinstance(child, dict):
            raise ConfigError(
                f"{source_name.capitalize()} override for {'.'.join(segments)} "
                "conflicts with existing value."
            )
        node = child
    leaf = segments[-1]
    if isinstance(value, MappingABC) and isinstance(node.get(leaf), MappingABC):
        node[leaf] = _deep_merge(node[leaf], value)
    else:
        node[leaf] = value


def _deep_merge(base: Mapping[str, Any], overrides: Mapping[str, Any]) -> dict[str, Any]:
    merged = {key: deepcopy(value) for key, value in base.items()}
    for key, value in overrides.items():
        current = merged.get(key)
        if isinstance(value, MappingABC) and isinstance(current, MappingABC):
            merged[key] = _deep_merge(current, value)
        else:
            merged[key] = deepcopy(value)
    return merged


__all__ = [
    "ENV_PREFIX",
    "resolve_with_precedence",
    "flatten_for_env",
    "overrides_from_env",
    "expand_dotted_keys",
    "assign_path",
]
