"""Platform configuration loading and validation for YAML config files."""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass
from importlib import resources
from pathlib import Path
from typing import Any

import yaml
from jsonschema import ValidationError, validators

from protect_automate.core.errors import ConfigLoadError, ConfigValidationError
from protect_automate.core.model import (
    ADMIN_UI_PORT,
    DEFAULT_HTTP_HOST,
    DEFAULT_HTTP_PORT,
    STRATEGY_BRIDGE,
    STRATEGY_HTTP,
    STRATEGY_NAME,
    PlatformConfig,
    ResolutionConfig,
)

PLATFORM_NAME = "SomfyProtectAutomate"
DEFAULT_NAME = "Somfy Protect Automate"
LOGGER = logging.getLogger(__name__)


class UniqueKeyLoader(yaml.SafeLoader):
    """YAML loader that rejects duplicate mapping keys."""


def _construct_mapping(loader: UniqueKeyLoader, node: yaml.Node, deep: bool = False) -> dict[str, Any]:
    mapping: dict[str, Any] = {}
    for key_node, value_node in node.value:
        key = loader.construct_object(key_node, deep=deep)
        if key in mapping:
            raise ConfigValidationError(f"Duplicate key '{key}' in YAML document")
        mapping[key] = loader.construct_object(value_node, deep=deep)
    return mapping


UniqueKeyLoader.add_constructor(
    yaml.resolver.BaseResolver.DEFAULT_MAPPING_TAG,
    _construct_mapping,
)


@dataclass(frozen=True)
class LoadedConfig:
    config: PlatformConfig
    warnings: tuple[str, ...]


def default_config_path() -> Path:
    xdg_config = Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))
    return xdg_config / "protect-automate/config.yaml"


def _load_schema_validator() -> Any:
    schema_text = resources.files("protect_automate.schemas").joinpath("config.schema.json").read_text(
        encoding="utf-8"
    )
    schema = json.loads(schema_text)
    validator_cls = validators.validator_for(schema)
    validator_cls.check_schema(schema)
    return validator_cls(schema)


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        content = path.read_text(encoding="utf-8")
    except OSError as exc:
        raise ConfigLoadError(f"Could not read config file {path}: {exc}") from exc

    try:
        loaded = yaml.load(content, Loader=UniqueKeyLoader)
    except yaml.YAMLError as exc:
        raise ConfigValidationError(f"Invalid YAML in {path}: {exc}") from exc

    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigValidationError(f"Config file {path} must contain a mapping at root")
    return loaded


def _normalize_text(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


def build_config(doc: dict[str, Any], source: Path | str = "<config>") -> LoadedConfig:
    validator = _load_schema_validator()
    try:
        validator.validate(doc)
    except ValidationError as exc:
        path = ".".join(str(p) for p in exc.path)
        where = f" ({path})" if path else ""
        raise ConfigValidationError(f"Schema validation failed for {source}{where}: {exc.message}") from exc

    warnings: list[str] = []
    strategy = doc.get("strategy", STRATEGY_NAME)
    http_host = _normalize_text(doc.get("httpHost", DEFAULT_HTTP_HOST))
    if http_host is None:
        raise ConfigValidationError(f"Schema validation failed for {source} (httpHost): must not be blank")
    resolution = ResolutionConfig(
        strategy=strategy,
        alarm_name=doc.get("alarmName") or None,
        http_host=http_host,
        http_port=int(doc.get("httpPort", DEFAULT_HTTP_PORT)),
        http_token=_normalize_text(doc.get("httpToken")),
        timeout_s=float(doc.get("timeout", 5.0)),
    )

    if strategy == STRATEGY_HTTP and resolution.http_port == ADMIN_UI_PORT:
        warnings.append(
            f"httpPort {ADMIN_UI_PORT} is the Homebridge admin UI port; the disarm API usually listens elsewhere"
        )
    if strategy != STRATEGY_HTTP and resolution.http_token:
        warnings.append(f"httpToken is ignored by the '{strategy}' strategy")
    if strategy in (STRATEGY_NAME, STRATEGY_BRIDGE) and not resolution.alarm_name:
        warnings.append("alarmName is not set; activations will fail until it is configured")

    for warning in warnings:
        LOGGER.warning(warning)

    config = PlatformConfig(
        platform=doc.get("platform", PLATFORM_NAME),
        name=doc.get("name", DEFAULT_NAME),
        resolution=resolution,
    )
    return LoadedConfig(config=config, warnings=tuple(warnings))


def load_config(path: Path | None = None) -> LoadedConfig:
    config_path = path or default_config_path()
    doc = _read_yaml(config_path)
    return build_config(doc, config_path)
