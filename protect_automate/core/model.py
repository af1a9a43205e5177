"""Core data models used across config loader, resolver, executors and CLI."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

STRATEGY_NAME = "name"
STRATEGY_HEURISTIC = "heuristic"
STRATEGY_BRIDGE = "bridge"
STRATEGY_HTTP = "http"
STRATEGIES = (STRATEGY_NAME, STRATEGY_HEURISTIC, STRATEGY_BRIDGE, STRATEGY_HTTP)

DEFAULT_HTTP_HOST = "localhost"
DEFAULT_HTTP_PORT = 8582
ADMIN_UI_PORT = 8581


@dataclass(frozen=True)
class ResolutionConfig:
    strategy: str
    alarm_name: str | None = None
    http_host: str = DEFAULT_HTTP_HOST
    http_port: int = DEFAULT_HTTP_PORT
    http_token: str | None = None
    timeout_s: float = 5.0


@dataclass(frozen=True)
class PlatformConfig:
    platform: str
    name: str
    resolution: ResolutionConfig


@dataclass(frozen=True)
class CharacteristicTarget:
    accessory_name: str
    characteristic: Any
    service: Any = None
    accessory: Any = None


@dataclass(frozen=True)
class HttpTarget:
    host: str
    port: int
    token: str | None = None
    timeout_s: float = 5.0

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}/disarm"


ResolvedTarget = CharacteristicTarget | HttpTarget


@dataclass(frozen=True)
class DisarmResult:
    target: str
    body: Any = None


@dataclass(frozen=True)
class DisarmOutcome:
    status: str
    message: str
    body: Any = None
    candidates: tuple[str, ...] = field(default_factory=tuple)

    @property
    def disarmed(self) -> bool:
        return self.status == "disarmed"
