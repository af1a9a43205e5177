"""Disarm pipeline used by the trigger switch and the CLI."""

from __future__ import annotations

import logging

from protect_automate.core.errors import (
    AlarmNotFoundError,
    ConfigurationError,
    DisarmCommandError,
    DiscoveryError,
    HttpStatusError,
    ProtocolError,
    TargetConnectionError,
)
from protect_automate.core.model import CharacteristicTarget, DisarmOutcome, DisarmResult, ResolutionConfig, ResolvedTarget
from protect_automate.core.resolver import AlarmResolver
from protect_automate.executors.base import DisarmExecutor
from protect_automate.executors.characteristic import CharacteristicExecutor
from protect_automate.executors.http import HttpExecutor
from protect_automate.host.base import AccessoryCatalog

LOGGER = logging.getLogger(__name__)


class DisarmService:
    def __init__(
        self,
        catalog: AccessoryCatalog | None,
        resolution: ResolutionConfig,
        *,
        characteristic_executor: DisarmExecutor | None = None,
        http_executor: DisarmExecutor | None = None,
    ) -> None:
        self.resolution = resolution
        self.resolver = AlarmResolver(catalog)
        self.characteristic_executor: DisarmExecutor = characteristic_executor or CharacteristicExecutor()
        self.http_executor: DisarmExecutor = http_executor or HttpExecutor()

    async def execute(self, target: ResolvedTarget) -> DisarmResult:
        if isinstance(target, CharacteristicTarget):
            return await self.characteristic_executor.execute(target)
        return await self.http_executor.execute(target)

    async def disarm(self) -> DisarmOutcome:
        """Resolve the alarm and send DISARM once.

        Never raises: every failure is logged with enough context to fix the
        configuration and returned as a ``DisarmOutcome``.
        """
        LOGGER.info("Attempting to disarm alarm (strategy=%s)", self.resolution.strategy)
        try:
            target = self.resolver.resolve(self.resolution)
            result = await self.execute(target)
        except ConfigurationError as exc:
            LOGGER.error("Configuration error: %s", exc)
            return DisarmOutcome(status="configuration_error", message=str(exc))
        except DiscoveryError as exc:
            LOGGER.error("Alarm discovery failed: %s", exc)
            _log_candidates(exc.candidates)
            return DisarmOutcome(status="discovery_error", message=str(exc), candidates=exc.candidates)
        except AlarmNotFoundError as exc:
            LOGGER.error("%s", exc)
            _log_candidates(exc.candidates)
            if self.resolution.alarm_name:
                LOGGER.error("Please update the 'alarmName' setting to match exactly.")
            return DisarmOutcome(status="not_found", message=str(exc), candidates=exc.candidates)
        except TargetConnectionError as exc:
            LOGGER.error("%s", exc)
            return DisarmOutcome(status="connection_error", message=str(exc))
        except ProtocolError as exc:
            LOGGER.error("%s", exc)
            if exc.hint:
                LOGGER.error("Hint: %s", exc.hint)
            message = f"{exc} ({exc.hint})" if exc.hint else str(exc)
            return DisarmOutcome(status="protocol_error", message=message)
        except HttpStatusError as exc:
            LOGGER.error("Disarm request to %s failed with HTTP %d: %s", exc.url, exc.status_code, exc.body)
            return DisarmOutcome(status="http_error", message=str(exc), body=exc.body)
        except DisarmCommandError as exc:
            LOGGER.error("Error disarming alarm: %s", exc)
            return DisarmOutcome(status="command_error", message=str(exc))
        except Exception as exc:
            LOGGER.exception("Unexpected error while disarming alarm")
            return DisarmOutcome(status="error", message=str(exc))

        LOGGER.info("Successfully sent DISARM command to %s", result.target)
        if result.body is not None:
            LOGGER.info("Response: %s", result.body)
        return DisarmOutcome(status="disarmed", message=f"Disarmed {result.target}", body=result.body)


def _log_candidates(candidates: tuple[str, ...]) -> None:
    if not candidates:
        return
    LOGGER.error("Available accessories:")
    for name in candidates:
        LOGGER.error('  - "%s"', name)
