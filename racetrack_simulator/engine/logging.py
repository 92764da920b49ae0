from __future__ import annotations

import logging
import re
from typing import TYPE_CHECKING, Any

from typing_extensions import override

from rich.logging import RichHandler

if TYPE_CHECKING:
    from collections.abc import MutableMapping

    from racetrack_simulator.core.state import LogContext

LOGGER_NAME = "racetrack"
ENGINE_LOGGER_NAME = f"{LOGGER_NAME}.engine"

# Simple color theme for Rich
COLOR = {
    "move": "bold green",
    "crash": "bold red",
    "finish": "bold magenta",
    "retire": "bold blue",
    "warning": "bold red",
    "prefix": "dim",
}

KEYWORD_STYLES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"\b(Move)\b"), COLOR["move"]),
    (re.compile(r"\b(Crash(?:ed)?)\b"), COLOR["crash"]),
    (re.compile(r"\b(Finish|Winner)\b"), COLOR["finish"]),
    (re.compile(r"\b(Retire[sd]?)\b"), COLOR["retire"]),
]


class ContextAdapter(logging.LoggerAdapter[logging.Logger]):
    """Inject one engine's runtime context into every record it logs."""

    def __init__(self, logger: logging.Logger, log_context: LogContext) -> None:
        super().__init__(logger, {})
        self.log_context: LogContext = log_context

    @override
    def process(
        self,
        msg: object,
        kwargs: MutableMapping[str, Any],
    ) -> tuple[object, MutableMapping[str, Any]]:
        logctx = self.log_context
        kwargs["extra"] = {
            **kwargs.get("extra", {}),
            "total_turn": logctx.total_turn,
            "turn_log_count": logctx.turn_log_count,
            "car_repr": logctx.current_car_repr,
            "engine_id": logctx.engine_id,
        }
        logctx.inc_log_count()
        return msg, kwargs


class RichMarkupFormatter(logging.Formatter):
    @override
    def format(self, record: logging.LogRecord) -> str:
        total_turn = getattr(record, "total_turn", 0)
        turn_log_count = getattr(record, "turn_log_count", 0)
        car_repr = getattr(record, "car_repr", "_")
        engine_id = getattr(record, "engine_id", 0)
        prefix = f"{engine_id} {total_turn}.{car_repr}.{turn_log_count}"

        styled = record.getMessage()
        for pattern, style in KEYWORD_STYLES:
            styled = pattern.sub(rf"[{style}]\1[/{style}]", styled)

        if record.levelno >= logging.WARNING:
            styled = f"[{COLOR['warning']}]{styled}[/{COLOR['warning']}]"

        return f"[{COLOR['prefix']}]{prefix}[/{COLOR['prefix']}]  {styled}"


def get_engine_logger(log_context: LogContext) -> ContextAdapter:
    """Shared engine logger; records carry the given engine's context."""
    return ContextAdapter(logging.getLogger(ENGINE_LOGGER_NAME), log_context)


def configure_logging(level: int = logging.INFO) -> None:
    logger = logging.getLogger()
    logger.setLevel(level)
    handler = RichHandler(markup=True, show_path=False, show_time=False)
    handler.setFormatter(RichMarkupFormatter())
    logger.handlers.clear()
    logger.addHandler(handler)
