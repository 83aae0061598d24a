"""Structured logging configuration using structlog."""

import logging
import sys

import structlog

from .errors import InvalidArgumentError

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def resolve_level(level: str) -> int:
	"""Map a level name to its stdlib number, rejecting anything outside LOG_LEVELS."""
	name = level.strip().upper() if isinstance(level, str) else level
	if name not in LOG_LEVELS:
		raise InvalidArgumentError(f"log level must be one of {', '.join(LOG_LEVELS)}, got {level!r}")
	return getattr(logging, name)


def configure_logging(json_output: bool = False, level: str = "INFO") -> None:
	"""Route structlog through stdlib logging on stdout.

	Args:
		json_output: JSON lines for log aggregation; otherwise console rendering.
		level: Root log level name, one of LOG_LEVELS.
	"""
	root_level = resolve_level(level)
	shared_processors = [
		structlog.contextvars.merge_contextvars,
		structlog.processors.add_log_level,
		structlog.processors.TimeStamper(fmt="iso"),
		structlog.stdlib.add_logger_name,
	]
	if json_output:
		renderer = structlog.processors.JSONRenderer()
	else:
		renderer = structlog.dev.ConsoleRenderer(colors=False)

	structlog.configure(
		processors=shared_processors + [renderer],
		wrapper_class=structlog.stdlib.BoundLogger,
		context_class=dict,
		logger_factory=structlog.stdlib.LoggerFactory(),
		cache_logger_on_first_use=True,
	)

	root = logging.getLogger()
	root.setLevel(root_level)
	for handler in root.handlers[:]:
		root.removeHandler(handler)
	handler = logging.StreamHandler(sys.stdout)
	handler.setFormatter(logging.Formatter("%(message)s"))
	root.addHandler(handler)
