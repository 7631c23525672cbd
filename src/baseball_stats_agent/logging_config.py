import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

from loguru import logger

DEFAULT_LOG_FILE = "baseball_agent.log"

_CONSOLE_FORMAT = "<level>{level:<8}</level> | <level>{message}</level>"
_FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level:<8} | {name}:{function}:{line} - {message}"


def _add_console(level: str, options: dict[str, Any]) -> str:
    # stderr keeps log lines (executed SQL, retries) out of the chat transcript on stdout
    logger.add(sys.stderr, level=level, format=_CONSOLE_FORMAT)
    return f"console (stderr, {level})"


def _add_file(level: str, options: dict[str, Any]) -> str:
    path = str(options.get("path", DEFAULT_LOG_FILE))
    Path(path).parent.mkdir(parents=True, exist_ok=True)
    logger.add(
        path,
        level=level,
        format=_FILE_FORMAT,
        rotation=options.get("rotation", "5 MB"),
        retention=options.get("retention", 3),
        encoding="utf-8",
    )
    return f"file ({path}, {level})"


_SINKS: dict[str, Callable[[str, dict[str, Any]], str]] = {
    "console": _add_console,
    "file": _add_file,
}

_DEFAULT_CONSUMERS = [
    {"type": "console"},
    {"type": "file", "path": DEFAULT_LOG_FILE},
]


def setup_logging(
    level: str = "INFO",
    consumers: list[dict[str, Any]] | None = None,
) -> list[str]:
    """Replace loguru's default sink with the ``LogConsumers`` from config.

    Each consumer is ``{"type": "console" | "file", "level": ...}``; file
    consumers also take ``path``, ``rotation`` and ``retention``. Returns one
    description per registered sink for the startup banner.
    """
    logger.remove()

    descriptions: list[str] = []
    for consumer in _DEFAULT_CONSUMERS if consumers is None else consumers:
        sink_type = str(consumer.get("type", "")).lower()
        add_sink = _SINKS.get(sink_type)
        if add_sink is None:
            logger.warning(f"Unknown log consumer type: {sink_type!r}")
            continue
        sink_level = str(consumer.get("level", level)).upper()
        descriptions.append(add_sink(sink_level, consumer))

    return descriptions
