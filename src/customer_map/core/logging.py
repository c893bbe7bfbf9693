"""Logging helpers shared across the application."""

from __future__ import annotations

import logging
import sys

from loguru import logger as _loguru_logger
from tqdm.auto import tqdm


class ProgressReporter:
    """Step counter for multi-stage runs, drawn as a tqdm bar."""

    def __init__(self, total_steps: int, label: str = "Progress", *, enabled: bool = True) -> None:
        self.total_steps = max(int(total_steps) if total_steps else 1, 1)
        self.label = label
        self.enabled = enabled
        self._tqdm = None
        self._current = 0
        self._finished = False

    def __enter__(self) -> "ProgressReporter":
        if self.enabled:
            self._tqdm = tqdm(total=self.total_steps, desc=self.label, unit="step", leave=False, dynamic_ncols=True)
        else:
            logger.debug("%s started", self.label)
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc_type is not None:
            self._emit("Failed", error=True)
            if self._tqdm is not None:
                self._tqdm.close()
            return False
        if not self._finished:
            self.finish()
        return False

    def step(self, message: str) -> None:
        self._current = min(self.total_steps, self._current + 1)
        self._emit(message)

    def finish(self, message: str = "Done") -> None:
        if self._finished:
            return
        if self._tqdm is not None:
            remaining = self.total_steps - self._tqdm.n
            if remaining > 0:
                self._tqdm.update(remaining)
            if message:
                self._tqdm.set_postfix_str(message, refresh=False)
            self._tqdm.close()
        else:
            logger.debug("%s complete", self.label)
        self._finished = True

    def _emit(self, message: str, *, error: bool = False) -> None:
        if self._tqdm is not None:
            self._tqdm.update(1)
            if message:
                self._tqdm.set_postfix_str(message, refresh=False)
        else:
            log = logger.error if error else logger.debug
            log("%s (%d/%d) %s", self.label, self._current, self.total_steps, message)


logger = logging.getLogger("customer_map")

_LOG_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
    "<level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - "
    "<level>{message}</level>"
)

_configured = False


class InterceptHandler(logging.Handler):
    """Forward stdlib log records to loguru, keeping the caller's frame."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            level = _loguru_logger.level(record.levelname).name
        except ValueError:
            level = record.levelno
        frame, depth = logging.currentframe(), 2
        while frame and frame.f_code.co_filename == logging.__file__:
            frame = frame.f_back
            depth += 1
        _loguru_logger.opt(depth=depth, exception=record.exc_info).log(level, record.getMessage())


def _add_sink(verbose: bool) -> None:
    _loguru_logger.remove()
    _loguru_logger.add(
        sys.stderr,
        level="DEBUG" if verbose else "INFO",
        format=_LOG_FORMAT,
        colorize=sys.stderr.isatty(),
    )


def configure_logging(verbose: bool = False) -> None:
    """Route project logging through a single loguru stderr sink."""
    global _configured
    _add_sink(verbose)
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if _configured:
        return
    logging.basicConfig(handlers=[InterceptHandler()], level=logging.DEBUG, force=True)
    _configured = True
