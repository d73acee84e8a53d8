"""Colored query logger — ANSI-colored console logging for datatable queries.

Provides a QueryLogger with color-coded output per query stage, so one
datatable request can be traced in the terminal from scope to page.

Color scheme:
    🟢 Green   — Scope
    🔵 Blue    — Counting
    🟡 Yellow  — Ordered page
    🟣 Magenta — Row details
    🔴 Red     — Errors
    ⚪ Gray    — Timing / Stats
"""

import logging
import time
from contextlib import contextmanager
from typing import Any


# ── ANSI Color Codes ─────────────────────────────────────────────────

class _Colors:
    """ANSI escape codes for terminal colors."""

    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"

    RED = "\033[91m"
    GREEN = "\033[92m"
    YELLOW = "\033[93m"
    BLUE = "\033[94m"
    MAGENTA = "\033[95m"
    GRAY = "\033[90m"


# ── Query Stage Definitions ──────────────────────────────────────────

class QueryStage:
    """Predefined datatable query stages with colors and icons."""

    SCOPE = ("SCOPE", _Colors.GREEN, "🗂️")
    COUNT = ("COUNT", _Colors.BLUE, "🔢")
    PAGE = ("PAGE", _Colors.YELLOW, "📄")
    DETAILS = ("DETAILS", _Colors.MAGENTA, "🔎")


# ── QueryLogger ──────────────────────────────────────────────────────

class QueryLogger:
    """Color-coded logger for datatable query stages.

    Usage:
        log = QueryLogger("VolunteerDatatable")
        with log.timed_step(QueryStage.COUNT, "Counting filtered volunteers", org_id=3):
            filtered = await repository.count_filtered(...)
        log.stats(recordsTotal=8, recordsFiltered=6)
    """

    def __init__(self, component_name: str):
        self._logger = logging.getLogger(component_name)

    @staticmethod
    def _details(**kwargs: Any) -> str:
        if not kwargs:
            return ""
        details = " | ".join(f"{k}={v}" for k, v in kwargs.items())
        return f" {_Colors.GRAY}({details}){_Colors.RESET}"

    def step_start(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the start of a query stage at DEBUG."""
        label, color, icon = stage
        self._logger.debug(
            f"{color}{_Colors.BOLD}{icon} [{label}]{_Colors.RESET} "
            f"{color}{message}{_Colors.RESET}{self._details(**kwargs)}"
        )

    def step_complete(self, stage: tuple[str, str, str], message: str, **kwargs: Any) -> None:
        """Log the successful completion of a query stage at DEBUG."""
        label, color, icon = stage
        self._logger.debug(
            f"{color}{icon} [{label}]{_Colors.RESET} "
            f"{_Colors.GREEN}✓ {message}{_Colors.RESET}{self._details(**kwargs)}"
        )

    def step_error(self, stage: tuple[str, str, str], message: str, error: Exception | None = None) -> None:
        """Log a failed query stage in red."""
        label, _, icon = stage
        formatted = (
            f"{_Colors.RED}{_Colors.BOLD}❌ [{label}]{_Colors.RESET} "
            f"{_Colors.RED}{message}{_Colors.RESET}"
        )
        if error:
            formatted += f" {_Colors.DIM}→ {type(error).__name__}: {error}{_Colors.RESET}"
        self._logger.error(formatted)

    def stats(self, **kwargs: Any) -> None:
        """Log the counts of a finished request."""
        parts = [f"{k}: {v}" for k, v in kwargs.items()]
        self._logger.info(f"   {_Colors.GRAY}📈 {' | '.join(parts)}{_Colors.RESET}")

    @contextmanager
    def timed_step(self, stage: tuple[str, str, str], message: str, **kwargs: Any):
        """Context manager that logs start/end of a stage with elapsed time."""
        self.step_start(stage, message, **kwargs)
        start = time.perf_counter()
        try:
            yield
        except Exception as e:
            elapsed = time.perf_counter() - start
            self.step_error(stage, f"{message} — failed after {elapsed:.3f}s", error=e)
            raise
        else:
            elapsed = time.perf_counter() - start
            self.step_complete(stage, f"{message} — {elapsed:.3f}s", **kwargs)
