"""Logging utilities for penpath."""

import logging
from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

import structlog


@dataclass
class EditStats:
    """Statistics from a pen tool session."""

    event_count: int = 0
    points_created: int = 0
    points_deleted: int = 0
    points_inserted: int = 0
    curves_completed: int = 0
    curves_closed: int = 0
    curves_cancelled: int = 0
    rejected_count: int = 0
    rejections: list[tuple[str, str]] = field(default_factory=list)
    start_time: float | None = None
    end_time: float | None = None

    @property
    def duration_seconds(self) -> float:
        """Calculate session duration."""
        if self.start_time and self.end_time:
            return self.end_time - self.start_time
        return 0.0

    def to_dict(self) -> dict[str, int | float]:
        return {
            "events": self.event_count,
            "points_created": self.points_created,
            "points_deleted": self.points_deleted,
            "points_inserted": self.points_inserted,
            "curves_completed": self.curves_completed,
            "curves_closed": self.curves_closed,
            "curves_cancelled": self.curves_cancelled,
            "rejected": self.rejected_count,
        }


_installed_handlers: list[logging.Handler] = []


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "WARNING",
    file_level: str = "DEBUG",
    quiet: bool = False,
    write_file: bool = True,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Calling this again replaces the handlers installed by the previous call.

    Args:
        log_file: Path to log file (auto-generated if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output
        write_file: If False, only the console handler is installed

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    for handler in _installed_handlers:
        root_logger.removeHandler(handler)
        handler.close()
    _installed_handlers.clear()

    if write_file:
        if log_file is None:
            timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
            log_file = Path(f"penpath_{timestamp}.log")
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        _installed_handlers.append(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        _installed_handlers.append(console_handler)

    root_logger.setLevel(logging.DEBUG)
    for handler in _installed_handlers:
        root_logger.addHandler(handler)

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logger = structlog.get_logger("penpath")
    logger.info("Logging initialized", log_file=str(log_file) if write_file else None, level=file_level)

    return logger


class EditLogger:
    """Logger for tracking pen tool activity and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger) -> None:
        self._logger = logger
        self._stats = EditStats()

    def log_event(self, event_type: str, state_before: str, state_after: str) -> None:
        """Log one dispatched event."""
        self._stats.event_count += 1
        if state_before != state_after:
            self._logger.debug(
                "State changed",
                event_type=event_type,
                before=state_before,
                after=state_after,
            )

    def log_points_created(self, shape_id: str, count: int) -> None:
        """Log points placed while drawing."""
        self._logger.debug("Points placed", shape=shape_id, count=count)
        self._stats.points_created += count

    def log_curve_finished(self, shape_id: str, closed: bool, point_count: int) -> None:
        """Log a committed curve."""
        self._logger.info(
            "Curve closed" if closed else "Curve completed",
            shape=shape_id,
            points=point_count,
        )
        if closed:
            self._stats.curves_closed += 1
        else:
            self._stats.curves_completed += 1

    def log_curve_cancelled(self, shape_id: str, reason: str) -> None:
        """Log a discarded curve."""
        self._logger.info("Curve discarded", shape=shape_id, reason=reason)
        self._stats.curves_cancelled += 1

    def log_points_deleted(self, shape_id: str, count: int) -> None:
        """Log deleted points."""
        self._logger.debug("Points deleted", shape=shape_id, count=count)
        self._stats.points_deleted += count

    def log_points_inserted(self, shape_id: str, count: int) -> None:
        """Log points inserted on segments."""
        self._logger.debug("Points inserted", shape=shape_id, count=count)
        self._stats.points_inserted += count

    def log_rejected(self, operation: str, reason: str) -> None:
        """Log an operation refused to protect a path invariant."""
        self._logger.debug("Operation rejected", operation=operation, reason=reason)
        self._stats.rejected_count += 1
        self._stats.rejections.append((operation, reason))

    @property
    def stats(self) -> EditStats:
        """Get current session statistics."""
        return self._stats
