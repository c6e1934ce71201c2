"""Logging utilities for Kumiko."""

import logging
from dataclasses import dataclass, field
from pathlib import Path

import structlog

FILE_HANDLER_NAME = "kumiko-file"
CONSOLE_HANDLER_NAME = "kumiko-console"
_HANDLER_NAMES = (FILE_HANDLER_NAME, CONSOLE_HANDLER_NAME)


@dataclass
class ExportStats:
    """Statistics from an export run."""

    groups_exported: int = 0
    pieces_exported: int = 0
    pieces_skipped: int = 0
    notches_cut: int = 0
    separation_cuts: int = 0
    two_pass_strips: int = 0
    warnings: list[tuple[str, str]] = field(default_factory=list)

    @property
    def has_warnings(self) -> bool:
        return bool(self.warnings)


def configure_logging(
    log_file: Path | None = None,
    console_level: str = "INFO",
    file_level: str = "DEBUG",
    quiet: bool = False,
) -> structlog.stdlib.BoundLogger:
    """Configure dual-output structured logging.

    Args:
        log_file: Path to log file (no file output if None)
        console_level: Logging level for console output
        file_level: Logging level for file output
        quiet: If True, suppress console output

    Returns:
        Configured structlog logger
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(logging.DEBUG)

    # Reconfiguring replaces our handlers rather than stacking duplicates
    for handler in list(root_logger.handlers):
        if handler.get_name() in _HANDLER_NAMES:
            root_logger.removeHandler(handler)
            handler.close()

    if log_file is not None:
        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.set_name(FILE_HANDLER_NAME)
        file_handler.setLevel(getattr(logging, file_level.upper()))
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s | %(levelname)-8s | %(name)s | %(message)s")
        )
        root_logger.addHandler(file_handler)

    if not quiet:
        console_handler = logging.StreamHandler()
        console_handler.set_name(CONSOLE_HANDLER_NAME)
        console_handler.setLevel(getattr(logging, console_level.upper()))
        console_handler.setFormatter(logging.Formatter("%(message)s"))
        root_logger.addHandler(console_handler)

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

    logger = structlog.get_logger("kumiko")
    logger.info("Logging initialized", log_file=str(log_file) if log_file else None, level=file_level)

    return logger


class ExportLogger:
    """Logger for tracking export progress and statistics."""

    def __init__(self, logger: structlog.stdlib.BoundLogger | None = None) -> None:
        self._logger = logger or structlog.get_logger("kumiko.export")
        self._stats = ExportStats()

    def log_group_start(self, group_id: str, pieces: int, cuts: int) -> None:
        """Log start of group export."""
        self._logger.debug("Exporting group", group=group_id, pieces=pieces, cuts=cuts)

    def log_group_complete(self, group_id: str) -> None:
        self._stats.groups_exported += 1
        self._logger.info("Group exported", group=group_id)

    def log_piece_exported(self, piece_id: str, strip_id: str, notches: int) -> None:
        """Log a piece written to the document."""
        self._logger.debug("Piece exported", piece=piece_id, strip=strip_id, notches=notches)
        self._stats.pieces_exported += 1
        self._stats.notches_cut += notches

    def log_orphaned_piece(self, group_id: str, piece_id: str, strip_id: str) -> None:
        """Log a piece whose strip no longer exists."""
        self._logger.warning(
            "Skipping orphaned piece",
            group=group_id,
            piece=piece_id,
            strip=strip_id,
        )
        self._stats.pieces_skipped += 1
        self._stats.warnings.append(
            (piece_id, f"piece references missing strip '{strip_id}'")
        )

    def log_two_pass_strip(self, piece_id: str, strip_id: str) -> None:
        """Log a piece whose strip has notches on both faces."""
        self._logger.warning("Strip needs a second pass", piece=piece_id, strip=strip_id)
        self._stats.two_pass_strips += 1
        self._stats.warnings.append(
            (piece_id, f"strip '{strip_id}' has notches on both faces")
        )

    def log_separation_cut(self, cut_id: str) -> None:
        self._logger.debug("Separation cut exported", cut=cut_id)
        self._stats.separation_cuts += 1

    @property
    def stats(self) -> ExportStats:
        """Get current export statistics."""
        return self._stats
