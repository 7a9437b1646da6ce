"""Loguru sinks for the scheduler command line.

The console gets short, colored lines meant for someone running a command.
The optional log file keeps timestamps and call sites so a run can be traced
afterwards.
"""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str = "INFO",
    log_file: Optional[str] = None,
    rotation: str = "1 week",
    retention: int = 4,
) -> list[int]:
    """Replace loguru's default sink with the scheduler's sinks.

    Safe to call more than once; earlier sinks are dropped first.

    Args:
        level: Minimum level written to every sink.
        log_file: Append to this file as well. Parent folders are created.
        rotation: When to start a new file (size, age or time of day).
        retention: How many rotated files to keep.

    Returns:
        Ids of the sinks that were added, console first.
    """
    logger.remove()
    sink_ids = [logger.add(sys.stderr, format=CONSOLE_FORMAT, level=level, colorize=True)]

    if log_file:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        sink_ids.append(
            logger.add(
                path,
                format=FILE_FORMAT,
                level=level,
                rotation=rotation,
                retention=retention,
                encoding="utf-8",
            )
        )

    logger.debug(f"Logging at {level} to {len(sink_ids)} sink(s)")
    return sink_ids
