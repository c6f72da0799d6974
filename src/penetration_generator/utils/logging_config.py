# File: src/penetration_generator/utils/logging_config.py
"""
Logging setup for the wall penetration command.

Modules get their logger through get_logger(), which guarantees the
TRACE level (below DEBUG) and the Logger.trace method exist even when
PenetrationLogger.configure() was never called, e.g. under pytest.

TRACE is reserved for per-hit dumps of the ray queries; a single run over a
large model produces thousands of those lines, so they only reach the log
file when configure(trace_hits=True) is requested.
"""

import logging
import os
import sys
from datetime import datetime
from typing import Iterable, Optional

TRACE_LEVEL = 5

FILE_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
# pyRevit output window already shows the script name
REVIT_CONSOLE_FORMAT = '%(levelname)s: %(message)s'
CONSOLE_FORMAT = '%(name)s - %(levelname)s: %(message)s'


def _install_trace() -> None:
    """Register TRACE and add Logger.trace once per interpreter."""
    if logging.getLevelName(TRACE_LEVEL) != "TRACE":
        logging.addLevelName(TRACE_LEVEL, "TRACE")
    if not hasattr(logging.Logger, 'trace'):
        def trace(self, message, *args, **kwargs):
            if self.isEnabledFor(TRACE_LEVEL):
                self._log(TRACE_LEVEL, message, args, **kwargs)
        logging.Logger.trace = trace


_install_trace()


def log_hits(logger: logging.Logger, label: str, hits: Iterable) -> None:
    """
    Dump ray hits at TRACE level, one line per hit.

    Args:
        logger: Logger of the calling module
        label: Prefix naming the query or stage (e.g. "wall query")
        hits: RayHit objects
    """
    if not logger.isEnabledFor(TRACE_LEVEL):
        return
    for index, hit in enumerate(hits):
        logger.trace(
            "%s #%d: wall %s link %s at %.4f",
            label, index, hit.element_id, hit.link_instance_id, hit.distance
        )


class PenetrationLogger:
    """
    Root logger configuration for the Revit command and the JSON pipeline.

    Output goes to a timestamped UTF-8 file (element and family names are
    often Cyrillic) and to stdout, which pyRevit shows in its output window.
    """

    TRACE_LEVEL = TRACE_LEVEL

    @staticmethod
    def configure(
        debug_mode: bool = False,
        log_dir: str = "logs",
        revit_mode: bool = True,
        trace_hits: bool = False,
    ) -> str:
        """
        Configure the logging system for the entire application.

        Args:
            debug_mode: If True, DEBUG records reach the log file
            log_dir: Directory to store log files
            revit_mode: If True, uses the short console format suited to
                the pyRevit output window
            trace_hits: If True, per-hit TRACE dumps reach the log file

        Returns:
            Path to the created log file
        """
        _install_trace()
        os.makedirs(log_dir, exist_ok=True)

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = os.path.join(log_dir, f"wall_penetrations_{timestamp}.log")

        if trace_hits:
            file_level = TRACE_LEVEL
        elif debug_mode:
            file_level = logging.DEBUG
        else:
            file_level = logging.INFO

        root_logger = logging.getLogger()
        root_logger.setLevel(file_level)
        # Replace handlers from a previous run; log files are closed
        for handler in list(root_logger.handlers):
            root_logger.removeHandler(handler)
            if isinstance(handler, logging.FileHandler):
                handler.close()

        file_handler = logging.FileHandler(log_file, encoding="utf-8")
        file_handler.setFormatter(logging.Formatter(FILE_FORMAT))
        file_handler.setLevel(file_level)
        root_logger.addHandler(file_handler)

        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(logging.Formatter(
            REVIT_CONSOLE_FORMAT if revit_mode else CONSOLE_FORMAT
        ))
        console_handler.setLevel(logging.INFO)
        root_logger.addHandler(console_handler)

        return log_file


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Logger for a module, with trace() available.

    Args:
        name: Logger name, typically __name__
        level: Optional specific level for this logger

    Returns:
        The module logger
    """
    _install_trace()
    logger = logging.getLogger(name)
    if level:
        logger.setLevel(level)
    return logger
