"""
Session logging for atscore entry points.

One CLI invocation is one session: a timestamped directory under
ATSCORE_LOG_DIR holding a DEBUG log file, plus INFO and above echoed to
stderr so stdout stays clean for JSON output.

Library modules never install sinks; they log through the prefixed
wrappers in contexts/{context}/logger.py.
"""

import os
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from loguru import logger

from atscore import __version__

load_dotenv()

LOG_DIR = Path(os.getenv("ATSCORE_LOG_DIR", "outs/logs"))
ENV_PREFIX = "ATSCORE_"

FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <7} | {message}"
CONSOLE_FORMAT = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <7}</level> | <level>{message}</level>"

LEVEL_COLORS = {
    "WARNING": "<yellow>",
    "ERROR": "<red>",
    "CRITICAL": "<bold><red>",
}


def session_log_dir(command: str, base_dir: Optional[Path] = None, now: Optional[datetime] = None) -> Path:
    """
    Directory for one CLI session: {base_dir}/{command}_{YYYYmmdd_HHMMSS}.

    Example:
        >>> session_log_dir("analyze", Path("logs"), datetime(2025, 1, 2, 3, 4, 5))
        PosixPath('logs/analyze_20250102_030405')
    """
    stamp = (now or datetime.now()).strftime("%Y%m%d_%H%M%S")
    return (base_dir or LOG_DIR) / f"{command}_{stamp}"


def environment_settings() -> dict[str, str]:
    """ATSCORE_* variables currently set, sorted by name."""
    return {key: value for key, value in sorted(os.environ.items()) if key.startswith(ENV_PREFIX)}


def setup_logger(
    context_name: str,
    log_dir: Path,
    extra_provenance: dict = None,
    verbose: bool = False,
) -> Path:
    """
    Install the file and stderr sinks for a session and write its header.

    Args:
        context_name: Command name; also the log file stem
        log_dir: Session directory, created if missing
        extra_provenance: Command inputs to record (file names, options)
        verbose: Echo DEBUG records to stderr as well

    Returns:
        Path to the session log file
    """
    log_dir.mkdir(exist_ok=True, parents=True)
    log_file = log_dir / f"{context_name}.log"

    logger.remove()
    for level_name, color in LEVEL_COLORS.items():
        logger.level(level_name, color=color)

    logger.add(log_file, format=FILE_FORMAT, level="DEBUG")
    logger.add(sys.stderr, format=CONSOLE_FORMAT, level="DEBUG" if verbose else "INFO", colorize=True)

    log_provenance(context_name, extra_provenance)
    return log_file


def log_provenance(context_name: str, extra_context: dict = None) -> None:
    """
    Record who ran what: atscore version, command line, cwd, interpreter,
    ATSCORE_* overrides and the command's own inputs. DEBUG only, so the
    header lands in the log file but not on the console.
    """
    lines = [
        f"atscore {__version__}: {context_name}",
        f"Command: {' '.join(sys.argv)}",
        f"Working directory: {Path.cwd()}",
        f"Python: {sys.version.split()[0]}",
    ]
    lines += [f"{key}={value}" for key, value in environment_settings().items()]
    lines += [f"{key}: {value}" for key, value in (extra_context or {}).items()]

    logger.debug("-" * 60)
    for line in lines:
        logger.debug(line)
    logger.debug("-" * 60)
