import logging
import sys
import time
from pathlib import Path
from typing import Optional
from datetime import datetime

# Default log directory
DEFAULT_LOG_DIR = Path("var/log")


def get_log_file_path(
        module_name: str,
        log_dir: Optional[Path] = None,
        include_timestamp: bool = True
) -> Path:
    """
    Generates a standardized file path for a log file.

    Parameters
    ----------
    module_name : str
        The name of the module or logger (e.g., "affinity_chain.folding").
    log_dir : Optional[Path], optional
        The directory where the log file will be saved. Defaults to `DEFAULT_LOG_DIR`.
    include_timestamp : bool, optional
        If True, a timestamp is added to the filename to prevent overwrites,
        by default True.

    Returns
    -------
    Path
        The full `pathlib.Path` object for the generated log file.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    log_dir.mkdir(parents=True, exist_ok=True)

    # Dots are legal in filenames but make rotated logs harder to glob.
    safe_name = module_name.replace(".", "_")

    if include_timestamp:
        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        filename = f"{safe_name}_{timestamp}.log"
    else:
        filename = f"{safe_name}.log"

    return log_dir / filename


def setup_logger(
    name: str,
    level: int = logging.INFO,
    log_file: Optional[str] = None,
    log_dir: Optional[Path] = None,
    enable_file_logging: bool = True,
    console_level: Optional[int] = None,
    file_level: Optional[int] = None,
) -> logging.Logger:
    """
    Configures and returns a logger with console and optional file handlers.

    The console handler writes to stderr so that stdout only carries the
    computed result. Existing handlers are cleared first, which makes the
    function safe to call repeatedly for the same logger.

    Parameters
    ----------
    name : str
        The name of the logger, typically `__name__`.
    level : int, optional
        The base logging level for the logger and its handlers, by default `logging.INFO`.
    log_file : Optional[str], optional
        A specific path for the log file. If provided, it overrides the
        automatic path generation.
    log_dir : Optional[Path], optional
        The directory to store the log file if `log_file` is not provided.
        Defaults to `DEFAULT_LOG_DIR`.
    enable_file_logging : bool, optional
        If True and `log_file` is not specified, a default timestamped log file
        will be created. By default True.
    console_level : Optional[int], optional
        An override for the logging level of the console handler.
    file_level : Optional[int], optional
        An override for the logging level of the file handler.

    Returns
    -------
    logging.Logger
        The configured logger instance.
    """
    logger = logging.getLogger(name)
    logger.setLevel(level)
    if logger.hasHandlers():
        logger.handlers.clear()

    formatter = logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s',
                                  datefmt='%Y-%m-%d %H:%M:%S')

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(formatter)
    console_handler.setLevel(console_level if console_level is not None else level)
    logger.addHandler(console_handler)

    file_handler = None
    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_path, mode='a')
    elif enable_file_logging:
        log_path = get_log_file_path(name, log_dir=log_dir, include_timestamp=True)
        file_handler = logging.FileHandler(log_path, mode='a')
        logger.info(f"Logging to file: {log_path}")

    if file_handler:
        file_handler.setFormatter(formatter)
        file_handler.setLevel(file_level if file_level is not None else level)
        logger.addHandler(file_handler)

    return logger


def set_log_level(logger: logging.Logger, level: int) -> None:
    """
    Dynamically updates the logging level for a logger and all its handlers.
    """
    logger.setLevel(level)
    for handler in logger.handlers:
        handler.setLevel(level)


def cleanup_old_logs(log_dir: Optional[Path] = None, days_to_keep: int = 7) -> int:
    """
    Removes `.log` files older than `days_to_keep` days from `log_dir`.

    Returns
    -------
    int
        The number of files removed.
    """
    if log_dir is None:
        log_dir = DEFAULT_LOG_DIR

    if not log_dir.exists():
        return 0

    cutoff_time = time.time() - (days_to_keep * 86400)

    removed = 0
    for log_file in log_dir.glob("*.log"):
        if log_file.stat().st_mtime < cutoff_time:
            log_file.unlink()
            logging.getLogger(__name__).info(f"Removed old log: {log_file}")
            removed += 1
    return removed
