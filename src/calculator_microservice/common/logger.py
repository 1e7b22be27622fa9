"""Logger factory writing to the console, a combined log and an error-only log."""
import logging
from pathlib import Path
import sys
from typing import Union

SERVICE_NAME = "calculator-microservice"

FILE_FORMAT = "%(asctime)s [%(levelname)s] %(service)s: %(message)s"
CONSOLE_FORMAT = "%(levelname)s: %(message)s"


class _ServiceFilter(logging.Filter):
    """Stamp every record with the service name."""

    def __init__(self, service: str):
        super().__init__()
        self.service = service

    def filter(self, record: logging.LogRecord) -> bool:
        record.service = self.service
        return True


def create_logger(
    log_dir: Union[str, Path] = "logs",
    level: Union[int, str] = logging.INFO,
    name: str = SERVICE_NAME,
) -> logging.Logger:
    """
    Build the service logger.

    Handlers:
        - console stream (stderr), every level
        - ``<log_dir>/combined.log``, every level, append mode
        - ``<log_dir>/error.log``, error level only, append mode

    Each call returns a new logger outside the ``logging`` registry, so two
    applications never share handlers. Release it with ``close_logger``.

    :param log_dir: Directory holding the log files, created when missing
    :param level: Minimum level recorded
    :param str name: Logger name, also stamped on each record as the service

    :return: Configured logger
    :rtype: logging.Logger
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)

    logger = logging.Logger(name, level)

    service_filter = _ServiceFilter(name)

    console = logging.StreamHandler(sys.stderr)
    console.setFormatter(logging.Formatter(CONSOLE_FORMAT))

    combined = logging.FileHandler(log_path / "combined.log", mode="a", encoding="utf-8")
    combined.setFormatter(logging.Formatter(FILE_FORMAT))

    errors = logging.FileHandler(log_path / "error.log", mode="a", encoding="utf-8")
    errors.setLevel(logging.ERROR)
    errors.setFormatter(logging.Formatter(FILE_FORMAT))

    for handler in (console, combined, errors):
        handler.addFilter(service_filter)
        logger.addHandler(handler)

    return logger


def close_logger(logger: logging.Logger) -> None:
    """Detach and close every handler of ``logger``."""
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
