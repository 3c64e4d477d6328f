import logging
import sys
from typing import Optional, Union

_logger = logging.getLogger("gpacalc")
if not _logger.handlers:
    _logger.setLevel(logging.WARNING)
    handler = logging.StreamHandler(sys.stdout)
    formatter = logging.Formatter(
        "[%(asctime)s] [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
    handler.setFormatter(formatter)
    _logger.addHandler(handler)


def get_logger(name: Optional[str] = None) -> logging.Logger:
    if name:
        return _logger.getChild(name)
    return _logger


def set_level(level: Union[int, str]) -> None:
    if isinstance(level, str):
        level = level.strip().upper()
    _logger.setLevel(level)
