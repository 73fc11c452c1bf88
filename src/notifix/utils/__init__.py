"""Utility exports for the notifix package."""

from .coerce_count import coerce_count
from .logger import Logger, funclogger, get_logger

__all__ = [
    "Logger",
    "coerce_count",
    "funclogger",
    "get_logger",
]
