"""
Package logger.

The library only emits records (mostly DEBUG traces of matching and dispatch);
configuring handlers and levels is left to the host application.
"""
import logging

logger = logging.getLogger("argot")
logger.addHandler(logging.NullHandler())

__all__ = ("logger",)
