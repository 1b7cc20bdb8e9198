"""Utility modules shared by the tools."""

from .concurrency import Settled, settle_all

__all__ = [
    "Settled",
    "settle_all",
]
