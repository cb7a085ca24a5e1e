"""Exchange executor capability and the paper implementation."""

from .base import ExchangeExecutor
from .paper import PaperExchangeExecutor

__all__ = ["ExchangeExecutor", "PaperExchangeExecutor"]
