"""Risk-gated authorization engine for automated trade signals."""

from .version import APP_VERSION

__version__ = APP_VERSION
