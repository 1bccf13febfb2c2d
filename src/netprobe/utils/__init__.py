"""
Utility functions and classes for netprobe.
"""

from .config import load_config, set_seed
from .metrics import MetricsTracker

__all__ = [
    "load_config",
    "set_seed",
    "MetricsTracker",
]
