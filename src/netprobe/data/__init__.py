"""
Dataset utilities for netprobe.
"""

from .datasets import create_datasets, generate_dataset, to_points

__all__ = ["create_datasets", "generate_dataset", "to_points"]
