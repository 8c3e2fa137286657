"""
Benchmark modules for serialization testing.

Each submodule focuses on a specific benchmark category.
"""

from . import serialization

__all__ = [
    "serialization",
]
