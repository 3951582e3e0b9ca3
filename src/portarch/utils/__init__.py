"""Utility functions for portarch.

This module provides size calculation without encoding.
"""

from __future__ import annotations

from .sizing import encoded_size, float_size, header_size, integer_size, value_size

__all__ = [
    "encoded_size",
    "float_size",
    "header_size",
    "integer_size",
    "value_size",
]
