#!/usr/bin/env python3
"""
Config module for build configuration handling.
"""

from .build_config import BuildConfig

__all__ = ['BuildConfig']
