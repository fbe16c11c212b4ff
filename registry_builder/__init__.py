"""
Registry Builder

Compiles a server's generated data tree into registry and tag packet bodies.
"""

__version__ = "0.1.0"

from .config import BuildConfig
from .registries import RegistryMap, compile_registries
from .tags import compile_tags
