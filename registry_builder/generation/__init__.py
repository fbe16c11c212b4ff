"""
Generation Package

Runs the server's data generator and tracks when its output is current.
"""

from .data_generator import DataGenerator, GeneratorError, verify_environment
from .generation_cache import GenerationCache, GenerationRecord
