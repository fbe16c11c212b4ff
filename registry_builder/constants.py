"""
Constants used across the builder modules.

Consolidates directory names, file names and packet markers shared by the
registry and tag compilers.
"""

# Subtree of the generated data holding tag definitions
TAG_DIRECTORY = "tags"

# Extension of registry and tag definition files
DEFINITION_SUFFIX = ".json"

# Combined tag packet written next to the registry packets
TAG_PACKET_FILENAME = "packet_tags.bin"

# Prefix of a tag value that references another tag instead of an entry
INDIRECT_REFERENCE_MARKER = "#"

# Per-entry "has data" flag in registry packets (always false)
NO_ENTRY_DATA = 0x00

# Data generator entry point inside the bundled server archive
DATA_GENERATOR_MAIN_CLASS = "net.minecraft.data.Main"

# Generator output, relative to the work directory
GENERATED_DATA_DIRECTORY = "generated/data"
