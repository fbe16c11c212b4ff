"""
Registries Package

Scans registry definitions and writes registry packets.
"""

from .registry_compiler import (
    RegistryMap,
    RegistryScan,
    registry_identity,
    scan_registries,
    assign_ids,
    write_registry_packets,
    compile_registries,
)
