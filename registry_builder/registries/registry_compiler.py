#!/usr/bin/env python3
"""
Registry Compiler

Scans the generated data tree and writes one registry packet per registry.

Path structure of a registry definition:
    <root>/damage_type/fall.json          -> minecraft:damage_type / minecraft:fall
    <root>/worldgen/biome/plains.json     -> minecraft:worldgen/biome / minecraft:plains

Entry IDs are the entry's rank in the registry's sorted entry list. They are
consistent within one build only; nothing ties them to the game's own IDs.
"""

from dataclasses import dataclass, field
from pathlib import Path, PurePath
from typing import Dict, List, Optional, Set, Tuple

from ..constants import TAG_DIRECTORY, DEFINITION_SUFFIX
from ..serialization import build_registry_packet
from ..utils import (
    log, logDebug, resource_id, safe_filename, relative_text_parts, iter_definition_files,
)

# registry -> entry -> ID
RegistryMap = Dict[str, Dict[str, int]]


@dataclass
class RegistryScan:
    """Registries discovered in a data tree"""
    registries: Dict[str, Set[str]] = field(default_factory=dict)
    files_scanned: int = 0
    files_skipped: int = 0

    @property
    def entry_count(self) -> int:
        return sum(len(entries) for entries in self.registries.values())


def registry_identity(relative_path: PurePath, namespace: str) -> Optional[Tuple[str, str]]:
    """
    Derive (registry_id, entry_id) from a definition file path.

    Args:
        relative_path: File path relative to the data root
        namespace: Namespace applied to registry and entry names

    Returns:
        Tuple of namespaced names, or None if the path has no registry identity
        (file at the tree root, undecodable name, empty file stem)
    """
    parts = relative_text_parts(relative_path)
    if parts is None or len(parts) < 2:
        return None

    filename = parts[-1]
    entry_name = filename[:-len(DEFINITION_SUFFIX)] if filename.endswith(DEFINITION_SUFFIX) else filename
    if not entry_name:
        return None

    registry_path = "/".join(parts[:-1])
    return resource_id(registry_path, namespace), resource_id(entry_name, namespace)


def scan_registries(input_root: Path, namespace: str) -> RegistryScan:
    """
    Collect registry entries from every definition file outside the tag subtree.

    Args:
        input_root: Root of the generated data tree
        namespace: Namespace for registry and entry names

    Returns:
        RegistryScan with deduplicated entry sets
    """
    scan = RegistryScan()

    for relative_path in iter_definition_files(input_root, exclude_segment=TAG_DIRECTORY):
        scan.files_scanned += 1

        identity = registry_identity(relative_path, namespace)
        if identity is None:
            scan.files_skipped += 1
            logDebug(f"No registry identity for {relative_path!r}, skipped")
            continue

        registry_id, entry_id = identity
        scan.registries.setdefault(registry_id, set()).add(entry_id)

    return scan


def assign_ids(registries: Dict[str, Set[str]]) -> RegistryMap:
    """
    Assign each entry its rank in sorted order.

    Returns:
        registry -> entry -> ID, registries and entries in sorted order
    """
    return {
        registry_id: {entry_id: index for index, entry_id in enumerate(sorted(registries[registry_id]))}
        for registry_id in sorted(registries)
    }


def write_registry_packets(registry_map: RegistryMap, output_dir: Path) -> List[Path]:
    """
    Write one packet per registry.

    Args:
        registry_map: Mapping from assign_ids (entries iterate in ID order)
        output_dir: Existing output directory

    Returns:
        Written file paths, in registry order
    """
    written = []

    for registry_id, entries in registry_map.items():
        packet = build_registry_packet(registry_id, entries)
        output_path = Path(output_dir) / safe_filename(registry_id)
        output_path.write_bytes(packet)
        logDebug(f"{registry_id}: {len(entries)} entries -> {output_path.name} ({len(packet)} bytes)")
        written.append(output_path)

    return written


def compile_registries(input_root: Path, output_dir: Path, namespace: str = "minecraft") -> RegistryMap:
    """
    Scan the data tree, write registry packets, and return the ID mapping.

    Args:
        input_root: Root of the generated data tree
        output_dir: Existing output directory
        namespace: Namespace for registry and entry names

    Returns:
        registry -> entry -> ID, consumed by the tag compiler
    """
    scan = scan_registries(Path(input_root), namespace)
    registry_map = assign_ids(scan.registries)

    log(f"  Definition files: {scan.files_scanned:,} ({scan.files_skipped} skipped)")
    log(f"  Registries: {len(registry_map)}")
    log(f"  Entries: {scan.entry_count:,}")

    write_registry_packets(registry_map, Path(output_dir))

    return registry_map
