"""
Resource location helpers.

Registry, entry and tag identifiers are namespaced strings ("minecraft:worldgen/biome").
"""

from pathlib import PurePath
from typing import Optional, Tuple

NAMESPACE_SEPARATOR = ':'


def resource_id(path: str, namespace: str) -> str:
    """
    Identifier for a name taken from the data tree's file layout.

    The namespace is always prepended, even if the path itself contains ':'.
    """
    return f"{namespace}{NAMESPACE_SEPARATOR}{path}"


def namespaced(path: str, namespace: str) -> str:
    """
    Qualify a resource reference read from a tag file.

    Already-qualified names are returned unchanged.

    Example:
        namespaced("fall", "minecraft") -> "minecraft:fall"
        namespaced("mymod:fall", "minecraft") -> "mymod:fall"
    """
    if NAMESPACE_SEPARATOR in path:
        return path
    return f"{namespace}{NAMESPACE_SEPARATOR}{path}"


def safe_filename(registry_id: str, suffix: str = ".bin") -> str:
    """
    Filesystem-safe file name for a registry.

    minecraft:worldgen/biome -> minecraft_worldgen_biome.bin
    """
    return registry_id.replace(NAMESPACE_SEPARATOR, "_").replace("/", "_") + suffix


def relative_text_parts(path: PurePath) -> Optional[Tuple[str, ...]]:
    """
    Path components as UTF-8-safe text.

    Returns None when a component holds undecodable bytes (surrogate escapes
    from the filesystem encoding), since such a name has no resource identity.
    """
    parts = path.parts
    for part in parts:
        try:
            part.encode('utf-8')
        except UnicodeEncodeError:
            return None
    return parts
