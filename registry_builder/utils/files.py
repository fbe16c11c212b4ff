"""
Definition file discovery.

Walks a generated data tree and yields definition files in a stable order.
Directory listing failures are raised, never skipped, so a partially
readable tree aborts the build instead of silently dropping registries.
"""

import os
from pathlib import Path
from typing import Iterator, Optional

from ..constants import DEFINITION_SUFFIX


def _raise_walk_error(error: OSError):
    raise error


def iter_definition_files(root: Path, exclude_segment: Optional[str] = None,
                          suffix: str = DEFINITION_SUFFIX) -> Iterator[Path]:
    """
    Recursively yield definition files under root.

    Args:
        root: Directory to walk
        exclude_segment: Directory name whose subtrees are skipped at any depth
        suffix: File extension to match (case-sensitive)

    Yields:
        Paths relative to root, sorted by directory then file name
    """
    root = Path(root)

    for dirpath, dirnames, filenames in os.walk(root, onerror=_raise_walk_error):
        if exclude_segment is not None and exclude_segment in dirnames:
            dirnames.remove(exclude_segment)
        dirnames.sort()

        current = Path(dirpath)
        for filename in sorted(filenames):
            if not filename.endswith(suffix):
                continue
            path = current / filename
            if path.is_file():
                yield path.relative_to(root)
