#!/usr/bin/env python3
"""
Generation Cache

Tracks which server archive produced the current generated data so an
unchanged archive does not pay for another generator run.
Uses a SHA256 hash of the archive, stored in <work>/.generator_deps.json.
"""

import json
import hashlib
import time
from dataclasses import dataclass, asdict
from pathlib import Path
from typing import Optional, Tuple

from ..utils import logWarning

CACHE_FILENAME = ".generator_deps.json"


@dataclass
class GenerationRecord:
    """Archive that produced the generated tree"""
    archive_path: str
    archive_hash: str
    namespace: str
    timestamp: float  # Unix timestamp of generation

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> 'GenerationRecord':
        return cls(**data)


class GenerationCache:
    """
    Decide whether the data generator has to run again.
    """

    def __init__(self, work_dir: Path):
        """
        Args:
            work_dir: Generator work directory
        """
        self.work_dir = Path(work_dir)
        self.cache_file = self.work_dir / CACHE_FILENAME
        self.record: Optional[GenerationRecord] = self._load()

    def _load(self) -> Optional[GenerationRecord]:
        if not self.cache_file.exists():
            return None

        try:
            with open(self.cache_file, 'r', encoding='utf-8') as f:
                return GenerationRecord.from_dict(json.load(f))
        except (ValueError, TypeError) as e:
            logWarning(f"Ignoring unreadable generator cache {self.cache_file}: {e}")
            return None

    @staticmethod
    def hash_file(filepath: Path) -> str:
        """
        Calculate SHA256 hash of a file

        Args:
            filepath: Path to file

        Returns:
            Hex string of SHA256 hash
        """
        sha256 = hashlib.sha256()
        with open(filepath, 'rb') as f:
            while chunk := f.read(1 << 16):
                sha256.update(chunk)
        return sha256.hexdigest()

    def needs_generation(self, archive_path: Path, namespace: str, data_path: Path) -> Tuple[bool, str]:
        """
        Check whether generated data is missing or stale.

        Args:
            archive_path: Server archive
            namespace: Namespace the build reads
            data_path: Expected generated tree

        Returns:
            (needs_generation, reason)
        """
        if not data_path.is_dir():
            return True, "no generated data"

        if self.record is None:
            return True, "no generation record"

        if self.record.namespace != namespace:
            return True, "namespace changed"

        if self.hash_file(archive_path) != self.record.archive_hash:
            return True, "server archive changed"

        return False, "up to date"

    def update(self, archive_path: Path, namespace: str):
        """
        Record a successful generation.

        Args:
            archive_path: Server archive that was run
            namespace: Namespace the build reads
        """
        self.record = GenerationRecord(
            archive_path=str(Path(archive_path).resolve()),
            archive_hash=self.hash_file(archive_path),
            namespace=namespace,
            timestamp=time.time(),
        )

        self.work_dir.mkdir(parents=True, exist_ok=True)
        with open(self.cache_file, 'w', encoding='utf-8') as f:
            json.dump(self.record.to_dict(), f, indent=2)
