#!/usr/bin/env python3
"""
Inspect Packets

Decodes a build's output directory and prints what each packet contains.

Usage:
    inspect-packets <output dir> [--entries] [--tags]

Example:
    inspect-packets ./registries --entries
"""

import sys
import argparse
from pathlib import Path

from .constants import TAG_PACKET_FILENAME
from .parsers import parse_registry_packet, parse_tags_packet


def inspect_directory(output_dir: Path, show_entries: bool = False, show_tags: bool = False) -> int:
    """
    Print a summary of every packet in output_dir.

    Returns:
        Process exit status
    """
    if not output_dir.is_dir():
        print(f"ERROR: Directory not found: {output_dir}")
        return 1

    registry_files = sorted(p for p in output_dir.glob('*.bin') if p.name != TAG_PACKET_FILENAME)
    print(f"Registry packets: {len(registry_files)}")

    for path in registry_files:
        try:
            packet = parse_registry_packet(path.read_bytes())
        except ValueError as e:
            print(f"ERROR: {path.name}: {e}")
            return 1

        print(f"  {packet.registry_id}: {len(packet.entries):,} entries ({path.name})")
        if show_entries:
            for entry_id, entry in enumerate(packet.entries):
                print(f"    [{entry_id}] {entry}")

    tag_path = output_dir / TAG_PACKET_FILENAME
    if not tag_path.exists():
        print(f"No {TAG_PACKET_FILENAME}")
        return 0

    try:
        tags = parse_tags_packet(tag_path.read_bytes())
    except ValueError as e:
        print(f"ERROR: {tag_path.name}: {e}")
        return 1

    print(f"\nTag packet: {len(tags)} registries")
    for registry_name, registry_tags in tags.items():
        print(f"  {registry_name}: {len(registry_tags):,} tags")
        if show_tags:
            for tag_name, ids in registry_tags.items():
                print(f"    {tag_name}: {ids}")

    return 0


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description='Decode registry and tag packets')
    parser.add_argument('output_dir', type=Path, help='Directory written by registry-builder')
    parser.add_argument('--entries', action='store_true', help='List every registry entry with its ID')
    parser.add_argument('--tags', action='store_true', help='List every tag with its IDs')
    args = parser.parse_args(argv)

    return inspect_directory(args.output_dir, show_entries=args.entries, show_tags=args.tags)


if __name__ == '__main__':
    sys.exit(main())
