#!/usr/bin/env python3
"""
Build Registries

Master build script for compiling registry and tag packets from a server's
generated data.

Pipeline:
1. Verify environment (server archive, Java)
2. Run the data generator (skipped if the archive is unchanged)
3. Scan the registry definitions and assign IDs
4. Recreate the output directory and write one <registry>.bin per registry
5. Compile the tag packet (packet_tags.bin) from the registry ID mapping

Usage:
    registry-builder --server-jar ./server.jar --output ./registries
    registry-builder --input ./temp_data/generated/data/minecraft
"""

import sys
import argparse
import shutil
import time
from pathlib import Path
from typing import Optional

from .config import BuildConfig
from .constants import TAG_DIRECTORY
from .generation import DataGenerator, GenerationCache, verify_environment
from .registries import RegistryMap, assign_ids, scan_registries, write_registry_packets
from .serialization import TagTable
from .tags import compile_tags
from .utils import log, logError, init_logging, print_summary, get_log_path


class RegistryBuilder:
    """
    Orchestrates the full registry build process
    """

    def __init__(self, config: BuildConfig, input_path: Optional[Path] = None):
        """
        Initialize builder

        Args:
            config: Build configuration
            input_path: Existing generated data tree. When given, the
                environment checks and the data generator are skipped.
        """
        self.config = config
        self.input_path = Path(input_path) if input_path is not None else None
        self.registry_map: RegistryMap = {}
        self.tags: TagTable = {}

    def build_all(self, force_generation: bool = False) -> bool:
        """
        Run the complete build.

        Args:
            force_generation: Run the data generator even if the cache is current

        Returns:
            True on success. Failures raise.
        """
        log("=" * 70)
        log("REGISTRY BUILDER")
        log("=" * 70)
        log(f"Server archive: {self.config.server_archive_path}")
        log(f"Work directory: {self.config.work_directory}")
        log(f"Output directory: {self.config.output_directory}")
        log()

        start_time = time.time()

        log("\n" + "=" * 70)
        log("STEP 1: Generating Data")
        log("=" * 70)
        input_root = self._resolve_input(force_generation)
        log(f"  Input: {input_root}")

        log("\n" + "=" * 70)
        log("STEP 2: Compiling Registry Packets")
        log("=" * 70)
        # Scan into memory before the output directory is cleared
        scan = scan_registries(input_root, self.config.namespace)
        self.registry_map = assign_ids(scan.registries)
        log(f"  Definition files: {scan.files_scanned:,} ({scan.files_skipped} skipped)")
        log(f"  Registries: {len(self.registry_map)}")
        log(f"  Entries: {scan.entry_count:,}")

        output_dir = self.prepare_output_directory(input_root)
        write_registry_packets(self.registry_map, output_dir)

        log("\n" + "=" * 70)
        log("STEP 3: Compiling Tag Packet")
        log("=" * 70)
        self.tags = compile_tags(input_root / TAG_DIRECTORY, self.registry_map, output_dir,
                                 self.config.namespace)

        elapsed = time.time() - start_time
        log("\n" + "=" * 70)
        log(f"BUILD COMPLETE in {elapsed:.1f} seconds")
        log(f"Registry packets are ready in '{output_dir}'")
        log(f"Build log: {get_log_path()}")
        log("=" * 70)

        print_summary({
            "Registries": len(self.registry_map),
            "Entries": sum(len(entries) for entries in self.registry_map.values()),
            "Tags": sum(len(registry_tags) for registry_tags in self.tags.values()),
        })

        return True

    def _resolve_input(self, force_generation: bool) -> Path:
        """
        Locate the generated data tree, running the generator if needed.

        Raises:
            FileNotFoundError: Server archive or generated data missing
            GeneratorError: Java unusable or generator failed
        """
        if self.input_path is not None:
            log("  Using existing data tree, generator skipped")
            if not self.input_path.is_dir():
                raise FileNotFoundError(f"Input data tree not found: {self.input_path}")
            return self.input_path

        verify_environment(self.config)

        data_path = self.config.generated_data_path
        cache = GenerationCache(self.config.work_directory)

        if force_generation:
            needs_generation, reason = True, "forced"
        else:
            needs_generation, reason = cache.needs_generation(
                self.config.server_archive_path, self.config.namespace, data_path
            )

        if needs_generation:
            log(f"  Generating: {reason}")
            DataGenerator(self.config).generate()
            cache.update(self.config.server_archive_path, self.config.namespace)
        else:
            log(f"  Generated data up to date: {data_path}")

        if not data_path.is_dir():
            raise FileNotFoundError(f"Data generation failed. Could not find {data_path}")

        return data_path

    def prepare_output_directory(self, input_root: Optional[Path] = None) -> Path:
        """
        Clear and recreate the output directory.

        Raises:
            ValueError: The output directory is, or contains, the input tree
        """
        output_dir = self.config.output_directory
        if input_root is not None:
            resolved_output = output_dir.resolve()
            resolved_input = Path(input_root).resolve()
            if resolved_input == resolved_output or resolved_output in resolved_input.parents:
                raise ValueError(f"Output directory {output_dir} contains the input tree {input_root}")
        if output_dir.exists():
            shutil.rmtree(output_dir)
        output_dir.mkdir(parents=True)
        return output_dir


def load_config(args: argparse.Namespace) -> BuildConfig:
    """Defaults, then the INI file (if any), then command-line flags."""
    config = BuildConfig.from_ini(Path(args.config)) if args.config else BuildConfig()
    return config.with_overrides(
        server_archive_path=args.server_jar,
        work_directory=args.work_dir,
        output_directory=args.output,
        java_executable=args.java,
        namespace=args.namespace,
        generator_timeout=args.timeout,
        log_path=args.log,
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Build registry and tag packets from server-generated data',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Example:
    registry-builder --server-jar ./server.jar --output ./registries

    # With a config file:
    registry-builder --config build.ini

    # Compile an already generated tree (no Java needed):
    registry-builder --input ./temp_data/generated/data/minecraft

    # Regenerate even if server.jar is unchanged:
    registry-builder --force

Config file format:
    [build]
    server_archive = ./server.jar
    work_directory = ./temp_data
    output_directory = ./registries
        """
    )

    parser.add_argument('--config', default=None,
                        help='Path to an INI file with a [build] section')
    parser.add_argument('--server-jar', type=Path, default=None,
                        help='Server archive containing the data generator (default: ./server.jar)')
    parser.add_argument('--work-dir', type=Path, default=None,
                        help='Generator working directory (default: ./temp_data)')
    parser.add_argument('--output', type=Path, default=None,
                        help='Output directory for packets (default: ./registries)')
    parser.add_argument('--input', type=Path, default=None,
                        help='Use an existing generated data tree instead of running the generator')
    parser.add_argument('--namespace', default=None,
                        help='Namespace of registries and entries (default: minecraft)')
    parser.add_argument('--java', default=None,
                        help='Java executable (default: java)')
    parser.add_argument('--timeout', type=float, default=None,
                        help='Seconds to wait for the data generator')
    parser.add_argument('--log', type=Path, default=None,
                        help='Build log path (default: ./build.log)')
    parser.add_argument('--force', action='store_true',
                        help='Run the data generator even if the server archive is unchanged')
    parser.add_argument('--verbose', action='store_true',
                        help='Show debug messages on the console')
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    try:
        config = load_config(args)
    except (OSError, ValueError) as e:
        init_logging(args.log, verbose=args.verbose)
        logError(f"{e}")
        return 1

    init_logging(config.log_path, verbose=args.verbose)

    try:
        builder = RegistryBuilder(config, input_path=args.input)
        builder.build_all(force_generation=args.force)
    except Exception as e:
        logError(f"{e}")
        import traceback
        traceback.print_exc()
        return 1

    return 0


if __name__ == '__main__':
    sys.exit(main())
