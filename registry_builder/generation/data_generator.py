#!/usr/bin/env python3
"""
Data Generator

Runs the server archive's built-in data generator to produce the JSON tree
the compilers consume:

    java -DbundlerMainClass=net.minecraft.data.Main -jar server.jar --all

The generator runs inside the work directory, so its output lands in
<work>/generated/data/<namespace>.
"""

import shutil
import subprocess
from pathlib import Path
from typing import List, Optional

from ..config import BuildConfig
from ..constants import DATA_GENERATOR_MAIN_CLASS
from ..utils import log, logDebug


class GeneratorError(RuntimeError):
    """The Java runtime is unusable or the data generator failed."""

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr

    def __str__(self) -> str:
        message = super().__str__()
        if self.stderr.strip():
            return f"{message}\n{self.stderr.rstrip()}"
        return message


def verify_environment(config: BuildConfig):
    """
    Check that the server archive exists and Java can be started.

    Raises:
        FileNotFoundError: Server archive missing
        GeneratorError: Java not installed or not on PATH
    """
    if not config.server_archive_path.is_file():
        raise FileNotFoundError(
            f"Could not find '{config.server_archive_path}'. "
            f"Place the server jar there or pass --server-jar."
        )

    try:
        subprocess.run(
            [config.java_executable, "-version"],
            stdout=subprocess.DEVNULL,
            stderr=subprocess.DEVNULL,
            check=False,
        )
    except OSError as e:
        raise GeneratorError(f"Java is not installed or not in your PATH ({config.java_executable}): {e}") from e


class DataGenerator:
    """
    Runs the external data generator into a clean work directory.
    """

    def __init__(self, config: BuildConfig):
        """
        Args:
            config: Build configuration (archive, work directory, java, timeout)
        """
        self.config = config

    def command(self) -> List[str]:
        """Generator command line. The archive path is absolute since cwd changes."""
        archive = self.config.server_archive_path.resolve()
        return [
            self.config.java_executable,
            f"-DbundlerMainClass={DATA_GENERATOR_MAIN_CLASS}",
            "-jar",
            str(archive),
            "--all",
        ]

    def prepare_work_directory(self):
        """Delete and recreate the work directory."""
        work_dir = self.config.work_directory
        if work_dir.exists():
            shutil.rmtree(work_dir)
        work_dir.mkdir(parents=True)

    def generate(self) -> Path:
        """
        Run the generator and wait for it to finish.

        Returns:
            Root of the generated JSON tree for the configured namespace

        Raises:
            GeneratorError: Non-zero exit status, timeout, or Java could not start
        """
        self.prepare_work_directory()

        command = self.command()
        log("  Running Java data generator... (this may take a moment)")
        logDebug(f"Command: {' '.join(command)}")
        logDebug(f"Working directory: {self.config.work_directory}")

        try:
            result = subprocess.run(
                command,
                cwd=self.config.work_directory,
                stdout=subprocess.PIPE,
                stderr=subprocess.PIPE,
                text=True,
                errors='replace',
                timeout=self.config.generator_timeout,
                check=False,
            )
        except subprocess.TimeoutExpired as e:
            stderr = e.stderr.decode('utf-8', 'replace') if isinstance(e.stderr, bytes) else (e.stderr or "")
            raise GeneratorError(
                f"Data generator timed out after {self.config.generator_timeout:g} seconds",
                stderr=stderr,
            ) from e
        except OSError as e:
            raise GeneratorError(f"Failed to execute Java command: {e}") from e

        for line in result.stdout.splitlines():
            logDebug(f"[generator] {line}")

        if result.returncode != 0:
            raise GeneratorError(
                f"Java process exited with error code: {result.returncode}",
                returncode=result.returncode,
                stderr=result.stderr,
            )

        return self.config.generated_data_path
