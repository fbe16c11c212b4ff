"""Tests for generation/: environment checks, generator process, cache."""

import subprocess
from unittest.mock import patch

import pytest

from registry_builder.config import BuildConfig
from registry_builder.generation import (
    DataGenerator, GenerationCache, GeneratorError, verify_environment,
)


@pytest.fixture
def config(tmp_path):
    archive = tmp_path / "server.jar"
    archive.write_bytes(b"PK\x03\x04 fake archive")
    return BuildConfig(
        server_archive_path=archive,
        work_directory=tmp_path / "work",
        output_directory=tmp_path / "out",
    )


def _completed(returncode=0, stdout="", stderr=""):
    return subprocess.CompletedProcess(args=[], returncode=returncode, stdout=stdout, stderr=stderr)


class TestVerifyEnvironment:
    def test_missing_archive(self, tmp_path):
        config = BuildConfig(server_archive_path=tmp_path / "missing.jar")
        with pytest.raises(FileNotFoundError, match="missing.jar"):
            verify_environment(config)

    def test_java_missing(self, config):
        with patch("registry_builder.generation.data_generator.subprocess.run",
                   side_effect=FileNotFoundError("java")):
            with pytest.raises(GeneratorError, match="Java is not installed"):
                verify_environment(config)

    def test_ok(self, config):
        with patch("registry_builder.generation.data_generator.subprocess.run",
                   return_value=_completed()) as run:
            verify_environment(config)
        assert run.call_args[0][0] == ["java", "-version"]


class TestDataGenerator:
    def test_command(self, config):
        command = DataGenerator(config).command()
        assert command[0] == "java"
        assert command[1] == "-DbundlerMainClass=net.minecraft.data.Main"
        assert command[2] == "-jar"
        assert command[3] == str(config.server_archive_path.resolve())
        assert command[4] == "--all"

    def test_runs_in_clean_work_directory(self, config):
        config.work_directory.mkdir()
        stale = config.work_directory / "stale.txt"
        stale.write_text("old")

        with patch("registry_builder.generation.data_generator.subprocess.run",
                   return_value=_completed(stdout="Done\n")) as run:
            result = DataGenerator(config).generate()

        assert not stale.exists()
        assert config.work_directory.is_dir()
        assert run.call_args.kwargs["cwd"] == config.work_directory
        assert result == config.generated_data_path

    def test_non_zero_exit_surfaces_stderr(self, config):
        with patch("registry_builder.generation.data_generator.subprocess.run",
                   return_value=_completed(returncode=1, stderr="Error: Unable to access jarfile")):
            with pytest.raises(GeneratorError) as exc_info:
                DataGenerator(config).generate()

        error = exc_info.value
        assert error.returncode == 1
        assert "Unable to access jarfile" in error.stderr
        assert "exited with error code: 1" in str(error)
        assert "Unable to access jarfile" in str(error)

    def test_timeout(self, tmp_path, config):
        config = config.with_overrides(generator_timeout=5)
        with patch("registry_builder.generation.data_generator.subprocess.run",
                   side_effect=subprocess.TimeoutExpired(cmd="java", timeout=5, stderr=b"partial")) as run:
            with pytest.raises(GeneratorError, match="timed out after 5 seconds") as exc_info:
                DataGenerator(config).generate()

        assert run.call_args.kwargs["timeout"] == 5.0
        assert exc_info.value.stderr == "partial"

    def test_java_cannot_start(self, config):
        with patch("registry_builder.generation.data_generator.subprocess.run",
                   side_effect=PermissionError("denied")):
            with pytest.raises(GeneratorError, match="Failed to execute Java command"):
                DataGenerator(config).generate()


class TestGenerationCache:
    def test_no_data(self, config):
        cache = GenerationCache(config.work_directory)
        assert cache.needs_generation(config.server_archive_path, "minecraft",
                                      config.generated_data_path) == (True, "no generated data")

    def test_no_record(self, config):
        config.generated_data_path.mkdir(parents=True)
        cache = GenerationCache(config.work_directory)
        assert cache.needs_generation(config.server_archive_path, "minecraft",
                                      config.generated_data_path) == (True, "no generation record")

    def test_up_to_date_after_update(self, config):
        config.generated_data_path.mkdir(parents=True)
        GenerationCache(config.work_directory).update(config.server_archive_path, "minecraft")

        cache = GenerationCache(config.work_directory)
        assert cache.needs_generation(config.server_archive_path, "minecraft",
                                      config.generated_data_path) == (False, "up to date")

    def test_archive_changed(self, config):
        config.generated_data_path.mkdir(parents=True)
        GenerationCache(config.work_directory).update(config.server_archive_path, "minecraft")
        config.server_archive_path.write_bytes(b"new server version")

        cache = GenerationCache(config.work_directory)
        assert cache.needs_generation(config.server_archive_path, "minecraft",
                                      config.generated_data_path) == (True, "server archive changed")

    def test_namespace_changed(self, config):
        config.generated_data_path.mkdir(parents=True)
        GenerationCache(config.work_directory).update(config.server_archive_path, "minecraft")

        cache = GenerationCache(config.work_directory)
        assert cache.needs_generation(config.server_archive_path, "mymod",
                                      config.generated_data_path)[0] is True

    @pytest.mark.parametrize("content", [b"{bad", b"\xff\xfe\x00garbage", b'{"archive_hash": 1}'])
    def test_corrupt_cache_file(self, config, content):
        config.work_directory.mkdir()
        (config.work_directory / ".generator_deps.json").write_bytes(content)
        cache = GenerationCache(config.work_directory)
        assert cache.record is None
