"""Tests for config/build_config.py: defaults, INI loading, overrides."""

from pathlib import Path

import pytest

from registry_builder.config import BuildConfig


class TestDefaults:
    def test_default_paths(self):
        config = BuildConfig()
        assert config.server_archive_path == Path("./server.jar")
        assert config.work_directory == Path("./temp_data")
        assert config.output_directory == Path("./registries")
        assert config.java_executable == "java"
        assert config.namespace == "minecraft"
        assert config.generator_timeout is None

    def test_generated_data_path(self):
        config = BuildConfig(work_directory=Path("/w"))
        assert config.generated_data_path == Path("/w/generated/data/minecraft")

    def test_strings_become_paths(self):
        config = BuildConfig(output_directory="out")
        assert config.output_directory == Path("out")

    @pytest.mark.parametrize("namespace", ["", "a:b"])
    def test_invalid_namespace(self, namespace):
        with pytest.raises(ValueError, match="namespace"):
            BuildConfig(namespace=namespace)

    @pytest.mark.parametrize("timeout", [0, -5])
    def test_invalid_timeout(self, timeout):
        with pytest.raises(ValueError, match="generator_timeout"):
            BuildConfig(generator_timeout=timeout)

    def test_empty_java(self):
        with pytest.raises(ValueError):
            BuildConfig(java_executable="")


class TestFromIni:
    def test_full_section(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text(
            "[build]\n"
            "server_archive = jars/server.jar\n"
            "work_directory = /abs/work\n"
            "output_directory = out\n"
            "java = /opt/java/bin/java\n"
            "namespace = mymod\n"
            "generator_timeout = 120\n"
            "log = logs/build.log\n"
        )
        config = BuildConfig.from_ini(ini)
        assert config.server_archive_path == tmp_path / "jars/server.jar"
        assert config.work_directory == Path("/abs/work")
        assert config.output_directory == tmp_path / "out"
        assert config.java_executable == "/opt/java/bin/java"
        assert config.namespace == "mymod"
        assert config.generator_timeout == 120.0
        assert config.log_path == tmp_path / "logs/build.log"

    def test_partial_section_keeps_defaults(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("[build]\noutput_directory = packets\n")
        config = BuildConfig.from_ini(ini)
        assert config.output_directory == tmp_path / "packets"
        assert config.server_archive_path == Path("./server.jar")
        assert config.namespace == "minecraft"

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            BuildConfig.from_ini(tmp_path / "nope.ini")

    def test_missing_section(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("[other]\nkey = value\n")
        with pytest.raises(ValueError, match=r"\[build\]"):
            BuildConfig.from_ini(ini)

    def test_no_section_header(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("output_directory = out\n")
        with pytest.raises(ValueError, match="Invalid config file"):
            BuildConfig.from_ini(ini)

    def test_percent_in_path(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("[build]\noutput_directory = out%dir\n")
        config = BuildConfig.from_ini(ini)
        assert config.output_directory == tmp_path / "out%dir"

    def test_unknown_key(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("[build]\nouptut_directory = typo\n")
        with pytest.raises(ValueError, match="ouptut_directory"):
            BuildConfig.from_ini(ini)

    def test_bad_timeout(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("[build]\ngenerator_timeout = soon\n")
        with pytest.raises(ValueError, match="generator_timeout"):
            BuildConfig.from_ini(ini)


class TestOverrides:
    def test_none_keeps_value(self):
        config = BuildConfig(namespace="mymod")
        assert config.with_overrides(namespace=None, output_directory=None) is config

    def test_each_path_independent(self):
        config = BuildConfig().with_overrides(work_directory=Path("/tmp/w"))
        assert config.work_directory == Path("/tmp/w")
        assert config.server_archive_path == Path("./server.jar")
        assert config.output_directory == Path("./registries")

    def test_override_wins_over_ini(self, tmp_path):
        ini = tmp_path / "build.ini"
        ini.write_text("[build]\noutput_directory = from_ini\nnamespace = mymod\n")
        config = BuildConfig.from_ini(ini).with_overrides(output_directory=Path("from_cli"))
        assert config.output_directory == Path("from_cli")
        assert config.namespace == "mymod"

    def test_unknown_option(self):
        with pytest.raises(ValueError, match="Unknown"):
            BuildConfig().with_overrides(colour="blue")

    def test_override_is_validated(self):
        with pytest.raises(ValueError):
            BuildConfig().with_overrides(generator_timeout=-1)
