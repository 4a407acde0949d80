"""Tests for config loading, validation, env var overrides, and option building."""

import dataclasses
from pathlib import Path

import pytest

from pyfc.config.loader import ConfigError, build_options, load_config
from pyfc.config.schema import CompareOptions, PyfcConfig


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch):
    for name in ("PYFC_RESYNC_WINDOW", "PYFC_CHUNK_SIZE", "PYFC_FORMAT", "PYFC_ENCODING", "PYFC_IGNORE_CASE"):
        monkeypatch.delenv(name, raising=False)


class TestConfigLoading:
    def test_default_config(self, tmp_path: Path):
        cfg = load_config(tmp_path)
        assert cfg.compare.resync_window == 100
        assert cfg.compare.encoding == "utf-8"
        assert cfg.output.format == "terminal"

    def test_custom_toml(self, tmp_path: Path):
        (tmp_path / ".pyfc.toml").write_text(
            'version = "1.0"\n'
            '[compare]\n'
            'resync_window = 40\n'
            'ignore_case = true\n'
            '[output]\n'
            'format = "json"\n'
        )
        cfg = load_config(tmp_path)
        assert cfg.compare.resync_window == 40
        assert cfg.compare.ignore_case is True
        assert cfg.output.format == "json"

    def test_yaml_config(self, tmp_path: Path):
        (tmp_path / ".pyfc.yaml").write_text("compare:\n  literal_tabs: true\n  chunk_size: 4096\n")
        cfg = load_config(tmp_path)
        assert cfg.compare.literal_tabs is True
        assert cfg.compare.chunk_size == 4096

    def test_empty_yaml(self, tmp_path: Path):
        (tmp_path / ".pyfc.yml").write_text("")
        assert load_config(tmp_path) == PyfcConfig()

    def test_toml_preferred_over_yaml(self, tmp_path: Path):
        (tmp_path / ".pyfc.toml").write_text("[compare]\nresync_window = 7\n")
        (tmp_path / ".pyfc.yaml").write_text("compare:\n  resync_window: 9\n")
        assert load_config(tmp_path).compare.resync_window == 7

    def test_config_override_path(self, tmp_path: Path):
        custom = tmp_path / "custom.toml"
        custom.write_text("[compare]\nabbreviate = true\n")
        cfg = load_config(tmp_path, config_override=str(custom))
        assert cfg.compare.abbreviate is True

    def test_unknown_keys_ignored(self, tmp_path: Path):
        (tmp_path / ".pyfc.toml").write_text("[compare]\nfuture_option = 1\n[extra]\nx = 2\n")
        assert load_config(tmp_path).compare.resync_window == 100

    def test_missing_override_raises(self, tmp_path: Path):
        with pytest.raises(ConfigError):
            load_config(tmp_path, config_override="/nonexistent/config.toml")

    def test_invalid_toml_raises(self, tmp_path: Path):
        (tmp_path / ".pyfc.toml").write_text("this is not valid [toml")
        with pytest.raises(ConfigError):
            load_config(tmp_path)

    def test_yaml_list_raises(self, tmp_path: Path):
        (tmp_path / ".pyfc.yaml").write_text("- a\n- b\n")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestValidation:
    @pytest.mark.parametrize("body", [
        "[compare]\nresync_window = 0\n",
        "[compare]\nchunk_size = -1\n",
        "[compare]\nmin_resync_run = true\n",
        '[compare]\nencoding = "no-such-codec"\n',
        '[output]\nformat = "xml"\n',
        '[compare]\nresync_window = "many"\n',
    ])
    def test_invalid_values(self, tmp_path: Path, body):
        (tmp_path / ".pyfc.toml").write_text(body)
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestEnvOverrides:
    def test_overrides_applied(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PYFC_RESYNC_WINDOW", "25")
        monkeypatch.setenv("PYFC_CHUNK_SIZE", "1024")
        monkeypatch.setenv("PYFC_FORMAT", "json")
        monkeypatch.setenv("PYFC_ENCODING", "latin-1")
        monkeypatch.setenv("PYFC_IGNORE_CASE", "yes")
        cfg = load_config(tmp_path)
        assert cfg.compare.resync_window == 25
        assert cfg.compare.chunk_size == 1024
        assert cfg.output.format == "json"
        assert cfg.compare.encoding == "latin-1"
        assert cfg.compare.ignore_case is True

    def test_env_beats_file(self, tmp_path: Path, monkeypatch):
        (tmp_path / ".pyfc.toml").write_text("[compare]\nresync_window = 10\n")
        monkeypatch.setenv("PYFC_RESYNC_WINDOW", "20")
        assert load_config(tmp_path).compare.resync_window == 20

    def test_invalid_env_ignored(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PYFC_RESYNC_WINDOW", "-5")
        monkeypatch.setenv("PYFC_FORMAT", "xml")
        monkeypatch.setenv("PYFC_IGNORE_CASE", "maybe")
        cfg = load_config(tmp_path)
        assert cfg.compare.resync_window == 100
        assert cfg.output.format == "terminal"
        assert cfg.compare.ignore_case is False

    def test_unknown_env_encoding_rejected(self, tmp_path: Path, monkeypatch):
        monkeypatch.setenv("PYFC_ENCODING", "no-such-codec")
        with pytest.raises(ConfigError):
            load_config(tmp_path)


class TestBuildOptions:
    def test_switches_turn_on(self):
        cfg = PyfcConfig()
        opts = build_options(cfg, ignore_case=True, wide_text=True, line_numbers=True)
        assert opts.ignore_case and opts.wide_text and opts.line_numbers
        assert not opts.compress_whitespace

    def test_config_values_used(self):
        cfg = PyfcConfig()
        cfg.compare.compress_whitespace = True
        cfg.compare.resync_window = 12
        opts = build_options(cfg)
        assert opts.compress_whitespace
        assert opts.resync_window == 12

    def test_numeric_flags_replace_config(self):
        cfg = PyfcConfig()
        cfg.compare.resync_window = 12
        opts = build_options(cfg, resync_window=3, min_resync_run=5, encoding="cp1252")
        assert opts.resync_window == 3
        assert opts.min_resync_run == 5
        assert opts.encoding == "cp1252"

    def test_invalid_values_raise_config_error(self):
        with pytest.raises(ConfigError):
            build_options(PyfcConfig(), resync_window=0)
        with pytest.raises(ConfigError):
            build_options(PyfcConfig(), encoding="no-such-codec")


class TestCompareOptions:
    def test_frozen(self):
        opts = CompareOptions()
        with pytest.raises(dataclasses.FrozenInstanceError):
            opts.ignore_case = True  # type: ignore[misc]

    def test_rejects_non_positive(self):
        with pytest.raises(ValueError):
            CompareOptions(chunk_size=0)


class TestEncodingValidation:
    @pytest.mark.parametrize("codec", ["utf-16-le", "utf-16", "utf-32", "cp037"])
    def test_multibyte_line_breaks_rejected(self, tmp_path: Path, codec):
        (tmp_path / ".pyfc.toml").write_text(f'[compare]\nencoding = "{codec}"\n')
        with pytest.raises(ConfigError, match="--unicode"):
            load_config(tmp_path)

    def test_flag_rejected(self):
        with pytest.raises(ConfigError, match="--unicode"):
            build_options(PyfcConfig(), encoding="utf-16-le")

    @pytest.mark.parametrize("codec", ["utf-8", "utf-8-sig", "latin-1", "cp1252", "ascii"])
    def test_ascii_compatible_accepted(self, codec):
        assert build_options(PyfcConfig(), encoding=codec).encoding == codec
