"""Unit tests for dot_builder.config."""

import json
from pathlib import Path

import pytest

from dot_builder.config import (
    is_initialized,
    load_config,
    load_config_or_default,
    save_config,
)
from dot_builder.models import RenderConfig


class TestSaveLoadConfig:
    def test_save_creates_file(self, tmp_path: Path) -> None:
        path = save_config(RenderConfig(), tmp_path)
        assert path.exists()
        assert path == tmp_path / ".dot-builder" / "config.json"

    def test_roundtrip(self, tmp_path: Path) -> None:
        save_config(RenderConfig(indent="    ", port_separator=":"), tmp_path)
        loaded = load_config(tmp_path)
        assert loaded.indent == "    "
        assert loaded.port_separator == ":"

    def test_load_missing_raises(self, tmp_path: Path) -> None:
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path)

    def test_missing_keys_use_defaults(self, tmp_path: Path) -> None:
        (tmp_path / ".dot-builder").mkdir()
        (tmp_path / ".dot-builder" / "config.json").write_text(json.dumps({"indent": "\t"}))
        loaded = load_config(tmp_path)
        assert loaded.indent == "\t"
        assert loaded.port_separator == " "

    def test_invalid_values_rejected(self, tmp_path: Path) -> None:
        (tmp_path / ".dot-builder").mkdir()
        (tmp_path / ".dot-builder" / "config.json").write_text(json.dumps({"port_separator": "/"}))
        with pytest.raises(ValueError):
            load_config(tmp_path)


class TestInitialized:
    def test_not_initialized(self, tmp_path: Path) -> None:
        assert not is_initialized(tmp_path)
        assert load_config_or_default(tmp_path) == RenderConfig()

    def test_initialized(self, tmp_path: Path) -> None:
        save_config(RenderConfig(indent=" "), tmp_path)
        assert is_initialized(tmp_path)
        assert load_config_or_default(tmp_path).indent == " "
