# envforge:header:start
#
#   project      : EnvForge
#   file         : test_model.py
#   file_relpath : tests/config/test_model.py
#   license      : MIT
#   copyright    : (c) 2025 Olivier Biot
#
# envforge:header:end

"""Tests for build settings: defaults, ``envforge.toml`` layering and freeze/thaw."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from envforge.config import BuildConfig, MutableBuildConfig
from envforge.config.io import get_int_value_checked, load_toml_dict
from envforge.core.errors import ConfigError
from tests.conftest import write_tree

if TYPE_CHECKING:
    from pathlib import Path


def test_defaults_without_settings_file(tmp_path: Path) -> None:
    """Without ``envforge.toml`` the built-in defaults apply."""
    config: BuildConfig = MutableBuildConfig.load(tmp_path, tmp_path / "out").freeze()

    assert config.indent == 2
    assert config.sort_keys is True
    assert config.config_files == ()
    assert config.environments_path == tmp_path / "environments"
    assert config.apps_path == tmp_path / "apps"
    assert config.vars_path == tmp_path / "vars"
    assert config.script_suffix == ".conf"
    assert config.output_suffix == ".json"


def test_settings_file_overrides_output(tmp_path: Path) -> None:
    """``[output]`` keys override the defaults and the file is recorded."""
    write_tree(tmp_path, {"envforge.toml": "[output]\nindent = 0\nsort_keys = false\n"})

    config: BuildConfig = MutableBuildConfig.load(tmp_path, tmp_path / "out").freeze()

    assert config.indent == 0
    assert config.sort_keys is False
    assert config.config_files == (tmp_path / "envforge.toml",)


def test_unknown_keys_are_ignored(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    """Unknown sections and keys are logged and otherwise ignored."""
    write_tree(
        tmp_path,
        {"envforge.toml": "[output]\nindent = 3\ncolor = true\n\n[layout]\napps = 'x'\n"},
    )

    with caplog.at_level("WARNING"):
        config: BuildConfig = MutableBuildConfig.load(tmp_path, tmp_path / "out").freeze()

    assert config.indent == 3
    assert config.apps_dir == "apps"
    assert "[output].color" in caplog.text
    assert "[layout]" in caplog.text


@pytest.mark.parametrize(
    "content, message",
    [
        ("[output]\nindent = 'wide'\n", "'indent' must be an integer"),
        ("[output]\nindent = true\n", "'indent' must be an integer"),
        ("[output]\nindent = -1\n", "'indent' must be >= 0"),
        ("[output]\nsort_keys = 1\n", "'sort_keys' must be a boolean"),
        ("output = 3\n", "[output] must be a table"),
        ("[output\n", "Invalid TOML"),
    ],
)
def test_malformed_settings_raise(tmp_path: Path, content: str, message: str) -> None:
    """Wrong types and invalid TOML raise `ConfigError`."""
    write_tree(tmp_path, {"envforge.toml": content})

    with pytest.raises(ConfigError) as excinfo:
        MutableBuildConfig.load(tmp_path, tmp_path / "out")

    assert message in str(excinfo.value)


def test_freeze_thaw_roundtrip(tmp_path: Path) -> None:
    """Thawing and freezing again yields an equal snapshot."""
    config: BuildConfig = MutableBuildConfig(
        input_root=tmp_path, output_root=tmp_path / "out", indent=4
    ).freeze()

    draft: MutableBuildConfig = config.thaw()
    draft.sort_keys = False

    assert draft.freeze() != config
    draft.sort_keys = True
    assert draft.freeze() == config


def test_frozen_config_is_immutable(tmp_path: Path) -> None:
    """`BuildConfig` rejects attribute assignment."""
    config: BuildConfig = MutableBuildConfig(input_root=tmp_path, output_root=tmp_path).freeze()

    with pytest.raises(AttributeError):
        config.indent = 8  # type: ignore[misc]


def test_load_toml_dict_unwraps(tmp_path: Path) -> None:
    """Parsed TOML comes back as plain Python containers."""
    write_tree(tmp_path, {"s.toml": "[output]\nindent = 2\n"})

    data = load_toml_dict(tmp_path / "s.toml")

    assert data == {"output": {"indent": 2}}
    assert type(data["output"]) is dict


def test_get_int_value_checked_default() -> None:
    """Missing keys fall back to the default."""
    assert get_int_value_checked({}, "indent", 7, source="test") == 7
