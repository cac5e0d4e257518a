#!/usr/bin/env python3
"""Tests for the best-effort environment file update."""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from dotfiles_bootstrap.modules.environment_file import (  # noqa: E402
    EnvironmentBlock,
    update_environment_file,
)
from dotfiles_bootstrap.utils.reporter import ReportLevel  # noqa: E402


TERMINAL_BLOCK = EnvironmentBlock({
    "TERMINAL": "/usr/bin/warp-terminal",
    "DEFAULT_TERMINAL": "/usr/bin/warp-terminal",
})


def test_render_block():
    assert TERMINAL_BLOCK.render() == (
        "# Added by dotfiles setup\n"
        "TERMINAL=/usr/bin/warp-terminal\n"
        "DEFAULT_TERMINAL=/usr/bin/warp-terminal"
    )


def test_no_variables_is_a_noop(tmp_path, reporter):
    env_file = tmp_path / "environment"

    assert update_environment_file(env_file, EnvironmentBlock(), reporter) is False
    assert not env_file.exists()
    assert reporter.history == []


def test_variables_appended(tmp_path, reporter):
    env_file = tmp_path / "environment"
    env_file.write_text('PATH="/usr/bin"\n', encoding="utf-8")

    assert update_environment_file(env_file, TERMINAL_BLOCK, reporter) is True

    content = env_file.read_text(encoding="utf-8")
    assert content.startswith('PATH="/usr/bin"\n')
    assert "TERMINAL=/usr/bin/warp-terminal" in content
    assert reporter.messages(ReportLevel.SUCCESS)


def test_existing_variables_left_alone(tmp_path, reporter):
    env_file = tmp_path / "environment"
    env_file.write_text(
        "DEFAULT_TERMINAL=/usr/bin/warp-terminal\nTERMINAL=/usr/bin/warp-terminal\n",
        encoding="utf-8",
    )
    before = env_file.read_bytes()

    assert update_environment_file(env_file, TERMINAL_BLOCK, reporter) is True
    assert env_file.read_bytes() == before
    assert reporter.messages(ReportLevel.INFO)


def test_unwritable_location_is_a_warning(tmp_path, reporter):
    env_file = tmp_path / "no-such-dir" / "environment"

    assert update_environment_file(env_file, TERMINAL_BLOCK, reporter) is False

    assert not env_file.exists()
    warnings = reporter.messages(ReportLevel.WARNING)
    assert len(warnings) == 1
    assert "TERMINAL=/usr/bin/warp-terminal" in warnings[0]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
