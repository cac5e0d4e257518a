#!/usr/bin/env python3
"""Tests for idempotent alias installation."""

import sys
from pathlib import Path

import pytest

# Add the src directory to the Python path
src_path = Path(__file__).parent / "src"
sys.path.insert(0, str(src_path))

from dotfiles_bootstrap.modules.alias_installer import (  # noqa: E402
    AliasDeclaration,
    AppendOutcome,
    append_if_absent,
    install_alias,
)
from dotfiles_bootstrap.modules.errors import WriteFailureError  # noqa: E402
from dotfiles_bootstrap.utils.reporter import ReportLevel  # noqa: E402


BLOCK = AliasDeclaration(name="config", git_dir=Path("/home/u/.dotfiles")).render()


def test_render_alias_block():
    """The block maps the alias to git bound to the bare repository."""
    assert BLOCK == (
        "# Dotfiles management\n"
        "alias config='git --git-dir=/home/u/.dotfiles --work-tree=$HOME'"
    )


def test_missing_file_is_created_with_block_only(tmp_path):
    rc_file = tmp_path / ".bashrc"

    assert append_if_absent(rc_file, BLOCK) is AppendOutcome.CREATED
    assert rc_file.read_text(encoding="utf-8") == BLOCK + "\n"


def test_block_appended_after_existing_content(tmp_path):
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("export EDITOR=vim", encoding="utf-8")

    assert append_if_absent(rc_file, BLOCK) is AppendOutcome.APPENDED
    assert rc_file.read_text(encoding="utf-8") == "export EDITOR=vim\n" + BLOCK + "\n"


def test_second_install_leaves_file_unchanged(tmp_path):
    """Running the install twice keeps exactly one copy of the block."""
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("export EDITOR=vim\n", encoding="utf-8")

    append_if_absent(rc_file, BLOCK)
    first = rc_file.read_bytes()
    assert append_if_absent(rc_file, BLOCK) is AppendOutcome.ALREADY_PRESENT

    assert rc_file.read_bytes() == first
    assert first.decode("utf-8").count(BLOCK) == 1


def test_partial_match_is_not_treated_as_present(tmp_path):
    """Only the exact block counts, a lone comment line does not."""
    rc_file = tmp_path / ".bashrc"
    rc_file.write_text("# Dotfiles management\n", encoding="utf-8")

    assert append_if_absent(rc_file, BLOCK) is AppendOutcome.APPENDED
    assert rc_file.read_text(encoding="utf-8").count(BLOCK) == 1


def test_unwritable_destination_raises_write_failure(tmp_path):
    rc_dir = tmp_path / ".bashrc"
    rc_dir.mkdir()

    with pytest.raises(WriteFailureError) as excinfo:
        append_if_absent(rc_dir, BLOCK)
    assert excinfo.value.path == rc_dir


def test_install_alias_skips_failing_files(tmp_path, reporter):
    """A failing rc file is a warning, the other files still get the alias."""
    broken = tmp_path / "broken"
    broken.mkdir()
    bashrc = tmp_path / ".bashrc"
    zshrc = tmp_path / ".zshrc"
    zshrc.write_text(BLOCK + "\n", encoding="utf-8")
    declaration = AliasDeclaration(name="config", git_dir=Path("/home/u/.dotfiles"))

    outcomes = install_alias(declaration, [broken, bashrc, zshrc], reporter)

    assert outcomes == {
        bashrc: AppendOutcome.CREATED,
        zshrc: AppendOutcome.ALREADY_PRESENT,
    }
    warnings = reporter.messages(ReportLevel.WARNING)
    assert len(warnings) == 1
    assert str(broken) in warnings[0]


if __name__ == "__main__":
    sys.exit(pytest.main([__file__, "-v"]))
