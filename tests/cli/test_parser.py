"""
Tests for CLI argument parser.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from protokit.cli.parser import CLI
from protokit.cli.utils import show_download_progress
from protokit.core.exceptions import CompilationError


class TestCLIBasics:
    """Test basic CLI functionality."""

    def test_no_command_shows_help(self, capsys):
        """Test that running without command shows help."""
        result = CLI().run([])

        assert result == 1
        captured = capsys.readouterr()
        assert "usage:" in captured.out.lower()

    def test_version_flag(self, capsys):
        """Test --version flag."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().run(["--version"])

        assert exc_info.value.code == 0
        assert "protokit" in capsys.readouterr().out

    def test_global_options(self, tmp_path):
        args = CLI().parse_args(
            ["-v", "--project-root", str(tmp_path), "--config", "alt.yaml", "fetch"]
        )

        assert args.verbose is True
        assert args.project_root == tmp_path
        assert args.config == Path("alt.yaml")
        assert args.command == "fetch"


class TestCompileCommand:
    """Test compile command parsing."""

    def test_defaults(self):
        args = CLI().parse_args(["compile"])

        assert args.command == "compile"
        assert args.files == []
        assert args.strict_imports is None

    def test_files_and_strict(self):
        args = CLI().parse_args(["compile", "a.proto", "pkg/b.proto", "--strict-imports"])

        assert args.files == ["a.proto", "pkg/b.proto"]
        assert args.strict_imports is True


class TestRun:
    """Test command dispatch and error handling."""

    def test_compile_runs_task(self, project_root):
        with patch("protokit.cli.commands.compile.ProtobufTask") as task_cls:
            task_cls.return_value.run.return_value = True
            result = CLI().run(
                ["--project-root", str(project_root), "compile", "a.proto", "--strict-imports"]
            )

        assert result == 0
        config = task_cls.call_args.args[0]
        assert config.project_root == project_root.resolve()
        assert config.strict_imports is True
        task_cls.return_value.run.assert_called_once_with(["a.proto"])

    def test_compile_all_files(self, project_root):
        with patch("protokit.cli.commands.compile.ProtobufTask") as task_cls:
            task_cls.return_value.run.return_value = False
            assert CLI().run(["--project-root", str(project_root), "compile"]) == 0

        task_cls.return_value.run.assert_called_once_with(None)

    def test_fetch(self, project_root):
        with patch("protokit.cli.commands.fetch.ToolchainProvisioner") as provisioner_cls:
            assert CLI().run(["--project-root", str(project_root), "fetch"]) == 0

        provisioner_cls.return_value.fetch.assert_called_once_with()
        kwargs = provisioner_cls.call_args.kwargs
        assert kwargs["progress_callback"] is show_download_progress

    def test_quiet_disables_progress(self, project_root):
        with patch("protokit.cli.commands.compile.ProtobufTask") as task_cls:
            task_cls.return_value.run.return_value = False
            CLI().run(["-q", "--project-root", str(project_root), "compile"])

        assert task_cls.call_args.kwargs["progress_callback"] is None

    def test_errors_are_reported(self, project_root, capsys):
        with patch("protokit.cli.commands.compile.ProtobufTask") as task_cls:
            task_cls.return_value.run.side_effect = CompilationError(
                "a.proto", 1, "a.proto:1:1: syntax error"
            )
            result = CLI().run(["--project-root", str(project_root), "compile"])

        assert result == 1
        assert "ERROR: a.proto:1:1: syntax error" in capsys.readouterr().err

    def test_config_error(self, project_root, capsys):
        (project_root / "protokit.yaml").write_text("staleness: never\n")

        result = CLI().run(["--project-root", str(project_root), "compile"])

        assert result == 1
        assert "Invalid staleness" in capsys.readouterr().err

    def test_keyboard_interrupt(self, project_root):
        with patch("protokit.cli.commands.fetch.ToolchainProvisioner") as provisioner_cls:
            provisioner_cls.return_value.fetch.side_effect = KeyboardInterrupt
            assert CLI().run(["--project-root", str(project_root), "fetch"]) == 130
