"""CLI behavior tests."""

import logging
import sys

import pytest

from passcore import __version__, cli
from passcore.document import Document
from passcore.errors import ConsistencyViolationError


def _run_cli(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture, argv: list[str]):
    """Run CLI main() with a patched argv and capture exit code/stdout/stderr."""
    monkeypatch.setattr(sys, "argv", ["passcore", *argv])
    with pytest.raises(SystemExit) as exc_info:
        cli.main()
    captured = capsys.readouterr()
    return exc_info.value.code, captured.out, captured.err


class TestBatchMode:
    """Test running command lines and scripts from the command line."""

    def test_command_line_succeeds(self, monkeypatch, capsys):
        """Test that a -p command line runs and exits 0."""
        code, out, _err = _run_cli(monkeypatch, capsys, ["-p", "ls"])

        assert code == 0
        assert "0 module(s):" in out

    def test_several_command_lines_run_in_order(self, monkeypatch, capsys):
        """Test that repeated -p lines run in the order given."""
        code, out, _err = _run_cli(monkeypatch, capsys, ["-p", "echo on", "-p", "ls"])

        assert code == 0
        assert out.index("echo on") < out.index("passcore> ls")

    def test_files_are_read_before_commands(self, monkeypatch, capsys, text_file, temp_dir):
        """Test that positional files are read before -p lines run."""
        first = text_file("first.txt", "one\n")
        second = text_file("second.txt", "two\n")
        out_file = temp_dir / "out.txt"

        code, _out, _err = _run_cli(
            monkeypatch,
            capsys,
            [str(first), str(second), "-p", f"write_text -noheader {out_file}"],
        )

        assert code == 0
        assert out_file.read_text(encoding="utf-8") == "one\ntwo\n"

    def test_script_file(self, monkeypatch, capsys, text_file, temp_dir):
        """Test that -s runs a script including here-documents."""
        out_file = temp_dir / "out.txt"
        script = text_file(
            "build.pcs",
            f"read_text -name m <<EOT\nhello\nEOT\nwrite_text -noheader {out_file}\n",
        )

        code, _out, _err = _run_cli(monkeypatch, capsys, ["-s", str(script)])

        assert code == 0
        assert out_file.read_text(encoding="utf-8") == "hello\n"

    def test_command_error_exits_with_message(self, monkeypatch, capsys):
        """Test that a command error prints ERROR and exits 1."""
        code, _out, err = _run_cli(monkeypatch, capsys, ["-p", "nope"])

        assert code == 1
        assert "ERROR: No such command: nope" in err

    def test_error_stops_remaining_commands(self, monkeypatch, capsys):
        """Test that batch mode stops at the first command error."""
        code, out, _err = _run_cli(monkeypatch, capsys, ["-p", "nope", "-p", "ls"])

        assert code == 1
        assert "module(s)" not in out

    def test_failing_shell_escape(self, monkeypatch, capsys):
        """Test that a failing shell escape reports its exit code."""
        code, _out, err = _run_cli(monkeypatch, capsys, ["-p", "!exit 4"])

        assert code == 1
        assert "Shell command returned error code 4." in err

    def test_consistency_violation_is_fatal(self, monkeypatch, capsys):
        """Test that a consistency violation prints FATAL and exits 2."""
        def broken_check(self):
            raise ConsistencyViolationError("broken document")

        monkeypatch.setattr(Document, "check", broken_check)

        code, _out, err = _run_cli(monkeypatch, capsys, ["-p", "ls"])

        assert code == 2
        assert "FATAL: broken document" in err

    def test_unexpected_error_is_reported(self, monkeypatch, capsys):
        """Test that unexpected exceptions print ERROR and exit 1."""
        def explode(session, line):
            raise RuntimeError("boom")

        monkeypatch.setattr(cli, "call", explode)

        code, out, _err = _run_cli(monkeypatch, capsys, ["-p", "ls"])

        assert code == 1
        assert "ERROR: boom" in out


class TestInteractiveMode:
    """Test starting the interactive shell."""

    def test_no_commands_starts_repl(self, monkeypatch, capsys):
        """Test that the shell starts when no -p or -s is given."""
        sessions = []

        def fake_repl(session):
            sessions.append(session)
            return 0

        monkeypatch.setattr(cli, "repl", fake_repl)

        code, _out, _err = _run_cli(monkeypatch, capsys, ["-e"])

        assert code == 0
        assert len(sessions) == 1
        assert sessions[0].echo is True

    def test_commands_skip_repl(self, monkeypatch, capsys):
        """Test that batch mode never starts the shell."""
        monkeypatch.setattr(cli, "repl", lambda session: pytest.fail("repl started"))

        code, _out, _err = _run_cli(monkeypatch, capsys, ["-p", "ls"])

        assert code == 0


class TestOptions:
    """Test logging and informational options."""

    def test_version(self, monkeypatch, capsys):
        """Test that --version prints the program version."""
        code, out, _err = _run_cli(monkeypatch, capsys, ["--version"])

        assert code == 0
        assert out.strip() == f"passcore {__version__}"

    def test_log_file(self, monkeypatch, capsys, temp_dir, root_handlers):
        """Test that -l writes lifecycle and command events."""
        log_file = temp_dir / "run.log"

        code, _out, _err = _run_cli(monkeypatch, capsys, ["-l", str(log_file), "-p", "ls"])
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert code == 0
        assert "=== app_start ===" in content
        assert "mode: batch" in content
        assert "=== command_exec ===" in content
        assert "command: ls" in content
        assert "=== app_stop ===" in content

    def test_log_dir(self, monkeypatch, capsys, temp_dir, root_handlers):
        """Test that -L creates one timestamped log file."""
        logs_dir = temp_dir / "logs"

        code, _out, _err = _run_cli(monkeypatch, capsys, ["-L", str(logs_dir), "-p", "ls"])

        assert code == 0
        created = list(logs_dir.glob("passcore_*.log"))
        assert len(created) == 1