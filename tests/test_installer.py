"""Tests for running the installer subprocess."""

import logging
import os
import stat
import sys

import pytest

from loaders.installer import installer_command, run_installer

pytestmark = pytest.mark.skipif(sys.platform == "win32", reason="uses a POSIX shell script as the runtime")


def _fake_java(tmp_path, body):
    script = tmp_path / "java"
    script.write_text("#!/bin/sh\n" + body)
    script.chmod(script.stat().st_mode | stat.S_IXUSR)
    return str(script)


def test_installer_command_shape():
    assert installer_command("java", "/c/i.jar", "/c") == ["java", "-jar", "/c/i.jar", "--installClient", "/c"]


class TestRunInstaller:
    def test_streams_logged_and_exit_code_returned(self, tmp_path, caplog):
        out = tmp_path / "out"
        out.mkdir()
        installer = out / "installer.jar"
        installer.write_bytes(b"jar")
        java = _fake_java(tmp_path, 'echo "installing into $4"\necho "deprecated option" 1>&2\npwd\nexit 0\n')

        with caplog.at_level(logging.DEBUG, logger="Test Installer"):
            code = run_installer(java, str(installer), str(out), "Test Installer")

        assert code == 0
        messages = [(r.levelno, r.getMessage()) for r in caplog.records if r.name == "Test Installer"]
        assert (logging.INFO, f"installing into {out}") in messages
        assert (logging.ERROR, "deprecated option") in messages
        # Runs from the installer's own directory.
        assert (logging.INFO, os.path.realpath(str(out))) in [
            (lvl, os.path.realpath(m)) for lvl, m in messages if m.startswith("/")
        ]

    def test_failed_drain_kills_and_reaps_installer(self, tmp_path, monkeypatch):
        installer = tmp_path / "installer.jar"
        installer.write_bytes(b"jar")
        pid_file = tmp_path / "pid"
        java = _fake_java(
            tmp_path,
            f'echo $$ > "{pid_file}"\nhead -c 512 /dev/zero | tr "\\0" x\necho\nexec sleep 30\n',
        )
        monkeypatch.setattr("loaders.installer._STREAM_LIMIT", 64)

        with pytest.raises(ValueError):
            run_installer(java, str(installer), str(tmp_path), "Test Installer")

        with pytest.raises(ProcessLookupError):
            os.kill(int(pid_file.read_text()), 0)

    def test_nonzero_exit_is_returned_not_raised(self, tmp_path, caplog):
        installer = tmp_path / "installer.jar"
        installer.write_bytes(b"jar")
        java = _fake_java(tmp_path, "exit 3\n")

        with caplog.at_level(logging.DEBUG, logger="Test Installer"):
            code = run_installer(java, str(installer), str(tmp_path), "Test Installer")

        assert code == 3
        assert any(
            r.levelno == logging.WARNING and "exited with code 3" in r.getMessage() for r in caplog.records
        )
