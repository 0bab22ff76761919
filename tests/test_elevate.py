import subprocess

import pytest

from portchecker.control import (NullExecutor, OsaScriptExecutor, PkexecExecutor, SudoExecutor,
                                 executor_for)
from portchecker.control import elevate

def fake_completed(returncode, stderr=""):
    def run(argv, **kw):
        run.argv = argv
        return subprocess.CompletedProcess(argv, returncode, stdout=None, stderr=stderr)
    return run

def test_osascript_builds_admin_script():
    argv = OsaScriptExecutor().argv(["kill", "-9", "123"])
    assert argv == ["osascript", "-e", 'do shell script "kill -9 123" with administrator privileges']

def test_osascript_reports_cancel(monkeypatch):
    monkeypatch.setattr(subprocess, "run",
                        fake_completed(1, "0:62: execution error: User canceled. (-128)\n"))
    assert OsaScriptExecutor().run_elevated(["kill", "-9", "1"]) == (False, "User canceled.")

def test_pkexec_success(monkeypatch):
    run = fake_completed(0)
    monkeypatch.setattr(subprocess, "run", run)
    assert PkexecExecutor().run_elevated(["kill", "-9", "77"]) == (True, "")
    assert run.argv == ["pkexec", "kill", "-9", "77"]

@pytest.mark.parametrize("code, msg", [(126, "authentication dialog dismissed"), (127, "not authorized")])
def test_pkexec_exit_codes(monkeypatch, code, msg):
    monkeypatch.setattr(subprocess, "run", fake_completed(code))
    assert PkexecExecutor().run_elevated(["kill", "-9", "77"]) == (False, msg)

def test_sudo_is_non_interactive(monkeypatch):
    run = fake_completed(1, "sudo: a password is required\n")
    monkeypatch.setattr(subprocess, "run", run)
    assert SudoExecutor().run_elevated(["kill", "-9", "5"]) == (False, "sudo: a password is required")
    assert run.argv[:2] == ["sudo", "-n"]

def test_missing_binary_does_not_raise(monkeypatch):
    def run(argv, **kw):
        raise FileNotFoundError(argv[0])
    monkeypatch.setattr(subprocess, "run", run)
    assert PkexecExecutor().run_elevated(["kill", "-9", "5"]) == (False, "pkexec not found")

def test_timeout_does_not_raise(monkeypatch):
    def run(argv, **kw):
        raise subprocess.TimeoutExpired(argv, kw["timeout"])
    monkeypatch.setattr(subprocess, "run", run)
    ok, msg = SudoExecutor(timeout=0.01).run_elevated(["kill", "-9", "5"])
    assert not ok and "timed out" in msg

def test_null_executor_always_fails():
    ok, msg = NullExecutor().run_elevated(["kill", "-9", "5"])
    assert not ok and msg

@pytest.mark.parametrize("system, cls", [("Darwin", OsaScriptExecutor), ("Linux", PkexecExecutor),
                                         ("Windows", NullExecutor)])
def test_auto_picks_by_platform(monkeypatch, system, cls):
    monkeypatch.setattr(elevate.platform, "system", lambda: system)
    assert type(executor_for("auto")) is cls

def test_named_and_unknown_backends():
    assert type(executor_for("sudo", timeout=3)) is SudoExecutor
    assert executor_for("sudo", timeout=3).timeout == 3
    assert type(executor_for("doas")) is NullExecutor
