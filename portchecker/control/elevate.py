from __future__ import annotations
import logging
import platform
import shlex
import subprocess
from abc import ABC, abstractmethod
from typing import Sequence, Tuple

log = logging.getLogger(__name__)

class ElevatedExecutor(ABC):
    """Runs one command line with elevated rights, usually behind an OS prompt."""

    name = "?"

    def __init__(self, timeout: float = 120.0):
        self.timeout = timeout

    @abstractmethod
    def argv(self, cmd: Sequence[str]) -> list[str]:
        ...

    def explain(self, returncode: int, stderr: str) -> str:
        return stderr.strip() or f"exit status {returncode}"

    def run_elevated(self, cmd: Sequence[str]) -> Tuple[bool, str]:
        argv = self.argv(cmd)
        log.info("%s: %s", self.name, shlex.join(cmd))
        try:
            proc = subprocess.run(argv, stdout=subprocess.DEVNULL, stderr=subprocess.PIPE,
                                  text=True, timeout=self.timeout, check=False)
        except FileNotFoundError:
            return False, f"{argv[0]} not found"
        except subprocess.TimeoutExpired:
            return False, "privilege prompt timed out"
        except OSError as e:
            return False, str(e)
        if proc.returncode == 0:
            return True, ""
        msg = self.explain(proc.returncode, proc.stderr or "")
        log.info("%s failed: %s", self.name, msg)
        return False, msg

class OsaScriptExecutor(ElevatedExecutor):
    """macOS: `do shell script ... with administrator privileges`."""

    name = "osascript"

    def argv(self, cmd: Sequence[str]) -> list[str]:
        line = shlex.join(cmd).replace("\\", "\\\\").replace('"', '\\"')
        return ["osascript", "-e", f'do shell script "{line}" with administrator privileges']

    def explain(self, returncode: int, stderr: str) -> str:
        # e.g. "0:48: execution error: User canceled. (-128)"
        text = stderr.strip()
        if "execution error:" in text:
            text = text.split("execution error:", 1)[1].strip()
            if text.endswith(")") and " (" in text:
                text = text.rsplit(" (", 1)[0]
        return text or super().explain(returncode, stderr)

class PkexecExecutor(ElevatedExecutor):
    name = "pkexec"

    def argv(self, cmd: Sequence[str]) -> list[str]:
        return ["pkexec", *cmd]

    def explain(self, returncode: int, stderr: str) -> str:
        if returncode == 126:
            return "authentication dialog dismissed"
        if returncode == 127:
            return "not authorized"
        return super().explain(returncode, stderr)

class SudoExecutor(ElevatedExecutor):
    name = "sudo"

    def argv(self, cmd: Sequence[str]) -> list[str]:
        return ["sudo", "-n", *cmd]

class NullExecutor(ElevatedExecutor):
    name = "none"

    def argv(self, cmd: Sequence[str]) -> list[str]:
        return list(cmd)

    def run_elevated(self, cmd: Sequence[str]) -> Tuple[bool, str]:
        return False, "Privilege escalation is not available."

EXECUTORS = {
    "osascript": OsaScriptExecutor,
    "pkexec": PkexecExecutor,
    "sudo": SudoExecutor,
    "none": NullExecutor,
}

def executor_for(name: str = "auto", timeout: float = 120.0) -> ElevatedExecutor:
    if name == "auto":
        name = {"Darwin": "osascript", "Linux": "pkexec"}.get(platform.system(), "none")
    cls = EXECUTORS.get(name)
    if cls is None:
        log.warning("unknown elevation backend %r, escalation disabled", name)
        cls = NullExecutor
    return cls(timeout=timeout)
