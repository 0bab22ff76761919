from __future__ import annotations
import errno
import logging
import threading
from typing import Callable, Optional

import psutil

from ..config import STATUS_KILL_CODE, STATUS_KILL_MSG, STATUS_KILLED
from ..models import Outcome, ProcessRecord
from .elevate import ElevatedExecutor

log = logging.getLogger(__name__)

def send_kill(pid: int) -> None:
    psutil.Process(pid).kill()

def schedule_timer(delay: float, fn: Callable[[], None]) -> None:
    t = threading.Timer(delay, fn)
    t.daemon = True
    t.start()

class TerminationController:
    """
    Direct SIGKILL first; if that is refused for lack of permission, one
    retry through the elevated executor. Success at either tier re-runs the
    registry's last query after settle_delay so the socket has been released.
    """

    def __init__(self, registry, executor: ElevatedExecutor, settle_delay: float = 0.5,
                 signaller: Callable[[int], None] = send_kill,
                 schedule: Callable[[float, Callable[[], None]], None] = schedule_timer):
        self.registry = registry
        self.executor = executor
        self.settle_delay = settle_delay
        self.signaller = signaller
        self.schedule = schedule

    def terminate(self, record: ProcessRecord) -> Outcome:
        outcome = self._direct(record)
        if outcome is None:
            outcome = self._elevated(record)
        self.registry.set_status(outcome.message)
        if outcome.terminated:
            self.schedule(self.settle_delay, self.registry.requery)
        return outcome

    def _direct(self, record: ProcessRecord) -> Optional[Outcome]:
        pid = record.pid
        try:
            self.signaller(pid)
        except (psutil.AccessDenied, PermissionError):
            log.info("kill %d: permission denied, escalating", pid)
            return None
        except psutil.NoSuchProcess:
            return self._failed_code(pid, errno.ESRCH)
        except OSError as e:
            return self._failed_code(pid, e.errno or 0)
        except psutil.Error as e:
            log.warning("kill %d: %s", pid, e)
            return self._failed_code(pid, 0)
        log.info("kill %d: terminated", pid)
        return Outcome(True, STATUS_KILLED.format(command=record.command, pid=pid))

    def _elevated(self, record: ProcessRecord) -> Outcome:
        ok, msg = self.executor.run_elevated(["kill", "-9", str(record.pid)])
        if ok:
            log.info("kill %d: terminated via %s", record.pid, self.executor.name)
            return Outcome(True, STATUS_KILLED.format(command=record.command, pid=record.pid), elevated=True)
        return Outcome(False, STATUS_KILL_MSG.format(message=msg or "unknown error"), elevated=True)

    def _failed_code(self, pid: int, code: int) -> Outcome:
        log.warning("kill %d failed: errno %d", pid, code)
        return Outcome(False, STATUS_KILL_CODE.format(code=code), code=code)
