from __future__ import annotations
import logging
import threading
from typing import Optional, Tuple, Union

from .collectors import LsofSource
from .config import CFG, CONFIRM_PROMPT
from .control import TerminationController, executor_for
from .models import Outcome, ProcessRecord
from .registry import ProcessRegistry

log = logging.getLogger(__name__)

class PortChecker:
    """What a UI talks to: queries, the two-step kill, and read-only state."""

    def __init__(self, registry: ProcessRegistry, controller: TerminationController):
        self.registry = registry
        self.controller = controller
        self._pending: Optional[ProcessRecord] = None
        self._pending_lock = threading.Lock()

    @classmethod
    def from_cfg(cls, cfg: CFG) -> "PortChecker":
        registry = ProcessRegistry(LsofSource(cfg))
        executor = executor_for(cfg.elevation, timeout=cfg.elevation_timeout)
        return cls(registry, TerminationController(registry, executor, settle_delay=cfg.settle_delay))

    # --- read state ---
    @property
    def records(self) -> Tuple[ProcessRecord, ...]:
        return self.registry.snapshot().records

    @property
    def status(self) -> str:
        return self.registry.snapshot().status

    @property
    def is_refreshing(self) -> bool:
        return self.registry.snapshot().is_refreshing

    @property
    def pending(self) -> Optional[ProcessRecord]:
        with self._pending_lock:
            return self._pending

    # --- queries ---
    def query_port(self, text: str) -> bool:
        return self.registry.query_port(text)

    def query_all(self) -> None:
        self.registry.query_all()

    # --- termination ---
    def request_terminate(self, target: Union[ProcessRecord, int]) -> Optional[ProcessRecord]:
        record = target if isinstance(target, ProcessRecord) else self.registry.find(target)
        if record is None:
            return None
        with self._pending_lock:
            self._pending = record
        return record

    def confirmation_prompt(self) -> Optional[str]:
        record = self.pending
        if record is None:
            return None
        return CONFIRM_PROMPT.format(command=record.command, pid=record.pid)

    def cancel_terminate(self) -> None:
        with self._pending_lock:
            self._pending = None

    def confirm_terminate(self) -> Optional[Outcome]:
        with self._pending_lock:
            record, self._pending = self._pending, None
        if record is None:
            return None
        log.info("terminating %s (pid %d)", record.command, record.pid)
        return self.controller.terminate(record)
