from __future__ import annotations
import logging
import threading
from dataclasses import dataclass
from typing import Callable, List, Optional, Tuple

from ..collectors import parse_lsof
from ..config import (STATUS_EMPTY_ALL, STATUS_EMPTY_PORT, STATUS_FOUND, STATUS_IDLE,
                      STATUS_INVALID, STATUS_SEARCH_ALL, STATUS_SEARCH_PORT)
from ..errors import InvalidInput
from ..models import ListingFilter, ProcessRecord

log = logging.getLogger(__name__)

def validate_port(text: str) -> int:
    s = (text or "").strip()
    digits = s[1:] if s[:1] in ("+", "-") else s
    if not digits.isdecimal():
        raise InvalidInput(text)
    port = int(s)
    if not 1 <= port <= 65535:
        raise InvalidInput(text)
    return port

def _spawn_thread(fn: Callable[[], None]) -> None:
    threading.Thread(target=fn, name="lsof-query", daemon=True).start()

@dataclass(frozen=True)
class RegistryView:
    records: Tuple[ProcessRecord, ...]
    status: str
    is_refreshing: bool
    last_filter: Optional[ListingFilter]

class ProcessRegistry:
    """
    Current batch of ProcessRecords plus query state.

    Every query gets a sequence number; a worker only applies its result
    if no newer query was issued in the meantime.
    """

    def __init__(self, source, spawn: Callable[[Callable[[], None]], None] = _spawn_thread):
        self.lock = threading.Lock()
        self.source = source
        self.spawn = spawn
        self.records: Tuple[ProcessRecord, ...] = ()
        self.status: str = STATUS_IDLE
        self.is_refreshing: bool = False
        self.last_filter: Optional[ListingFilter] = None
        self._seq = 0

    def snapshot(self) -> RegistryView:
        with self.lock:
            return RegistryView(self.records, self.status, self.is_refreshing, self.last_filter)

    def set_status(self, text: str) -> None:
        with self.lock:
            self.status = text

    def query_port(self, text: str) -> bool:
        try:
            port = validate_port(text)
        except InvalidInput:
            log.info("rejected port input %r", text)
            with self.lock:
                self._seq += 1  # results of anything still in flight are now stale
                self.records = ()
                self.status = STATUS_INVALID
                self.is_refreshing = False
            return False
        self.query(ListingFilter.single_port(port))
        return True

    def query_all(self) -> None:
        self.query(ListingFilter.all_listening())

    def requery(self) -> bool:
        with self.lock:
            flt = self.last_filter
        if flt is None:
            return False
        self.query(flt)
        return True

    def query(self, flt: ListingFilter) -> int:
        with self.lock:
            self._seq += 1
            seq = self._seq
            self.last_filter = flt
            self.records = ()
            self.is_refreshing = True
            self.status = STATUS_SEARCH_PORT.format(port=flt.port) if flt.mode == "port" else STATUS_SEARCH_ALL
        self.spawn(lambda: self._run(seq, flt))
        return seq

    def _run(self, seq: int, flt: ListingFilter) -> None:
        try:
            records = fetch_records(self.source, flt)
        except Exception:
            log.exception("query %d failed", seq)
            records = []
        self._apply(seq, flt, records)

    def _apply(self, seq: int, flt: ListingFilter, records: List[ProcessRecord]) -> bool:
        with self.lock:
            if seq != self._seq:
                log.debug("dropping stale result of query %d (latest %d)", seq, self._seq)
                return False
            self.records = tuple(records)
            if not records:
                self.status = STATUS_EMPTY_PORT.format(port=flt.port) if flt.mode == "port" else STATUS_EMPTY_ALL
            else:
                self.status = STATUS_FOUND.format(count=len(records))
            self.is_refreshing = False
        log.info("query %d: %d record(s)", seq, len(records))
        return True

    def find(self, pid: int) -> Optional[ProcessRecord]:
        with self.lock:
            for r in self.records:
                if r.pid == pid:
                    return r
        return None

def fetch_records(source, flt: ListingFilter) -> List[ProcessRecord]:
    records = parse_lsof(source.list(flt), flt.dedupe_key)
    if flt.sorted_by_port:
        records.sort(key=lambda r: r.port)
    return records
