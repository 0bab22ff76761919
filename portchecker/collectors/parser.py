from __future__ import annotations
from typing import List, Set

from ..models import ProcessRecord
from ..utils.net import port_from_address

# COMMAND PID USER FD TYPE DEVICE SIZE/OFF NODE NAME
LSOF_FIELDS = 9

def parse_lsof(output: str, dedupe: str = "pid") -> List[ProcessRecord]:
    lines = [l for l in output.splitlines() if l]
    if len(lines) < 2:
        return []

    results: List[ProcessRecord] = []
    seen: Set[int] = set()
    for line in lines[1:]:
        parts = line.split(None, LSOF_FIELDS - 1)
        if len(parts) < LSOF_FIELDS:
            continue
        if not parts[1].isdecimal():
            continue
        pid = int(parts[1])

        port = port_from_address(parts[8])
        key = pid if dedupe == "pid" else port
        if key in seen:
            continue
        seen.add(key)

        results.append(ProcessRecord(command=parts[0], pid=pid, user=parts[2],
                                     type=parts[4], name=parts[8], port=port))
    return results
