from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

@dataclass(frozen=True)
class ProcessRecord:
    command: str
    pid: int
    user: str
    type: str   # 'IPv4', 'IPv6', ...
    name: str   # raw lsof NAME column, e.g. '*:8080' or '10.0.0.1:443->10.0.0.2:51234'
    port: int = 0

    def to_dict(self) -> dict:
        return {"command": self.command, "pid": self.pid, "user": self.user,
                "type": self.type, "name": self.name, "port": self.port}

@dataclass(frozen=True)
class ListingFilter:
    mode: str  # 'port' | 'all'
    port: Optional[int] = None

    @classmethod
    def single_port(cls, port: int) -> "ListingFilter":
        return cls(mode="port", port=port)

    @classmethod
    def all_listening(cls) -> "ListingFilter":
        return cls(mode="all")

    @property
    def dedupe_key(self) -> str:
        return "pid" if self.mode == "port" else "port"

    @property
    def sorted_by_port(self) -> bool:
        return self.mode == "all"

@dataclass(frozen=True)
class Outcome:
    terminated: bool
    message: str
    code: Optional[int] = None
    elevated: bool = False
