from __future__ import annotations
import json
from dataclasses import dataclass, fields
from typing import Optional
from .utils.path import to_abs_path
try:
    import yaml  # type: ignore
except Exception:
    yaml = None

@dataclass
class CFG:
    lsof_path: str = "lsof"
    list_timeout: float = 10.0
    settle_delay: float = 0.5
    elevation: str = "auto"   # auto | osascript | pkexec | sudo | none
    elevation_timeout: float = 120.0

LSOF_PORT_ARGS = ["-i", ":{port}", "-P", "-n"]
LSOF_LISTEN_ARGS = ["-iTCP", "-sTCP:LISTEN", "-P", "-n"]

STATUS_IDLE = "Enter a port number and press search."
STATUS_INVALID = "Enter a valid port number (1-65535)."
STATUS_SEARCH_PORT = "Searching port {port}..."
STATUS_SEARCH_ALL = "Searching all listening TCP ports..."
STATUS_EMPTY_PORT = "No process is using port {port}."
STATUS_EMPTY_ALL = "No listening TCP ports found."
STATUS_FOUND = "Found {count} process(es)."
STATUS_KILLED = "Terminated '{command}' (PID: {pid})."
STATUS_KILL_CODE = "Failed to terminate process (error code: {code})."
STATUS_KILL_MSG = "Failed to terminate process: {message}"
CONFIRM_PROMPT = "Terminate '{command}' (PID: {pid})? This cannot be undone."

def load_cfg_file(path: Optional[str], cfg: Optional[CFG] = None) -> CFG:
    cfg = cfg or CFG()
    if not path:
        return cfg
    p = to_abs_path(path)
    if not p or not p.exists():
        print(f"[warn] config not found: {p}")
        return cfg
    txt = p.read_text(encoding="utf-8")
    data = yaml.safe_load(txt) if yaml and p.suffix in (".yaml", ".yml") else json.loads(txt)
    known = {f.name for f in fields(CFG)}
    for k, v in (data or {}).items():
        if k not in known:
            print(f"[warn] unknown config key ignored: {k}")
            continue
        setattr(cfg, k, v)
    return cfg

def init_cfg_from_args(args) -> CFG:
    cfg = load_cfg_file(getattr(args, "config", None))
    if getattr(args, "lsof", None):
        cfg.lsof_path = args.lsof
    if getattr(args, "settle_delay", None) is not None:
        cfg.settle_delay = max(0.0, float(args.settle_delay))
    if getattr(args, "elevation", None):
        cfg.elevation = args.elevation
    return cfg
