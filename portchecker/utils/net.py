from __future__ import annotations

def _safe_int(s: str, default: int = 0) -> int:
    try:
        return int(s)
    except Exception:
        return default

def port_from_address(addr: str) -> int:
    """
    Local port of an lsof NAME column:
      - '*:8080', '127.0.0.1:3000', '[::1]:8080'
      - '192.168.1.5:443->10.0.0.1:51234' (local side only)
      - '*:5353 (LISTEN)'
    Returns 0 when no port can be found.
    """
    if not addr:
        return 0
    local = addr.split(' ', 1)[0].split('-', 1)[0]
    idx = local.rfind(':')
    if idx < 0:
        return 0
    digits = ''
    for ch in local[idx + 1:]:
        if ch not in '0123456789':
            break
        digits += ch
    port = _safe_int(digits, 0)
    return port if 0 <= port <= 65535 else 0
