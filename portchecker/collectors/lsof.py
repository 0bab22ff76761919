from __future__ import annotations
import logging
import subprocess
from typing import List

from ..config import CFG, LSOF_LISTEN_ARGS, LSOF_PORT_ARGS
from ..models import ListingFilter

log = logging.getLogger(__name__)

def lsof_args(flt: ListingFilter) -> List[str]:
    if flt.mode == "port":
        return [a.format(port=flt.port) for a in LSOF_PORT_ARGS]
    return list(LSOF_LISTEN_ARGS)

class LsofSource:
    """Runs lsof once per call and hands back its stdout."""

    def __init__(self, cfg: CFG):
        self.cfg = cfg

    def list(self, flt: ListingFilter) -> str:
        cmd = [self.cfg.lsof_path, *lsof_args(flt)]
        log.debug("running %s", cmd)
        try:
            # lsof exits 1 when nothing matches; stdout is still valid
            proc = subprocess.run(cmd, stdout=subprocess.PIPE, stderr=subprocess.DEVNULL,
                                  text=True, timeout=self.cfg.list_timeout, check=False)
        except Exception as e:
            log.warning("lsof invocation failed: %s", e)
            return ""
        return proc.stdout or ""
