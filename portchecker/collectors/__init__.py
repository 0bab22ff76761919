from .lsof import LsofSource, lsof_args
from .parser import parse_lsof
