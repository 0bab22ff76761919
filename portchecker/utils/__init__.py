from .net import port_from_address
from .path import to_abs_path
