import os
from pathlib import Path
from typing import Optional

PACKAGE_DIR = Path(__file__).parent.parent.resolve()
USER_CONFIG_DIR = Path("~/.config/portchecker").expanduser()

def to_abs_path(p: Optional[str | os.PathLike]) -> Optional[Path]:
    """Resolve a config file path.
    Lookup order for relative paths:
      1) current working directory
      2) ~/.config/portchecker
      3) the package folder
    Absolute paths are only expanded and resolved.
    """
    if not p:
        return None
    pp = Path(p).expanduser()
    if pp.is_absolute():
        return pp.resolve()
    for base in (Path.cwd(), USER_CONFIG_DIR):
        cand = base / pp
        if cand.exists():
            return cand.resolve()
    return (PACKAGE_DIR / pp).resolve()
