from __future__ import annotations

class InvalidInput(ValueError):
    """Port text that is not an integer in 1..65535."""
