from .models import ListingFilter, Outcome, ProcessRecord
from .session import PortChecker

__version__ = "0.1.0"
