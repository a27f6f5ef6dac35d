# dosetrack/models/__init__.py

from .medication import Medication
from .dose_log import DoseLog, DoseStatus

__all__ = [
    "Medication",
    "DoseLog",
    "DoseStatus"
]
