from .errors import (
    AthleteError,
    DeleteActiveSelectionError,
    NotFoundError,
    StorageError,
    StorageReadError,
    StorageWriteError,
    ValidationError,
)
from .models import Athlete, Career, Finance, Injury, PerformanceEntry, normalize_record
from .registry import AthleteRegistry
from .storage import AthleteStorage, ThemeStorage

__all__ = [
    "AthleteError", "DeleteActiveSelectionError", "NotFoundError",
    "StorageError", "StorageReadError", "StorageWriteError", "ValidationError",
    "Athlete", "Career", "Finance", "Injury", "PerformanceEntry", "normalize_record",
    "AthleteRegistry", "AthleteStorage", "ThemeStorage",
]
