"""Contact database core - records and the host database."""

from contactdb.core.database import ContactDatabase
from contactdb.core.types import Record

__all__ = ["ContactDatabase", "Record"]
