"""Record type for the contact database."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any


@dataclass(eq=False)
class Record:
    """A single contact.

    Records are mutable and compared by identity: the same Record object
    is passed through every hook invoked for it.

    Attributes:
        record_id: Sequence-based identifier (e.g., "CON-00001")
        name: Display name
        fields: Free-form field values keyed by field name
        timestamp: Time of the last tracked change, set by change hooks
        last_seen: Time the record was last noticed
    """

    record_id: str
    name: str
    fields: dict[str, Any] = field(default_factory=dict)
    timestamp: datetime | None = None
    last_seen: datetime | None = None

    def assign(self, name: str, value: Any) -> None:
        """Store a value without any bookkeeping.

        Known attributes (``name``, ``timestamp``, ``last_seen``) are set
        directly, anything else goes into ``fields``.
        """
        if name in ("name", "timestamp", "last_seen"):
            setattr(self, name, value)
        else:
            self.fields[name] = value

    def __repr__(self) -> str:
        return f"Record({self.record_id!r}, {self.name!r})"
