"""Hidden updates: change records while noticing them, without tracking it.

Noticing a record goes through the same dispatch path as changing it, so a
field update made by a notice hook normally rewrites the record timestamp
and marks it dirty. This package suppresses the change hooks during notice
and provides a separate list of hidden update functions whose changes are
kept out of the changed-set.

Usage:
    from contactdb.hidden_update import initialize_hidden_update

    hidden = initialize_hidden_update(db)
    hidden.add_function(record_last_seen)
    db.notice(record)
"""

from contactdb.hidden_update.config import HiddenUpdateConfig
from contactdb.hidden_update.extension import (
    HiddenUpdate,
    initialize_hidden_update,
)
from contactdb.hidden_update.quiet import QuietUpdateDispatcher
from contactdb.hidden_update.suppression import (
    ChangeSuppressionPolicy,
    suppress_notice,
    suppressing,
    with_suppression,
)

__all__ = [
    "ChangeSuppressionPolicy",
    "HiddenUpdate",
    "HiddenUpdateConfig",
    "QuietUpdateDispatcher",
    "initialize_hidden_update",
    "suppress_notice",
    "suppressing",
    "with_suppression",
]
