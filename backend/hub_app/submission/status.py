"""
Per-document submission state derived from the pending mutation

When several forms of the same kind are on one page, each must only show a
busy state for the mutation that targets its own document. The state is a
pure function of the pending mutation and the document; nothing is stored.
This only disables the UI while a call is pending; it does not order or
deduplicate mutations.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional, Protocol

if TYPE_CHECKING:
    from ..validation.forms import RawFields


logger = logging.getLogger(__name__)


class Intent(str, Enum):
    """Kind of mutation a form submits"""
    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


def parse_intent(fields: "RawFields") -> Intent:
    """Explicit ``intent`` field, otherwise update when an id is present"""
    raw = fields.get("intent")
    if raw:
        try:
            return Intent(raw)
        except ValueError:
            logger.warning(f"Ignoring unknown form intent '{raw}'")
    return Intent.UPDATE if fields.get("id") else Intent.CREATE


class Identified(Protocol):
    id: Optional[str]


@dataclass(frozen=True)
class PendingMutation:
    """Identity of the mutation currently in flight; target_id is None for create"""
    intent: Intent
    target_id: Optional[str] = None

    @classmethod
    def from_fields(cls, fields: "RawFields") -> "PendingMutation":
        """Build from a submitted form, with the intent the submission will execute"""
        intent = parse_intent(fields)
        # a create targets the "new document" form, even when the id is user-chosen
        if intent is Intent.CREATE:
            return cls(intent=intent)
        return cls(intent=intent, target_id=fields.get("id") or None)


@dataclass(frozen=True)
class SubmissionStatus:
    is_creating: bool = False
    is_updating: bool = False
    is_deleting: bool = False
    is_new: bool = False

    @property
    def is_busy(self) -> bool:
        return self.is_creating or self.is_updating or self.is_deleting


def derive_submission_status(
    pending: Optional[PendingMutation],
    document: Optional[Identified]
) -> SubmissionStatus:
    """
    Derive the submission state of one form

    Args:
        pending: Mutation in flight, None when nothing is being submitted
        document: Document the form edits, None for a "new document" form

    Returns:
        SubmissionStatus whose intent flags are only set when the pending
        mutation targets exactly this document
    """
    document_id = document.id if document is not None else None
    targets_document = pending is not None and pending.target_id == document_id

    return SubmissionStatus(
        is_creating=targets_document and pending.intent is Intent.CREATE,
        is_updating=targets_document and pending.intent is Intent.UPDATE,
        is_deleting=targets_document and pending.intent is Intent.DELETE,
        is_new=document is None,
    )
