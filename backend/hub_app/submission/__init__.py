"""
Submission state tracking for dashboard forms
"""

from .status import (
    Intent,
    PendingMutation,
    SubmissionStatus,
    derive_submission_status,
    parse_intent,
)

__all__ = [
    "Intent",
    "PendingMutation",
    "SubmissionStatus",
    "derive_submission_status",
    "parse_intent",
]
