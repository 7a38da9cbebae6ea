"""
Validation results and form error collections
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Generic, Optional, TypeVar, Union


T = TypeVar("T")


@dataclass(frozen=True)
class Valid(Generic[T]):
    """Successful validation carrying the typed value"""
    data: T

    @property
    def valid(self) -> bool:
        return True

    @property
    def error(self) -> None:
        return None


@dataclass(frozen=True)
class Invalid:
    """Failed validation carrying a user-facing message"""
    error: str

    @property
    def valid(self) -> bool:
        return False


ValidationResult = Union[Valid[T], Invalid]


@dataclass
class FormErrors:
    """
    Per-field error messages of one submitted form

    ``id`` is the id of the document the form edits (None for a new one) so
    that errors can be attributed to the right form when several forms of the
    same kind are shown at once. ``other`` holds errors not tied to a field.
    """
    id: Optional[str] = None
    fields: Dict[str, str] = field(default_factory=dict)
    other: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.fields) or self.other is not None

    def get(self, name: str) -> Optional[str]:
        return self.fields.get(name)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"id": self.id, **self.fields}
        if self.other is not None:
            data["other"] = self.other
        return data


def collect_errors(document_id: Optional[str], results: Dict[str, ValidationResult]) -> Optional[FormErrors]:
    """
    Gather the errors of independently validated fields

    Returns:
        FormErrors with every invalid field, or None if all fields are valid
    """
    errors = {name: result.error for name, result in results.items() if not result.valid}
    if not errors:
        return None
    return FormErrors(id=document_id, fields=errors)
