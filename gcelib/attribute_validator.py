"""Attribute validation for deploy request fields.

An AttributeValidator is created per validation pass with a decorator (the
field-path namespace, e.g. 'deployDescription') and an error sink. Each
validate_* method checks one field and records at most one rejection on the
sink; none of them raise. Callers run every check they need and then report
the full list of rejections at once.

Reason codes are '{decorator}.{label}.empty', '{decorator}.{label}.invalid'
and '{decorator}.account.notFound'. Sinks receive reject(field_path, reason_code)
for every rejection; '.invalid' rejections additionally pass a third
positional argument, the 'Must match <pattern>' detail, so a sink must
accept an optional detail (see ErrorSink).

Values decoded from YAML or JSON may be numbers rather than strings
(e.g. 'stack: 7890'); pattern checks match against their text form.
"""

import logging
import re
from collections.abc import Sized
from dataclasses import dataclass
from typing import Any, Iterator, List, Optional, Protocol, Union

from gcelib.accounts import AccountLookup

logger = logging.getLogger(__name__)

# Lowercase alphanumerics separated by single hyphens, e.g. 'also-valid'
NAME_PATTERN: re.Pattern = re.compile(r"^[a-z0-9]+(-[a-z0-9]+)*$")
# Lowercase alphanumerics only, e.g. 'myapp'
PREFIX_PATTERN: re.Pattern = re.compile(r"^[a-z0-9]+$")


class ErrorSink(Protocol):
    """Receives rejections. detail is only supplied for '.invalid' codes."""

    def reject(self, field_path: str, reason_code: str, detail: Optional[str] = None) -> None:
        ...


@dataclass(frozen=True)
class Rejection:
    field_path: str
    reason_code: str
    detail: Optional[str] = None

    @property
    def message(self) -> str:
        if self.detail:
            return f"{self.reason_code} ({self.detail})"
        return self.reason_code


class ValidationErrors:
    """In-memory error sink that keeps rejections in the order they arrive."""

    def __init__(self):
        self.rejections: List[Rejection] = []

    def reject(self, field_path: str, reason_code: str, detail: Optional[str] = None) -> None:
        self.rejections.append(Rejection(field_path, reason_code, detail))

    @property
    def has_errors(self) -> bool:
        return bool(self.rejections)

    def field_paths(self) -> List[str]:
        return [r.field_path for r in self.rejections]

    def messages(self) -> List[str]:
        return [r.message for r in self.rejections]

    def __len__(self) -> int:
        return len(self.rejections)

    def __iter__(self) -> Iterator[Rejection]:
        return iter(self.rejections)


def _pattern_text(pattern: Union[str, re.Pattern]) -> str:
    return pattern.pattern if isinstance(pattern, re.Pattern) else pattern


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


class AttributeValidator:
    """Field validator bound to one decorator and one error sink.

    Args:
        decorator: Prefix for every rejected field path
        errors: Sink receiving rejections
    """

    def __init__(self, decorator: str, errors: ErrorSink):
        self.decorator = decorator
        self.errors = errors

    def _reject(self, label: str, reason: str, detail: Optional[str] = None) -> None:
        field_path = f"{self.decorator}.{label}"
        reason_code = f"{field_path}.{reason}"
        logger.debug(f"Rejecting {field_path}: {reason_code} {detail or ''}".rstrip())
        if detail is None:
            self.errors.reject(field_path, reason_code)
        else:
            self.errors.reject(field_path, reason_code, detail)

    def validate_not_empty(self, value: Any, label: str) -> None:
        """Reject None, '' or a collection with no elements.

        Emptiness is structural: [None] and [''] have one element each and
        are accepted.
        """
        if value is None or (isinstance(value, Sized) and len(value) == 0):
            self._reject(label, "empty")

    def validate_by_regex(self, value: Any, label: str, regex: Union[str, re.Pattern]) -> None:
        """Reject a value that does not match regex over its whole length.

        Empty values are left to validate_not_empty. Non-string scalars are
        matched by their str() form.
        """
        if _is_blank(value):
            return
        if re.fullmatch(regex, str(value)) is None:
            self._reject(label, "invalid", f"Must match {_pattern_text(regex)}")

    def validate_credentials(self, account_name: Optional[str], lookup: AccountLookup) -> None:
        if not account_name:
            self._reject("account", "empty")
            return
        if not lookup.find_by_name(account_name):
            self._reject("account", "notFound")

    def validate_details(self, value: Any, label: str) -> None:
        # Details are optional, so an empty value is not an error.
        self.validate_by_regex(value, label, NAME_PATTERN)

    def validate_application(self, value: Any, label: str) -> None:
        self._validate_prefix(value, label)

    def validate_stack(self, value: Any, label: str) -> None:
        self._validate_prefix(value, label)

    def _validate_prefix(self, value: Any, label: str) -> None:
        if _is_blank(value):
            self.validate_not_empty(value, label)
            return
        self.validate_by_regex(value, label, PREFIX_PATTERN)
