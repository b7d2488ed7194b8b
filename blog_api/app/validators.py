"""
Request validation.

Each public ``validate_*`` function takes the raw, untyped JSON body of a
request and returns a ``ValidationResult``: either a normalized pydantic
model holding exactly the schema's fields, or the list of every field
rule that was broken.  Validation never stops at the first failure and
never touches the store, so a rejected request costs no database round
trip.

Field checks are small functions returning an error message (or
``None``); the schema functions run all of them and assemble the result.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generic, List, Optional, TypeVar

from email_validator import EmailNotValidError, validate_email

from .core.errors import ValidationFailure
from .schemas.common import FieldError
from .schemas.post import PostCreate, PostUpdate
from .schemas.user import UserCreate


T = TypeVar("T")

# Sentinel distinguishing "key absent" from an explicit ``null``.
MISSING = object()

_ID_PATTERN = re.compile(r"[+-]?[0-9]+")

# SQLite stores INTEGER columns as signed 64-bit values.
MAX_ID = 2**63 - 1
MIN_ID = -(2**63)


@dataclass
class ValidationResult(Generic[T]):
    """Outcome of validating one request body."""

    value: Optional[T] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> T:
        """Return the normalized value or raise ``ValidationFailure``."""
        if self.errors:
            raise ValidationFailure(self.errors)
        return self.value


# ---------------------------------------------------------------------------
# Field checks.  Each returns ``None`` when the value is acceptable,
# otherwise the message to report.
# ---------------------------------------------------------------------------

def _required_text(message: str) -> Callable[[Any], Optional[str]]:
    def check(value: Any) -> Optional[str]:
        if not isinstance(value, str) or len(value) < 1:
            return message
        return None
    return check


def check_name(value: Any) -> Optional[str]:
    if value is MISSING or value is None or value == "":
        return "Name is required"
    if not isinstance(value, str):
        return "Name must be a string"
    return None


def check_email(value: Any) -> Optional[str]:
    if not isinstance(value, str):
        return "Invalid email address"
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return "Invalid email address"
    return None


check_title = _required_text("Title is required")
check_content = _required_text("Content is required")


def _as_integer(value: Any) -> Optional[int]:
    # JSON has a single number type; 3.0 counts as an integer, True does not.
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return None


def check_author_id(value: Any) -> Optional[str]:
    number = _as_integer(value)
    if number is None or not 1 <= number <= MAX_ID:
        return "Invalid author ID"
    return None


def _optional(expected: type, message: str) -> Callable[[Any], Optional[str]]:
    def check(value: Any) -> Optional[str]:
        if value is MISSING:
            return None
        if not isinstance(value, expected):
            return message
        return None
    return check


check_optional_title = _optional(str, "Title must be a string")
check_optional_content = _optional(str, "Content must be a string")
check_optional_published = _optional(bool, "Published must be a boolean")


# ---------------------------------------------------------------------------
# Schemas
# ---------------------------------------------------------------------------

def _run_checks(
    payload: Any,
    checks: Dict[str, Callable[[Any], Optional[str]]],
) -> List[FieldError]:
    if payload is None:
        # No body at all is treated like an empty object.
        payload = {}
    if not isinstance(payload, dict):
        return [FieldError(field="body", message="Expected a JSON object")]
    errors: List[FieldError] = []
    for name, check in checks.items():
        message = check(payload.get(name, MISSING))
        if message is not None:
            errors.append(FieldError(field=name, message=message))
    return errors


def validate_user_create(payload: Any) -> ValidationResult[UserCreate]:
    """Validate a ``POST /users`` body."""
    errors = _run_checks(payload, {"name": check_name, "email": check_email})
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(value=UserCreate(name=payload["name"], email=payload["email"]))


def validate_post_create(payload: Any) -> ValidationResult[PostCreate]:
    """Validate a ``POST /posts`` body."""
    errors = _run_checks(
        payload,
        {"title": check_title, "content": check_content, "authorId": check_author_id},
    )
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(
        value=PostCreate(
            title=payload["title"],
            content=payload["content"],
            author_id=_as_integer(payload["authorId"]),
        )
    )


def validate_post_update(payload: Any) -> ValidationResult[PostUpdate]:
    """Validate a ``PUT /posts/{id}`` body.

    Every field is optional.  Only keys present in ``payload`` end up in
    the model's ``model_fields_set``, so an empty object normalizes to
    "no changes".
    """
    checks = {
        "title": check_optional_title,
        "content": check_optional_content,
        "published": check_optional_published,
    }
    errors = _run_checks(payload, checks)
    if errors:
        return ValidationResult(errors=errors)
    present = {name: payload[name] for name in checks if name in (payload or {})}
    return ValidationResult(value=PostUpdate(**present))


def parse_id(raw: str) -> int:
    """Parse an identifier taken from the URL path.

    Raises ``ValidationFailure`` for anything that is not a base‑10
    integer SQLite can hold, so ``/posts/abc`` is answered with 400
    before the store is consulted.
    """
    invalid = ValidationFailure([FieldError(field="id", message="Invalid ID")])
    # 19 digits covers the 64-bit range; longer strings are not parsed at all.
    if not _ID_PATTERN.fullmatch(raw) or len(raw.lstrip("+-")) > 19:
        raise invalid
    number = int(raw)
    if not MIN_ID <= number <= MAX_ID:
        raise invalid
    return number
