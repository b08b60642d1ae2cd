"""Validation helpers for command arguments and host payloads."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, ClassVar, Mapping

INT32_MIN = -(2**31)
INT32_MAX = 2**31 - 1

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")


class ValidationError(ValueError):
    """Raised when command arguments are malformed or out of range."""


class ModelValidationError(ValidationError):
    """Raised when a payload does not satisfy a model's requirements."""

    def __init__(self, model: type[Any], errors: list[str]) -> None:
        self.model = model
        self.errors = list(errors)
        message = ", ".join(self.errors) if self.errors else "invalid payload"
        super().__init__(f"{model.__name__} validation failed: {message}")


class ResolutionError(LookupError):
    """Raised when a player name matches no session or more than one."""

    def __init__(self, query: str, count: int) -> None:
        self.query = query
        self.count = count
        if count == 0:
            message = "No players matched."
        else:
            message = "More than one player matched."
        super().__init__(message)


def parse_exp(value: Any, *, allow_zero: bool) -> int:
    """Parse an EXP amount supplied to an admin command.

    Accepts integers and integer strings within the 32-bit range. ``allow_zero``
    selects between the non-negative rule of ``setlevel`` and the strictly
    positive rule of ``addlevel``/``minuslevel``.
    """

    message = (
        "EXP must be a non-negative number."
        if allow_zero
        else "EXP must be a positive number."
    )
    if isinstance(value, bool):
        raise ValidationError(message)
    if isinstance(value, int):
        amount = value
    else:
        text = str(value).strip()
        if not _INTEGER_RE.match(text):
            raise ValidationError(message)
        amount = int(text)
    if amount < INT32_MIN or amount > INT32_MAX:
        raise ValidationError(message)
    if amount < 0 or (amount == 0 and not allow_zero):
        raise ValidationError(message)
    return amount


@dataclass(frozen=True)
class FieldSpec:
    expected: Any
    description: str
    required: bool = True


def _matches_type(value: Any, expected: Any) -> bool:
    if isinstance(expected, tuple):
        return any(_matches_type(value, part) for part in expected)
    if expected is int:
        return isinstance(value, int) and not isinstance(value, bool)
    if expected is bool:
        return isinstance(value, bool)
    if expected is str:
        return isinstance(value, str)
    return isinstance(value, expected)


class ModelValidator:
    """Base class for model payload validators."""

    model: ClassVar[type[Any]]
    fields: ClassVar[Mapping[str, FieldSpec]]

    @classmethod
    def validate(cls, data: Mapping[str, Any]) -> dict[str, Any]:
        if not isinstance(data, Mapping):
            raise ModelValidationError(
                cls.model, ["Payload must be a mapping of field names to values"]
            )

        errors: list[str] = []
        normalized: dict[str, Any] = {}
        for name, spec in cls.fields.items():
            if name not in data:
                if spec.required:
                    errors.append(
                        f"Missing required field '{name}' ({spec.description})"
                    )
                continue
            value = data[name]
            if not _matches_type(value, spec.expected):
                errors.append(
                    f"Field '{name}' expected {spec.description}, "
                    f"received {type(value).__name__}"
                )
                continue
            normalized[name] = value

        if errors:
            raise ModelValidationError(cls.model, errors)
        return normalized


__all__ = [
    "INT32_MAX",
    "INT32_MIN",
    "FieldSpec",
    "ModelValidationError",
    "ModelValidator",
    "ResolutionError",
    "ValidationError",
    "parse_exp",
]
