"""
Field-level validation error accumulator.
"""

from __future__ import annotations

from typing import Any


class Validator:
    """
    Collects one error message per field.

    The first failure recorded for a field wins; later failures for the same
    field are ignored so clients always see the most basic problem first.
    """

    def __init__(self) -> None:
        self.errors: dict[str, str] = {}

    def valid(self) -> bool:
        return not self.errors

    def add_error(self, field: str, message: str) -> None:
        if field not in self.errors:
            self.errors[field] = message

    def check(self, ok: bool, field: str, message: str) -> None:
        if not ok:
            self.add_error(field, message)


def permitted_value(value: Any, *allowed: Any) -> bool:
    return value in allowed
