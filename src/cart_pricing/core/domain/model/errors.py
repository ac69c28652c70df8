from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class PricingError(Exception):
    message: str

    def __str__(self) -> str:  # pragma: no cover
        return self.message


@dataclass(frozen=True)
class InputValidationError(PricingError):
    field: str
    constraint: str

    def __str__(self) -> str:
        return f"invalid_input: {self.field} {self.constraint} ({self.message})"


@dataclass(frozen=True)
class TraceError(PricingError):
    pass
