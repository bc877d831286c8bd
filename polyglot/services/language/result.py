"""Result type for steps that degrade instead of raising.

Detector, Translator and Responder never propagate inference failures.
They return a StepResult instead: the value is always usable, and
``degraded`` records whether it is the real answer or a fallback.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, TypeVar

T = TypeVar("T")


@dataclass(frozen=True)
class StepResult(Generic[T]):
    value: T
    degraded: bool = False
    error: str | None = None

    @classmethod
    def ok(cls, value: T) -> StepResult[T]:
        return cls(value=value)

    @classmethod
    def fallback(cls, value: T, error: str) -> StepResult[T]:
        return cls(value=value, degraded=True, error=error)
