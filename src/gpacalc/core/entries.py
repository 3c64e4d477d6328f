from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Union

# Raw text survives here only when the parse boundary could not read a number;
# validation reports it instead of letting it reach the arithmetic.
Numeric = Union[float, int, str, None]

STEP_TOLERANCE = 1e-9


@dataclass(frozen=True)
class CourseEntry:
    credits: Numeric = None
    grade: Optional[str] = None
    is_repeat: bool = False
    previous_grade: Optional[str] = None

    @property
    def has_credits(self) -> bool:
        return self.credits is not None and self.credits != ""

    @property
    def has_grade(self) -> bool:
        return bool(self.grade)

    @property
    def is_empty(self) -> bool:
        return not self.has_credits and not self.has_grade


@dataclass(frozen=True)
class Baseline:
    prior_gpa: Numeric = 0.0
    prior_credits: Numeric = 0.0


@dataclass(frozen=True)
class CreditBounds:
    minimum: float = 1.0
    maximum: float = 4.0
    step: Optional[float] = 1.0

    def __post_init__(self) -> None:
        if self.minimum <= 0:
            raise ValueError("Minimum course credits must be greater than 0")
        if self.maximum < self.minimum:
            raise ValueError("Maximum course credits must not be below the minimum")
        if self.step is not None and self.step <= 0:
            raise ValueError("Credit step must be greater than 0")

    def contains(self, value: float) -> bool:
        if not self.minimum <= value <= self.maximum:
            return False
        if self.step is None:
            return True
        steps = (value - self.minimum) / self.step
        return abs(steps - round(steps)) <= STEP_TOLERANCE
