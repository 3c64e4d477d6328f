from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional


class FaultKind(Enum):
    INCOMPLETE_ENTRY = "incomplete entry"
    CREDITS_OUT_OF_RANGE = "credits out of range"
    UNKNOWN_GRADE = "unknown grade"
    MISSING_PREVIOUS_GRADE = "missing previous grade for repeat"
    UNKNOWN_PREVIOUS_GRADE = "unknown previous grade"
    INVALID_BASELINE = "invalid baseline"
    NO_VALID_COURSES = "no courses to calculate"


@dataclass(frozen=True)
class Fault:
    kind: FaultKind
    index: Optional[int] = None
    field: Optional[str] = None
    value: Any = None

    @property
    def message(self) -> str:
        where = f"Course {self.index + 1}" if self.index is not None else "Input"
        text = f"{where}: {self.kind.value}"
        if self.field:
            text += f" ({self.field}={self.value!r})"
        return text
