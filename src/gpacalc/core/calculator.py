import math
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence, Tuple

from gpacalc.core.entries import Baseline, CourseEntry, CreditBounds
from gpacalc.core.faults import Fault, FaultKind
from gpacalc.core.scale import MAX_POINTS, MIN_POINTS, GradeScale
from gpacalc.logger import get_logger

logger = get_logger("calculator")


def _as_number(value: Any) -> Optional[float]:
    # Fraction, Decimal and numpy scalars are numbers too; raw text is not.
    if isinstance(value, (bool, str, bytes)):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


@dataclass(frozen=True)
class CalculationResult:
    semester_gpa: Optional[float] = None
    cumulative_gpa: Optional[float] = None
    total_credits: Optional[float] = None
    semester_credits: Optional[float] = None
    quality_points: Optional[float] = None
    faults: Tuple[Fault, ...] = ()

    @property
    def ok(self) -> bool:
        return not self.faults

    @property
    def has_numbers(self) -> bool:
        return self.cumulative_gpa is not None

    def fault_kinds(self) -> Tuple[FaultKind, ...]:
        return tuple(f.kind for f in self.faults)

    def as_dict(self, *, round_to: int = 2) -> Dict[str, Any]:
        def _round(value: Optional[float]) -> Optional[float]:
            return None if value is None else round(value, round_to)

        return {
            "sgpa": _round(self.semester_gpa),
            "cgpa": _round(self.cumulative_gpa),
            "total_credits": _round(self.total_credits),
            "semester_credits": self.semester_credits,
            "faults": [
                {
                    "kind": f.kind.name,
                    "index": f.index,
                    "field": f.field,
                    "message": f.message,
                }
                for f in self.faults
            ],
        }


class GradeCalculator:
    """
    Stateless SGPA / CGPA calculator. Holds only the grade scale and the
    credit bounds; entries and baseline are passed in on every call.
    """

    def __init__(self, scale: GradeScale, bounds: Optional[CreditBounds] = None) -> None:
        if not isinstance(scale, GradeScale):
            raise TypeError("scale must be a GradeScale")
        self.scale = scale
        self.bounds = bounds or CreditBounds()

    def _entry_faults(self, index: int, entry: CourseEntry) -> List[Fault]:
        if entry.is_empty:
            return []

        if not (entry.has_credits and entry.has_grade):
            missing = "credits" if not entry.has_credits else "grade"
            value = entry.grade if missing == "credits" else entry.credits
            return [Fault(FaultKind.INCOMPLETE_ENTRY, index, missing, value)]

        faults: List[Fault] = []

        credits = _as_number(entry.credits)
        if credits is None or credits <= 0 or not self.bounds.contains(credits):
            faults.append(Fault(FaultKind.CREDITS_OUT_OF_RANGE, index, "credits", entry.credits))

        if not isinstance(entry.grade, str) or entry.grade not in self.scale:
            faults.append(Fault(FaultKind.UNKNOWN_GRADE, index, "grade", entry.grade))

        if entry.is_repeat:
            if not entry.previous_grade:
                faults.append(Fault(FaultKind.MISSING_PREVIOUS_GRADE, index, "previous_grade", None))
            elif not isinstance(entry.previous_grade, str) or entry.previous_grade not in self.scale:
                faults.append(
                    Fault(FaultKind.UNKNOWN_PREVIOUS_GRADE, index, "previous_grade", entry.previous_grade)
                )

        return faults

    @staticmethod
    def _baseline_faults(baseline: Baseline) -> List[Fault]:
        faults: List[Fault] = []

        gpa = _as_number(baseline.prior_gpa)
        if gpa is None or not MIN_POINTS <= gpa <= MAX_POINTS:
            faults.append(Fault(FaultKind.INVALID_BASELINE, None, "prior_gpa", baseline.prior_gpa))

        credits = _as_number(baseline.prior_credits)
        if credits is None or credits < 0:
            faults.append(Fault(FaultKind.INVALID_BASELINE, None, "prior_credits", baseline.prior_credits))

        return faults

    def validate(self, entries: Sequence[CourseEntry], baseline: Baseline) -> List[Fault]:
        faults: List[Fault] = []
        for index, entry in enumerate(entries):
            faults.extend(self._entry_faults(index, entry))
        faults.extend(self._baseline_faults(baseline))
        return faults

    def compute(self, entries: Sequence[CourseEntry], baseline: Baseline) -> CalculationResult:
        entries = tuple(entries)
        faults = self.validate(entries, baseline)
        if faults:
            logger.info("Calculation rejected with %d fault(s)", len(faults))
            return CalculationResult(faults=tuple(faults))

        prior_gpa = float(baseline.prior_gpa)
        prior_credits = float(baseline.prior_credits)

        overall_qp = prior_gpa * prior_credits
        overall_credits = prior_credits
        semester_qp = 0.0
        semester_credits = 0.0

        for entry in entries:
            if entry.is_empty:
                continue
            credits = float(entry.credits)
            points = self.scale.points(entry.grade)

            semester_qp += credits * points
            semester_credits += credits

            if entry.is_repeat:
                # Credit hours of a repeated course are already in the baseline.
                overall_qp += credits * (points - self.scale.points(entry.previous_grade))
            else:
                overall_qp += credits * points
                overall_credits += credits

        cumulative_gpa = overall_qp / overall_credits if overall_credits > 0 else 0.0

        if semester_credits == 0:
            logger.info("No courses to calculate, falling back to baseline")
            return CalculationResult(
                cumulative_gpa=cumulative_gpa,
                total_credits=overall_credits,
                semester_credits=0.0,
                quality_points=overall_qp,
                faults=(Fault(FaultKind.NO_VALID_COURSES),),
            )

        semester_gpa = semester_qp / semester_credits
        logger.debug(
            "SGPA %.4f over %g credits, CGPA %.4f over %g credits",
            semester_gpa,
            semester_credits,
            cumulative_gpa,
            overall_credits,
        )
        return CalculationResult(
            semester_gpa=semester_gpa,
            cumulative_gpa=cumulative_gpa,
            total_credits=overall_credits,
            semester_credits=semester_credits,
            quality_points=overall_qp,
        )


def validate(
    entries: Sequence[CourseEntry],
    baseline: Baseline,
    *,
    scale: GradeScale,
    bounds: Optional[CreditBounds] = None,
) -> List[Fault]:
    return GradeCalculator(scale, bounds).validate(entries, baseline)


def compute(
    entries: Sequence[CourseEntry],
    baseline: Baseline,
    *,
    scale: GradeScale,
    bounds: Optional[CreditBounds] = None,
) -> CalculationResult:
    return GradeCalculator(scale, bounds).compute(entries, baseline)
