from __future__ import annotations

import math
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field, ValidationError

from gpacalc.core.entries import Baseline, CourseEntry, Numeric
from gpacalc.logger import get_logger

logger = get_logger("parsing")


class RowFormatError(Exception):
    def __init__(self, index: Optional[int], detail: str) -> None:
        super().__init__(detail if index is None else f"Row {index + 1}: {detail}")
        self.index = index
        self.detail = detail


class CourseRow(BaseModel):
    """One course row as typed into the form or kept by a front end."""

    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    credits: Optional[str] = ""
    grade: Optional[str] = ""
    repeat: bool = Field(default=False, validation_alias=AliasChoices("repeat", "is_repeat"))
    old_grade: Optional[str] = Field(
        default="",
        validation_alias=AliasChoices("oldGrade", "old_grade", "previous_grade"),
    )


class BaselineRow(BaseModel):
    model_config = ConfigDict(populate_by_name=True, coerce_numbers_to_str=True)

    current_gpa: Optional[str] = Field(
        default="",
        validation_alias=AliasChoices("currentGPA", "current_gpa", "prior_gpa"),
    )
    current_credits: Optional[str] = Field(
        default="",
        validation_alias=AliasChoices("currentCredits", "current_credits", "prior_credits"),
    )


def _parse_number(text: Optional[str]) -> Numeric:
    if text is None:
        return None
    stripped = str(text).strip()
    if not stripped:
        return None
    try:
        value = float(stripped)
    except ValueError:
        return stripped
    if not math.isfinite(value):
        return stripped
    return value


def parse_credits(text: Optional[str]) -> Numeric:
    return _parse_number(text)


def parse_grade(text: Optional[str]) -> Optional[str]:
    if text is None:
        return None
    stripped = str(text).strip()
    return stripped.upper() or None


def _coerce_row(model: type, row: Union[BaseModel, Mapping[str, Any]], index: Optional[int]) -> Any:
    if isinstance(row, model):
        return row
    try:
        return model.model_validate(row)
    except ValidationError as exc:
        logger.warning("Rejected malformed row %s: %s", index, exc.errors())
        raise RowFormatError(index, f"malformed {model.__name__}: {exc}") from exc


def parse_entry(row: Union[CourseRow, Mapping[str, Any]], index: Optional[int] = None) -> CourseEntry:
    course = _coerce_row(CourseRow, row, index)
    is_repeat = course.repeat
    return CourseEntry(
        credits=parse_credits(course.credits),
        grade=parse_grade(course.grade),
        is_repeat=is_repeat,
        previous_grade=parse_grade(course.old_grade) if is_repeat else None,
    )


def parse_entries(rows: Iterable[Union[CourseRow, Mapping[str, Any]]]) -> List[CourseEntry]:
    return [parse_entry(row, index) for index, row in enumerate(rows)]


def parse_baseline(row: Union[BaselineRow, Mapping[str, Any]]) -> Baseline:
    baseline = _coerce_row(BaselineRow, row, None)
    gpa = _parse_number(baseline.current_gpa)
    credits = _parse_number(baseline.current_credits)
    return Baseline(
        prior_gpa=0.0 if gpa is None else gpa,
        prior_credits=0.0 if credits is None else credits,
    )
