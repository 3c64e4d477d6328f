from typing import Dict, Iterable, Iterator, Mapping, Tuple, Union

MIN_POINTS = 0.0
MAX_POINTS = 4.0


class GradeScaleError(ValueError):
    pass


class GradeScale:
    """
    Ordered, read-only mapping of letter grade -> quality points.
    Built from (label, points) pairs so that duplicate labels can be rejected.
    """

    def __init__(self, pairs: Union[Iterable[Tuple[str, float]], Mapping[str, float]]) -> None:
        if isinstance(pairs, Mapping):
            pairs = pairs.items()

        points_by_label: Dict[str, float] = {}
        for label, points in pairs:
            if not isinstance(label, str) or not label.strip():
                raise GradeScaleError(f"Grade label must be a non-empty string, got {label!r}")
            label = label.strip().upper()
            if label in points_by_label:
                raise GradeScaleError(f"Duplicate grade label: {label}")
            if isinstance(points, bool) or not isinstance(points, (int, float)):
                raise GradeScaleError(f"Grade points for {label} must be a number, got {points!r}")
            if not MIN_POINTS <= points <= MAX_POINTS:
                raise GradeScaleError(
                    f"Grade points for {label} must be between {MIN_POINTS} and {MAX_POINTS}"
                )
            points_by_label[label] = float(points)

        if not points_by_label:
            raise GradeScaleError("Grade scale must contain at least one grade")

        self._points = points_by_label

    def points(self, grade: str) -> float:
        return self._points[grade]

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(self._points)

    @property
    def max_points(self) -> float:
        return max(self._points.values())

    def items(self) -> Tuple[Tuple[str, float], ...]:
        return tuple(self._points.items())

    def __contains__(self, grade: object) -> bool:
        return isinstance(grade, str) and grade in self._points

    def __iter__(self) -> Iterator[str]:
        return iter(self._points)

    def __len__(self) -> int:
        return len(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GradeScale):
            return NotImplemented
        return self.items() == other.items()

    def __hash__(self) -> int:
        return hash(self.items())

    def __repr__(self) -> str:
        body = ", ".join(f"{label}={points:g}" for label, points in self._points.items())
        return f"GradeScale({body})"


FAST_NU_SCALE = GradeScale(
    [
        ("A+", 4.0),
        ("A", 4.0),
        ("A-", 3.67),
        ("B+", 3.33),
        ("B", 3.0),
        ("B-", 2.67),
        ("C+", 2.33),
        ("C", 2.0),
        ("C-", 1.67),
        ("D+", 1.33),
        ("D", 1.0),
        ("F", 0.0),
    ]
)

STANDARD_SCALE = GradeScale(
    [(label, points) for label, points in FAST_NU_SCALE.items() if label != "A+"]
)

PRESETS: Dict[str, GradeScale] = {
    "fast_nu": FAST_NU_SCALE,
    "standard": STANDARD_SCALE,
}


def _split_csv(value: str) -> Tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


def parse_scale(value: str) -> GradeScale:
    """
    value: a preset name ("fast_nu", "standard") or an inline list such as
    "A=4.0,B=3.0,C=2.0,F=0"
    """
    key = value.strip().lower()
    if key in PRESETS:
        return PRESETS[key]

    pairs = []
    for item in _split_csv(value):
        label, sep, raw_points = item.partition("=")
        if not sep:
            raise GradeScaleError(f"Unknown grade scale preset or malformed entry: {item}")
        try:
            points = float(raw_points)
        except ValueError as exc:
            raise GradeScaleError(f"Grade points for {label.strip()} must be a number") from exc
        pairs.append((label.strip().upper(), points))
    return GradeScale(pairs)
