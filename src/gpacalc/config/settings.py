from dataclasses import dataclass
import os
from typing import Any, Dict, Optional

from dotenv import load_dotenv

from gpacalc.core.calculator import CalculationResult, GradeCalculator
from gpacalc.core.entries import CreditBounds
from gpacalc.core.scale import GradeScale, parse_scale
from gpacalc.logger import set_level


load_dotenv()


class SettingsError(ValueError):
    pass


def _float_setting(name: str, raw: str) -> float:
    try:
        return float(raw)
    except ValueError as exc:
        raise SettingsError(f"{name} must be a number, got {raw!r}") from exc


@dataclass(frozen=True)
class Settings:
    grade_scale_value: str = os.getenv("GPACALC_GRADE_SCALE", "fast_nu")

    credits_min: str = os.getenv("GPACALC_CREDITS_MIN", "1")
    credits_max: str = os.getenv("GPACALC_CREDITS_MAX", "4")
    # Empty means any value between min and max is accepted.
    credits_step: str = os.getenv("GPACALC_CREDITS_STEP", "1")

    round_to: str = os.getenv("GPACALC_ROUND_TO", "2")
    log_level: str = os.getenv("GPACALC_LOG_LEVEL", "WARNING")

    @property
    def round_digits(self) -> int:
        try:
            return int(self.round_to)
        except ValueError as exc:
            raise SettingsError(f"GPACALC_ROUND_TO must be an integer, got {self.round_to!r}") from exc

    def grade_scale(self) -> GradeScale:
        return parse_scale(self.grade_scale_value)

    def credit_bounds(self) -> CreditBounds:
        step: Optional[float] = None
        if self.credits_step.strip():
            step = _float_setting("GPACALC_CREDITS_STEP", self.credits_step)
        minimum = _float_setting("GPACALC_CREDITS_MIN", self.credits_min)
        maximum = _float_setting("GPACALC_CREDITS_MAX", self.credits_max)
        try:
            return CreditBounds(minimum=minimum, maximum=maximum, step=step)
        except ValueError as exc:
            raise SettingsError(str(exc)) from exc

    def calculator(self) -> GradeCalculator:
        return GradeCalculator(self.grade_scale(), self.credit_bounds())

    def summarize(self, result: CalculationResult) -> Dict[str, Any]:
        return result.as_dict(round_to=self.round_digits)


settings = Settings()
set_level(settings.log_level)
