import unittest

from gpacalc.core.calculator import GradeCalculator
from gpacalc.core.entries import Baseline, CourseEntry, CreditBounds
from gpacalc.core.faults import FaultKind
from gpacalc.core.parsing import (
    BaselineRow,
    CourseRow,
    RowFormatError,
    parse_baseline,
    parse_credits,
    parse_entries,
    parse_entry,
    parse_grade,
)
from gpacalc.core.scale import FAST_NU_SCALE, GradeScale


class ParseFieldTests(unittest.TestCase):
    def test_parse_credits(self):
        self.assertIsNone(parse_credits(""))
        self.assertIsNone(parse_credits("   "))
        self.assertIsNone(parse_credits(None))
        self.assertEqual(parse_credits(" 3 "), 3.0)
        self.assertEqual(parse_credits("1.5"), 1.5)
        self.assertEqual(parse_credits("three"), "three")
        self.assertEqual(parse_credits("nan"), "nan")

    def test_parse_grade(self):
        self.assertIsNone(parse_grade(""))
        self.assertIsNone(parse_grade(None))
        self.assertEqual(parse_grade(" b+ "), "B+")


class ParseRowTests(unittest.TestCase):
    def test_saved_row_shape(self):
        row = {"credits": "3", "grade": "A", "repeat": True, "oldGrade": "C"}
        self.assertEqual(parse_entry(row), CourseEntry(3.0, "A", True, "C"))

    def test_previous_grade_dropped_without_repeat(self):
        row = {"credits": "3", "grade": "A", "repeat": False, "oldGrade": "C"}
        self.assertIsNone(parse_entry(row).previous_grade)

    def test_model_and_numbers_accepted(self):
        entry = parse_entry(CourseRow(credits="2", grade="b", is_repeat=True, previous_grade="d"))
        self.assertEqual(entry, CourseEntry(2.0, "B", True, "D"))
        self.assertEqual(parse_entry({"credits": 4, "grade": "A-"}).credits, 4.0)

    def test_blank_row_is_empty(self):
        entries = parse_entries([{}, {"credits": "", "grade": "", "repeat": False, "oldGrade": ""}])
        self.assertTrue(all(e.is_empty for e in entries))

    def test_malformed_row_raises(self):
        with self.assertRaises(RowFormatError) as ctx:
            parse_entries([{"credits": "3", "grade": "A"}, {"repeat": "sometimes"}])
        self.assertEqual(ctx.exception.index, 1)

    def test_baseline(self):
        self.assertEqual(parse_baseline({"currentGPA": "3.2", "currentCredits": "30"}), Baseline(3.2, 30.0))
        self.assertEqual(parse_baseline({}), Baseline(0.0, 0.0))
        self.assertEqual(parse_baseline(BaselineRow(prior_gpa="abc")).prior_gpa, "abc")


class ParseThenComputeTests(unittest.TestCase):
    def setUp(self):
        self.calc = GradeCalculator(FAST_NU_SCALE)

    def test_mixed_case_scale_matches_parsed_grades(self):
        calc = GradeCalculator(GradeScale([("Pass", 4.0), ("Fail", 0.0)]), CreditBounds())
        result = calc.compute(parse_entries([{"credits": "2", "grade": "pass"}]), Baseline())
        self.assertTrue(result.ok)
        self.assertAlmostEqual(result.semester_gpa, 4.0)

    def test_unparsable_input_becomes_faults(self):
        rows = [
            {"credits": "three", "grade": "A"},
            {"credits": "3", "grade": "E"},
            {"credits": "", "grade": ""},
        ]
        result = self.calc.compute(parse_entries(rows), parse_baseline({"currentGPA": "n/a"}))
        self.assertEqual(
            [(f.kind, f.index) for f in result.faults],
            [
                (FaultKind.CREDITS_OUT_OF_RANGE, 0),
                (FaultKind.UNKNOWN_GRADE, 1),
                (FaultKind.INVALID_BASELINE, None),
            ],
        )
        self.assertFalse(result.has_numbers)

    def test_form_round_trip(self):
        rows = [
            {"credits": "3", "grade": "a"},
            {"credits": "3", "grade": "A", "repeat": True, "oldGrade": "c"},
            {"credits": "", "grade": ""},
        ]
        result = self.calc.compute(parse_entries(rows), parse_baseline({"currentGPA": "3.0", "currentCredits": "30"}))
        self.assertTrue(result.ok)
        self.assertAlmostEqual(result.semester_gpa, 4.0)
        self.assertAlmostEqual(result.cumulative_gpa, 108 / 33)
        self.assertEqual(result.total_credits, 33)


if __name__ == "__main__":
    unittest.main()
