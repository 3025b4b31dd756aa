from datetime import date, datetime

import pytest

from src.ram_points.ram_points.core.enums import Term
from src.ram_points.ram_points.core.exceptions import ValidationError
from src.ram_points.ram_points.terms.classifier import classify, counter_for


@pytest.mark.parametrize(
    "day, expected",
    [
        (date(2024, 12, 31), Term.OTHER),
        (date(2025, 1, 1), Term.SPRING_2025),
        (date(2025, 5, 31), Term.SPRING_2025),
        (date(2025, 6, 1), Term.OTHER),
        (date(2025, 7, 31), Term.OTHER),
        (date(2025, 8, 1), Term.FALL_2025),
        (date(2025, 12, 31), Term.FALL_2025),
        (date(2026, 1, 1), Term.OTHER),
    ],
)
def test_classify_term_boundaries(day, expected):
    assert classify(day) == expected


def test_classify_accepts_datetime_and_iso_string():
    assert classify(datetime(2025, 2, 1, 23, 59)) == Term.SPRING_2025
    assert classify("2025-09-15") == Term.FALL_2025


def test_classify_rejects_garbage():
    with pytest.raises(ValidationError):
        classify("15/09/2025")


def test_counter_for_terms():
    assert counter_for(Term.SPRING_2025) == "spring_2025_total"
    assert counter_for(Term.FALL_2025) == "fall_2025_total"
    assert counter_for(Term.OTHER) is None
