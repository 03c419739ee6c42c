"""
Tests for antiresorptive exposure duration.
"""

from datetime import date

import pytest

from mronj_screening.core.engine.duration import compute_exposure_months
from mronj_screening.core.errors import IncompleteMedicationHistoryError
from mronj_screening.models.patient import PatientRecord


def _ongoing(start_year, start_month):
    return PatientRecord(
        has_antiresorptive_medication=True,
        medication_start_year=start_year,
        medication_start_month=start_month,
    )


def _stopped(start_year, start_month, stop_year, stop_month):
    return PatientRecord(
        has_antiresorptive_medication=True,
        medication_start_year=start_year,
        medication_start_month=start_month,
        is_stopped=True,
        medication_stop_year=stop_year,
        medication_stop_month=stop_month,
    )


def test_not_medicated_is_zero():
    record = PatientRecord(
        has_antiresorptive_medication=False,
        medication_start_year=1990,
        medication_start_month=1,
    )
    assert compute_exposure_months(record, today=date(2024, 1, 1)) == 0


def test_not_medicated_ignores_missing_dates():
    assert compute_exposure_months(PatientRecord(), today=date(2024, 1, 1)) == 0


def test_exactly_thirty_days_is_one_month():
    # 2023-04-01 -> 2023-05-01 is 30 days
    assert compute_exposure_months(_ongoing(2023, 4), today=date(2023, 5, 1)) == 1


def test_thirty_one_days_rounds_up_to_two_months():
    # 2023-01-01 -> 2023-02-01 is 31 days
    assert compute_exposure_months(_ongoing(2023, 1), today=date(2023, 2, 1)) == 2


def test_same_day_is_zero():
    assert compute_exposure_months(_ongoing(2023, 6), today=date(2023, 6, 1)) == 0


def test_single_day_counts_as_full_month():
    assert compute_exposure_months(_ongoing(2023, 6), today=date(2023, 6, 2)) == 1


def test_ongoing_uses_injected_today():
    # 2020-01-01 -> 2023-06-01 is 1247 days
    assert compute_exposure_months(_ongoing(2020, 1), today=date(2023, 6, 1)) == 42


def test_stopped_uses_stop_month_not_today():
    record = _stopped(2021, 1, 2022, 1)
    # 365 days -> 12.17 -> 13
    assert compute_exposure_months(record, today=date(2030, 1, 1)) == 13
    assert compute_exposure_months(record, today=date(2022, 6, 1)) == 13


def test_stop_before_start_is_absolute(caplog):
    forward = _stopped(2021, 1, 2022, 1)
    reversed_ = _stopped(2022, 1, 2021, 1)
    with caplog.at_level("WARNING"):
        assert compute_exposure_months(reversed_) == compute_exposure_months(forward)
    assert "precedes start" in caplog.text


def test_default_today_reads_clock():
    record = _ongoing(date.today().year, date.today().month)
    assert 0 <= compute_exposure_months(record) <= 1


class TestIncompleteMedicationHistory:
    def test_missing_start_year(self):
        record = PatientRecord(has_antiresorptive_medication=True, medication_start_month=3)
        with pytest.raises(IncompleteMedicationHistoryError) as exc:
            compute_exposure_months(record, today=date(2024, 1, 1))
        assert exc.value.field == "medication_start_year"

    def test_missing_start_month(self):
        record = PatientRecord(has_antiresorptive_medication=True, medication_start_year=2020)
        with pytest.raises(IncompleteMedicationHistoryError) as exc:
            compute_exposure_months(record, today=date(2024, 1, 1))
        assert exc.value.field == "medication_start_month"

    def test_stopped_without_stop_date(self):
        record = PatientRecord(
            has_antiresorptive_medication=True,
            medication_start_year=2020,
            medication_start_month=1,
            is_stopped=True,
        )
        with pytest.raises(IncompleteMedicationHistoryError) as exc:
            compute_exposure_months(record, today=date(2024, 1, 1))
        assert exc.value.field == "medication_stop_year"

    def test_month_out_of_range(self):
        with pytest.raises(IncompleteMedicationHistoryError):
            compute_exposure_months(_ongoing(2020, 13), today=date(2024, 1, 1))

    def test_is_a_value_error(self):
        record = PatientRecord(has_antiresorptive_medication=True)
        with pytest.raises(ValueError):
            compute_exposure_months(record, today=date(2024, 1, 1))
