"""Antiresorptive medication exposure duration."""

import logging
import math
from datetime import date
from typing import Optional

from mronj_screening.core.errors import IncompleteMedicationHistoryError
from mronj_screening.models.patient import PatientRecord

logger = logging.getLogger(__name__)

DAYS_PER_MONTH = 30


def _month_start(year: Optional[int], month: Optional[int], which: str) -> date:
    """Build the first day of a (year, month) pair from the intake record."""
    if year is None or month is None:
        missing = "year" if year is None else "month"
        raise IncompleteMedicationHistoryError(
            f"medication_{which}_{missing}",
            f"Antiresorptive medication {which} {missing} is required",
        )
    try:
        return date(year, month, 1)
    except ValueError as e:
        raise IncompleteMedicationHistoryError(
            f"medication_{which}_month",
            f"Invalid medication {which} date {year}-{month}: {e}",
        ) from e


def compute_exposure_months(record: PatientRecord, today: Optional[date] = None) -> int:
    """
    Compute medication exposure in whole months.

    Elapsed days between the start month and the stop month (or today, when
    the medication is ongoing) are divided by 30 and rounded up, so any
    partial month counts as a full month of exposure.

    Args:
        record: Patient intake record
        today: Current date; read from the clock when omitted

    Returns:
        Exposure months (0 when the patient is not on antiresorptive medication)

    Raises:
        IncompleteMedicationHistoryError: Medication is flagged but the start
            (or, when stopped, the stop) month is missing or invalid
    """
    if not record.has_antiresorptive_medication:
        return 0

    start = _month_start(record.medication_start_year, record.medication_start_month, "start")

    if record.is_stopped:
        end = _month_start(record.medication_stop_year, record.medication_stop_month, "stop")
    else:
        end = today if today is not None else date.today()

    if end < start:
        # Kept as a positive duration; reversed dates are not rejected.
        logger.warning(f"Medication end {end.isoformat()} precedes start {start.isoformat()}")

    elapsed_days = abs((end - start).days)
    months = math.ceil(elapsed_days / DAYS_PER_MONTH)
    logger.debug(f"Exposure: {elapsed_days} days -> {months} months")
    return months
