"""
High-level MRONJ Screening Service.
Orchestrates intake parsing, exposure calculation, and risk classification.
"""

import logging
import time
from datetime import date
from typing import Any, Dict, Optional, Union

from mronj_screening.core.engine.classifier import assess, highest_risk
from mronj_screening.core.engine.duration import compute_exposure_months
from mronj_screening.core.parsers.intake_parser import IntakeParser
from mronj_screening.models.assessment import ScreeningResult
from mronj_screening.models.patient import PatientRecord
from mronj_screening.config.settings import OUTPUT_LANGUAGE, SUPPORTED_LANGUAGES

logger = logging.getLogger(__name__)


class ScreeningService:
    """
    Main service for MRONJ pre-procedure screening.
    Provides a clean interface for intake payloads and parsed records alike.
    """

    def __init__(self, language: str = OUTPUT_LANGUAGE):
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")
        self.language = language
        self.parser = IntakeParser()

    def parse_intake(self, payload: Union[str, Dict[str, Any]]) -> PatientRecord:
        """
        Parse an intake payload (JSON text or dict) into a PatientRecord.

        Raises:
            IntakeValidationError: Payload is malformed
        """
        if isinstance(payload, str):
            return self.parser.parse_json(payload)
        return self.parser.parse(payload)

    def screen(
        self,
        payload: Union[str, Dict[str, Any], PatientRecord],
        today: Optional[date] = None,
        language: Optional[str] = None,
    ) -> ScreeningResult:
        """
        Complete screening workflow for one patient.

        Args:
            payload: Intake JSON text, intake dict, or an already parsed record
            today: Assessment date; read once from the clock when omitted
            language: Overrides the service language for this call

        Returns:
            ScreeningResult with per-procedure assessments

        Raises:
            IntakeValidationError: Payload is malformed
            IncompleteMedicationHistoryError: Medication flagged without usable dates
        """
        language = language or self.language
        if language not in SUPPORTED_LANGUAGES:
            raise ValueError(f"Unsupported language: {language}")

        start_time = time.time()
        assessed_on = today if today is not None else date.today()

        # 1. Parse intake
        record = payload if isinstance(payload, PatientRecord) else self.parse_intake(payload)

        # 2. Exposure duration
        exposure_months = compute_exposure_months(record, assessed_on)

        # 3. Classify every procedure
        assessments = assess(
            record,
            today=assessed_on,
            language=language,
            duration_months=exposure_months,
        )
        overall = highest_risk(assessments)

        total_time = (time.time() - start_time) * 1000
        logger.info(
            f"Screening complete: exposure={exposure_months} months, "
            f"highest_risk={overall.value}, took {total_time:.1f}ms"
        )

        return ScreeningResult(
            record=record,
            assessed_on=assessed_on,
            exposure_months=exposure_months,
            assessments=assessments,
            highest_risk=overall,
            language=language,
        )
