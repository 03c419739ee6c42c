"""Per-procedure MRONJ risk classification."""

import logging
from datetime import date
from typing import Iterable, List, Optional

from mronj_screening.config.settings import OUTPUT_LANGUAGE, SUPPORTED_LANGUAGES
from mronj_screening.core.engine.duration import compute_exposure_months
from mronj_screening.core.engine.rules import first_matching_rule
from mronj_screening.models.assessment import (
    PROCEDURES,
    ProcedureAssessment,
    RiskLevel,
)
from mronj_screening.models.patient import PatientRecord

logger = logging.getLogger(__name__)


def assess(
    record: PatientRecord,
    today: Optional[date] = None,
    language: Optional[str] = None,
    duration_months: Optional[int] = None,
) -> List[ProcedureAssessment]:
    """
    Classify MRONJ risk for every screened procedure.

    Args:
        record: Patient intake record
        today: Current date for ongoing medication; read once from the clock when omitted
        language: Recommendation language ("zh-TW" or "en"), defaults to OUTPUT_LANGUAGE
        duration_months: Precomputed exposure; computed from the record when omitted

    Returns:
        One ProcedureAssessment per procedure, in canonical order

    Raises:
        ValueError: Unsupported language
        IncompleteMedicationHistoryError: Medication flagged without usable dates
    """
    language = language or OUTPUT_LANGUAGE
    if language not in SUPPORTED_LANGUAGES:
        raise ValueError(f"Unsupported language: {language}")
    if duration_months is None:
        duration_months = compute_exposure_months(record, today)

    shared_facts = {
        "has_antiresorptive_medication": record.has_antiresorptive_medication,
        "duration_months": duration_months,
        "has_high_risk_comorbidity": record.has_high_risk_comorbidity,
    }

    assessments = []
    for procedure in PROCEDURES:
        facts = dict(shared_facts, invasive=procedure.invasive)
        rule = first_matching_rule(facts)
        logger.debug(f"{procedure.value}: rule={rule['id']} risk={rule['risk_level'].value}")

        assessments.append(ProcedureAssessment(
            procedure=procedure,
            risk_level=rule["risk_level"],
            recommendation=rule["recommendation"].text(language),
            rule_id=rule["id"],
        ))

    return assessments


def highest_risk(assessments: Iterable[ProcedureAssessment]) -> RiskLevel:
    """Get the most severe risk level across assessments (LOW if empty)."""
    return max(
        (a.risk_level for a in assessments),
        key=lambda level: level.rank,
        default=RiskLevel.LOW,
    )
