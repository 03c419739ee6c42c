"""Data models for procedure risk assessment results."""

from dataclasses import dataclass, asdict
from datetime import date
from enum import Enum
from typing import Dict, List

from mronj_screening.models.patient import PatientRecord


class Procedure(str, Enum):
    """Dental procedures screened for MRONJ risk."""
    NON_INVASIVE = "non_invasive"        # cleaning, filling
    EXTRACTION = "extraction"
    PERIODONTAL_SURGERY = "periodontal_surgery"
    IMPLANT = "implant"
    ROOT_CANAL = "root_canal"

    @property
    def invasive(self) -> bool:
        return self is not Procedure.NON_INVASIVE

    def label(self, language: str = "zh-TW") -> str:
        return PROCEDURE_LABELS[language][self]


# Canonical report order; implant precedes root canal.
PROCEDURES: List[Procedure] = [
    Procedure.NON_INVASIVE,
    Procedure.EXTRACTION,
    Procedure.PERIODONTAL_SURGERY,
    Procedure.IMPLANT,
    Procedure.ROOT_CANAL,
]

PROCEDURE_LABELS: Dict[str, Dict[Procedure, str]] = {
    "zh-TW": {
        Procedure.NON_INVASIVE: "非侵入性治療",
        Procedure.EXTRACTION: "拔牙",
        Procedure.PERIODONTAL_SURGERY: "牙周手術",
        Procedure.IMPLANT: "植牙",
        Procedure.ROOT_CANAL: "根管治療",
    },
    "en": {
        Procedure.NON_INVASIVE: "Non-invasive treatment",
        Procedure.EXTRACTION: "Extraction",
        Procedure.PERIODONTAL_SURGERY: "Periodontal surgery",
        Procedure.IMPLANT: "Implant placement",
        Procedure.ROOT_CANAL: "Root canal treatment",
    },
}


class RiskLevel(str, Enum):
    """MRONJ risk level, ordered low < moderate < high."""
    LOW = "low"
    MODERATE = "moderate"
    HIGH = "high"

    @property
    def rank(self) -> int:
        return _RISK_RANK[self]

    def label(self, language: str = "zh-TW") -> str:
        return RISK_LABELS[language][self]


_RISK_RANK = {RiskLevel.LOW: 0, RiskLevel.MODERATE: 1, RiskLevel.HIGH: 2}

RISK_LABELS: Dict[str, Dict[RiskLevel, str]] = {
    "zh-TW": {
        RiskLevel.LOW: "低風險",
        RiskLevel.MODERATE: "中度風險",
        RiskLevel.HIGH: "高風險",
    },
    "en": {
        RiskLevel.LOW: "Low risk",
        RiskLevel.MODERATE: "Moderate risk",
        RiskLevel.HIGH: "High risk",
    },
}


class Recommendation(str, Enum):
    """Canonical recommendation messages, one per decision branch."""
    ROUTINE_TREATMENT = "routine_treatment"
    PROCEED_WITH_FOLLOW_UP = "proceed_with_follow_up"
    REFER_TO_SPECIALIST = "refer_to_specialist"
    CONSULT_PRESCRIBER = "consult_prescriber"
    INFORMED_CONSENT = "informed_consent"

    def text(self, language: str = "zh-TW") -> str:
        return RECOMMENDATION_TEXT[language][self]


RECOMMENDATION_TEXT: Dict[str, Dict[Recommendation, str]] = {
    "zh-TW": {
        Recommendation.ROUTINE_TREATMENT: "可進行一般治療。",
        Recommendation.PROCEED_WITH_FOLLOW_UP: "可進行治療，建議定期追蹤。",
        Recommendation.REFER_TO_SPECIALIST: "建議轉診至醫學中心進行評估。需要特殊處理及術後密切追蹤。",
        Recommendation.CONSULT_PRESCRIBER: "建議先諮詢原處方醫師，評估是否需要暫停用藥。需要特殊處理及術後追蹤。",
        Recommendation.INFORMED_CONSENT: "可進行治療，但需要告知風險並簽署同意書。建議術後追蹤。",
    },
    "en": {
        Recommendation.ROUTINE_TREATMENT: "Routine treatment permitted.",
        Recommendation.PROCEED_WITH_FOLLOW_UP: "May proceed; routine follow-up advised.",
        Recommendation.REFER_TO_SPECIALIST: (
            "Refer to a specialist center for evaluation; requires special handling "
            "and close post-procedure follow-up."
        ),
        Recommendation.CONSULT_PRESCRIBER: (
            "Consult the prescribing physician about a possible drug holiday; "
            "requires special handling and post-procedure follow-up."
        ),
        Recommendation.INFORMED_CONSENT: (
            "May proceed; disclose the risk and obtain signed informed consent. "
            "Post-procedure follow-up advised."
        ),
    },
}


@dataclass(frozen=True)
class ProcedureAssessment:
    """Risk assessment for a single procedure."""
    procedure: Procedure
    risk_level: RiskLevel
    recommendation: str       # text in the output language
    rule_id: str              # decision-table row that matched

    def to_dict(self):
        data = asdict(self)
        data["procedure"] = self.procedure.value
        data["risk_level"] = self.risk_level.value
        return data


@dataclass(frozen=True)
class ScreeningResult:
    """Outcome of screening one intake record."""
    record: PatientRecord
    assessed_on: date
    exposure_months: int
    assessments: List[ProcedureAssessment]
    highest_risk: RiskLevel
    language: str = "zh-TW"

    def summary(self) -> Dict[str, int]:
        """Count assessments per risk level."""
        counts = {level.value: 0 for level in RiskLevel}
        for assessment in self.assessments:
            counts[assessment.risk_level.value] += 1
        return counts
