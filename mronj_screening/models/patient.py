"""Data models for the patient intake record."""

from dataclasses import dataclass, field
from enum import Enum
from typing import FrozenSet, Optional


class ComorbidityTag(str, Enum):
    """Systemic diseases that raise MRONJ risk for invasive procedures."""
    DIABETES = "diabetes"
    DIALYSIS = "dialysis"


# Free-form disease label -> tag. Keys are stripped and casefolded.
COMORBIDITY_LABELS = {
    "糖尿病": ComorbidityTag.DIABETES,
    "diabetes": ComorbidityTag.DIABETES,
    "洗腎": ComorbidityTag.DIALYSIS,
    "dialysis": ComorbidityTag.DIALYSIS,
    "renal failure": ComorbidityTag.DIALYSIS,
}


def tag_for_label(label: str) -> Optional[ComorbidityTag]:
    """Map a disease label to its comorbidity tag, or None if inert."""
    if not isinstance(label, str):
        return None
    return COMORBIDITY_LABELS.get(label.strip().casefold())


@dataclass(frozen=True)
class MedicationDetails:
    """藥物資訊 - informational, not consulted by the risk engine."""
    medication_type: Optional[str] = None     # 抗骨質再吸收劑
    medication_subtype: Optional[str] = None  # 單株抗體
    drug_name: Optional[str] = None           # 保骼麗注射液Prolia
    administration_route: Optional[str] = None  # 口服 / 注射
    indication: Optional[str] = None          # 骨質疏鬆
    frequency: Optional[str] = None           # 每半年


@dataclass(frozen=True)
class PatientRecord:
    """Intake record for one screening; immutable during assessment."""
    # Identity (report headers only)
    name: str = ""
    birth_year: Optional[int] = None
    birth_month: Optional[int] = None
    birth_day: Optional[int] = None
    id_number: str = ""
    gender: Optional[str] = None
    transgender_type: Optional[str] = None
    has_hormone_therapy: bool = False
    hormone_therapy_duration: Optional[str] = None  # 5年以內 / 5-10年 / 10年以上
    height_cm: Optional[float] = None
    weight_kg: Optional[float] = None

    # Medical history
    systemic_diseases: FrozenSet[str] = field(default_factory=frozenset)
    has_radiotherapy_history: bool = False
    radiotherapy_details: str = ""
    has_cancer_history: bool = False
    cancer_details: str = ""
    other_conditions: str = ""

    # Medication history
    has_antiresorptive_medication: bool = False
    medication_start_year: Optional[int] = None
    medication_start_month: Optional[int] = None
    is_stopped: bool = False
    medication_stop_year: Optional[int] = None
    medication_stop_month: Optional[int] = None
    medication: Optional[MedicationDetails] = None

    @property
    def comorbidity_tags(self) -> FrozenSet[ComorbidityTag]:
        """Significant tags found among the systemic disease labels."""
        tags = (tag_for_label(label) for label in self.systemic_diseases)
        return frozenset(tag for tag in tags if tag is not None)

    @property
    def has_high_risk_comorbidity(self) -> bool:
        return (
            self.has_radiotherapy_history
            or self.has_cancer_history
            or bool(self.comorbidity_tags)
        )

    @property
    def bmi(self) -> Optional[float]:
        """Body-mass index, or None when height or weight is unusable."""
        if not self.height_cm or not self.weight_kg:
            return None
        if self.height_cm <= 0 or self.weight_kg <= 0:
            return None
        height_m = self.height_cm / 100
        return self.weight_kg / (height_m * height_m)

    @property
    def is_obese(self) -> bool:
        # WHO definition
        bmi = self.bmi
        return bmi is not None and bmi >= 30
