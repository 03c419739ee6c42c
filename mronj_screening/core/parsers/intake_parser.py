"""Parser turning intake form payloads into PatientRecord objects."""

import json
import logging
import re
from typing import Any, Dict, FrozenSet, Optional

from mronj_screening.core.errors import IntakeValidationError
from mronj_screening.models.medication import lookup_drug
from mronj_screening.models.patient import MedicationDetails, PatientRecord

logger = logging.getLogger(__name__)


# Intake form (camelCase) key -> PatientRecord / MedicationDetails field
FORM_FIELD_ALIASES = {
    "name": "name",
    "birthYear": "birth_year",
    "birthMonth": "birth_month",
    "birthDay": "birth_day",
    "idNumber": "id_number",
    "gender": "gender",
    "transgenderType": "transgender_type",
    "hasHormoneTherapy": "has_hormone_therapy",
    "hormoneTherapyDuration": "hormone_therapy_duration",
    "height": "height_cm",
    "weight": "weight_kg",
    "systemicDiseases": "systemic_diseases",
    "hasRadiotherapy": "has_radiotherapy_history",
    "radiotherapyDetails": "radiotherapy_details",
    "hasCancer": "has_cancer_history",
    "cancerHistory": "cancer_details",
    "otherConditions": "other_conditions",
    "hasAntiresorptiveMed": "has_antiresorptive_medication",
    "startYear": "medication_start_year",
    "startMonth": "medication_start_month",
    "isStopped": "is_stopped",
    "stopYear": "medication_stop_year",
    "stopMonth": "medication_stop_month",
    "medicationType": "medication_type",
    "medicationSubType": "medication_subtype",
    "drugName": "drug_name",
    "administrationRoute": "administration_route",
    "indication": "indication",
    "frequency": "frequency",
}

TRUE_STRINGS = {"true", "yes", "y", "1", "是", "有"}
FALSE_STRINGS = {"false", "no", "n", "0", "否", "無", ""}

# Separators used when diseases arrive as a single string
DISEASE_SEPARATORS = re.compile(r"[,、，;；\n]")


class IntakeParser:
    """Intake form payload parser."""

    def __init__(self):
        self.logger = logging.getLogger(self.__class__.__name__)

    def parse_json(self, text: str) -> PatientRecord:
        """
        Parse a JSON intake document.

        Raises:
            IntakeValidationError: Document is not a JSON object or a field is invalid
        """
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise IntakeValidationError("document", text[:40], f"invalid JSON: {e.msg}") from e
        return self.parse(data)

    def parse(self, data: Dict[str, Any]) -> PatientRecord:
        """
        Build a PatientRecord from an intake payload.

        Accepts the form layer's camelCase keys with string-valued numbers
        (``{"startYear": "2020", "startMonth": "1"}``) as well as the
        record's own snake_case field names. Empty strings mean absent.
        Medication dates are dropped when the patient is not medicated, and
        stop dates are dropped when the medication has not been stopped.

        Args:
            data: Intake payload

        Returns:
            PatientRecord

        Raises:
            IntakeValidationError: A field cannot be converted
        """
        if not isinstance(data, dict):
            raise IntakeValidationError("document", data, "expected an object")

        fields = self.normalize_keys(data)

        medicated = self._to_bool(fields.get("has_antiresorptive_medication"), "has_antiresorptive_medication")
        stopped = medicated and self._to_bool(fields.get("is_stopped"), "is_stopped")

        record = PatientRecord(
            name=self._to_str(fields.get("name")),
            birth_year=self._to_int(fields.get("birth_year"), "birth_year"),
            birth_month=self._to_int(fields.get("birth_month"), "birth_month"),
            birth_day=self._to_int(fields.get("birth_day"), "birth_day"),
            id_number=self._to_str(fields.get("id_number")),
            gender=self._to_str(fields.get("gender")) or None,
            transgender_type=self._to_str(fields.get("transgender_type")) or None,
            has_hormone_therapy=self._to_bool(fields.get("has_hormone_therapy"), "has_hormone_therapy"),
            hormone_therapy_duration=self._to_str(fields.get("hormone_therapy_duration")) or None,
            height_cm=self._to_float(fields.get("height_cm"), "height_cm"),
            weight_kg=self._to_float(fields.get("weight_kg"), "weight_kg"),
            systemic_diseases=self._to_disease_set(fields.get("systemic_diseases")),
            has_radiotherapy_history=self._to_bool(fields.get("has_radiotherapy_history"), "has_radiotherapy_history"),
            radiotherapy_details=self._to_str(fields.get("radiotherapy_details")),
            has_cancer_history=self._to_bool(fields.get("has_cancer_history"), "has_cancer_history"),
            cancer_details=self._to_str(fields.get("cancer_details")),
            other_conditions=self._to_str(fields.get("other_conditions")),
            has_antiresorptive_medication=medicated,
            medication_start_year=self._to_int(fields.get("medication_start_year"), "medication_start_year") if medicated else None,
            medication_start_month=self._to_int(fields.get("medication_start_month"), "medication_start_month") if medicated else None,
            is_stopped=stopped,
            medication_stop_year=self._to_int(fields.get("medication_stop_year"), "medication_stop_year") if stopped else None,
            medication_stop_month=self._to_int(fields.get("medication_stop_month"), "medication_stop_month") if stopped else None,
            medication=self._build_medication(fields) if medicated else None,
        )

        self.logger.info(
            f"Parsed intake: medicated={record.has_antiresorptive_medication}, "
            f"stopped={record.is_stopped}, diseases={len(record.systemic_diseases)}"
        )
        return record

    def normalize_keys(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """Translate form aliases to record field names; snake_case keys pass through."""
        normalized = {}
        for key, value in data.items():
            normalized[FORM_FIELD_ALIASES.get(key, key)] = value
        return normalized

    def _build_medication(self, fields: Dict[str, Any]) -> Optional[MedicationDetails]:
        """Create MedicationDetails from form fields, filling the route from the catalog."""
        medication_type = self._to_str(fields.get("medication_type")) or None
        medication_subtype = self._to_str(fields.get("medication_subtype")) or None
        drug_name = self._to_str(fields.get("drug_name")) or None
        route = self._to_str(fields.get("administration_route")) or None
        indication = self._to_str(fields.get("indication")) or None
        frequency = self._to_str(fields.get("frequency")) or None

        if not any([medication_type, medication_subtype, drug_name, route, indication, frequency]):
            return None

        if drug_name and not route:
            catalog_drug = lookup_drug(drug_name)
            if catalog_drug is not None:
                route = catalog_drug.route.value
            else:
                self.logger.debug(f"Drug not in catalog: {drug_name}")

        return MedicationDetails(
            medication_type=medication_type,
            medication_subtype=medication_subtype,
            drug_name=drug_name,
            administration_route=route,
            indication=indication,
            frequency=frequency,
        )

    def _to_str(self, value: Any) -> str:
        if value is None:
            return ""
        return str(value).strip()

    def _to_int(self, value: Any, field: str) -> Optional[int]:
        if value is None:
            return None
        if isinstance(value, bool):
            raise IntakeValidationError(field, value, "expected a number")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)

        value_str = str(value).strip()
        if not value_str:
            return None
        try:
            return int(value_str)
        except ValueError:
            raise IntakeValidationError(field, value, "expected a whole number") from None

    def _to_float(self, value: Any, field: str) -> Optional[float]:
        if value is None:
            return None
        if isinstance(value, bool):
            raise IntakeValidationError(field, value, "expected a number")
        if isinstance(value, (int, float)):
            return float(value)

        value_str = str(value).strip()
        if not value_str:
            return None
        try:
            return float(value_str)
        except ValueError:
            raise IntakeValidationError(field, value, "expected a number") from None

    def _to_bool(self, value: Any, field: str) -> bool:
        if value is None:
            return False
        if isinstance(value, bool):
            return value

        value_str = str(value).strip().lower()
        if value_str in TRUE_STRINGS:
            return True
        if value_str in FALSE_STRINGS:
            return False
        raise IntakeValidationError(field, value, "expected true or false")

    def _to_disease_set(self, value: Any) -> FrozenSet[str]:
        if value is None:
            return frozenset()
        if isinstance(value, str):
            items = DISEASE_SEPARATORS.split(value)
        elif isinstance(value, (list, tuple, set, frozenset)):
            items = value
        else:
            raise IntakeValidationError("systemic_diseases", value, "expected a list of labels")

        labels = set()
        for item in items:
            if not isinstance(item, str):
                raise IntakeValidationError("systemic_diseases", item, "expected a text label")
            if item.strip():
                labels.add(item.strip())
        return frozenset(labels)
