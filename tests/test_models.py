"""
Tests for patient, assessment and medication catalog models.
"""

import pytest

from mronj_screening.models.assessment import (
    PROCEDURES,
    Procedure,
    ProcedureAssessment,
    Recommendation,
    RiskLevel,
)
from mronj_screening.models.medication import AdministrationRoute, all_drugs, lookup_drug
from mronj_screening.models.patient import ComorbidityTag, PatientRecord, tag_for_label


class TestComorbidityTags:
    @pytest.mark.parametrize("label, tag", [
        ("糖尿病", ComorbidityTag.DIABETES),
        (" Diabetes ", ComorbidityTag.DIABETES),
        ("洗腎", ComorbidityTag.DIALYSIS),
        ("dialysis", ComorbidityTag.DIALYSIS),
        ("Renal failure", ComorbidityTag.DIALYSIS),
    ])
    def test_known_labels(self, label, tag):
        assert tag_for_label(label) is tag

    def test_inert_labels(self):
        assert tag_for_label("高血壓") is None
        assert tag_for_label("") is None

    def test_high_risk_flags(self):
        assert PatientRecord().has_high_risk_comorbidity is False
        assert PatientRecord(has_radiotherapy_history=True).has_high_risk_comorbidity is True
        assert PatientRecord(has_cancer_history=True).has_high_risk_comorbidity is True
        assert PatientRecord(systemic_diseases=frozenset({"洗腎"})).has_high_risk_comorbidity is True
        assert PatientRecord(systemic_diseases=frozenset({"高血壓"})).has_high_risk_comorbidity is False


class TestBmi:
    def test_bmi(self):
        record = PatientRecord(height_cm=170, weight_kg=90)
        assert record.bmi == pytest.approx(31.14, abs=0.01)
        assert record.is_obese is True
        assert PatientRecord(height_cm=170, weight_kg=70).is_obese is False

    def test_missing_height(self):
        record = PatientRecord(weight_kg=70)
        assert record.bmi is None
        assert record.is_obese is False

    def test_non_positive(self):
        assert PatientRecord(height_cm=-160, weight_kg=60).bmi is None


class TestProcedures:
    def test_only_non_invasive_is_not_invasive(self):
        assert [p for p in PROCEDURES if not p.invasive] == [Procedure.NON_INVASIVE]

    def test_labels(self):
        assert Procedure.IMPLANT.label() == "植牙"
        assert Procedure.ROOT_CANAL.label("en") == "Root canal treatment"


def test_risk_ordering():
    assert RiskLevel.LOW.rank < RiskLevel.MODERATE.rank < RiskLevel.HIGH.rank
    assert RiskLevel.MODERATE.label() == "中度風險"


def test_every_recommendation_has_both_languages():
    for recommendation in Recommendation:
        assert recommendation.text("zh-TW")
        assert recommendation.text("en")


def test_assessment_to_dict():
    assessment = ProcedureAssessment(
        procedure=Procedure.EXTRACTION,
        risk_level=RiskLevel.HIGH,
        recommendation="x",
        rule_id="long_exposure_or_comorbidity",
    )
    assert assessment.to_dict() == {
        "procedure": "extraction",
        "risk_level": "high",
        "recommendation": "x",
        "rule_id": "long_exposure_or_comorbidity",
    }


class TestMedicationCatalog:
    def test_catalog_size(self):
        assert len(all_drugs()) == 7

    def test_lookup_by_full_name(self):
        drug = lookup_drug("骨維壯注射劑Boniva")
        assert drug.route is AdministrationRoute.INJECTION
        assert drug.group == "雙磷酸鹽類藥物"

    def test_lookup_by_brand(self):
        assert lookup_drug("prolia").name == "保骼麗注射液Prolia"

    def test_lookup_unknown(self):
        assert lookup_drug("aspirin") is None
        assert lookup_drug("  ") is None
