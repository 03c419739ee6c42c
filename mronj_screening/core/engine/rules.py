"""
Declarative decision table for per-procedure MRONJ risk.

Each rule is a dict of conditions over the assessment facts:

    {
        "id": "long_exposure_or_comorbidity",
        "description": "Exposure over 36 months or a high-risk comorbidity",
        "logic": "any",            # "all", "any" or "always"
        "conditions": [{"field": "duration_months", "operator": "gt", "value": 36}, ...],
        "risk_level": RiskLevel.HIGH,
        "recommendation": Recommendation.REFER_TO_SPECIALIST,
    }

Rules are evaluated in order and the first one that is met decides the
outcome. The last rule uses "always" logic so every fact set is covered.
"""

from typing import Any, Dict, List, Optional

from mronj_screening.models.assessment import Recommendation, RiskLevel

# Fixed clinical thresholds (months of antiresorptive exposure).
MODERATE_RISK_MONTHS = 12
HIGH_RISK_MONTHS = 36


DECISION_TABLE: List[Dict[str, Any]] = [
    {
        "id": "no_antiresorptive_medication",
        "description": "Patient has no antiresorptive medication history",
        "logic": "all",
        "conditions": [
            {"field": "has_antiresorptive_medication", "operator": "eq", "value": False},
        ],
        "risk_level": RiskLevel.LOW,
        "recommendation": Recommendation.ROUTINE_TREATMENT,
    },
    {
        "id": "non_invasive_procedure",
        "description": "Procedure does not expose bone",
        "logic": "all",
        "conditions": [
            {"field": "invasive", "operator": "eq", "value": False},
        ],
        "risk_level": RiskLevel.LOW,
        "recommendation": Recommendation.PROCEED_WITH_FOLLOW_UP,
    },
    {
        "id": "long_exposure_or_comorbidity",
        "description": f"Exposure over {HIGH_RISK_MONTHS} months or a high-risk comorbidity",
        "logic": "any",
        "conditions": [
            {"field": "duration_months", "operator": "gt", "value": HIGH_RISK_MONTHS},
            {"field": "has_high_risk_comorbidity", "operator": "eq", "value": True},
        ],
        "risk_level": RiskLevel.HIGH,
        "recommendation": Recommendation.REFER_TO_SPECIALIST,
    },
    {
        "id": "intermediate_exposure",
        "description": f"Exposure over {MODERATE_RISK_MONTHS} months",
        "logic": "all",
        "conditions": [
            {"field": "duration_months", "operator": "gt", "value": MODERATE_RISK_MONTHS},
        ],
        "risk_level": RiskLevel.MODERATE,
        "recommendation": Recommendation.CONSULT_PRESCRIBER,
    },
    {
        "id": "short_exposure",
        "description": f"Exposure of {MODERATE_RISK_MONTHS} months or less",
        "logic": "always",
        "conditions": [],
        "risk_level": RiskLevel.LOW,
        "recommendation": Recommendation.INFORMED_CONSENT,
    },
]


def compare_values(fact_value: Any, operator: str, threshold: Any) -> bool:
    """
    Compare a fact against a threshold.

    Operators:
    - eq: equal
    - gt: greater than
    - gte: greater than or equal
    - lt: less than
    - lte: less than or equal
    """
    if operator == "eq":
        return fact_value == threshold

    # Absent numeric facts never satisfy an ordering comparison
    if fact_value is None:
        return False

    if operator == "gt":
        return fact_value > threshold
    elif operator == "gte":
        return fact_value >= threshold
    elif operator == "lt":
        return fact_value < threshold
    elif operator == "lte":
        return fact_value <= threshold
    else:
        raise ValueError(f"Unknown operator: {operator}")


def evaluate_condition(facts: dict, condition: dict) -> bool:
    return compare_values(facts.get(condition["field"]), condition["operator"], condition["value"])


def evaluate_rule(facts: dict, rule: dict) -> bool:
    """Check whether a rule is met by the given facts."""
    logic = rule.get("logic", "all")
    if logic == "always":
        return True

    results = [evaluate_condition(facts, cond) for cond in rule.get("conditions", [])]
    if not results:
        return False

    if logic == "all":
        return all(results)
    elif logic == "any":
        return any(results)
    else:
        raise ValueError(f"Unknown rule logic: {logic}")


def first_matching_rule(facts: dict, table: Optional[List[Dict[str, Any]]] = None) -> Dict[str, Any]:
    """
    Return the first rule in the table that the facts satisfy.

    Raises:
        LookupError: No rule matched (only possible with a custom table that
            lacks a trailing "always" rule)
    """
    for rule in table if table is not None else DECISION_TABLE:
        if evaluate_rule(facts, rule):
            return rule
    raise LookupError(f"No decision rule matched facts: {facts}")
