"""Risk assessment engine."""

from .duration import compute_exposure_months
from .classifier import assess, highest_risk
from .rules import DECISION_TABLE, first_matching_rule

__all__ = [
    "compute_exposure_months",
    "assess",
    "highest_risk",
    "DECISION_TABLE",
    "first_matching_rule"
]
