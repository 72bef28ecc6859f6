"""Numeric helpers and label normalization for niche_sim."""

from __future__ import annotations

import math
from typing import Any, Optional

import numpy as np


def clamp(value: float, low: float, high: float) -> float:
    """Clamp a scalar into ``[low, high]`` and return a plain float."""
    return float(np.clip(value, low, high))


def is_finite_number(value: Any) -> bool:
    if isinstance(value, bool) or value is None:
        return False
    try:
        return math.isfinite(float(value))
    except (TypeError, ValueError):
        return False


def finite_or(value: Any, default: float = 0.0) -> float:
    """Return ``value`` as float, or ``default`` when missing, NaN or infinite."""
    if is_finite_number(value):
        return float(value)
    return float(default)


def non_negative(value: Any) -> float:
    """Read a stored quantity, treating missing or negative values as zero."""
    return max(0.0, finite_or(value, 0.0))


def _label_key(value: Any) -> str:
    return str(value).strip().lower().replace("-", "_").replace(" ", "_")


INTENT_NORMALIZATION = {
    "hold": "hold",
    "wait": "hold",
    "expand": "expand_capacity",
    "expand_capacity": "expand_capacity",
    "optimize": "optimize_costs",
    "optimise_costs": "optimize_costs",
    "optimize_costs": "optimize_costs",
    "seek_contracts": "seek_contracts",
    "contracts": "seek_contracts",
    "integrate_supply": "integrate_supply",
    "integrate": "integrate_supply",
    "upgrade_quality": "upgrade_quality",
    "upgrade": "upgrade_quality",
    "pay_down_debt": "pay_down_debt",
    "paydown_debt": "pay_down_debt",
    "repay_debt": "pay_down_debt",
}

ARCHETYPE_NORMALIZATION = {
    "conservative": "Conservative",
    "expansionist": "Expansionist",
    "costcutter": "CostCutter",
    "cost_cutter": "CostCutter",
    "contractspecialist": "ContractSpecialist",
    "contract_specialist": "ContractSpecialist",
    "verticalintegrator": "VerticalIntegrator",
    "vertical_integrator": "VerticalIntegrator",
    "organicpurist": "OrganicPurist",
    "organic_purist": "OrganicPurist",
}


def normalize_intent(value: Any, default: Optional[str] = None) -> Optional[str]:
    """Map loose intent spellings (``"Expand-Capacity"``) to canonical ids."""
    if value is None:
        return default
    return INTENT_NORMALIZATION.get(_label_key(value), default)


def normalize_archetype(value: Any, default: Optional[str] = None) -> Optional[str]:
    """Map loose archetype spellings (``"cost cutter"``) to canonical ids."""
    if value is None:
        return default
    return ARCHETYPE_NORMALIZATION.get(_label_key(value), default)
