"""AI archetypes, their intent biases, and the brain factory."""

from __future__ import annotations

import dataclasses
from typing import Dict, List, Mapping, Optional

import numpy as np

from .models import DEFAULT_INTENTS, AIBrain, Archetype, ArchetypeId, NicheAIConfig
from .utils import normalize_archetype

ARCHETYPE_LIBRARY: Dict[str, Archetype] = {
    ArchetypeId.CONSERVATIVE.value: Archetype(
        id=ArchetypeId.CONSERVATIVE.value,
        label="Conservative",
        description="Protects cash buffers and avoids aggressive expansion.",
        decision_bias={"hold": 0.4, "optimize_costs": 0.2, "pay_down_debt": 0.3},
    ),
    ArchetypeId.EXPANSIONIST.value: Archetype(
        id=ArchetypeId.EXPANSIONIST.value,
        label="Expansionist",
        description="Favors growth when utilization and trends are positive.",
        decision_bias={"expand_capacity": 0.5, "upgrade_quality": 0.2},
    ),
    ArchetypeId.COST_CUTTER.value: Archetype(
        id=ArchetypeId.COST_CUTTER.value,
        label="Cost Cutter",
        description="Focuses on efficiency and lean operations.",
        decision_bias={"optimize_costs": 0.6, "hold": 0.2},
    ),
    ArchetypeId.CONTRACT_SPECIALIST.value: Archetype(
        id=ArchetypeId.CONTRACT_SPECIALIST.value,
        label="Contract Specialist",
        description="Prefers stable demand via contracts.",
        decision_bias={"seek_contracts": 0.5, "hold": 0.1},
    ),
    ArchetypeId.VERTICAL_INTEGRATOR.value: Archetype(
        id=ArchetypeId.VERTICAL_INTEGRATOR.value,
        label="Vertical Integrator",
        description="Invests in upstream control and resilience.",
        decision_bias={"integrate_supply": 0.5, "expand_capacity": 0.1},
    ),
    ArchetypeId.ORGANIC_PURIST.value: Archetype(
        id=ArchetypeId.ORGANIC_PURIST.value,
        label="Organic Purist",
        description="Prioritizes quality upgrades over aggressive scaling.",
        decision_bias={"upgrade_quality": 0.5, "hold": 0.1},
    ),
}


def get_archetype(archetype_id: str) -> Optional[Archetype]:
    """Exact id lookup; loose spellings are resolved where brains are built."""
    return ARCHETYPE_LIBRARY.get(archetype_id)


def bias_for(archetype_id: str, intent: str) -> float:
    """Additive bias for ``intent``; unknown archetypes and intents give 0."""
    archetype = get_archetype(archetype_id)
    if archetype is None:
        return 0.0
    return float(archetype.decision_bias.get(intent, 0.0))


def bias_matrix(intents=DEFAULT_INTENTS) -> Dict[str, Dict[str, float]]:
    """Dense archetype x intent table, zero-filled."""
    return {
        archetype_id: {intent: float(archetype.decision_bias.get(intent, 0.0)) for intent in intents}
        for archetype_id, archetype in ARCHETYPE_LIBRARY.items()
    }


def draw_archetype(weights: Mapping[str, float], rng: Optional[np.random.Generator] = None) -> str:
    """Sample an archetype id proportionally to ``weights``."""
    names: List[str] = []
    values: List[float] = []
    for name, weight in weights.items():
        canonical = normalize_archetype(name)
        if canonical is None or weight <= 0:
            continue
        names.append(canonical)
        values.append(float(weight))
    if not names:
        raise ValueError("Archetype weights contain no known archetype with positive weight.")
    probs = np.asarray(values, dtype=float)
    probs = probs / probs.sum()
    generator = rng if rng is not None else np.random.default_rng()
    return names[int(generator.choice(len(names), p=probs))]


def create_brain(
    company_id: str,
    ai_config: NicheAIConfig,
    rng: Optional[np.random.Generator] = None,
    archetype: Optional[str] = None,
) -> AIBrain:
    """Build a brain from a niche AI config, drawing the archetype unless one is given."""
    if archetype is not None:
        chosen = normalize_archetype(archetype)
        if chosen is None:
            raise KeyError(f"Unknown archetype '{archetype}'. Available: {', '.join(ARCHETYPE_LIBRARY.keys())}")
    else:
        chosen = draw_archetype(ai_config.archetype_weights, rng)
    return AIBrain(
        company_id=company_id,
        archetype=chosen,
        cash_safety_threshold=float(ai_config.min_cash_reserve),
        debt_tolerance=float(ai_config.max_debt_ratio),
        utilization_target=float(ai_config.target_utilization),
    )


def reassign_archetype(brain: AIBrain, archetype: str) -> AIBrain:
    """Return a copy of ``brain`` with a new archetype; the original is untouched."""
    chosen = normalize_archetype(archetype)
    if chosen is None:
        raise KeyError(f"Unknown archetype '{archetype}'. Available: {', '.join(ARCHETYPE_LIBRARY.keys())}")
    return dataclasses.replace(brain, archetype=chosen)


__all__ = [
    "ARCHETYPE_LIBRARY",
    "get_archetype",
    "bias_for",
    "bias_matrix",
    "draw_archetype",
    "create_brain",
    "reassign_archetype",
]
