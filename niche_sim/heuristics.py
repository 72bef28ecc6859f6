"""
Signal extraction and heuristic scoring of decision intents.

Every signal is a bounded, relative deviation from the brain's own target:

    cash_safety  = clip((cash - threshold) / max(1, threshold), -1, 1)
    utilization  = clip(utilization - target, -1, 1)
    price_trend  = clip(trend, -1, 1), 0 when the trend is NaN or infinite
    debt         = clip(clip(debt / max(1, cash + weekly_revenue), 0, 1) - tolerance, -1, 1)

An intent's base score is a fixed linear combination of those signals
(see ``EngineConfig.INTENT_SIGNAL_WEIGHTS``); the archetype bias is added on
top unchanged. Intents with no weights score 0 before bias.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from .archetypes import bias_for
from .config import EngineConfig
from .models import AIBrain, AICompanyContext, Decision
from .utils import clamp, finite_or

HEURISTIC_REASON = "heuristic"

_DEFAULT_CONFIG: Optional[EngineConfig] = None


def _get_default_config() -> EngineConfig:
    global _DEFAULT_CONFIG
    if _DEFAULT_CONFIG is None:
        _DEFAULT_CONFIG = EngineConfig()
    return _DEFAULT_CONFIG


@dataclass(frozen=True, slots=True)
class SignalScores:
    cash_safety: float
    utilization: float
    price_trend: float
    debt: float

    def terms(self) -> Dict[str, float]:
        """Signal values keyed by weight term, including the magnitude terms."""
        return {
            "cash_safety": self.cash_safety,
            "utilization": self.utilization,
            "price_trend": self.price_trend,
            "debt": self.debt,
            "abs_utilization": abs(self.utilization),
            "abs_price_trend": abs(self.price_trend),
        }

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


def compute_signals(brain: AIBrain, context: AICompanyContext) -> SignalScores:
    threshold = float(brain.cash_safety_threshold)
    cash = finite_or(context.cash)
    cash_safety = clamp((cash - threshold) / max(1.0, threshold), -1.0, 1.0)

    utilization = clamp(finite_or(context.utilization) - float(brain.utilization_target), -1.0, 1.0)

    price_trend = clamp(finite_or(context.price_trend, 0.0), -1.0, 1.0)

    buffer = max(1.0, cash + finite_or(context.weekly_revenue))
    debt_ratio = clamp(finite_or(context.debt) / buffer, 0.0, 1.0)
    debt = clamp(debt_ratio - float(brain.debt_tolerance), -1.0, 1.0)

    return SignalScores(cash_safety=cash_safety, utilization=utilization, price_trend=price_trend, debt=debt)


def base_score_for_decision(
    intent: str,
    signals: SignalScores,
    weights: Optional[Mapping[str, Mapping[str, float]]] = None,
) -> float:
    """Linear signal score for ``intent`` before archetype bias."""
    table = weights if weights is not None else _get_default_config().INTENT_SIGNAL_WEIGHTS
    coefficients = table.get(intent)
    if not coefficients:
        return 0.0
    values = signals.terms()
    score = 0.0
    for term, coefficient in coefficients.items():
        score += coefficient * values[term]
    return score


def score_decisions(
    brain: AIBrain,
    context: AICompanyContext,
    intents: Iterable[str],
    config: Optional[EngineConfig] = None,
    signals: Optional[SignalScores] = None,
) -> List[Decision]:
    """Score each candidate intent and return decisions, highest score first.

    Intents are matched by exact id; an unknown id scores 0 plus bias and keeps
    its label. Ties keep candidate order.
    """
    cfg = config or _get_default_config()
    signals = signals if signals is not None else compute_signals(brain, context)
    decisions: List[Decision] = []
    for raw_intent in intents:
        intent = str(getattr(raw_intent, "value", raw_intent))
        score = base_score_for_decision(intent, signals, cfg.INTENT_SIGNAL_WEIGHTS) + bias_for(
            brain.archetype, intent
        )
        decisions.append(
            Decision(company_id=brain.company_id, intent=intent, score=score, reason=HEURISTIC_REASON)
        )
    decisions.sort(key=lambda decision: decision.score, reverse=True)
    return decisions


__all__ = [
    "HEURISTIC_REASON",
    "SignalScores",
    "compute_signals",
    "base_score_for_decision",
    "score_decisions",
]
