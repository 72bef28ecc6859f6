"""
Per-tick AI decision runner.

`run_ai_tick` turns a world snapshot plus one brain per AI company into one
`Decision` per brain, in brain order:

1. look up the brain's company; a missing company yields ``hold`` with
   reason ``missing_company_state`` and the scorer is not invoked;
2. resolve the live price trend (market override when finite, otherwise the
   company's stored trend);
3. score the candidate intents (see :mod:`niche_sim.heuristics`);
4. break exact-score ties with one ``rng()`` call.

Step 3 may run on a thread pool. Step 4 always runs sequentially in brain
order, so the sequence of ``rng()`` calls does not depend on how scoring was
scheduled.
"""

from __future__ import annotations

import dataclasses
import json
import math
from collections import Counter
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import numpy as np

from .archetypes import bias_for
from .config import EngineConfig
from .heuristics import SignalScores, base_score_for_decision, compute_signals, score_decisions
from .models import AIBrain, AICompanyContext, Decision, MarketState, WorldState
from .utils import clamp, finite_or, is_finite_number

Rng = Callable[[], float]

NO_DECISIONS_REASON = "no_decisions"
MISSING_COMPANY_REASON = "missing_company_state"
SCORING_FAILED_REASON = "scoring_failed"

BRAIN_NUMERIC_FIELDS = ("cash_safety_threshold", "debt_tolerance", "utilization_target")

DEBUG_DECISION_LOG: List[Dict[str, Any]] = []


def _zero_rng() -> float:
    return 0.0


def make_rng(seed: Optional[int] = None) -> Rng:
    """Zero-argument float source backed by ``numpy.random.default_rng``."""
    generator = np.random.default_rng(seed)

    def _draw() -> float:
        return float(generator.random())

    return _draw


def pick_top_decision(decisions: Sequence[Decision], rng: Rng, roll_cap: float = 0.999999) -> Decision:
    """Return the highest-scoring decision, breaking exact ties with ``rng``.

    Scores are compared for exact equality; near-ties are not ties.
    """
    if not decisions:
        return Decision(company_id="unknown", intent="hold", score=0.0, reason=NO_DECISIONS_REASON)
    top_score = max(decision.score for decision in decisions)
    tied = [decision for decision in decisions if decision.score == top_score]
    # A NaN score never equals itself, so nothing ties.
    if not tied:
        return decisions[0]
    if len(tied) == 1:
        return tied[0]
    roll = clamp(finite_or(rng(), 0.0), 0.0, roll_cap)
    return tied[int(math.floor(roll * len(tied)))]


def resolve_price_trend(company: AICompanyContext, market_state: Optional[MarketState]) -> float:
    if market_state is not None:
        override = market_state.price_trends.get(company.company_id)
        if is_finite_number(override):
            return float(override)
    return company.price_trend


def _hold(company_id: str, reason: str, payload: Optional[Dict[str, Any]] = None) -> Decision:
    return Decision(company_id=company_id, intent="hold", score=0.0, reason=reason, payload=payload)


# A scored brain is either a finished decision or a sorted candidate list awaiting the tie-break.
_Scored = Tuple[Optional[Decision], List[Decision], Optional[Dict[str, Any]]]


def _score_brain(
    brain: AIBrain,
    companies: Dict[str, AICompanyContext],
    market_state: Optional[MarketState],
    cfg: EngineConfig,
) -> _Scored:
    company = companies.get(brain.company_id)
    if company is None:
        return _hold(brain.company_id, MISSING_COMPANY_REASON), [], None
    try:
        for name in BRAIN_NUMERIC_FIELDS:
            value = getattr(brain, name)
            if not is_finite_number(value):
                raise ValueError(f"brain field '{name}' is not a finite number: {value!r}")
        context = dataclasses.replace(company, price_trend=resolve_price_trend(company, market_state))
        signals = compute_signals(brain, context)
        scored = score_decisions(brain, context, cfg.DEFAULT_INTENTS, config=cfg, signals=signals)
        for decision in scored:
            if not is_finite_number(decision.score):
                raise ValueError(f"intent '{decision.intent}' scored {decision.score!r}")
    except (TypeError, ValueError, KeyError, AttributeError, ArithmeticError) as exc:
        print(f"[Tick] Scoring failed for company {brain.company_id}: {exc}")
        return _hold(brain.company_id, SCORING_FAILED_REASON, {"error": str(exc)}), [], None
    debug = _debug_entry(brain, signals, scored, cfg) if cfg.ENABLE_DEBUG_LOGS else None
    return None, scored, debug


def _debug_entry(
    brain: AIBrain, signals: SignalScores, scored: List[Decision], cfg: EngineConfig
) -> Dict[str, Any]:
    return {
        "log_type": "ai_decision",
        "company_id": brain.company_id,
        "archetype": brain.archetype,
        "signals": signals.to_dict(),
        "scores": {
            decision.intent: {
                "base": base_score_for_decision(decision.intent, signals, cfg.INTENT_SIGNAL_WEIGHTS),
                "bias": bias_for(brain.archetype, decision.intent),
                "final": decision.score,
            }
            for decision in scored
        },
    }


def run_ai_tick(
    world_state: WorldState,
    market_state: Optional[MarketState],
    brains: Sequence[AIBrain],
    rng: Optional[Rng] = None,
    config: Optional[EngineConfig] = None,
    tick_log: Optional["TickLogWriter"] = None,
) -> List[Decision]:
    """Choose one decision per brain; result order matches ``brains``.

    ``tick_log`` is written only while ``enable_tick_logging`` is on, so a
    writer can stay attached and be toggled through config or a tuning
    profile such as ``diagnostics``.
    """
    cfg = config or EngineConfig()
    draw = rng or _zero_rng
    companies = world_state.company_index()

    def _score(brain: AIBrain) -> _Scored:
        return _score_brain(brain, companies, market_state, cfg)

    if cfg.use_parallel and cfg.max_workers > 1 and len(brains) >= cfg.parallel_threshold:
        with ThreadPoolExecutor(max_workers=cfg.max_workers) as executor:
            results = list(executor.map(_score, brains))
    else:
        results = [_score(brain) for brain in brains]

    decisions: List[Decision] = []
    for finished, scored, debug in results:
        decision = finished if finished is not None else pick_top_decision(scored, draw, cfg.TIE_BREAK_ROLL_CAP)
        decisions.append(decision)
        if debug is not None:
            debug.update(
                {
                    "tick": world_state.tick,
                    "chosen_intent": decision.intent,
                    "chosen_score": decision.score,
                    "reason": decision.reason,
                }
            )
            DEBUG_DECISION_LOG.append(debug)

    if cfg.enable_tick_logging and tick_log is not None:
        tick_log.write(world_state.tick, decisions)
    return decisions


class TickLogWriter:
    """Append one JSON summary line per tick."""

    def __init__(self, path: str | Path):
        self.path = Path(path).expanduser()
        self.path.parent.mkdir(parents=True, exist_ok=True)

    def summarize(self, tick: int, decisions: Sequence[Decision]) -> Dict[str, Any]:
        scores = [decision.score for decision in decisions]
        record: Dict[str, Any] = {
            "tick": int(tick),
            "decision_count": len(decisions),
            "intent_counts": dict(Counter(decision.intent for decision in decisions)),
            "reasons": dict(Counter(decision.reason or "none" for decision in decisions)),
            "mean_score": float(np.mean(scores)) if scores else 0.0,
            "max_score": float(np.max(scores)) if scores else 0.0,
        }
        for key, value in list(record.items()):
            if isinstance(value, float) and (math.isnan(value) or math.isinf(value)):
                record[key] = 0.0
        return record

    def write(self, tick: int, decisions: Sequence[Decision]) -> Dict[str, Any]:
        record = self.summarize(tick, decisions)
        with self.path.open("a", encoding="utf-8") as log_file:
            log_file.write(json.dumps(record, default=float) + "\n")
        return record


def write_debug_log(path: str | Path) -> int:
    """Flush ``DEBUG_DECISION_LOG`` to a JSONL file and clear it."""
    count = len(DEBUG_DECISION_LOG)
    if DEBUG_DECISION_LOG:
        target = Path(path).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open("w", encoding="utf-8") as log_file:
            for entry in DEBUG_DECISION_LOG:
                log_file.write(json.dumps(entry, default=float) + "\n")
    DEBUG_DECISION_LOG.clear()
    return count


__all__ = [
    "DEBUG_DECISION_LOG",
    "MISSING_COMPANY_REASON",
    "NO_DECISIONS_REASON",
    "SCORING_FAILED_REASON",
    "TickLogWriter",
    "make_rng",
    "pick_top_decision",
    "resolve_price_trend",
    "run_ai_tick",
    "write_debug_log",
]
