"""pandas summaries of tick decisions and unlock coverage."""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Optional, Sequence

import pandas as pd

from .models import AIBrain, CompanyState, Decision
from .unlocks import NicheRules, get_unlocked_products

DECISION_COLUMNS = ["company_id", "intent", "score", "reason", "archetype"]


def decisions_frame(
    decisions: Sequence[Decision],
    brains: Optional[Sequence[AIBrain]] = None,
) -> pd.DataFrame:
    """One row per decision, with the brain's archetype joined in when available."""
    if not decisions:
        return pd.DataFrame(columns=DECISION_COLUMNS)
    frame = pd.DataFrame([decision.to_dict() for decision in decisions]).drop(columns=["payload"])
    archetypes = {brain.company_id: brain.archetype for brain in brains or ()}
    frame["archetype"] = frame["company_id"].map(archetypes)
    return frame[DECISION_COLUMNS]


def intent_share_table(frame: pd.DataFrame) -> pd.DataFrame:
    """Share of each intent within each archetype (rows sum to 1)."""
    if frame.empty:
        return pd.DataFrame()
    grouped = frame.fillna({"archetype": "unknown"}).groupby("archetype")["intent"]
    shares = grouped.value_counts(normalize=True).unstack(fill_value=0.0)
    return shares.sort_index(axis=0).sort_index(axis=1)


def unlock_coverage_table(
    states_by_niche: Mapping[str, Iterable[CompanyState]],
    library: Optional[Mapping[str, NicheRules]] = None,
) -> pd.DataFrame:
    """Per niche: companies evaluated, SKU count, and mean / min / max unlocked SKUs."""
    rows: List[Dict[str, object]] = []
    for niche_id, states in states_by_niche.items():
        if library is not None and niche_id in library:
            rules = library[niche_id]
        else:
            from .content import NICHE_LIBRARY

            if niche_id not in NICHE_LIBRARY:
                raise KeyError(f"Unknown niche '{niche_id}'.")
            rules = NICHE_LIBRARY[niche_id]
        counts = [len(get_unlocked_products(rules, state)) for state in states]
        total = len(rules.products)
        rows.append(
            {
                "niche_id": niche_id,
                "companies": len(counts),
                "total_skus": total,
                "mean_unlocked": float(pd.Series(counts, dtype=float).mean()) if counts else 0.0,
                "min_unlocked": min(counts) if counts else 0,
                "max_unlocked": max(counts) if counts else 0,
                "mean_coverage": float(pd.Series(counts, dtype=float).mean() / total) if counts and total else 0.0,
            }
        )
    if not rows:
        return pd.DataFrame(
            columns=["niche_id", "companies", "total_skus", "mean_unlocked", "min_unlocked", "max_unlocked", "mean_coverage"]
        )
    return pd.DataFrame(rows).sort_values("niche_id").reset_index(drop=True)


__all__ = ["decisions_frame", "intent_share_table", "unlock_coverage_table"]
