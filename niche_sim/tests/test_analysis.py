"""pandas summaries of decisions and unlock coverage."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PARENT = ROOT.parent
for candidate in (PARENT, ROOT):
    path_str = str(candidate)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

import pytest

from niche_sim.analysis import decisions_frame, intent_share_table, unlock_coverage_table
from niche_sim.models import AIBrain, CompanyState, Decision


def _brains():
    return [
        AIBrain("a", "Conservative", 100.0, 0.5, 0.7),
        AIBrain("b", "Conservative", 100.0, 0.5, 0.7),
        AIBrain("c", "Expansionist", 100.0, 0.5, 0.7),
    ]


def test_decisions_frame_joins_archetypes() -> None:
    decisions = [
        Decision("a", "hold", 0.4, "heuristic"),
        Decision("b", "pay_down_debt", 0.7, "heuristic"),
        Decision("c", "expand_capacity", 0.9, "heuristic"),
        Decision("x", "hold", 0.0, "missing_company_state"),
    ]
    frame = decisions_frame(decisions, _brains())
    assert list(frame.columns) == ["company_id", "intent", "score", "reason", "archetype"]
    assert frame.loc[frame["company_id"] == "c", "archetype"].item() == "Expansionist"
    assert frame.loc[frame["company_id"] == "x", "archetype"].isna().all()

    shares = intent_share_table(frame)
    assert shares.loc["Conservative", "hold"] == pytest.approx(0.5)
    assert shares.loc["Conservative", "pay_down_debt"] == pytest.approx(0.5)
    assert shares.loc["Expansionist", "expand_capacity"] == pytest.approx(1.0)
    assert shares.loc["unknown", "hold"] == pytest.approx(1.0)
    assert shares.sum(axis=1).tolist() == pytest.approx([1.0, 1.0, 1.0])


def test_empty_inputs() -> None:
    frame = decisions_frame([])
    assert frame.empty
    assert intent_share_table(frame).empty
    assert unlock_coverage_table({}).empty


def test_unlock_coverage_table() -> None:
    dairy_states = [
        CompanyState(),
        CompanyState(machines={"butter_churn": 1}, assets={"cold_storage_kg": 800}),
    ]
    table = unlock_coverage_table({"dairy": dairy_states, "greenhouse": [CompanyState()]})
    assert table["niche_id"].tolist() == ["dairy", "greenhouse"]
    dairy = table.iloc[0]
    assert dairy["companies"] == 2
    assert dairy["total_skus"] == 6
    assert dairy["min_unlocked"] == 1
    assert dairy["max_unlocked"] == 3
    assert dairy["mean_unlocked"] == pytest.approx(2.0)
    assert dairy["mean_coverage"] == pytest.approx(2.0 / 6)


def test_unlock_coverage_unknown_niche() -> None:
    with pytest.raises(KeyError):
        unlock_coverage_table({"bakery": [CompanyState()]})
