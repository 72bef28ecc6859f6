"""Shipped niche tables, catalog validation and archetypes."""

from __future__ import annotations

import dataclasses
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PARENT = ROOT.parent
for candidate in (PARENT, ROOT):
    path_str = str(candidate)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

import numpy as np
import pytest

from niche_sim.archetypes import (
    ARCHETYPE_LIBRARY,
    bias_for,
    bias_matrix,
    create_brain,
    draw_archetype,
    reassign_archetype,
)
from niche_sim.content import NICHE_LIBRARY, SECTORS, build_library, enabled_niches, niches_for_sector
from niche_sim.content.validation import ERROR, WARNING, summarize_issues, validate_catalog, validate_niche
from niche_sim.models import DEFAULT_INTENTS, ArchetypeId, NicheAIConfig, ProductDef, ProductUnlock
from niche_sim.requirements import requires
from niche_sim.unlocks import NicheRules


def test_library_shape() -> None:
    assert len(NICHE_LIBRARY) == 15
    assert set(SECTORS) == {"AGRI", "AUTO", "BUILD"}
    assert [len(niches_for_sector(code)) for code in ("AGRI", "AUTO", "BUILD")] == [6, 4, 5]
    for rules in NICHE_LIBRARY.values():
        assert len(rules.products) == 6
        assert rules.sector_id in SECTORS
        assert rules.ai_config is not None


def test_default_sector_gating_hides_construction() -> None:
    niche_ids = {rules.niche_id for rules in enabled_niches()}
    assert len(niche_ids) == 10
    assert "plumbing" not in niche_ids
    assert {"dairy", "repairShop"} <= niche_ids


def test_duplicate_niche_ids_rejected() -> None:
    with pytest.raises(ValueError, match="Duplicate niche id 'dairy'"):
        build_library([NICHE_LIBRARY["dairy"], NICHE_LIBRARY["dairy"]])


def test_shipped_catalog_is_consistent() -> None:
    issues = validate_catalog()
    counts = summarize_issues(issues)
    assert counts[ERROR] == 0
    assert counts[WARNING] == 2
    assert {issue.niche_id for issue in issues} == {"cropFarm"}
    assert all("never evaluated" in issue.message for issue in issues)


def test_broken_niche_reports_every_problem() -> None:
    rules = NicheRules(
        niche_id="broken",
        sector_id="TEST",
        name="Broken",
        description="",
        products=(ProductDef("a", "A"), ProductDef("a", "A again"), ProductDef("b", "B")),
        unlocks=(
            ProductUnlock("a", requirements=requires(upgrades=["mystery"])),
            ProductUnlock("ghost"),
        ),
        upgrade_ids=("known",),
        ai_config=NicheAIConfig({"Conservative": 0.5, "Dreamer": 0.2}, 1.0, 0.5, 0.5),
    )
    issues = validate_niche(rules)
    messages = [str(issue) for issue in issues]
    errors = [issue for issue in issues if issue.severity == ERROR]
    warnings = [issue for issue in issues if issue.severity == WARNING]
    assert any("declared 2 times" in message for message in messages)
    assert any("missing product 'ghost'" in message for message in messages)
    assert any("'b' has no unlock entry" in message for message in messages)
    assert any("No starting-unlocked product" in message for message in messages)
    assert any("unknown archetype 'Dreamer'" in message for message in messages)
    assert any("unknown upgrade 'mystery'" in message for message in messages)
    assert any("sum to 0.700000" in message for message in messages)
    assert len(errors) == 5
    assert len(warnings) == 2
    assert messages[0].startswith("ERROR [broken]")


def test_archetype_catalogue() -> None:
    assert list(ARCHETYPE_LIBRARY) == [archetype.value for archetype in ArchetypeId]
    assert ARCHETYPE_LIBRARY["CostCutter"].label == "Cost Cutter"
    assert bias_for("Conservative", "pay_down_debt") == 0.3
    assert bias_for("Conservative", "expand_capacity") == 0.0
    assert bias_for("Nobody", "hold") == 0.0
    assert bias_for("OrganicPurist", "upgrade_quality") == 0.5
    # Loose spellings are resolved when brains are built, not here.
    assert bias_for("organic purist", "upgrade_quality") == 0.0


def test_bias_matrix_is_dense() -> None:
    matrix = bias_matrix()
    assert set(matrix) == set(ARCHETYPE_LIBRARY)
    for row in matrix.values():
        assert list(row) == list(DEFAULT_INTENTS)
    assert matrix["Expansionist"]["expand_capacity"] == 0.5
    assert matrix["Expansionist"]["hold"] == 0.0


def test_brain_factory_copies_niche_targets() -> None:
    config = NICHE_LIBRARY["dairy"].ai_config
    brain = create_brain("co-1", config, archetype="cost cutter")
    assert brain.archetype == "CostCutter"
    assert brain.cash_safety_threshold == 120_000
    assert brain.debt_tolerance == 0.45
    assert brain.utilization_target == 0.8
    with pytest.raises(dataclasses.FrozenInstanceError):
        brain.archetype = "Expansionist"  # type: ignore[misc]
    with pytest.raises(KeyError):
        create_brain("co-1", config, archetype="Dreamer")


def test_drawn_archetypes_follow_weights() -> None:
    generator = np.random.default_rng(3)
    draws = [draw_archetype({"Conservative": 0.0, "Expansionist": 1.0}, generator) for _ in range(20)]
    assert set(draws) == {"Expansionist"}
    config = NICHE_LIBRARY["organicFarming"].ai_config
    drawn = {create_brain(f"co-{idx}", config, rng=generator).archetype for idx in range(200)}
    assert "OrganicPurist" in drawn
    assert drawn <= set(ARCHETYPE_LIBRARY)
    with pytest.raises(ValueError):
        draw_archetype({"Dreamer": 1.0})


def test_reassign_returns_new_brain() -> None:
    brain = create_brain("co-1", NICHE_LIBRARY["mobility"].ai_config, archetype="Conservative")
    moved = reassign_archetype(brain, "vertical_integrator")
    assert moved.archetype == "VerticalIntegrator"
    assert brain.archetype == "Conservative"
    assert moved.company_id == brain.company_id
    with pytest.raises(KeyError):
        reassign_archetype(brain, "Dreamer")
