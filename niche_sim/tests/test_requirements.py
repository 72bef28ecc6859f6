"""Requirement predicate and AND/OR evaluator behaviour."""

from __future__ import annotations

import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]
PARENT = ROOT.parent
for candidate in (PARENT, ROOT):
    path_str = str(candidate)
    if path_str not in sys.path:
        sys.path.insert(0, path_str)

from niche_sim.models import CompanyState
from niche_sim.requirements import (
    BooleanFlag,
    HasUpgrade,
    QuantityAtLeast,
    QuantitySumAtLeast,
    RequirementGroup,
    ScalarAtLeast,
    ScalarAtMost,
    group_from_dict,
    requires,
    satisfies,
)


def test_empty_group_is_vacuously_true() -> None:
    assert satisfies(CompanyState(), RequirementGroup())
    assert satisfies(CompanyState(), None)
    assert satisfies(CompanyState(), requires())


def test_all_predicates_must_hold() -> None:
    group = requires(assets={"barn_m2": 2000}, staff={"vet_health_officer": 1}, flags=["compliance_audit_passed"])
    state = CompanyState(
        assets={"barn_m2": 2500},
        staff={"vet_health_officer": 1},
        flags={"compliance_audit_passed": False},
    )
    assert not satisfies(state, group)
    state.flags["compliance_audit_passed"] = True
    assert satisfies(state, group)


def test_fractional_fte_minimum() -> None:
    group = requires(staff={"agronomist": 0.5})
    assert satisfies(CompanyState(staff={"agronomist": 0.5}), group)
    assert not satisfies(CompanyState(staff={"agronomist": 0.4}), group)


def test_negative_quantities_read_as_zero() -> None:
    state = CompanyState(assets={"fleet_van_count": -5, "fleet_economy_count": 3})
    assert QuantityAtLeast("assets", "fleet_van_count", 0).holds(state)
    assert not QuantityAtLeast("assets", "fleet_van_count", 1).holds(state)
    # Unclamped the sum would be -2.
    assert QuantitySumAtLeast("assets", ("fleet_van_count", "fleet_economy_count"), 3).holds(state)


def test_missing_ids_and_scores_read_as_zero() -> None:
    state = CompanyState()
    assert not QuantityAtLeast("machines", "pasteurizer", 1).holds(state)
    assert not ScalarAtLeast("health_score", 0.1).holds(state)
    assert ScalarAtMost("callback_rate", 0.08).holds(state)
    assert not HasUpgrade("drip_irrigation").holds(state)
    assert not BooleanFlag("organic_certified").holds(state)


def test_scalar_ceiling() -> None:
    predicate = ScalarAtMost("callback_rate", 0.08)
    assert predicate.holds(CompanyState(scores={"callback_rate": 0.08}))
    assert not predicate.holds(CompanyState(scores={"callback_rate": 0.09}))


def test_any_of_needs_one_full_alternative() -> None:
    group = requires(
        min_scores={"climate_control_level": 0.45},
        any_of=[requires(machines={"packaging_line": 1}), requires(staff={"logistics_staff": 2})],
    )
    base = {"scores": {"climate_control_level": 0.5}}
    assert not satisfies(CompanyState(**base), group)
    assert satisfies(CompanyState(machines={"packaging_line": 1}, **base), group)
    assert satisfies(CompanyState(staff={"logistics_staff": 2}, **base), group)
    assert not satisfies(CompanyState(staff={"logistics_staff": 1}, **base), group)
    # Direct predicates still gate even when an alternative holds.
    assert not satisfies(
        CompanyState(machines={"packaging_line": 1}, scores={"climate_control_level": 0.3}), group
    )


def test_nested_any_of_is_evaluated_recursively() -> None:
    inner = RequirementGroup(any_of=(requires(upgrades=["a"]), requires(upgrades=["b"])))
    group = RequirementGroup(
        predicates=(ScalarAtLeast("reputation_score", 0.5),),
        any_of=(inner, requires(flags=["c"])),
    )
    state = CompanyState(scores={"reputation_score": 0.6})
    assert not satisfies(state, group)
    assert satisfies(CompanyState(scores={"reputation_score": 0.6}, upgrades=frozenset({"b"})), group)
    assert satisfies(CompanyState(scores={"reputation_score": 0.6}, flags={"c": True}), group)


def test_empty_alternative_satisfies_any_of() -> None:
    group = RequirementGroup(any_of=(requires(upgrades=["never"]), RequirementGroup()))
    assert satisfies(CompanyState(), group)


def test_group_from_dict_ignores_unknown_keys() -> None:
    group = group_from_dict(
        {
            "assets": [{"id": "cold_storage_kg", "min": 1000}],
            "staff": [{"id": "processing_operator", "min": 2}],
            "min_scores": {"health_score": 0.85},
            "max_scores": {"callback_rate": 0.1},
            "sums": [{"kind": "assets", "ids": ["chargers_ac_count", "chargers_dc_count"], "min": 6}],
            "any_of": [{"upgrades": ["crm_billing_system"]}, {"flags": ["contract_signed"]}],
            "minFutureMetric": 3,
            "notes": "ignored",
        }
    )
    assert len(group.predicates) == 5
    assert len(group.any_of) == 2
    state = CompanyState(
        assets={"cold_storage_kg": 1000, "chargers_ac_count": 4, "chargers_dc_count": 2},
        staff={"processing_operator": 2},
        scores={"health_score": 0.9, "callback_rate": 0.05},
        flags={"contract_signed": True},
    )
    assert satisfies(state, group)


def test_group_from_dict_empty_payload() -> None:
    assert group_from_dict(None).is_empty()
    assert group_from_dict({}).is_empty()
    assert group_from_dict({"unknown": [1, 2]}).is_empty()


def test_walk_visits_alternatives() -> None:
    group = requires(upgrades=["x"], any_of=[requires(upgrades=["y"]), requires(flags=["z"])])
    upgrade_ids = {p.upgrade_id for p in group.walk() if isinstance(p, HasUpgrade)}
    assert upgrade_ids == {"x", "y"}
