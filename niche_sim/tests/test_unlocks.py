"""Unlock resolution over the shipped niche tables."""

from __future__ import annotations

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

from niche_sim.content import NICHE_LIBRARY
from niche_sim.models import CompanyState, ProductDef, ProductUnlock
from niche_sim.requirements import (
    BooleanFlag,
    HasUpgrade,
    QuantityAtLeast,
    QuantitySumAtLeast,
    ScalarAtLeast,
    ScalarAtMost,
    requires,
)
from niche_sim.unlocks import NicheRules, byproduct_pass, get_unlocked_products, resolve_unlocked_products


def _dairy_state(**extra) -> CompanyState:
    payload = dict(
        assets={"cold_storage_kg": 1200},
        staff={"processing_operator": 2, "quality_compliance": 1},
        machines={"pasteurizer": 1, "cheese_vat": 2},
        scores={"health_score": 0.9},
        flags={"compliance_audit_passed": True},
        active_products=("cheese_kg",),
    )
    payload.update(extra)
    return CompanyState(**payload)


def test_dairy_gating_with_whey_byproduct() -> None:
    assert get_unlocked_products("dairy", _dairy_state()) == [
        "raw_milk_bulk_liter",
        "premium_milk_liter",
        "cheese_kg",
        "whey_liter",
    ]


def test_whey_follows_active_products_alone() -> None:
    state = CompanyState(active_products=("butter_kg",))
    assert get_unlocked_products("dairy", state) == ["raw_milk_bulk_liter", "whey_liter"]


def test_whey_follows_unlocked_parent() -> None:
    state = CompanyState(machines={"butter_churn": 1}, assets={"cold_storage_kg": 800})
    assert get_unlocked_products("dairy", state) == ["raw_milk_bulk_liter", "butter_kg", "whey_liter"]


def test_repair_shop_gating() -> None:
    state = CompanyState(
        staff={"technician": 2, "master_tech": 1, "service_advisor": 1},
        scores={
            "service_bays": 2,
            "lifts": 2,
            "diagnostic_tools_level": 2,
            "compliance_score": 0.65,
            "reputation_score": 0.6,
        },
        flags={"ev_tools_enabled": False},
    )
    unlocked = get_unlocked_products("repairShop", state)
    assert unlocked == [
        "inspection_service_unit",
        "oil_service_unit",
        "brake_job_unit",
        "tires_service_unit",
        "diagnostics_advanced_unit",
    ]
    assert "ev_repair_job_unit" not in unlocked


def test_greenhouse_full_state_unlocks_everything() -> None:
    state = CompanyState(
        assets={"cold_storage_kg": 2000, "co2_injection_enabled": 1},
        staff={"grower": 2, "quality_compliance": 1, "logistics_staff": 2, "maintenance_technician": 1},
        machines={
            "climate_control_system": 1,
            "packaging_line": 1,
            "led_lighting_system": 1,
            "pest_management_system": 1,
            "sorting_line": 1,
        },
        scores={"climate_control_level": 0.7},
        flags={"co2_injection_enabled": True, "compliance_audit_passed": True},
    )
    assert get_unlocked_products("greenhouse", state) == NICHE_LIBRARY["greenhouse"].skus


def test_livestock_full_state_unlocks_everything() -> None:
    state = CompanyState(
        assets={"pens_capacity_animals": 22000, "barn_m2": 2200, "waste_processing_enabled": 1},
        staff={
            "animal_caretaker": 2,
            "feed_manager": 1,
            "processing_operator": 1,
            "quality_compliance": 1,
            "vet_health_officer": 1,
        },
        machines={"egg_sorting_line": 1, "slaughter_line": 1, "rendering_unit": 1},
        vehicles={"livestock_trailer": 1, "refrigerated_truck": 1},
        scores={"welfare_score": 0.82, "health_score": 0.75, "biosecurity_level": 0.65, "quality_score": 0.8},
        flags={"compliance_audit_passed": True, "contract_pickup_enabled": True},
    )
    assert get_unlocked_products("livestock", state) == NICHE_LIBRARY["livestock"].skus


def test_food_processing_private_label() -> None:
    state = CompanyState(
        assets={"packaging_capacity_units": 25000, "cold_storage_kg": 9000},
        staff={"processing_operator": 4, "quality_compliance": 2, "logistics_staff": 2, "production_manager": 1},
        machines={"mixing_line": 1, "baking_line": 2, "packaging_line": 1, "cooking_line": 1},
        upgrades=frozenset({"advanced_packaging", "contract_production_line"}),
        scores={"compliance_score": 0.9},
        flags={"compliance_audit_passed": True, "contract_signed": True},
    )
    assert get_unlocked_products("foodProcessing", state) == [
        "flour_kg",
        "packaged_bread_unit",
        "private_label_batch",
    ]


def test_kitchen_renovation_alternatives() -> None:
    base = dict(staff={"crew_fte": 4}, scores={"reputation_score": 0.5, "contract_discipline_score": 0.5,
                                               "subcontractor_dependency_score": 0.9})
    assert "kitchen_renovation_job_unit" not in get_unlocked_products("renovation", CompanyState(**base))
    with_network = CompanyState(upgrades=frozenset({"preferred_subcontractor_network"}), **base)
    assert "kitchen_renovation_job_unit" in get_unlocked_products("renovation", with_network)


def test_mobility_fleet_total() -> None:
    state = CompanyState(
        assets={"fleet_van_count": 2, "fleet_economy_count": 6},
        staff={"logistics_staff": 1},
        upgrades=frozenset({"delivery_partnerships_program"}),
        scores={"compliance_score": 0.7, "uptime_score": 0.9},
    )
    assert "delivery_mobility_day_unit" not in get_unlocked_products("mobility", state)
    state.assets["fleet_premium_count"] = 2
    assert "delivery_mobility_day_unit" in get_unlocked_products("mobility", state)


def test_crop_farm_starting_entries_ignore_requirements() -> None:
    assert get_unlocked_products("cropFarm", CompanyState()) == ["agri.crop.wheat", "agri.crop.potato"]


@pytest.mark.parametrize("niche_id", sorted(NICHE_LIBRARY))
def test_zero_state_unlocks_only_starting(niche_id: str) -> None:
    rules = NICHE_LIBRARY[niche_id]
    unlocked = get_unlocked_products(niche_id, CompanyState())
    assert unlocked == rules.starting_skus()
    assert unlocked


@pytest.mark.parametrize("niche_id", sorted(NICHE_LIBRARY))
def test_resolution_is_idempotent(niche_id: str) -> None:
    state = _dairy_state()
    first = get_unlocked_products(niche_id, state)
    assert get_unlocked_products(niche_id, state) == first
    assert len(first) == len(set(first))


def _referenced(rules: NicheRules):
    quantities = {}
    floors = {}
    ceilings = {}
    upgrades = set()
    flags = set()
    for entry in rules.unlocks:
        if entry.requirements is None:
            continue
        for predicate in entry.requirements.walk():
            if isinstance(predicate, QuantityAtLeast):
                quantities[(predicate.kind, predicate.item_id)] = max(
                    predicate.minimum, quantities.get((predicate.kind, predicate.item_id), 0.0)
                )
            elif isinstance(predicate, QuantitySumAtLeast):
                for item_id in predicate.item_ids:
                    quantities.setdefault((predicate.kind, item_id), predicate.minimum)
            elif isinstance(predicate, ScalarAtLeast):
                floors[predicate.metric] = max(predicate.minimum, floors.get(predicate.metric, 0.0))
            elif isinstance(predicate, ScalarAtMost):
                ceilings[predicate.metric] = predicate.maximum
            elif isinstance(predicate, HasUpgrade):
                upgrades.add(predicate.upgrade_id)
            elif isinstance(predicate, BooleanFlag):
                flags.add(predicate.flag)
    return quantities, floors, ceilings, sorted(upgrades), sorted(flags)


def _random_state(generator, quantities, floors, ceilings, upgrades, flags) -> CompanyState:
    state = CompanyState()
    for (kind, item_id), minimum in quantities.items():
        getattr(state, kind)[item_id] = float(generator.uniform(-0.5, 1.5) * minimum)
    for metric, minimum in floors.items():
        state.scores[metric] = float(generator.uniform(0.0, 1.5) * minimum)
    for metric, maximum in ceilings.items():
        state.scores[metric] = float(generator.uniform(0.0, 2.0) * maximum)
    state.upgrades = frozenset(u for u in upgrades if generator.random() < 0.5)
    state.flags = {flag: bool(generator.random() < 0.5) for flag in flags}
    return state


def _dominating(generator, state: CompanyState, upgrades, flags, ceilings) -> CompanyState:
    richer = CompanyState(
        assets={k: v + float(generator.uniform(0, 5_000)) for k, v in state.assets.items()},
        staff={k: v + float(generator.uniform(0, 3)) for k, v in state.staff.items()},
        machines={k: v + float(generator.uniform(0, 3)) for k, v in state.machines.items()},
        vehicles={k: v + float(generator.uniform(0, 3)) for k, v in state.vehicles.items()},
        # Lower-is-better scores stay put; raising them is not "more".
        scores={k: (v if k in ceilings else v + float(generator.uniform(0, 0.3))) for k, v in state.scores.items()},
        upgrades=state.upgrades | frozenset(u for u in upgrades if generator.random() < 0.5),
        flags={k: v or bool(generator.random() < 0.5) for k, v in state.flags.items()},
        active_products=state.active_products,
    )
    return richer


@pytest.mark.parametrize("niche_id", sorted(NICHE_LIBRARY))
def test_unlocks_are_monotone_in_resources(niche_id: str) -> None:
    rules = NICHE_LIBRARY[niche_id]
    quantities, floors, ceilings, upgrades, flags = _referenced(rules)
    generator = np.random.default_rng(7)
    for _ in range(60):
        poorer = _random_state(generator, quantities, floors, ceilings, upgrades, flags)
        richer = _dominating(generator, poorer, upgrades, flags, ceilings)
        assert set(get_unlocked_products(rules, poorer)) <= set(get_unlocked_products(rules, richer))


def test_sku_without_unlock_entry_never_unlocks() -> None:
    rules = NicheRules(
        niche_id="toy",
        sector_id="TEST",
        name="Toy",
        description="",
        products=(ProductDef("a", "A"), ProductDef("b", "B"), ProductDef("c", "C")),
        unlocks=(ProductUnlock("a", starting_unlocked=True),),
        post_passes=(byproduct_pass("c", ["a"]),),
    )
    assert get_unlocked_products(rules, CompanyState(assets={"anything": 99})) == ["a"]


def test_order_follows_product_table() -> None:
    products = (ProductDef("z", "Z"), ProductDef("m", "M"), ProductDef("a", "A"))
    unlocks = (
        ProductUnlock("a", starting_unlocked=True),
        ProductUnlock("m", requirements=requires()),
        ProductUnlock("z", requirements=requires(flags=["go"])),
    )
    assert resolve_unlocked_products(CompanyState(flags={"go": True}), unlocks, products) == ["z", "m", "a"]


def test_unknown_niche_raises() -> None:
    with pytest.raises(KeyError, match="Unknown niche 'bakery'"):
        get_unlocked_products("bakery", CompanyState())


def test_explicit_library_lookup() -> None:
    library = {"dairy": NICHE_LIBRARY["dairy"]}
    assert get_unlocked_products("dairy", CompanyState(), library=library) == ["raw_milk_bulk_liter"]
    with pytest.raises(KeyError):
        get_unlocked_products("greenhouse", CompanyState(), library=library)
