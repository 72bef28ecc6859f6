"""Agriculture niches: crop farm, dairy, food processing, greenhouse, livestock, organic farming."""

from __future__ import annotations

from ..requirements import requires
from ..unlocks import NicheRules, byproduct_pass
from .common import ai_config, alt, derived, gated, products, starting

SECTOR_ID = "AGRI"


CROP_FARM = NicheRules(
    niche_id="cropFarm",
    sector_id=SECTOR_ID,
    name="Crop Farm",
    description="Field and greenhouse crops with seasonal yield swings.",
    products=products(
        ("agri.crop.wheat", "Wheat", "ton"),
        ("agri.crop.corn", "Corn", "ton"),
        ("agri.crop.potato", "Potato", "ton"),
        ("agri.crop.soy", "Soy", "ton"),
        ("agri.crop.tomato", "Tomato", "kg"),
        ("agri.crop.apple", "Apple", "kg"),
    ),
    unlocks=(
        # Both starter crops ship with the requirements a new farm is seeded with.
        starting(
            "agri.crop.wheat",
            requires(
                assets={"land_ha": 10, "tractor": 1, "harvester": 1},
                staff={"field_worker": 2, "machine_operator": 1},
            ),
        ),
        starting(
            "agri.crop.potato",
            requires(assets={"land_ha": 8, "cold_storage_tons": 10}, staff={"field_worker": 2}),
        ),
        gated(
            "agri.crop.corn",
            assets={"land_ha": 12, "irrigation_system": 1},
            staff={"field_worker": 3},
            upgrades=["drip_irrigation"],
            min_scores={"quality_score": 0.75},
        ),
        gated(
            "agri.crop.soy",
            assets={"land_ha": 10},
            staff={"agronomist": 0.5},
            upgrades=["soil_rotation_program"],
        ),
        gated(
            "agri.crop.tomato",
            assets={"greenhouse_m2": 500, "irrigation_system": 1},
            staff={"horticulturist": 1},
            upgrades=["greenhouse_expansion"],
            min_scores={"quality_score": 0.8},
        ),
        gated(
            "agri.crop.apple",
            assets={"orchard_ha": 15, "cold_storage_tons": 15},
            staff={"horticulturist": 0.5},
            upgrades=["orchard_establishment"],
            min_scores={"quality_score": 0.8},
        ),
    ),
    upgrade_ids=(
        "soil_rotation_program",
        "drip_irrigation",
        "precision_ag",
        "cold_chain",
        "orchard_establishment",
        "greenhouse_expansion",
        "organic_certification",
    ),
    ai_config=ai_config((0.2, 0.2, 0.2, 0.15, 0.15, 0.1), 50_000, 0.5, 0.75),
)


DAIRY = NicheRules(
    niche_id="dairy",
    sector_id=SECTOR_ID,
    name="Dairy",
    description="Continuous milk production with health constraints and thin margins.",
    products=products(
        ("raw_milk_bulk_liter", "Raw Milk (Bulk)", "liter"),
        ("premium_milk_liter", "Premium Milk", "liter"),
        ("cheese_kg", "Cheese", "kg"),
        ("yogurt_kg", "Yogurt", "kg"),
        ("butter_kg", "Butter", "kg"),
        ("whey_liter", "Whey (Byproduct)", "liter"),
    ),
    unlocks=(
        starting("raw_milk_bulk_liter"),
        gated(
            "premium_milk_liter",
            machines={"pasteurizer": 1},
            staff={"quality_compliance": 1},
            min_scores={"health_score": 0.85},
        ),
        gated(
            "cheese_kg",
            machines={"cheese_vat": 2},
            staff={"processing_operator": 2},
            assets={"cold_storage_kg": 1000},
            flags=["compliance_audit_passed"],
        ),
        gated("yogurt_kg", machines={"fermentation_tank": 1}, staff={"processing_operator": 2}),
        gated("butter_kg", machines={"butter_churn": 1}, assets={"cold_storage_kg": 800}),
        derived("whey_liter"),
    ),
    post_passes=(byproduct_pass("whey_liter", ("cheese_kg", "butter_kg")),),
    upgrade_ids=(
        "feed_optimization_program",
        "herd_health_program",
        "automated_milking_system",
        "vertical_integration_push",
    ),
    ai_config=ai_config((0.1, 0.15, 0.25, 0.2, 0.2, 0.1), 120_000, 0.45, 0.8),
)


FOOD_PROCESSING = NicheRules(
    niche_id="foodProcessing",
    sector_id=SECTOR_ID,
    name="Food Processing",
    description="Input-driven conversion with tight margins and high scaling.",
    products=products(
        ("flour_kg", "Flour", "kg"),
        ("packaged_bread_unit", "Packaged Bread", "unit"),
        ("ready_meal_unit", "Ready Meals", "unit"),
        ("animal_feed_mix_ton", "Animal Feed Mix", "ton"),
        ("frozen_vegetables_kg", "Frozen Vegetables", "kg"),
        ("private_label_batch", "Private Label Batch", "batch"),
    ),
    unlocks=(
        starting("flour_kg"),
        gated(
            "packaged_bread_unit",
            machines={"mixing_line": 1, "baking_line": 2, "packaging_line": 1},
            staff={"processing_operator": 4, "quality_compliance": 1},
            assets={"packaging_capacity_units": 10_000},
            upgrades=["advanced_packaging"],
            min_scores={"compliance_score": 0.7},
        ),
        gated(
            "ready_meal_unit",
            machines={"mixing_line": 1, "cooking_line": 1, "packaging_line": 1},
            staff={"processing_operator": 4, "quality_compliance": 1, "production_manager": 0.5},
            assets={"cold_storage_kg": 5_000},
            upgrades=["throughput_expansion"],
            min_scores={"compliance_score": 0.8},
            flags=["compliance_audit_passed"],
        ),
        gated(
            "animal_feed_mix_ton",
            machines={"mixing_line": 1},
            staff={"processing_operator": 2},
            assets={"dry_storage_kg": 15_000},
            upgrades=["energy_optimization"],
            min_scores={"compliance_score": 0.6},
        ),
        gated(
            "frozen_vegetables_kg",
            machines={"freezing_line": 1, "packaging_line": 1},
            staff={"processing_operator": 3, "quality_compliance": 1},
            assets={"cold_storage_kg": 8_000},
            upgrades=["advanced_packaging"],
            min_scores={"compliance_score": 0.75},
        ),
        gated(
            "private_label_batch",
            machines={"mixing_line": 1, "cooking_line": 1, "packaging_line": 1},
            staff={"quality_compliance": 2, "logistics_staff": 2, "production_manager": 1},
            assets={"packaging_capacity_units": 20_000, "cold_storage_kg": 6_000},
            upgrades=["contract_production_line"],
            min_scores={"compliance_score": 0.85},
            flags=["compliance_audit_passed", "contract_signed"],
        ),
    ),
    upgrade_ids=(
        "energy_optimization",
        "advanced_packaging",
        "throughput_expansion",
        "contract_production_line",
    ),
    ai_config=ai_config((0.15, 0.2, 0.25, 0.2, 0.15, 0.05), 150_000, 0.55, 0.78),
)


GREENHOUSE = NicheRules(
    niche_id="greenhouse",
    sector_id=SECTOR_ID,
    name="Greenhouse",
    description="Energy-sensitive controlled agriculture with fast cycles.",
    products=products(
        ("tomatoes_kg", "Tomatoes", "kg"),
        ("cucumbers_kg", "Cucumbers", "kg"),
        ("bell_peppers_kg", "Bell Peppers", "kg"),
        ("herbs_pack", "Herbs Pack", "pack"),
        ("strawberries_kg", "Strawberries", "kg"),
        ("microgreens_kg", "Microgreens", "kg"),
    ),
    unlocks=(
        starting("tomatoes_kg"),
        gated(
            "cucumbers_kg",
            min_scores={"climate_control_level": 0.45},
            any_of=[alt(machines={"packaging_line": 1}), alt(staff={"logistics_staff": 2})],
        ),
        gated(
            "bell_peppers_kg",
            min_scores={"climate_control_level": 0.6},
            machines={"sorting_line": 1},
            staff={"quality_compliance": 1},
        ),
        gated("herbs_pack", machines={"packaging_line": 1}, staff={"quality_compliance": 1}),
        gated(
            "strawberries_kg",
            machines={"pest_management_system": 1},
            assets={"cold_storage_kg": 1_500},
            staff={"maintenance_technician": 1},
        ),
        gated(
            "microgreens_kg",
            machines={"led_lighting_system": 1},
            assets={"co2_injection_enabled": 1},
            staff={"grower": 2},
            flags=["co2_injection_enabled", "compliance_audit_passed"],
        ),
    ),
    upgrade_ids=(
        "climate_control_upgrade",
        "led_lighting_system",
        "integrated_pest_management",
        "cold_chain_packaging_expansion",
    ),
    ai_config=ai_config((0.2, 0.15, 0.2, 0.1, 0.1, 0.25), 130_000, 0.5, 0.8),
)


LIVESTOCK = NicheRules(
    niche_id="livestock",
    sector_id=SECTOR_ID,
    name="Livestock",
    description="Feed-driven operations with health, welfare, and compliance pressure.",
    products=products(
        ("poultry_meat_kg", "Poultry Meat", "kg"),
        ("eggs_dozen", "Eggs", "dozen"),
        ("pork_kg", "Pork", "kg"),
        ("beef_kg", "Beef", "kg"),
        ("hides_leather_kg", "Hides & Leather", "kg"),
        ("byproducts_rendered_kg", "Rendered Byproducts", "kg"),
    ),
    unlocks=(
        starting("poultry_meat_kg"),
        gated(
            "eggs_dozen",
            machines={"egg_sorting_line": 1},
            staff={"quality_compliance": 1},
            min_scores={"welfare_score": 0.75},
        ),
        gated(
            "pork_kg",
            assets={"pens_capacity_animals": 20_000},
            staff={"feed_manager": 1},
            vehicles={"livestock_trailer": 1},
            min_scores={"biosecurity_level": 0.6},
        ),
        gated(
            "beef_kg",
            assets={"barn_m2": 2_000},
            staff={"vet_health_officer": 1},
            min_scores={"welfare_score": 0.8},
            flags=["compliance_audit_passed"],
        ),
        gated(
            "hides_leather_kg",
            staff={"processing_operator": 1},
            min_scores={"quality_score": 0.7},
            any_of=[alt(vehicles={"refrigerated_truck": 1}), alt(flags=["contract_pickup_enabled"])],
        ),
        gated(
            "byproducts_rendered_kg",
            assets={"waste_processing_enabled": 1},
            any_of=[alt(machines={"rendering_unit": 1}), alt(machines={"slaughter_line": 1})],
        ),
    ),
    upgrade_ids=(
        "biosecurity_program",
        "welfare_facility_improvements",
        "feed_contract_hedging",
        "onsite_processing_line",
    ),
    ai_config=ai_config((0.15, 0.2, 0.25, 0.15, 0.15, 0.1), 140_000, 0.55, 0.78),
)


ORGANIC_FARMING = NicheRules(
    niche_id="organicFarming",
    sector_id=SECTOR_ID,
    name="Organic Farming",
    description="Certification-driven farming with premium channels and audit risk.",
    products=products(
        ("organic_grain_ton", "Organic Grain", "ton"),
        ("organic_vegetables_kg", "Organic Vegetables", "kg"),
        ("organic_milk_liter", "Organic Milk", "liter"),
        ("csa_box_unit", "CSA Subscription Box", "unit"),
        ("farmers_market_slot_day", "Farmers Market Slot", "day"),
        ("premium_organic_contract_batch", "Premium Organic Contract", "batch"),
    ),
    unlocks=(
        starting("organic_grain_ton"),
        gated(
            "organic_vegetables_kg",
            assets={"irrigation_system": 1, "compost_capacity_ton": 15},
            staff={"farm_worker": 3},
            min_scores={"rotation_compliance_score": 0.6, "soil_health_score": 0.5},
        ),
        gated(
            "farmers_market_slot_day",
            assets={"farmers_market_slots": 1},
            staff={"sales_staff": 1},
            min_scores={"reputation_score": 0.55},
        ),
        gated(
            "csa_box_unit",
            assets={"packaging_line": 1, "csa_subscribers": 200},
            staff={"logistics_staff": 2},
            min_scores={"reputation_score": 0.65},
        ),
        gated(
            "organic_milk_liter",
            assets={"dairy_module_enabled": 1},
            staff={"quality_compliance": 1},
            flags=["organic_certified"],
            min_scores={"welfare_score": 0.75},
        ),
        gated(
            "premium_organic_contract_batch",
            staff={"quality_compliance": 1},
            flags=["organic_certified"],
            min_scores={"audit_readiness_score": 0.75, "ticks_since_synthetic_input": 6},
        ),
    ),
    upgrade_ids=(
        "organic_certification_program",
        "soil_regeneration_plan",
        "composting_infrastructure",
        "brand_direct_sales_engine",
    ),
    ai_config=ai_config((0.1, 0.1, 0.1, 0.2, 0.1, 0.4), 120_000, 0.4, 0.7),
)


NICHES = (CROP_FARM, DAIRY, FOOD_PROCESSING, GREENHOUSE, LIVESTOCK, ORGANIC_FARMING)
