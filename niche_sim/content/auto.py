"""Automotive & mobility niches: car dealer, EV services, mobility, repair shop."""

from __future__ import annotations

from ..unlocks import NicheRules
from .common import ai_config, alt, gated, products, starting

SECTOR_ID = "AUTO"

FLEET_COUNTS = ("fleet_economy_count", "fleet_premium_count", "fleet_van_count")
CHARGER_COUNTS = ("chargers_ac_count", "chargers_dc_count")


CAR_DEALER = NicheRules(
    niche_id="carDealer",
    sector_id=SECTOR_ID,
    name="Car Dealer",
    description="Inventory-driven vehicle sales with financing and warranty risk.",
    products=products(
        ("used_car_unit", "Used Car", "unit"),
        ("new_car_unit", "New Car", "unit"),
        ("trade_in_unit", "Trade-In", "unit"),
        ("financing_contract_unit", "Financing Contract", "unit"),
        ("extended_warranty_unit", "Extended Warranty", "unit"),
        ("detailing_service_unit", "Detailing Service", "unit"),
    ),
    unlocks=(
        starting("used_car_unit"),
        gated("detailing_service_unit", assets={"reconditioning_bays": 1}, staff={"service_staff": 1}),
        gated(
            "trade_in_unit",
            assets={"appraisal_tools": 1},
            staff={"sales_staff": 1},
            min_scores={"cash_eur": 60_000},
        ),
        gated(
            "financing_contract_unit",
            staff={"finance_staff": 1},
            min_scores={"compliance_score": 0.7},
            flags=["compliance_audit_passed"],
        ),
        gated(
            "extended_warranty_unit",
            min_scores={"compliance_score": 0.75, "reputation_score": 0.55},
            any_of=[alt(staff={"finance_staff": 1}), alt(staff={"service_manager": 1})],
        ),
        gated(
            "new_car_unit",
            upgrades=["manufacturer_dealership_agreement"],
            assets={"showroom_m2": 320, "inventory_slots": 20},
            staff={"sales_staff": 2},
            min_scores={"reputation_score": 0.6},
        ),
    ),
    upgrade_ids=(
        "local_lead_gen_engine",
        "reconditioning_bay_expansion",
        "finance_desk_compliance_program",
        "reputation_reviews_flywheel",
        "manufacturer_dealership_agreement",
    ),
    ai_config=ai_config((0.2, 0.25, 0.2, 0.1, 0.2, 0.05), 120_000, 0.6, 0.75),
)


EV_SERVICES = NicheRules(
    niche_id="evServices",
    sector_id=SECTOR_ID,
    name="EV Services",
    description="Charging network operations with uptime, grid, and energy cost risk.",
    products=products(
        ("ac_charge_session_unit", "AC Charge Session", "unit"),
        ("dc_fast_charge_session_unit", "DC Fast Charge Session", "unit"),
        ("kwh_energy_sale_kwh", "Metered Energy Sale", "kwh"),
        ("charging_membership_monthly_unit", "Charging Membership", "unit"),
        ("fleet_charging_contract_unit", "Fleet Charging Contract", "unit"),
        ("installation_service_unit", "Installation Service", "unit"),
    ),
    unlocks=(
        starting("ac_charge_session_unit"),
        gated(
            "kwh_energy_sale_kwh",
            min_scores={"compliance_score": 0.55},
            any_of=[alt(assets={"metering_enabled": 1}), alt(upgrades=["smart_metering_dynamic_pricing"])],
        ),
        gated(
            "dc_fast_charge_session_unit",
            assets={"chargers_dc_count": 1, "grid_capacity_kw": 180},
            upgrades=["electrical_safety_program"],
            min_scores={"compliance_score": 0.65},
        ),
        gated(
            "charging_membership_monthly_unit",
            upgrades=["crm_billing_system"],
            min_scores={"reputation_score": 0.55, "uptime_score": 0.85},
        ),
        gated(
            "fleet_charging_contract_unit",
            upgrades=["fleet_partnerships_program"],
            min_scores={"compliance_score": 0.7, "reputation_score": 0.6, "uptime_score": 0.9},
            sums=[("assets", CHARGER_COUNTS, 6)],
        ),
        gated(
            "installation_service_unit",
            staff={"certified_installer": 1},
            upgrades=["site_permitting_pipeline"],
            min_scores={"compliance_score": 0.75},
        ),
    ),
    upgrade_ids=(
        "site_permitting_pipeline",
        "dc_fast_charger_expansion",
        "smart_metering_dynamic_pricing",
        "maintenance_uptime_program",
        "onsite_battery_buffer",
        "crm_billing_system",
        "electrical_safety_program",
        "fleet_partnerships_program",
    ),
    ai_config=ai_config((0.25, 0.25, 0.15, 0.15, 0.1, 0.1), 80_000, 0.55, 0.72),
)


MOBILITY = NicheRules(
    niche_id="mobility",
    sector_id=SECTOR_ID,
    name="Mobility",
    description="Fleet utilization with downtime, claims risk, and contract mix.",
    products=products(
        ("economy_rental_day_unit", "Economy Rental Day", "unit"),
        ("premium_rental_day_unit", "Premium Rental Day", "unit"),
        ("van_rental_day_unit", "Van Rental Day", "unit"),
        ("corporate_fleet_contract_unit", "Corporate Fleet Contract", "unit"),
        ("insurance_addon_day_unit", "Insurance Add-on Day", "unit"),
        ("delivery_mobility_day_unit", "Delivery Mobility Day", "unit"),
    ),
    unlocks=(
        starting("economy_rental_day_unit"),
        gated(
            "insurance_addon_day_unit",
            upgrades=["online_booking_dynamic_pricing"],
            min_scores={"reputation_score": 0.45},
        ),
        gated(
            "premium_rental_day_unit",
            assets={"fleet_premium_count": 2},
            staff={"customer_support_staff": 1},
            min_scores={"reputation_score": 0.55},
        ),
        gated(
            "van_rental_day_unit",
            assets={"fleet_van_count": 2},
            staff={"logistics_staff": 1},
            min_scores={"compliance_score": 0.55},
        ),
        gated(
            "delivery_mobility_day_unit",
            upgrades=["delivery_partnerships_program"],
            assets={"fleet_van_count": 2, "fleet_economy_count": 6},
            staff={"logistics_staff": 1},
            min_scores={"compliance_score": 0.65, "uptime_score": 0.85},
            sums=[("assets", FLEET_COUNTS, 10)],
        ),
        gated(
            "corporate_fleet_contract_unit",
            upgrades=["corporate_contracting_sla_program"],
            staff={"corporate_sales_staff": 1},
            min_scores={"compliance_score": 0.7, "reputation_score": 0.6, "uptime_score": 0.9},
            sums=[("assets", FLEET_COUNTS, 18)],
        ),
    ),
    upgrade_ids=(
        "online_booking_dynamic_pricing",
        "fleet_expansion_economy_program",
        "premium_fleet_acquisition",
        "maintenance_turnaround_optimization",
        "telematics_risk_scoring",
        "corporate_contracting_sla_program",
        "delivery_partnerships_program",
        "insurance_structure_optimization",
    ),
    ai_config=ai_config((0.25, 0.3, 0.15, 0.15, 0.1, 0.05), 75_000, 0.6, 0.72),
)


# Bays, lifts and tool level are shop-wide scalars rather than counted assets.
REPAIR_SHOP = NicheRules(
    niche_id="repairShop",
    sector_id=SECTOR_ID,
    name="Repair Shop",
    description="Service bays with parts supply risk and comeback exposure.",
    products=products(
        ("inspection_service_unit", "Inspection Service", "unit"),
        ("oil_service_unit", "Oil Service", "unit"),
        ("brake_job_unit", "Brake Job", "unit"),
        ("tires_service_unit", "Tires Service", "unit"),
        ("diagnostics_advanced_unit", "Advanced Diagnostics", "unit"),
        ("ev_repair_job_unit", "EV Repair Job", "unit"),
    ),
    unlocks=(
        starting("inspection_service_unit"),
        gated("oil_service_unit", min_scores={"lifts": 1}, staff={"technician": 1}),
        gated("tires_service_unit", min_scores={"lifts": 1}, staff={"technician": 2}),
        gated(
            "brake_job_unit",
            min_scores={"service_bays": 2, "reputation_score": 0.45},
            staff={"technician": 2},
        ),
        gated(
            "diagnostics_advanced_unit",
            min_scores={"diagnostic_tools_level": 2, "reputation_score": 0.55},
            staff={"master_tech": 1},
        ),
        gated(
            "ev_repair_job_unit",
            min_scores={"diagnostic_tools_level": 3, "compliance_score": 0.75, "reputation_score": 0.6},
            flags=["ev_tools_enabled"],
            staff={"master_tech": 1},
            upgrades=["ev_certification_high_voltage_tools"],
        ),
    ),
    upgrade_ids=(
        "shop_management_software",
        "bay_lift_expansion",
        "parts_supplier_diversification",
        "technician_training_program",
        "advanced_diagnostics_suite",
        "ev_certification_high_voltage_tools",
    ),
    ai_config=ai_config((0.3, 0.2, 0.2, 0.1, 0.1, 0.1), 45_000, 0.5, 0.78),
)


NICHES = (CAR_DEALER, EV_SERVICES, MOBILITY, REPAIR_SHOP)
