"""Construction niches: commercial build, electrical, engineering, plumbing, renovation."""

from __future__ import annotations

from ..unlocks import NicheRules
from .common import ai_config, alt, gated, products, starting

SECTOR_ID = "BUILD"


COMMERCIAL_BUILD = NicheRules(
    niche_id="commercialBuild",
    sector_id=SECTOR_ID,
    name="Commercial Build",
    description="Bid-driven commercial projects with backlog, retention, and schedule risk.",
    products=products(
        ("warehouse_shell_project_unit", "Warehouse Shell Project", "unit"),
        ("office_fitout_project_unit", "Office Fit-Out Project", "unit"),
        ("retail_unit_project_unit", "Retail Unit Project", "unit"),
        ("industrial_extension_project_unit", "Industrial Extension Project", "unit"),
        ("design_build_contract_unit", "Design-Build Contract", "unit"),
        ("maintenance_repair_retain_unit", "Maintenance & Repair Retainer", "unit"),
    ),
    unlocks=(
        starting("maintenance_repair_retain_unit"),
        gated(
            "retail_unit_project_unit",
            staff={"crew_fte": 6, "supervisors_fte": 1},
            min_scores={"reputation_score": 0.45},
        ),
        gated(
            "office_fitout_project_unit",
            upgrades=["safety_program_certification"],
            staff={"crew_fte": 10, "supervisors_fte": 2},
            min_scores={"reputation_score": 0.55},
        ),
        gated(
            "warehouse_shell_project_unit",
            staff={"crew_fte": 14, "supervisors_fte": 2, "estimators_fte": 1},
            min_scores={"compliance_score": 0.55, "cash_eur": 350_000},
            any_of=[alt(assets={"excavator_access": 1}), alt(assets={"crane_access": 1})],
        ),
        gated(
            "industrial_extension_project_unit",
            staff={"crew_fte": 12, "supervisors_fte": 2, "estimators_fte": 1},
            min_scores={"compliance_score": 0.6},
            any_of=[
                alt(max_scores={"subcontractor_dependency_score": 0.5}),
                alt(upgrades=["subcontractor_network_sla"]),
            ],
        ),
        gated(
            "design_build_contract_unit",
            upgrades=["design_coordination_capability"],
            staff={"crew_fte": 16, "supervisors_fte": 3, "estimators_fte": 2},
            min_scores={"compliance_score": 0.65, "reputation_score": 0.65},
        ),
    ),
    upgrade_ids=(
        "estimating_team_expansion",
        "safety_program_certification",
        "equipment_access_framework",
        "subcontractor_network_sla",
        "materials_procurement_hedging",
        "project_controls_scheduling_system",
        "working_capital_facility",
        "design_coordination_capability",
    ),
    ai_config=ai_config((0.15, 0.2, 0.2, 0.25, 0.15, 0.05), 200_000, 0.55, 0.78),
)


ELECTRICAL = NicheRules(
    niche_id="electrical",
    sector_id=SECTOR_ID,
    name="Electrical",
    description="Electrical services driven by scheduling, inspections, and certification.",
    products=products(
        ("residential_wiring_job_unit", "Residential Wiring Job", "unit"),
        ("commercial_fitout_electrical_job_unit", "Commercial Fit-Out Electrical Job", "unit"),
        ("industrial_panel_upgrade_job_unit", "Industrial Panel Upgrade Job", "unit"),
        ("solar_inverter_install_job_unit", "Solar Inverter Install Job", "unit"),
        ("emergency_callout_job_unit", "Emergency Callout Job", "unit"),
        ("annual_maintenance_contract_unit", "Annual Maintenance Contract", "unit"),
    ),
    unlocks=(
        starting("residential_wiring_job_unit"),
        gated(
            "emergency_callout_job_unit",
            staff={"electricians_fte": 2},
            min_scores={"reputation_score": 0.45},
            any_of=[alt(assets={"overtime_enabled": 1}), alt(upgrades=["on_call_team_setup"])],
        ),
        gated(
            "solar_inverter_install_job_unit",
            upgrades=["safety_certification_compliance_pack"],
            min_scores={"certification_level": 1, "compliance_score": 0.6},
        ),
        gated(
            "commercial_fitout_electrical_job_unit",
            staff={"electricians_fte": 6, "master_electrician_fte": 1, "scheduler_fte": 1},
            min_scores={"certification_level": 2, "reputation_score": 0.55},
        ),
        gated(
            "industrial_panel_upgrade_job_unit",
            upgrades=["testing_commissioning_tools"],
            staff={"electricians_fte": 5, "master_electrician_fte": 1, "scheduler_fte": 1},
            min_scores={"certification_level": 2, "compliance_score": 0.7},
        ),
        gated(
            "annual_maintenance_contract_unit",
            upgrades=["scheduling_software_dispatch"],
            min_scores={"inspection_pass_rate": 0.9, "reputation_score": 0.6},
        ),
    ),
    upgrade_ids=(
        "safety_certification_compliance_pack",
        "scheduling_software_dispatch",
        "apprenticeship_program",
        "testing_commissioning_tools",
        "materials_procurement_copper_hedging",
        "on_call_team_setup",
        "quality_process_checklist_system",
        "hire_master_electrician",
    ),
    ai_config=ai_config((0.2, 0.2, 0.2, 0.2, 0.15, 0.05), 90_000, 0.5, 0.72),
)


ENGINEERING = NicheRules(
    niche_id="engineering",
    sector_id=SECTOR_ID,
    name="Engineering",
    description="Professional engineering services with utilization, liability, and proposal-driven growth.",
    products=products(
        ("structural_design_package_unit", "Structural Design Package", "unit"),
        ("mep_design_package_unit", "MEP Design Package", "unit"),
        ("geotechnical_survey_unit", "Geotechnical Survey", "unit"),
        ("permitting_and_code_review_unit", "Permitting & Code Review", "unit"),
        ("bim_coordination_service_unit", "BIM Coordination Service", "unit"),
        ("owner_rep_project_management_unit", "Owner's Rep Project Management", "unit"),
    ),
    unlocks=(
        starting("permitting_and_code_review_unit"),
        gated(
            "geotechnical_survey_unit",
            min_scores={"compliance_score": 0.55},
            any_of=[
                alt(upgrades=["subcontractor_framework_specialty"]),
                alt(staff={"senior_engineers_fte": 1}),
            ],
        ),
        gated(
            "structural_design_package_unit",
            upgrades=["qa_baseline_checklist"],
            staff={"engineers_fte": 2, "senior_engineers_fte": 1},
            min_scores={"reputation_score": 0.5},
        ),
        gated(
            "mep_design_package_unit",
            staff={"engineers_fte": 3, "senior_engineers_fte": 1, "project_managers_fte": 1},
            min_scores={"certification_level": 1, "compliance_score": 0.6},
        ),
        gated(
            "bim_coordination_service_unit",
            upgrades=["software_stack_cad_bim"],
            staff={"bim_specialists_fte": 1},
            min_scores={"reputation_score": 0.6},
        ),
        gated(
            "owner_rep_project_management_unit",
            upgrades=["governance_reporting_process"],
            staff={"project_managers_fte": 1},
            min_scores={"compliance_score": 0.7, "reputation_score": 0.65},
        ),
    ),
    upgrade_ids=(
        "qa_baseline_checklist",
        "software_stack_cad_bim",
        "proposal_engine_crm",
        "hire_senior_engineer",
        "subcontractor_framework_specialty",
        "professional_indemnity_upgrade",
        "permitting_fast_track_relationships",
        "governance_reporting_process",
        "knowledge_base_reusable_ip",
    ),
    ai_config=ai_config((0.2, 0.18, 0.18, 0.22, 0.17, 0.05), 120_000, 0.45, 0.75),
)


PLUMBING = NicheRules(
    niche_id="plumbing",
    sector_id=SECTOR_ID,
    name="Plumbing",
    description="High-volume service plumbing driven by scheduling, parts flow, and callback risk.",
    products=products(
        ("residential_repair_visit_job_unit", "Residential Repair Visit", "unit"),
        ("bathroom_installation_job_unit", "Bathroom Installation", "unit"),
        ("commercial_fitout_plumbing_job_unit", "Commercial Fit-Out Plumbing", "unit"),
        ("boiler_heatpump_plumbing_service_job_unit", "Boiler / Heat Pump Plumbing Service", "unit"),
        ("emergency_leak_callout_job_unit", "Emergency Leak Callout", "unit"),
        ("property_maintenance_contract_unit", "Property Maintenance Contract", "unit"),
    ),
    unlocks=(
        starting("residential_repair_visit_job_unit"),
        gated(
            "emergency_leak_callout_job_unit",
            staff={"plumbers_fte": 2},
            min_scores={"reputation_score": 0.45},
            any_of=[alt(assets={"on_call_enabled": 1}), alt(upgrades=["on_call_rotation_setup"])],
        ),
        gated(
            "boiler_heatpump_plumbing_service_job_unit",
            min_scores={"compliance_score": 0.6},
            any_of=[
                alt(upgrades=["tooling_upgrade_pipe_press_camera"]),
                alt(staff={"master_plumber_fte": 1}),
            ],
        ),
        gated(
            "bathroom_installation_job_unit",
            upgrades=["quality_checklist_pressure_testing"],
            staff={"plumbers_fte": 3, "master_plumber_fte": 1},
            assets={"parts_inventory_value_eur": 12_000},
        ),
        gated(
            "property_maintenance_contract_unit",
            min_scores={"reputation_score": 0.6},
            max_scores={"callback_rate": 0.08},
            any_of=[alt(staff={"dispatcher_fte": 1}), alt(upgrades=["dispatcher_routing_discipline"])],
        ),
        gated(
            "commercial_fitout_plumbing_job_unit",
            upgrades=["project_controls_system"],
            min_scores={"compliance_score": 0.7},
            staff={"master_plumber_fte": 1},
            assets={"warranty_reserve_eur": 8_000},
        ),
    ),
    upgrade_ids=(
        "on_call_rotation_setup",
        "parts_inventory_system",
        "hire_master_plumber",
        "quality_checklist_pressure_testing",
        "dispatcher_routing_discipline",
        "commercial_compliance_pack",
        "tooling_upgrade_pipe_press_camera",
        "warranty_reserve_policy",
        "property_manager_sales_engine",
        "project_controls_system",
    ),
    ai_config=ai_config((0.18, 0.18, 0.18, 0.22, 0.16, 0.08), 60_000, 0.45, 0.72),
)


RENOVATION = NicheRules(
    niche_id="renovation",
    sector_id=SECTOR_ID,
    name="Renovation",
    description="Renovation work driven by scope control, hidden defects, and client expectations.",
    products=products(
        ("small_repair_punchlist_job_unit", "Small Repair & Punch List", "unit"),
        ("kitchen_renovation_job_unit", "Kitchen Renovation", "unit"),
        ("bathroom_renovation_job_unit", "Bathroom Renovation", "unit"),
        ("whole_home_renovation_job_unit", "Whole-Home Renovation", "unit"),
        ("tenant_turnover_renovation_contract_unit", "Tenant Turnover Renovation Contract", "unit"),
        ("insurance_restoration_job_unit", "Insurance Restoration Job", "unit"),
    ),
    unlocks=(
        starting("small_repair_punchlist_job_unit"),
        gated(
            "bathroom_renovation_job_unit",
            staff={"crew_fte": 4},
            min_scores={"reputation_score": 0.45},
            assets={"materials_inventory_value_eur": 12_000},
            any_of=[
                alt(min_scores={"defect_detection_score": 0.35}),
                alt(upgrades=["preinspection_hidden_defect_detection"]),
            ],
        ),
        gated(
            "kitchen_renovation_job_unit",
            staff={"crew_fte": 4},
            min_scores={"reputation_score": 0.5},
            any_of=[
                alt(
                    min_scores={"contract_discipline_score": 0.45},
                    max_scores={"subcontractor_dependency_score": 0.6},
                ),
                alt(
                    min_scores={"contract_discipline_score": 0.45},
                    upgrades=["preferred_subcontractor_network"],
                ),
                alt(
                    upgrades=["contract_discipline_system"],
                    max_scores={"subcontractor_dependency_score": 0.6},
                ),
                alt(upgrades=["contract_discipline_system", "preferred_subcontractor_network"]),
            ],
        ),
        gated(
            "tenant_turnover_renovation_contract_unit",
            upgrades=["property_manager_sales_engine"],
            min_scores={"reputation_score": 0.6},
            max_scores={"schedule_slip_score": 0.25},
            any_of=[
                alt(staff={"project_managers_fte": 1}),
                alt(upgrades=["project_controls_milestone_billing"]),
            ],
        ),
        gated(
            "insurance_restoration_job_unit",
            upgrades=["insurance_documentation_compliance_pack"],
            min_scores={"compliance_score": 0.7},
            assets={"documentation_process_enabled": 1, "warranty_reserve_eur": 6_000},
        ),
        gated(
            "whole_home_renovation_job_unit",
            upgrades=["project_controls_milestone_billing"],
            staff={"project_managers_fte": 1, "site_managers_fte": 1},
            min_scores={
                "contract_discipline_score": 0.6,
                "defect_detection_score": 0.45,
                "reputation_score": 0.65,
            },
        ),
    ),
    upgrade_ids=(
        "contract_discipline_system",
        "preinspection_hidden_defect_detection",
        "project_controls_milestone_billing",
        "supplier_framework_fixtures",
        "preferred_subcontractor_network",
        "design_freeze_client_signoff",
        "portfolio_marketing_engine",
        "quality_punch_warranty_system",
        "property_manager_sales_engine",
        "insurance_documentation_compliance_pack",
    ),
    ai_config=ai_config((0.18, 0.2, 0.18, 0.2, 0.18, 0.06), 70_000, 0.5, 0.75),
)


NICHES = (COMMERCIAL_BUILD, ELECTRICAL, ENGINEERING, PLUMBING, RENOVATION)
