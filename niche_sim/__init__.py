"""Public API for the niche_sim package.

Progression and decision layer for a niche business simulation: product
unlock rules per niche, and a heuristic AI that picks one action per
company per tick.
"""

__version__ = "1.0.0"
__author__ = "niche-sim contributors"

from .analysis import decisions_frame, intent_share_table, unlock_coverage_table
from .archetypes import ARCHETYPE_LIBRARY, bias_for, bias_matrix, create_brain, reassign_archetype
from .cli import run_cli
from .config import (
    EngineConfig,
    TuningProfile,
    apply_tuning_profile,
    get_tuning_profile,
    list_tuning_profiles,
    load_tuning_profile,
)
from .content import NICHE_LIBRARY, SECTORS, enabled_niches
from .content.validation import CatalogIssue, validate_catalog, validate_niche
from .engine import TickLogWriter, make_rng, pick_top_decision, run_ai_tick
from .heuristics import SignalScores, compute_signals, score_decisions
from .models import (
    AIBrain,
    AICompanyContext,
    ArchetypeId,
    CompanyState,
    Decision,
    DecisionIntent,
    MarketState,
    WorldState,
)
from .requirements import RequirementGroup, group_from_dict, requires, satisfies
from .unlocks import NicheRules, byproduct_pass, get_unlocked_products, resolve_unlocked_products

__all__ = [
    "__version__",
    "__author__",
    "decisions_frame",
    "intent_share_table",
    "unlock_coverage_table",
    "ARCHETYPE_LIBRARY",
    "bias_for",
    "bias_matrix",
    "create_brain",
    "reassign_archetype",
    "run_cli",
    "EngineConfig",
    "TuningProfile",
    "apply_tuning_profile",
    "get_tuning_profile",
    "list_tuning_profiles",
    "load_tuning_profile",
    "NICHE_LIBRARY",
    "SECTORS",
    "enabled_niches",
    "CatalogIssue",
    "validate_catalog",
    "validate_niche",
    "TickLogWriter",
    "make_rng",
    "pick_top_decision",
    "run_ai_tick",
    "SignalScores",
    "compute_signals",
    "score_decisions",
    "AIBrain",
    "AICompanyContext",
    "ArchetypeId",
    "CompanyState",
    "Decision",
    "DecisionIntent",
    "MarketState",
    "WorldState",
    "RequirementGroup",
    "group_from_dict",
    "requires",
    "satisfies",
    "NicheRules",
    "byproduct_pass",
    "get_unlocked_products",
    "resolve_unlocked_products",
]
