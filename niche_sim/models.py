"""
Core dataclasses shared by the unlock engine and the AI decision engine.

Two families of records live here:

- **Company snapshots** (`CompanyState`, `AICompanyContext`) are built by the
  surrounding simulation each tick and read, never mutated, by this package.
- **Static content** (`ProductDef`, `ProductUnlock`, `Archetype`,
  `NicheAIConfig`, `AIBrain`) is defined once and treated as immutable.

Decision intents and archetype ids form closed enumerations. Both enums mix
in ``str`` so that content tables and JSON payloads can keep using plain
string ids.
"""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import TYPE_CHECKING, Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

from .utils import finite_or, non_negative, normalize_archetype

if TYPE_CHECKING:  # pragma: no cover
    from .requirements import RequirementGroup


class DecisionIntent(str, Enum):
    HOLD = "hold"
    EXPAND_CAPACITY = "expand_capacity"
    OPTIMIZE_COSTS = "optimize_costs"
    SEEK_CONTRACTS = "seek_contracts"
    INTEGRATE_SUPPLY = "integrate_supply"
    UPGRADE_QUALITY = "upgrade_quality"
    PAY_DOWN_DEBT = "pay_down_debt"


class ArchetypeId(str, Enum):
    CONSERVATIVE = "Conservative"
    EXPANSIONIST = "Expansionist"
    COST_CUTTER = "CostCutter"
    CONTRACT_SPECIALIST = "ContractSpecialist"
    VERTICAL_INTEGRATOR = "VerticalIntegrator"
    ORGANIC_PURIST = "OrganicPurist"


# Candidate order evaluated every tick.
DEFAULT_INTENTS: Tuple[str, ...] = (
    DecisionIntent.HOLD.value,
    DecisionIntent.EXPAND_CAPACITY.value,
    DecisionIntent.OPTIMIZE_COSTS.value,
    DecisionIntent.SEEK_CONTRACTS.value,
    DecisionIntent.INTEGRATE_SUPPLY.value,
    DecisionIntent.UPGRADE_QUALITY.value,
    DecisionIntent.PAY_DOWN_DEBT.value,
)

RESOURCE_KINDS: Tuple[str, ...] = ("assets", "staff", "machines", "vehicles")


def _number_map(payload: Any, label: str) -> Dict[str, float]:
    if payload is None:
        return {}
    if not isinstance(payload, Mapping):
        raise ValueError(f"'{label}' must be a mapping of id -> number, got {type(payload).__name__}.")
    return {str(key): finite_or(value, 0.0) for key, value in payload.items()}


@dataclass(slots=True)
class CompanyState:
    """Snapshot of what a company owns, used to gate product unlocks."""

    assets: Dict[str, float] = field(default_factory=dict)
    staff: Dict[str, float] = field(default_factory=dict)
    machines: Dict[str, float] = field(default_factory=dict)
    vehicles: Dict[str, float] = field(default_factory=dict)
    upgrades: FrozenSet[str] = field(default_factory=frozenset)
    scores: Dict[str, float] = field(default_factory=dict)
    flags: Dict[str, bool] = field(default_factory=dict)
    active_products: Tuple[str, ...] = ()

    def quantity(self, kind: str, item_id: str) -> float:
        """Stored count for ``item_id``; missing ids and negative counts read as zero."""
        bucket = getattr(self, kind, None) if kind in RESOURCE_KINDS else None
        if not bucket:
            return 0.0
        return non_negative(bucket.get(item_id, 0.0))

    def score(self, metric: str) -> float:
        return finite_or(self.scores.get(metric), 0.0)

    def has_upgrade(self, upgrade_id: str) -> bool:
        return upgrade_id in self.upgrades

    def flag(self, name: str) -> bool:
        return bool(self.flags.get(name, False))

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "CompanyState":
        """Build a state from a JSON-style mapping; unknown keys are ignored."""
        if not isinstance(payload, Mapping):
            raise ValueError("Company state payload must be a JSON object.")
        flags = payload.get("flags") or {}
        if isinstance(flags, (list, tuple)):
            flags = {str(name): True for name in flags}
        elif not isinstance(flags, Mapping):
            raise ValueError("'flags' must be a mapping or a list of flag names.")
        return cls(
            assets=_number_map(payload.get("assets"), "assets"),
            staff=_number_map(payload.get("staff"), "staff"),
            machines=_number_map(payload.get("machines"), "machines"),
            vehicles=_number_map(payload.get("vehicles"), "vehicles"),
            upgrades=frozenset(str(item) for item in payload.get("upgrades") or ()),
            scores=_number_map(payload.get("scores"), "scores"),
            flags={str(key): bool(value) for key, value in flags.items()},
            active_products=tuple(str(sku) for sku in payload.get("active_products") or ()),
        )


@dataclass(frozen=True, slots=True)
class ProductDef:
    sku: str
    name: str
    unit: str = "unit"


@dataclass(frozen=True, slots=True)
class ProductUnlock:
    """Unlock rule for one SKU.

    ``derived`` entries are resolved by a niche post-pass instead of the
    generic requirement walk.
    """

    sku: str
    starting_unlocked: bool = False
    requirements: Optional["RequirementGroup"] = None
    derived: bool = False


@dataclass(frozen=True, slots=True)
class Archetype:
    id: str
    label: str
    description: str
    decision_bias: Mapping[str, float] = field(default_factory=dict)


@dataclass(frozen=True, slots=True)
class NicheAIConfig:
    """Per-niche AI defaults: archetype mix plus the thresholds a brain inherits."""

    archetype_weights: Mapping[str, float]
    min_cash_reserve: float
    max_debt_ratio: float
    target_utilization: float


@dataclass(frozen=True, slots=True)
class AIBrain:
    company_id: str
    archetype: str
    cash_safety_threshold: float
    debt_tolerance: float
    utilization_target: float

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AIBrain":
        if not isinstance(payload, Mapping):
            raise ValueError("Brain payload must be a JSON object.")
        try:
            return cls(
                company_id=str(payload["company_id"]),
                archetype=normalize_archetype(payload["archetype"], default=str(payload["archetype"])),
                cash_safety_threshold=float(payload["cash_safety_threshold"]),
                debt_tolerance=float(payload["debt_tolerance"]),
                utilization_target=float(payload["utilization_target"]),
            )
        except KeyError as exc:
            raise ValueError(f"Brain payload is missing field {exc}.") from exc


@dataclass(slots=True)
class AICompanyContext:
    """Per-tick business numbers for one company."""

    company_id: str
    cash: float = 0.0
    weekly_revenue: float = 0.0
    weekly_costs: float = 0.0
    debt: float = 0.0
    utilization: float = 0.0
    price_trend: float = 0.0
    niche_id: Optional[str] = None

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "AICompanyContext":
        if not isinstance(payload, Mapping):
            raise ValueError("Company context payload must be a JSON object.")
        if "company_id" not in payload:
            raise ValueError("Company context payload is missing 'company_id'.")
        return cls(
            company_id=str(payload["company_id"]),
            cash=float(payload.get("cash", 0.0)),
            weekly_revenue=float(payload.get("weekly_revenue", 0.0)),
            weekly_costs=float(payload.get("weekly_costs", 0.0)),
            debt=float(payload.get("debt", 0.0)),
            utilization=float(payload.get("utilization", 0.0)),
            price_trend=float(payload.get("price_trend", 0.0)),
            niche_id=payload.get("niche_id"),
        )


@dataclass(slots=True)
class WorldState:
    companies: List[AICompanyContext] = field(default_factory=list)
    tick: int = 0

    def company_index(self) -> Dict[str, AICompanyContext]:
        """Map company id to context; the last entry wins on duplicate ids."""
        return {company.company_id: company for company in self.companies}

    @classmethod
    def from_dict(cls, payload: Mapping[str, Any]) -> "WorldState":
        if not isinstance(payload, Mapping):
            raise ValueError("World state payload must be a JSON object.")
        companies = payload.get("companies") or []
        if not isinstance(companies, list):
            raise ValueError("'companies' must be a list.")
        return cls(
            companies=[AICompanyContext.from_dict(item) for item in companies],
            tick=int(payload.get("tick", 0)),
        )


@dataclass(slots=True)
class MarketState:
    price_trends: Dict[str, float] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, payload: Optional[Mapping[str, Any]]) -> "MarketState":
        if not payload:
            return cls()
        if not isinstance(payload, Mapping):
            raise ValueError("Market state payload must be a JSON object.")
        trends = payload.get("price_trends") or {}
        if not isinstance(trends, Mapping):
            raise ValueError("'price_trends' must be a mapping of company id -> trend.")
        # Non-finite overrides are kept as-is; the tick engine falls back on them.
        parsed: Dict[str, float] = {}
        for key, value in trends.items():
            try:
                parsed[str(key)] = float(value)
            except (TypeError, ValueError):
                parsed[str(key)] = float("nan")
        return cls(price_trends=parsed)


@dataclass(slots=True)
class Decision:
    company_id: str
    intent: str
    score: float
    reason: Optional[str] = None
    payload: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        record = asdict(self)
        record["intent"] = str(getattr(self.intent, "value", self.intent))
        return record
