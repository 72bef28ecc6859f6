"""
Requirement predicates and the generic AND/OR evaluator for product unlocks.

A `RequirementGroup` is a conjunction of predicates, optionally gated by an
``any_of`` list of alternative groups of which at least one must hold in
full. Alternatives are evaluated with the same rules, at any depth.

Every predicate kind is a small frozen dataclass exposing ``holds(state)``:

    QuantityAtLeast     asset / staff / machine / vehicle count >= minimum
    QuantitySumAtLeast  sum over several ids of one kind >= minimum
    ScalarAtLeast       state.scores[metric] >= minimum
    ScalarAtMost        state.scores[metric] <= maximum
    HasUpgrade          upgrade id acquired
    BooleanFlag         state.flags[flag] truthy

Evaluation is pure: it reads the snapshot and never raises for well-formed
input. Missing ids, scores and flags read as zero / false.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, List, Mapping, Tuple, Union

from .models import RESOURCE_KINDS, CompanyState
from .utils import finite_or


@dataclass(frozen=True, slots=True)
class QuantityAtLeast:
    kind: str
    item_id: str
    minimum: float

    def holds(self, state: CompanyState) -> bool:
        return state.quantity(self.kind, self.item_id) >= self.minimum


@dataclass(frozen=True, slots=True)
class QuantitySumAtLeast:
    kind: str
    item_ids: Tuple[str, ...]
    minimum: float

    def holds(self, state: CompanyState) -> bool:
        total = sum(state.quantity(self.kind, item_id) for item_id in self.item_ids)
        return total >= self.minimum


@dataclass(frozen=True, slots=True)
class ScalarAtLeast:
    metric: str
    minimum: float

    def holds(self, state: CompanyState) -> bool:
        return state.score(self.metric) >= self.minimum


@dataclass(frozen=True, slots=True)
class ScalarAtMost:
    """Ceiling on a lower-is-better score such as a callback rate."""

    metric: str
    maximum: float

    def holds(self, state: CompanyState) -> bool:
        return state.score(self.metric) <= self.maximum


@dataclass(frozen=True, slots=True)
class HasUpgrade:
    upgrade_id: str

    def holds(self, state: CompanyState) -> bool:
        return state.has_upgrade(self.upgrade_id)


@dataclass(frozen=True, slots=True)
class BooleanFlag:
    flag: str

    def holds(self, state: CompanyState) -> bool:
        return state.flag(self.flag)


Predicate = Union[
    QuantityAtLeast,
    QuantitySumAtLeast,
    ScalarAtLeast,
    ScalarAtMost,
    HasUpgrade,
    BooleanFlag,
]


@dataclass(frozen=True, slots=True)
class RequirementGroup:
    predicates: Tuple[Predicate, ...] = ()
    any_of: Tuple["RequirementGroup", ...] = ()

    def is_empty(self) -> bool:
        return not self.predicates and not self.any_of

    def walk(self) -> Iterable[Predicate]:
        """Yield every predicate in this group and its alternatives."""
        yield from self.predicates
        for alternative in self.any_of:
            yield from alternative.walk()


def satisfies(state: CompanyState, group: RequirementGroup | None) -> bool:
    """Return True when ``state`` meets every predicate and one ``any_of`` branch."""
    if group is None:
        return True
    for predicate in group.predicates:
        if not predicate.holds(state):
            return False
    if group.any_of:
        return any(satisfies(state, alternative) for alternative in group.any_of)
    return True


# =============================================================================
# Builders
# =============================================================================


def requires(
    *,
    assets: Mapping[str, float] | None = None,
    staff: Mapping[str, float] | None = None,
    machines: Mapping[str, float] | None = None,
    vehicles: Mapping[str, float] | None = None,
    upgrades: Iterable[str] = (),
    flags: Iterable[str] = (),
    min_scores: Mapping[str, float] | None = None,
    max_scores: Mapping[str, float] | None = None,
    sums: Iterable[Tuple[str, Iterable[str], float]] = (),
    any_of: Iterable[RequirementGroup] = (),
) -> RequirementGroup:
    """Keyword builder used by the content tables."""
    predicates: List[Predicate] = []
    for kind, bucket in zip(RESOURCE_KINDS, (assets, staff, machines, vehicles)):
        for item_id, minimum in (bucket or {}).items():
            predicates.append(QuantityAtLeast(kind, item_id, float(minimum)))
    for kind, item_ids, minimum in sums:
        predicates.append(QuantitySumAtLeast(kind, tuple(item_ids), float(minimum)))
    for upgrade_id in upgrades:
        predicates.append(HasUpgrade(upgrade_id))
    for metric, minimum in (min_scores or {}).items():
        predicates.append(ScalarAtLeast(metric, float(minimum)))
    for metric, maximum in (max_scores or {}).items():
        predicates.append(ScalarAtMost(metric, float(maximum)))
    for flag in flags:
        predicates.append(BooleanFlag(flag))
    return RequirementGroup(predicates=tuple(predicates), any_of=tuple(any_of))


def _quantity_entries(entries: Any) -> Mapping[str, float]:
    parsed = {}
    for entry in entries or ():
        if isinstance(entry, Mapping) and "id" in entry:
            parsed[str(entry["id"])] = finite_or(entry.get("min", 0.0), 0.0)
    return parsed


def group_from_dict(payload: Mapping[str, Any] | None) -> RequirementGroup:
    """Build a group from a JSON-style mapping.

    Recognised keys: ``assets``/``staff``/``machines``/``vehicles`` (lists of
    ``{"id", "min"}``), ``upgrades``, ``flags``, ``min_scores``,
    ``max_scores``, ``sums`` (``{"kind", "ids", "min"}``) and ``any_of``.
    Anything else is ignored.
    """
    if not payload:
        return RequirementGroup()
    sums = []
    for entry in payload.get("sums") or ():
        if isinstance(entry, Mapping) and entry.get("kind") in RESOURCE_KINDS:
            sums.append((entry["kind"], tuple(str(i) for i in entry.get("ids") or ()), finite_or(entry.get("min"), 0.0)))
    min_scores = payload.get("min_scores") or {}
    max_scores = payload.get("max_scores") or {}
    return requires(
        assets=_quantity_entries(payload.get("assets")),
        staff=_quantity_entries(payload.get("staff")),
        machines=_quantity_entries(payload.get("machines")),
        vehicles=_quantity_entries(payload.get("vehicles")),
        upgrades=[str(item) for item in payload.get("upgrades") or ()],
        flags=[str(item) for item in payload.get("flags") or ()],
        min_scores={str(k): finite_or(v, 0.0) for k, v in min_scores.items()} if isinstance(min_scores, Mapping) else None,
        max_scores={str(k): finite_or(v, 0.0) for k, v in max_scores.items()} if isinstance(max_scores, Mapping) else None,
        sums=sums,
        any_of=[group_from_dict(alt) for alt in payload.get("any_of") or () if isinstance(alt, Mapping)],
    )


__all__ = [
    "QuantityAtLeast",
    "QuantitySumAtLeast",
    "ScalarAtLeast",
    "ScalarAtMost",
    "HasUpgrade",
    "BooleanFlag",
    "Predicate",
    "RequirementGroup",
    "satisfies",
    "requires",
    "group_from_dict",
]
