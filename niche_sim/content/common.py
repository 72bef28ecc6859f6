"""Shorthand used by the sector content tables."""

from __future__ import annotations

from typing import Iterable, Tuple

from ..models import ArchetypeId, NicheAIConfig, ProductDef, ProductUnlock
from ..requirements import RequirementGroup, requires


def products(*rows: Tuple[str, str, str]) -> Tuple[ProductDef, ...]:
    return tuple(ProductDef(sku=sku, name=name, unit=unit) for sku, name, unit in rows)


def starting(sku: str, requirements: RequirementGroup | None = None) -> ProductUnlock:
    return ProductUnlock(sku=sku, starting_unlocked=True, requirements=requirements)


def gated(sku: str, **kwargs) -> ProductUnlock:
    return ProductUnlock(sku=sku, requirements=requires(**kwargs))


def derived(sku: str) -> ProductUnlock:
    return ProductUnlock(sku=sku, derived=True)


def alt(**kwargs) -> RequirementGroup:
    return requires(**kwargs)


def ai_config(
    weights: Iterable[float],
    min_cash_reserve: float,
    max_debt_ratio: float,
    target_utilization: float,
) -> NicheAIConfig:
    """Weights follow ArchetypeId declaration order."""
    archetype_weights = {archetype.value: float(weight) for archetype, weight in zip(ArchetypeId, weights)}
    return NicheAIConfig(
        archetype_weights=archetype_weights,
        min_cash_reserve=float(min_cash_reserve),
        max_debt_ratio=float(max_debt_ratio),
        target_utilization=float(target_utilization),
    )
