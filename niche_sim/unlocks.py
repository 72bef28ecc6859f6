"""Per-niche unlock rules and the generic resolver."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, List, Mapping, Optional, Sequence, Set, Tuple, Union

from .models import CompanyState, NicheAIConfig, ProductDef, ProductUnlock
from .requirements import satisfies

# A post-pass reads the unlocked set built so far and returns SKUs to add.
PostPass = Callable[[CompanyState, Set[str]], Set[str]]


@dataclass(frozen=True)
class NicheRules:
    """Static product and unlock tables for one niche."""

    niche_id: str
    sector_id: str
    name: str
    description: str
    products: Tuple[ProductDef, ...]
    unlocks: Tuple[ProductUnlock, ...]
    post_passes: Tuple[PostPass, ...] = ()
    upgrade_ids: Tuple[str, ...] = ()
    ai_config: Optional[NicheAIConfig] = None

    @property
    def skus(self) -> List[str]:
        return [product.sku for product in self.products]

    def starting_skus(self) -> List[str]:
        starting = {entry.sku for entry in self.unlocks if entry.starting_unlocked}
        return [sku for sku in self.skus if sku in starting]


def byproduct_pass(sku: str, parents: Sequence[str]) -> PostPass:
    """Unlock ``sku`` when any parent SKU is unlocked or actively produced."""
    parent_set = frozenset(parents)

    def _apply(state: CompanyState, unlocked: Set[str]) -> Set[str]:
        active = set(state.active_products)
        if parent_set & unlocked or parent_set & active:
            return {sku}
        return set()

    _apply.__name__ = f"byproduct_{sku}"
    return _apply


def resolve_unlocked_products(
    state: CompanyState,
    unlocks: Sequence[ProductUnlock],
    products: Sequence[ProductDef],
    post_passes: Sequence[PostPass] = (),
) -> List[str]:
    """Return unlocked SKUs in the product table's declared order."""
    unlocked: Set[str] = {entry.sku for entry in unlocks if entry.starting_unlocked}
    for entry in unlocks:
        if entry.starting_unlocked or entry.derived:
            continue
        if satisfies(state, entry.requirements):
            unlocked.add(entry.sku)
    # Post-passes only add to the set.
    for post_pass in post_passes:
        unlocked |= set(post_pass(state, set(unlocked)))
    # SKUs without an unlock entry never unlock, even if a post-pass names them.
    known = {entry.sku for entry in unlocks}
    ordered: List[str] = []
    for product in products:
        if product.sku in unlocked and product.sku in known and product.sku not in ordered:
            ordered.append(product.sku)
    return ordered


def get_unlocked_products(
    niche: Union[str, NicheRules],
    state: CompanyState,
    library: Optional[Mapping[str, NicheRules]] = None,
) -> List[str]:
    """Resolve the unlocked SKUs for ``state`` in the given niche."""
    if isinstance(niche, NicheRules):
        rules = niche
    else:
        if library is None:
            from .content import NICHE_LIBRARY

            library = NICHE_LIBRARY
        if niche not in library:
            raise KeyError(f"Unknown niche '{niche}'. Available: {', '.join(library.keys())}")
        rules = library[niche]
    return resolve_unlocked_products(state, rules.unlocks, rules.products, rules.post_passes)


__all__ = [
    "NicheRules",
    "PostPass",
    "byproduct_pass",
    "resolve_unlocked_products",
    "get_unlocked_products",
]
