"""Consistency checks over the niche content tables."""

from __future__ import annotations

import math
from collections import Counter
from dataclasses import dataclass
from typing import Dict, Iterable, List, Mapping, Optional

from ..models import ArchetypeId
from ..requirements import HasUpgrade
from ..unlocks import NicheRules

ERROR = "error"
WARNING = "warning"


@dataclass(frozen=True)
class CatalogIssue:
    niche_id: str
    severity: str
    message: str

    def __str__(self) -> str:
        return f"{self.severity.upper()} [{self.niche_id}] {self.message}"


def validate_niche(rules: NicheRules) -> List[CatalogIssue]:
    """Report table problems for one niche without raising."""
    issues: List[CatalogIssue] = []

    def report(severity: str, message: str) -> None:
        issues.append(CatalogIssue(rules.niche_id, severity, message))

    product_counts = Counter(product.sku for product in rules.products)
    unlock_counts = Counter(entry.sku for entry in rules.unlocks)
    for sku, count in product_counts.items():
        if count > 1:
            report(ERROR, f"Product SKU '{sku}' is declared {count} times.")
    for sku, count in unlock_counts.items():
        if count > 1:
            report(ERROR, f"Unlock entry for '{sku}' is declared {count} times.")
    for sku in unlock_counts:
        if sku not in product_counts:
            report(ERROR, f"Unlock entry references missing product '{sku}'.")
    for sku in product_counts:
        if sku not in unlock_counts:
            report(ERROR, f"Product '{sku}' has no unlock entry.")

    starting = [entry for entry in rules.unlocks if entry.starting_unlocked]
    if not starting:
        report(ERROR, "No starting-unlocked product.")
    for entry in starting:
        if entry.requirements is not None and not entry.requirements.is_empty():
            report(WARNING, f"Starting product '{entry.sku}' carries requirements that are never evaluated.")

    if rules.upgrade_ids:
        known_upgrades = set(rules.upgrade_ids)
        for entry in rules.unlocks:
            if entry.requirements is None:
                continue
            for predicate in entry.requirements.walk():
                if isinstance(predicate, HasUpgrade) and predicate.upgrade_id not in known_upgrades:
                    report(WARNING, f"Unlock for '{entry.sku}' references unknown upgrade '{predicate.upgrade_id}'.")

    if rules.ai_config is not None:
        issues.extend(_check_archetype_weights(rules.niche_id, rules.ai_config.archetype_weights))
    return issues


def _check_archetype_weights(niche_id: str, weights: Mapping[str, float]) -> List[CatalogIssue]:
    issues: List[CatalogIssue] = []
    known = {archetype.value for archetype in ArchetypeId}
    for name in weights:
        if name not in known:
            issues.append(CatalogIssue(niche_id, ERROR, f"AI config names unknown archetype '{name}'."))
    total = float(sum(weights.values()))
    if not math.isclose(total, 1.0, rel_tol=0.0, abs_tol=1e-6):
        issues.append(CatalogIssue(niche_id, WARNING, f"Archetype weights sum to {total:.6f}, expected 1."))
    return issues


def validate_catalog(library: Optional[Mapping[str, NicheRules]] = None) -> List[CatalogIssue]:
    if library is None:
        from . import NICHE_LIBRARY

        library = NICHE_LIBRARY
    issues: List[CatalogIssue] = []
    for rules in library.values():
        issues.extend(validate_niche(rules))
    return issues


def summarize_issues(issues: Iterable[CatalogIssue]) -> Dict[str, int]:
    counts = Counter(issue.severity for issue in issues)
    return {ERROR: counts.get(ERROR, 0), WARNING: counts.get(WARNING, 0)}


__all__ = [
    "CatalogIssue",
    "ERROR",
    "WARNING",
    "validate_niche",
    "validate_catalog",
    "summarize_issues",
]
