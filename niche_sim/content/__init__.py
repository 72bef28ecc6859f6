"""Shipped sectors and niche rule tables."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Optional

from ..unlocks import NicheRules
from . import agri, auto, build


@dataclass(frozen=True)
class Sector:
    sector_id: str
    name: str
    description: str


SECTORS: Dict[str, Sector] = {
    "AGRI": Sector("AGRI", "Agriculture", "Food and input supply chains driven by seasons and yields."),
    "AUTO": Sector(
        "AUTO",
        "Automotive & Mobility",
        "Automotive commerce and mobility services driven by inventory and local demand.",
    ),
    "BUILD": Sector(
        "BUILD",
        "Construction",
        "Contracting and project delivery shaped by crews, materials, and schedules.",
    ),
}


def build_library(niches: Iterable[NicheRules]) -> Dict[str, NicheRules]:
    """Key niches by id; a repeated id is a content error."""
    library: Dict[str, NicheRules] = {}
    for rules in niches:
        if rules.niche_id in library:
            raise ValueError(f"Duplicate niche id '{rules.niche_id}' in content tables.")
        library[rules.niche_id] = rules
    return library


NICHE_LIBRARY: Dict[str, NicheRules] = build_library((*agri.NICHES, *auto.NICHES, *build.NICHES))


def niches_for_sector(sector_id: str, library: Optional[Dict[str, NicheRules]] = None) -> List[NicheRules]:
    source = NICHE_LIBRARY if library is None else library
    return [rules for rules in source.values() if rules.sector_id == sector_id]


def enabled_niches(config: Any = None, library: Optional[Dict[str, NicheRules]] = None) -> List[NicheRules]:
    """Niches whose sector is listed in ``config.ENABLED_SECTORS``."""
    if config is None:
        from ..config import EngineConfig

        config = EngineConfig()
    enabled = {str(code).upper() for code in config.ENABLED_SECTORS}
    source = NICHE_LIBRARY if library is None else library
    return [rules for rules in source.values() if rules.sector_id in enabled]


__all__ = [
    "Sector",
    "SECTORS",
    "NICHE_LIBRARY",
    "build_library",
    "niches_for_sector",
    "enabled_niches",
]
