"""
Engine configuration dataclass and tuning profiles for niche_sim.

`EngineConfig` carries every tunable of the decision engine. The defaults
reproduce the shipped game behaviour exactly, including the per-intent
signal coefficients, so a default config never needs overrides.

Overrides work the same way for ad-hoc tweaks and for named profiles:

    >>> config = EngineConfig().copy_with_overrides({"use_parallel": True})
    >>> config = config.copy_with_overrides({"INTENT_SIGNAL_WEIGHTS.hold.abs_utilization": -0.3})

With a tuning profile:

    >>> profile = get_tuning_profile("cautious_market")
    >>> config = apply_tuning_profile(EngineConfig(), profile)

Signal terms recognised in ``INTENT_SIGNAL_WEIGHTS``:

    cash_safety, utilization, price_trend, debt       signed signal values
    abs_utilization, abs_price_trend                  magnitudes of the two
"""

from __future__ import annotations

import copy
import json
import os
from dataclasses import asdict, dataclass, field
from numbers import Number
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .models import DEFAULT_INTENTS
from .utils import normalize_intent

SIGNAL_TERMS: Tuple[str, ...] = (
    "cash_safety",
    "utilization",
    "price_trend",
    "debt",
    "abs_utilization",
    "abs_price_trend",
)


def _default_intent_weights() -> Dict[str, Dict[str, float]]:
    # Term order is summation order; keep it stable for bit-identical scores.
    return {
        "expand_capacity": {"utilization": 0.6, "price_trend": 0.4, "cash_safety": 0.2},
        "upgrade_quality": {"price_trend": 0.6, "cash_safety": 0.2},
        "seek_contracts": {"price_trend": 0.2, "abs_utilization": 0.3},
        "integrate_supply": {"cash_safety": 0.2, "price_trend": 0.2, "debt": -0.3},
        "optimize_costs": {"cash_safety": -0.4, "price_trend": -0.2, "debt": 0.3},
        "pay_down_debt": {"debt": 0.6, "cash_safety": -0.2},
        "hold": {"abs_utilization": -0.2, "abs_price_trend": -0.1},
    }


@dataclass
class EngineConfig:
    """Tunables for signal scoring, tie-breaking, sector gating and tick execution."""

    RANDOM_SEED: Optional[int] = None
    DEFAULT_INTENTS: Tuple[str, ...] = DEFAULT_INTENTS
    INTENT_SIGNAL_WEIGHTS: Dict[str, Dict[str, float]] = field(default_factory=_default_intent_weights)
    # Upper bound applied to rng() before indexing into a tie group.
    TIE_BREAK_ROLL_CAP: float = 0.999999
    ENABLED_SECTORS: Tuple[str, ...] = ("AGRI", "AUTO")
    ENABLE_DEBUG_LOGS: bool = False

    # Execution
    enable_tick_logging: bool = False
    use_parallel: bool = False
    parallel_threshold: int = 64
    max_workers: int = 4

    def __post_init__(self) -> None:
        self.DEFAULT_INTENTS = tuple(
            normalize_intent(intent, default=str(getattr(intent, "value", intent))) for intent in self.DEFAULT_INTENTS
        )
        self.ENABLED_SECTORS = tuple(str(code).upper() for code in self.ENABLED_SECTORS)
        if not 0.0 <= float(self.TIE_BREAK_ROLL_CAP) < 1.0:
            raise ValueError(f"TIE_BREAK_ROLL_CAP must lie in [0, 1), got {self.TIE_BREAK_ROLL_CAP}.")
        for intent, terms in self.INTENT_SIGNAL_WEIGHTS.items():
            unknown = set(terms) - set(SIGNAL_TERMS)
            if unknown:
                raise ValueError(
                    f"Unknown signal term(s) {sorted(unknown)} for intent '{intent}'. "
                    f"Valid terms: {', '.join(SIGNAL_TERMS)}"
                )
        self.max_workers = max(1, int(self.max_workers))

    def snapshot(self) -> Dict[str, Any]:
        """Return a deep-copied, JSON-safe representation of the configuration."""
        return asdict(self)

    def copy_with_overrides(self, overrides: Optional[Dict[str, Any]] = None) -> "EngineConfig":
        """Return a new config with the provided overrides merged in."""
        new_cfg = copy.deepcopy(self)
        if overrides:
            _apply_overrides(new_cfg, overrides)
            new_cfg.__post_init__()
        return new_cfg


WEIGHTS_KEY = "INTENT_SIGNAL_WEIGHTS"


def _apply_overrides(config: EngineConfig, overrides: Dict[str, Any]) -> None:
    """Write ``overrides`` into ``config`` in place.

    ``INTENT_SIGNAL_WEIGHTS`` is the only nested setting. It can be replaced
    wholesale, per intent (``"INTENT_SIGNAL_WEIGHTS.hold"``) or per
    coefficient (``"INTENT_SIGNAL_WEIGHTS.hold.abs_utilization"``).
    """
    for key, value in overrides.items():
        if "." in key:
            _set_weight(config, key, value)
            continue
        if not hasattr(config, key):
            raise KeyError(f"Unknown configuration attribute '{key}' in tuning override.")
        if key == WEIGHTS_KEY:
            setattr(config, key, _weight_table(value, key))
        elif isinstance(getattr(config, key), tuple):
            setattr(config, key, _coerce_tuple(value, getattr(config, key)))
        else:
            setattr(config, key, copy.deepcopy(value))


def _set_weight(config: EngineConfig, key: str, value: Any) -> None:
    top, *path = key.split(".")
    if top != WEIGHTS_KEY or not 1 <= len(path) <= 2:
        raise KeyError(f"Unknown configuration attribute '{key}' in tuning override.")
    weights = config.INTENT_SIGNAL_WEIGHTS
    if len(path) == 1:
        weights[path[0]] = _weight_row(value, key)
    else:
        intent, term = path
        weights.setdefault(intent, {})[term] = _coefficient(value, key)


def _coefficient(value: Any, key: str) -> float:
    if isinstance(value, bool) or not isinstance(value, Number):
        raise ValueError(f"Override '{key}' must be a number, got {value!r}.")
    return float(value)


def _weight_row(value: Any, key: str) -> Dict[str, float]:
    if not isinstance(value, dict):
        raise ValueError(f"Override '{key}' must map signal terms to coefficients.")
    return {str(term): _coefficient(coefficient, f"{key}.{term}") for term, coefficient in value.items()}


def _weight_table(value: Any, key: str) -> Dict[str, Dict[str, float]]:
    if not isinstance(value, dict):
        raise ValueError(f"Override '{key}' must map intents to signal weights.")
    return {str(intent): _weight_row(row, f"{key}.{intent}") for intent, row in value.items()}


def _coerce_tuple(value: Any, template: Tuple[Any, ...]) -> Tuple[Any, ...]:
    """Keep tuple semantics for overrides arriving as lists or scalars."""
    if isinstance(value, tuple):
        return value
    if isinstance(value, list):
        return tuple(value)
    if isinstance(value, (str, Number)):
        return (value,)
    raise ValueError(f"Cannot coerce {type(value).__name__} into a tuple override (template {template!r}).")


@dataclass(frozen=True)
class TuningProfile:
    """Named bundle of config overrides."""

    name: str
    description: str
    overrides: Dict[str, Any] = field(default_factory=dict)
    source: str = "built-in"

    def to_metadata(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "description": self.description,
            "source": self.source,
            "overrides": copy.deepcopy(self.overrides),
        }


def apply_tuning_profile(config: EngineConfig, profile: Optional[TuningProfile]) -> EngineConfig:
    """Return a config with the profile overrides applied."""
    if profile is None:
        return config
    return config.copy_with_overrides(profile.overrides)


def list_tuning_profiles() -> List[TuningProfile]:
    return list(TUNING_LIBRARY.values())


def get_tuning_profile(name: str) -> TuningProfile:
    """Fetch a built-in tuning profile by name (case-insensitive)."""
    profile = TUNING_LIBRARY.get(name.strip().lower())
    if profile is None:
        raise KeyError(f"Unknown tuning profile '{name}'. Available: {', '.join(TUNING_LIBRARY)}")
    return profile


PROFILE_FILE_KEYS = ("name", "description", "overrides")


def load_tuning_profile(path: str | os.PathLike[str]) -> TuningProfile:
    """Load a tuning profile from a JSON file.

    The file holds ``name``, ``description`` and ``overrides``. Overrides are
    applied to a default config while loading, so an unknown attribute or
    signal term fails here rather than at the first tick.
    """
    file_path = Path(path).expanduser().resolve()
    if not file_path.is_file():
        raise FileNotFoundError(f"Tuning file not found: {file_path}")
    try:
        payload = json.loads(file_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise ValueError(f"Tuning file {file_path} is not valid JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise ValueError(f"Tuning file {file_path} must contain a JSON object.")
    extra = sorted(set(payload) - set(PROFILE_FILE_KEYS))
    if extra:
        raise ValueError(f"Tuning file {file_path} has unexpected key(s) {extra}; expected {list(PROFILE_FILE_KEYS)}.")
    overrides = payload.get("overrides") or {}
    if not isinstance(overrides, dict):
        raise ValueError(f"Tuning file {file_path} must define an 'overrides' dictionary.")
    profile = TuningProfile(
        name=str(payload.get("name") or file_path.stem),
        description=str(payload.get("description") or f"Custom tuning loaded from {file_path.name}"),
        overrides=overrides,
        source=str(file_path),
    )
    apply_tuning_profile(EngineConfig(), profile)
    return profile


TUNING_LIBRARY: Dict[str, TuningProfile] = {
    "shipped": TuningProfile(
        name="shipped",
        description="Coefficients and sector gating exactly as shipped with the game.",
        overrides={},
    ),
    "all_sectors": TuningProfile(
        name="all_sectors",
        description="Enable the construction sector alongside agriculture and automotive.",
        overrides={"ENABLED_SECTORS": ["AGRI", "AUTO", "BUILD"]},
    ),
    "cautious_market": TuningProfile(
        name="cautious_market",
        description=(
            "Companies weigh debt and cash shortfalls more heavily and chase price "
            "trends less. Useful for downturn scenarios."
        ),
        overrides={
            "INTENT_SIGNAL_WEIGHTS.expand_capacity.price_trend": 0.25,
            "INTENT_SIGNAL_WEIGHTS.pay_down_debt.debt": 0.8,
            "INTENT_SIGNAL_WEIGHTS.optimize_costs.cash_safety": -0.5,
        },
    ),
    "diagnostics": TuningProfile(
        name="diagnostics",
        description="Record per-decision debug entries and write one JSON line per tick.",
        overrides={"ENABLE_DEBUG_LOGS": True, "enable_tick_logging": True},
    ),
}


__all__ = [
    "EngineConfig",
    "SIGNAL_TERMS",
    "TuningProfile",
    "TUNING_LIBRARY",
    "apply_tuning_profile",
    "get_tuning_profile",
    "list_tuning_profiles",
    "load_tuning_profile",
]
