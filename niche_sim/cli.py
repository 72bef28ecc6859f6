"""Command-line launcher for niche_sim."""

from __future__ import annotations

import argparse
import json
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional

from .config import (
    EngineConfig,
    TuningProfile,
    apply_tuning_profile,
    get_tuning_profile,
    list_tuning_profiles,
    load_tuning_profile,
)
from .content import NICHE_LIBRARY, SECTORS, enabled_niches
from .content.validation import ERROR, summarize_issues, validate_catalog
from .engine import TickLogWriter, make_rng, run_ai_tick
from .models import AIBrain, CompanyState, MarketState, WorldState
from .unlocks import get_unlocked_products


def _print_tuning_catalog() -> None:
    catalog: List[TuningProfile] = sorted(list_tuning_profiles(), key=lambda profile: profile.name.lower())
    if not catalog:
        print("No built-in tuning profiles are registered.")
        return
    print("Available tuning profiles:")
    for profile in catalog:
        print(f"  - {profile.name}: {profile.description}")


def _write_config_dump(config: EngineConfig, destination: str) -> Path:
    """Persist the resolved configuration to ``destination``."""
    target = Path(destination).expanduser()
    target.parent.mkdir(parents=True, exist_ok=True)
    with target.open("w", encoding="utf-8") as handle:
        json.dump(config.snapshot(), handle, indent=2, sort_keys=True)
    print(f"[CLI] Wrote configuration snapshot to {target}")
    return target


def _read_json(path: str, label: str) -> Any:
    file_path = Path(path).expanduser()
    if not file_path.exists():
        raise FileNotFoundError(f"{label} file not found: {file_path}")
    with file_path.open("r", encoding="utf-8") as handle:
        try:
            return json.load(handle)
        except json.JSONDecodeError as exc:
            raise ValueError(f"{label} file {file_path} is not valid JSON: {exc}") from exc


def _load_brains(path: str) -> List[AIBrain]:
    payload = _read_json(path, "Brains")
    if isinstance(payload, dict):
        payload = payload.get("brains")
    if not isinstance(payload, list):
        raise ValueError("Brains file must hold a list of brains or an object with a 'brains' list.")
    return [AIBrain.from_dict(item) for item in payload]


def _parse_cli_args(argv: Optional[Iterable[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Niche unlock rules and AI decision launcher")
    parser.add_argument(
        "--task",
        choices=["niches", "unlocks", "tick", "validate"],
        help="Select which workflow to run.",
    )
    parser.add_argument("--niche", help="Niche id for the unlocks task (e.g. dairy).")
    parser.add_argument("--state", help="JSON company state for the unlocks task.")
    parser.add_argument("--world", help="JSON world state for the tick task.")
    parser.add_argument("--market", help="Optional JSON market state for the tick task.")
    parser.add_argument("--brains", help="JSON list of brains for the tick task.")
    parser.add_argument("--seed", type=int, help="Seed for the tie-break random source.")
    parser.add_argument("--output", help="Write tick decisions as JSON lines to this path.")
    parser.add_argument("--tick-log", help="Append a per-tick JSON summary line to this path.")
    parser.add_argument(
        "--enabled-only",
        action="store_true",
        help="Restrict the niches listing to sectors enabled in the configuration.",
    )
    parser.add_argument(
        "--list-profiles",
        action="store_true",
        help="List the built-in tuning profiles and exit (unless a task is also provided).",
    )
    parser.add_argument("--tuning-profile", help="Apply a named built-in tuning profile.")
    parser.add_argument("--tuning-file", help="Apply a tuning profile loaded from a JSON file.")
    parser.add_argument("--dump-config", help="Write the resolved configuration to this JSON path.")
    return parser.parse_args(list(argv) if argv is not None else None)


def _run_niches(config: EngineConfig, enabled_only: bool) -> int:
    niches = enabled_niches(config) if enabled_only else list(NICHE_LIBRARY.values())
    for rules in niches:
        sector = SECTORS.get(rules.sector_id)
        sector_name = sector.name if sector else rules.sector_id
        starting = ", ".join(rules.starting_skus())
        print(f"{rules.niche_id:<16} {sector_name:<24} {len(rules.products)} products (starting: {starting})")
    return 0


def _run_unlocks(args: argparse.Namespace) -> int:
    if not args.niche or not args.state:
        raise ValueError("The unlocks task needs --niche and --state.")
    state = CompanyState.from_dict(_read_json(args.state, "State"))
    for sku in get_unlocked_products(args.niche, state):
        print(sku)
    return 0


def _run_tick(args: argparse.Namespace, config: EngineConfig) -> int:
    if not args.world or not args.brains:
        raise ValueError("The tick task needs --world and --brains.")
    world = WorldState.from_dict(_read_json(args.world, "World"))
    market = MarketState.from_dict(_read_json(args.market, "Market")) if args.market else MarketState()
    brains = _load_brains(args.brains)
    seed = args.seed if args.seed is not None else config.RANDOM_SEED
    rng = make_rng(seed) if seed is not None else None
    tick_log = TickLogWriter(args.tick_log) if args.tick_log else None
    if tick_log is not None:
        config = config.copy_with_overrides({"enable_tick_logging": True})
    decisions = run_ai_tick(world, market, brains, rng=rng, config=config, tick_log=tick_log)
    lines = [json.dumps(decision.to_dict(), sort_keys=True) for decision in decisions]
    if args.output:
        target = Path(args.output).expanduser()
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text("".join(line + "\n" for line in lines), encoding="utf-8")
        print(f"[CLI] Wrote {len(lines)} decisions to {target}")
    else:
        for line in lines:
            print(line)
    return 0


def _run_validate() -> int:
    issues = validate_catalog()
    for issue in issues:
        print(f"[Catalog] {issue}")
    counts = summarize_issues(issues)
    print(f"[Catalog] {len(NICHE_LIBRARY)} niches checked: {counts[ERROR]} error(s), {counts['warning']} warning(s)")
    return 1 if counts[ERROR] else 0


def run_cli(base_config: Optional[EngineConfig] = None, argv: Optional[Iterable[str]] = None) -> int:
    """Parse CLI arguments, dispatch the requested task and return an exit code."""
    args = _parse_cli_args(argv)
    if args.list_profiles:
        _print_tuning_catalog()
        if not args.task:
            return 0

    config = base_config or EngineConfig()
    applied: List[Dict[str, Any]] = []
    try:
        if args.tuning_profile:
            profile = get_tuning_profile(args.tuning_profile)
            config = apply_tuning_profile(config, profile)
            applied.append(profile.to_metadata())
        if args.tuning_file:
            profile = load_tuning_profile(args.tuning_file)
            config = apply_tuning_profile(config, profile)
            applied.append(profile.to_metadata())
    except (FileNotFoundError, ValueError, KeyError) as exc:
        print(f"[CLI] Tuning error: {exc}")
        return 2
    for metadata in applied:
        print(f"[CLI] Applied tuning profile '{metadata['name']}' ({metadata['source']})")

    if args.dump_config:
        _write_config_dump(config, args.dump_config)

    if not args.task:
        if not args.dump_config:
            print("No task selected. Use --task with one of 'niches', 'unlocks', 'tick' or 'validate'.")
            print("Run with --help for details.")
        return 0

    try:
        if args.task == "niches":
            return _run_niches(config, args.enabled_only)
        if args.task == "unlocks":
            return _run_unlocks(args)
        if args.task == "tick":
            return _run_tick(args, config)
        return _run_validate()
    except (FileNotFoundError, ValueError, KeyError) as exc:
        print(f"[CLI] {args.task} failed: {exc}")
        return 2


def main(argv: Optional[Iterable[str]] = None) -> int:  # pragma: no cover - thin wrapper
    return run_cli(argv=argv)


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())


__all__ = ["run_cli", "main"]
