"""Command-line driver for arena runs and the daily shop."""
from __future__ import annotations

import argparse
import logging
from datetime import date, datetime
from typing import List, Sequence

from questforge.core.rng import RNG
from questforge.data.repositories import (
    EncounterTypesRepository,
    LootNamesRepository,
    ModifierPresetsRepository,
    NamePoolsRepository,
)
from questforge.domain.entities import Character, Stats
from questforge.domain.loot import LootRoller
from questforge.domain.run_models import RunState
from questforge.services.arena_service import ArenaEvent, ArenaNewBestWaveEvent, ArenaRunResolvedEvent, ArenaService
from questforge.services.shop_service import DailyShop, ShopService

from .config import load_config

logger = logging.getLogger("questforge.cli")

_DEFAULT_WAVES = 10


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="questforge", description="Simulate arena runs and daily shop stock")
    subparsers = parser.add_subparsers(dest="command", required=True)

    arena = subparsers.add_parser("arena", help="Pre-simulate an arena run")
    arena.add_argument("--seed", type=int, default=None, help="RNG seed (random when omitted)")
    length = arena.add_mutually_exclusive_group()
    length.add_argument("--waves", type=int, default=_DEFAULT_WAVES, help="Number of waves")
    length.add_argument("--endless", action="store_true", help="Keep going until defeat")
    arena.add_argument("--preset", type=str, default=None, help="Modifier preset id")
    arena.add_argument("--level", type=int, default=1, help="Character level")
    arena.add_argument("--stat", type=int, default=10, help="Value for every base stat")

    shop = subparsers.add_parser("shop", help="Show the daily equipment stock")
    shop.add_argument("--date", type=date.fromisoformat, default=None, help="Stock date (YYYY-MM-DD)")
    shop.add_argument("--level", type=int, default=1, help="Character level")
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Parse arguments, configure logging and run the chosen command."""
    config = load_config()
    logging.basicConfig(level=str(config["log_level"]), format="%(levelname)s %(name)s: %(message)s")
    args = build_parser().parse_args(argv)
    if args.command == "arena":
        return _run_arena(args, seconds_per_step=int(config["seconds_per_step"]))
    return _run_shop(args)


def _run_arena(args: argparse.Namespace, *, seconds_per_step: int) -> int:
    loot_names_repo = LootNamesRepository()
    service = ArenaService(
        encounter_types_repo=EncounterTypesRepository(),
        name_pools_repo=NamePoolsRepository(),
        loot_names_repo=loot_names_repo,
        presets_repo=ModifierPresetsRepository(),
        seconds_per_step=seconds_per_step,
    )
    try:
        modifiers = service.preset_modifiers(args.preset)
    except KeyError:
        known = ", ".join(preset.id for preset in service.list_presets())
        print(f"Unknown preset '{args.preset}'. Known presets: {known}")
        return 2
    character = Character(id="hero", name="Hero", level=max(1, args.level), stats=Stats.uniform(max(0, args.stat)))
    rng = RNG(args.seed)
    run = service.start_run(
        character,
        max_waves=None if args.endless else args.waves,
        modifiers=modifiers,
        started_at=datetime.now(),
    )
    events = service.resolve_run(run, character, rng=rng)
    print(f"Arena run {run.run_id} (seed {rng.seed})")
    for line in render_results(run.state):
        print(line)
    for line in render_events(events):
        print(line)
    return 0


def _run_shop(args: argparse.Namespace) -> int:
    service = ShopService(loot_roller=LootRoller(LootNamesRepository().names()))
    shop = service.open_shop(max(1, args.level), args.date or date.today())
    for line in render_shop(shop):
        print(line)
    return 0


def render_results(state: RunState) -> List[str]:
    lines: List[str] = []
    for result in state.results:
        outcome = "WIN " if result.success else "LOSS"
        line = (
            f"Wave {result.index:>3} {outcome} {result.encounter_name:<18} "
            f"{result.approach_name:<18} power {result.power:>4} vs {result.required_power:<5} "
            f"({result.success_chance:.0%}) hp {result.hp_after}/{state.max_hp}"
        )
        if result.milestone is not None:
            line += f" milestone +{result.milestone.gold}g"
        for item in result.loot:
            line += f" loot: {item.name}"
        lines.append(line)
    return lines


def render_events(events: Sequence[ArenaEvent]) -> List[str]:
    lines: List[str] = []
    for event in events:
        if isinstance(event, ArenaRunResolvedEvent):
            lines.append(
                f"Run {event.status}: cleared wave {event.waves_cleared}, "
                f"+{event.total_exp} exp, +{event.total_gold} gold, {event.loot_count} item(s)"
            )
        elif isinstance(event, ArenaNewBestWaveEvent):
            lines.append(f"New best wave: {event.new_best} (was {event.previous_best})")
    return lines


def render_shop(shop: DailyShop) -> List[str]:
    lines = [f"Daily shop for {shop.day.isoformat()} (level {shop.level})"]
    for entry in shop.entries:
        item = entry.item
        bonus = f"+{item.stat_bonus} {item.primary_stat}"
        if item.secondary_stat is not None:
            bonus += f", +{item.secondary_bonus} {item.secondary_stat}"
        lines.append(f"  [{entry.index}] {item.rarity.label:<9} {item.name:<36} {bonus:<28} {entry.price:>5}g")
    return lines
