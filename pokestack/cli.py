from __future__ import annotations
import argparse
from typing import List, Optional, Sequence

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.box import ROUNDED

from pokestack.battle.capture import attempt_capture
from pokestack.battle.core import BattleCore, Creature
from pokestack.battle.factory import create_creature
from pokestack.battle.session import PadPolicy, build_team
from pokestack.core import rng as rng_mod
from pokestack.core.errors import PokestackError
from pokestack.core.logging import logger
from pokestack.data.species import default_species
from pokestack.system.settings import Settings
from pokestack.world.bag import Bag

console = Console()

def creature_table(title: str, creatures: Sequence[Creature]) -> Table:
    table = Table(title=title, box=ROUNDED)
    for col in ("Species", "Lv", "Nature", "HP", "Atk", "Def", "SpA", "SpD", "Spd", "IVs", "EV sum"):
        table.add_column(col, justify="right" if col not in ("Species", "Nature") else "left")
    for c in creatures:
        s = c.stats
        table.add_row(f"{c.name} ({c.species_id})", str(c.level), c.nature,
                      f"{c.current_hp:.0f}/{s.hp}", str(s.atk), str(s.def_), str(s.sp_atk),
                      str(s.sp_def), str(s.spd), "/".join(str(v) for v in c.ivs.as_list()),
                      str(c.evs.total()))
    return table

def cmd_spawn(args, settings: Settings):
    creatures = [create_creature(species_id=args.species, name=args.name, level=args.level)
                 for _ in range(args.count)]
    console.print(creature_table("Spawned", creatures))

def cmd_capture(args, settings: Settings):
    target = create_creature(species_id=args.species, level=args.level)
    bag = Bag(pokeball=args.pokeball, greatball=args.greatball)
    res = attempt_capture(bag, target.level, keep_throwing=not args.stop_on_success)
    verdict = "[bold green]Captured![/]" if res.captured else "[bold red]It got away...[/]"
    console.print(Panel(
        f"{target.name} Lv{target.level}\n{verdict}\n"
        f"Poke Balls: {bag.pokeball} -> {res.bag.pokeball}   Great Balls: {bag.greatball} -> {res.bag.greatball}",
        title="Capture", border_style="bright_white"))

def cmd_battle(args, settings: Settings):
    pad = PadPolicy.GENERATE_RANDOM if args.pad else settings.data.pad
    size = settings.data.roster_size
    offense = build_team([create_creature() for _ in range(args.offense)], pad, size)
    defense = build_team([create_creature() for _ in range(args.defense)], pad, size)
    console.print(creature_table("Offense", offense.members))
    console.print(creature_table("Defense", defense.members))
    log: List[str] = []
    core = BattleCore(message_cb=log.append)
    outcome = core.resolve(offense.working_copy().members, defense.working_copy().members)
    if settings.data.debug:
        for line in log:
            console.print(f"  {line}")
    winner = "Offense" if outcome.offense_won else "Defense"
    console.print(Panel(f"{winner} wins after {outcome.attacks} attacks", title="Battle", border_style="bright_yellow"))

def cmd_species(args, settings: Settings):
    table_src = default_species()
    ids = range(1, table_src.count() + 1)
    if args.query:
        q = args.query
        ids = [int(q)] if q.isdigit() else [table_src.species_id(q)]
    table = Table(title=f"Species ({table_src.count()} known)", box=ROUNDED)
    for col in ("#", "Name", "Form", "HP", "Atk", "Def", "SpA", "SpD", "Spd"):
        table.add_column(col)
    for sid in ids:
        for form in table_src.forms(sid):
            table.add_row(str(sid), table_src.name(sid), form, *(str(v) for v in table_src.base_stats(sid, form)))
    console.print(table)

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="pokestack", description="Creature generation, capture and battle simulator")
    parser.add_argument("--seed", type=int, default=None, help="Seed the random source")
    parser.add_argument("--debug", action="store_true", help="Print every attack")
    sub = parser.add_subparsers(dest="command", required=True)

    sp = sub.add_parser("spawn", help="Generate creatures")
    sp.add_argument("--species", type=int)
    sp.add_argument("--name")
    sp.add_argument("--level", type=int)
    sp.add_argument("--count", type=int, default=1)
    sp.set_defaults(func=cmd_spawn)

    cp = sub.add_parser("capture", help="Throw a volley of balls at a wild creature")
    cp.add_argument("--species", type=int)
    cp.add_argument("--level", type=int)
    cp.add_argument("--pokeball", type=int, default=10)
    cp.add_argument("--greatball", type=int, default=2)
    cp.add_argument("--stop-on-success", action="store_true")
    cp.set_defaults(func=cmd_capture)

    bp = sub.add_parser("battle", help="Fight two random teams")
    bp.add_argument("--offense", type=int, default=4)
    bp.add_argument("--defense", type=int, default=4)
    bp.add_argument("--pad", action="store_true", help="Top up short rosters with random creatures")
    bp.set_defaults(func=cmd_battle)

    lp = sub.add_parser("species", help="Look up the species table")
    lp.add_argument("query", nargs="?")
    lp.set_defaults(func=cmd_species)
    return parser

def run(argv: Optional[Sequence[str]] = None) -> int:
    args = build_parser().parse_args(argv)
    settings = Settings.load()
    if args.debug:
        settings.data.debug = True
    settings.apply_logging()
    seed = args.seed if args.seed is not None else settings.data.seed
    if seed is not None:
        rng_mod.seed(seed)
    try:
        args.func(args, settings)
    except PokestackError as e:
        logger.error("CommandFailed", command=args.command, error=str(e))
        console.print(f"[bold red]{e}[/]")
        return 1
    return 0

if __name__ == "__main__":
    raise SystemExit(run())
