#!/usr/bin/env python3
"""
CLI for the Bowling Strategy Lab delivery planner
"""
import json
from pathlib import Path

import click
from rich.console import Console
from rich.table import Table
from rich.panel import Panel

from bowling_lab.config import settings
from bowling_lab.database import init_db, get_session
from bowling_lab.engine import OverComposer, SpellScheduler, SpellItem
from bowling_lab.engine.over_composer import BALLS_PER_OVER, MIN_OVERS, MAX_OVERS
from bowling_lab.engine.taxonomy import Phase, Pitch, parse_phase, parse_pitch
from bowling_lab.export import export_filename, plan_to_csv, plan_to_json, spell_to_csv
from bowling_lab.generators import BowlerGenerator
from bowling_lab.logging_utils import setup_logging
from bowling_lab.roster import RosterStore, RosterError, roster_fingerprint
from bowling_lab.roster.loader import parse_roster_with_report
from bowling_lab.roster.remote import refresh_roster

console = Console()

PHASES = [p.value for p in Phase]
PITCHES = [p.value for p in Pitch]


@click.group()
@click.option("-v", "--verbose", count=True, help="-v for INFO, -vv for DEBUG")
def cli(verbose: int):
    """Bowling Strategy Lab - seeded delivery plans"""
    setup_logging(verbose, level=settings.LOG_LEVEL)


@cli.command()
def init():
    """Initialize the database"""
    console.print("[yellow]Initializing database...[/yellow]")
    init_db()
    console.print("[green]Database initialized successfully![/green]")


def _store_roster(text: str, source: str):
    init_db()
    session = get_session()
    try:
        profiles, collisions = parse_roster_with_report(text)
        fingerprint = roster_fingerprint(text)
        loaded = RosterStore(session).replace_all(profiles, fingerprint=fingerprint)
    finally:
        session.close()

    console.print(f"[green]Loaded {loaded} bowlers from {source}[/green] ({fingerprint})")
    for bowler_id, n in collisions.items():
        console.print(f"[yellow]  duplicate id {bowler_id} x{n}, suffixed[/yellow]")


@cli.command("import-roster")
@click.argument("file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
def import_roster(file: Path):
    """Replace the roster with a JSON or CSV file"""
    try:
        _store_roster(file.read_text(encoding="utf-8-sig"), str(file))
    except RosterError as exc:
        raise click.ClickException(str(exc))


@cli.command("refresh-roster")
@click.option("--url", default=None, help="Roster URL (defaults to ROSTER_URL)")
@click.option("--force", is_flag=True, help="Reload even if the roster text is unchanged")
def refresh_roster_cmd(url, force: bool):
    """Pull the roster from the remote source"""
    url = url or settings.ROSTER_URL
    if not url:
        raise click.ClickException("No roster URL given and ROSTER_URL is not set")

    init_db()
    session = get_session()
    try:
        result = refresh_roster(session, url, force=force)
    except RosterError as exc:
        raise click.ClickException(str(exc))
    finally:
        session.close()
    if result.skipped:
        console.print(f"[yellow]Roster unchanged ({result.fingerprint}), nothing reloaded[/yellow]")
        return
    console.print(f"[green]Refreshed {result.loaded} bowlers[/green] ({result.fingerprint})")


@cli.command("list-bowlers")
@click.option("-q", "--query", default="", help="Search name, country, team or style")
@click.option("--team", default=None, help="Only this team")
@click.option("--format", "fmt", default=None, type=click.Choice(["T20I", "ODI", "Test"]))
def list_bowlers(query: str, team, fmt):
    """Show the cached roster"""
    init_db()
    session = get_session()
    try:
        bowlers = RosterStore(session).search(query=query, team=team, fmt=fmt)
    finally:
        session.close()

    if not bowlers:
        console.print("[red]No bowlers found. Run 'import-roster' or 'generate-roster' first.[/red]")
        return

    table = Table(title=f"Bowlers ({len(bowlers)})")
    table.add_column("ID", style="dim")
    table.add_column("Name", style="cyan")
    table.add_column("Arm")
    table.add_column("Type", style="magenta")
    table.add_column("Team")
    table.add_column("Formats")
    table.add_column("Strengths")

    for b in bowlers:
        name = f"{b.name} ★" if b.is_legend else b.name
        table.add_row(
            b.id,
            name,
            b.arm.value,
            b.archetype.value,
            b.team or "",
            ", ".join(b.formats),
            ", ".join(b.strengths),
        )

    console.print(table)


@cli.command("generate-roster")
@click.option("--count", default=40, help="Number of bowlers to generate")
@click.option("--seed", default=None, type=int, help="Seed for a repeatable roster")
@click.option("--out", type=click.Path(dir_okay=False, path_type=Path), default=None,
              help="Write JSON here instead of loading into the database")
def generate_roster(count: int, seed, out):
    """Generate fictional bowlers"""
    console.print(f"[yellow]Generating {count} bowlers...[/yellow]")
    bowlers = BowlerGenerator(seed=seed).generate_roster(count)
    text = json.dumps([b.to_dict() for b in bowlers], indent=2)

    if out is not None:
        out.write_text(text, encoding="utf-8")
        console.print(f"[green]Wrote {len(bowlers)} bowlers to {out}[/green]")
        return

    _store_roster(text, "generator")

    # Archetype summary
    counts = {}
    for b in bowlers:
        counts[b.archetype.value] = counts.get(b.archetype.value, 0) + 1
    console.print("\n[bold]Archetypes:[/bold]")
    for archetype, n in sorted(counts.items(), key=lambda x: -x[1]):
        console.print(f"  {archetype}: {n}")


def _load_bowler(session, bowler_id: str):
    profile = RosterStore(session).get(bowler_id)
    if profile is None:
        raise click.ClickException(f"Bowler '{bowler_id}' not found")
    return profile


def _print_deliveries(title: str, deliveries, bowler_for_over=None):
    table = Table(title=title)
    table.add_column("Ball", justify="right")
    if bowler_for_over:
        table.add_column("Bowler", style="cyan")
    table.add_column("Type", style="magenta")
    table.add_column("Length")
    table.add_column("Line")
    table.add_column("Purpose")

    for d in deliveries:
        row = [f"{d.over}.{d.ball}"]
        if bowler_for_over:
            row.append(bowler_for_over(d.over))
        purpose = d.purpose
        if d.trap_step:
            purpose = f"[bold yellow]{d.trap_step}[/bold yellow] {purpose}"
        row += [d.delivery_type.value, d.length.value, d.line.value, purpose]
        table.add_row(*row)

    console.print(table)


@cli.command()
@click.argument("bowler_id")
@click.option("--overs", default=4, type=click.IntRange(MIN_OVERS, MAX_OVERS))
@click.option("--phase", default="powerplay", type=click.Choice(PHASES))
@click.option("--pitch", default="Normal", type=click.Choice(PITCHES, case_sensitive=False))
@click.option("--salt", default="", help="Extra seed text for an alternative plan")
@click.option("--csv", "csv_path", type=click.Path(path_type=Path), default=None,
              help="Also write the plan as CSV (a directory gets the default file name)")
@click.option("--json", "json_path", type=click.Path(path_type=Path), default=None,
              help="Also write the plan as JSON (a directory gets the default file name)")
def plan(bowler_id: str, overs: int, phase: str, pitch: str, salt: str, csv_path, json_path):
    """Plan overs for one bowler"""
    init_db()
    session = get_session()
    try:
        bowler = _load_bowler(session, bowler_id)
    finally:
        session.close()

    phase_ = parse_phase(phase)
    pitch_ = parse_pitch(pitch)
    result = OverComposer().compose_plan(bowler, overs * BALLS_PER_OVER, phase_, pitch_, salt)

    console.print(Panel(
        f"[bold cyan]{bowler.name}[/bold cyan] ({bowler.arm.value}, {bowler.archetype.value})\n"
        f"{phase_.value} • {pitch_.value} pitch • seed {result.seed}"
    ))
    _print_deliveries(f"{overs} over plan", result.deliveries)
    if result.forced_draws:
        console.print(f"[dim]{result.forced_draws} deliveries repeated a variation[/dim]")

    if csv_path is not None:
        if csv_path.is_dir():
            csv_path = csv_path / export_filename(bowler.name, phase_, pitch_)
        csv_path.write_text(plan_to_csv(bowler, phase_, pitch_, result.deliveries), encoding="utf-8")
        console.print(f"[green]Saved {csv_path}[/green]")

    if json_path is not None:
        if json_path.is_dir():
            json_path = json_path / export_filename(bowler.name, phase_, pitch_, ext="json")
        json_path.write_text(plan_to_json(bowler, phase_, pitch_, result.deliveries), encoding="utf-8")
        console.print(f"[green]Saved {json_path}[/green]")


def _parse_spell_item(value: str):
    bowler_id, sep, overs = value.rpartition(":")
    if not sep or not bowler_id:
        raise click.BadParameter(f"'{value}' is not BOWLER_ID:OVERS")
    try:
        n = int(overs)
    except ValueError:
        raise click.BadParameter(f"'{overs}' is not a number of overs")
    if not MIN_OVERS <= n <= MAX_OVERS:
        raise click.BadParameter(f"overs must be {MIN_OVERS}-{MAX_OVERS}, got {n}")
    return bowler_id, n


@cli.command()
@click.argument("items", nargs=-1, required=True)
@click.option("--phase", default="middle", type=click.Choice(PHASES))
@click.option("--pitch", default="Normal", type=click.Choice(PITCHES, case_sensitive=False))
@click.option("--csv", "csv_path", type=click.Path(dir_okay=False, path_type=Path), default=None)
def spell(items, phase: str, pitch: str, csv_path):
    """Interleave bowlers, e.g. spell bumrah:2 chahal:2"""
    parsed = [_parse_spell_item(i) for i in items]

    init_db()
    session = get_session()
    try:
        spell_items = [SpellItem(bowler=_load_bowler(session, bid), overs=n) for bid, n in parsed]
    finally:
        session.close()

    phase_ = parse_phase(phase)
    pitch_ = parse_pitch(pitch)
    result = SpellScheduler().schedule(spell_items, phase_, pitch_)
    names = {item.bowler.id: item.bowler.name for item in spell_items}

    _print_deliveries(
        f"{result.total_overs} over spell • {phase_.value} • {pitch_.value}",
        result.deliveries,
        bowler_for_over=lambda over: names[result.over_to_bowler[over]],
    )

    if csv_path is not None:
        csv_path.write_text(spell_to_csv(result, phase_, pitch_, names), encoding="utf-8")
        console.print(f"[green]Saved {csv_path}[/green]")


if __name__ == "__main__":
    cli()
