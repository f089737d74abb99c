"""Main entry point for the CAGED Explorer CLI."""

from typing import Optional

import click
import pyfiglet

from ..clusters import compute_hover_ranges
from ..core.config import ConfigManager
from ..explorer import SCALE_MODES, SHAPE_CHOICES, ExplorerSettings, FretboardView
from ..fretboard import generate_scale, sort_notes
from ..frying_pan import HANDLE_DIRECTIONS, on_neck, three_two_bars, visible_pans
from ..logger import get_logger
from ..logging_config import setup_logging
from ..reference import build_shape_ranges
from ..scales import (
    NOTES,
    PENTA_SCALE,
    QUALITIES,
    RELATIVE_MINOR_OFFSET,
    SCALE,
    SHAPE_ORDER,
    SHAPE_ORIENTATION,
    get_scale,
    key_index,
    scale_semitones,
)
from ..shapes import assign_shapes, find_shapes
from ..ui.text import (
    chord_tone_label,
    describe_pan,
    interval_label,
    note_label,
    render_fretboard,
    render_hover,
    render_ranges,
)

logger = get_logger(__name__)


def _parse_key(value: str) -> int:
    try:
        return key_index(value)
    except ValueError as e:
        raise click.BadParameter(str(e), param_hint="KEY") from e


def _key_row(key: int, minor: bool) -> int:
    """Row of the major key grid holding ``key`` (its relative major for a minor key)."""
    return (key - RELATIVE_MINOR_OFFSET) % 12 if minor else key


def _key_title(key: int, minor: bool) -> str:
    return f"{NOTES[key]} {'minor' if minor else 'major'}"


@click.group()
@click.option("--debug", is_flag=True, help="Enable debug logging")
@click.option("--banner", is_flag=True, help="Print the key as a large banner")
@click.option(
    "--config-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Configuration directory (default: ~/.config/caged_explorer)",
)
@click.pass_context
def cli(ctx, debug, banner, config_dir):
    """Explore the CAGED shapes of the guitar neck."""
    setup_logging(level="DEBUG" if debug else None)
    config = ConfigManager(config_dir)
    logger.debug(f"Using configuration from {config.config_dir}")
    ctx.obj = {
        "banner": banner,
        "fretboard": config.settings("fretboard"),
        "display": config.settings("display"),
    }


def _echo_title(ctx, title: str) -> None:
    if ctx.obj["banner"]:
        click.echo(pyfiglet.figlet_format(title, font=ctx.obj["display"]["banner_font"]))
    else:
        click.echo(title)


def _num_frets(ctx, frets: Optional[int]) -> int:
    return frets if frets is not None else ctx.obj["fretboard"]["num_frets"]


@cli.command()
@click.argument("key")
@click.option(
    "--scale",
    "scale_name",
    default="pentaMaj",
    show_default=True,
    type=click.Choice(list(SCALE)),
    help="Scale family to place",
)
@click.option("--notes", "by_name", is_flag=True, help="Label notes by name instead of interval")
@click.option("--frets", type=click.IntRange(1, 24), default=None, help="Number of frets to draw")
@click.pass_context
def scale(ctx, key, scale_name, by_name, frets):
    """Draw a scale rooted on KEY."""
    root = _parse_key(key)
    num_frets = _num_frets(ctx, frets)
    by_name = by_name or ctx.obj["display"]["label"] == "notes"

    notes = generate_scale(root, get_scale(scale_name), num_frets)
    _echo_title(ctx, f"{NOTES[root]} {scale_name}")
    label = note_label(root) if by_name else interval_label
    click.echo(render_fretboard(notes, num_frets, label))


@cli.command()
@click.argument("key")
@click.option("--minor", is_flag=True, help="KEY names a minor key")
@click.option(
    "--quality",
    type=click.Choice(QUALITIES),
    default=None,
    help="Pentatonic and triad quality (defaults to the key's own)",
)
@click.pass_context
def shapes(ctx, key, minor, quality):
    """Show which CAGED shape owns each pentatonic note of KEY."""
    root = _parse_key(key)
    quality = quality or ("minor" if minor else "major")
    fretboard = ctx.obj["fretboard"]
    num_frets = fretboard["num_frets"]

    semitones = scale_semitones(PENTA_SCALE[quality])
    notes = generate_scale(root, get_scale(PENTA_SCALE[quality]), num_frets)
    shape_map = assign_shapes(notes, root, semitones)

    _echo_title(ctx, _key_title(root, minor))
    click.echo(
        render_fretboard(
            notes, num_frets, lambda n: "/".join(find_shapes(shape_map, n.string, n.fret) or "?")
        )
    )

    ranges = build_shape_ranges(
        root,
        [quality],
        max_fret=num_frets,
        gap_threshold=fretboard["gap_threshold"],
        partial_ratio=fretboard["partial_ratio"],
    )
    click.echo("\nShape ranges:")
    click.echo(render_ranges(ranges, SHAPE_ORDER))
    click.echo("\nHover regions:")
    click.echo(render_hover(compute_hover_ranges(ranges, SHAPE_ORDER)))


@cli.command()
@click.argument("key")
@click.option("--minor", is_flag=True, help="KEY names a minor key")
@click.option(
    "--shape",
    "active_shape",
    type=click.Choice(SHAPE_CHOICES),
    default="all",
    show_default=True,
    help="Shape to show",
)
@click.option("--triads/--no-triads", default=True, show_default=True, help="Show chord tones")
@click.option("--triad-quality", type=click.Choice(QUALITIES), default=None)
@click.option(
    "--scale-mode",
    type=click.Choice(SCALE_MODES),
    default="penta",
    show_default=True,
    help="Scale tones to add around the chord tones",
)
@click.option("--penta-quality", type=click.Choice(QUALITIES), default=None)
@click.option("--frying-pan", is_flag=True, help="List the frying pans (with --shape all)")
@click.pass_context
def view(ctx, key, minor, active_shape, triads, triad_quality, scale_mode, penta_quality, frying_pan):
    """Draw chord tones and scale boxes of KEY, shape by shape.

    Chord tones are bracketed. Qualities default to the key's own.
    """
    root = _parse_key(key)
    own_quality = "minor" if minor else "major"
    settings = ExplorerSettings(
        key_index=_key_row(root, minor),
        minor_key=minor,
        active_shape=active_shape,
        show_triads=triads,
        triad_quality=triad_quality or own_quality,
        scale_mode=scale_mode,
        penta_quality=penta_quality or own_quality,
        show_frying_pan=frying_pan,
    )
    board = FretboardView(settings, **ctx.obj["fretboard"])

    chord_tones = [n for notes in board.triad_notes().values() for n in notes]
    notes = sort_notes(chord_tones + board.pentatonic_notes())

    _echo_title(ctx, _key_title(root, minor))
    click.echo(
        render_fretboard(notes, board.num_frets, chord_tone_label(board.triad_positions()))
    )
    click.echo("\nShape ranges:")
    click.echo(render_ranges(board.shape_ranges(), board.visible_shapes))
    overlay = board.frying_pans()
    if overlay:
        click.echo("\nFrying pans:")
        for pan in overlay:
            click.echo(describe_pan(pan))


@cli.command()
@click.argument("key")
@click.option("--minor", is_flag=True, help="KEY names a minor key")
@click.option(
    "--direction",
    type=click.Choice(HANDLE_DIRECTIONS),
    default=None,
    help="Only pans whose handle points this way",
)
@click.option(
    "--shape",
    type=click.Choice(SHAPE_ORDER),
    default=None,
    help="Only pans touching this shape, with the handle on its side",
)
@click.pass_context
def pans(ctx, key, minor, direction, shape):
    """List the frying pans and 3:2 bars visible in KEY."""
    root = _parse_key(key)
    num_frets = ctx.obj["fretboard"]["num_frets"]
    row = _key_row(root, minor)

    if shape:
        if direction and direction != SHAPE_ORIENTATION[shape]:
            raise click.UsageError(
                f"Shape {shape} pans have their handle on the {SHAPE_ORIENTATION[shape]}"
            )
        settings = ExplorerSettings(key_index=row, minor_key=minor, active_shape="all")
        found = FretboardView(settings, **ctx.obj["fretboard"]).pans_for_shape(shape, aligned=True)
    else:
        found = visible_pans(row, [direction] if direction else None, num_frets)

    _echo_title(ctx, _key_title(root, minor))
    for pan in found:
        click.echo(describe_pan(pan) + ("" if on_neck(pan, num_frets) else " (handle only)"))
        for bar in three_two_bars(pan, num_frets):
            click.echo(f"    {bar.notes}-note bar: string {bar.string}, frets {bar.lo}-{bar.hi}")


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
