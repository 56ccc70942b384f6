"""CLI interface for canvastext."""

import logging
from pathlib import Path

import click
from PIL import Image
from pydantic import ValidationError

from canvastext.config import Config, TextBlockStyle, load_config
from canvastext.drawing import draw_text
from canvastext.fonts import parse_font, register_fonts
from canvastext.render.image import PillowSurface, save_image_to_bytes
from canvastext.utils.metrics import FontMetricsEngine


@click.group()
@click.version_option()
@click.option("-v", "--verbose", is_flag=True, help="Log font registration and measurements.")
@click.option(
    "--fonts-dir",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    multiple=True,
    help="Directory of TTF/OTF files to register (repeatable).",
)
def main(verbose: bool, fonts_dir: tuple[Path, ...]) -> None:
    """Lay out and draw word-wrapped text blocks with measured font metrics."""
    if verbose:
        logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    # Register bundled fonts, then any user directories
    register_fonts()
    for directory in fonts_dir:
        register_fonts(directory)


@main.command()
@click.argument("text")
@click.option(
    "-o",
    "--output",
    type=click.Path(dir_okay=False, path_type=Path),
    default=Path("text.png"),
    show_default=True,
    help="Output image path (format from extension).",
)
@click.option("--width", type=int, default=400, show_default=True, help="Surface width in pixels.")
@click.option("--height", type=int, default=200, show_default=True, help="Surface height in pixels.")
@click.option("--background", type=str, default="#FFFFFF", show_default=True, help="Background color.")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML file with [engine] and [style] tables.",
)
@click.option("--align", type=click.Choice(["left", "center", "right"], case_sensitive=False))
@click.option("--valign", type=click.Choice(["top", "middle", "bottom"], case_sensitive=False))
@click.option("--padding", type=float, help="Padding on every side.")
@click.option("--font", type=str, help="Full font identity, e.g. \"20px 'DejaVu Sans'\".")
@click.option("--font-size", type=float, help="Font size in points.")
@click.option("--font-family", type=str, help="Font family name.")
@click.option("--color", type=str, help="Text color (hex or CSS color).")
@click.option("--alpha", type=float, help="Text opacity 0-1 (requires a hex color).")
@click.option("--line-height", type=float, help="Row height as a multiple of font height.")
@click.option(
    "--decoration",
    type=click.Choice(["none", "underline", "strikethrough"], case_sensitive=False),
)
@click.option("--shadow-color", type=str, help="Shadow color.")
@click.option("--shadow-blur", type=float, help="Shadow blur.")
@click.option("--shadow-offset", type=float, help="Shadow offset on both axes.")
def render(
    text: str,
    output: Path,
    width: int,
    height: int,
    background: str,
    config: Path | None,
    **style_options: object,
) -> None:
    """
    Draw TEXT word-wrapped onto a new image.

    Style options override the [style] table of --config.
    """
    try:
        cfg = load_config(config) if config else Config()

        style_updates = {key: value for key, value in style_options.items() if value is not None}
        style_updates["text"] = text
        base_style = cfg.style.model_dump(exclude_unset=True) if cfg.style else {}
        style = TextBlockStyle(**{**base_style, **style_updates})

        engine = FontMetricsEngine(cfg.engine)
        surface = PillowSurface.new(width, height, background, download_fonts=cfg.engine.download_fonts)

        area = draw_text(surface, style, engine)

        image_format = Image.registered_extensions().get(output.suffix.lower(), "PNG")
        output.write_bytes(save_image_to_bytes(surface.image, image_format))
        click.echo(f"Covered area: {area:.1f}")
        click.echo(f"✓ Image saved to: {output}")

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ValidationError as e:
        click.echo(f"Error: invalid style: {e}", err=True)
        raise SystemExit(1)
    except (ValueError, OSError) as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


@main.command()
@click.argument("font")
@click.option(
    "--config",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="TOML file with an [engine] table.",
)
def metrics(font: str, config: Path | None) -> None:
    """
    Measure FONT, a font identity such as "12pt 'DejaVu Sans'".
    """
    try:
        cfg = load_config(config) if config else Config()
        engine = FontMetricsEngine(cfg.engine)
        surface = PillowSurface.new(1, 1, download_fonts=cfg.engine.download_fonts)

        result = engine.metrics(surface, font, parse_font(font).size)

        click.echo(f"Font:             {font}")
        click.echo(f"Height:           {result.height:g}")
        click.echo(f"Baseline offset:  {result.baseline_offset:g}")
        click.echo(f"Descender height: {result.descender_height:g}")

    except FileNotFoundError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
