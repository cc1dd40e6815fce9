"""Command-line interface for color filtering."""

import argparse
import logging
import re
import sys
from pathlib import Path

from .logging_utils import add_logging_args, configure_logging

DEFAULT_DELIM = "_"

logger = logging.getLogger(__name__)


def write_error(output_path: str | None, message: str) -> None:
    """Write error message to an error file next to the requested output."""
    if output_path:
        error_path = output_path + ".err"
        with open(error_path, "w") as f:
            f.write(message)


def detect_delim(filename: str) -> str | None:
    """Detect delimiter from filename by finding most common separator."""
    stem = Path(filename).stem
    for delim in ["_", "-", "."]:
        if delim in stem:
            return delim
    return None


def build_output_filename(input_path: str, prefix: str, suffix: str, delim: str) -> str:
    p = Path(input_path)
    parts = []
    if prefix:
        parts.append(prefix)
    parts.append(p.stem)
    if suffix:
        parts.append(suffix)
    return str(p.with_stem(delim.join(parts)))


def parse_color_arg(value: str) -> tuple[int, ...]:
    """Parse a color string such as "255,0,0" into integers.

    Separators: , : / ;
    """
    from .exceptions import InvalidColorError

    try:
        return tuple(int(p) for p in re.split(r"[,:;/]", value.strip()))
    except ValueError:
        raise InvalidColorError(value) from None


def parse_filter_config(config_arg: str | None):
    """Parse filter config from CLI argument.

    Args:
        config_arg: Either inline JSON string or path to .json file

    Returns:
        FilterConfig object or None if not provided
    """
    if not config_arg:
        return None

    from .models import FilterConfig

    config_path = Path(config_arg)
    if config_path.exists() and config_path.suffix == ".json":
        return FilterConfig.from_file(config_path)

    return FilterConfig.from_json(config_arg)


def add_filter_arguments(parser: argparse.ArgumentParser) -> None:
    """Add color filter arguments to a parser."""
    parser.add_argument("input", help="Input image file")
    parser.add_argument(
        "bounds",
        nargs="+",
        type=float,
        help="Lower and upper limits: 6 values for modes 0 and 1 "
        "(e.g. 80 256 0 112 120 200), 2 values for modes 2 and 3 (e.g. 0 300)",
    )
    parser.add_argument(
        "-m",
        "--mode",
        type=int,
        help="Filter mode: 0 channel range (default), 1 ratio range, 2 sum range, "
        "3 spread range. Run 'color-filter modes' for details.",
    )
    parser.add_argument("--height", type=int, help="Filter only the top HEIGHT rows")
    parser.add_argument("--width", type=int, help="Filter only the left WIDTH columns")
    parser.add_argument(
        "-c",
        "--color",
        help="RGB color of stopped pixels, 0-255 each (default: 0,0,0)",
    )
    parser.add_argument(
        "--config",
        help="JSON filter configuration (inline JSON string or path to .json file). "
        "Command-line options override its values.",
    )
    parser.add_argument("-o", "--output", help="Output filename")
    parser.add_argument("--prefix", default="", help="Prefix for output filename")
    parser.add_argument("--suffix", default="filtered", help="Suffix for output filename")
    parser.add_argument(
        "--delim",
        help="Delimiter between prefix/name/suffix (auto-detected from filename if not set)",
    )
    parser.add_argument(
        "--default-delim",
        default=DEFAULT_DELIM,
        help=f"Default delimiter if not detected (default: '{DEFAULT_DELIM}')",
    )
    parser.add_argument(
        "--show",
        action="store_true",
        help="Display the filtered image in a window",
    )
    parser.add_argument(
        "--compare",
        action="store_true",
        help="Also evaluate every other mode that accepts the same bounds",
    )
    parser.add_argument(
        "--debug-dir",
        help="Directory to save debug visualization images",
    )
    add_logging_args(parser)


def build_config(args: argparse.Namespace):
    """Merge --config with the individual command-line options."""
    from .models import FilterConfig

    config = parse_filter_config(args.config) or FilterConfig()
    if args.height is not None:
        config.height = args.height
    if args.width is not None:
        config.width = args.width
    if args.color is not None:
        config.color = parse_color_arg(args.color)
    if args.mode is not None:
        config.mode = args.mode
    return config


def run_compare(region, bounds, visualizer, show: bool) -> None:
    """Evaluate every compatible mode and report or display the results."""
    from .compositor import composite
    from .models import ThresholdBounds
    from .policies import evaluate_all_masks

    masks = evaluate_all_masks(region, ThresholdBounds.parse(bounds))
    for name, mask in masks.items():
        logger.info("Compare %s: %.1f%% stopped", name, mask.mean() * 100)

    if visualizer:
        visualizer.save_comparison(region, masks)
    if show:
        from .display import show_comparison

        images = {"region": region}
        images.update({name: composite(region, mask) for name, mask in masks.items()})
        show_comparison(images, title="Mode comparison")


def run_filter_command(args: argparse.Namespace) -> None:
    """Run the color filter on an image file."""
    from .display import read_image, save_image, show_image
    from .exceptions import ColorFilterError
    from .pipeline import run_filter
    from .region import select_region

    configure_logging(args.log_level, args.verbose, args.quiet)

    # Determine error output path (used if --output is set)
    error_output = args.output if args.output else None

    visualizer = None
    if args.debug_dir:
        from .visualizer import DebugVisualizer

        visualizer = DebugVisualizer(args.debug_dir)

    try:
        img = read_image(args.input)
        config = build_config(args)
        result = run_filter(img, args.bounds, config, visualizer)

        if args.output:
            output_path = args.output
        else:
            delim = args.delim or detect_delim(args.input) or args.default_delim
            output_path = build_output_filename(args.input, args.prefix, args.suffix, delim)

        save_image(output_path, result.output)
        logger.info("Wrote %s", output_path)

        if args.compare:
            region = select_region(img, config.height, config.width)
            run_compare(region, args.bounds, visualizer, args.show)
    except ColorFilterError as e:
        write_error(error_output, e.user_message)
        sys.exit(e.user_message)
    except Exception as e:
        msg = f"Unexpected error: {e}"
        write_error(error_output, msg)
        sys.exit(msg)

    if args.show:
        show_image(result.output, title=f"Mode {int(result.mode)}: {Path(args.input).name}")


def run_modes(args: argparse.Namespace) -> None:
    """Print the available filter modes."""
    from .models import PolicyMode

    for mode in PolicyMode:
        lower, upper = mode.domain
        example = ",".join(f"{v:g}" for v in mode.example)
        print(f"{int(mode)} {mode.name.lower()}: {mode.description}")
        print(f"    {mode.bound_count} bounds, domain {lower:g} to {upper:g}, e.g. {example}")


def run_config(args: argparse.Namespace) -> None:
    """Print the default filter configuration."""
    from .models import FilterConfig

    print(FilterConfig.default_json())


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        description="Filter an image pixelwise by color values",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  color-filter filter image.png 80 256 0 112 120 200          Channel ranges
  color-filter filter image.png 0 300 -m 2 -c 255,0,0         Sum range, red fill
  color-filter filter image.png 0 30 -m 3 --height 200 --show Spread range on a crop
  color-filter modes                                          List filter modes
""",
    )
    subparsers = parser.add_subparsers(dest="command")

    filter_parser = subparsers.add_parser(
        "filter",
        help="Filter an image by color values",
    )
    add_filter_arguments(filter_parser)
    filter_parser.set_defaults(func=run_filter_command)

    modes_parser = subparsers.add_parser("modes", help="List filter modes and their bounds")
    modes_parser.set_defaults(func=run_modes)

    config_parser = subparsers.add_parser("config", help="Print the default filter configuration")
    config_parser.set_defaults(func=run_config)

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)
    args.func(args)


if __name__ == "__main__":
    main()
