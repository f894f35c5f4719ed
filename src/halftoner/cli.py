import argparse
import logging
import sys
from pathlib import Path

from halftoner.converter import NoClipboardImage, default_output_path, grab_clipboard, load_image, to_png_bytes
from halftoner.engine import InvalidConfig, PatternKind, RenderConfig
from halftoner.renderer import HalftoneEngine

logger = logging.getLogger(__name__)

# Range offered by the original slider; other positive sizes still work
RECOMMENDED_CELL_SIZES = range(2, 31)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="halftoner", description="Render an image as a black and white halftone")
    parser.add_argument("image", nargs="?", help="Path to input image (omit with --paste)")
    parser.add_argument(
        "-o", "--output", default=None, help="Output PNG path, or - for stdout (default: <image>_halftone.png)"
    )
    parser.add_argument("-s", "--cell-size", type=int, default=10, help="Cell size in pixels (default: 10)")
    parser.add_argument(
        "-p",
        "--pattern",
        default=PatternKind.DOT.value,
        choices=[kind.value for kind in PatternKind],
        help="Mark drawn in each cell (default: dot)",
    )
    parser.add_argument(
        "--linear", action="store_true", default=False, help="Map brightness linearly instead of the pattern's curve"
    )
    parser.add_argument("--no-rotate", action="store_true", default=False, help="Draw every mark unrotated")
    parser.add_argument(
        "--area", action="store_true", default=False, help="Average each whole cell instead of its corner pixel"
    )
    parser.add_argument("--paste", action="store_true", default=False, help="Read the input image from the clipboard")
    parser.add_argument("-v", "--verbose", action="store_true", default=False, help="Log debug output")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if args.image is None and not args.paste:
        parser.error("an input image is required unless --paste is given")
    if args.image is not None and args.paste:
        parser.error("give either an input image or --paste, not both")

    try:
        config = RenderConfig(
            cell_size=args.cell_size,
            pattern=args.pattern,
            response="linear" if args.linear else "curve",
            rotate=not args.no_rotate,
            sampling="area" if args.area else "point",
        )
    except InvalidConfig as e:
        print(f"Invalid settings: {e}", file=sys.stderr)
        return 2
    if config.cell_size not in RECOMMENDED_CELL_SIZES:
        logger.warning("Cell size %d is outside the usual 2-30 range", config.cell_size)

    if args.paste:
        try:
            image = grab_clipboard()
        except NoClipboardImage as e:
            print(str(e), file=sys.stderr)
            return 2
        source_path = Path("clipboard.png")
    else:
        source_path = Path(args.image)
        if not source_path.exists():
            print(f"File not found: {source_path}", file=sys.stderr)
            return 1
        image = load_image(source_path)

    result = HalftoneEngine(config).render(image)

    if args.output == "-":
        sys.stdout.buffer.write(to_png_bytes(result))
        return 0

    output_path = Path(args.output) if args.output else default_output_path(source_path)
    result.save(output_path, format="PNG")
    logger.info("Wrote %s", output_path)
    return 0


if __name__ == "__main__":
    sys.exit(main())
