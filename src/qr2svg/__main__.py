import argparse
import logging
import sys

from qr2svg import QR2SVGError, QRCode


def parse_args() -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(description="Render a QR code to SVG or raster image")
    parser.add_argument("text", metavar="TEXT", type=str, help="Text to encode")
    parser.add_argument(
        "output",
        metavar="PATH",
        type=str,
        help="Output file. Format is taken from the extension (svg, png, jpg, webp).",
    )
    parser.add_argument(
        "--size",
        metavar="PX",
        type=int,
        default=200,
        help="Size of the symbol area in pixels. Default: 200",
    )
    parser.add_argument(
        "--margin",
        metavar="PX",
        type=int,
        default=20,
        help="Quiet zone in pixels on each side. Default: 20",
    )
    parser.add_argument(
        "--logo",
        metavar="PATH",
        type=str,
        default=None,
        help="Logo image to place in the center.",
    )
    parser.add_argument(
        "--logo-size-ratio",
        metavar="RATIO",
        type=float,
        default=0.2,
        help="Logo size as a fraction of the canvas. Default: 0.2",
    )
    parser.add_argument(
        "--background",
        metavar="#RRGGBB",
        type=str,
        default=None,
        help="Background color. Default: #FFFFFF",
    )
    parser.add_argument(
        "--foreground",
        metavar="#RRGGBB",
        type=str,
        default=None,
        help="Module color. Default: #000000",
    )
    parser.add_argument(
        "--error-correction",
        metavar="LEVEL",
        type=str,
        choices=["L", "M", "Q", "H"],
        default="M",
        help="Error correction level (L, M, Q, H). Default: M",
    )
    parser.add_argument(
        "--quality",
        metavar="Q",
        type=int,
        default=None,
        help="JPEG quality from 1 to 100. Default: 90",
    )
    parser.add_argument(
        "--loglevel",
        metavar="LEVEL",
        default="WARNING",
        help="Logging level, default WARNING",
    )
    return parser.parse_args()


def main() -> None:
    """Main function to render a QR code to a file."""
    args = parse_args()
    logging.basicConfig(level=getattr(logging, args.loglevel.upper(), "WARNING"))
    qr = QRCode(
        args.text,
        size=args.size,
        margin=args.margin,
        logo=args.logo,
        logo_size_ratio=args.logo_size_ratio,
        background_color=args.background,
        foreground_color=args.foreground,
        error_correction=args.error_correction,
    )
    try:
        qr.save(args.output, quality=args.quality)
    except (QR2SVGError, ValueError) as e:
        logging.getLogger(__name__).error(f"{e.__class__.__name__}: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
