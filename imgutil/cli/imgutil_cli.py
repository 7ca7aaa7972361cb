import argparse
import logging
import os
import sys
from pathlib import Path
from dotenv import load_dotenv

# Load environment variables first
load_dotenv()

from ..errors import ImgUtilError
from ..services.image_service import ImageService
from ..services.jpeg_service import JpegService

logger = logging.getLogger(__name__)


def _configure_logging() -> None:
    # --- Centralized Logging Configuration ---
    logging.basicConfig(
        level=os.getenv("IMGUTIL_LOG_LEVEL", "INFO").upper(),
        format='%(asctime)s - %(name)-25s - %(levelname)-8s - %(message)s',
        datefmt='%H:%M:%S'
    )


def cmd_brightness(args) -> int:
    image_service = ImageService()
    for target in args.paths:
        target = Path(target)
        if target.is_dir():
            images = image_service.stream_gallery(target, recursive=args.recursive)
        else:
            images = [image_service.load(target)]
        for img in images:
            with img:
                print(f"{img.path}\t{image_service.mean_brightness(img):.4f}")
    return 0


def cmd_caption(args) -> int:
    image_service = ImageService(tall_policy=args.tall_policy)
    with image_service.load(args.input) as img:
        image_service.put_text(img, args.text)
        image_service.save(img, args.output)
    logger.info(f"Captioned {args.input} → {args.output}")
    return 0


def cmd_scale(args) -> int:
    JpegService(quality=args.quality).scale_file(args.input, args.output, args.width, args.height)
    return 0


def cmd_mask(args) -> int:
    image_service = ImageService()
    with image_service.load(args.input) as img:
        mask = image_service.blue_mask(img, show=args.show or None, output_path=args.out)
    covered = float((mask > 0).mean())
    print(f"{args.input}\t{covered:.4f}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="imgutil", description="Small OpenCV / Pillow image helpers")
    sub = ap.add_subparsers(dest="command", required=True)

    p = sub.add_parser("brightness", help="print mean HSV brightness in [0, 1]")
    p.add_argument("paths", nargs="+", help="image files or folders")
    p.add_argument("--recursive", action="store_true")
    p.set_defaults(func=cmd_brightness)

    p = sub.add_parser("caption", help="burn a caption into an image")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("text")
    p.add_argument("--tall-policy", choices=["clamp", "skip"], default=None)
    p.set_defaults(func=cmd_caption)

    p = sub.add_parser("scale", help="rescale a JPEG with bilinear interpolation")
    p.add_argument("input")
    p.add_argument("output")
    p.add_argument("width", type=int)
    p.add_argument("height", type=int)
    p.add_argument("--quality", type=int, default=None)
    p.set_defaults(func=cmd_scale)

    p = sub.add_parser("mask", help="blue HSV range mask; prints the covered fraction")
    p.add_argument("input")
    p.add_argument("--out", default=None, help="write the mask to this file")
    p.add_argument("--show", action="store_true", help="show the mask and wait for a key")
    p.set_defaults(func=cmd_mask)
    return ap


def main(argv=None) -> int:
    _configure_logging()
    args = build_parser().parse_args(argv)
    try:
        return args.func(args)
    except (ImgUtilError, OSError) as err:
        logger.error(f"{args.command} failed: {err}")
        return 1


if __name__ == "__main__":
    sys.exit(main())
