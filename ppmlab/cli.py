"""Command line: render a JSON scene file to a PPM image.

$ ppmlab scene.json --out picture.ppm --png preview.png --log-level INFO
"""

import argparse
import logging
from pathlib import Path
from typing import Optional, Sequence, Tuple

from .config import RenderConfig, configure_logging
from .errors import PpmlabError
from .scene import draw_scene, load_scene

logger = logging.getLogger(__name__)


def parse_size(s: str) -> Tuple[int, int]:
    if "x" not in s.lower():
        raise argparse.ArgumentTypeError("Size must be like 800x600")
    a, b = s.lower().split("x", 1)
    try:
        return (int(a), int(b))
    except ValueError as e:
        raise argparse.ArgumentTypeError("Size must be like 800x600") from e


def render(config: RenderConfig) -> Path:
    """Load, draw and write the scene described by ``config``."""
    scene = load_scene(config.scene_path)
    if config.size is not None:
        scene.width, scene.height = config.size
    bitmap = draw_scene(scene)
    out_path = config.out_path or str(Path(config.scene_path).with_suffix(".ppm"))
    written = bitmap.render(out_path, retries=config.retries, retry_delay=config.retry_delay)
    if config.png_path:
        bitmap.save_png(config.png_path)
        logger.info("saved PNG preview to %s", config.png_path)
    return written


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = argparse.ArgumentParser(description="Render a JSON scene of patterns to a plain PPM image")
    ap.add_argument("scene", help="Path to the scene JSON file")
    ap.add_argument("--out", default=None, help="Output .ppm path; defaults to the scene name with .ppm")
    ap.add_argument("--size", type=parse_size, default=None, help="WIDTHxHEIGHT, overrides the scene size")
    ap.add_argument("--png", default=None, help="Also save a PNG preview to this path")
    ap.add_argument("--retries", type=int, default=5, help="Write retries while the file is locked")
    ap.add_argument("--retry-delay", type=float, default=0.05, help="Seconds between write retries")
    ap.add_argument("--log-level", default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"])
    args = ap.parse_args(argv)

    config = RenderConfig(
        scene_path=args.scene,
        out_path=args.out,
        size=args.size,
        png_path=args.png,
        retries=args.retries,
        retry_delay=args.retry_delay,
        log_level=args.log_level,
    )
    configure_logging(config.log_level)
    try:
        out = render(config)
    except (PpmlabError, OSError) as e:
        raise SystemExit(f"ppmlab: {e}") from e
    print(out)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
