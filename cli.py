from __future__ import annotations

import argparse
import logging
import os
import sys
from typing import List, Optional

from errors import SeamCarvingError
from grid import Image
from ops import carve_n
from ppm import load_ppm, save_ppm
from utils import Config, ensure_parent_dir
from viz import VizGifRecorder

USAGE_LINES = (
    "usage: seam <input.ppm> <cols> <output.ppm>",
    "where cols is the number of columns to carve out",
)


def parse_args(argv: Optional[List[str]] = None) -> dict:
    ap = argparse.ArgumentParser(
        prog="seam",
        description="Content-aware width reduction of a P3 image by seam carving",
    )

    # Positionals (optional so short command lines print usage)
    ap.add_argument("input", nargs="?", help="Path to input P3 image")
    ap.add_argument("columns", nargs="?", help="Number of columns to carve out")
    ap.add_argument("output", nargs="?", help="Path to output P3 image")

    # Seam search / output
    ap.add_argument("--no-prune", action="store_true",
                    help="Walk every candidate seam fully instead of abandoning costlier ones early.")
    ap.add_argument("--max-value", type=int, default=255,
                    help="Max channel value written to the output image (default: 255).")

    # Plan-only (dry run)
    ap.add_argument(
        "--plan-only",
        action="store_true",
        help="Print what would happen (dims, columns, target, visualization) and exit without processing.",
    )

    # Visualization (GIF)
    ap.add_argument("--viz-gif", help="Path to an output GIF that visualizes carved seams over time.")
    ap.add_argument("--viz-every", type=int, default=1, help="Record every N-th seam (default: 1 = every seam).")
    ap.add_argument("--viz-max-frames", type=int, default=0, help="Optional cap on recorded frames (0 = unlimited).")
    ap.add_argument("--viz-fps", type=int, default=12, help="GIF frames per second (default: 12).")

    ap.add_argument("--log-level", default="WARNING",
                    help="Logging level: DEBUG, INFO, WARNING, ERROR (default: WARNING).")

    return vars(ap.parse_args(argv))


def validate_and_normalize_args(a: dict) -> dict:
    try:
        a["columns"] = int(a["columns"])
    except ValueError:
        sys.exit(f"Error: column count must be an integer, got {a['columns']!r}")
    if a["columns"] < 0:
        sys.exit(f"Error: column count must be non-negative, got {a['columns']}")
    if a["max_value"] <= 0:
        sys.exit(f"Error: --max-value must be positive, got {a['max_value']}")

    if not os.path.exists(a["input"]):
        sys.exit(f"Error: Input image not found: {a['input']}")

    return a


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=getattr(logging, str(level).upper(), logging.WARNING),
        format="%(message)s",
        stream=sys.stderr,
    )


def print_plan(args: dict, image: Image) -> None:
    """Emit a deterministic, human-friendly plan and exit."""
    cols = args["columns"]
    print("=== Seam Carving Plan ===")
    print(f"Input:           {args['input']}")
    print(f"Input size:      {image.width}x{image.height} (WxH)")
    print(f"Remove columns:  {cols}")
    if cols < image.width:
        print(f"Target size:     {image.width - cols}x{image.height} (WxH)")
    else:
        print(f"Target size:     invalid (image is only {image.width} wide)")
    print(f"Output:          {args['output']} (max value {args['max_value']})")
    print(f"Pruned search:   {'no' if args['no_prune'] else 'yes'}")

    # Visualization summary
    if args.get("viz_gif"):
        cap = args["viz_max_frames"] if args["viz_max_frames"] > 0 else "unlimited"
        print(f"Visualization:   GIF -> {args['viz_gif']}  (every={args['viz_every']}, max_frames={cap}, fps={args['viz_fps']})")
    else:
        print("Visualization:   (disabled)")

    print("Plan-only:       No processing will be performed.")
    sys.exit(0)


def main(argv: Optional[List[str]] = None) -> None:
    args = parse_args(argv)
    if args["output"] is None:
        for line in USAGE_LINES:
            print(line)
        return

    _configure_logging(args["log_level"])
    args = validate_and_normalize_args(args)

    cfg = Config(
        prune_search=not args["no_prune"],
        check_seams=True,
        output_max_value=args["max_value"],
    )

    try:
        image = load_ppm(args["input"])

        if args["plan_only"]:
            print_plan(args, image)

        # Ensure output directories exist (quality-of-life)
        ensure_parent_dir(args["output"])
        if args.get("viz_gif"):
            ensure_parent_dir(args["viz_gif"])

        # Optional GIF recorder
        recorder = None
        if args.get("viz_gif"):
            max_frames = args["viz_max_frames"] if args["viz_max_frames"] > 0 else None
            recorder = VizGifRecorder(
                gif_path=args["viz_gif"],
                every=max(1, int(args["viz_every"])),
                max_frames=max_frames,
                fps=max(1, int(args["viz_fps"])),
            )

        output = carve_n(image, args["columns"], cfg,
                         on_seam=(recorder.on_seam if recorder else None))

        save_ppm(args["output"], output, cfg.output_max_value)

        # Write GIF (if any)
        if recorder is not None:
            recorder.close()
    except (SeamCarvingError, OSError) as exc:
        sys.exit(f"Error: {exc}")


if __name__ == "__main__":
    main()
