"""Command line entry point: render a black hole image to a PNG file."""

from __future__ import annotations

import argparse
import sys
import time
from pathlib import Path

from holetracer.params import make_params
from holetracer.raytracer import raytrace_blackhole
from holetracer.skybox import CubemapError, load_cubemap

_FACE_NAMES = ("px.jpg", "nx.jpg", "py.jpg", "ny.jpg", "pz.jpg", "nz.jpg")


def _positive_int(text: str) -> int:
    value = int(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def _positive_float(text: str) -> float:
    value = float(text)
    if value <= 0:
        raise argparse.ArgumentTypeError(f"must be positive, got {value}")
    return value


def _parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="holetracer", description="Render a Schwarzschild black hole."
    )
    parser.add_argument("--width", type=_positive_int, default=2560)
    parser.add_argument("--height", type=_positive_int, default=1440)
    parser.add_argument("--mass", type=_positive_float, default=1.0)
    parser.add_argument("--distance", type=_positive_float, default=30.0)
    parser.add_argument("--output", type=Path, default=Path("Images/blackhole.png"))
    parser.add_argument(
        "--skybox",
        type=Path,
        default=None,
        help="directory holding px/nx/py/ny/pz/nz.jpg faces to check before rendering",
    )
    return parser


def main(argv: list[str] | None = None) -> int:
    """Render the image described by ``argv`` and return an exit status."""
    args = _parser().parse_args(argv)

    if args.skybox is not None:
        try:
            load_cubemap([args.skybox / name for name in _FACE_NAMES])
        except CubemapError as exc:
            print(exc, file=sys.stderr)
            print("Failed to create cubemap texture", file=sys.stderr)
            return 1
        print("Cubemap texture created successfully")

    params = make_params(args.mass, args.distance)

    print("Starting raytracing.....")
    start = time.perf_counter()
    image = raytrace_blackhole(params, args.width, args.height)

    try:
        args.output.parent.mkdir(parents=True, exist_ok=True)
        image.save(args.output, "PNG")
    except (OSError, ValueError) as exc:
        print(f"Saving PNG failed: {exc}", file=sys.stderr)
        return 1
    print(f"Image saved as {args.output}")
    print(f"Raytracing completed in: {time.perf_counter() - start:f} seconds")
    return 0


if __name__ == "__main__":
    sys.exit(main())