"""Loading the six faces of a cubemap sky."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import Union

from PIL import Image

PathLike = Union[str, Path]

CUBEMAP_FACES: tuple[str, ...] = (
    "textures/px.jpg",
    "textures/nx.jpg",
    "textures/py.jpg",
    "textures/ny.jpg",
    "textures/pz.jpg",
    "textures/nz.jpg",
)


class CubemapError(Exception):
    """A cubemap face could not be loaded."""


def load_cubemap(faces: Sequence[PathLike]) -> list[Image.Image]:
    """Load six faces (+x, -x, +y, -y, +z, -z) as RGB images."""
    if len(faces) != 6:
        raise CubemapError(f"a cubemap needs 6 faces, got {len(faces)}")
    images = []
    for face in faces:
        try:
            with Image.open(face) as image:
                images.append(image.convert("RGB"))
        except (OSError, ValueError) as exc:
            raise CubemapError(
                f"Failed to load cubemap texture at path: {face}"
            ) from exc
    return images