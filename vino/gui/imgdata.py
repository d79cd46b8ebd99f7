"""Decoded image data and its conversion into drawable textures."""

from __future__ import annotations

import os
from pathlib import Path

import pygame

from vino.gui.window import WindowError

IMAGE_EXTENSIONS = (".png", ".jpg", ".jpeg", ".bmp", ".psd")


class ImgData:
    """Pixels of an image as RGBA bytes.

    With ``flipped`` set (the default) rows are stored bottom to top, so the
    first row is the image's lowest one. Without a path the image is empty.
    """

    def __init__(
        self,
        path_to_img: str | os.PathLike[str] | None = None,
        flipped: bool = True,
    ) -> None:
        self.width = 0
        self.height = 0
        self.num_color_channels = 0
        self.data: bytes | None = None
        self.flipped = flipped
        if path_to_img is None:
            return

        path = Path(path_to_img)
        if not path.exists() or path.suffix.lower() not in IMAGE_EXTENSIONS:
            raise WindowError(
                f"ImgData error loading: file {path_to_img} doesn't exist or not image"
            )
        try:
            surface = pygame.image.load(str(path))
        except (pygame.error, OSError) as exc:
            raise WindowError(
                f"ImgData error loading: file {path_to_img}: {exc}"
            ) from exc

        self.width, self.height = surface.get_size()
        self.num_color_channels = 4 if surface.get_flags() & pygame.SRCALPHA else 3
        self.data = pygame.image.tobytes(surface, "RGBA", flipped)

    @property
    def empty(self) -> bool:
        return self.data is None


def configure_texture(img: ImgData) -> pygame.Surface:
    """Build a drawable surface from ``img``, upright in screen orientation.

    An empty image gives a single opaque white pixel.
    """
    if img.empty:
        texture = pygame.Surface((1, 1), pygame.SRCALPHA)
        texture.fill((255, 255, 255, 255))
        return texture
    return pygame.image.frombytes(
        img.data, (img.width, img.height), "RGBA", img.flipped
    )