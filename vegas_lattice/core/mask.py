"""
Image-backed probability masks.

A Mask tiles a 2D alpha channel over the plane. Each pixel's alpha (0-255)
is read as the probability of keeping a site that projects onto it.
"""

import logging
import math
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
from PIL import Image, UnidentifiedImageError

from ..errors import ImageReadError, LatticeIOError

logger = logging.getLogger(__name__)


class Mask:
    """
    Tiled keep-probability field backed by an image alpha channel.

    Parameters
    ----------
    alpha : np.ndarray, shape (height, width)
        Alpha values in [0, 255]. Row 0 is the top row of the image.
    ppu : float
        Pixels per unit length. A site at planar coordinate ``(u, v)`` reads
        column ``floor(u * ppu) mod width`` and the row
        ``floor(v * ppu) mod height`` counted from the bottom of the image.

    Notes
    -----
    The mask holds no random state; probabilistic decisions take a
    ``numpy.random.Generator`` from the caller.

    Examples
    --------
    >>> mask = Mask(np.full((2, 2), 255), ppu=1.0)
    >>> mask.keep(0.5, 0.5, np.random.default_rng(0))
    True
    """

    def __init__(self, alpha: np.ndarray, ppu: float):
        alpha = np.asarray(alpha)
        if alpha.ndim != 2 or alpha.shape[0] == 0 or alpha.shape[1] == 0:
            raise ValueError(f"Mask alpha must be a non-empty 2D array, got shape {alpha.shape}")
        if np.any(alpha < 0) or np.any(alpha > 255):
            raise ValueError("Mask alpha values must lie in [0, 255]")
        if not ppu > 0 or not math.isfinite(ppu):
            raise ValueError(f"Pixels per unit must be positive, got {ppu}")

        self._alpha = alpha.astype(np.uint8)
        self._alpha.setflags(write=False)
        self.ppu = float(ppu)

    @classmethod
    def from_image(cls, image: Image.Image, ppu: float) -> 'Mask':
        """Build a mask from a Pillow image, using its alpha channel."""
        rgba = image.convert('RGBA')
        alpha = np.array(rgba)[:, :, 3]
        return cls(alpha, ppu)

    @classmethod
    def from_path(cls, path: Union[str, Path], ppu: float) -> 'Mask':
        """
        Load a mask image from disk.

        Images without an alpha channel are treated as fully opaque.

        Raises
        ------
        LatticeIOError
            If the file cannot be opened
        ImageReadError
            If the file is not a readable image
        """
        path = Path(path)
        try:
            with Image.open(path) as image:
                mask = cls.from_image(image, ppu)
        except UnidentifiedImageError as err:
            raise ImageReadError(f"Could not decode mask image '{path}'") from err
        except OSError as err:
            raise LatticeIOError(f"Could not read mask image '{path}'") from err
        logger.info(f"Loaded mask {path} ({mask.width}x{mask.height} px, ppu={mask.ppu})")
        return mask

    @property
    def width(self) -> int:
        return self._alpha.shape[1]

    @property
    def height(self) -> int:
        return self._alpha.shape[0]

    @property
    def alpha(self) -> np.ndarray:
        """Read-only view of the alpha channel."""
        return self._alpha

    def pixel(self, u: float, v: float) -> Tuple[int, int]:
        """
        Array indices ``(row, column)`` of the pixel under ``(u, v)``.

        Coordinates outside the image wrap around, so the mask tiles the plane.
        """
        column = math.floor(u * self.ppu) % self.width
        from_bottom = math.floor(v * self.ppu) % self.height
        row = self.height - 1 - from_bottom
        return row, column

    def probability(self, u: float, v: float) -> float:
        """Keep probability at ``(u, v)``, i.e. alpha / 255."""
        row, column = self.pixel(u, v)
        return float(self._alpha[row, column]) / 255.0

    def keep(self, u: float, v: float, rng: Optional[np.random.Generator] = None) -> bool:
        """
        Decide whether to keep a site at ``(u, v)``.

        Draws exactly one uniform number from ``rng`` and keeps the site iff
        the draw is below the pixel's keep probability.
        """
        if rng is None:
            rng = np.random.default_rng()
        return bool(rng.random() < self.probability(u, v))

    def __repr__(self) -> str:
        return f"Mask(width={self.width}, height={self.height}, ppu={self.ppu})"
