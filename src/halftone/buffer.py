from dataclasses import dataclass

import numpy as np
from PIL import Image

from halftone.errors import InputError

CHANNELS = 4  # R, G, B, A


@dataclass(frozen=True)
class PixelBuffer:
    """Decoded RGBA pixels, row-major, four interleaved 8-bit channels per pixel."""

    width: int
    height: int
    pixels: bytes

    def __post_init__(self):
        if self.width <= 0 or self.height <= 0:
            raise InputError(f"Image must have positive dimensions, got {self.width}x{self.height}")
        if not isinstance(self.pixels, bytes):
            object.__setattr__(self, "pixels", bytes(self.pixels))
        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            raise InputError(f"Expected {expected} bytes for {self.width}x{self.height} RGBA, got {len(self.pixels)}")

    @classmethod
    def from_array(cls, arr: np.ndarray) -> "PixelBuffer":
        """Build a buffer from a (height, width, 4) array; values are clamped to 0-255."""
        arr = np.asarray(arr)
        if arr.ndim != 3 or arr.shape[2] != CHANNELS:
            raise InputError(f"Expected an array of shape (height, width, 4), got {arr.shape}")
        data = np.clip(arr, 0, 255).astype(np.uint8)
        return cls(width=arr.shape[1], height=arr.shape[0], pixels=data.tobytes())

    @classmethod
    def from_image(cls, image: Image.Image) -> "PixelBuffer":
        image = image.convert("RGBA")
        return cls(width=image.width, height=image.height, pixels=image.tobytes())

    def as_array(self) -> np.ndarray:
        """Read-only (height, width, 4) uint8 view of the pixels."""
        return np.frombuffer(self.pixels, dtype=np.uint8).reshape(self.height, self.width, CHANNELS)

    def to_image(self) -> Image.Image:
        return Image.frombytes("RGBA", (self.width, self.height), self.pixels)
