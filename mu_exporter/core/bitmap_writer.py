# -*- coding: utf-8 -*-
"""
Mu Exporter - Custom Bitmap Writer (.mbm)

Layout:
- signature string "KSP"
- width, height, texture kind, bit depth (i32)
- pixel bytes R,G,B[,A]; rows ordered bottom-to-top
"""

from __future__ import annotations
import numpy as np
from PIL import Image

from .binary_writer import BinaryWriter
from .schema import TextureType
from ..config.constants import BITMAP_SIGNATURE, BITMAP_DEPTH_RGB, BITMAP_DEPTH_RGBA


_ALPHA_MODES = ("RGBA", "LA", "PA", "RGBa", "La")
# 16-bit grayscale, typical for height maps; convert("RGB") clips these to 0 or 255
WIDE_GRAY_MODES = ("I;16", "I;16L", "I;16B", "I")


def detect_bit_depth(image: Image.Image) -> int:
    """32 for pixel formats carrying alpha, otherwise 24"""
    if image.mode in _ALPHA_MODES or "transparency" in image.info:
        return BITMAP_DEPTH_RGBA
    return BITMAP_DEPTH_RGB


def wide_gray_to_float(image: Image.Image) -> np.ndarray:
    """16-bit grayscale image -> (H, W) float array in [0, 1], top-down"""
    return np.clip(np.asarray(image, dtype=np.float64) / 65535.0, 0.0, 1.0)


def image_to_rows_bottom_up(image: Image.Image, depth: int) -> np.ndarray:
    if image.mode in WIDE_GRAY_MODES:
        gray = np.rint(wide_gray_to_float(image) * 255.0).astype(np.uint8)
        image = Image.fromarray(gray)
    mode = "RGBA" if depth == BITMAP_DEPTH_RGBA else "RGB"
    pixels = np.asarray(image.convert(mode), dtype=np.uint8)
    return np.flipud(pixels)


def write_bitmap(path: str, pixels: np.ndarray, kind: TextureType, depth: int) -> None:
    """
    pixels: (H, W, 3|4) uint8 array already in bottom-up row order
    """
    channels = 4 if depth == BITMAP_DEPTH_RGBA else 3
    if pixels.ndim != 3 or pixels.shape[2] != channels:
        raise ValueError(f"expected (H, W, {channels}) pixels for {depth}-bit bitmap, got {pixels.shape}")
    height, width = pixels.shape[:2]

    with open(path, "wb") as f:
        binw = BinaryWriter(f)
        binw.write_string(BITMAP_SIGNATURE)
        binw.write_int(width)
        binw.write_int(height)
        binw.write_int(int(kind))
        binw.write_int(depth)
        binw.write_bytes(np.ascontiguousarray(pixels, dtype=np.uint8).tobytes())
