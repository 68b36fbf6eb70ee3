# File: core/normal_map.py
# Purpose: Normal-map synthesis from grayscale height data (Sobel gradients)
# Notes:
# - Arrays are indexed [y, x]; the neighbour at y-1 is "top", y+1 is "bottom"
# - Out-of-range neighbours clamp to the nearest edge pixel
# - Two output channel layouts exist and stay distinct:
#     copy layout   (used when rewriting a copied file)   RGBA = (1-x, 1-z, 1-y, 1)
#     bitmap layout (used when converting to a bitmap)    RGBA = (1-y, 1-z, 1, 1-x)

import numpy as np

from ..config.constants import GRAYSCALE_WEIGHTS


def grayscale(rgb: np.ndarray) -> np.ndarray:
    """
    Luminance of an (H, W, 3+) float array in [0, 1] -> (H, W) float array.
    """
    rgb = np.asarray(rgb, dtype=np.float64)
    r, g, b = GRAYSCALE_WEIGHTS
    return rgb[..., 0] * r + rgb[..., 1] * g + rgb[..., 2] * b


def sobel_gradients(height: np.ndarray):
    """
    Horizontal and vertical Sobel responses of an (H, W) height field.

        dX = (TR + 2R + BR) - (TL + 2L + BL)
        dY = (BL + 2B + BR) - (TL + 2T + TR)
    """
    h = np.asarray(height, dtype=np.float64)
    if h.ndim != 2:
        raise ValueError(f"height field must be 2D, got shape {h.shape}")

    p = np.pad(h, 1, mode="edge")
    rows, cols = h.shape

    def at(dx, dy):
        return p[1 + dy:1 + dy + rows, 1 + dx:1 + dx + cols]

    tl, t, tr = at(-1, -1), at(0, -1), at(1, -1)
    l, r = at(-1, 0), at(1, 0)
    bl, b, br = at(-1, 1), at(0, 1), at(1, 1)

    dx = (tr + 2.0 * r + br) - (tl + 2.0 * l + bl)
    dy = (bl + 2.0 * b + br) - (tl + 2.0 * t + tr)
    return dx, dy


def synthesize_normals(height: np.ndarray, strength: float) -> np.ndarray:
    """
    Per-pixel normals (H, W, 3) with components remapped from [-1, 1] to [0, 1].

    The vector (dX, strength, dY) is normalised; a zero vector stays zero and
    therefore maps to 0.5 on every component.
    """
    dx, dy = sobel_gradients(height)
    n = np.stack([dx, np.full_like(dx, float(strength)), dy], axis=-1)

    length = np.linalg.norm(n, axis=-1, keepdims=True)
    n = np.divide(n, length, out=np.zeros_like(n), where=length > 1e-5)

    return n * 0.5 + 0.5


def encode_copy_layout(normals: np.ndarray) -> np.ndarray:
    """RGBA = (1-x, 1-z, 1-y, 1)"""
    x, y, z = normals[..., 0], normals[..., 1], normals[..., 2]
    return np.stack([1.0 - x, 1.0 - z, 1.0 - y, np.ones_like(x)], axis=-1)


def encode_bitmap_layout(normals: np.ndarray) -> np.ndarray:
    """RGBA = (1-y, 1-z, 1, 1-x)"""
    x, y, z = normals[..., 0], normals[..., 1], normals[..., 2]
    return np.stack([1.0 - y, 1.0 - z, np.ones_like(x), 1.0 - x], axis=-1)


def to_bytes(colors: np.ndarray) -> np.ndarray:
    """Float colors in [0, 1] -> uint8, rounded to nearest"""
    return np.rint(np.clip(colors, 0.0, 1.0) * 255.0).astype(np.uint8)


def pixels_to_float(pixels: np.ndarray) -> np.ndarray:
    """uint8 pixel array -> float array in [0, 1]"""
    return np.asarray(pixels, dtype=np.float64) / 255.0


def height_from_pixels(pixels: np.ndarray) -> np.ndarray:
    """
    Grayscale height field from an (H, W) or (H, W, C) uint8 pixel array.
    """
    f = pixels_to_float(pixels)
    if f.ndim == 2:
        return f
    if f.shape[-1] < 3:
        return f[..., 0]
    return grayscale(f)
