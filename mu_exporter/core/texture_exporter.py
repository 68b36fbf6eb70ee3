# -*- coding: utf-8 -*-
"""
Mu Exporter - Texture Export Pipeline

Three modes, selected by ExportSettings:
- copy off:              reference the texture by its own name, touch nothing on disk
- copy on, convert off:  copy the source file (optionally renamed base+NNN); copied
                         height maps flagged for normal-map conversion are rewritten in place
- copy on, convert on:   re-encode into a .mbm bitmap at base+NNN.mbm; normal maps are
                         synthesized from grayscale height first

Runs after the whole tree has been walked, once per pooled texture.
"""

from __future__ import annotations
import numpy as np
from PIL import Image

from . import normal_map
from .bitmap_writer import (
    WIDE_GRAY_MODES,
    detect_bit_depth,
    image_to_rows_bottom_up,
    wide_gray_to_float,
    write_bitmap,
)
from .context import ExportContext
from .resource_pool import TextureEntry
from .schema import EntryType, TextureType
from ..config.constants import (
    EXT_BITMAP,
    TEXTURE_INDEX_DIGITS,
    BITMAP_DEPTH_RGBA,
    BITMAP_NORMAL_STRENGTH_FACTOR,
)
from ..utils.file_manager import FileManager


def indexed_name(base_filename: str, index: int, ext: str) -> str:
    """model + 007 + .ext"""
    return "{0}{1:0{2}d}.{3}".format(base_filename, index, TEXTURE_INDEX_DIGITS, ext)


class TextureExporter:

    def __init__(self, ctx: ExportContext):
        assert ctx is not None and ctx.binw is not None
        self.ctx = ctx
        self.settings = ctx.settings

    # ====== Public: textures section ======
    def write_textures(self) -> None:
        """
        Textures section layout:
        - Textures tag, count (i32)
        - per texture: output name (string), kind (i32)
        """
        binw = self.ctx.binw
        binw.write_entry(EntryType.TEXTURES)
        binw.write_int(len(self.ctx.textures))

        for index, entry in enumerate(self.ctx.textures):
            name = self.export_texture(index, entry)
            binw.write_string(name)
            binw.write_int(int(entry.kind))

        self.ctx.add_report_stat("textures", "count", len(self.ctx.textures))

    # ====== Per-texture dispatch ======
    def export_texture(self, index: int, entry: TextureEntry) -> str:
        """Run the selected mode for one texture; returns the name recorded in the model file"""
        if not self.settings.copy_textures:
            return entry.texture.name

        if self.settings.convert_textures:
            return self._convert(index, entry)
        return self._copy(index, entry)

    # ====== Copy mode ======
    def _copy(self, index: int, entry: TextureEntry) -> str:
        texture = entry.texture
        source = self.ctx.resolver.source_path(texture)
        ext = FileManager.get_file_extension(source)

        if self.settings.rename_textures:
            name = indexed_name(self.settings.base_filename, index, ext)
        else:
            name = "{0}.{1}".format(texture.name, ext)

        destination = FileManager.output_path(self.settings.output_dir, name)
        if FileManager.is_same_file(source, destination):
            # source already in place: no copy, no rewrite, not an export output
            self._log_info(f"Texture: '{source}' already in output directory")
            return name

        self._log_info(f"Texture: '{source}' >> '{name}'")
        FileManager.copy_file(source, destination)
        self.ctx.written_files.append(destination)

        if entry.kind == TextureType.NORMAL_MAP and texture.import_settings.convert_to_normal_map:
            self._log_info(f"Converting '{destination}' to a normal map")
            rewrite_as_normal_map(destination, texture.import_settings.heightmap_scale)

        return name

    # ====== Convert mode ======
    def _convert(self, index: int, entry: TextureEntry) -> str:
        texture = entry.texture
        name = indexed_name(self.settings.base_filename, index, EXT_BITMAP)
        destination = FileManager.output_path(self.settings.output_dir, name)
        self._log_info(f"Texture: '{texture.source_path}' >> '{name}'")

        image = self.ctx.resolver.load_image(texture)

        # kind alone triggers synthesis; import_settings.convert_to_normal_map only applies to copy mode
        if entry.kind == TextureType.NORMAL_MAP:
            strength = texture.import_settings.heightmap_scale * BITMAP_NORMAL_STRENGTH_FACTOR
            pixels = bitmap_normal_pixels(image, strength)
            depth = BITMAP_DEPTH_RGBA
        else:
            depth = detect_bit_depth(image)
            pixels = image_to_rows_bottom_up(image, depth)

        write_bitmap(destination, pixels, entry.kind, depth)
        self.ctx.written_files.append(destination)
        return name

    def _log_info(self, message: str) -> None:
        if self.ctx.logger:
            self.ctx.logger.info(message)


# ====== Normal-map helpers ======

def height_from_image(image: Image.Image) -> np.ndarray:
    """
    Bottom-up (H, W) height field in [0, 1]; 16-bit grayscale keeps its full precision.
    """
    if image.mode in WIDE_GRAY_MODES:
        return np.flipud(wide_gray_to_float(image))
    rows = np.flipud(np.asarray(image.convert("RGB"), dtype=np.uint8))
    return normal_map.height_from_pixels(rows)


def bitmap_normal_pixels(image: Image.Image, strength: float) -> np.ndarray:
    """
    Bottom-up RGBA bytes for a bitmap normal map synthesized from the image's grayscale.
    """
    normals = normal_map.synthesize_normals(height_from_image(image), strength)
    return normal_map.to_bytes(normal_map.encode_bitmap_layout(normals))


def rewrite_as_normal_map(path: str, strength: float) -> None:
    """
    Replace a copied height map with an RGB PNG normal map (copy layout), in place.
    """
    with Image.open(path) as img:
        height = height_from_image(img)

    normals = normal_map.synthesize_normals(height, strength)
    colors = normal_map.encode_copy_layout(normals)[..., :3]
    out = np.flipud(normal_map.to_bytes(colors))

    Image.fromarray(np.ascontiguousarray(out)).save(path, format="PNG")
