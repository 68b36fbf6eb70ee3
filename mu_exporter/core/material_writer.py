# -*- coding: utf-8 -*-
"""
Mu Exporter - Material Writer

- Shader identifier -> ShaderType through a static lookup table
- ShaderType -> ordered field recipe (textures, colors, scalars)
- Unknown shader identifiers encode exactly like Diffuse; this is not an error
- Every texture field writes pool index (or -1 when unbound) followed by UV scale and offset
- Texture pool entries are registered here, in the order materials reference them
"""

from __future__ import annotations
from typing import Dict, Tuple

from .binary_writer import BinaryWriter
from .context import ExportContext
from .schema import EntryType, Material, ShaderType, TextureSlot, TextureType
from .texture_exporter import TextureExporter
from ..config.constants import UNBOUND_TEXTURE_INDEX


# ====== Shader lookup ======
SHADER_TABLE: Dict[str, ShaderType] = {
    # canonical tags
    "Diffuse": ShaderType.DIFFUSE,
    "Specular": ShaderType.SPECULAR,
    "Bumped": ShaderType.BUMPED,
    "BumpedSpecular": ShaderType.BUMPED_SPECULAR,
    "Emissive": ShaderType.EMISSIVE,
    "EmissiveSpecular": ShaderType.EMISSIVE_SPECULAR,
    "EmissiveBumpedSpecular": ShaderType.EMISSIVE_BUMPED_SPECULAR,
    "AlphaCutout": ShaderType.ALPHA_CUTOUT,
    "AlphaCutoutBumped": ShaderType.ALPHA_CUTOUT_BUMPED,

    # host shader names
    "KSP/Specular": ShaderType.SPECULAR,
    "KSP/Bumped": ShaderType.BUMPED,
    "KSP/Bumped Specular": ShaderType.BUMPED_SPECULAR,
    "KSP/Emissive/Diffuse": ShaderType.EMISSIVE,
    "KSP/Emissive/Specular": ShaderType.EMISSIVE_SPECULAR,
    "KSP/Emissive/Bumped Specular": ShaderType.EMISSIVE_BUMPED_SPECULAR,
    "KSP/Alpha/Cutoff": ShaderType.ALPHA_CUTOUT,
    "KSP/Alpha/Cutoff Bumped": ShaderType.ALPHA_CUTOUT_BUMPED,
}


# ====== Field recipes ======
# (kind, material attribute[, texture type])
_MAIN = ("tex", "main_texture", TextureType.TEXTURE)
_NORMAL = ("tex", "normal_map", TextureType.NORMAL_MAP)
_EMISSIVE = ("tex", "emissive_texture", TextureType.TEXTURE)
_SPEC_COLOR = ("color", "spec_color")
_SHININESS = ("float", "shininess")
_EMISSIVE_COLOR = ("color", "emissive_color")
_CUTOFF = ("float", "cutoff")

SHADER_RECIPES: Dict[ShaderType, Tuple[tuple, ...]] = {
    ShaderType.DIFFUSE: (_MAIN,),
    ShaderType.SPECULAR: (_MAIN, _SPEC_COLOR, _SHININESS),
    ShaderType.BUMPED: (_MAIN, _NORMAL),
    ShaderType.BUMPED_SPECULAR: (_MAIN, _NORMAL, _SPEC_COLOR, _SHININESS),
    ShaderType.EMISSIVE: (_MAIN, _EMISSIVE, _EMISSIVE_COLOR),
    ShaderType.EMISSIVE_SPECULAR: (_MAIN, _SPEC_COLOR, _SHININESS, _EMISSIVE, _EMISSIVE_COLOR),
    ShaderType.EMISSIVE_BUMPED_SPECULAR: (_MAIN, _NORMAL, _SPEC_COLOR, _SHININESS, _EMISSIVE, _EMISSIVE_COLOR),
    ShaderType.ALPHA_CUTOUT: (_MAIN, _CUTOFF),
    ShaderType.ALPHA_CUTOUT_BUMPED: (_MAIN, _NORMAL, _CUTOFF),
}


def resolve_shader(shader_name: str) -> ShaderType:
    """Table lookup; anything unrecognized is Diffuse"""
    return SHADER_TABLE.get(shader_name, ShaderType.DIFFUSE)


# ====== Material writer ======
class MaterialWriter:

    def __init__(self, ctx: ExportContext):
        assert ctx is not None and ctx.binw is not None
        self.ctx = ctx

    # ====== Public: materials section ======
    def write_materials(self) -> bool:
        """
        Materials section layout:
        - Materials tag, count (i32)
        - repeated material payloads (flushed one by one)
        - textures section, when any material bound a texture

        Returns False (writes nothing) when the material pool is empty.
        """
        ctx = self.ctx
        if len(ctx.materials) == 0:
            return False

        binw = ctx.binw
        binw.write_entry(EntryType.MATERIALS)
        binw.write_int(len(ctx.materials))
        for mat in ctx.materials:
            self.write_material(binw, mat)
            binw.flush()

        ctx.add_report_stat("materials", "count", len(ctx.materials))

        if len(ctx.textures) > 0:
            TextureExporter(ctx).write_textures()
            binw.flush()
        return True

    # ====== Single material ======
    def write_material(self, binw: BinaryWriter, mat: Material) -> None:
        """
        Material payload:
        - name (string), shader type (i32)
        - recipe fields in table order
        """
        shader_type = resolve_shader(mat.shader)
        if mat.shader not in SHADER_TABLE and self.ctx.logger:
            self.ctx.logger.info(f"Shader '{mat.shader}' not recognized, writing as Diffuse", mat.name)

        binw.write_string(mat.name)
        binw.write_int(int(shader_type))

        for field_spec in SHADER_RECIPES[shader_type]:
            kind, attr = field_spec[0], field_spec[1]
            value = getattr(mat, attr)
            if kind == "tex":
                self._write_texture_slot(binw, value, field_spec[2])
            elif kind == "color":
                binw.write_color(value)
            else:
                binw.write_float(value)

    def _write_texture_slot(self, binw: BinaryWriter, slot: TextureSlot, texture_type: TextureType) -> None:
        """
        Texture field: pool index (i32, -1 when unbound), scale (2 f32), offset (2 f32).
        Scale and offset are present whether or not a texture is bound.
        """
        if slot is None:
            slot = TextureSlot()

        if slot.texture is not None:
            binw.write_int(self.ctx.textures.add_or_get(slot.texture, texture_type))
        else:
            binw.write_int(UNBOUND_TEXTURE_INDEX)

        binw.write_vector2(slot.scale)
        binw.write_vector2(slot.offset)
