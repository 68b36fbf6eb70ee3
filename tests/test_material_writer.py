import pytest

from mu_exporter.core.material_writer import SHADER_RECIPES, MaterialWriter, resolve_shader
from mu_exporter.core.schema import Material, ShaderType, Texture, TextureSlot, TextureType

from helpers import MuReader


def encode(ctx, mat):
    start = ctx.binw.stream.tell()
    MaterialWriter(ctx).write_material(ctx.binw, mat)
    return ctx.binw.stream.getvalue()[start:]


@pytest.mark.parametrize("name, expected", [
    ("Diffuse", ShaderType.DIFFUSE),
    ("Specular", ShaderType.SPECULAR),
    ("KSP/Specular", ShaderType.SPECULAR),
    ("KSP/Bumped", ShaderType.BUMPED),
    ("KSP/Bumped Specular", ShaderType.BUMPED_SPECULAR),
    ("KSP/Emissive/Diffuse", ShaderType.EMISSIVE),
    ("KSP/Emissive/Specular", ShaderType.EMISSIVE_SPECULAR),
    ("KSP/Emissive/Bumped Specular", ShaderType.EMISSIVE_BUMPED_SPECULAR),
    ("KSP/Alpha/Cutoff", ShaderType.ALPHA_CUTOUT),
    ("KSP/Alpha/Cutoff Bumped", ShaderType.ALPHA_CUTOUT_BUMPED),
    ("AlphaCutoutBumped", ShaderType.ALPHA_CUTOUT_BUMPED),
    ("Legacy Shaders/Whatever", ShaderType.DIFFUSE),
    ("", ShaderType.DIFFUSE),
])
def test_resolve_shader(name, expected):
    assert resolve_shader(name) == expected


def test_every_shader_type_but_custom_has_a_recipe():
    assert set(SHADER_RECIPES) == set(ShaderType) - {ShaderType.CUSTOM}


def test_unknown_shader_encodes_exactly_like_diffuse(memory_ctx):
    tex = Texture("hull")
    slot = TextureSlot(tex, scale=(2, 2), offset=(0.5, 0))
    unknown = encode(memory_ctx, Material("M", shader="Some/Unknown", main_texture=slot))
    diffuse = encode(memory_ctx, Material("M", shader="Diffuse", main_texture=slot))
    assert unknown == diffuse


def test_unbound_slot_writes_minus_one_and_uv_transform(memory_ctx):
    data = encode(memory_ctx, Material("Plain"))
    r = MuReader(data)
    assert r.string() == "Plain"
    assert r.int() == ShaderType.DIFFUSE
    assert r.int() == -1
    assert r.floats(2) == (1.0, 1.0)
    assert r.floats(2) == (0.0, 0.0)
    assert r.at_end()
    assert len(memory_ctx.textures) == 0


def test_bumped_specular_field_order(memory_ctx):
    main, bump = Texture("main"), Texture("bump")
    mat = Material(
        "Hull",
        shader="KSP/Bumped Specular",
        main_texture=TextureSlot(main),
        normal_map=TextureSlot(bump, scale=(3, 4)),
        spec_color=(1, 0, 0, 1),
        shininess=0.25,
    )
    r = MuReader(encode(memory_ctx, mat))
    assert r.string() == "Hull"
    assert r.int() == ShaderType.BUMPED_SPECULAR
    assert r.int() == 0
    r.floats(4)
    assert r.int() == 1
    assert r.floats(2) == (3.0, 4.0)
    assert r.floats(2) == (0.0, 0.0)
    assert r.floats(4) == (1.0, 0.0, 0.0, 1.0)
    assert r.float() == 0.25
    assert r.at_end()

    assert memory_ctx.textures[0].kind == TextureType.TEXTURE
    assert memory_ctx.textures[1].kind == TextureType.NORMAL_MAP


def test_emissive_specular_field_order(memory_ctx):
    mat = Material("Glow", shader="KSP/Emissive/Specular", shininess=0.5,
                   emissive_color=(0, 1, 0, 1))
    r = MuReader(encode(memory_ctx, mat))
    r.string()
    assert r.int() == ShaderType.EMISSIVE_SPECULAR
    r.int(), r.floats(4)                        # main texture
    assert r.floats(4) == (0.5, 0.5, 0.5, 1.0)  # spec color
    assert r.float() == 0.5
    assert r.int() == -1                        # emissive texture
    r.floats(4)
    assert r.floats(4) == (0.0, 1.0, 0.0, 1.0)
    assert r.at_end()


def test_alpha_cutout_writes_cutoff(memory_ctx):
    r = MuReader(encode(memory_ctx, Material("Fence", shader="KSP/Alpha/Cutoff", cutoff=0.75)))
    r.string()
    assert r.int() == ShaderType.ALPHA_CUTOUT
    r.int(), r.floats(4)
    assert r.float() == 0.75
    assert r.at_end()


def test_shared_texture_keeps_one_pool_slot(memory_ctx):
    tex = Texture("shared")
    encode(memory_ctx, Material("A", main_texture=TextureSlot(tex)))
    encode(memory_ctx, Material("B", main_texture=TextureSlot(tex, offset=(1, 1))))
    assert len(memory_ctx.textures) == 1


def test_write_materials_skips_empty_pool(memory_ctx):
    assert MaterialWriter(memory_ctx).write_materials() is False
    assert memory_ctx.binw.stream.getvalue() == b""


def test_write_materials_section(memory_ctx):
    memory_ctx.add_material(Material("A"))
    memory_ctx.add_material(Material("B", main_texture=TextureSlot(Texture("skin"))))
    assert MaterialWriter(memory_ctx).write_materials() is True

    r = MuReader(memory_ctx.binw.stream.getvalue())
    assert r.int() == 10
    assert r.int() == 2
    assert r.string() == "A"
    r.int(), r.int(), r.floats(4)
    assert r.string() == "B"
    r.int()
    assert r.int() == 0
    r.floats(4)
    # textures section, copy disabled -> texture names
    assert r.int() == 12
    assert r.int() == 1
    assert r.string() == "skin"
    assert r.int() == TextureType.TEXTURE
    assert r.at_end()
