import os
from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from PIL import Image

from mu_exporter import ExportJob, ExportSettings, export, export_many
from mu_exporter.core.errors import SceneValidationError, TextureExportError
from mu_exporter.core.schema import (
    EntryType,
    Material,
    Mesh,
    MeshRenderer,
    SceneNode,
    ShaderType,
    Texture,
    TextureSlot,
    TextureType,
)
from mu_exporter.exporters.mu_exporter import MuExporter
from mu_exporter.validators.hex_diff import HexDiff

from helpers import MuReader


TRI = [(0, 0, 0), (1, 0, 0), (0, 1, 0)]


def build_scene(main_tex, bump_tex):
    hull = Material("Hull", shader="KSP/Bumped",
                    main_texture=TextureSlot(main_tex), normal_map=TextureSlot(bump_tex))
    trim = Material("Trim", main_texture=TextureSlot(main_tex))

    root = SceneNode("root", renderer=MeshRenderer([hull]),
                     mesh=Mesh(vertices=TRI, submeshes=[[0, 1, 2]]))
    child = root.add_child(SceneNode("child", position=(0, 1, 0)))
    child.renderer = MeshRenderer([trim, hull])
    return root


def run_export(out_dir, root, quiet_logger, **kwargs):
    options = dict(copy_textures=False, convert_textures=False, rename_textures=False)
    options.update(kwargs)
    return export("Part", str(out_dir), "model", ".mu", root, logger=quiet_logger, **options)


def test_end_to_end_layout(tmp_path, quiet_logger):
    main, bump = Texture("main"), Texture("bump")
    result = run_export(tmp_path, build_scene(main, bump), quiet_logger)

    assert result.success
    assert result.error is None
    assert result.path == os.path.join(str(tmp_path), "model.mu")
    assert result.files == [result.path]

    r = MuReader.from_file(result.path)
    assert (r.int(), r.int(), r.string()) == (76543, 0, "Part")

    # root
    assert r.string() == "root"
    r.floats(11)
    assert r.int() == EntryType.TAG_AND_LAYER
    assert (r.string(), r.int()) == ("Untagged", 0)
    assert r.int() == EntryType.MESH_FILTER
    assert r.int() == EntryType.MESH_START
    r.int(), r.int(), r.int(), r.floats(9)
    assert r.int() == EntryType.MESH_TRIANGLES
    r.int(), r.raw(12)
    assert r.int() == EntryType.MESH_END
    assert r.int() == EntryType.MESH_RENDERER
    assert (r.int(), r.int()) == (1, 0)

    # child
    assert r.int() == EntryType.CHILD_TRANSFORM_START
    assert r.string() == "child"
    assert r.floats(3) == (0.0, 1.0, 0.0)
    r.floats(8)
    assert r.int() == EntryType.TAG_AND_LAYER
    r.string(), r.int()
    assert r.int() == EntryType.MESH_RENDERER
    assert (r.int(), r.int(), r.int()) == (2, 1, 0)
    assert r.int() == EntryType.CHILD_TRANSFORM_END

    # materials
    assert (r.int(), r.int()) == (EntryType.MATERIALS, 2)
    assert r.string() == "Hull"
    assert r.int() == ShaderType.BUMPED
    assert r.int() == 0
    r.floats(4)
    assert r.int() == 1
    r.floats(4)
    assert r.string() == "Trim"
    assert r.int() == ShaderType.DIFFUSE
    assert r.int() == 0
    r.floats(4)

    # textures
    assert (r.int(), r.int()) == (EntryType.TEXTURES, 2)
    assert (r.string(), r.int()) == ("main", TextureType.TEXTURE)
    assert (r.string(), r.int()) == ("bump", TextureType.NORMAL_MAP)
    assert r.at_end()

    assert result.report["nodes"]["count"] == 2
    assert result.report["materials"]["count"] == 2


def test_no_materials_means_no_materials_section(tmp_path, quiet_logger):
    result = run_export(tmp_path, SceneNode("empty"), quiet_logger)
    r = MuReader.from_file(result.path)
    r.int(), r.int(), r.string()
    r.string(), r.floats(11)
    r.int(), r.string(), r.int()
    assert r.at_end()


def test_materials_without_textures_skip_textures_section(tmp_path, quiet_logger):
    root = SceneNode("root", renderer=MeshRenderer([Material("Plain")]))
    result = run_export(tmp_path, root, quiet_logger)
    data = open(result.path, "rb").read()
    r = MuReader(data)
    r.int(), r.int(), r.string(), r.string(), r.floats(11), r.int(), r.string(), r.int()
    assert r.int() == EntryType.MESH_RENDERER
    r.int(), r.int()
    assert (r.int(), r.int()) == (EntryType.MATERIALS, 1)
    r.string(), r.int(), r.int(), r.floats(4)
    assert r.at_end()


def test_output_independent_of_directory(tmp_path, make_png, quiet_logger):
    main = Texture("main", make_png("main.png", np.full((2, 2, 3), 120)))
    bump = Texture("bump", make_png("bump.png", np.full((2, 2, 3), 60)))
    first = run_export(tmp_path / "one", build_scene(main, bump), quiet_logger,
                       copy_textures=True, convert_textures=True)
    second = run_export(tmp_path / "two" / "nested", build_scene(main, bump), quiet_logger,
                        copy_textures=True, convert_textures=True)

    assert first.success and second.success
    assert len(first.files) == 3
    for a, b in zip(first.files, second.files):
        assert os.path.basename(a) == os.path.basename(b)
        assert HexDiff().compare_files(a, b)["same"]


def test_texture_failure_reports_and_keeps_partial_file(tmp_path, quiet_logger):
    missing = Texture("gone", str(tmp_path / "nowhere.png"))
    root = SceneNode("root", renderer=MeshRenderer([Material("M", main_texture=TextureSlot(missing))]))
    out_dir = tmp_path / "out"
    result = run_export(out_dir, root, quiet_logger, copy_textures=True)

    assert not result.success
    assert isinstance(result.error, TextureExportError)
    assert os.path.exists(result.path)
    # closed and flushed: header is readable
    assert MuReader.from_file(result.path).int() == 76543

    assert result.discard_partial() == [result.path]
    assert not os.path.exists(result.path)


def test_unwritable_directory_raises(tmp_path, quiet_logger):
    blocker = tmp_path / "file"
    blocker.write_text("not a directory")
    with pytest.raises(OSError):
        run_export(blocker / "sub", SceneNode("root"), quiet_logger)


def test_invalid_scene_rejected_before_writing(tmp_path, quiet_logger):
    out_dir = tmp_path / "out"
    result = run_export(out_dir, SceneNode("root", layer=-1), quiet_logger)
    assert not result.success
    assert isinstance(result.error, SceneValidationError)
    assert not out_dir.exists()


def test_successful_result_discard_is_noop(tmp_path, quiet_logger):
    result = run_export(tmp_path, SceneNode("root"), quiet_logger)
    assert result.discard_partial() == []
    assert os.path.exists(result.path)


def test_audit_log_written(tmp_path, quiet_logger):
    settings = ExportSettings("Part", str(tmp_path), "model", ".mu", copy_textures=False)
    settings.write_audit = True
    result = MuExporter(logger=quiet_logger).export(SceneNode("root"), settings)
    assert result.success
    text = (tmp_path / "audit.log").read_text(encoding="utf-8")
    assert "Export succeeded" in text
    assert quiet_logger.audit_logger is None


def test_export_many_isolates_jobs(tmp_path, quiet_logger):
    blocker = tmp_path / "file"
    blocker.write_text("x")
    shared = Material("Shared")
    jobs = [
        ExportJob(SceneNode("a", renderer=MeshRenderer([shared])),
                  ExportSettings("A", str(tmp_path / "a"), "a", ".mu", copy_textures=False)),
        ExportJob(SceneNode("b"), ExportSettings("B", str(blocker / "b"), "b", ".mu")),
        ExportJob(SceneNode("c", renderer=MeshRenderer([Material("Other"), shared])),
                  ExportSettings("C", str(tmp_path / "c"), "c", ".mu", copy_textures=False)),
    ]
    results = export_many(jobs, logger=quiet_logger)

    assert [r.success for r in results] == [True, False, True]
    assert isinstance(results[1].error, OSError)
    # each job starts from empty pools
    assert results[0].report["materials"]["count"] == 1
    assert results[2].report["materials"]["count"] == 2


def test_single_node_with_copied_texture(tmp_path, make_png, quiet_logger):
    tex = Texture("T", make_png("t_source.png", np.zeros((1, 1, 3))))
    root = SceneNode("root", mesh=Mesh(),
                     renderer=MeshRenderer([Material("M", main_texture=TextureSlot(tex))]))
    out_dir = tmp_path / "out"
    result = run_export(out_dir, root, quiet_logger, copy_textures=True)

    assert result.success
    assert result.files == [result.path, str(out_dir / "T.png")]

    r = MuReader.from_file(result.path)
    assert (r.int(), r.int(), r.string()) == (76543, 0, "Part")
    assert r.string() == "root"
    assert r.floats(11) == (0.0, 0.0, 0.0, 0.0, 0.0, 0.0, 1.0, 1.0, 1.0, 1.0, 1.0)
    assert (r.int(), r.string(), r.int()) == (EntryType.TAG_AND_LAYER, "Untagged", 0)
    assert r.int() == EntryType.MESH_FILTER
    assert (r.int(), r.int(), r.int()) == (EntryType.MESH_START, 0, 0)
    assert r.int() == EntryType.MESH_VERTS
    assert r.int() == EntryType.MESH_END
    assert (r.int(), r.int(), r.int()) == (EntryType.MESH_RENDERER, 1, 0)
    assert (r.int(), r.int()) == (EntryType.MATERIALS, 1)
    assert (r.string(), r.int(), r.int()) == ("M", ShaderType.DIFFUSE, 0)
    assert r.floats(4) == (1.0, 1.0, 0.0, 0.0)
    assert (r.int(), r.int()) == (EntryType.TEXTURES, 1)
    assert (r.string(), r.int()) == ("T.png", TextureType.TEXTURE)
    assert r.at_end()


def test_texture_already_in_output_dir(tmp_path, quiet_logger):
    out_dir = tmp_path / "out"
    out_dir.mkdir()
    src = out_dir / "hull.png"
    Image.fromarray(np.full((2, 2, 3), 50, dtype=np.uint8)).save(src)
    before = src.read_bytes()

    tex = Texture("hull", str(src))
    root = SceneNode("root", renderer=MeshRenderer([Material("M", main_texture=TextureSlot(tex))]))
    result = run_export(out_dir, root, quiet_logger, copy_textures=True)

    assert result.success
    assert result.files == [result.path]
    assert src.read_bytes() == before


def test_concurrent_exports_do_not_share_state(tmp_path, quiet_logger):
    def build(tag):
        shared = Material(tag + "_shared")
        root = SceneNode(tag, renderer=MeshRenderer([shared, Material(tag + "_other")]))
        for i in range(25):
            root.add_child(SceneNode("%s%02d" % (tag, i), renderer=MeshRenderer([shared])))
        return root

    tags = ["a", "b", "c", "d"]
    expected = {tag: run_export(tmp_path / "serial" / tag, build(tag), quiet_logger) for tag in tags}

    with ThreadPoolExecutor(max_workers=len(tags)) as pool:
        futures = {tag: pool.submit(run_export, tmp_path / "threaded" / tag, build(tag), quiet_logger)
                   for tag in tags}
        results = {tag: f.result() for tag, f in futures.items()}

    for tag in tags:
        assert results[tag].success
        assert results[tag].report["materials"]["count"] == 2
        assert HexDiff().compare_files(expected[tag].path, results[tag].path)["same"]
