# -*- coding: utf-8 -*-
"""
Mu Exporter - Node Writer

Depth-first walk of the scene tree. Per node, in this order:
- transform (no tag): name, position, rotation, scale
- TagAndLayer
- at most one collider
- MeshFilter + mesh block
- MeshRenderer (material pool indices)
- SkinnedMeshRenderer
- Animation
- Light
- each child wrapped in ChildTransformStart / ChildTransformEnd

Materials are pooled as renderers reference them; the pool is encoded after the walk.
"""

from __future__ import annotations

from .animation_writer import AnimationWriter
from .binary_writer import BinaryWriter
from .collision_writer import CollisionWriter
from .context import ExportContext
from .mesh_writer import write_mesh
from .schema import EntryType, Light, MeshRenderer, SceneNode, SkinnedMeshRenderer


class NodeWriter:

    def __init__(self, ctx: ExportContext):
        assert ctx is not None and ctx.binw is not None
        self.ctx = ctx
        self.binw: BinaryWriter = ctx.binw
        self.colliders = CollisionWriter(self.binw)
        self.animations = AnimationWriter(self.binw)

    def write_node(self, node: SceneNode) -> None:
        binw = self.binw
        self.ctx.bump_stat("nodes", "count")

        self._write_transform(node)

        binw.write_entry(EntryType.TAG_AND_LAYER)
        binw.write_string(node.tag)
        binw.write_int(node.layer)

        if self.colliders.write_colliders(node.colliders) is not None:
            self.ctx.bump_stat("colliders", "count")

        if node.mesh is not None:
            binw.write_entry(EntryType.MESH_FILTER)
            write_mesh(binw, node.mesh)
            self.ctx.bump_stat("meshes", "count")

        if node.renderer is not None:
            self._write_renderer(node.renderer)

        if node.skinned_renderer is not None:
            self._write_skinned_renderer(node.skinned_renderer)

        if self.animations.write_animation(node.animation):
            self.ctx.bump_stat("animations", "count")

        if node.light is not None:
            self._write_light(node.light)

        for child in node.children:
            binw.write_entry(EntryType.CHILD_TRANSFORM_START)
            self.write_node(child)
            binw.write_entry(EntryType.CHILD_TRANSFORM_END)

        binw.flush()

    # ====== Records ======
    def _write_transform(self, node: SceneNode) -> None:
        binw = self.binw
        binw.write_string(node.name)
        binw.write_vector3(node.position)
        binw.write_quaternion(node.rotation)
        binw.write_vector3(node.scale)
        # 版本 0 读取端要求末尾再写一次 scale.x
        binw.write_float(node.scale[0])

    def _write_renderer(self, renderer: MeshRenderer) -> None:
        binw = self.binw
        binw.write_entry(EntryType.MESH_RENDERER)
        binw.write_int(len(renderer.materials))
        for mat in renderer.materials:
            binw.write_int(self.ctx.add_material(mat))

    def _write_skinned_renderer(self, smr: SkinnedMeshRenderer) -> None:
        """
        SkinnedMeshRenderer layout:
        - material count + pool indices
        - bounds center/size, quality (i32), update when offscreen (bool)
        - bone count + bone names
        - mesh block
        """
        binw = self.binw
        binw.write_entry(EntryType.SKINNED_MESH_RENDERER)
        binw.write_int(len(smr.materials))
        for mat in smr.materials:
            binw.write_int(self.ctx.add_material(mat))

        binw.write_vector3(smr.bounds.center)
        binw.write_vector3(smr.bounds.size)
        binw.write_int(smr.quality)
        binw.write_bool(smr.update_when_offscreen)

        binw.write_int(len(smr.bones))
        for bone in smr.bones:
            binw.write_string(bone)

        write_mesh(binw, smr.mesh)

    def _write_light(self, light: Light) -> None:
        binw = self.binw
        binw.write_entry(EntryType.LIGHT)
        binw.write_int(int(light.type))
        binw.write_float(light.intensity)
        binw.write_float(light.range)
        binw.write_color(light.color)
        binw.write_int(light.culling_mask)
