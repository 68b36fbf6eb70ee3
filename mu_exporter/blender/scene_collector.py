# File: blender/scene_collector.py
# Purpose: 从 Blender 对象树构建 SceneNode 树
# Notes:
# - 网格按 LOOP 域展开（每个 loop 一个顶点），子网格按材质槽划分
# - 材质/纹理按 Blender 数据块缓存，同一数据块始终映射到同一实例（池按身份去重）
# - 自定义属性：mu_tag / mu_layer（对象）、mu_shader（材质）、mu_collider（对象）
#   mu_convert_to_normal_map / mu_heightmap_scale（图像）

import os
from typing import Dict, List, Optional

import bpy

from .coordinate_converter import CoordinateConverter
from ..config.constants import (
    DEFAULT_HEIGHTMAP_SCALE,
    DEFAULT_LAYER,
    DEFAULT_MATERIAL_NAME,
    DEFAULT_TAG,
)
from ..core.material_slots import align_slot_materials, bucket_triangles
from ..core.schema import (
    BoxCollider,
    CapsuleCollider,
    Light,
    LightType,
    Material,
    Mesh,
    MeshCollider,
    MeshRenderer,
    SceneNode,
    SphereCollider,
    Texture,
    TextureImportSettings,
    TextureSlot,
)


LIGHT_TYPES = {
    'SPOT': LightType.SPOT,
    'SUN': LightType.DIRECTIONAL,
    'POINT': LightType.POINT,
    'AREA': LightType.AREA,
}


class SceneCollector:
    """
    Blender → SceneNode

    使用方式:
        root = SceneCollector(context).collect(context.active_object)
    """

    def __init__(self, context):
        self.depsgraph = context.evaluated_depsgraph_get()
        self._materials: Dict[int, Material] = {}
        self._textures: Dict[int, Texture] = {}
        self._default_material: Optional[Material] = None

    # ====== 节点 ======
    def collect(self, obj: bpy.types.Object) -> SceneNode:
        # 根节点同样写出自身的局部变换
        loc, rot, scale = obj.matrix_local.decompose()
        node = SceneNode(
            name=obj.name,
            position=CoordinateConverter.convert_position(loc),
            rotation=CoordinateConverter.convert_quaternion(rot),
            scale=CoordinateConverter.convert_scale(scale),
        )

        node.tag = str(obj.get("mu_tag", DEFAULT_TAG))
        node.layer = int(obj.get("mu_layer", DEFAULT_LAYER))

        if obj.type == 'MESH':
            materials = self._slot_materials(obj)
            node.mesh = self._build_mesh(obj, len(materials))
            node.renderer = MeshRenderer(materials=materials)
        elif obj.type == 'LIGHT':
            node.light = self._build_light(obj.data)

        collider = self._build_collider(obj, node.mesh)
        if collider is not None:
            node.colliders.append(collider)

        for child in sorted(obj.children, key=lambda o: o.name):
            node.add_child(self.collect(child))
        return node

    def _slot_materials(self, obj: bpy.types.Object) -> List[Material]:
        slots = [self._material(slot.material) if slot.material else None for slot in obj.material_slots]
        return align_slot_materials(slots, self._fallback_material())

    def _fallback_material(self) -> Material:
        if self._default_material is None:
            self._default_material = Material(name=DEFAULT_MATERIAL_NAME)
        return self._default_material

    # ====== 网格 ======
    def _build_mesh(self, obj: bpy.types.Object, slot_count: int) -> Mesh:
        obj_eval = obj.evaluated_get(self.depsgraph)
        me = bpy.data.meshes.new_from_object(obj_eval, preserve_all_data_layers=True,
                                             depsgraph=self.depsgraph)
        try:
            me.calc_loop_triangles()
            uv_layer = me.uv_layers.active
            if uv_layer is not None:
                try:
                    me.calc_tangents(uvmap=uv_layer.name)
                except RuntimeError:
                    uv_layer = None

            mesh = Mesh()
            for loop in me.loops:
                mesh.vertices.append(CoordinateConverter.convert_position(me.vertices[loop.vertex_index].co))
                mesh.normals.append(CoordinateConverter.convert_normal(loop.normal))
                if uv_layer is not None:
                    uv = uv_layer.data[loop.index].uv
                    mesh.uv.append((uv[0], uv[1]))
                    mesh.tangents.append(CoordinateConverter.convert_tangent(loop.tangent, loop.bitangent_sign))

            if len(me.uv_layers) > 1:
                uv2_layer = me.uv_layers[1]
                mesh.uv2 = [(d.uv[0], d.uv[1]) for d in uv2_layer.data]

            buckets = bucket_triangles(((tri.material_index, tri.loops) for tri in me.loop_triangles),
                                       slot_count)
            mesh.submeshes = [CoordinateConverter.flip_winding(b) for b in buckets]
            return mesh
        finally:
            bpy.data.meshes.remove(me)

    # ====== 材质 / 纹理 ======
    def _material(self, bmat: bpy.types.Material) -> Material:
        key = bmat.as_pointer()
        cached = self._materials.get(key)
        if cached is not None:
            return cached

        mat = Material(name=bmat.name, shader=str(bmat.get("mu_shader", "Diffuse")))
        if bmat.use_nodes and bmat.node_tree:
            bsdf = next((n for n in bmat.node_tree.nodes if n.type == 'BSDF_PRINCIPLED'), None)
            if bsdf is not None:
                mat.main_texture = self._slot_from_socket(bsdf.inputs.get("Base Color"))
                mat.emissive_texture = self._slot_from_socket(
                    bsdf.inputs.get("Emission Color") or bsdf.inputs.get("Emission"))
                normal_input = bsdf.inputs.get("Normal")
                if normal_input is not None and normal_input.is_linked:
                    normal_node = normal_input.links[0].from_node
                    if normal_node.type in ('NORMAL_MAP', 'BUMP'):
                        socket = normal_node.inputs.get("Color") or normal_node.inputs.get("Height")
                        mat.normal_map = self._slot_from_socket(socket)
        self._materials[key] = mat
        return mat

    def _slot_from_socket(self, socket) -> TextureSlot:
        if socket is None or not socket.is_linked:
            return TextureSlot()
        node = socket.links[0].from_node
        if node.type != 'TEX_IMAGE' or node.image is None:
            return TextureSlot()

        scale, offset = (1.0, 1.0), (0.0, 0.0)
        vector = node.inputs.get("Vector")
        if vector is not None and vector.is_linked and vector.links[0].from_node.type == 'MAPPING':
            mapping = vector.links[0].from_node
            s = mapping.inputs["Scale"].default_value
            loc = mapping.inputs["Location"].default_value
            scale, offset = (s[0], s[1]), (loc[0], loc[1])
        return TextureSlot(texture=self._texture(node.image), scale=scale, offset=offset)

    def _texture(self, image: bpy.types.Image) -> Texture:
        key = image.as_pointer()
        cached = self._textures.get(key)
        if cached is not None:
            return cached

        texture = Texture(
            name=os.path.splitext(image.name)[0],
            source_path=bpy.path.abspath(image.filepath) if image.filepath else None,
            import_settings=TextureImportSettings(
                convert_to_normal_map=bool(image.get("mu_convert_to_normal_map", False)),
                heightmap_scale=float(image.get("mu_heightmap_scale", DEFAULT_HEIGHTMAP_SCALE)),
            ),
        )
        self._textures[key] = texture
        return texture

    # ====== 灯光 / 碰撞体 ======
    def _build_light(self, data: bpy.types.Light) -> Light:
        color = data.color
        return Light(
            type=LIGHT_TYPES.get(data.type, LightType.POINT),
            intensity=data.energy,
            range=getattr(data, "cutoff_distance", 10.0),
            color=(color[0], color[1], color[2], 1.0),
        )

    def _build_collider(self, obj: bpy.types.Object, mesh: Optional[Mesh]):
        kind = str(obj.get("mu_collider", "")).upper()
        if not kind:
            return None

        size = CoordinateConverter.convert_scale(obj.dimensions)
        if kind == 'MESH' and mesh is not None:
            return MeshCollider(mesh=mesh, convex=bool(obj.get("mu_convex", False)))
        if kind == 'BOX':
            return BoxCollider(size=size)
        if kind == 'SPHERE':
            return SphereCollider(radius=max(size) * 0.5)
        if kind == 'CAPSULE':
            return CapsuleCollider(radius=max(size[0], size[2]) * 0.5, height=size[1])
        return None
