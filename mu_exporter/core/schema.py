# File: core/schema.py
# Purpose: Mu 导出数据结构定义（dataclass）
# Notes:
# - 场景树 SceneNode 及其可选组件（碰撞体 / 网格 / 渲染器 / 灯光 / 动画）
# - 材质与纹理使用 eq=False：池内按对象身份去重，而非按值
# - 枚举数值即文件格式中的 int 标签，不可调整顺序

from dataclasses import dataclass, field
from enum import IntEnum
from typing import Iterator, List, Optional, Tuple

from ..config.constants import (
    DEFAULT_TAG,
    DEFAULT_LAYER,
    DEFAULT_CULLING_MASK,
    DEFAULT_SPEC_COLOR,
    DEFAULT_SHININESS,
    DEFAULT_EMISSIVE_COLOR,
    DEFAULT_CUTOFF,
    DEFAULT_HEIGHTMAP_SCALE,
)


Vector2 = Tuple[float, float]
Vector3 = Tuple[float, float, float]
Vector4 = Tuple[float, float, float, float]
Color = Tuple[float, float, float, float]


# ==================== 枚举类型 ====================

class EntryType(IntEnum):
    """文件记录标签"""
    CHILD_TRANSFORM_START = 0
    CHILD_TRANSFORM_END = 1
    ANIMATION = 2
    MESH_COLLIDER = 3           # 旧版，不再写出
    SPHERE_COLLIDER = 4         # 旧版，不再写出
    CAPSULE_COLLIDER = 5        # 旧版，不再写出
    BOX_COLLIDER = 6            # 旧版，不再写出
    MESH_FILTER = 7
    MESH_RENDERER = 8
    SKINNED_MESH_RENDERER = 9
    MATERIALS = 10
    MATERIAL = 11
    TEXTURES = 12
    MESH_START = 13
    MESH_VERTS = 14
    MESH_UV = 15
    MESH_UV2 = 16
    MESH_NORMALS = 17
    MESH_TANGENTS = 18
    MESH_TRIANGLES = 19
    MESH_BONE_WEIGHTS = 20
    MESH_BIND_POSES = 21
    MESH_END = 22
    LIGHT = 23
    TAG_AND_LAYER = 24
    MESH_COLLIDER2 = 25
    SPHERE_COLLIDER2 = 26
    CAPSULE_COLLIDER2 = 27
    BOX_COLLIDER2 = 28
    WHEEL_COLLIDER = 29


class ShaderType(IntEnum):
    """支持的着色器"""
    CUSTOM = 0
    DIFFUSE = 1
    SPECULAR = 2
    BUMPED = 3
    BUMPED_SPECULAR = 4
    EMISSIVE = 5
    EMISSIVE_SPECULAR = 6
    EMISSIVE_BUMPED_SPECULAR = 7
    ALPHA_CUTOUT = 8
    ALPHA_CUTOUT_BUMPED = 9


class TextureType(IntEnum):
    """纹理类型"""
    TEXTURE = 0
    NORMAL_MAP = 1


class AnimationType(IntEnum):
    """动画曲线目标组件类型"""
    TRANSFORM = 0
    MATERIAL = 1
    LIGHT = 2
    AUDIO_SOURCE = 3


class LightType(IntEnum):
    SPOT = 0
    DIRECTIONAL = 1
    POINT = 2
    AREA = 3


class WrapMode(IntEnum):
    DEFAULT = 0
    ONCE = 1
    LOOP = 2
    PING_PONG = 4
    CLAMP_FOREVER = 8


# ==================== 网格 ====================

@dataclass
class BoneWeight:
    """单顶点蒙皮：4 个骨骼索引 + 4 个权重"""
    indices: Tuple[int, int, int, int] = (0, 0, 0, 0)
    weights: Tuple[float, float, float, float] = (1.0, 0.0, 0.0, 0.0)


@dataclass(eq=False)
class Mesh:
    """
    网格数据
    可选数组仅当长度与顶点数完全一致时写出
    """
    vertices: List[Vector3] = field(default_factory=list)
    uv: List[Vector2] = field(default_factory=list)
    uv2: List[Vector2] = field(default_factory=list)
    normals: List[Vector3] = field(default_factory=list)
    tangents: List[Vector4] = field(default_factory=list)
    bone_weights: List[BoneWeight] = field(default_factory=list)
    bind_poses: List[Tuple[float, ...]] = field(default_factory=list)  # 4x4 行优先，16 个 float
    submeshes: List[List[int]] = field(default_factory=list)           # 每个子网格一组三角形索引

    @property
    def vertex_count(self) -> int:
        return len(self.vertices)

    @property
    def submesh_count(self) -> int:
        return len(self.submeshes)


@dataclass
class Bounds:
    center: Vector3 = (0.0, 0.0, 0.0)
    size: Vector3 = (0.0, 0.0, 0.0)


# ==================== 碰撞体 ====================

@dataclass
class MeshCollider:
    mesh: Mesh
    is_trigger: bool = False
    convex: bool = False


@dataclass
class BoxCollider:
    is_trigger: bool = False
    size: Vector3 = (1.0, 1.0, 1.0)
    center: Vector3 = (0.0, 0.0, 0.0)


@dataclass
class CapsuleCollider:
    is_trigger: bool = False
    radius: float = 0.5
    height: float = 2.0
    direction: int = 1          # 0=X 1=Y 2=Z
    center: Vector3 = (0.0, 0.0, 0.0)


@dataclass
class SphereCollider:
    is_trigger: bool = False
    radius: float = 0.5
    center: Vector3 = (0.0, 0.0, 0.0)


@dataclass
class JointSpring:
    spring: float = 0.0
    damper: float = 0.0
    target_position: float = 0.0


@dataclass
class WheelFrictionCurve:
    extremum_slip: float = 1.0
    extremum_value: float = 20000.0
    asymptote_slip: float = 2.0
    asymptote_value: float = 10000.0
    stiffness: float = 1.0


@dataclass
class WheelCollider:
    mass: float = 1.0
    radius: float = 0.5
    suspension_distance: float = 0.1
    center: Vector3 = (0.0, 0.0, 0.0)
    suspension_spring: JointSpring = field(default_factory=JointSpring)
    forward_friction: WheelFrictionCurve = field(default_factory=WheelFrictionCurve)
    sideways_friction: WheelFrictionCurve = field(default_factory=WheelFrictionCurve)


# ==================== 纹理与材质 ====================

@dataclass
class TextureImportSettings:
    """源纹理导入设置（是否由灰度高度图生成法线）"""
    convert_to_normal_map: bool = False
    heightmap_scale: float = DEFAULT_HEIGHTMAP_SCALE


@dataclass(eq=False)
class Texture:
    """纹理句柄；池内以对象身份作为去重键"""
    name: str
    source_path: Optional[str] = None
    import_settings: TextureImportSettings = field(default_factory=TextureImportSettings)


@dataclass
class TextureSlot:
    """材质纹理槽：纹理引用 + UV 缩放/偏移"""
    texture: Optional[Texture] = None
    scale: Vector2 = (1.0, 1.0)
    offset: Vector2 = (0.0, 0.0)


@dataclass(eq=False)
class Material:
    name: str
    shader: str = "Diffuse"
    main_texture: TextureSlot = field(default_factory=TextureSlot)
    normal_map: TextureSlot = field(default_factory=TextureSlot)
    emissive_texture: TextureSlot = field(default_factory=TextureSlot)
    spec_color: Color = DEFAULT_SPEC_COLOR
    shininess: float = DEFAULT_SHININESS
    emissive_color: Color = DEFAULT_EMISSIVE_COLOR
    cutoff: float = DEFAULT_CUTOFF


# ==================== 渲染器 ====================

@dataclass
class MeshRenderer:
    materials: List[Material] = field(default_factory=list)


@dataclass
class SkinnedMeshRenderer:
    mesh: Mesh
    materials: List[Material] = field(default_factory=list)
    bounds: Bounds = field(default_factory=Bounds)
    quality: int = 0
    update_when_offscreen: bool = False
    bones: List[str] = field(default_factory=list)      # 骨骼节点名


# ==================== 灯光 ====================

@dataclass
class Light:
    type: LightType = LightType.POINT
    intensity: float = 1.0
    range: float = 10.0
    color: Color = (1.0, 1.0, 1.0, 1.0)
    culling_mask: int = DEFAULT_CULLING_MASK


# ==================== 动画 ====================

@dataclass
class Keyframe:
    time: float
    value: float
    in_tangent: float = 0.0
    out_tangent: float = 0.0
    tangent_mode: int = 0


@dataclass
class AnimationCurve:
    path: str
    property_name: str
    type: AnimationType = AnimationType.TRANSFORM
    pre_wrap_mode: WrapMode = WrapMode.DEFAULT
    post_wrap_mode: WrapMode = WrapMode.DEFAULT
    keyframes: List[Keyframe] = field(default_factory=list)


@dataclass
class AnimationClip:
    name: str
    bounds: Bounds = field(default_factory=Bounds)
    wrap_mode: WrapMode = WrapMode.DEFAULT
    curves: List[AnimationCurve] = field(default_factory=list)


@dataclass
class Animation:
    clips: List[AnimationClip] = field(default_factory=list)
    default_clip: Optional[str] = None
    play_automatically: bool = True


# ==================== 场景节点 ====================

@dataclass(eq=False)
class SceneNode:
    """
    场景树节点
    子节点由父节点独占持有；材质/纹理为跨节点共享引用
    """
    name: str
    position: Vector3 = (0.0, 0.0, 0.0)
    rotation: Vector4 = (0.0, 0.0, 0.0, 1.0)   # 四元数 (x, y, z, w)
    scale: Vector3 = (1.0, 1.0, 1.0)
    tag: str = DEFAULT_TAG
    layer: int = DEFAULT_LAYER
    children: List["SceneNode"] = field(default_factory=list)

    # 可选组件
    colliders: list = field(default_factory=list)
    mesh: Optional[Mesh] = None
    renderer: Optional[MeshRenderer] = None
    skinned_renderer: Optional[SkinnedMeshRenderer] = None
    light: Optional[Light] = None
    animation: Optional[Animation] = None

    def add_child(self, child: "SceneNode") -> "SceneNode":
        self.children.append(child)
        return child

    def walk(self) -> Iterator["SceneNode"]:
        """深度优先遍历（先序）"""
        yield self
        for child in self.children:
            yield from child.walk()
