# -*- coding: utf-8 -*-
"""
Mu Exporter - Scene Validator
导出前的场景数据校验（不修改场景）
- 图层不能为负
- 变换分量必须为有限数
- 三角形索引必须落在顶点范围内
- 骨骼绑定矩阵必须为 16 个 float
第一处错误即抛出 SceneValidationError
"""

import math
from typing import Iterable

from ..core.errors import SceneValidationError
from ..core.schema import Mesh, MeshCollider, SceneNode


def _all_finite(values: Iterable[float]) -> bool:
    return all(math.isfinite(float(v)) for v in values)


def validate_mesh(mesh: Mesh, node_name: str) -> None:
    v_count = mesh.vertex_count
    for sub_index, triangles in enumerate(mesh.submeshes):
        if len(triangles) % 3 != 0:
            raise SceneValidationError(
                f"submesh {sub_index} index count {len(triangles)} is not a multiple of 3", node_name)
        for index in triangles:
            if index < 0 or index >= v_count:
                raise SceneValidationError(
                    f"submesh {sub_index} index {index} out of range (vertices: {v_count})", node_name)

    for matrix in mesh.bind_poses:
        if len(matrix) != 16:
            raise SceneValidationError(f"bind pose has {len(matrix)} elements, expected 16", node_name)


def validate_node(node: SceneNode) -> None:
    if node.layer < 0:
        raise SceneValidationError(f"layer must be non-negative, got {node.layer}", node.name)

    if not (_all_finite(node.position) and _all_finite(node.rotation) and _all_finite(node.scale)):
        raise SceneValidationError("transform has non-finite components", node.name)

    if node.mesh is not None:
        validate_mesh(node.mesh, node.name)
    if node.skinned_renderer is not None:
        validate_mesh(node.skinned_renderer.mesh, node.name)
    for collider in node.colliders:
        if isinstance(collider, MeshCollider):
            validate_mesh(collider.mesh, node.name)


def validate_scene(root: SceneNode) -> int:
    """
    校验整棵场景树
    返回:
        校验的节点数
    """
    if root is None:
        raise SceneValidationError("no root node")

    count = 0
    for node in root.walk():
        validate_node(node)
        count += 1
    return count
