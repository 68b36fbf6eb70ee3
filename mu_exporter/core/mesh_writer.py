# -*- coding: utf-8 -*-
"""
Mu Exporter - Mesh block writer

Mesh block layout:
- MeshStart, vertex count (i32), submesh count (i32)
- MeshVerts + xyz per vertex
- MeshUV / MeshUV2 / MeshNormals / MeshTangents / MeshBoneWeights:
  each written only when the array length equals the vertex count
- MeshBindPoses + count + 16 floats per matrix (row-major), when present
- one MeshTriangles + index count + indices per submesh
- MeshEnd
"""

from __future__ import annotations
from typing import Sized

from .binary_writer import BinaryWriter
from .schema import EntryType, Mesh


def _matches(values: Sized, vertex_count: int) -> bool:
    return values is not None and len(values) == vertex_count


def write_mesh(binw: BinaryWriter, mesh: Mesh) -> None:
    v_count = mesh.vertex_count

    binw.write_entry(EntryType.MESH_START)
    binw.write_int(v_count)
    binw.write_int(mesh.submesh_count)

    binw.write_entry(EntryType.MESH_VERTS)
    for v in mesh.vertices:
        binw.write_vector3(v)

    if _matches(mesh.uv, v_count):
        binw.write_entry(EntryType.MESH_UV)
        for uv in mesh.uv:
            binw.write_vector2(uv)

    if _matches(mesh.uv2, v_count):
        binw.write_entry(EntryType.MESH_UV2)
        for uv in mesh.uv2:
            binw.write_vector2(uv)

    if _matches(mesh.normals, v_count):
        binw.write_entry(EntryType.MESH_NORMALS)
        for n in mesh.normals:
            binw.write_vector3(n)

    if _matches(mesh.tangents, v_count):
        binw.write_entry(EntryType.MESH_TANGENTS)
        for t in mesh.tangents:
            binw.write_floats((t[0], t[1], t[2], t[3]))

    if _matches(mesh.bone_weights, v_count):
        binw.write_entry(EntryType.MESH_BONE_WEIGHTS)
        for bw in mesh.bone_weights:
            # index/weight pairs interleaved
            for index, weight in zip(bw.indices, bw.weights):
                binw.write_int(index)
                binw.write_float(weight)

    if mesh.bind_poses:
        binw.write_entry(EntryType.MESH_BIND_POSES)
        binw.write_int(len(mesh.bind_poses))
        for m in mesh.bind_poses:
            if len(m) != 16:
                raise ValueError(f"bind pose must have 16 elements, got {len(m)}")
            binw.write_floats(m)

    for triangles in mesh.submeshes:
        binw.write_entry(EntryType.MESH_TRIANGLES)
        binw.write_int(len(triangles))
        for index in triangles:
            binw.write_int(index)

    binw.write_entry(EntryType.MESH_END)
