# File: core/material_slots.py
# Purpose: 材质槽与子网格对齐
# Notes:
# - 渲染器材质列表的第 i 项对应网格第 i 个子网格
# - 空槽用同一个默认材质占位，保证索引不错位
# - 没有任何材质槽时：一个默认材质 + 一个子网格

from typing import Iterable, List, Optional, Sequence, Tuple

from .schema import Material


def align_slot_materials(slots: Sequence[Optional[Material]], fallback: Material) -> List[Material]:
    """
    每个槽一项；None（空槽）替换为 fallback

    参数:
        slots: 按槽顺序排列的材质，空槽为 None
        fallback: 占位材质（多次出现时为同一实例，池中只占一项）
    """
    materials = [mat if mat is not None else fallback for mat in slots]
    return materials or [fallback]


def bucket_triangles(triangles: Iterable[Tuple[int, Sequence[int]]], slot_count: int) -> List[List[int]]:
    """
    按材质索引把三角形分到子网格

    参数:
        triangles: (material_index, 三个顶点索引)
        slot_count: 子网格数量，越界的材质索引归入最后一个
    """
    buckets: List[List[int]] = [[] for _ in range(slot_count)]
    for mat_index, indices in triangles:
        buckets[min(max(mat_index, 0), slot_count - 1)].extend(indices)
    return buckets
