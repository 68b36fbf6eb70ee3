# File: blender/coordinate_converter.py
# Purpose: 坐标系转换（Blender 右手 Z-up → Mu 左手 Y-up）
# Notes:
# - Y ↔ Z 交换即同时完成轴向与手性的转换（镜像一次）
# - 镜像后三角形绕序反转、切线 w 取反

from typing import List, Sequence, Tuple

from mathutils import Matrix, Quaternion, Vector


class CoordinateConverter:
    """
    坐标系转换器

    Blender (X, Y, Z) → Mu (X, Z, Y)

    矩阵形式：
        [ 1  0  0 ]
        [ 0  0  1 ]
        [ 0  1  0 ]
    """

    CONVERSION_MATRIX = Matrix((
        (1.0, 0.0, 0.0),
        (0.0, 0.0, 1.0),
        (0.0, 1.0, 0.0),
    ))

    @staticmethod
    def convert_position(v: Vector) -> Tuple[float, float, float]:
        return (v[0], v[2], v[1])

    # 法线与缩放同样交换 Y/Z
    convert_normal = convert_position
    convert_scale = convert_position

    @staticmethod
    def convert_tangent(t: Sequence[float], bitangent_sign: float) -> Tuple[float, float, float, float]:
        return (t[0], t[2], t[1], -bitangent_sign)

    @staticmethod
    def convert_quaternion(q: Quaternion) -> Tuple[float, float, float, float]:
        """
        Blender 四元数 (W, X, Y, Z) → Mu (X, Y, Z, W)
        镜像变换下旋转轴交换 Y/Z 且角度取反
        """
        return (-q.x, -q.z, -q.y, q.w)

    @staticmethod
    def convert_matrix(m: Matrix) -> List[float]:
        """
        4x4 矩阵 → 16 个 float（行优先），C @ M @ C（C 为自逆矩阵）
        """
        c = CoordinateConverter.CONVERSION_MATRIX.to_4x4()
        converted = c @ m @ c
        return [converted[row][col] for row in range(4) for col in range(4)]

    @staticmethod
    def flip_winding(indices: List[int]) -> List[int]:
        out = list(indices)
        for i in range(0, len(out) - 2, 3):
            out[i + 1], out[i + 2] = out[i + 2], out[i + 1]
        return out
