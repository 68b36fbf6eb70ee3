# -*- coding: utf-8 -*-
# File: core/__init__.py
# Purpose: Core 模块初始化

"""
Mu Exporter Core Module
场景数据结构、二进制写入器、材质/纹理管线
"""

__all__ = [
    'schema',
    'binary_writer',
    'node_writer',
    'material_writer',
    'texture_exporter',
    'normal_map',
    'material_slots',
    'errors',
]
