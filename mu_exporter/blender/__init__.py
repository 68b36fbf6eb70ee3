# File: blender/__init__.py
# Purpose: Blender 宿主适配（bpy / mathutils 仅在此包内使用）

import bpy

from .operator import EXPORT_OT_mu, menu_func_export


def register():
    bpy.utils.register_class(EXPORT_OT_mu)
    bpy.types.TOPBAR_MT_file_export.append(menu_func_export)
    print("Mu Exporter 已注册")


def unregister():
    bpy.types.TOPBAR_MT_file_export.remove(menu_func_export)
    bpy.utils.unregister_class(EXPORT_OT_mu)
    print("Mu Exporter 已注销")
