# File: __init__.py
# Purpose: Mu Exporter 主入口
# Notes:
# - 核心导出（mu_exporter.export）不依赖 bpy，可在 Blender 外使用
# - register()/unregister() 仅在 Blender 内调用，延迟导入 .blender

bl_info = {
    "name": "Mu Exporter",
    "author": "Mu Exporter Team",
    "version": (1, 0, 0),
    "blender": (4, 0, 0),
    "location": "File > Export > Mu Model (.mu)",
    "description": "Export object hierarchies to the binary .mu model format",
    "category": "Import-Export",
}

from .config.export_settings import ExportSettings
from .exporters.base_exporter import ExportResult
from .exporters.mu_exporter import ExportJob, MuExporter, export, export_many
from .utils.logger import Logger


def register():
    from . import blender
    blender.register()


def unregister():
    from . import blender
    blender.unregister()


__all__ = [
    'ExportSettings',
    'ExportResult',
    'ExportJob',
    'MuExporter',
    'Logger',
    'export',
    'export_many',
    'register',
    'unregister',
]
