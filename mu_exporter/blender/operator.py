# File: blender/operator.py
# Purpose: File → Export → Mu (.mu) 操作符
# Notes:
# - 活动对象作为模型根节点
# - 导出失败时通过 self.report 返回错误，详细信息见控制台 / audit.log

import os

import bpy
from bpy.props import BoolProperty, StringProperty

from .scene_collector import SceneCollector
from ..config.constants import DEFAULT_FILENAME, DEFAULT_MODEL_NAME, EXT_MODEL
from ..config.export_settings import ExportSettings
from ..exporters.mu_exporter import MuExporter
from ..utils.logger import Logger


class EXPORT_OT_mu(bpy.types.Operator):
    """将活动对象及其子对象导出为 .mu 模型"""
    bl_idname = "export_scene.mu"
    bl_label = "Export Mu"
    bl_options = {'REGISTER'}

    filepath: StringProperty(
        name="输出目录",
        description="模型与纹理的输出目录",
        subtype='DIR_PATH',
    )

    model_name: StringProperty(name="模型名", default=DEFAULT_MODEL_NAME)
    base_filename: StringProperty(name="文件名", default=DEFAULT_FILENAME)
    file_extension: StringProperty(name="扩展名", default=EXT_MODEL)
    output_dir: StringProperty(options={'HIDDEN'})

    copy_textures: BoolProperty(name="复制纹理", default=True)
    convert_textures: BoolProperty(name="转换为 MBM", default=True)
    rename_textures: BoolProperty(
        name="重命名纹理",
        description="复制时按 文件名+序号 重命名（转换模式下始终重命名）",
        default=True,
    )
    write_audit: BoolProperty(name="audit.log", default=False)

    @classmethod
    def poll(cls, context):
        return context.active_object is not None

    def execute(self, context):
        path = bpy.path.abspath(self.filepath)
        self.output_dir = os.path.dirname(path) if os.path.isfile(path) else path
        if not self.output_dir:
            self.report({'ERROR'}, "请选择导出目录")
            return {'CANCELLED'}

        settings = ExportSettings.from_properties(self)
        logger = Logger()

        root = SceneCollector(context).collect(context.active_object)
        try:
            result = MuExporter(logger=logger).export(root, settings)
        except OSError as e:
            self.report({'ERROR'}, f"无法写入 {settings.output_path}: {e}")
            return {'CANCELLED'}

        if not result.success:
            self.report({'ERROR'}, f"导出失败: {result.message}")
            return {'CANCELLED'}

        self.report({'INFO'}, f"导出完成: {result.path} ({len(result.files)} 个文件)")
        return {'FINISHED'}

    def invoke(self, context, event):
        context.window_manager.fileselect_add(self)
        return {'RUNNING_MODAL'}

    def draw(self, context):
        layout = self.layout

        box = layout.box()
        box.label(text="模型", icon='EXPORT')
        box.prop(self, "model_name")
        box.prop(self, "base_filename")
        box.prop(self, "file_extension")

        box = layout.box()
        box.label(text="纹理", icon='TEXTURE')
        box.prop(self, "copy_textures")
        col = box.column()
        col.enabled = self.copy_textures
        col.prop(self, "convert_textures")
        row = col.row()
        row.enabled = not self.convert_textures
        row.prop(self, "rename_textures")

        box = layout.box()
        box.label(text="日志", icon='TEXT')
        box.prop(self, "write_audit")


def menu_func_export(self, context):
    self.layout.operator(EXPORT_OT_mu.bl_idname, text="Mu Model (.mu)")
