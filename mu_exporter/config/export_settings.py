# -*- coding: utf-8 -*-
"""
导出配置数据类
将UI属性转换为内部配置对象
"""

import os

from .constants import (
    DEFAULT_MODEL_NAME,
    DEFAULT_FILE_PATH,
    DEFAULT_FILENAME,
    EXT_MODEL,
)


class ExportSettings:
    """单次导出配置"""

    def __init__(self, model_name=DEFAULT_MODEL_NAME, output_dir=DEFAULT_FILE_PATH,
                 base_filename=DEFAULT_FILENAME, file_extension=EXT_MODEL,
                 copy_textures=True, convert_textures=True, rename_textures=True):
        self.model_name = model_name
        self.output_dir = output_dir
        self.base_filename = base_filename
        self.file_extension = file_extension

        # 纹理导出模式
        self.copy_textures = copy_textures
        self.convert_textures = convert_textures
        self.rename_textures = rename_textures  # 仅在 copy 且不 convert 时生效

        self.verbose = True
        self.write_audit = False

    @property
    def output_path(self):
        """模型文件完整路径"""
        return os.path.join(self.output_dir, self.base_filename + self.file_extension)

    @classmethod
    def from_properties(cls, props):
        """从Blender属性组创建配置对象"""
        settings = cls(
            model_name=props.model_name,
            output_dir=props.output_dir,
            base_filename=props.base_filename,
            file_extension=props.file_extension or EXT_MODEL,
            copy_textures=props.copy_textures,
            convert_textures=props.convert_textures,
            rename_textures=props.rename_textures,
        )
        settings.write_audit = getattr(props, "write_audit", False)
        return settings

    def __repr__(self):
        return ("ExportSettings(model_name={0!r}, output={1!r}, copy={2}, convert={3}, rename={4})"
                .format(self.model_name, self.output_path, self.copy_textures,
                        self.convert_textures, self.rename_textures))
