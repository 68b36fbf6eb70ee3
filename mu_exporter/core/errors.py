# -*- coding: utf-8 -*-
"""
Mu 导出异常类型
"""


class MuExportError(Exception):
    """导出过程中的所有可预期错误"""


class SceneValidationError(MuExportError):
    """场景数据不合法（导出前校验阻断）"""

    def __init__(self, message, node_name=None):
        super().__init__(message)
        self.node_name = node_name

    def __str__(self):
        if self.node_name:
            return "{0} (node: {1})".format(self.args[0], self.node_name)
        return self.args[0]


class TextureExportError(MuExportError):
    """纹理源缺失或无法读取"""

    def __init__(self, message, texture_name=None):
        super().__init__(message)
        self.texture_name = texture_name
