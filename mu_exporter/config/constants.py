# -*- coding: utf-8 -*-
"""
Mu 格式常量定义
"""

# 文件头
FILE_TYPE_MODEL_BINARY = 76543
FILE_VERSION = 0

# 文件扩展名
EXT_MODEL = ".mu"
EXT_BITMAP = "mbm"
EXT_AUDIT = "audit.log"

# 自定义位图头标识
BITMAP_SIGNATURE = "KSP"
BITMAP_DEPTH_RGB = 24
BITMAP_DEPTH_RGBA = 32

# 纹理自动重命名时的序号宽度（model000.mbm）
TEXTURE_INDEX_DIGITS = 3

# 未绑定纹理槽的索引占位
UNBOUND_TEXTURE_INDEX = -1

# 法线贴图合成：转换模式下 heightmap_scale 的缩放系数
BITMAP_NORMAL_STRENGTH_FACTOR = 0.001

# 灰度权重 (r, g, b)
GRAYSCALE_WEIGHTS = (0.299, 0.587, 0.114)

# 导出默认值
DEFAULT_MODEL_NAME = "NewModel"
DEFAULT_FILE_PATH = "Parts/NewPart/"
DEFAULT_FILENAME = "model"
DEFAULT_TAG = "Untagged"
DEFAULT_LAYER = 0
DEFAULT_MATERIAL_NAME = "Default"
DEFAULT_CULLING_MASK = -1

# 材质默认参数
DEFAULT_SPEC_COLOR = (0.5, 0.5, 0.5, 1.0)
DEFAULT_SHININESS = 0.078125
DEFAULT_EMISSIVE_COLOR = (0.0, 0.0, 0.0, 1.0)
DEFAULT_CUTOFF = 0.5
DEFAULT_HEIGHTMAP_SCALE = 0.25
