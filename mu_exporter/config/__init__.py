# -*- coding: utf-8 -*-
"""配置模块"""

from .constants import *
from .export_settings import ExportSettings

__all__ = [
    'ExportSettings',
]
