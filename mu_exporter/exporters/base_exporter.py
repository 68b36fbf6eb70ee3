# -*- coding: utf-8 -*-
"""
基础导出器（抽象类）
定义导出流程模板，并给出显式的导出结果类型
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from ..core.errors import SceneValidationError
from ..utils.file_manager import FileManager
from ..validators.scene_validator import validate_scene
from ..writers.audit_writer import ErrorCode


@dataclass
class ExportResult:
    """
    单次导出结果
    失败时 error 保存原始异常；已写出的部分文件保留在磁盘上
    """
    success: bool
    path: Optional[str] = None
    files: List[str] = field(default_factory=list)
    message: str = ""
    error: Optional[BaseException] = None
    report: Dict = field(default_factory=dict)

    def discard_partial(self) -> List[str]:
        """删除失败导出留下的文件；成功结果不做任何操作"""
        if self.success:
            return []
        return [path for path in self.files if FileManager.remove_file(path)]

    def __bool__(self):
        return self.success


class BaseExporter(ABC):
    """
    基础导出器
    使用模板方法模式定义导出流程：
        validate -> prepare_output -> write_files -> post_process
    """

    def __init__(self, logger=None):
        self.logger = logger

    def export(self, root, settings) -> ExportResult:
        """
        导出流程模板方法

        参数:
            root: SceneNode - 场景根节点
            settings: ExportSettings - 导出配置

        返回:
            ExportResult
        输出目录/文件无法创建时异常直接抛出
        """
        # 1. 验证
        error = self.validate(root, settings)
        if error is not None:
            return ExportResult(success=False, message=str(error), error=error)

        # 2. 输出目录
        self.prepare_output(settings)

        # 3. 写入文件
        result = self.write_files(root, settings)

        # 4. 后处理
        self.post_process(result, settings)
        return result

    def validate(self, root, settings) -> Optional[SceneValidationError]:
        """
        场景校验；返回第一处错误（无错误返回 None）
        """
        try:
            validate_scene(root)
        except SceneValidationError as e:
            if self.logger:
                self.logger.error(f"Scene validation failed: {e}", settings.model_name,
                                  code=ErrorCode.VAL001)
            return e
        return None

    def prepare_output(self, settings) -> None:
        FileManager.ensure_directory(settings.output_dir)

    @abstractmethod
    def write_files(self, root, settings) -> ExportResult:
        """
        写入文件（子类实现）
        """

    def post_process(self, result: ExportResult, settings) -> None:
        if self.logger and result.success:
            self.logger.info("Export finished, {0} file(s) written".format(len(result.files)))
