# -*- coding: utf-8 -*-
"""
Mu 模型导出器

一次导出 = 一个 ExportContext：
- 打开模型文件，写入文件头
- 深度优先写出场景树（同时收集材质/纹理）
- 写出材质表，随后导出纹理并写出纹理表
遍历/编码过程中的异常只在这里捕获一次：记录日志，关闭文件，返回失败结果
"""

import os
import traceback
from dataclasses import dataclass
from typing import List, Optional

from .base_exporter import BaseExporter, ExportResult
from ..config.constants import EXT_AUDIT, EXT_MODEL
from ..config.export_settings import ExportSettings
from ..core.asset_resolver import FileAssetResolver
from ..core.binary_writer import ModelFileWriter
from ..core.context import ExportContext
from ..core.errors import TextureExportError
from ..core.material_writer import MaterialWriter
from ..core.node_writer import NodeWriter
from ..core.schema import SceneNode
from ..utils.logger import Logger
from ..writers.audit_writer import AuditLogger, ErrorCode


class MuExporter(BaseExporter):
    """
    .mu 导出器

    参数:
        logger: Logger，为 None 时按 settings.verbose 创建
        resolver: 纹理资源解析器，默认从 Texture.source_path 读取
    """

    def __init__(self, logger: Optional[Logger] = None, resolver=None):
        super().__init__(logger)
        self.resolver = resolver or FileAssetResolver()
        self.audit_logger: Optional[AuditLogger] = None

    def export(self, root: SceneNode, settings: ExportSettings) -> ExportResult:
        if self.logger is None:
            self.logger = Logger(verbose=settings.verbose)

        if settings.write_audit and self.logger.audit_logger is None:
            self.audit_logger = AuditLogger(os.path.join(settings.output_dir, EXT_AUDIT))
            self.logger.audit_logger = self.audit_logger

        try:
            return super().export(root, settings)
        finally:
            if self.audit_logger is not None:
                self.logger.audit_logger = None
                self.audit_logger = None

    def write_files(self, root: SceneNode, settings: ExportSettings) -> ExportResult:
        path = settings.output_path
        ctx = ExportContext(settings=settings, resolver=self.resolver, logger=self.logger)
        self.logger.info(f"Exporting '{settings.model_name}' to '{path}'")

        error = None
        try:
            # 文件打开失败直接抛出
            with ModelFileWriter().open(path) as mfw:
                ctx.binw = mfw.binw
                ctx.written_files.append(path)
                try:
                    mfw.write_header(settings.model_name)
                    NodeWriter(ctx).write_node(root)
                    MaterialWriter(ctx).write_materials()
                except Exception as e:
                    error = e
                    code = ErrorCode.TEX001 if isinstance(e, TextureExportError) else ErrorCode.EXP001
                    self.logger.error(f"Export failed: {e}", settings.model_name, code=code)
                    self.logger.error(traceback.format_exc())

            files = list(ctx.written_files)
            report = dict(ctx.report)
        finally:
            ctx.release()

        if error is not None:
            return ExportResult(success=False, path=path, files=files,
                                message=str(error), error=error, report=report)

        self.logger.info(f"Export succeeded: {path}")
        return ExportResult(success=True, path=path, files=files,
                            message="Export succeeded", report=report)

    def post_process(self, result: ExportResult, settings: ExportSettings) -> None:
        super().post_process(result, settings)
        if self.audit_logger is not None:
            self.logger.info(self.audit_logger.get_summary())
            self.audit_logger.save()


# ====== 模块级接口 ======

def export(model_name: str, output_dir: str, base_filename: str, file_extension: str,
           root_node: SceneNode, copy_textures: bool = True, convert_textures: bool = True,
           rename_textures: bool = True, logger: Optional[Logger] = None,
           resolver=None) -> ExportResult:
    """
    将场景树导出为 output_dir/base_filename + file_extension
    """
    settings = ExportSettings(
        model_name=model_name,
        output_dir=output_dir,
        base_filename=base_filename,
        file_extension=file_extension or EXT_MODEL,
        copy_textures=copy_textures,
        convert_textures=convert_textures,
        rename_textures=rename_textures,
    )
    return MuExporter(logger=logger, resolver=resolver).export(root_node, settings)


@dataclass
class ExportJob:
    root_node: SceneNode
    settings: ExportSettings


def export_many(jobs: List[ExportJob], logger: Optional[Logger] = None,
                resolver=None) -> List[ExportResult]:
    """
    依次导出多个模型，每个模型使用独立的导出上下文
    单个任务的目录/文件错误记为该任务失败，不中断后续任务
    """
    results = []
    for idx, job in enumerate(jobs):
        exporter = MuExporter(logger=logger, resolver=resolver)
        if logger:
            logger.info(f"Job {idx + 1}/{len(jobs)}: {job.settings.model_name}")
        try:
            result = exporter.export(job.root_node, job.settings)
        except OSError as e:
            if exporter.logger:
                exporter.logger.error(f"Cannot write '{job.settings.output_path}': {e}",
                                      job.settings.model_name, code=ErrorCode.EXP002)
            result = ExportResult(success=False, path=job.settings.output_path,
                                  message=str(e), error=e)
        results.append(result)
    return results
