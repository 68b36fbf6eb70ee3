# File: writers/audit_writer.py
# Purpose: 生成 audit.log，记录导出过程中的操作、错误、警告
# Notes:
# - 错误码体系：EXP（导出流程）、VAL（场景校验）、TEX（纹理）
# - 严重性：ERROR / WARNING / INFO
# - 格式：时间戳 | 严重性 | 错误码 | 消息 | 对象名

import time
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class AuditEntry:
    severity: str
    message: str
    code: str = ""
    object_name: Optional[str] = None
    timestamp: str = ""


class AuditLogger:
    """
    AuditLogger
    -----------
    收集导出过程的日志条目，并可保存为 audit.log。

    使用方式:
        audit = AuditLogger("Parts/NewPart/audit.log")
        audit.info("开始导出", "NewModel")
        audit.error(ErrorCode.TEX001, "纹理源文件不存在", "hull_diffuse")
        audit.save()
    """

    def __init__(self, filepath: str):
        self.filepath = filepath
        self.entries: List[AuditEntry] = []

    def _add_entry(self, severity: str, message: str,
                   code: str = "", object_name: Optional[str] = None) -> None:
        self.entries.append(AuditEntry(
            severity=severity,
            message=message,
            code=code,
            object_name=object_name,
            timestamp=time.strftime("%Y-%m-%d %H:%M:%S", time.localtime()),
        ))

    def info(self, message: str, object_name: Optional[str] = None) -> None:
        self._add_entry("INFO", message, "", object_name)

    def warning(self, code: str, message: str, object_name: Optional[str] = None) -> None:
        self._add_entry("WARNING", message, code, object_name)

    def error(self, code: str, message: str, object_name: Optional[str] = None) -> None:
        self._add_entry("ERROR", message, code, object_name)

    def save(self) -> None:
        """保存 audit.log 到文件"""
        with open(self.filepath, "w", encoding="utf-8") as f:
            f.write("# Mu Export Audit Log\n")
            f.write(f"# Generated: {time.strftime('%Y-%m-%d %H:%M:%S', time.localtime())}\n")
            f.write("# Format: [Timestamp] [Severity] [Code] Message | Object\n")
            f.write("#" + "=" * 70 + "\n\n")

            for entry in self.entries:
                line = f"[{entry.timestamp}] [{entry.severity}]"
                if entry.code:
                    line += f" [{entry.code}]"
                line += f" {entry.message}"
                if entry.object_name:
                    line += f" | Object: {entry.object_name}"
                f.write(line + "\n")

    def has_errors(self) -> bool:
        return any(e.severity == "ERROR" for e in self.entries)

    def has_warnings(self) -> bool:
        return any(e.severity == "WARNING" for e in self.entries)

    def get_summary(self) -> str:
        error_count = sum(1 for e in self.entries if e.severity == "ERROR")
        warning_count = sum(1 for e in self.entries if e.severity == "WARNING")
        info_count = sum(1 for e in self.entries if e.severity == "INFO")
        return f"Export finished: {error_count} errors, {warning_count} warnings, {info_count} info"


# ==================== 错误码定义 ====================

class ErrorCode:
    """错误码"""

    # 导出流程 EXP***
    EXP001 = "EXP001"  # 遍历/编码过程中异常
    EXP002 = "EXP002"  # 输出目录或文件无法创建

    # 场景校验 VAL***
    VAL001 = "VAL001"  # 场景数据不合法

    # 纹理 TEX***
    TEX001 = "TEX001"  # 纹理源文件缺失或无法读取
