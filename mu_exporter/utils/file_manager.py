# File: utils/file_manager.py
# Purpose: 统一文件管理
# Notes:
# - 目录创建（失败直接抛出，由调用方处理）
# - 纹理复制与输出文件命名
# - 残留文件删除

import os
import shutil


class FileManager:
    """
    文件管理器

    导出流程中所有磁盘操作的统一入口
    """

    @staticmethod
    def ensure_directory(directory: str) -> None:
        """
        确保目录存在；创建失败时异常向上传播

        参数:
            directory: 目录路径
        """
        if directory and not os.path.isdir(directory):
            os.makedirs(directory, exist_ok=True)

    @staticmethod
    def output_path(output_dir: str, filename: str) -> str:
        """
        拼接输出目录与文件名

        参数:
            output_dir: 输出目录
            filename: 文件名（含扩展名）
        """
        return os.path.join(output_dir, filename)

    @staticmethod
    def is_same_file(source: str, destination: str) -> bool:
        """
        两个路径是否指向同一文件（目标不存在时为 False）
        """
        if not (os.path.exists(source) and os.path.exists(destination)):
            return False
        return os.path.samefile(source, destination)

    @staticmethod
    def copy_file(source: str, destination: str) -> str:
        """
        原样复制文件（覆盖已存在的目标；源与目标为同一文件时不做任何事）

        返回:
            目标路径
        """
        if FileManager.is_same_file(source, destination):
            return destination
        shutil.copyfile(source, destination)
        return destination

    @staticmethod
    def get_file_extension(file_path: str) -> str:
        """
        获取小写扩展名（不含点号）

        参数:
            file_path: 文件路径
        """
        return os.path.splitext(file_path)[1].lstrip(".").lower()

    @staticmethod
    def remove_file(file_path: str) -> bool:
        """
        删除文件

        返回:
            是否删除成功
        """
        try:
            if os.path.exists(file_path):
                os.remove(file_path)
                return True
            return False
        except OSError:
            return False
