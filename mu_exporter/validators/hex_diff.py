# 相对路径: validators/hex_diff.py
# 主要功能: 两个导出 .mu / .mbm 文件的逐字节对比，输出差异报告 (偏移量、值)。
#
# 注意:
#   - 用于确认同一场景重复导出得到完全一致的字节流
#   - 大文件分块读取

from typing import Dict, List

import numpy as np


class HexDiff:
    """十六进制差异比对器"""

    def __init__(self, chunk_size: int = 65536):
        self.chunk_size = chunk_size

    def compare_files(self, file1: str, file2: str, max_diffs: int = 100) -> Dict:
        """
        对比两个二进制文件。
        参数:
            file1, file2: 文件路径
            max_diffs: 最大记录差异数量
        返回:
            {"file1", "file2", "diffs", "total_diffs", "same"}
            长度不同时，较短文件之后的每个字节记为 EOF 差异
        """
        diffs: List[Dict] = []
        total_diffs = 0
        offset = 0

        with open(file1, "rb") as f1, open(file2, "rb") as f2:
            while True:
                b1 = f1.read(self.chunk_size)
                b2 = f2.read(self.chunk_size)
                if not b1 and not b2:
                    break

                a1 = np.frombuffer(b1, dtype=np.uint8)
                a2 = np.frombuffer(b2, dtype=np.uint8)
                common = min(len(a1), len(a2))

                positions = np.flatnonzero(a1[:common] != a2[:common]).tolist()
                positions.extend(range(common, max(len(a1), len(a2))))
                total_diffs += len(positions)

                for i in positions:
                    if len(diffs) >= max_diffs:
                        break
                    diffs.append({
                        "offset": offset + i,
                        "file1_val": f"{int(a1[i]):02X}" if i < len(a1) else "EOF",
                        "file2_val": f"{int(a2[i]):02X}" if i < len(a2) else "EOF",
                    })
                offset += max(len(a1), len(a2))

        return {
            "file1": file1,
            "file2": file2,
            "diffs": diffs,
            "total_diffs": total_diffs,
            "same": total_diffs == 0,
        }

    def format_report(self, result: Dict) -> str:
        lines = [
            f"Compare: {result['file1']} vs {result['file2']}",
            f"Differences: {result['total_diffs']}",
        ]
        if result["same"]:
            lines.append("Result: identical")
        else:
            lines.append("Result: files differ")
            for d in result["diffs"]:
                lines.append(f"  @{d['offset']:08X}: {d['file1_val']} != {d['file2_val']}")
            hidden = result["total_diffs"] - len(result["diffs"])
            if hidden > 0:
                lines.append(f"  ... {hidden} more")
        return "\n".join(lines)
