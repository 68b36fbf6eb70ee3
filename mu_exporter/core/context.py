# -*- coding: utf-8 -*-
"""
Per-export state

One ExportContext is created by each export call and threaded through every
writer by reference. Nothing here is module-level, so two exports running at
the same time never share pools or paths.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from .binary_writer import BinaryWriter
from .resource_pool import ResourcePool, TexturePool
from .schema import Material
from ..config.export_settings import ExportSettings


@dataclass
class ExportContext:
    settings: ExportSettings
    binw: Optional[BinaryWriter] = None
    resolver: object = None
    logger: object = None
    materials: ResourcePool = field(default_factory=ResourcePool)
    textures: TexturePool = field(default_factory=TexturePool)
    written_files: List[str] = field(default_factory=list)
    report: Dict = field(default_factory=dict)

    def add_report_stat(self, section: str, key: str, value) -> None:
        self.report.setdefault(section, {})[key] = value

    def bump_stat(self, section: str, key: str, amount: int = 1) -> None:
        stats = self.report.setdefault(section, {})
        stats[key] = stats.get(key, 0) + amount

    def add_material(self, material: Material) -> int:
        return self.materials.add_or_get(material)

    def release(self) -> None:
        """Drop pools and stream references at the end of an export"""
        self.materials.clear()
        self.textures.clear()
        self.binw = None
