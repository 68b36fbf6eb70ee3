# -*- coding: utf-8 -*-
"""
Texture asset resolution

Maps a texture handle to its source file and pixel data. Hosts that keep
textures somewhere other than plain files supply their own resolver with the
same two methods.
"""

from __future__ import annotations
import os

from PIL import Image

from .errors import TextureExportError
from .schema import Texture


class FileAssetResolver:
    """Resolves textures through Texture.source_path on the local filesystem"""

    def source_path(self, texture: Texture) -> str:
        path = texture.source_path
        if not path:
            raise TextureExportError(f"texture '{texture.name}' has no source file", texture.name)
        if not os.path.isfile(path):
            raise TextureExportError(f"texture source not found: {path}", texture.name)
        return path

    def load_image(self, texture: Texture) -> Image.Image:
        path = self.source_path(texture)
        try:
            with Image.open(path) as img:
                img.load()
                return img.copy()
        except OSError as e:
            raise TextureExportError(f"cannot read texture '{path}': {e}", texture.name) from e
