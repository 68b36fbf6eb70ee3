# -*- coding: utf-8 -*-
"""
Shared resource pools (materials / textures)

- Membership is identity based: two equal-looking instances occupy two slots
- Indices are dense and assigned in order of first encounter
- Linear lookup; scenes carry tens to low hundreds of shared resources
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Generic, Iterator, List, TypeVar

from .schema import Texture, TextureType


T = TypeVar("T")


class ResourcePool(Generic[T]):
    """Identity-keyed deduplicating list"""

    def __init__(self):
        self._items: List[T] = []

    def index_of(self, item: T) -> int:
        for i, existing in enumerate(self._items):
            if existing is item:
                return i
        return -1

    def add_or_get(self, item: T) -> int:
        index = self.index_of(item)
        if index >= 0:
            return index
        self._items.append(item)
        return len(self._items) - 1

    def clear(self) -> None:
        self._items.clear()

    def __contains__(self, item) -> bool:
        return self.index_of(item) >= 0

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[T]:
        return iter(self._items)

    def __getitem__(self, index: int) -> T:
        return self._items[index]


@dataclass
class TextureEntry:
    """Pooled texture and the kind declared on first encounter"""
    texture: Texture
    kind: TextureType


class TexturePool(ResourcePool[TextureEntry]):
    """
    Texture pool keyed by the texture handle, not the entry.
    A texture first seen in a normal-map slot stays a normal map.
    """

    def index_of(self, texture) -> int:
        for i, entry in enumerate(self._items):
            if entry.texture is texture:
                return i
        return -1

    def add_or_get(self, texture: Texture, kind: TextureType = TextureType.TEXTURE) -> int:
        index = self.index_of(texture)
        if index >= 0:
            return index
        self._items.append(TextureEntry(texture, kind))
        return len(self._items) - 1
