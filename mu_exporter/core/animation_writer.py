# -*- coding: utf-8 -*-
"""
Mu Exporter - Animation Writer

- Writes the clips of a node's animation component: bounds, wrap mode, curves and keys
- Each curve names its target path, property and target component type
- Nothing is written for a node whose animation has no clips
"""

from __future__ import annotations
from typing import Optional

from .binary_writer import BinaryWriter
from .schema import Animation, AnimationClip, AnimationCurve, EntryType


class AnimationWriter:

    def __init__(self, binw: BinaryWriter):
        assert binw is not None
        self.binw = binw

    def write_animation(self, animation: Optional[Animation]) -> bool:
        """
        Animation record layout:
        - Animation tag, clip count (i32)
        - per clip: see _write_clip
        - default clip name (empty string when unset), play automatically (bool)

        Returns True when a record was written.
        """
        if animation is None or not animation.clips:
            return False

        binw = self.binw
        binw.write_entry(EntryType.ANIMATION)
        binw.write_int(len(animation.clips))
        for clip in animation.clips:
            self._write_clip(clip)

        binw.write_string(animation.default_clip or "")
        binw.write_bool(animation.play_automatically)
        return True

    def _write_clip(self, clip: AnimationClip) -> None:
        binw = self.binw
        binw.write_string(clip.name)
        binw.write_vector3(clip.bounds.center)
        binw.write_vector3(clip.bounds.size)
        binw.write_int(int(clip.wrap_mode))

        binw.write_int(len(clip.curves))
        for curve in clip.curves:
            self._write_curve(curve)

    def _write_curve(self, curve: AnimationCurve) -> None:
        """
        Curve layout:
        - path, property name (string)
        - target type, pre wrap mode, post wrap mode (i32)
        - key count, then time/value/in tangent/out tangent (f32) + tangent mode (i32) per key
        """
        binw = self.binw
        binw.write_string(curve.path)
        binw.write_string(curve.property_name)
        binw.write_int(int(curve.type))
        binw.write_int(int(curve.pre_wrap_mode))
        binw.write_int(int(curve.post_wrap_mode))

        binw.write_int(len(curve.keyframes))
        for key in curve.keyframes:
            binw.write_float(key.time)
            binw.write_float(key.value)
            binw.write_float(key.in_tangent)
            binw.write_float(key.out_tangent)
            binw.write_int(key.tangent_mode)
