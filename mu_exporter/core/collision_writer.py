# -*- coding: utf-8 -*-
"""
Mu Exporter - Collider Writer

- At most one collider record per node, even when several variants are attached
- Precedence: Mesh > Box > Capsule > Sphere > Wheel, first match wins
- Records use the "2" entry tags (trigger flag first); the legacy tags are never written
"""

from __future__ import annotations
from typing import Iterable, Optional

from .binary_writer import BinaryWriter
from .mesh_writer import write_mesh
from .schema import (
    EntryType,
    MeshCollider,
    BoxCollider,
    CapsuleCollider,
    SphereCollider,
    WheelCollider,
    WheelFrictionCurve,
)


# ====== Precedence ======
COLLIDER_PRECEDENCE = (
    MeshCollider,
    BoxCollider,
    CapsuleCollider,
    SphereCollider,
    WheelCollider,
)


def select_collider(colliders: Iterable) -> Optional[object]:
    """
    Pick the collider to serialize. Colliders of unknown type are ignored.
    """
    colliders = list(colliders or ())
    for collider_type in COLLIDER_PRECEDENCE:
        for collider in colliders:
            if isinstance(collider, collider_type):
                return collider
    return None


# ====== Collider Writer ======
class CollisionWriter:

    def __init__(self, binw: BinaryWriter):
        assert binw is not None
        self.binw = binw

    def write_colliders(self, colliders: Iterable) -> Optional[object]:
        """
        Write the winning collider record; returns it (None when nothing was written).
        """
        collider = select_collider(colliders)
        if collider is None:
            return None

        if isinstance(collider, MeshCollider):
            self._write_mesh_collider(collider)
        elif isinstance(collider, BoxCollider):
            self._write_box_collider(collider)
        elif isinstance(collider, CapsuleCollider):
            self._write_capsule_collider(collider)
        elif isinstance(collider, SphereCollider):
            self._write_sphere_collider(collider)
        else:
            self._write_wheel_collider(collider)
        return collider

    # ====== Variants ======
    def _write_mesh_collider(self, mc: MeshCollider) -> None:
        binw = self.binw
        binw.write_entry(EntryType.MESH_COLLIDER2)
        binw.write_bool(mc.is_trigger)
        binw.write_bool(mc.convex)
        write_mesh(binw, mc.mesh)

    def _write_box_collider(self, bc: BoxCollider) -> None:
        binw = self.binw
        binw.write_entry(EntryType.BOX_COLLIDER2)
        binw.write_bool(bc.is_trigger)
        binw.write_vector3(bc.size)
        binw.write_vector3(bc.center)

    def _write_capsule_collider(self, cc: CapsuleCollider) -> None:
        binw = self.binw
        binw.write_entry(EntryType.CAPSULE_COLLIDER2)
        binw.write_bool(cc.is_trigger)
        binw.write_float(cc.radius)
        binw.write_float(cc.height)
        binw.write_int(cc.direction)
        binw.write_vector3(cc.center)

    def _write_sphere_collider(self, sc: SphereCollider) -> None:
        binw = self.binw
        binw.write_entry(EntryType.SPHERE_COLLIDER2)
        binw.write_bool(sc.is_trigger)
        binw.write_float(sc.radius)
        binw.write_vector3(sc.center)

    def _write_wheel_collider(self, wc: WheelCollider) -> None:
        """
        Wheel layout:
        - mass, radius, suspension distance (f32)
        - center (3 f32)
        - suspension spring: spring, damper, target position (f32)
        - forward friction curve (5 f32), sideways friction curve (5 f32)
        """
        binw = self.binw
        binw.write_entry(EntryType.WHEEL_COLLIDER)
        binw.write_float(wc.mass)
        binw.write_float(wc.radius)
        binw.write_float(wc.suspension_distance)
        binw.write_vector3(wc.center)

        spring = wc.suspension_spring
        binw.write_float(spring.spring)
        binw.write_float(spring.damper)
        binw.write_float(spring.target_position)

        self._write_friction(wc.forward_friction)
        self._write_friction(wc.sideways_friction)

    def _write_friction(self, curve: WheelFrictionCurve) -> None:
        self.binw.write_floats((
            curve.extremum_slip,
            curve.extremum_value,
            curve.asymptote_slip,
            curve.asymptote_value,
            curve.stiffness,
        ))
