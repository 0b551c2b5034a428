"""Kinematic trees of rigid fragments joined by rotatable bonds."""

from __future__ import annotations

import math
from collections.abc import Callable, Iterable, Iterator, Sequence

import numpy as np

from dockscore.potentials import EPSILON_FL

ForceTorque = tuple[np.ndarray, np.ndarray]

_IDENTITY = np.array([1.0, 0.0, 0.0, 0.0])
_DONE = object()


def _qmul(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    aw, ax, ay, az = a
    bw, bx, by, bz = b
    return np.array(
        [
            aw * bw - ax * bx - ay * by - az * bz,
            aw * bx + ax * bw + ay * bz - az * by,
            aw * by - ax * bz + ay * bw + az * bx,
            aw * bz + ax * by - ay * bx + az * bw,
        ]
    )


def _angle_to_quaternion(axis: np.ndarray, angle: float) -> np.ndarray:
    half = angle / 2
    return np.concatenate(([math.cos(half)], math.sin(half) * np.asarray(axis, float)))


def _normalize(q: np.ndarray) -> np.ndarray:
    norm = float(np.linalg.norm(q))
    if norm < EPSILON_FL:
        raise ValueError("cannot normalize a zero quaternion")
    return q / norm


def _quaternion_to_matrix(q: np.ndarray) -> np.ndarray:
    w, x, y, z = q
    return np.array(
        [
            [w * w + x * x - y * y - z * z, 2 * (x * y - w * z), 2 * (x * z + w * y)],
            [2 * (x * y + w * z), w * w - x * x + y * y - z * z, 2 * (y * z - w * x)],
            [2 * (x * z - w * y), 2 * (y * z + w * x), w * w - x * x - y * y + z * z],
        ]
    )


class Frame:
    """A coordinate frame: an origin and an orientation quaternion (w, x, y, z)."""

    def __init__(self, origin: Sequence[float]) -> None:
        self._origin = np.array(origin, dtype=float)
        self._set_orientation(_IDENTITY)

    @property
    def origin(self) -> np.ndarray:
        return self._origin.copy()

    @property
    def orientation(self) -> np.ndarray:
        return self._orientation_q.copy()

    def _set_orientation(self, q: Sequence[float]) -> None:
        self._orientation_q = np.array(q, dtype=float)
        self._orientation_m = _quaternion_to_matrix(self._orientation_q)

    def local_to_lab(self, local_coords: Sequence[float]) -> np.ndarray:
        """Map a point, or an (n, 3) array of points, from frame to lab coordinates."""
        local = np.asarray(local_coords, dtype=float)
        return self._origin + local @ self._orientation_m.T

    def local_to_lab_direction(self, local_direction: Sequence[float]) -> np.ndarray:
        """Rotate a direction from frame to lab coordinates."""
        return np.asarray(local_direction, dtype=float) @ self._orientation_m.T


class AtomRange:
    """A half-open range ``[begin, end)`` of atom indices."""

    def __init__(self, begin: int, end: int) -> None:
        if end < begin:
            raise ValueError(f"range end {end} precedes begin {begin}")
        self.begin = begin
        self.end = end

    def transform(self, f: Callable[[int], int]) -> None:
        """Move the range so that it starts at ``f(begin)``, keeping its length."""
        length = self.end - self.begin
        self.begin = f(self.begin)
        self.end = self.begin + length


class AtomFrame(Frame, AtomRange):
    """A frame that owns a range of atoms."""

    def __init__(self, origin: Sequence[float], begin: int, end: int) -> None:
        Frame.__init__(self, origin)
        AtomRange.__init__(self, begin, end)

    def set_coords(self, local_coords: Sequence[Sequence[float]], coords) -> None:
        """Write lab coordinates of the owned atoms into ``coords``."""
        local = np.asarray(local_coords, dtype=float)[self.begin : self.end]
        coords[self.begin : self.end] = self.local_to_lab(local.reshape(-1, 3))

    def sum_force_and_torque(self, coords, forces) -> ForceTorque:
        """Total force on the owned atoms and its torque about the origin."""
        pos = np.asarray(coords, dtype=float)[self.begin : self.end].reshape(-1, 3)
        f = np.asarray(forces, dtype=float)[self.begin : self.end].reshape(-1, 3)
        force = f.sum(axis=0)
        torque = np.cross(pos - self._origin, f).sum(axis=0) if len(f) else np.zeros(3)
        return force, torque


class RigidBody(AtomFrame):
    """A freely positioned and oriented root fragment."""

    def set_conf(self, local_coords, coords, position, orientation) -> None:
        self._origin = np.array(position, dtype=float)
        self._set_orientation(orientation)
        self.set_coords(local_coords, coords)

    def derivative(self, force_torque: ForceTorque) -> ForceTorque:
        """Position and orientation gradients: the force and the torque."""
        force, torque = force_torque
        return np.array(force, dtype=float), np.array(torque, dtype=float)

    def count_torsions(self) -> int:
        return 0


class AxisFrame(AtomFrame):
    """A frame rotating about the axis from ``axis_root`` to its origin."""

    def __init__(self, origin, begin: int, end: int, axis_root) -> None:
        super().__init__(origin, begin, end)
        diff = self._origin - np.asarray(axis_root, dtype=float)
        norm = float(np.linalg.norm(diff))
        if norm < EPSILON_FL:
            raise ValueError("rotation axis has zero length")
        self._axis = diff / norm

    @property
    def axis(self) -> np.ndarray:
        return self._axis.copy()

    def derivative(self, force_torque: ForceTorque) -> float:
        """Torsion gradient: the torque projected on the axis."""
        return float(np.dot(force_torque[1], self._axis))


class Segment(AxisFrame):
    """A fragment attached to a parent frame by a rotatable bond."""

    def __init__(self, origin, begin: int, end: int, axis_root, parent: Frame) -> None:
        super().__init__(origin, begin, end, axis_root)
        if np.any(np.abs(parent.orientation - _IDENTITY) >= EPSILON_FL):
            raise ValueError("parent frame must have the identity orientation")
        self._relative_axis = self._axis.copy()
        self._relative_origin = self._origin - parent.origin

    def set_conf(self, parent: Frame, local_coords, coords, torsions: Iterator[float]) -> None:
        """Place the segment, consuming one torsion angle from ``torsions``."""
        torsion = next(torsions)
        self._origin = parent.local_to_lab(self._relative_origin)
        self._axis = parent.local_to_lab_direction(self._relative_axis)
        q = _qmul(_angle_to_quaternion(self._axis, torsion), parent.orientation)
        self._set_orientation(_normalize(q))
        self.set_coords(local_coords, coords)

    def count_torsions(self) -> int:
        return 1


class FirstSegment(AxisFrame):
    """A root fragment that can only rotate about a fixed axis."""

    def set_conf(self, local_coords, coords, torsion: float) -> None:
        self._set_orientation(_angle_to_quaternion(self._axis, torsion))
        self.set_coords(local_coords, coords)

    def count_torsions(self) -> int:
        return 1


def _children_derivative(
    children: Iterable[Branch], origin: np.ndarray, coords, forces, ft: ForceTorque
) -> tuple[ForceTorque, list[float]]:
    force, torque = ft
    derivs: list[float] = []
    for child in children:
        (cf, ct), cd = child.derivative(coords, forces)
        force = force + cf
        torque = torque + np.cross(child.node.origin - origin, cf) + ct
        derivs.extend(cd)
    return (force, torque), derivs


class Branch:
    """A segment and the branches hanging from it."""

    def __init__(self, node: Segment, children: Iterable[Branch] = ()) -> None:
        self.node = node
        self.children = list(children)

    def set_conf(self, parent: Frame, local_coords, coords, torsions: Iterator[float]) -> None:
        """Place the subtree, consuming its torsions in depth-first order."""
        self.node.set_conf(parent, local_coords, coords, torsions)
        for child in self.children:
            child.set_conf(self.node, local_coords, coords, torsions)

    def derivative(self, coords, forces) -> tuple[ForceTorque, list[float]]:
        """Subtree force and torque, and torsion gradients in depth-first order."""
        ft = self.node.sum_force_and_torque(coords, forces)
        ft, child_derivs = _children_derivative(
            self.children, self.node.origin, coords, forces, ft
        )
        return ft, [self.node.derivative(ft), *child_derivs]

    def count_torsions(self) -> int:
        return self.node.count_torsions() + sum(c.count_torsions() for c in self.children)

    def transform_ranges(self, f: Callable[[int], int]) -> None:
        self.node.transform(f)
        for child in self.children:
            child.transform_ranges(f)


class HeteroTree:
    """A tree rooted at a rigid body (ligand) or a first segment (flexible residue)."""

    def __init__(self, node: RigidBody | FirstSegment, children: Iterable[Branch] = ()) -> None:
        self.node = node
        self.children = list(children)

    def set_conf(self, local_coords, coords, rigid, torsions: Iterable[float]) -> None:
        """Place every atom of the tree.

        For a rigid-body root ``rigid`` is ``(position, orientation)``; for a
        first-segment root it is ``None`` and the root torsion comes first.
        """
        it = iter(torsions)
        try:
            if isinstance(self.node, RigidBody):
                if rigid is None:
                    raise ValueError("a rigid-body root needs a position and orientation")
                position, orientation = rigid
                self.node.set_conf(local_coords, coords, position, orientation)
            else:
                self.node.set_conf(local_coords, coords, next(it))
            for child in self.children:
                child.set_conf(self.node, local_coords, coords, it)
        except StopIteration:
            raise ValueError("too few torsions for the tree") from None
        if next(it, _DONE) is not _DONE:
            raise ValueError("too many torsions for the tree")

    def derivative(self, coords, forces) -> tuple[ForceTorque | None, list[float]]:
        """Rigid-body gradient (``None`` for a first-segment root) and torsion gradients."""
        ft = self.node.sum_force_and_torque(coords, forces)
        ft, child_derivs = _children_derivative(
            self.children, self.node.origin, coords, forces, ft
        )
        if isinstance(self.node, RigidBody):
            return self.node.derivative(ft), child_derivs
        return None, [self.node.derivative(ft), *child_derivs]

    def count_torsions(self) -> int:
        return self.node.count_torsions() + sum(c.count_torsions() for c in self.children)

    def transform_ranges(self, f: Callable[[int], int]) -> None:
        self.node.transform(f)
        for child in self.children:
            child.transform_ranges(f)