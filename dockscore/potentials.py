"""Pairwise interaction terms for the Vina, Vinardo and AD4.2 scoring functions."""

from __future__ import annotations

import math
import sys
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from types import MappingProxyType

EPSILON_FL = sys.float_info.epsilon
MAX_FL = sys.float_info.max


def _not_max(x: float) -> bool:
    return x < 0.1 * MAX_FL


@dataclass(frozen=True)
class AdTypeProperty:
    """Parameters of one AutoDock atom type."""

    name: str
    radius: float
    depth: float
    solvation: float
    volume: float
    hb_depth: float = 0.0
    hb_radius: float = 0.0


@dataclass(frozen=True)
class Atom:
    """An atom as seen by the potentials: its type indices and partial charge.

    A negative type index means the atom has no type of that kind.
    """

    xs: int = -1
    ad: int = -1
    charge: float = 0.0


@dataclass(frozen=True)
class AtomTyping:
    """Atom-type tables used by the potentials.

    ``glue`` maps each glue type to the set of types it is glued to.
    ``metal_donor`` is the XS type whose solvation comes from
    ``metal_solvation_parameter``.
    """

    xs_radii: tuple[float, ...]
    xs_vinardo_radii: tuple[float, ...]
    ad_properties: tuple[AdTypeProperty, ...] = ()
    hydrophobic: frozenset[int] = frozenset()
    donors: frozenset[int] = frozenset()
    acceptors: frozenset[int] = frozenset()
    glue: Mapping[int, frozenset[int]] = field(default_factory=dict)
    metal_donor: int | None = None
    metal_solvation_parameter: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "xs_radii", tuple(self.xs_radii))
        object.__setattr__(self, "xs_vinardo_radii", tuple(self.xs_vinardo_radii))
        object.__setattr__(self, "ad_properties", tuple(self.ad_properties))
        object.__setattr__(self, "hydrophobic", frozenset(self.hydrophobic))
        object.__setattr__(self, "donors", frozenset(self.donors))
        object.__setattr__(self, "acceptors", frozenset(self.acceptors))
        glue = {k: frozenset(v) for k, v in self.glue.items()}
        object.__setattr__(self, "glue", MappingProxyType(glue))
        if len(self.xs_vinardo_radii) != len(self.xs_radii):
            raise ValueError("XS and Vinardo radius tables differ in length")

    @property
    def xs_size(self) -> int:
        return len(self.xs_radii)

    @property
    def ad_size(self) -> int:
        return len(self.ad_properties)

    def has_xs(self, t: int) -> bool:
        return 0 <= t < self.xs_size

    def has_ad(self, t: int) -> bool:
        return 0 <= t < self.ad_size

    def xs_radius(self, t: int) -> float:
        if not self.has_xs(t):
            raise ValueError(f"unknown XS atom type {t}")
        return self.xs_radii[t]

    def xs_vinardo_radius(self, t: int) -> float:
        if not self.has_xs(t):
            raise ValueError(f"unknown XS atom type {t}")
        return self.xs_vinardo_radii[t]

    def is_hydrophobic(self, t: int) -> bool:
        return t in self.hydrophobic

    def h_bond_possible(self, t1: int, t2: int) -> bool:
        return (t1 in self.donors and t2 in self.acceptors) or (
            t2 in self.donors and t1 in self.acceptors
        )

    def ad_property(self, t: int) -> AdTypeProperty:
        if not self.has_ad(t):
            raise ValueError(f"unknown AD atom type {t}")
        return self.ad_properties[t]

    def num_types(self, kind: str) -> int:
        """Number of types of ``kind``, which is ``"xs"`` or ``"ad"``."""
        if kind == "xs":
            return self.xs_size
        if kind == "ad":
            return self.ad_size
        raise ValueError(f"unknown atom typing {kind!r}")


def slope_step(x_bad: float, x_good: float, x: float) -> float:
    """Piecewise-linear ramp from 0 at ``x_bad`` to 1 at ``x_good``."""
    if x_bad < x_good:
        if x <= x_bad:
            return 0.0
        if x >= x_good:
            return 1.0
    else:
        if x >= x_bad:
            return 0.0
        if x <= x_good:
            return 1.0
    return (x - x_bad) / (x_good - x_bad)


def smooth_div(x: float, y: float) -> float:
    """Division that returns 0 for tiny numerators and saturates for tiny divisors."""
    if abs(x) < EPSILON_FL:
        return 0.0
    if abs(y) < EPSILON_FL:
        return MAX_FL if x * y > 0 else -MAX_FL
    return x / y


def smoothen(r: float, rij: float, smoothing: float) -> float:
    """Flatten ``r`` to ``rij`` within half the smoothing width either side."""
    half = smoothing * 0.5
    if r > rij + half:
        return r - half
    if r < rij - half:
        return r + half
    return rij


def is_glue_type(typing: AtomTyping, xs_t: int) -> bool:
    return xs_t in typing.glue


def is_glued(typing: AtomTyping, xs_t1: int, xs_t2: int) -> bool:
    """True if one type is a glue type and the other is its partner."""
    return xs_t2 in typing.glue.get(xs_t1, ()) or xs_t1 in typing.glue.get(xs_t2, ())


def optimal_distance(typing: AtomTyping, xs_t1: int, xs_t2: int) -> float:
    if is_glue_type(typing, xs_t1) or is_glue_type(typing, xs_t2):
        return 0.0
    return typing.xs_radius(xs_t1) + typing.xs_radius(xs_t2)


def optimal_distance_vinardo(typing: AtomTyping, xs_t1: int, xs_t2: int) -> float:
    if is_glue_type(typing, xs_t1) or is_glue_type(typing, xs_t2):
        return 0.0
    return typing.xs_vinardo_radius(xs_t1) + typing.xs_vinardo_radius(xs_t2)


class Potential:
    """A pairwise term; the base term is zero everywhere."""

    def __init__(self, typing: AtomTyping, cutoff: float = 0.0) -> None:
        self.typing = typing
        self.cutoff = cutoff

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        return 0.0

    def eval_types(self, t1: int, t2: int, r: float) -> float:
        return 0.0


class _XsPotential(Potential):
    """A term defined on XS types; atoms without an XS type contribute nothing."""

    def _distance(self, t1: int, t2: int) -> float:
        return optimal_distance(self.typing, t1, t2)

    def _value(self, t1: int, t2: int, r: float) -> float:
        raise NotImplementedError

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        if not (self.typing.has_xs(a.xs) and self.typing.has_xs(b.xs)):
            return 0.0
        return self._value(a.xs, b.xs, r)

    def eval_types(self, t1: int, t2: int, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        return self._value(t1, t2, r)


class _VinardoDistance(_XsPotential):
    def _distance(self, t1: int, t2: int) -> float:
        return optimal_distance_vinardo(self.typing, t1, t2)


class _Gaussian(_XsPotential):
    def __init__(self, typing: AtomTyping, offset: float, width: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.offset = offset
        self.width = width

    def _value(self, t1: int, t2: int, r: float) -> float:
        x = r - (self._distance(t1, t2) + self.offset)
        return math.exp(-((x / self.width) ** 2))


class _Repulsion(_XsPotential):
    def __init__(self, typing: AtomTyping, offset: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.offset = offset

    def _value(self, t1: int, t2: int, r: float) -> float:
        d = r - (self._distance(t1, t2) + self.offset)
        return 0.0 if d > 0.0 else d * d


class _Hydrophobic(_XsPotential):
    def __init__(self, typing: AtomTyping, good: float, bad: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.good = good
        self.bad = bad

    def _value(self, t1: int, t2: int, r: float) -> float:
        if self.typing.is_hydrophobic(t1) and self.typing.is_hydrophobic(t2):
            return slope_step(self.bad, self.good, r - self._distance(t1, t2))
        return 0.0


class _NonDirHBond(_XsPotential):
    def __init__(self, typing: AtomTyping, good: float, bad: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.good = good
        self.bad = bad

    def _value(self, t1: int, t2: int, r: float) -> float:
        if self.typing.h_bond_possible(t1, t2):
            return slope_step(self.bad, self.good, r - self._distance(t1, t2))
        return 0.0


class VinaGaussian(_Gaussian):
    """Gaussian steric attraction around the Vina optimal distance."""


class VinaRepulsion(_Repulsion):
    """Quadratic repulsion inside the Vina optimal distance."""


class VinaHydrophobic(_Hydrophobic):
    """Hydrophobic contact ramp on Vina surface distance."""


class VinaNonDirHBond(_NonDirHBond):
    """Non-directional hydrogen-bond ramp on Vina surface distance."""


class VinardoGaussian(_VinardoDistance, _Gaussian):
    """Gaussian steric attraction around the Vinardo optimal distance."""


class VinardoRepulsion(_VinardoDistance, _Repulsion):
    """Quadratic repulsion inside the Vinardo optimal distance."""


class VinardoHydrophobic(_VinardoDistance, _Hydrophobic):
    """Hydrophobic contact ramp on Vinardo surface distance."""


class VinardoNonDirHBond(_VinardoDistance, _NonDirHBond):
    """Non-directional hydrogen-bond ramp on Vinardo surface distance."""


class Ad4Electrostatic(Potential):
    """Coulomb term with distance-dependent dielectric, capped."""

    def __init__(self, typing: AtomTyping, cap: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.cap = cap

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        q1q2 = a.charge * b.charge * 332.0
        big_b = 78.4 + 8.5525
        l_b = -big_b * 0.003627
        diel = -8.5525 + big_b / (1 + 7.7839 * math.exp(l_b * r))
        if r < EPSILON_FL:
            return q1q2 * self.cap / diel
        return q1q2 * min(self.cap, 1.0 / (r * diel))


class Ad4Solvation(Potential):
    """Gaussian-weighted desolvation term."""

    def __init__(
        self,
        typing: AtomTyping,
        desolvation_sigma: float,
        solvation_q: float,
        charge_dependent: bool,
        cutoff: float,
    ) -> None:
        super().__init__(typing, cutoff)
        self.desolvation_sigma = desolvation_sigma
        self.solvation_q = solvation_q
        self.charge_dependent = charge_dependent

    def _volume(self, a: Atom) -> float:
        if self.typing.has_ad(a.ad):
            return self.typing.ad_properties[a.ad].volume
        if self.typing.has_xs(a.xs):
            return 4.0 * math.pi / 3.0 * self.typing.xs_radii[a.xs] ** 3
        raise ValueError(f"atom {a} has no known type for its volume")

    def _solvation_parameter(self, a: Atom) -> float:
        if self.typing.has_ad(a.ad):
            return self.typing.ad_properties[a.ad].solvation
        if self.typing.metal_donor is not None and a.xs == self.typing.metal_donor:
            return self.typing.metal_solvation_parameter
        raise ValueError(f"atom {a} has no known solvation parameter")

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        q1, q2 = a.charge, b.charge
        if not (_not_max(q1) and _not_max(q2)):
            raise ValueError("atom charge is not set")
        solv1 = self._solvation_parameter(a)
        solv2 = self._solvation_parameter(b)
        volume1 = self._volume(a)
        volume2 = self._volume(b)
        my_solv = self.solvation_q if self.charge_dependent else 0.0
        value = (
            (solv1 + my_solv * abs(q1)) * volume2 + (solv2 + my_solv * abs(q2)) * volume1
        ) * math.exp(-0.5 * (r / self.desolvation_sigma) ** 2)
        if not _not_max(value):
            raise ValueError("solvation term overflowed")
        return value


class Ad4Vdw(Potential):
    """Smoothed, capped 12-6 van der Waals term for non-hydrogen-bonding pairs."""

    def __init__(self, typing: AtomTyping, smoothing: float, cap: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.smoothing = smoothing
        self.cap = cap

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        p1 = self.typing.ad_property(a.ad)
        p2 = self.typing.ad_property(b.ad)
        hb_depth = p1.hb_depth * p2.hb_depth
        vdw_rij = p1.radius + p2.radius
        vdw_depth = math.sqrt(p1.depth * p2.depth)
        if hb_depth < 0:
            return 0.0
        r = smoothen(r, vdw_rij, self.smoothing)
        c_12 = vdw_rij**12 * vdw_depth
        c_6 = vdw_rij**6 * vdw_depth * 2.0
        r6 = r**6
        r12 = r**12
        if r12 > EPSILON_FL and r6 > EPSILON_FL:
            return min(self.cap, c_12 / r12 - c_6 / r6)
        return self.cap


class Ad4HBond(Potential):
    """Smoothed, capped 12-10 hydrogen-bond term for donor/acceptor pairs."""

    def __init__(self, typing: AtomTyping, smoothing: float, cap: float, cutoff: float) -> None:
        super().__init__(typing, cutoff)
        self.smoothing = smoothing
        self.cap = cap

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        p1 = self.typing.ad_property(a.ad)
        p2 = self.typing.ad_property(b.ad)
        hb_rij = p1.hb_radius + p2.hb_radius
        hb_depth = p1.hb_depth * p2.hb_depth
        if hb_depth >= 0:
            return 0.0
        r = smoothen(r, hb_rij, self.smoothing)
        c_12 = hb_rij**12 * -hb_depth * 10 / 2.0
        c_10 = hb_rij**10 * -hb_depth * 12 / 2.0
        r10 = r**10
        r12 = r**12
        if r12 > EPSILON_FL and r10 > EPSILON_FL:
            return min(self.cap, c_12 / r12 - c_10 / r10)
        return self.cap


class LinearAttraction(Potential):
    """Linear pull between glue atoms and their partners, for macrocycle closure."""

    def __init__(self, typing: AtomTyping, cutoff: float) -> None:
        super().__init__(typing, cutoff)

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        return self.eval_types(a.xs, b.xs, r)

    def eval_types(self, t1: int, t2: int, r: float) -> float:
        if r >= self.cutoff:
            return 0.0
        return r if is_glued(self.typing, t1, t2) else 0.0


def _as_tuple(values: Iterable[float]) -> tuple[float, ...]:
    return tuple(values)