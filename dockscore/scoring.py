"""Weighted combinations of pairwise potentials forming a scoring function."""

from __future__ import annotations

from collections.abc import Iterable
from enum import Enum

from dockscore.potentials import (
    Ad4Electrostatic,
    Ad4HBond,
    Ad4Solvation,
    Ad4Vdw,
    Atom,
    AtomTyping,
    LinearAttraction,
    Potential,
    VinaGaussian,
    VinaHydrophobic,
    VinaNonDirHBond,
    VinaRepulsion,
    VinardoGaussian,
    VinardoHydrophobic,
    VinardoNonDirHBond,
    VinardoRepulsion,
)


class ScoringFunctionChoice(Enum):
    """The available scoring functions."""

    VINA = "vina"
    AD42 = "ad4"
    VINARDO = "vinardo"


def _build(
    choice: ScoringFunctionChoice, typing: AtomTyping
) -> tuple[list[Potential], str, float, float]:
    if choice is ScoringFunctionChoice.VINA:
        potentials: list[Potential] = [
            VinaGaussian(typing, 0, 0.5, 8.0),
            VinaGaussian(typing, 3, 2.0, 8.0),
            VinaRepulsion(typing, 0.0, 8.0),
            VinaHydrophobic(typing, 0.5, 1.5, 8.0),
            VinaNonDirHBond(typing, -0.7, 0, 8.0),
            LinearAttraction(typing, 20.0),
        ]
        return potentials, "xs", 8.0, 20.0
    if choice is ScoringFunctionChoice.VINARDO:
        potentials = [
            VinardoGaussian(typing, 0, 0.8, 8.0),
            VinardoRepulsion(typing, 0, 8.0),
            VinardoHydrophobic(typing, 0, 2.5, 8.0),
            VinardoNonDirHBond(typing, -0.6, 0, 8.0),
            LinearAttraction(typing, 20.0),
        ]
        return potentials, "xs", 8.0, 20.0
    potentials = [
        Ad4Vdw(typing, 0.5, 100000, 8.0),
        Ad4HBond(typing, 0.5, 100000, 8.0),
        Ad4Electrostatic(typing, 100, 20.48),
        Ad4Solvation(typing, 3.6, 0.01097, True, 20.48),
        LinearAttraction(typing, 20.0),
    ]
    return potentials, "ad", 20.48, 20.48


class ScoringFunction:
    """A weighted sum of pairwise potentials.

    ``weights`` starts with one weight per potential; any further weights
    belong to configuration-independent terms and are kept as given.
    """

    def __init__(
        self,
        choice: ScoringFunctionChoice | str,
        weights: Iterable[float],
        typing: AtomTyping,
    ) -> None:
        try:
            choice = ScoringFunctionChoice(choice)
        except ValueError:
            raise ValueError(f"unknown scoring function {choice!r}") from None
        self.choice = choice
        self.typing = typing
        self._potentials, self._atom_typing, self._cutoff, self._max_cutoff = _build(
            choice, typing
        )
        self._weights = tuple(float(w) for w in weights)
        if len(self._weights) < len(self._potentials):
            raise ValueError(
                f"{choice.value} needs at least {len(self._potentials)} weights, "
                f"got {len(self._weights)}"
            )

    @property
    def potentials(self) -> tuple[Potential, ...]:
        return tuple(self._potentials)

    @property
    def num_potentials(self) -> int:
        return len(self._potentials)

    @property
    def weights(self) -> list[float]:
        return list(self._weights)

    @property
    def cutoff(self) -> float:
        return self._cutoff

    @property
    def max_cutoff(self) -> float:
        return self._max_cutoff

    @property
    def atom_typing(self) -> str:
        """Kind of atom types the function is tabulated on: ``"xs"`` or ``"ad"``."""
        return self._atom_typing

    def eval(self, a: Atom, b: Atom, r: float) -> float:
        """Weighted energy of two atoms at distance ``r``; cutoffs are per term."""
        return sum(w * p.eval(a, b, r) for w, p in zip(self._weights, self._potentials))

    def eval_types(self, t1: int, t2: int, r: float) -> float:
        """Weighted energy of two atom types at distance ``r``."""
        return sum(
            w * p.eval_types(t1, t2, r) for w, p in zip(self._weights, self._potentials)
        )

    def atom_types(self) -> list[int]:
        return list(range(self.num_atom_types()))

    def num_atom_types(self) -> int:
        return self.typing.num_types(self._atom_typing)