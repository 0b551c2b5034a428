"""Scoring potentials, scoring functions and flexible trees for molecular docking."""

__version__ = "0.1.0"

__all__ = ["triangular", "progress", "potentials", "scoring", "tree"]