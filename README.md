# dockscore

Building blocks for scoring protein–ligand poses in molecular docking.

- **Pairwise potentials** (`dockscore.potentials`): Vina, Vinardo and
  AutoDock 4.2 style interaction terms (`VinaGaussian`, `VinaRepulsion`,
  `VinaHydrophobic`, `VinaNonDirHBond`, the `Vinardo*` counterparts,
  `Ad4Vdw`, `Ad4HBond`, `Ad4Electrostatic`, `Ad4Solvation`) and the
  macrocycle `LinearAttraction` term. Each term has `eval(a, b, r)` for two
  `Atom`s and `eval_types(t1, t2, r)` for two type indices, and returns 0 at
  or beyond its cutoff. The atom type tables (XS and Vinardo radii, AD type
  properties, hydrophobic, donor, acceptor and glue types) are supplied
  through an `AtomTyping` object. Helpers: `slope_step`, `smooth_div`,
  `smoothen`, `optimal_distance`, `optimal_distance_vinardo`,
  `is_glue_type`, `is_glued`.
- **Scoring functions** (`dockscore.scoring`): `ScoringFunction` builds the
  set of potentials for a `ScoringFunctionChoice` (`VINA`, `VINARDO` or
  `AD42`) and sums them with the given weights. It exposes `cutoff`,
  `max_cutoff`, `weights`, `atom_typing` (`"xs"` or `"ad"`),
  `atom_types()` and `num_atom_types()`.
- **Flexible trees** (`dockscore.tree`): `RigidBody`, `FirstSegment`,
  `Segment`, `Branch` and `HeteroTree` place atoms from a position,
  orientation quaternion (w, x, y, z) and torsion angles, and turn per-atom
  forces back into a force/torque pair and torsion derivatives.
  `count_torsions()` and `transform_ranges(f)` work over the whole tree.
- **Utilities**: `TriangularMatrix`, `triangular_matrix_index` and
  `triangular_matrix_index_permissive` (`dockscore.triangular`) for
  symmetric pair tables, and the thread-safe text progress bar
  `ParallelProgress` (`dockscore.progress`).

## Installation

```
pip install dockscore
```

Requires Python 3.10 or later and numpy.

## Example

```python
import numpy as np

from dockscore.potentials import Atom, AtomTyping, slope_step
from dockscore.scoring import ScoringFunction, ScoringFunctionChoice
from dockscore.tree import HeteroTree, RigidBody

typing = AtomTyping(
    xs_radii=(1.9, 1.8),
    xs_vinardo_radii=(2.0, 1.75),
    hydrophobic={0},
    donors={1},
    acceptors={1},
)
weights = [-0.0356, -0.00516, 0.840, -0.0351, -0.587, 50.0]
sf = ScoringFunction(ScoringFunctionChoice.VINA, weights, typing)

sf.eval_types(0, 1, 4.0)
sf.eval(Atom(xs=0), Atom(xs=1), 4.0)

slope_step(1.5, 0.5, 1.0)  # 0.5

local = np.array([[0.0, 0.0, 0.0], [1.0, 0.0, 0.0]])
coords = np.zeros_like(local)
ligand = HeteroTree(RigidBody([0.0, 0.0, 0.0], 0, 2))
ligand.set_conf(local, coords, ([1.0, 2.0, 3.0], [1.0, 0.0, 0.0, 0.0]), [])
# coords now holds [[1, 2, 3], [2, 2, 3]]
```

## What it does not do

The package evaluates terms and places atoms; it does not read or write
molecule files, does not tabulate energies on a distance grid, has no
configuration-independent terms (extra weights are kept but not used), and
has no pose search, optimiser or command-line program.

## Running the tests

```
pip install -e ".[test]"
pytest
```