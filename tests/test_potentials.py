import dataclasses
import math

import pytest

from dockscore.potentials import (
    MAX_FL,
    Ad4Electrostatic,
    Ad4HBond,
    Ad4Solvation,
    Ad4Vdw,
    AdTypeProperty,
    Atom,
    AtomTyping,
    LinearAttraction,
    Potential,
    VinaGaussian,
    VinaHydrophobic,
    VinaNonDirHBond,
    VinardoGaussian,
    VinardoRepulsion,
    VinaRepulsion,
    is_glue_type,
    is_glued,
    optimal_distance,
    optimal_distance_vinardo,
    slope_step,
    smooth_div,
    smoothen,
)

C_H, N_D, O_A, G0, C_G0, MET = range(6)
AD_C, AD_OA, AD_HD = range(3)


@pytest.fixture
def typing():
    return AtomTyping(
        xs_radii=(1.9, 1.8, 1.7, 0.0, 1.9, 1.2),
        xs_vinardo_radii=(2.0, 1.75, 1.6, 0.0, 2.0, 1.2),
        ad_properties=(
            AdTypeProperty("C", 2.0, 0.15, -0.0014, 33.51),
            AdTypeProperty("OA", 1.6, 0.2, -0.0025, 17.16, hb_depth=-5.0, hb_radius=1.9),
            AdTypeProperty("HD", 1.0, 0.02, 0.00051, 0.0, hb_depth=1.0, hb_radius=0.0),
        ),
        hydrophobic={C_H, C_G0},
        donors={N_D, MET},
        acceptors={O_A},
        glue={G0: {C_G0}},
        metal_donor=MET,
        metal_solvation_parameter=-0.0011,
    )


def test_slope_step_limits():
    assert slope_step(1.5, 0.5, 2.0) == 0.0
    assert slope_step(1.5, 0.5, 0.0) == 1.0
    assert slope_step(0.0, 1.0, -1.0) == 0.0
    assert slope_step(0.0, 1.0, 3.0) == 1.0


@pytest.mark.parametrize("x", [0.6, 0.9, 1.2])
def test_slope_step_reversed_ramps_sum_to_one(x):
    assert slope_step(0.5, 1.5, x) + slope_step(1.5, 0.5, x) == pytest.approx(1.0)


def test_smooth_div_cases():
    assert smooth_div(0.0, 5.0) == 0.0
    assert smooth_div(2.0, 0.0) == -MAX_FL
    assert smooth_div(-2.0, 0.0) == -MAX_FL
    assert smooth_div(3.5, 0.7) * 0.7 == pytest.approx(3.5)


def test_smoothen_inside_band_snaps_to_rij():
    assert smoothen(3.1, 3.0, 0.5) == 3.0
    assert smoothen(2.8, 3.0, 0.5) == 3.0


@pytest.mark.parametrize("r", [1.0, 5.0])
def test_smoothen_outside_band_moves_half_width_toward_rij(r):
    out = smoothen(r, 3.0, 0.5)
    assert abs(out - r) == pytest.approx(0.25)
    assert abs(out - 3.0) < abs(r - 3.0)


def test_glue_relations(typing):
    assert is_glue_type(typing, G0)
    assert not is_glue_type(typing, C_H)
    assert is_glued(typing, G0, C_G0)
    assert is_glued(typing, C_G0, G0)
    assert not is_glued(typing, G0, C_H)


def test_optimal_distances(typing):
    assert optimal_distance(typing, G0, C_H) == 0.0
    assert optimal_distance_vinardo(typing, C_H, G0) == 0.0
    assert optimal_distance(typing, C_H, O_A) == typing.xs_radius(C_H) + typing.xs_radius(O_A)
    assert optimal_distance_vinardo(typing, N_D, O_A) == (
        typing.xs_vinardo_radius(N_D) + typing.xs_vinardo_radius(O_A)
    )


def test_typing_queries(typing):
    assert typing.num_types("xs") == 6
    assert typing.num_types("ad") == 3
    assert typing.h_bond_possible(O_A, N_D)
    assert not typing.h_bond_possible(O_A, O_A)
    assert typing.is_hydrophobic(C_H)
    assert typing.ad_property(AD_OA).name == "OA"
    with pytest.raises(ValueError):
        typing.num_types("other")
    with pytest.raises(ValueError):
        typing.ad_property(3)
    with pytest.raises(ValueError):
        typing.xs_radius(6)


def test_base_potential_is_zero(typing):
    p = Potential(typing)
    assert p.eval(Atom(C_H), Atom(C_H), 1.0) == 0.0
    assert p.eval_types(C_H, C_H, 1.0) == 0.0


def test_gaussian_peaks_at_optimal_distance(typing):
    g = VinaGaussian(typing, 0.0, 0.5, 8.0)
    d = optimal_distance(typing, C_H, O_A)
    assert g.eval_types(C_H, O_A, d) == pytest.approx(1.0)
    assert g.eval_types(C_H, O_A, d + 1.0) < g.eval_types(C_H, O_A, d + 0.2)
    assert g.eval(Atom(C_H), Atom(O_A), d) == g.eval_types(C_H, O_A, d)


def test_vinardo_gaussian_uses_vinardo_radii(typing):
    g = VinardoGaussian(typing, 0.0, 0.8, 8.0)
    d = optimal_distance_vinardo(typing, C_H, C_H)
    assert g.eval_types(C_H, C_H, d) == pytest.approx(1.0)


def test_cutoff_and_untyped_atoms_give_zero(typing):
    g = VinaGaussian(typing, 0.0, 0.5, 8.0)
    assert g.eval_types(C_H, C_H, 8.0) == 0.0
    assert g.eval(Atom(xs=-1), Atom(C_H), 3.0) == 0.0
    assert g.eval(Atom(xs=99), Atom(C_H), 3.0) == 0.0


@pytest.mark.parametrize("cls", [VinaRepulsion, VinardoRepulsion])
def test_repulsion_only_inside_optimal_distance(typing, cls):
    rep = cls(typing, 0.0, 8.0)
    assert rep.eval_types(C_H, C_H, 5.0) == 0.0
    close = rep.eval_types(C_H, C_H, 1.0)
    closer = rep.eval_types(C_H, C_H, 0.5)
    assert 0.0 < close < closer


def test_hydrophobic_ramp(typing):
    h = VinaHydrophobic(typing, 0.5, 1.5, 8.0)
    d = optimal_distance(typing, C_H, C_H)
    assert h.eval_types(C_H, C_H, d + 0.5) == 1.0
    assert h.eval_types(C_H, C_H, d + 1.5) == 0.0
    assert h.eval_types(C_H, O_A, d) == 0.0


def test_h_bond_ramp(typing):
    hb = VinaNonDirHBond(typing, -0.7, 0.0, 8.0)
    d = optimal_distance(typing, N_D, O_A)
    assert hb.eval(Atom(N_D), Atom(O_A), d - 0.7) == 1.0
    assert hb.eval(Atom(N_D), Atom(O_A), d) == 0.0
    assert hb.eval(Atom(C_H), Atom(O_A), d - 1.0) == 0.0


def test_electrostatic_signs_and_decay(typing):
    e = Ad4Electrostatic(typing, 100.0, 20.48)
    plus, minus = Atom(ad=AD_C, charge=0.3), Atom(ad=AD_C, charge=-0.3)
    assert e.eval(plus, minus, 3.0) < 0.0
    assert e.eval(plus, plus, 3.0) > e.eval(plus, plus, 6.0) > 0.0
    assert e.eval(Atom(ad=AD_C), plus, 3.0) == 0.0
    assert e.eval(plus, plus, 25.0) == 0.0
    assert e.eval_types(AD_C, AD_C, 3.0) == 0.0
    assert math.isfinite(e.eval(plus, plus, 0.0))


def test_solvation_symmetry_decay_and_charge(typing):
    s = Ad4Solvation(typing, 3.6, 0.01097, True, 20.48)
    c, oa = Atom(ad=AD_C), Atom(ad=AD_OA)
    assert s.eval(c, oa, 2.0) == pytest.approx(s.eval(oa, c, 2.0))
    assert abs(s.eval(c, oa, 2.0)) > abs(s.eval(c, oa, 6.0))
    charged = Atom(ad=AD_C, charge=0.5)
    assert s.eval(charged, oa, 2.0) > s.eval(c, oa, 2.0)


def test_solvation_metal_and_errors(typing):
    s = Ad4Solvation(typing, 3.6, 0.01097, True, 20.48)
    metal, c = Atom(xs=MET), Atom(ad=AD_C)
    more = dataclasses.replace(typing, metal_solvation_parameter=0.01)
    s_more = Ad4Solvation(more, 3.6, 0.01097, True, 20.48)
    assert s_more.eval(metal, c, 2.0) > s.eval(metal, c, 2.0)
    with pytest.raises(ValueError):
        s.eval(Atom(xs=C_H), c, 2.0)
    with pytest.raises(ValueError):
        s.eval(Atom(ad=AD_C, charge=MAX_FL), c, 2.0)


def test_vdw_minimum_cap_and_hbond_pairs(typing):
    v = Ad4Vdw(typing, 0.0, 100000.0, 8.0)
    c = Atom(ad=AD_C)
    rij = 2 * typing.ad_property(AD_C).radius
    depth = typing.ad_property(AD_C).depth
    assert v.eval(c, c, rij) == pytest.approx(-depth)
    assert v.eval(c, c, 0.0) == 100000.0
    assert v.eval(Atom(ad=AD_OA), Atom(ad=AD_HD), 2.0) == 0.0
    smooth = Ad4Vdw(typing, 0.5, 100000.0, 8.0)
    assert smooth.eval(c, c, rij + 0.2) == pytest.approx(-depth)


def test_hbond_minimum_and_vdw_pairs(typing):
    h = Ad4HBond(typing, 0.0, 100000.0, 8.0)
    oa, hd = Atom(ad=AD_OA), Atom(ad=AD_HD)
    p_oa, p_hd = typing.ad_property(AD_OA), typing.ad_property(AD_HD)
    rij = p_oa.hb_radius + p_hd.hb_radius
    assert h.eval(oa, hd, rij) == pytest.approx(p_oa.hb_depth * p_hd.hb_depth)
    assert h.eval(Atom(ad=AD_C), Atom(ad=AD_C), 2.0) == 0.0
    with pytest.raises(ValueError):
        h.eval(Atom(ad=7), hd, 2.0)


def test_linear_attraction(typing):
    la = LinearAttraction(typing, 20.0)
    assert la.eval(Atom(G0), Atom(C_G0), 3.25) == 3.25
    assert la.eval_types(C_G0, G0, 7.5) == 7.5
    assert la.eval_types(G0, C_H, 3.0) == 0.0
    assert la.eval_types(G0, C_G0, 20.0) == 0.0