#!/usr/bin/env python3
"""
Validation tests for pvt module.
Run with: python3 -m pytest pywellsim/tests/ -v
Or standalone: python3 pywellsim/tests/test_pvt.py
"""

import sys
import os
import warnings
import numpy as np

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pywellsim.pvt as pvt
from pywellsim.constants import R_SI

RTOL = 1e-12

# =============================================================================
# Density
# =============================================================================

def test_constant_density_ignores_pressure():
    """Constant density returns its value at any pressure"""
    model = pvt.ConstantDensityModel(850.0)
    for p in [0.0, 1e5, 3.5e7, -1.0]:
        assert model.compute_density(p) == 850.0

def test_constant_density_array():
    """Array pressures give an array of the constant"""
    rho = pvt.ConstantDensityModel(850.0).compute_density(np.array([1e5, 2e5, 3e5]))
    assert rho.shape == (3,)
    assert np.all(rho == 850.0)

def test_weakly_compressible_density_at_reference():
    """Density at the reference pressure is the reference density"""
    model = pvt.WeaklyCompressibleDensityModel(1000.0, 1e5, 1500.0)
    assert model.compute_density(1e5) == 1000.0

def test_weakly_compressible_density_linear():
    """rho = rho_ref + (P - P_ref) / a^2"""
    model = pvt.WeaklyCompressibleDensityModel(1000.0, 1e5, 1500.0)
    rho = model.compute_density(1e5 + 2.25e6)
    assert abs(rho - 1001.0) < 1e-9, f"Density {rho} != 1001"
    rhos = model.compute_density(np.linspace(1e5, 1e7, 5))
    assert np.allclose(np.diff(rhos), np.diff(rhos)[0])

def test_weakly_compressible_zero_sound_speed():
    """Zero sound speed is a configuration error"""
    try:
        pvt.WeaklyCompressibleDensityModel(1000.0, 1e5, 0.0)
        assert False, "Should have raised ValueError"
    except ValueError:
        pass

def test_ideal_gas_density():
    """ideal_gas() reproduces rho = P M / (R T)"""
    M, T = 0.016, 300.0
    model = pvt.WeaklyCompressibleDensityModel.ideal_gas(M, T)
    for p in [1e5, 1e6, 1e7]:
        expected = p * M / (R_SI * T)
        rho = model.compute_density(p)
        assert abs(rho - expected) / expected < 1e-10, f"Gas density {rho} vs {expected}"

def test_compressible_density():
    """rho = rho_std / B"""
    model = pvt.CompressibleDensityModel(0.8)
    assert abs(model.compute_density(0.005) - 160.0) < 1e-9

def test_oil_density_explicit_solubility():
    """Live oil density with solubility passed in"""
    model = pvt.OilDensityModel(850.0, 0.8)
    rho = model.compute_density(1.25, solubility=100.0)
    expected = (1 + 0.8 / 850.0 * 100.0) * 850.0 / 1.25
    assert abs(rho - expected) < 1e-9
    assert abs(rho - 744.0) < 1e-6

def test_oil_density_dead_oil_by_default():
    """Unprimed solubility is zero, giving dead oil density"""
    model = pvt.OilDensityModel(850.0, 0.8)
    assert model.solubility == 0.0
    assert abs(model.compute_density(1.25) - 680.0) < 1e-9

def test_oil_density_uses_primed_solubility():
    """set_solubility() feeds later evaluations, and is not recomputed internally"""
    model = pvt.OilDensityModel(850.0, 0.8)
    model.set_solubility(100.0)
    assert abs(model.compute_density(1.25) - 744.0) < 1e-6
    # Same B, same stored Rs: same answer
    assert model.compute_density(1.25) == model.compute_density(1.25)

def test_oil_density_explicit_solubility_wins():
    """An explicit solubility overrides, and does not overwrite, the stored value"""
    model = pvt.OilDensityModel(850.0, 0.8)
    model.set_solubility(100.0)
    dead = model.compute_density(1.25, solubility=0.0)
    assert abs(dead - 680.0) < 1e-9
    assert model.solubility == 100.0

# =============================================================================
# Viscosity
# =============================================================================

def test_power_viscosity():
    """mu = alpha P ^ exponent"""
    model = pvt.PowerViscosityModel(2.0, 0.5)
    assert abs(model.compute_viscosity(16.0) - 8.0) < 1e-12
    assert model.alpha == 2.0 and model.exponent == 0.5

def test_power_viscosity_zero_exponent_is_constant():
    model = pvt.PowerViscosityModel(1e-3, 0.0)
    mus = model.compute_viscosity(np.array([1e5, 1e6, 1e7]))
    assert np.all(mus == 1e-3)

def test_constant_viscosity():
    assert pvt.ConstantViscosityModel(5e-4).compute_viscosity(2e7) == 5e-4

# =============================================================================
# Solubility
# =============================================================================

def test_solubility_below_cap():
    """Power law value returned when enough gas is available"""
    model = pvt.PowerSolubilityModel(1.0, 1e-5, 850.0, 0.8)
    rs = model.compute_solubility(1e7, 0.9, 0.1)
    assert abs(rs - 100.0) < 1e-9, f"Rs = {rs}"

def test_solubility_capped_by_mass_balance():
    """Mass balance cap returned when the power law would dissolve more gas than exists"""
    model = pvt.PowerSolubilityModel(1.0, 1e-5, 850.0, 0.8)
    rs = model.compute_solubility(1e7, 0.95, 0.05)
    cap = 850.0 / 0.8 * 0.05 / 0.95
    assert abs(rs - cap) < 1e-9
    assert rs < 100.0

def test_solubility_never_exceeds_cap():
    """Rs <= (rho_o / rho_g) x_gas / x_oil for all positive inputs"""
    model = pvt.PowerSolubilityModel(0.8, 3e-4, 850.0, 0.8)
    for p in np.linspace(1e5, 5e7, 25):
        for x_gas in [1e-4, 0.01, 0.05, 0.2, 0.5]:
            x_oil = 1.0 - x_gas
            rs = model.compute_solubility(p, x_oil, x_gas)
            cap = model.max_solubility(x_oil, x_gas)
            assert rs <= cap, f"Rs {rs} exceeds cap {cap} at P={p}, x_gas={x_gas}"

def test_solubility_array():
    model = pvt.PowerSolubilityModel(1.0, 1e-5, 850.0, 0.8)
    rs = model.compute_solubility(np.array([1e6, 1e7, 1e8]), 0.9, 0.1)
    cap = 850.0 / 0.8 * 0.1 / 0.9
    assert rs.shape == (3,)
    assert abs(rs[0] - 10.0) < 1e-9
    assert abs(rs[2] - cap) < 1e-9

# =============================================================================
# Formation volume factor
# =============================================================================

def test_liquid_fvf_at_reference():
    """B(P_ref) == B_ref exactly"""
    model = pvt.LiquidFormationVolumeFactorModel(1e-5, 2e7, 1.2)
    assert model.compute_formation_volume_factor(2e7) == 1.2

def test_liquid_fvf_decreases_with_pressure():
    model = pvt.LiquidFormationVolumeFactorModel(1e-9, 2e7, 1.2)
    b = model.compute_formation_volume_factor(np.array([1e7, 2e7, 3e7]))
    assert b[0] > b[1] > b[2]
    assert abs(b[2] - 1.2 / (1 + 1e-9 * 1e7)) < 1e-12

def test_gas_fvf():
    """B(P) = B_ref P / (2P - P_ref)"""
    model = pvt.GasFormationVolumeFactorModel(1e7, 0.01)
    assert abs(model.compute_formation_volume_factor(1e7) - 0.01) < 1e-15
    assert abs(model.compute_formation_volume_factor(2e7) - 0.01 * 2.0 / 3.0) < 1e-15

def test_gas_fvf_singular_point_is_not_finite():
    """At P = P_ref / 2 the gas FVF is singular; the result is inf, not an exception"""
    model = pvt.GasFormationVolumeFactorModel(1e7, 0.01)
    b = model.compute_formation_volume_factor(5e6)
    assert not np.isfinite(b)

# =============================================================================
# Tables
# =============================================================================

def test_pvt_table_oil():
    """Oil table evaluates density on tabulated B and Rs"""
    p = np.linspace(5e6, 3e7, 6)
    fvf = pvt.LiquidFormationVolumeFactorModel(1e-9, 2e7, 1.2)
    rs_model = pvt.PowerSolubilityModel(1.0, 5e-6, 850.0, 0.8)
    den = pvt.OilDensityModel(850.0, 0.8)
    df = pvt.pvt_table(p, density_model=den, fvf_model=fvf, solubility_model=rs_model,
                       viscosity_model=pvt.PowerViscosityModel(1e-3, 0.0),
                       oil_mass_fraction=0.9, gas_mass_fraction=0.1)
    assert list(df.columns) == ['Pressure', 'B', 'Rs', 'Density', 'Viscosity']
    assert len(df) == 6
    for i in range(len(df)):
        expected = den.compute_density(df['B'].iloc[i], solubility=df['Rs'].iloc[i])
        assert abs(df['Density'].iloc[i] - expected) < 1e-9

def test_pvt_table_needs_fvf_for_fvf_density():
    try:
        pvt.pvt_table([1e7, 2e7], density_model=pvt.CompressibleDensityModel(0.8))
        assert False, "Should have raised ValueError"
    except ValueError:
        pass


def test_power_viscosity_negative_exponent_builds_silently():
    """A negative pressure exponent is a valid model and builds without numpy warnings"""
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        model = pvt.PowerViscosityModel(1e-3, -0.5)
        assert abs(model.compute_viscosity(4.0) - 5e-4) < 1e-15
        pvt.PowerSolubilityModel(-1.0, 2.0, 850.0, 0.8)

def test_constant_models_return_float_for_single_value():
    """One element inputs give a float, as every other closure does"""
    rho = pvt.ConstantDensityModel(850.0).compute_density([1e7])
    mu = pvt.ConstantViscosityModel(5e-4).compute_viscosity(np.array([1e7]))
    assert isinstance(rho, float) and rho == 850.0
    assert isinstance(mu, float) and mu == 5e-4
    assert isinstance(pvt.WeaklyCompressibleDensityModel(1000.0, 1e5, 1500.0).compute_density([1e7]), float)


if __name__ == '__main__':
    import traceback
    tests = [(k, v) for k, v in list(globals().items()) if k.startswith('test_') and callable(v)]
    passed, failed = 0, 0
    for name, func in sorted(tests):
        try:
            func()
            passed += 1
            print(f"  PASS: {name}")
        except Exception as e:
            failed += 1
            print(f"  FAIL: {name}")
            print(f"        {e}")
            traceback.print_exc()
    print(f"\n{passed} passed, {failed} failed out of {passed + failed}")
    sys.exit(1 if failed > 0 else 0)
