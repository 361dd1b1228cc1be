#!/usr/bin/env python3
"""
Validation tests for driftflux module.
"""

import sys
import os
import math
import logging
import warnings

sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..', '..'))
import pywellsim.driftflux as driftflux
from pywellsim.driftflux import DriftFluxState
from pywellsim.classes import diag_kind


class _Capture(logging.Handler):
    def __init__(self):
        super().__init__(level=logging.WARNING)
        self.records = []

    def emit(self, record):
        self.records.append(record)


def _gas_liquid_state(**changes):
    state = DriftFluxState(volume_fraction=0.1, profile_parameter=1.2, characteristic_velocity=0.3,
                           dispersed_density=100.0, not_dispersed_density=800.0, ku_critical=1.0,
                           mixture_velocity=1.0, flooding_velocity=5.0)
    return state.replace(**changes)

# =============================================================================
# Flow state
# =============================================================================

def test_state_defaults_and_replace():
    state = DriftFluxState()
    assert state.volume_fraction == 0.0 and state.ku_critical == 0.0
    new = state.replace(volume_fraction=0.3)
    assert new.volume_fraction == 0.3
    assert state.volume_fraction == 0.0
    assert new == DriftFluxState(volume_fraction=0.3)

def test_state_replace_unknown_field():
    try:
        DriftFluxState().replace(holdup=0.2)
        assert False, "Should have raised ValueError"
    except ValueError:
        pass

# =============================================================================
# Profile parameter
# =============================================================================

def test_constant_profile_parameter():
    assert driftflux.ConstantProfileParameterModel(1.2).compute_profile_parameter(DriftFluxState()) == 1.2

def test_oil_water_profile_parameter_plateaus():
    """A below B1, 1.0 above B2"""
    model = driftflux.ShiOilWaterProfileParameterModel(1.2, 0.4, 0.7)
    for f in [0.0, 0.2, 0.4]:
        assert model.compute_profile_parameter(DriftFluxState(volume_fraction=f)) == 1.2
    for f in [0.7, 0.85, 1.0]:
        assert model.compute_profile_parameter(DriftFluxState(volume_fraction=f)) == 1.0

def test_oil_water_profile_parameter_linear_and_continuous():
    model = driftflux.ShiOilWaterProfileParameterModel(1.2, 0.4, 0.7)
    mid = model.compute_profile_parameter(DriftFluxState(volume_fraction=0.55))
    assert abs(mid - 1.1) < 1e-12
    eps = 1e-10
    near_b1 = model.compute_profile_parameter(DriftFluxState(volume_fraction=0.4 + eps))
    near_b2 = model.compute_profile_parameter(DriftFluxState(volume_fraction=0.7 - eps))
    assert abs(near_b1 - 1.2) < 1e-8
    assert abs(near_b2 - 1.0) < 1e-8

def test_oil_water_profile_parameter_bad_thresholds():
    for b1, b2 in [(0.5, 0.5), (0.7, 0.4)]:
        try:
            driftflux.ShiOilWaterProfileParameterModel(1.2, b1, b2)
            assert False, "Should have raised ValueError"
        except ValueError:
            pass

def test_gas_liquid_profile_parameter_low_gas():
    """beta below B gives gamma = 0 and C0 = A"""
    model = driftflux.ShiGasLiquidProfileParameterModel(1.2, 0.3, 1.0)
    state = DriftFluxState(volume_fraction=0.1, mixture_velocity=1.0, flooding_velocity=10.0)
    assert model.compute_profile_parameter(state) == 1.2

def test_gas_liquid_profile_parameter_high_gas():
    """beta at or beyond 1 gives gamma = 1 and C0 = 1"""
    model = driftflux.ShiGasLiquidProfileParameterModel(1.2, 0.3, 1.0)
    state = DriftFluxState(volume_fraction=0.5, mixture_velocity=-20.0, flooding_velocity=10.0)
    assert abs(model.compute_profile_parameter(state) - 1.0) < 1e-12

def test_gas_liquid_profile_parameter_intermediate():
    model = driftflux.ShiGasLiquidProfileParameterModel(1.2, 0.3, 1.0)
    state = DriftFluxState(volume_fraction=0.4, mixture_velocity=15.0, flooding_velocity=10.0)
    beta = max(0.4, 0.4 * 15.0 / 10.0)
    gamma = (beta - 0.3) / 0.7
    expected = 1.2 / (1.0 + 0.2 * gamma ** 2)
    assert abs(model.compute_profile_parameter(state) - expected) < 1e-12

def test_gas_liquid_profile_parameter_zero_flooding_velocity():
    """Zero flooding velocity does not raise"""
    model = driftflux.ShiGasLiquidProfileParameterModel(1.2, 0.3, 1.0)
    c0 = model.compute_profile_parameter(DriftFluxState(volume_fraction=0.2, mixture_velocity=1.0))
    assert abs(c0 - 1.0) < 1e-12
    c0 = model.compute_profile_parameter(DriftFluxState(volume_fraction=0.2))
    assert c0 == 1.2

def test_gas_liquid_profile_parameter_bad_B():
    try:
        driftflux.ShiGasLiquidProfileParameterModel(1.2, 1.0, 1.0)
        assert False, "Should have raised ValueError"
    except ValueError:
        pass

# =============================================================================
# Drift velocity
# =============================================================================

def test_constant_drift_velocity():
    model = driftflux.ConstantDriftVelocityModel(0.25)
    assert model.compute_drift_velocity(_gas_liquid_state()) == 0.25
    result = model.evaluate_drift_velocity(_gas_liquid_state())
    assert result.ok and result.is_finite and result.value == 0.25

def test_gas_volume_fraction_drift_velocity():
    """Vd = alpha (1 - f)^power"""
    model = driftflux.GasVolumeFractionDriftVelocityModel(0.5, 2.0)
    vd = model.compute_drift_velocity(DriftFluxState(volume_fraction=0.2))
    assert abs(vd - 0.32) < 1e-12
    vd = model.compute_drift_velocity(DriftFluxState(volume_fraction=0.6))
    assert abs(vd - 0.08) < 1e-12

def test_shi_oil_water_drift_velocity():
    model = driftflux.ShiOilWaterDriftVelocityModel()
    state = DriftFluxState(volume_fraction=0.3, characteristic_velocity=0.2)
    assert abs(model.compute_drift_velocity(state) - 1.53 * 0.2 * 0.49) < 1e-12

def test_shi_gas_liquid_slip_constant_branches():
    model = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
    low = model.slip_constant(_gas_liquid_state(volume_fraction=0.06))
    assert abs(low - 1.53 / 1.2) < 1e-15
    high = model.slip_constant(_gas_liquid_state(volume_fraction=0.21, ku_critical=2.5))
    assert high == 2.5
    mid = model.slip_constant(_gas_liquid_state(volume_fraction=0.135, ku_critical=2.5))
    assert abs(mid - (2.5 + 1.53 / 1.2) / 2) < 1e-12

def test_shi_gas_liquid_zero_density_ratio():
    """With rho_d / rho_nd = 0 the square root term vanishes"""
    model = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
    state = _gas_liquid_state(dispersed_density=0.0)
    f, c0, vc = state.volume_fraction, state.profile_parameter, state.characteristic_velocity
    k = model.slip_constant(state)
    expected = (1.0 - f * c0) * c0 * k * vc / (1.0 - f * c0)
    result = model.evaluate_drift_velocity(state)
    assert abs(result.value - expected) < 1e-15
    assert result.ok

def test_shi_gas_liquid_drift_velocity():
    model = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
    state = _gas_liquid_state()
    f, c0, vc = 0.1, 1.2, 0.3
    k = model.slip_constant(state)
    expected = (1 - f * c0) * c0 * k * vc / (f * c0 * math.sqrt(100.0 / 800.0) + 1 - f * c0)
    assert abs(model.compute_drift_velocity(state) - expected) < 1e-12

def test_shi_gas_liquid_density_ratio_diagnostic():
    """Density ratio above 1 is reported, logged, and still returns a value"""
    handler = _Capture()
    log = logging.getLogger('pywellsim.driftflux.driftflux')
    log.addHandler(handler)
    try:
        model = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
        result = model.evaluate_drift_velocity(_gas_liquid_state(dispersed_density=900.0))
    finally:
        log.removeHandler(handler)
    assert result.is_finite
    assert not result.ok
    assert [d.kind for d in result.diagnostics] == [diag_kind.DENSITY_RATIO_OUT_OF_RANGE]
    diag = result.diagnostics[0]
    assert abs(diag.state['density_ratio'] - 900.0 / 800.0) < 1e-15
    assert diag.state['drift_velocity'] == result.value
    assert len(handler.records) == 1
    assert 'density_ratio' in handler.records[0].getMessage()

def test_shi_gas_liquid_negative_ratio_non_finite():
    """A negative density ratio gives NaN from the square root, reported not raised"""
    model = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
    result = model.evaluate_drift_velocity(_gas_liquid_state(dispersed_density=-10.0))
    kinds = {d.kind for d in result.diagnostics}
    assert kinds == {diag_kind.DENSITY_RATIO_OUT_OF_RANGE, diag_kind.NON_FINITE_RESULT}
    assert not result.is_finite
    assert math.isnan(model.compute_drift_velocity(_gas_liquid_state(dispersed_density=-10.0)))

def test_shi_gas_liquid_zero_densities():
    """0 / 0 density ratio does not raise"""
    model = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
    result = model.evaluate_drift_velocity(_gas_liquid_state(dispersed_density=0.0, not_dispersed_density=0.0))
    assert not result.is_finite
    assert diag_kind.NON_FINITE_RESULT in [d.kind for d in result.diagnostics]

def test_shi_gas_liquid_bad_thresholds():
    for a1, a2 in [(0.2, 0.2), (0.3, 0.1)]:
        try:
            driftflux.ShiGasLiquidDriftVelocityModel(a1, a2)
            assert False, "Should have raised ValueError"
        except ValueError:
            pass

def test_base_evaluate_flags_non_finite():
    result = driftflux.ConstantDriftVelocityModel(float('nan')).evaluate_drift_velocity(DriftFluxState())
    assert [d.kind for d in result.diagnostics] == [diag_kind.NON_FINITE_RESULT]

def test_slip_velocity_feeds_profile_parameter():
    """Profile parameter is computed first and used by the drift velocity"""
    pp = driftflux.ShiGasLiquidProfileParameterModel(1.2, 0.3, 1.0)
    dv = driftflux.ShiGasLiquidDriftVelocityModel(0.06, 0.21)
    state = _gas_liquid_state(volume_fraction=0.4, mixture_velocity=15.0, flooding_velocity=10.0,
                              profile_parameter=999.0)
    c0, result = driftflux.slip_velocity(state, pp, dv)
    assert c0 == pp.compute_profile_parameter(state)
    assert result.value == dv.compute_drift_velocity(state.replace(profile_parameter=c0))
    assert state.profile_parameter == 999.0


def test_gvf_drift_negative_power_builds_silently():
    """Building with a negative power raises no numpy warning"""
    with warnings.catch_warnings():
        warnings.simplefilter('error')
        model = driftflux.GasVolumeFractionDriftVelocityModel(0.5, -1.0)
        assert model.compute_drift_velocity(DriftFluxState(volume_fraction=0.5)) == 1.0


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
