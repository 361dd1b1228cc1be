#!/usr/bin/python3
# -*- coding: utf-8 -*-

"""
    pyWellSim - Closure relations for multiphase wellbore flow
              Copyright (C) 2022, Mark Burgoyne

    This program is free software: you can redistribute it and/or modify
    it under the terms of the GNU General Public License as published by
    the Free Software Foundation, either version 3 of the License, or
    (at your option) any later version.

    This program is distributed in the hope that it will be useful,
    but WITHOUT ANY WARRANTY; without even the implied warranty of
    MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
    GNU General Public License for more details.

    The GNU General Public License can be found in the LICENSE directory,
    and at  <https://www.gnu.org/licenses/>.

          Contact author at mark.w.burgoyne@gmail.com
"""

import logging
import math
from abc import ABC, abstractmethod
from typing import Dict, Tuple

import numpy as np
from tabulate import tabulate

from pywellsim.classes import diag_kind
from pywellsim.shared_fns import ConstantModel, PowerLaw

logger = logging.getLogger(__name__)

# ============================================================================
#  Flow state passed to every drift-flux closure
# ============================================================================

class DriftFluxState:
    """ Local flow state at one wellbore node

        volume_fraction: Dispersed phase volume fraction, f
        profile_parameter: Profile parameter, C0 (Gamma)
        characteristic_velocity: Characteristic (bubble rise) velocity, Vc (m/s)
        dispersed_density: Dispersed phase density (kg/m3)
        not_dispersed_density: Continuous phase density (kg/m3)
        ku_critical: Critical Kutateladze number, the slip constant at high volume fraction
        mixture_velocity: Mixture volumetric flux, Vm (m/s)
        flooding_velocity: Flooding velocity (m/s)

        Every closure takes the whole state and ignores the fields it does not use.
    """
    __slots__ = ("volume_fraction", "profile_parameter", "characteristic_velocity",
                 "dispersed_density", "not_dispersed_density", "ku_critical",
                 "mixture_velocity", "flooding_velocity")

    def __init__(self, volume_fraction=0.0, profile_parameter=0.0, characteristic_velocity=0.0,
                 dispersed_density=0.0, not_dispersed_density=0.0, ku_critical=0.0,
                 mixture_velocity=0.0, flooding_velocity=0.0):
        self.volume_fraction = volume_fraction
        self.profile_parameter = profile_parameter
        self.characteristic_velocity = characteristic_velocity
        self.dispersed_density = dispersed_density
        self.not_dispersed_density = not_dispersed_density
        self.ku_critical = ku_critical
        self.mixture_velocity = mixture_velocity
        self.flooding_velocity = flooding_velocity

    def replace(self, **changes) -> "DriftFluxState":
        """ Returns a copy with the given fields changed """
        fields = self.as_dict()
        for key in changes:
            if key not in fields:
                raise ValueError(f"Unknown drift-flux state field '{key}'")
        fields.update(changes)
        return DriftFluxState(**fields)

    def as_dict(self) -> Dict[str, float]:
        return {name: getattr(self, name) for name in self.__slots__}

    def __eq__(self, other):
        if not isinstance(other, DriftFluxState):
            return NotImplemented
        return self.as_dict() == other.as_dict()

    def __repr__(self):
        args = ", ".join(f"{k}={v!r}" for k, v in self.as_dict().items())
        return f"DriftFluxState({args})"


class DriftFluxDiagnostic:
    """ Anomaly found while evaluating a drift-flux closure

        kind: diag_kind Enum member
        message: Human readable description
        state: Internal values at the time of the anomaly
    """
    def __init__(self, kind: diag_kind, message: str, state: Dict[str, float]):
        self.kind = kind
        self.message = message
        self.state = dict(state)

    def table(self) -> str:
        return tabulate(list(self.state.items()), headers=["Quantity", "Value"], floatfmt=".17e")

    def __repr__(self):
        return f"DriftFluxDiagnostic({self.kind.name}, {self.message!r})"


class DriftVelocityResult:
    """ Drift velocity with any diagnostics raised while computing it """
    def __init__(self, value: float, diagnostics: Tuple[DriftFluxDiagnostic, ...] = ()):
        self.value = value
        self.diagnostics = tuple(diagnostics)

    @property
    def is_finite(self) -> bool:
        return math.isfinite(self.value)

    @property
    def ok(self) -> bool:
        return not self.diagnostics

    def __float__(self):
        return float(self.value)

    def __repr__(self):
        return f"DriftVelocityResult(value={self.value!r}, diagnostics={self.diagnostics!r})"


def _report(kind: diag_kind, message: str, state: Dict[str, float]) -> DriftFluxDiagnostic:
    diagnostic = DriftFluxDiagnostic(kind, message, state)
    logger.warning("%s\n%s", message, diagnostic.table())
    return diagnostic

# ============================================================================
#  Profile parameter
# ============================================================================

class ProfileParameterModel(ABC):
    @abstractmethod
    def compute_profile_parameter(self, state: DriftFluxState) -> float:
        """ Returns the drift-flux profile parameter, C0 """


class ConstantProfileParameterModel(ProfileParameterModel, ConstantModel):
    def __init__(self, value: float):
        ConstantModel.__init__(self, value)

    def compute_profile_parameter(self, state: DriftFluxState) -> float:
        return self.value


class ShiOilWaterProfileParameterModel(ProfileParameterModel):
    """ Shi et al. (2005) oil / water profile parameter

        A: Profile parameter at low volume fraction (f <= B1)
        B1, B2: Volume fractions bounding the linear transition from A to 1.0
    """
    def __init__(self, A: float, B1: float, B2: float):
        if not B1 < B2:
            raise ValueError(f"B1 ({B1}) must be less than B2 ({B2})")
        self.A, self.B1, self.B2 = float(A), float(B1), float(B2)

    def compute_profile_parameter(self, state: DriftFluxState) -> float:
        f = state.volume_fraction
        if f <= self.B1:
            return self.A
        elif f >= self.B2:
            return 1.0
        else:
            return self.A - (self.A - 1.0) * (f - self.B1) / (self.B2 - self.B1)


class ShiGasLiquidProfileParameterModel(ProfileParameterModel):
    """ Shi et al. (2005) gas / liquid profile parameter

        A: Profile parameter at low gas fraction and low mixture velocity
        B: Value of beta at which the profile parameter starts to fall towards 1
        Fv: Multiplier on the mixture to flooding velocity ratio

        beta = max(f, Fv f |Vm| / Vflood); gamma = clamp((beta - B) / (1 - B), 0, 1)
        C0 = A / (1 + (A - 1) gamma^2)
    """
    def __init__(self, A: float, B: float, Fv: float):
        if B == 1.0:
            raise ValueError("B must differ from 1")
        self.A, self.B, self.Fv = float(A), float(B), float(Fv)

    def compute_profile_parameter(self, state: DriftFluxState) -> float:
        f = state.volume_fraction
        with np.errstate(divide='ignore', invalid='ignore'):
            flooding_term = self.Fv * f * np.abs(np.float64(state.mixture_velocity)) / np.float64(state.flooding_velocity)
        beta = float(np.fmax(f, flooding_term))

        gamma = (beta - self.B) / (1.0 - self.B)
        if gamma < 0.0:
            gamma = 0.0
        if gamma > 1.0:
            gamma = 1.0

        return self.A / (1.0 + (self.A - 1.0) * gamma ** 2)

# ============================================================================
#  Drift velocity
# ============================================================================

class DriftVelocityModel(ABC):
    @abstractmethod
    def compute_drift_velocity(self, state: DriftFluxState) -> float:
        """ Returns the drift velocity, Vd (m/s) """

    def evaluate_drift_velocity(self, state: DriftFluxState) -> DriftVelocityResult:
        """ Returns the drift velocity together with any anomaly diagnostics """
        vd = self.compute_drift_velocity(state)
        diagnostics = []
        if not math.isfinite(vd):
            diagnostics.append(_report(
                diag_kind.NON_FINITE_RESULT,
                f"{type(self).__name__} returned a non-finite drift velocity",
                dict(state.as_dict(), drift_velocity=vd),
            ))
        return DriftVelocityResult(vd, diagnostics)


class ConstantDriftVelocityModel(DriftVelocityModel, ConstantModel):
    def __init__(self, value: float):
        ConstantModel.__init__(self, value)

    def compute_drift_velocity(self, state: DriftFluxState) -> float:
        return self.value


class GasVolumeFractionDriftVelocityModel(DriftVelocityModel):
    """ Vd = alpha (1 - f_gas) ** power """
    def __init__(self, alpha: float, power: float):
        self.law = PowerLaw(alpha, power)

    def compute_drift_velocity(self, state: DriftFluxState) -> float:
        return self.law.with_reference(1.0 - state.volume_fraction).value


class ShiGasLiquidDriftVelocityModel(DriftVelocityModel):
    """ Shi et al. (2005) gas / liquid drift velocity

        a1, a2: Gas volume fractions bounding the transition of the slip constant k
                from 1.53 / C0 (f <= a1) to Ku_critical (f >= a2)

        Vd = (1 - f C0) C0 k Vc / (f C0 sqrt(rho_d / rho_nd) + 1 - f C0)

        A density ratio outside [0, 1] or a non-finite Vd is returned as a
        diagnostic on the result (and logged), never raised.
    """
    def __init__(self, a1: float, a2: float):
        if not a1 < a2:
            raise ValueError(f"a1 ({a1}) must be less than a2 ({a2})")
        self.a1, self.a2 = float(a1), float(a2)

    def slip_constant(self, state: DriftFluxState) -> float:
        f = state.volume_fraction
        k_upp = state.ku_critical
        with np.errstate(divide='ignore', invalid='ignore'):
            k_low = float(1.53 / np.float64(state.profile_parameter))
        if f <= self.a1:
            return k_low
        elif f >= self.a2:
            return k_upp
        else:
            return k_upp - ((self.a2 - f) / (self.a2 - self.a1)) * (k_upp - k_low)

    def evaluate_drift_velocity(self, state: DriftFluxState) -> DriftVelocityResult:
        f = np.float64(state.volume_fraction)
        c0 = np.float64(state.profile_parameter)
        vc = np.float64(state.characteristic_velocity)
        k = self.slip_constant(state)
        with np.errstate(divide='ignore', invalid='ignore'):
            ratio = np.float64(state.dispersed_density) / np.float64(state.not_dispersed_density)
            f_c0 = f * c0
            vd = float((1.0 - f_c0) * c0 * k * vc / (f_c0 * np.sqrt(ratio) + 1.0 - f_c0))

        internals = {
            'volume_fraction': float(f),
            'drift_velocity': vd,
            'k': k,
            'characteristic_velocity': float(vc),
            'profile_parameter': float(c0),
            'dispersed_density': state.dispersed_density,
            'not_dispersed_density': state.not_dispersed_density,
            'density_ratio': float(ratio),
        }
        diagnostics = []
        if not 0.0 <= ratio <= 1.0:
            diagnostics.append(_report(
                diag_kind.DENSITY_RATIO_OUT_OF_RANGE,
                f"Dispersed / continuous density ratio {float(ratio)} is outside [0, 1]",
                internals,
            ))
        if not math.isfinite(vd):
            diagnostics.append(_report(
                diag_kind.NON_FINITE_RESULT,
                "Shi gas / liquid drift velocity is not finite",
                dict(internals, one_minus_f_c0=float(1.0 - f_c0)),
            ))
        return DriftVelocityResult(vd, diagnostics)

    def compute_drift_velocity(self, state: DriftFluxState) -> float:
        return self.evaluate_drift_velocity(state).value


class ShiOilWaterDriftVelocityModel(DriftVelocityModel):
    """ Shi et al. (2005) oil / water drift velocity: Vd = 1.53 Vc (1 - f)^2 """
    def compute_drift_velocity(self, state: DriftFluxState) -> float:
        return 1.53 * state.characteristic_velocity * (1.0 - state.volume_fraction) ** 2.0


def slip_velocity(state: DriftFluxState, profile_model: ProfileParameterModel,
                  drift_model: DriftVelocityModel) -> Tuple[float, DriftVelocityResult]:
    """ Evaluates the profile parameter, then the drift velocity with that profile parameter
        Returns (profile_parameter, DriftVelocityResult)
    """
    c0 = profile_model.compute_profile_parameter(state)
    result = drift_model.evaluate_drift_velocity(state.replace(profile_parameter=c0))
    return c0, result
