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

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
import numpy.typing as npt
import pandas as pd

from pywellsim.constants import R_SI
from pywellsim.shared_fns import convert_to_numpy, process_input, ConstantModel, PowerLaw

# ============================================================================
#  Closure interfaces
#  All evaluations accept a float or array, returning the same form.
#  Inputs are not range checked.
# ============================================================================

class DensityModel(ABC):
    @abstractmethod
    def compute_density(self, pressure: npt.ArrayLike):
        """ Returns phase density (kg/m3) """


class ViscosityModel(ABC):
    @abstractmethod
    def compute_viscosity(self, pressure: npt.ArrayLike):
        """ Returns phase viscosity (Pa.s) """


class SolubilityModel(ABC):
    @abstractmethod
    def compute_solubility(self, pressure: npt.ArrayLike, oil_mass_fraction: npt.ArrayLike,
                           gas_mass_fraction: npt.ArrayLike):
        """ Returns gas solubility in oil (sm3/sm3) """


class FormationVolumeFactorModel(ABC):
    @abstractmethod
    def compute_formation_volume_factor(self, pressure: npt.ArrayLike):
        """ Returns formation volume factor (rm3/sm3) """


# ============================================================================
#  Density
# ============================================================================

class ConstantDensityModel(DensityModel, ConstantModel):
    """ Density that does not vary with pressure

        density: Phase density (kg/m3)
    """
    def __init__(self, density: float):
        ConstantModel.__init__(self, density)

    @property
    def density(self) -> float:
        return self.value

    def compute_density(self, pressure: npt.ArrayLike):
        return process_input(np.full_like(convert_to_numpy(pressure), self.value, dtype=float))


class WeaklyCompressibleDensityModel(DensityModel):
    """ Acoustic (linear) density law: rho = rho_ref + (P - P_ref) / a^2

        reference_density: Density at the reference pressure (kg/m3)
        reference_pressure: Reference pressure (Pa)
        sound_speed: Fluid sound speed, a (m/s)

        For a gas use ideal_gas(), which sets rho_ref = 0, P_ref = 0 and a^2 = R.T/M
    """
    def __init__(self, reference_density: float, reference_pressure: float, sound_speed: float):
        if sound_speed == 0:
            raise ValueError("sound_speed must be non-zero")
        self.reference_density = float(reference_density)
        self.reference_pressure = float(reference_pressure)
        self.sound_speed = float(sound_speed)
        self._inv_a2 = 1.0 / (self.sound_speed * self.sound_speed)

    @classmethod
    def ideal_gas(cls, molar_mass: float, temperature: float) -> "WeaklyCompressibleDensityModel":
        """ molar_mass: Gas molar mass (kg/mol)
            temperature: Reference temperature (K)
        """
        if molar_mass <= 0 or temperature <= 0:
            raise ValueError("molar_mass and temperature must be positive")
        return cls(0.0, 0.0, np.sqrt(R_SI * temperature / molar_mass))

    def compute_density(self, pressure: npt.ArrayLike):
        p = convert_to_numpy(pressure)
        rho = self.reference_density + (p - self.reference_pressure) * self._inv_a2
        return process_input(rho)


class CompressibleDensityModel(DensityModel):
    """ Density from formation volume factor: rho = rho_std / B

        standard_density: Density at standard conditions (kg/m3)
        Note that compute_density takes the formation volume factor, not pressure
    """
    def __init__(self, standard_density: float):
        self.standard_density = float(standard_density)

    def compute_density(self, formation_volume_factor: npt.ArrayLike):
        b = convert_to_numpy(formation_volume_factor)
        with np.errstate(divide='ignore', invalid='ignore'):
            rho = self.standard_density / b
        return process_input(rho)


class OilDensityModel(DensityModel):
    """ Live oil density: rho = (1 + (rho_g,std / rho_o,std) * Rs) * rho_o,std / Bo

        oil_standard_density: Stock tank oil density (kg/m3)
        gas_standard_density: Gas density at standard conditions (kg/m3)

        Rs is not computed here. Either pass solubility to compute_density, or prime
        it with set_solubility() each time the dissolved gas state changes.
    """
    def __init__(self, oil_standard_density: float, gas_standard_density: float):
        if oil_standard_density == 0:
            raise ValueError("oil_standard_density must be non-zero")
        self.oil_standard_density = float(oil_standard_density)
        self.gas_standard_density = float(gas_standard_density)
        self._gas_over_oil = self.gas_standard_density / self.oil_standard_density
        self._solubility = 0.0

    @property
    def solubility(self) -> float:
        return self._solubility

    def set_solubility(self, solubility: float):
        self._solubility = solubility

    def compute_density(self, formation_volume_factor: npt.ArrayLike, solubility: Optional[npt.ArrayLike] = None):
        rs = self._solubility if solubility is None else convert_to_numpy(solubility)
        bo = convert_to_numpy(formation_volume_factor)
        with np.errstate(divide='ignore', invalid='ignore'):
            rho = (1 + self._gas_over_oil * rs) * (self.oil_standard_density / bo)
        return process_input(rho)


# ============================================================================
#  Viscosity
# ============================================================================

class ConstantViscosityModel(ViscosityModel, ConstantModel):
    def __init__(self, viscosity: float):
        ConstantModel.__init__(self, viscosity)

    def compute_viscosity(self, pressure: npt.ArrayLike):
        return process_input(np.full_like(convert_to_numpy(pressure), self.value, dtype=float))


class PowerViscosityModel(ViscosityModel):
    """ mu = alpha * P ** exponent """
    def __init__(self, alpha: float, exponent: float):
        self._law = PowerLaw(alpha, exponent)

    @property
    def alpha(self) -> float:
        return self._law.alpha

    @property
    def exponent(self) -> float:
        return self._law.power

    def compute_viscosity(self, pressure: npt.ArrayLike):
        return process_input(self._law.evaluate(convert_to_numpy(pressure)))


# ============================================================================
#  Solubility
# ============================================================================

class PowerSolubilityModel(SolubilityModel):
    """ Rs = alpha * P ** power, capped by the gas actually available

        The cap follows from mass balance: Rs_max = (rho_o,std / rho_g,std) * x_gas / x_oil
        power: Pressure exponent
        alpha: Scale factor
        oil_standard_density, gas_standard_density: Standard condition densities (kg/m3)
    """
    def __init__(self, power: float, alpha: float, oil_standard_density: float, gas_standard_density: float):
        if gas_standard_density == 0:
            raise ValueError("gas_standard_density must be non-zero")
        self._law = PowerLaw(alpha, power)
        self._oil_over_gas = float(oil_standard_density) / float(gas_standard_density)

    @property
    def alpha(self) -> float:
        return self._law.alpha

    @property
    def power(self) -> float:
        return self._law.power

    def max_solubility(self, oil_mass_fraction: npt.ArrayLike, gas_mass_fraction: npt.ArrayLike):
        x_oil = convert_to_numpy(oil_mass_fraction)
        x_gas = convert_to_numpy(gas_mass_fraction)
        with np.errstate(divide='ignore', invalid='ignore'):
            return process_input(self._oil_over_gas * x_gas / x_oil)

    def compute_solubility(self, pressure: npt.ArrayLike, oil_mass_fraction: npt.ArrayLike,
                           gas_mass_fraction: npt.ArrayLike):
        max_rs = convert_to_numpy(self.max_solubility(oil_mass_fraction, gas_mass_fraction))
        model_rs = self._law.evaluate(convert_to_numpy(pressure))
        return process_input(np.where(max_rs >= model_rs, model_rs, max_rs))


# ============================================================================
#  Formation volume factor
# ============================================================================

class LiquidFormationVolumeFactorModel(FormationVolumeFactorModel):
    """ B(P) = B_ref / (1 + c (P - P_ref))

        compressibility: Isothermal compressibility, c (1/Pa)
        reference_pressure: P_ref (Pa)
        reference_formation_volume_factor: B_ref at P_ref
    """
    def __init__(self, compressibility: float, reference_pressure: float, reference_formation_volume_factor: float):
        self.compressibility = float(compressibility)
        self.reference_pressure = float(reference_pressure)
        self.reference_formation_volume_factor = float(reference_formation_volume_factor)

    def compute_formation_volume_factor(self, pressure: npt.ArrayLike):
        p = convert_to_numpy(pressure)
        with np.errstate(divide='ignore', invalid='ignore'):
            b = self.reference_formation_volume_factor / (1 + self.compressibility * (p - self.reference_pressure))
        return process_input(b)


class GasFormationVolumeFactorModel(FormationVolumeFactorModel):
    """ B(P) = B_ref P / (2P - P_ref)

        Obtained from the liquid expression by taking the gas isothermal
        compressibility as 1/P.
    """
    def __init__(self, reference_pressure: float, reference_formation_volume_factor: float):
        self.reference_pressure = float(reference_pressure)
        self.reference_formation_volume_factor = float(reference_formation_volume_factor)

    def compute_formation_volume_factor(self, pressure: npt.ArrayLike):
        p = convert_to_numpy(pressure)
        with np.errstate(divide='ignore', invalid='ignore'):
            b = (self.reference_formation_volume_factor * p) / (2 * p - self.reference_pressure)
        return process_input(b)


# ============================================================================
#  Tabulation
# ============================================================================

def pvt_table(
    pressures: npt.ArrayLike,
    density_model: Optional[DensityModel] = None,
    viscosity_model: Optional[ViscosityModel] = None,
    fvf_model: Optional[FormationVolumeFactorModel] = None,
    solubility_model: Optional[SolubilityModel] = None,
    oil_mass_fraction: float = 1,
    gas_mass_fraction: float = 1,
) -> pd.DataFrame:
    """ Returns a DataFrame of closure values, one row per pressure

        pressures: Pressures to tabulate (Pa)
        density_model, viscosity_model, fvf_model, solubility_model: Closures to tabulate. Each is optional
        oil_mass_fraction, gas_mass_fraction: Mass fractions used for the solubility cap. Defaults to 1

        Densities that are functions of B (CompressibleDensityModel, OilDensityModel) are evaluated
        on the tabulated B, and OilDensityModel on the tabulated Rs when a solubility model is given.
    """
    p = convert_to_numpy(pressures).astype(float)
    table = {'Pressure': p}

    if fvf_model is not None:
        table['B'] = convert_to_numpy(fvf_model.compute_formation_volume_factor(p))
    if solubility_model is not None:
        table['Rs'] = convert_to_numpy(solubility_model.compute_solubility(p, oil_mass_fraction, gas_mass_fraction))
    if density_model is not None:
        if isinstance(density_model, (CompressibleDensityModel, OilDensityModel)):
            if 'B' not in table:
                raise ValueError(f"{type(density_model).__name__} needs an fvf_model to be tabulated against pressure")
            if isinstance(density_model, OilDensityModel):
                rho = density_model.compute_density(table['B'], solubility=table.get('Rs'))
            else:
                rho = density_model.compute_density(table['B'])
        else:
            rho = density_model.compute_density(p)
        table['Density'] = convert_to_numpy(rho)
    if viscosity_model is not None:
        table['Viscosity'] = convert_to_numpy(viscosity_model.compute_viscosity(p))

    return pd.DataFrame(table)
