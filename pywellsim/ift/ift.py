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

import numpy as np
import numpy.typing as npt

from pywellsim.classes import ift_correction
from pywellsim.validate import validate_methods
from pywellsim.constants import convert_Pa_to_psi, convert_Dynes_per_cm_to_Pa_m, degK_to_degF, sg_to_api
from pywellsim.shared_fns import convert_to_numpy, process_input, clamp, ConstantModel

# ============================================================================
#  IFT Correlations
#  Pressures in Pa, results in N/m. Beggs correlations work internally in
#  psia, deg F and dyne/cm. No lower floor is applied to the result.
# ============================================================================

class InterfacialTensionModel(ABC):
    @abstractmethod
    def compute_interfacial_tension(self, pressure: npt.ArrayLike):
        """ Returns interfacial tension (N/m) """


class ConstantInterfacialTensionModel(InterfacialTensionModel, ConstantModel):
    def __init__(self, value: float):
        ConstantModel.__init__(self, value)

    def compute_interfacial_tension(self, pressure: npt.ArrayLike):
        return process_input(np.full_like(convert_to_numpy(pressure), self.value, dtype=float))


def _interpolate(sigma_lo, sigma_hi, temp_f, t_lo, t_hi):
    # Linear in temperature between the two reference isotherms
    return sigma_lo - (temp_f - t_lo) * (sigma_lo - sigma_hi) / (t_hi - t_lo)


class BeggsGasOilInterfacialTensionModel(InterfacialTensionModel):
    """ Gas / oil IFT after Baker & Swerdloff, in the form given by Beggs

        temperature: Temperature (K)
        relative_density: Stock tank oil specific gravity (relative to water)
        correction: A string or ift_correction Enum selecting where the pressure correction
                    C = 1 - 0.024 P^0.45 is applied;
                      FULL: C scales the temperature interpolated value - Default
                      T68: C scales only the 68 deg F isotherm

        Dead oil IFT at 68 and 100 deg F is linear in API gravity. The working temperature
        is clamped to [68, 100] deg F.
    """
    T_LO, T_HI = 68.0, 100.0

    def __init__(self, temperature: float, relative_density: float, correction: ift_correction = ift_correction.FULL):
        if relative_density <= 0:
            raise ValueError("relative_density must be positive")
        self.temperature = float(temperature)
        self.correction = validate_methods(["iftcorrection"], [correction])
        self._temperature_f = degK_to_degF(self.temperature)
        self._api = sg_to_api(relative_density)

    @property
    def temperature_f(self) -> float:
        return self._temperature_f

    @property
    def api(self) -> float:
        return self._api

    def compute_interfacial_tension(self, pressure: npt.ArrayLike):
        p_psi = convert_to_numpy(pressure) * convert_Pa_to_psi()
        sigma_68F = 39.0 - 0.2571 * self._api
        sigma_100F = 37.5 - 0.2571 * self._api
        C = 1.0 - 0.024 * np.power(p_psi, 0.45)
        temp_f = clamp(self._temperature_f, self.T_LO, self.T_HI)

        if self.correction == ift_correction.FULL:
            sigma = C * _interpolate(sigma_68F, sigma_100F, temp_f, self.T_LO, self.T_HI)
        else:
            sigma = _interpolate(C * sigma_68F, sigma_100F, temp_f, self.T_LO, self.T_HI)
        return process_input(convert_Dynes_per_cm_to_Pa_m() * sigma)


class BeggsGasWaterInterfacialTensionModel(InterfacialTensionModel):
    """ Gas / water IFT in the form given by Beggs

        temperature: Temperature (K)

        Isotherms at 74 and 280 deg F are power laws in pressure. The working
        temperature is clamped to [74, 280] deg F.
    """
    T_LO, T_HI = 74.0, 280.0

    def __init__(self, temperature: float):
        self.temperature = float(temperature)
        self._temperature_f = degK_to_degF(self.temperature)

    @property
    def temperature_f(self) -> float:
        return self._temperature_f

    def compute_interfacial_tension(self, pressure: npt.ArrayLike):
        p_psi = convert_to_numpy(pressure) * convert_Pa_to_psi()
        sigma_74F = 75.0 - 1.108 * np.power(p_psi, 0.349)
        sigma_280F = 53.0 - 0.1048 * np.power(p_psi, 0.637)
        temp_f = clamp(self._temperature_f, self.T_LO, self.T_HI)
        sigma = _interpolate(sigma_74F, sigma_280F, temp_f, self.T_LO, self.T_HI)
        return process_input(convert_Dynes_per_cm_to_Pa_m() * sigma)
