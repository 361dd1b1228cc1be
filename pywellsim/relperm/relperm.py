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
import pandas as pd

from pywellsim.shared_fns import convert_to_numpy, process_input

def LET(s: np.ndarray, L: float, E: float, T: float) -> np.ndarray:
    """
    Returns LET Relative Permeability curve - Lomeland, F.; Ebeltoft, E.; Thomas, W.H. (2005).

    Input:
    s: Normalized saturation of the phase (np.array)
    L, E, T: Three correlation parameters 'L', 'E', and 'T'.

    Output:
    Relative permeability of the phase (np.array)
    """
    return s ** L / (s ** L + E * (1 - s) ** T)

def corey(s: np.ndarray, n: float) -> np.ndarray:
    """
    Returns Corey Relative Permeability curve.

    Input:
    s: Normalized saturation of the phase (np.array)
    n: Corey curve exponent.

    Output:
    Relative permeability of the phase (np.array)
    """
    return s ** n


class RelativePermeabilityModel(ABC):
    """ Saturation window shared by the normalized curve families

        minimum_saturation: Irreducible saturation for water, residual saturation for oil
        maximum_saturation: Maximum admissible saturation
        maximum_relative_permeability: kr at maximum_saturation

        Below minimum_saturation kr is exactly zero. At and above maximum_saturation it is
        exactly maximum_relative_permeability (clamped, not extrapolated).
    """
    def __init__(self, minimum_saturation: float, maximum_saturation: float, maximum_relative_permeability: float):
        if not maximum_saturation > minimum_saturation:
            raise ValueError(
                f"maximum_saturation ({maximum_saturation}) must exceed minimum_saturation ({minimum_saturation})"
            )
        self.minimum_saturation = float(minimum_saturation)
        self.maximum_saturation = float(maximum_saturation)
        self.maximum_relative_permeability = float(maximum_relative_permeability)
        self._alpha = 1.0 / (self.maximum_saturation - self.minimum_saturation)  # Cached for evaluation

    @abstractmethod
    def _curve(self, s: np.ndarray) -> np.ndarray:
        """ Normalized curve on s in [0, 1], returning kr / kr_max """

    def compute_relative_permeability(self, phase_saturation: npt.ArrayLike):
        sat = convert_to_numpy(phase_saturation)
        t = np.clip((sat - self.minimum_saturation) * self._alpha, 0.0, 1.0)
        kr = self.maximum_relative_permeability * self._curve(t)
        kr = np.where(sat < self.minimum_saturation, 0.0, kr)
        kr = np.where(sat >= self.maximum_saturation, self.maximum_relative_permeability, kr)
        return process_input(kr)


class PowerRelativePermeabilityModel(RelativePermeabilityModel):
    """ kr = kr_max * ((S - S_min) / (S_max - S_min)) ** exponent """
    def __init__(self, minimum_saturation: float, maximum_saturation: float,
                 maximum_relative_permeability: float, exponent: float = 1.0):
        super().__init__(minimum_saturation, maximum_saturation, maximum_relative_permeability)
        self.exponent = float(exponent)

    def _curve(self, s):
        return corey(s, self.exponent)


class LETRelativePermeabilityModel(RelativePermeabilityModel):
    """ LET curve on the normalized saturation window """
    def __init__(self, minimum_saturation: float, maximum_saturation: float,
                 maximum_relative_permeability: float, L: float = 1, E: float = 1, T: float = 1):
        super().__init__(minimum_saturation, maximum_saturation, maximum_relative_permeability)
        if E < 0:
            raise ValueError("LET parameter E must be non-negative")
        self.L, self.E, self.T = float(L), float(E), float(T)

    def _curve(self, s):
        with np.errstate(divide='ignore', invalid='ignore'):
            kr = LET(s, self.L, self.E, self.T)
        # 0/0 at s = 0 when E = 0
        return np.where(s <= 0.0, 0.0, kr)


def rel_perm_table(model: RelativePermeabilityModel, rows: int = 20) -> pd.DataFrame:
    """ Returns a DataFrame of saturation and kr, sampled evenly from minimum to maximum saturation
        model: Relative permeability model to tabulate
        rows: Number of table rows. Defaults to 20
    """
    if rows < 2:
        raise ValueError("rows must be 2 or more")
    s = np.linspace(model.minimum_saturation, model.maximum_saturation, rows)
    kr = convert_to_numpy(model.compute_relative_permeability(s))
    return pd.DataFrame({'S': s, 'kr': kr})
