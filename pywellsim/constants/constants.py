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


# Constants
R_SI = 8.314462618  # Universal gas constant, J/(mol·K)
degF2R = 459.67  # Offset to convert degrees F to degrees Rankine
PSI_TO_PA = 6894.757  # Pa per psi
PA_TO_PSI = 1.0 / PSI_TO_PA
DYNECM_TO_NM = 0.001  # dyne/cm -> N/m (Pa·m)
API_A = 141.5  # API gravity = API_A / sg - API_B
API_B = 131.5


def convert_Pa_to_psi() -> float:
    return PA_TO_PSI


def convert_Dynes_per_cm_to_Pa_m() -> float:
    return DYNECM_TO_NM


def degK_to_degF(degk: float) -> float:
    """ Returns temperature in deg F given temperature in Kelvin """
    return 9.0 * degk / 5.0 - degF2R


def sg_to_api(sg: float) -> float:
    """ Returns API gravity given oil specific gravity (relative to water) """
    return API_A / sg - API_B
