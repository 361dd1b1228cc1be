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

from enum import Enum

class den_method(Enum):  # Phase density closure
    CONST = 0
    WEAK = 1
    COMP = 2
    OIL = 3

class visc_method(Enum):  # Phase viscosity closure
    CONST = 0
    POW = 1

class rs_method(Enum):  # Gas solubility closure
    POW = 0

class fvf_method(Enum):  # Formation volume factor closure
    LIQ = 0
    GAS = 1

class kr_method(Enum):  # Relative permeability closure
    POW = 0
    LET = 1

class ift_method(Enum):  # Interfacial tension closure
    CONST = 0
    GO = 1
    GW = 2

class ift_correction(Enum):  # Where the Beggs gas-oil pressure correction is applied
    FULL = 0
    T68 = 1

class pp_method(Enum):  # Drift-flux profile parameter closure
    CONST = 0
    SHIOW = 1
    SHIGL = 2

class dv_method(Enum):  # Drift-flux drift velocity closure
    CONST = 0
    GVF = 1
    SHIOW = 2
    SHIGL = 3

class diag_kind(Enum):  # Drift-flux anomaly diagnostics
    DENSITY_RATIO_OUT_OF_RANGE = 0
    NON_FINITE_RESULT = 1

class_dic = {
    "denmethod": den_method,
    "viscmethod": visc_method,
    "rsmethod": rs_method,
    "fvfmethod": fvf_method,
    "krmethod": kr_method,
    "iftmethod": ift_method,
    "iftcorrection": ift_correction,
    "ppmethod": pp_method,
    "dvmethod": dv_method,
}
