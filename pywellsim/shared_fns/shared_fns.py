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

import numpy as np
import numpy.typing as npt
from typing import Union

def convert_to_numpy(input_data):
    # Convert input data to a numpy array ensuring it is always sizeable
    if isinstance(input_data, np.ndarray):
        return input_data
    else:
        # Lists, tuples and scalars all become arrays, scalars with one element
        return np.atleast_1d(np.asarray(input_data, dtype=float))

def process_input(input_data):
    # Hands back a float for single values, and the array itself otherwise
    if isinstance(input_data, np.ndarray):
        if input_data.size == 1 and input_data.ndim <= 1:
            return float(input_data.item())
        else:
            return input_data
    elif isinstance(input_data, list):
        if len(input_data) == 1:
            return input_data[0]
        else:
            return np.array(input_data)
    else:
        return input_data

def is_finite(value: npt.ArrayLike) -> bool:
    """ True when every element of value is a finite number (no NaN or +/-inf) """
    return bool(np.all(np.isfinite(value)))

def check_finite(value: npt.ArrayLike, name: str = "value"):
    """ Returns value unchanged, or raises ValueError if any element is NaN or infinite """
    if not is_finite(value):
        raise ValueError(f"Non-finite {name} computed: {value}")
    return value


def clamp(val, lo, hi):
    """ Returns val limited to the closed interval [lo, hi] """
    return max(lo, min(hi, val))


class ConstantModel:
    """ Building block for closures that return one fixed value """
    def __init__(self, value: float):
        self._value = float(value)

    @property
    def value(self) -> float:
        return self._value

    def __repr__(self):
        return f"{type(self).__name__}({self._value!r})"


class PowerLaw:
    """ Immutable power law snapshot: value = alpha * reference ** power

        The value is computed when the snapshot is built, so it always agrees
        with the fields it was built from. with_alpha, with_power and
        with_reference return new snapshots rather than modifying this one.

        alpha: Scale factor
        power: Exponent
        reference: Reference value the law is evaluated at. Defaults to 0
    """
    __slots__ = ("_alpha", "_power", "_reference", "_value")

    def __init__(self, alpha: float, power: float, reference: float = 0.0):
        self._alpha = float(alpha)
        self._power = float(power)
        self._reference = float(reference)
        self._value = self.evaluate(self._reference)

    def evaluate(self, reference: Union[float, np.ndarray]):
        """ Evaluates the law at an arbitrary reference without building a snapshot """
        # Negative powers at a zero reference give inf without a warning
        with np.errstate(divide='ignore', invalid='ignore'):
            return self._alpha * np.power(reference, self._power)

    @property
    def alpha(self) -> float:
        return self._alpha

    @property
    def power(self) -> float:
        return self._power

    @property
    def reference(self) -> float:
        return self._reference

    @property
    def value(self) -> float:
        return float(self._value)

    def with_alpha(self, alpha: float) -> "PowerLaw":
        return PowerLaw(alpha, self._power, self._reference)

    def with_power(self, power: float) -> "PowerLaw":
        return PowerLaw(self._alpha, power, self._reference)

    def with_reference(self, reference: float) -> "PowerLaw":
        return PowerLaw(self._alpha, self._power, reference)

    def __repr__(self):
        return (f"PowerLaw(alpha={self._alpha!r}, power={self._power!r}, "
                f"reference={self._reference!r}, value={self.value!r})")
