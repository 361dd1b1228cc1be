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
from abc import ABC, abstractmethod
from enum import Enum
from typing import NamedTuple, TextIO

import numpy as np
import numpy.typing as npt

logger = logging.getLogger(__name__)


class WellState(Enum):  # Well lifecycle
    UNSIZED = 0
    SIZED = 1
    FLOW_INITIALIZED = 2
    SOLVED = 3


class WellStateError(RuntimeError):
    """ Raised when a well operation is called in a lifecycle state that does not allow it """


class NodeCoordinates(NamedTuple):
    x: float
    y: float
    z: float


class AbstractWell(ABC):
    """ Interface a wellbore solver exposes to the reservoir coupling loop.

        The coupling loop sizes the well, binds the flow arrays it owns, then on
        every outer iteration calls solve() and reads back node coordinates and
        pressures to compute the reservoir / well exchange.
    """
    @abstractmethod
    def set_size(self, nnodes: int):
        pass

    @abstractmethod
    def initialize_flow(self, oil_flow: np.ndarray, water_flow: np.ndarray, gas_flow: np.ndarray):
        pass

    @abstractmethod
    def set_radius(self, radius: float):
        pass

    @abstractmethod
    def read_coordinates(self, infile: TextIO):
        pass

    @abstractmethod
    def coordinates(self, index: int) -> NodeCoordinates:
        pass

    @abstractmethod
    def pressure(self, index: int) -> float:
        pass

    @abstractmethod
    def radius(self) -> float:
        pass

    @abstractmethod
    def number_of_nodes(self) -> int:
        pass

    @abstractmethod
    def solve(self):
        pass


class Well(AbstractWell):
    """ Node storage and lifecycle for a wellbore solver.

        Subclasses provide _solve(), the nonlinear assembly that evaluates the
        closures once per node per iteration and updates node pressures through
        set_pressure().

        States move UNSIZED -> SIZED (set_size) -> FLOW_INITIALIZED (initialize_flow)
        -> SOLVED (solve). A solved well may be solved again, and initialize_flow
        may rebind the flow arrays at any point after sizing.

        Flow arrays are held by reference, never copied: the coupling loop that
        owns them writes them between solves.
    """
    def __init__(self):
        self._state = WellState.UNSIZED
        self._radius = 0.0
        self._nnodes = 0
        self._coordinates = None
        self._pressures = None
        self._coordinates_read = False
        self._oil_flow = None
        self._water_flow = None
        self._gas_flow = None

    @property
    def state(self) -> WellState:
        return self._state

    def _require_sized(self, operation):
        if self._state == WellState.UNSIZED:
            raise WellStateError(f"{operation} requires set_size() to be called first")

    def _check_index(self, index):
        if not 0 <= index < self._nnodes:
            raise IndexError(f"Node index {index} out of range for a well with {self._nnodes} nodes")

    def set_size(self, nnodes: int):
        if self._state != WellState.UNSIZED:
            raise WellStateError("Well has already been sized")
        if isinstance(nnodes, bool) or not isinstance(nnodes, (int, np.integer)) or nnodes <= 0:
            raise ValueError(f"Number of nodes must be a positive integer, got {nnodes!r}")
        self._nnodes = int(nnodes)
        self._coordinates = np.zeros((self._nnodes, 3))
        self._pressures = np.zeros(self._nnodes)
        self._state = WellState.SIZED
        logger.debug("Well sized with %d nodes", self._nnodes)

    def initialize_flow(self, oil_flow: npt.ArrayLike, water_flow: npt.ArrayLike, gas_flow: npt.ArrayLike):
        self._require_sized("initialize_flow")
        for name, flow in (("oil", oil_flow), ("water", water_flow), ("gas", gas_flow)):
            if len(flow) != self._nnodes:
                raise ValueError(f"{name} flow has {len(flow)} entries, expected {self._nnodes}")
        self._oil_flow = oil_flow
        self._water_flow = water_flow
        self._gas_flow = gas_flow
        self._state = WellState.FLOW_INITIALIZED
        logger.debug("Well flow arrays bound")

    @property
    def oil_flow(self):
        return self._oil_flow

    @property
    def water_flow(self):
        return self._water_flow

    @property
    def gas_flow(self):
        return self._gas_flow

    def set_radius(self, radius: float):
        if not radius > 0:
            raise ValueError(f"Well radius must be positive, got {radius}")
        self._radius = float(radius)

    def radius(self) -> float:
        return self._radius

    def number_of_nodes(self) -> int:
        return self._nnodes

    def read_coordinates(self, infile: TextIO):
        """ Reads one whitespace separated 'x y z' row per node. Lines starting with # are skipped """
        self._require_sized("read_coordinates")
        coords = np.loadtxt(infile, dtype=float, comments='#', ndmin=2)
        if coords.shape != (self._nnodes, 3):
            raise ValueError(
                f"Expected {self._nnodes} rows of x y z coordinates, got array of shape {coords.shape}"
            )
        self._coordinates[:] = coords
        self._coordinates_read = True
        logger.debug("Read coordinates for %d nodes", self._nnodes)

    def coordinates(self, index: int) -> NodeCoordinates:
        self._require_sized("coordinates")
        self._check_index(index)
        x, y, z = self._coordinates[index]
        return NodeCoordinates(float(x), float(y), float(z))

    def pressure(self, index: int) -> float:
        self._require_sized("pressure")
        self._check_index(index)
        return float(self._pressures[index])

    def set_pressure(self, index: int, pressure: float):
        self._require_sized("set_pressure")
        self._check_index(index)
        self._pressures[index] = pressure

    @property
    def pressures(self) -> np.ndarray:
        """ Read-only view of node pressures """
        self._require_sized("pressures")
        view = self._pressures.view()
        view.flags.writeable = False
        return view

    def solve(self):
        if self._state not in (WellState.FLOW_INITIALIZED, WellState.SOLVED):
            raise WellStateError(f"solve() requires flow to be initialized, well is {self._state.name}")
        if not self._coordinates_read:
            raise WellStateError("solve() requires read_coordinates() to be called first")
        self._solve()
        self._state = WellState.SOLVED
        logger.debug("Well solved")

    @abstractmethod
    def _solve(self):
        """ Nonlinear assembly and solve, updating node pressures """
