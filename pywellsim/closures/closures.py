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

from typing import Dict, Mapping, Optional

from pywellsim.classes import den_method, visc_method, rs_method, fvf_method, kr_method, ift_method, pp_method, dv_method
from pywellsim.validate import validate_methods
from pywellsim.shared_fns import is_finite
from pywellsim.pvt import (DensityModel, ViscosityModel, SolubilityModel, FormationVolumeFactorModel,
                           ConstantDensityModel, WeaklyCompressibleDensityModel, CompressibleDensityModel,
                           OilDensityModel, ConstantViscosityModel, PowerViscosityModel, PowerSolubilityModel,
                           LiquidFormationVolumeFactorModel, GasFormationVolumeFactorModel)
from pywellsim.relperm import RelativePermeabilityModel, PowerRelativePermeabilityModel, LETRelativePermeabilityModel
from pywellsim.ift import (InterfacialTensionModel, ConstantInterfacialTensionModel,
                           BeggsGasOilInterfacialTensionModel, BeggsGasWaterInterfacialTensionModel)
from pywellsim.driftflux import (DriftFluxState, DriftVelocityResult, ProfileParameterModel, DriftVelocityModel,
                                 ConstantProfileParameterModel, ShiOilWaterProfileParameterModel,
                                 ShiGasLiquidProfileParameterModel, ConstantDriftVelocityModel,
                                 GasVolumeFractionDriftVelocityModel, ShiGasLiquidDriftVelocityModel,
                                 ShiOilWaterDriftVelocityModel, slip_velocity)

PHASES = ('oil', 'water', 'gas')

# ============================================================================
#  Model factories
#  Method is a string (any case) or the matching Enum member
# ============================================================================

def _build(cls, params):
    try:
        return cls(**params)
    except TypeError as e:
        raise ValueError(f"Invalid parameters for {cls.__name__}: {e}") from e

def make_density_model(denmethod: den_method = den_method.CONST, **params) -> DensityModel:
    """ Returns a density closure
        denmethod: A string or den_method Enum class that specifies one of following choices;
                   CONST: ConstantDensityModel(density)
                   WEAK: WeaklyCompressibleDensityModel(reference_density, reference_pressure, sound_speed)
                   COMP: CompressibleDensityModel(standard_density)
                   OIL: OilDensityModel(oil_standard_density, gas_standard_density)
    """
    denmethod = validate_methods(["denmethod"], [denmethod])
    fn_dic = {"CONST": ConstantDensityModel, "WEAK": WeaklyCompressibleDensityModel,
              "COMP": CompressibleDensityModel, "OIL": OilDensityModel}
    return _build(fn_dic[denmethod.name], params)

def make_viscosity_model(viscmethod: visc_method = visc_method.CONST, **params) -> ViscosityModel:
    """ Returns a viscosity closure
        viscmethod: A string or visc_method Enum class;
                   CONST: ConstantViscosityModel(viscosity)
                   POW: PowerViscosityModel(alpha, exponent)
    """
    viscmethod = validate_methods(["viscmethod"], [viscmethod])
    fn_dic = {"CONST": ConstantViscosityModel, "POW": PowerViscosityModel}
    return _build(fn_dic[viscmethod.name], params)

def make_solubility_model(rsmethod: rs_method = rs_method.POW, **params) -> SolubilityModel:
    """ Returns a solubility closure
        rsmethod: A string or rs_method Enum class;
                   POW: PowerSolubilityModel(power, alpha, oil_standard_density, gas_standard_density)
    """
    rsmethod = validate_methods(["rsmethod"], [rsmethod])
    fn_dic = {"POW": PowerSolubilityModel}
    return _build(fn_dic[rsmethod.name], params)

def make_fvf_model(fvfmethod: fvf_method = fvf_method.LIQ, **params) -> FormationVolumeFactorModel:
    """ Returns a formation volume factor closure
        fvfmethod: A string or fvf_method Enum class;
                   LIQ: LiquidFormationVolumeFactorModel(compressibility, reference_pressure, reference_formation_volume_factor)
                   GAS: GasFormationVolumeFactorModel(reference_pressure, reference_formation_volume_factor)
    """
    fvfmethod = validate_methods(["fvfmethod"], [fvfmethod])
    fn_dic = {"LIQ": LiquidFormationVolumeFactorModel, "GAS": GasFormationVolumeFactorModel}
    return _build(fn_dic[fvfmethod.name], params)

def make_relperm_model(krmethod: kr_method = kr_method.POW, **params) -> RelativePermeabilityModel:
    """ Returns a relative permeability closure
        krmethod: A string or kr_method Enum class;
                   POW: PowerRelativePermeabilityModel(minimum_saturation, maximum_saturation, maximum_relative_permeability, exponent)
                   LET: LETRelativePermeabilityModel(minimum_saturation, maximum_saturation, maximum_relative_permeability, L, E, T)
    """
    krmethod = validate_methods(["krmethod"], [krmethod])
    fn_dic = {"POW": PowerRelativePermeabilityModel, "LET": LETRelativePermeabilityModel}
    return _build(fn_dic[krmethod.name], params)

def make_ift_model(iftmethod: ift_method = ift_method.CONST, **params) -> InterfacialTensionModel:
    """ Returns an interfacial tension closure
        iftmethod: A string or ift_method Enum class;
                   CONST: ConstantInterfacialTensionModel(value)
                   GO: BeggsGasOilInterfacialTensionModel(temperature, relative_density, correction)
                   GW: BeggsGasWaterInterfacialTensionModel(temperature)
    """
    iftmethod = validate_methods(["iftmethod"], [iftmethod])
    fn_dic = {"CONST": ConstantInterfacialTensionModel, "GO": BeggsGasOilInterfacialTensionModel,
              "GW": BeggsGasWaterInterfacialTensionModel}
    return _build(fn_dic[iftmethod.name], params)

def make_profile_parameter_model(ppmethod: pp_method = pp_method.CONST, **params) -> ProfileParameterModel:
    """ Returns a drift-flux profile parameter closure
        ppmethod: A string or pp_method Enum class;
                   CONST: ConstantProfileParameterModel(value)
                   SHIOW: ShiOilWaterProfileParameterModel(A, B1, B2)
                   SHIGL: ShiGasLiquidProfileParameterModel(A, B, Fv)
    """
    ppmethod = validate_methods(["ppmethod"], [ppmethod])
    fn_dic = {"CONST": ConstantProfileParameterModel, "SHIOW": ShiOilWaterProfileParameterModel,
              "SHIGL": ShiGasLiquidProfileParameterModel}
    return _build(fn_dic[ppmethod.name], params)

def make_drift_velocity_model(dvmethod: dv_method = dv_method.CONST, **params) -> DriftVelocityModel:
    """ Returns a drift-flux drift velocity closure
        dvmethod: A string or dv_method Enum class;
                   CONST: ConstantDriftVelocityModel(value)
                   GVF: GasVolumeFractionDriftVelocityModel(alpha, power)
                   SHIOW: ShiOilWaterDriftVelocityModel()
                   SHIGL: ShiGasLiquidDriftVelocityModel(a1, a2)
    """
    dvmethod = validate_methods(["dvmethod"], [dvmethod])
    fn_dic = {"CONST": ConstantDriftVelocityModel, "GVF": GasVolumeFractionDriftVelocityModel,
              "SHIOW": ShiOilWaterDriftVelocityModel, "SHIGL": ShiGasLiquidDriftVelocityModel}
    return _build(fn_dic[dvmethod.name], params)

# ============================================================================
#  Per well closure bundle
# ============================================================================

class NodeClosures:
    """ Closure values at one node. Phase keyed mappings hold only configured phases """
    def __init__(self):
        self.formation_volume_factors = {}
        self.solubility = None
        self.densities = {}
        self.viscosities = {}
        self.relative_permeabilities = {}
        self.interfacial_tension = None
        self.profile_parameter = None
        self.drift_velocity: Optional[DriftVelocityResult] = None

    def values(self) -> Dict[str, float]:
        """ Flat name -> value mapping of every computed closure """
        out = {}
        for label, dic in (('B', self.formation_volume_factors), ('density', self.densities),
                           ('viscosity', self.viscosities), ('kr', self.relative_permeabilities)):
            for phase, val in dic.items():
                out[f'{phase}_{label}'] = val
        for name in ('solubility', 'interfacial_tension', 'profile_parameter'):
            if getattr(self, name) is not None:
                out[name] = getattr(self, name)
        if self.drift_velocity is not None:
            out['drift_velocity'] = self.drift_velocity.value
        return out

    def is_finite(self) -> bool:
        return all(is_finite(v) for v in self.values().values())

    def __repr__(self):
        return f"NodeClosures({self.values()!r})"


_PHASE_KEYS = {
    'density': make_density_model,
    'viscosity': make_viscosity_model,
    'fvf': make_fvf_model,
    'relperm': make_relperm_model,
}
_SHARED_KEYS = {
    'solubility': make_solubility_model,
    'ift': make_ift_model,
    'profile_parameter': make_profile_parameter_model,
    'drift_velocity': make_drift_velocity_model,
}


class ClosureSet:
    """ The closures configured for one well

        density, viscosity, fvf, relperm: Mappings of phase ('oil', 'water', 'gas') to model
        solubility: Gas in oil solubility model
        ift: Interfacial tension model
        profile_parameter, drift_velocity: Drift-flux slip closures
        dispersed_phase, continuous_phase: Phases whose densities feed the drift-flux
                   density ratio. Defaults to gas dispersed in oil

        Models are shared read-only across nodes and iterations.
    """
    def __init__(
        self,
        density: Optional[Mapping[str, DensityModel]] = None,
        viscosity: Optional[Mapping[str, ViscosityModel]] = None,
        fvf: Optional[Mapping[str, FormationVolumeFactorModel]] = None,
        relperm: Optional[Mapping[str, RelativePermeabilityModel]] = None,
        solubility: Optional[SolubilityModel] = None,
        ift: Optional[InterfacialTensionModel] = None,
        profile_parameter: Optional[ProfileParameterModel] = None,
        drift_velocity: Optional[DriftVelocityModel] = None,
        dispersed_phase: str = 'gas',
        continuous_phase: str = 'oil',
    ):
        self.density = dict(density or {})
        self.viscosity = dict(viscosity or {})
        self.fvf = dict(fvf or {})
        self.relperm = dict(relperm or {})
        for label, dic in (('density', self.density), ('viscosity', self.viscosity),
                           ('fvf', self.fvf), ('relperm', self.relperm)):
            for phase in dic:
                if phase not in PHASES:
                    raise ValueError(f"Unknown phase '{phase}' for {label}. Options are: {', '.join(PHASES)}")
        if dispersed_phase not in PHASES or continuous_phase not in PHASES or dispersed_phase == continuous_phase:
            raise ValueError("dispersed_phase and continuous_phase must be two different phases")
        self.solubility = solubility
        self.ift = ift
        self.profile_parameter = profile_parameter
        self.drift_velocity = drift_velocity
        self.dispersed_phase = dispersed_phase
        self.continuous_phase = continuous_phase

    @classmethod
    def from_dict(cls, config: Mapping[str, Mapping]) -> "ClosureSet":
        """ Builds a ClosureSet from nested mappings, e.g.
            {'oil_density': {'method': 'OIL', 'oil_standard_density': 850, 'gas_standard_density': 0.8},
             'drift_velocity': {'method': 'SHIGL', 'a1': 0.06, 'a2': 0.21}}
            Phase keyed entries are '<phase>_<density|viscosity|fvf|relperm>'.
            'dispersed_phase' and 'continuous_phase' may be given as plain strings.
        """
        kwargs = {'density': {}, 'viscosity': {}, 'fvf': {}, 'relperm': {}}
        for key, entry in config.items():
            if key in ('dispersed_phase', 'continuous_phase'):
                kwargs[key] = entry
                continue
            params = dict(entry)
            method = params.pop('method', None)
            if key in _SHARED_KEYS:
                factory, target = _SHARED_KEYS[key], None
            else:
                phase, _, quantity = key.partition('_')
                if phase not in PHASES or quantity not in _PHASE_KEYS:
                    raise ValueError(f"Unknown closure configuration key '{key}'")
                factory, target = _PHASE_KEYS[quantity], kwargs[quantity]
            model = factory(**params) if method is None else factory(method, **params)
            if target is None:
                kwargs[key] = model
            else:
                target[phase] = model
        return cls(**kwargs)

    def _phase_density(self, phase, model, pressure, fvfs, rs):
        if isinstance(model, OilDensityModel):
            if phase not in fvfs:
                raise ValueError(f"{phase} OilDensityModel needs a {phase} fvf model")
            return model.compute_density(fvfs[phase], solubility=rs)
        if isinstance(model, CompressibleDensityModel):
            if phase not in fvfs:
                raise ValueError(f"{phase} CompressibleDensityModel needs a {phase} fvf model")
            return model.compute_density(fvfs[phase])
        return model.compute_density(pressure)

    def evaluate_node(
        self,
        pressure: float,
        saturations: Optional[Mapping[str, float]] = None,
        flow_state: Optional[DriftFluxState] = None,
        oil_mass_fraction: float = 1.0,
        gas_mass_fraction: float = 1.0,
    ) -> NodeClosures:
        """ Evaluates every configured closure at one node

            pressure: Node pressure (Pa)
            saturations: Mapping of phase to saturation, for relative permeabilities
            flow_state: DriftFluxState for the slip closures. Dispersed and continuous densities
                        are overwritten by the PVT densities when both are configured
            oil_mass_fraction, gas_mass_fraction: Mass fractions for the solubility cap. Defaults to 1,
                        as in pvt_table.
                        Pass gas_mass_fraction=0 for dead oil

            Order: FVF, solubility, density, viscosity, relative permeability, IFT,
            profile parameter, drift velocity.
        """
        node = NodeClosures()
        for phase, model in self.fvf.items():
            node.formation_volume_factors[phase] = model.compute_formation_volume_factor(pressure)
        if self.solubility is not None:
            node.solubility = self.solubility.compute_solubility(pressure, oil_mass_fraction, gas_mass_fraction)
        for phase, model in self.density.items():
            node.densities[phase] = self._phase_density(phase, model, pressure,
                                                        node.formation_volume_factors, node.solubility)
        for phase, model in self.viscosity.items():
            node.viscosities[phase] = model.compute_viscosity(pressure)
        if saturations:
            for phase, model in self.relperm.items():
                if phase in saturations:
                    node.relative_permeabilities[phase] = model.compute_relative_permeability(saturations[phase])
        if self.ift is not None:
            node.interfacial_tension = self.ift.compute_interfacial_tension(pressure)

        if flow_state is not None and self.drift_velocity is not None:
            state = flow_state
            if self.dispersed_phase in node.densities and self.continuous_phase in node.densities:
                state = state.replace(dispersed_density=node.densities[self.dispersed_phase],
                                      not_dispersed_density=node.densities[self.continuous_phase])
            if self.profile_parameter is not None:
                node.profile_parameter, node.drift_velocity = slip_velocity(
                    state, self.profile_parameter, self.drift_velocity)
            else:
                node.profile_parameter = state.profile_parameter
                node.drift_velocity = self.drift_velocity.evaluate_drift_velocity(state)
        elif flow_state is not None and self.profile_parameter is not None:
            node.profile_parameter = self.profile_parameter.compute_profile_parameter(flow_state)
        return node
