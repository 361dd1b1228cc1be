"""
pywellsim
===================================

-------------------------------------------------------
Closure relations for multiphase flow inside a wellbore
-------------------------------------------------------

These are the coefficients a wellbore conservation equation solver needs at every node on every
nonlinear iteration. Each closure family has a small interface with one evaluation method, and
the concrete correlation is picked when the well is configured.

Submodules are imported separately, e.g. `from pywellsim import pvt` or `import pywellsim.driftflux`

Includes;

- Phase density: constant, weakly compressible (acoustic), from FVF, and live oil with dissolved gas
- Phase viscosity: constant and power law in pressure
- Gas solubility: power law in pressure, capped by the gas available for mass balance
- Formation volume factor for liquids and gases
- Relative permeability: power (Corey) and LET curves on a clamped saturation window
- Interfacial tension: constant, and Beggs gas-oil and gas-water correlations
- Drift-flux slip: constant, gas volume fraction power law, and Shi et al. profile parameter and
  drift velocity models for gas-liquid and oil-water flow
- The Well contract a wellbore solver exposes to the reservoir coupling loop
- ClosureSet, bundling the closures of one well and evaluating them node by node

"""

submodules = [
    'classes',
    'closures',
    'constants',
    'driftflux',
    'ift',
    'pvt',
    'relperm',
    'shared_fns',
    'validate',
    'well'
]

__all__ = submodules

import importlib

def __dir__():
    return __all__


def __getattr__(name):
    if name in submodules:
        return importlib.import_module(f'pywellsim.{name}')
    else:
        try:
            return globals()[name]
        except KeyError:
            raise AttributeError(
                f"Module 'pywellsim' has no attribute '{name}'"
            )
