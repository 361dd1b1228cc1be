from .driftflux import (DriftFluxState, DriftFluxDiagnostic, DriftVelocityResult,
                        ProfileParameterModel, ConstantProfileParameterModel,
                        ShiOilWaterProfileParameterModel, ShiGasLiquidProfileParameterModel,
                        DriftVelocityModel, ConstantDriftVelocityModel, GasVolumeFractionDriftVelocityModel,
                        ShiGasLiquidDriftVelocityModel, ShiOilWaterDriftVelocityModel, slip_velocity)
