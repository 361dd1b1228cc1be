from .pvt import (DensityModel, ViscosityModel, SolubilityModel, FormationVolumeFactorModel,
                  ConstantDensityModel, WeaklyCompressibleDensityModel, CompressibleDensityModel,
                  OilDensityModel, ConstantViscosityModel, PowerViscosityModel, PowerSolubilityModel,
                  LiquidFormationVolumeFactorModel, GasFormationVolumeFactorModel, pvt_table)
