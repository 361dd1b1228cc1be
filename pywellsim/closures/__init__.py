from .closures import (PHASES, make_density_model, make_viscosity_model, make_solubility_model,
                       make_fvf_model, make_relperm_model, make_ift_model, make_profile_parameter_model,
                       make_drift_velocity_model, NodeClosures, ClosureSet)
