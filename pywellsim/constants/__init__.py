from .constants import (R_SI, degF2R, PSI_TO_PA, PA_TO_PSI, DYNECM_TO_NM, API_A, API_B,
                        convert_Pa_to_psi, convert_Dynes_per_cm_to_Pa_m, degK_to_degF, sg_to_api)
