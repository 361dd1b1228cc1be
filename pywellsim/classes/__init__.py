from .classes import (den_method, visc_method, rs_method, fvf_method, kr_method, ift_method,
                      ift_correction, pp_method, dv_method, diag_kind, class_dic)
