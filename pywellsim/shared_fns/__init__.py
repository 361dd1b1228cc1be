from .shared_fns import convert_to_numpy, process_input, is_finite, check_finite, clamp, ConstantModel, PowerLaw
