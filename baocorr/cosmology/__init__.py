from baocorr.cosmology.interpolation import Interpolator, get_interpolation_methods_list, validate_interpolation_method
from baocorr.cosmology.rsd import Multipole, RsdCorrelationFunction, get_distortion_coefficients

__all__ = [
    "Interpolator",
    "get_interpolation_methods_list",
    "validate_interpolation_method",
    "Multipole",
    "RsdCorrelationFunction",
    "get_distortion_coefficients",
]
