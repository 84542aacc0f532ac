import logging
import os

import numpy as np
from scipy.interpolate import Akima1DInterpolator, make_interp_spline


def get_interpolation_methods_list():
    fns = ["linear", "cspline", "akima"]
    return fns


def get_min_points(method):
    return {"linear": 2, "cspline": 3, "akima": 5}[method]


def validate_interpolation_method(method):
    if method.lower() in get_interpolation_methods_list():
        return True
    logging.getLogger("baocorr").error(f"Interpolation method is {method} and not in list {get_interpolation_methods_list()}")
    return False


class Interpolator:
    """A smooth 1D function passing through tabulated (x, y) points.

    Outside the tabulated range the interpolant is extrapolated using the
    polynomial piece at the nearest end.
    """

    def __init__(self, x, y, method="cspline", name=None):
        """
        Parameters
        ----------
        x : np.ndarray
            Strictly increasing abscissa values
        y : np.ndarray
            Function values at each x
        method : str, optional
            One of 'linear', 'cspline' (natural cubic spline) or 'akima'
        name : str, optional
            Where the points came from, used in error messages
        """
        if not validate_interpolation_method(method):
            raise ValueError(f"Interpolation method {method} not recognised, must be one of {get_interpolation_methods_list()}")
        self.method = method.lower()
        self.name = name or "tabulated data"

        x = np.asarray(x, dtype=float)
        y = np.asarray(y, dtype=float)
        if x.ndim != 1 or x.shape != y.shape:
            raise ValueError(f"{self.name}: x and y must be 1D arrays of equal length, got shapes {x.shape} and {y.shape}")
        if x.size < get_min_points(self.method):
            raise ValueError(f"{self.name}: {self.method} interpolation needs at least {get_min_points(self.method)} points, got {x.size}")
        if not (np.all(np.isfinite(x)) and np.all(np.isfinite(y))):
            raise ValueError(f"{self.name}: tabulated values must be finite")
        if np.any(np.diff(x) <= 0):
            raise ValueError(f"{self.name}: x values must be strictly increasing")
        self.x = x
        self.y = y

        if self.method == "linear":
            self.spline = make_interp_spline(x, y, k=1)
        elif self.method == "cspline":
            self.spline = make_interp_spline(x, y, k=3, bc_type="natural")
        else:
            self.spline = Akima1DInterpolator(x, y)

    @classmethod
    def from_file(cls, filename, method="cspline"):
        """Reads two whitespace separated columns of (x, y) values. Lines starting with # are ignored."""
        if not os.path.exists(filename):
            raise FileNotFoundError(f"Template file {filename} cannot be found.")
        try:
            data = np.loadtxt(filename, comments="#", ndmin=2)
        except ValueError as e:
            raise ValueError(f"Could not parse template file {filename}: {e}") from e
        if data.shape[1] != 2:
            raise ValueError(f"Template file {filename} should have 2 columns, found {data.shape[1]}")
        logging.getLogger("baocorr").debug(f"Loaded {data.shape[0]} points from {filename}")
        return cls(data[:, 0], data[:, 1], method=method, name=filename)

    def __call__(self, x):
        result = self.spline(x, extrapolate=True)
        if np.ndim(result) == 0:
            return float(result)
        return result
