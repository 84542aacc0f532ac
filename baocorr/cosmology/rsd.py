from enum import Enum, unique
from functools import lru_cache

from scipy.special import eval_legendre


@unique
class Multipole(Enum):
    """Legendre multipoles of an anisotropic correlation function."""

    MONOPOLE = 0
    QUADRUPOLE = 2
    HEXADECAPOLE = 4


@lru_cache(maxsize=32)
def get_distortion_coefficients(beta):
    """Computes the linear (Kaiser) redshift-space distortion coefficients.

    Parameters
    ----------
    beta : float
        The RSD parameter f/b

    Returns
    -------
    c0, c2, c4 : float
        The weights applied to the monopole, quadrupole and hexadecapole
    """
    c0 = 1.0 + beta * (2.0 / 3.0 + beta / 5.0)
    c2 = beta * (4.0 / 3.0 + beta * 4.0 / 7.0)
    c4 = beta * beta * 8.0 / 35.0
    return c0, c2, c4


class RsdCorrelationFunction:
    """Correlation function built from its ell = 0, 2, 4 multipoles.

    Holds no distortion state: ``beta`` is supplied with every angular query,
    so a single instance can be shared between concurrent evaluations.
    """

    def __init__(self, xi0, xi2, xi4):
        self.xi = {Multipole.MONOPOLE: xi0, Multipole.QUADRUPOLE: xi2, Multipole.HEXADECAPOLE: xi4}

    def __call__(self, r, mu, beta):
        """Evaluates the redshift-space distorted correlation function at separation r and
        line of sight cosine mu."""
        c0, c2, c4 = get_distortion_coefficients(float(beta))
        xi = c0 * self.xi[Multipole.MONOPOLE](r)
        xi = xi + c2 * eval_legendre(2, mu) * self.xi[Multipole.QUADRUPOLE](r)
        xi = xi + c4 * eval_legendre(4, mu) * self.xi[Multipole.HEXADECAPOLE](r)
        return xi

    def get_multipole(self, r, multipole):
        """Returns the undistorted multipole at separation r. ``multipole`` may be a Multipole or 0, 2, 4."""
        return self.xi[Multipole(multipole)](r)
