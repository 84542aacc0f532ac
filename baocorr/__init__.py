from baocorr.cosmology.rsd import Multipole
from baocorr.models.bao_correlation import BaoCorrelationModel, BaoParams

__all__ = ["BaoCorrelationModel", "BaoParams", "Multipole"]
