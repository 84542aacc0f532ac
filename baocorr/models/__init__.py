"""
======
Models
======

.. currentmodule:: baocorr.models

Generic
=======

.. autosummary::
   :toctree: generated/

   CorrelationModel -- Generic correlation function model
   Param -- A named model parameter

Concrete
========

.. autosummary::
   :toctree: generated/

   BaoCorrelationModel
   BaoParams

"""
from baocorr.models.bao_correlation import BaoCorrelationModel, BaoParams
from baocorr.models.model import CorrelationModel, Param

__all__ = [
    "BaoCorrelationModel",
    "BaoParams",
    "CorrelationModel",
    "Param",
]
