import logging
import sys
from abc import ABC, abstractmethod
from collections import OrderedDict
from dataclasses import dataclass

import numpy as np


@dataclass
class Param:
    name: str
    label: str
    default: float
    sigma: float
    fixed: bool


class CorrelationModel(ABC):
    """Abstract correlation function model.

    Concrete models declare their parameters with `add_param` in the order they
    expect to find them in a parameter vector, and implement `evaluate`,
    `evaluate_multipole` and `plot`.

    """

    def __init__(self, name):
        """Create a new model.

        Parameters
        ----------
        name : str
            The name of the model
        """
        self.name = name
        self.logger = logging.getLogger("baocorr")
        self.params = []
        self.param_dict = {}

    def get_name(self):
        return self.name

    def add_param(self, name, label, default, sigma, fixed=False):
        assert name not in self.param_dict, f"ERROR: Parameter {name} has already been defined"
        p = Param(name, label, default, sigma, fixed)
        self.params.append(p)
        self.param_dict[name] = p

    def set_fix_params(self, params):
        """Fixes the named parameters, freeing all others"""
        if params is None:
            params = []
        for p in self.params:
            p.fixed = p.name in params

    def get_active_params(self):
        """Returns a list of the active (non-fixed) parameters"""
        return [p for p in self.params if not p.fixed]

    def get_inactive_params(self):
        """Returns a list of the inactive (fixed) parameters"""
        return [p for p in self.params if p.fixed]

    def get_default(self, name):
        """Returns the default value of a given parameter name"""
        return self.param_dict[name].default

    def set_default(self, name, default, sigma=None):
        """Sets the default value for a parameter"""
        self.param_dict[name].default = default
        if sigma is not None:
            self.param_dict[name].sigma = sigma

    def get_defaults(self):
        """Returns a list of default values for all active parameters"""
        return [x.default for x in self.get_active_params()]

    def get_labels(self):
        """Gets a list of the label for all active parameters"""
        return [x.label for x in self.get_active_params()]

    def get_names(self):
        """Get a list of the names for all active parameters"""
        return [x.name for x in self.get_active_params()]

    def get_num_dim(self):
        """Gets the number of dimensions (active, free parameters) in the model"""
        return len(self.get_active_params())

    def get_param_vector(self, params=None):
        """Merges values for the active parameters with the defaults of the fixed ones.

        Parameters
        ----------
        params : list[float], optional
            Values for each active parameter, in declaration order. Defaults to their default values.

        Returns
        -------
        values : np.ndarray
            The full parameter vector, in declaration order, as expected by `evaluate`
        """
        if params is None:
            params = self.get_defaults()
        if len(params) != self.get_num_dim():
            raise ValueError(f"Expected {self.get_num_dim()} values for active parameters {self.get_names()}, got {len(params)}")
        free = iter(params)
        return np.array([p.default if p.fixed else next(free) for p in self.params], dtype=float)

    def get_param_dict(self, params):
        """Converts a full parameter vector into an ordered dictionary of parameter values"""
        if len(params) != len(self.params):
            raise ValueError(f"Expected {len(self.params)} parameter values, got {len(params)}")
        return OrderedDict([(p.name, v) for p, v in zip(self.params, params)])

    def print_to_stream(self, out=None, format_spec="%.6g"):
        """Writes a summary of the model parameters to a stream, stdout by default."""
        if out is None:
            out = sys.stdout
        width = max(len(p.name) for p in self.params) if self.params else 0
        out.write(f"Model {self.name} of {self.__class__.__name__} with {len(self.params)} parameters\n")
        for i, p in enumerate(self.params):
            value, sigma = format_spec % p.default, format_spec % p.sigma
            state = "fixed" if p.fixed else "floating"
            out.write(f"[{i}] {p.name:<{width}} = {value} +/- {sigma} ({state})\n")

    @abstractmethod
    def evaluate(self, r, mu, z, params):
        """Predicts the correlation function at separation r, line of sight cosine mu and redshift z."""
        pass

    @abstractmethod
    def evaluate_multipole(self, r, multipole, z, params):
        """Predicts a single correlation function multipole at separation r and redshift z."""
        pass

    @abstractmethod
    def plot(self, params, z=None, dist=None, figname=None, display=True):
        """Plots the predictions given some input parameter vector."""
        pass
