import abc
import os
from unittest.mock import Mock

import numpy as np

# Constant part of each template, by file stem
TEMPLATE_BASES = {"fid": 2.0, "nw": 1.0, "bbc": 0.5, "bb1": 0.3, "bb2": 0.1}


def get_concrete(baseclass):
    classes = baseclass.__subclasses__()
    for c in classes:
        classes += c.__subclasses__()
    final_classes = [c for c in classes if abc.ABC not in c.__bases__]
    return final_classes


def template_function(stem, ell, r):
    """Straight line multipoles, which every interpolation method reproduces exactly."""
    return TEMPLATE_BASES[stem] * (1.0 + 0.1 * ell) + 0.002 * (ell + 1) * np.asarray(r)


def write_templates(root, fiducial="fid", nowiggles="nw", broadband="bb"):
    """Writes the 15 template files the model expects into root."""
    rs = np.linspace(0.0, 250.0, 51)
    stems = {fiducial: "fid", nowiggles: "nw", f"{broadband}c": "bbc", f"{broadband}1": "bb1", f"{broadband}2": "bb2"}
    for name, stem in stems.items():
        for ell in (0, 2, 4):
            data = np.vstack((rs, template_function(stem, ell, rs))).T
            np.savetxt(os.path.join(root, f"{name}.{ell}.dat"), data, header="r xi")


def make_stub(value):
    stub = Mock(return_value=value)
    stub.get_multipole.return_value = value
    return stub
