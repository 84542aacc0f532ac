import os
import sys
from typing import NamedTuple

import numpy as np

from baocorr.cosmology.interpolation import Interpolator
from baocorr.cosmology.rsd import Multipole, RsdCorrelationFunction
from baocorr.models.model import CorrelationModel


class BaoParams(NamedTuple):
    """Named view of the 9 element parameter vector, in the order the model declares them."""

    alpha: float  # Redshift evolution exponent
    beta: float  # RSD parameter
    bias_beta: float  # (1+beta)*bias
    amplitude: float  # BAO peak amplitude
    scale: float  # BAO peak radial dilation
    xio: float  # Broadband constant template coefficient
    a0: float  # Broadband offset, applied as (1+a0) to the no-wiggle template
    a1: float  # Broadband linear template 1 coefficient
    a2: float  # Broadband linear template 2 coefficient

    @classmethod
    def from_vector(cls, params):
        values = np.asarray(params, dtype=float)
        if values.shape != (len(cls._fields),):
            raise ValueError(f"Expected {len(cls._fields)} parameter values ordered as {cls._fields}, got shape {values.shape}")
        return cls(*values)

    @property
    def bias(self):
        # beta == -1 gives a non-finite bias rather than an exception
        with np.errstate(divide="ignore", invalid="ignore"):
            return np.float64(self.bias_beta) / (1 + self.beta)


class BaoCorrelationModel(CorrelationModel):
    """BAO correlation function model built from tabulated multipole templates.

    The prediction combines a peak term, the difference between the fiducial and no-wiggle
    templates evaluated at a dilated separation, with a broadband term made of the no-wiggle
    template and three nuisance templates, all scaled by the squared bias and a power law
    redshift evolution.
    """

    broadband_categories = ("c", "1", "2")

    def __init__(
        self,
        model_root,
        fiducial_name,
        nowiggles_name,
        broadband_name,
        zref,
        initial_amp=1.0,
        initial_scale=1.0,
        fix_alpha=False,
        fix_beta=False,
        fix_bias=False,
        fix_bao=False,
        fix_scale=False,
        no_bband=False,
        method="cspline",
        name="BAO",
    ):
        """Loads the 15 template files and declares the model parameters.

        Parameters
        ----------
        model_root : str
            Directory holding the template files. A trailing separator is added if missing.
        fiducial_name : str
            Base name of the fiducial files, read as ``{root}{name}.{ell}.dat``
        nowiggles_name : str
            Base name of the no-wiggle files, read as ``{root}{name}.{ell}.dat``
        broadband_name : str
            Base name of the broadband files, read as ``{root}{name}{c,1,2}.{ell}.dat``
        zref : float
            Reference redshift for the redshift evolution factor
        initial_amp, initial_scale : float, optional
            Default values of the BAO amplitude and scale
        fix_alpha, fix_beta, fix_bias : bool, optional
            Whether to hold the corresponding parameter fixed
        fix_bao : bool, optional
            Fixes both the BAO amplitude and scale
        fix_scale : bool, optional
            Fixes the BAO scale only
        no_bband : bool, optional
            Fixes all four broadband coefficients
        method : str, optional
            Interpolation method used for every template file. Defaults to 'cspline'
        """
        super().__init__(name)
        self.zref = zref
        self.method = method

        # The order here sets the order of the parameter vector passed to evaluate
        self.add_param("alpha", r"$\alpha$", 3.8, 0.3, fix_alpha)
        self.add_param("beta", r"$\beta$", 1.0, 0.1, fix_beta)
        self.add_param("(1+beta)*bias", r"$(1+\beta)b$", -0.34, 0.03, fix_bias)
        self.add_param("BAO amplitude", r"$A_{\rm BAO}$", initial_amp, 0.15, fix_bao)
        self.add_param("BAO scale", r"$\alpha_{\rm BAO}$", initial_scale, 0.02, fix_bao or fix_scale)
        self.add_param("BBand xio", r"$\xi_0$", 0.0, 0.001, no_bband)
        self.add_param("BBand a0", r"$a_0$", -2.5, 0.2, no_bband)
        self.add_param("BBand a1", r"$a_1$", -1.8, 2.0, no_bband)
        self.add_param("BBand a2", r"$a_2$", 0.0, 2.0, no_bband)

        self.model_root = self.get_model_root(model_root)
        self.fid = self.load_template(self.get_template_filenames(fiducial_name))
        self.nw = self.load_template(self.get_template_filenames(nowiggles_name))
        self.bbc, self.bb1, self.bb2 = [
            self.load_template(self.get_template_filenames(broadband_name, category=c)) for c in self.broadband_categories
        ]
        self.logger.info(f"Created model {name} of {self.__class__.__name__} from templates in {self.model_root} with zref={zref}")

    @classmethod
    def from_config(cls, config):
        """Creates a model from a dictionary of constructor arguments, such as the `model` section of config.yml"""
        return cls(**dict(config))

    @staticmethod
    def get_model_root(model_root):
        root = str(model_root)
        if len(root) > 0 and not root.endswith(("/", os.sep)):
            root += os.sep
        return root

    def get_template_filenames(self, base_name, category=""):
        return [f"{self.model_root}{base_name}{category}.{m.value}.dat" for m in Multipole]

    def load_template(self, filenames):
        return RsdCorrelationFunction(*[Interpolator.from_file(f, method=self.method) for f in filenames])

    def evaluate(self, r, mu, z, params):
        """Predicts the correlation function at separation r and line of sight cosine mu.

        Parameters
        ----------
        r : float or np.ndarray
            Separation. Negative values are passed straight to the interpolation.
        mu : float or np.ndarray
            Cosine of the angle to the line of sight
        z : float or np.ndarray
            Redshift
        params : list[float]
            The 9 element parameter vector, ordered as the parameters were declared

        Returns
        -------
        xi : float or np.ndarray
            The predicted correlation
        """
        p = BaoParams.from_vector(params)
        # The BAO scale dilates r only, it cancels in mu
        return self._combine(p, r, z, lambda template, x: template(x, mu, p.beta))

    def evaluate_multipole(self, r, multipole, z, params):
        """Predicts the undistorted multipole (0, 2, 4 or a `Multipole`) at separation r."""
        p = BaoParams.from_vector(params)
        multipole = Multipole(multipole)
        return self._combine(p, r, z, lambda template, x: template.get_multipole(x, multipole))

    def _combine(self, p, r, z, query):
        # zref == -1 gives a non-finite factor rather than an exception, as for beta == -1
        with np.errstate(divide="ignore", invalid="ignore"):
            zfactor = (np.float64(1 + z) / (1 + self.zref)) ** p.alpha

        peak = 0.0
        if p.amplitude != 0:
            rs = r * p.scale
            peak = p.amplitude * (query(self.fid, rs) - query(self.nw, rs))

        # Broadband terms use the undilated separation, zero coefficients are skipped exactly
        broadband = 0.0
        if p.xio != 0:
            broadband += p.xio * query(self.bbc, r)
        if 1 + p.a0 != 0:
            broadband += (1 + p.a0) * query(self.nw, r)
        if p.a1 != 0:
            broadband += p.a1 * query(self.bb1, r)
        if p.a2 != 0:
            broadband += p.a2 * query(self.bb2, r)

        return p.bias * p.bias * zfactor * (peak + broadband)

    def get_model(self, dist, z, params, poles=(0, 2, 4)):
        """Computes the multipole predictions at each separation in dist.

        Returns
        -------
        xi : np.ndarray
            Array of shape (len(poles), len(dist))
        """
        dist = np.asarray(dist, dtype=float)
        return np.array([np.broadcast_to(self.evaluate_multipole(dist, ell, z, params), dist.shape) for ell in poles])

    def print_to_stream(self, out=None, format_spec="%.6g"):
        if out is None:
            out = sys.stdout
        super().print_to_stream(out=out, format_spec=format_spec)
        out.write(f"\nReference redshift = {self.zref}\n")

    def plot(self, params, z=None, dist=None, figname=None, display=True):
        import matplotlib.pyplot as plt

        if z is None:
            z = self.zref
        if dist is None:
            dist = np.linspace(20.0, 200.0, 181)
        smooth_params = BaoParams.from_vector(params)._replace(amplitude=0.0)

        mods = self.get_model(dist, z, params)
        smooths = self.get_model(dist, z, smooth_params)
        labels = [f"$\\xi_{{{m.value}}}(s)$" for m in Multipole]
        cs = ["#e41a1c", "#377eb8", "#4daf4a"]

        self.logger.info("Create plot")
        fig, axes = plt.subplots(figsize=(9, 6), nrows=len(labels), ncols=2, sharex=True, squeeze=False)
        plt.subplots_adjust(left=0.1, top=0.9, bottom=0.08, right=0.8, hspace=0, wspace=0.3)
        for ax, mod, smooth, label, c in zip(axes, mods, smooths, labels, cs):
            ax[0].plot(dist, dist**2 * mod, c=c, label="Model")
            ax[0].plot(dist, dist**2 * smooth, c=c, ls="--", label="No peak")
            ax[1].plot(dist, dist**2 * (mod - smooth), c=c)
            ax[0].set_ylabel("$s^{2} \\times $ " + label)

        string = "\n".join([f"{p.label}={v:0.4g}" for p, v in zip(self.params, BaoParams.from_vector(params))])
        fig.text(0.99, 0.5, string, horizontalalignment="right", verticalalignment="center")
        axes[-1, 0].set_xlabel("s")
        axes[-1, 1].set_xlabel("s")
        axes[0, 0].legend(frameon=False)
        axes[0, 0].set_title("$s^{2} \\times \\xi(s)$")
        axes[0, 1].set_title("$\\xi(s) - \\xi_{\\rm no\\ peak}(s)$")
        fig.suptitle(f"{self.get_name()} at z={z:0.3g}")
        if figname is not None:
            fig.savefig(figname, bbox_inches="tight", dpi=300)
        if display:
            plt.show()
        return fig


if __name__ == "__main__":
    from baocorr.config import get_config, setup_logging

    setup_logging()

    config = get_config(sys.argv[1] if len(sys.argv) > 1 else None)
    model = BaoCorrelationModel.from_config(config["model"])
    model.print_to_stream()

    params = model.get_param_vector()
    for ell in Multipole:
        print(f"xi_{ell.value}(s=100) = {model.evaluate_multipole(100.0, ell, model.zref, params):0.6g}")
    model.plot(params)
