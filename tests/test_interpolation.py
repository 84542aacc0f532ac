import os
import shutil
import tempfile

import numpy as np
import pytest

from baocorr.cosmology.interpolation import Interpolator, get_interpolation_methods_list, validate_interpolation_method


class TestInterpolator:
    temp_dir = None
    xs = np.linspace(10.0, 200.0, 40)

    @classmethod
    def setup_class(cls):
        cls.temp_dir = tempfile.mkdtemp()

    @classmethod
    def teardown_class(cls):
        shutil.rmtree(cls.temp_dir)

    def write(self, filename, text):
        path = os.path.join(self.temp_dir, filename)
        with open(path, "w") as f:
            f.write(text)
        return path

    def test_methods_list(self):
        assert get_interpolation_methods_list() == ["linear", "cspline", "akima"]
        assert validate_interpolation_method("CSPLINE")
        assert not validate_interpolation_method("quintic")

    def test_all_methods_pass_through_points(self):
        ys = np.sin(self.xs / 20.0)
        for method in get_interpolation_methods_list():
            interp = Interpolator(self.xs, ys, method=method)
            assert np.allclose(interp(self.xs), ys), f"{method} does not reproduce its tabulated points"

    def test_all_methods_exact_for_straight_line(self):
        ys = 0.5 - 0.01 * self.xs
        test_xs = np.linspace(12.3, 198.7, 77)
        for method in get_interpolation_methods_list():
            interp = Interpolator(self.xs, ys, method=method)
            assert np.allclose(interp(test_xs), 0.5 - 0.01 * test_xs), f"{method} fails on a straight line"

    def test_extrapolates_outside_table(self):
        ys = 0.5 - 0.01 * self.xs
        for method in get_interpolation_methods_list():
            interp = Interpolator(self.xs, ys, method=method)
            assert interp(-10.0) == pytest.approx(0.6)
            assert interp(250.0) == pytest.approx(-2.0)

    def test_scalar_input_gives_float(self):
        interp = Interpolator(self.xs, self.xs**2)
        assert isinstance(interp(50.0), float)

    def test_cspline_has_natural_boundaries(self):
        interp = Interpolator(self.xs, self.xs**3)
        assert interp.spline(self.xs[0], nu=2) == pytest.approx(0.0, abs=1e-6)
        assert interp.spline(self.xs[-1], nu=2) == pytest.approx(0.0, abs=1e-6)

    def test_from_file_ignores_comments(self):
        path = self.write("comments.dat", "# r xi\n0 1\n1 3\n# midway\n2 5\n3 7\n")
        interp = Interpolator.from_file(path, method="linear")
        assert interp(1.5) == pytest.approx(4.0)
        assert interp.name == path

    def test_missing_file(self):
        with pytest.raises(FileNotFoundError, match="cannot be found"):
            Interpolator.from_file(os.path.join(self.temp_dir, "missing.0.dat"))

    def test_wrong_number_of_columns(self):
        path = self.write("three_columns.dat", "0 1 2\n1 2 3\n2 3 4\n3 4 5\n")
        with pytest.raises(ValueError, match="2 columns"):
            Interpolator.from_file(path)

    def test_unparsable_file(self):
        path = self.write("garbage.dat", "0 1\n1 two\n2 3\n")
        with pytest.raises(ValueError, match="Could not parse"):
            Interpolator.from_file(path)

    def test_non_increasing_x(self):
        path = self.write("unsorted.dat", "0 1\n2 3\n1 2\n3 4\n")
        with pytest.raises(ValueError, match="strictly increasing"):
            Interpolator.from_file(path)

    def test_too_few_points(self):
        with pytest.raises(ValueError, match="at least 3 points"):
            Interpolator([0.0, 1.0], [1.0, 2.0], method="cspline")
        with pytest.raises(ValueError, match="at least 5 points"):
            Interpolator([0.0, 1.0, 2.0, 3.0], [1.0, 2.0, 3.0, 4.0], method="akima")
        Interpolator([0.0, 1.0], [1.0, 2.0], method="linear")

    def test_unknown_method(self):
        with pytest.raises(ValueError, match="not recognised"):
            Interpolator(self.xs, self.xs, method="quintic")
