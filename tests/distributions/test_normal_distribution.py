import math
import unittest

import numpy as np

from bayeskde.distributions.distribution import StandardNormal


class TestStandardNormal(unittest.TestCase):

    def setUp(self):
        self.dist = StandardNormal(rng=np.random.default_rng(123))
        self.dist2 = StandardNormal(dim=2, rng=np.random.default_rng(123))

    def test_pdf_1d(self):
        self.assertAlmostEqual(self.dist.pdf(0.0), 1.0 / math.sqrt(2.0 * math.pi))
        self.assertAlmostEqual(self.dist.pdf(1.0), math.exp(-0.5) / math.sqrt(2.0 * math.pi))

    def test_pdf_2d(self):
        self.assertAlmostEqual(self.dist2.pdf((0.0, 0.0)), 1.0 / (2.0 * math.pi))
        self.assertAlmostEqual(self.dist2.pdf((1.0, 1.0)), math.exp(-1.0) / (2.0 * math.pi))

    def test_density_matches_pdf(self):
        X = np.array([[0.0, 1.0], [0.5, -0.5], [2.0, 0.0]])
        expected = np.array([self.dist2.pdf(x) for x in X])
        np.testing.assert_allclose(self.dist2.density(X), expected, rtol=1e-12)

        xs = np.linspace(-2, 2, 5)
        np.testing.assert_allclose(self.dist.density(xs), [self.dist.pdf(x) for x in xs], rtol=1e-12)

    def test_log_density_consistency(self):
        x = np.array([-2.0, 0.0, 2.0])
        np.testing.assert_allclose(self.dist.log_density(x), np.log(self.dist.density(x)), rtol=1e-12)

    def test_cdf(self):
        self.assertAlmostEqual(self.dist.cdf(0.0), 0.5)
        self.assertAlmostEqual(self.dist.cdf(1.959963984540054), 0.975)
        out = self.dist.cdf(np.array([-1.0, 1.0]))
        np.testing.assert_allclose(out[0] + out[1], 1.0)
        with self.assertRaises(NotImplementedError):
            self.dist2.cdf(0.0)

    def test_sample_shape(self):
        self.assertEqual(self.dist.sample(10).shape, (10, 1))
        self.assertEqual(self.dist2.sample(4).shape, (4, 2))

    def test_invalid_dim(self):
        with self.assertRaises(ValueError):
            StandardNormal(dim=3)


if __name__ == "__main__":
    unittest.main()
