from bayeskde.errors import *
from bayeskde.linalg.matrix import Matrix2
from bayeskde.core.fundamental import stddev, average
from bayeskde.core.range import Range, Box, MinMax
from bayeskde.core.mcmc import SliceSampler
from bayeskde.distributions.distribution import Distribution, StandardNormal
from bayeskde.distributions.kernels import Kernel, StandardNormalKernel
from bayeskde.distributions.posterior import BayesianPosterior, likelihood_cv
from bayeskde.distributions.selectors import SelectBandwidth, SilvermanRot, FixedBandwidth, BayesianSelector
from bayeskde.distributions.kde import KernelDensityEstimator
from bayeskde.core.hypothesis import MannWhitneyU
from bayeskde.core.grid import density_grid

__version__ = "0.1.0"
