from .distribution import Distribution, StandardNormal
from .kernels import Kernel, StandardNormalKernel
from .posterior import BayesianPosterior, likelihood_cv
from .selectors import SelectBandwidth, SilvermanRot, FixedBandwidth, BayesianSelector
from .kde import KernelDensityEstimator

__all__ = [
    "Distribution",
    "StandardNormal",
    "Kernel",
    "StandardNormalKernel",
    "BayesianPosterior",
    "likelihood_cv",
    "SelectBandwidth",
    "SilvermanRot",
    "FixedBandwidth",
    "BayesianSelector",
    "KernelDensityEstimator",
]
