"""
mcmle: Monte Carlo estimation and maximum-likelihood fitting for Python.

Submodules:
    variates: Seeded normal, uniform, binomial and categorical draws
    montecarlo: Monte Carlo expectations, interval probabilities, path games
    likelihood: Negative log-likelihood evaluators and likelihood grids
    mle: Numerical maximum-likelihood estimation
    regression: Simple linear regression
    simulation: Replicated simulation over parameter grids
"""

__version__ = "0.1.0"
__author__ = "Hai-Shuo"
__email__ = "contact@sgcx.org"

from mcmle import variates
from mcmle import montecarlo
from mcmle import likelihood
from mcmle import mle
from mcmle import regression
from mcmle import simulation

__all__ = [
    "__version__",
    "variates",
    "montecarlo",
    "likelihood",
    "mle",
    "regression",
    "simulation",
]
