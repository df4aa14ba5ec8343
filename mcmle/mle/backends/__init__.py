"""
MLE backends.
"""

from mcmle.mle.backends.cpu import CPUScipyBackend

__all__ = ['CPUScipyBackend']
