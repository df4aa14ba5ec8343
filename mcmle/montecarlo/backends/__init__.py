"""
Monte Carlo backends.

Available backends:
    CPUMonteCarloBackend: CPU reference implementation (numpy Generator)
    GPUMonteCarloBackend: PyTorch implementation for interval designs,
        imported lazily from mcmle.montecarlo.backends.gpu
"""

from mcmle.montecarlo.backends.cpu import CPUMonteCarloBackend

__all__ = [
    "CPUMonteCarloBackend",
]
