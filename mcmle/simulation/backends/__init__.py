"""
Simulation backends.

Available backends:
    CPUSimulationBackend: sequential or thread-pool replicate runner
"""

from mcmle.simulation.backends.cpu import CPUSimulationBackend

__all__ = [
    "CPUSimulationBackend",
]
