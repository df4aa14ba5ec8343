"""
GPU backend for Monte Carlo estimation.

Interval designs are fully vectorisable: normal draws, the indicator and
the reduction all run as torch kernels on the device. Expectation and
path designs call user Python functions, which cannot run on the GPU, so
they fall back to the CPU backend.

The device generator is seeded from the design's SeedSequence, so a fixed
seed reproduces results on the same device. GPU and CPU streams differ.
"""

from __future__ import annotations

import numpy as np

from mcmle.core.compute.rng import as_seed_sequence
from mcmle.core.compute.timing import Timer
from mcmle.core.result import Result
from mcmle.montecarlo._common import MCParams
from mcmle.montecarlo.design import MCDesign


class GPUMonteCarloBackend:
    """
    GPU backend for Monte Carlo estimation.

    Raises RuntimeError at construction when no CUDA or MPS device exists.
    """

    def __init__(self, device: str = 'auto'):
        import torch

        self._torch = torch

        if device == 'auto':
            if torch.cuda.is_available():
                self._device = 'cuda'
            elif hasattr(torch.backends, 'mps') and torch.backends.mps.is_available():
                self._device = 'mps'
            else:
                raise RuntimeError("No GPU available (need CUDA or MPS)")
        else:
            self._device = device

        # MPS has no float64 support
        self._dtype = torch.float32 if self._device == 'mps' else torch.float64

    @property
    def name(self) -> str:
        return f'gpu_{self._device}_montecarlo'

    def solve(self, design: MCDesign) -> Result[MCParams]:
        if design.kind != 'interval':
            from mcmle.montecarlo.backends.cpu import CPUMonteCarloBackend
            result = CPUMonteCarloBackend().solve(design)
            return Result(
                params=result.params,
                info=result.info,
                timing=result.timing,
                backend_name=self.name + " (cpu_fallback)",
                warnings=result.warnings,
            )
        return self._solve_interval(design)

    def _solve_interval(self, design: MCDesign) -> Result[MCParams]:
        torch = self._torch
        timer = Timer(sync_cuda=self._device == 'cuda')
        timer.start()

        p = design.params
        seed = int(as_seed_sequence(design.seed).generate_state(1, dtype=np.uint64)[0]) >> 1
        generator = torch.Generator(device=self._device)
        generator.manual_seed(seed)

        with timer.section('simulation'):
            z = torch.randn(
                design.n, generator=generator,
                device=self._device, dtype=self._dtype,
            )
            x = z * p['sd'] + p['mean']
            hits = ((x >= p['lo']) & (x <= p['hi'])).to(self._dtype)

        with timer.section('summary_statistics'):
            estimate = float(hits.mean().item())
            if design.n > 1:
                sd = float(hits.std().item())
                se = sd / np.sqrt(design.n)
            else:
                sd = se = float('nan')
            outcomes = hits.cpu().numpy().astype(np.float64)

        timer.stop()

        outcomes.flags.writeable = False
        params = MCParams(
            estimate=estimate,
            sd=sd,
            se=float(se),
            n=design.n,
            outcomes=outcomes,
            exact=design.exact,
        )
        warnings_list = []
        if design.n == 1:
            warnings_list.append("n=1: standard error is undefined")
        return Result(
            params=params,
            info={**design.metadata, 'device': self._device, 'dtype': str(self._dtype)},
            timing=timer.result(),
            backend_name=self.name,
            warnings=tuple(warnings_list),
        )
