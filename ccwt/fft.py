# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
FFT Plan Module

Thin wrapper around scipy.fft giving the rest of the package a fixed-length,
reusable transform handle. Plans are planned once per session and then applied
to any number of same-length complex buffers.

Both directions are unnormalized: the forward transform uses
``norm="backward"`` and the inverse uses ``norm="forward"``, so no 1/N factor
is applied by either side. Callers own the normalization.
"""

import numpy as np
import scipy.fft
from typing import Optional


class FFTPlan:
    """Fixed-length complex FFT

    Parameters
    ----------
    length : int
        Number of complex samples the plan accepts
    inverse : bool, optional
        Compute the inverse transform instead of the forward one, by default False
    workers : int, optional
        Maximum number of parallel workers handed to scipy.fft, by default None
    """

    def __init__(self, length: int, inverse: bool = False, workers: Optional[int] = None):
        if length < 1:
            raise ValueError(f"FFT length must be positive, got {length}")
        self.length = int(length)
        self.inverse = inverse
        self.workers = workers

    def __call__(self, buffer: np.ndarray) -> np.ndarray:
        """Apply the transform to ``buffer``

        Parameters
        ----------
        buffer : np.ndarray
            Complex (or real) input of exactly ``length`` samples

        Returns
        -------
        np.ndarray
            Complex128 transform result of the same length
        """
        buffer = np.asarray(buffer, dtype=np.complex128)
        if buffer.shape != (self.length,):
            raise ValueError(
                f"FFT plan of length {self.length} cannot process buffer of shape {buffer.shape}"
            )

        if self.inverse:
            return scipy.fft.ifft(buffer, norm="forward", workers=self.workers)
        return scipy.fft.fft(buffer, norm="backward", workers=self.workers)

    def __repr__(self):
        direction = "inverse" if self.inverse else "forward"
        return f"FFTPlan(length={self.length}, {direction})"
