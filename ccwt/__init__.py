# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Continuous Complex Wavelet Transform

This package computes the complex, time-varying response of a real signal to
Gabor wavelets at arbitrary frequencies. A signal is prepared once and can
then be queried at any number of frequencies and scales.

Key components:
- prepare / Session: zero padding and forward FFT of the signal
- query: Gabor filtering, spectral folding and inverse FFT per frequency
- frequency_band / transform_band: sweeps over many frequencies
"""

from .errors import (
    InvalidConfiguration,
    InvalidParameter
)

from .fft import FFTPlan

from .session import (
    Session,
    prepare
)

from .gabor import (
    HEISENBERG_GABOR_LIMIT,
    ANALYTIC_GAIN,
    gabor_deviation,
    gabor_kernel,
    wrapped_distance,
    kernel_contribution,
    filtered_spectrum,
    query,
    interleave
)

from .band import (
    frequency_band,
    transform_band,
    get_magnitude,
    get_phase,
    get_power,
    compute_scalogram
)

# Version information
__version__ = '0.1.0'
