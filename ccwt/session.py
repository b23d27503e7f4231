# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Signal preparation for the Continuous Complex Wavelet Transform.

A Session holds everything that depends only on the input signal and the
requested output resolution: the zero-padded spectrum of the signal and the
inverse FFT plan used by every frequency query. It is built once by prepare()
and is read-only afterwards, so any number of queries may share it.
"""

import logging
import numbers

import numpy as np
from typing import Optional

from .band import transform_band
from .errors import InvalidConfiguration
from .fft import FFTPlan
from .gabor import query

logger = logging.getLogger("ccwt.session")


class Session:
    """Prepared signal state shared by all frequency queries

    Use :func:`prepare` rather than constructing this directly.

    Attributes
    ----------
    input_length : int
        Number of unpadded input samples
    input_padding : int
        Zero samples added on each side of the input
    padded_input_length : int
        ``input_length + 2 * input_padding``
    output_width : int
        Number of complex samples returned per query
    output_padding : int
        Padding trimmed from each side of a query result
    padded_output_length : int
        ``output_width + 2 * output_padding``
    half_width : float
        Circular midpoint of the padded spectrum
    scale_normalizer : float
        ``1 / padded_input_length``
    padding_correction : float
        ``padded_input_length / input_length``
    input_spectrum : np.ndarray
        Read-only complex spectrum of the padded input
    inverse_plan : FFTPlan
        Inverse transform of length ``padded_output_length``
    """

    def __init__(self, input_length, input_padding, output_width, input_spectrum, inverse_plan):
        self.input_length = input_length
        self.input_padding = input_padding
        self.padded_input_length = input_length + 2 * input_padding
        self.output_width = output_width
        self.output_padding = input_padding * output_width // input_length
        self.padded_output_length = output_width + 2 * self.output_padding
        self.half_width = self.padded_input_length * 0.5
        self.scale_normalizer = 1.0 / self.padded_input_length
        self.padding_correction = self.padded_input_length / input_length

        input_spectrum.setflags(write=False)
        self.input_spectrum = input_spectrum
        self.inverse_plan = inverse_plan

    @property
    def downsampled(self) -> bool:
        """True when queries fold the spectrum into a shorter output"""
        return self.padded_output_length < self.padded_input_length

    def query(self, frequency: float, derivative: float, out: Optional[np.ndarray] = None) -> np.ndarray:
        """Transform the prepared signal at one frequency, see :func:`ccwt.gabor.query`"""
        return query(self, frequency, derivative, out)

    def transform_band(self, band) -> np.ndarray:
        """Transform the prepared signal at every row of a frequency band"""
        return transform_band(self, band)

    def __repr__(self):
        return (
            f"Session(input_length={self.input_length}, input_padding={self.input_padding}, "
            f"output_width={self.output_width}, output_padding={self.output_padding}, "
            f"padded_input_length={self.padded_input_length}, "
            f"padded_output_length={self.padded_output_length})"
        )


def _check_count(name, value, minimum):
    if isinstance(value, bool) or not isinstance(value, numbers.Integral):
        raise InvalidConfiguration(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfiguration(f"{name} must be at least {minimum}, got {value}")
    return int(value)


def prepare(
    samples,
    input_padding: int,
    output_width: int,
    workers: Optional[int] = None
) -> Session:
    """Prepare a real signal for repeated frequency queries

    The samples are placed in the middle of a zero buffer of
    ``len(samples) + 2 * input_padding`` complex values and transformed once.
    The padding suppresses circular wraparound between the start and end of
    the signal during the frequency-domain convolution of each query.

    Parameters
    ----------
    samples : array_like
        One-dimensional real signal
    input_padding : int
        Zero samples to add before and after the signal
    output_width : int
        Number of samples per query result, at most ``len(samples)``
    workers : int, optional
        Parallel workers for scipy.fft, by default None

    Returns
    -------
    Session
        Immutable prepared state

    Raises
    ------
    InvalidConfiguration
        If the signal is empty or not 1-D, or the padding or width are out of range
    """
    samples = np.asarray(samples)
    if samples.ndim != 1:
        raise InvalidConfiguration(f"samples must be one-dimensional, got shape {samples.shape}")
    if samples.size == 0:
        raise InvalidConfiguration("samples must not be empty")
    if np.iscomplexobj(samples):
        raise InvalidConfiguration("samples must be real-valued")

    input_length = samples.size
    input_padding = _check_count("input_padding", input_padding, 0)
    output_width = _check_count("output_width", output_width, 1)
    if output_width > input_length:
        raise InvalidConfiguration(
            f"output_width ({output_width}) must not exceed the number of samples ({input_length})"
        )

    if input_padding == 0:
        logger.warning("No input padding: the transform wraps around the signal edges")

    padded_input_length = input_length + 2 * input_padding
    time_domain = np.zeros(padded_input_length, dtype=np.complex128)
    time_domain.real[input_padding:input_padding + input_length] = samples

    input_spectrum = FFTPlan(padded_input_length, workers=workers)(time_domain)

    output_padding = input_padding * output_width // input_length
    inverse_plan = FFTPlan(output_width + 2 * output_padding, inverse=True, workers=workers)

    session = Session(input_length, input_padding, output_width, input_spectrum, inverse_plan)
    logger.debug(f"Prepared {session!r}")
    return session
