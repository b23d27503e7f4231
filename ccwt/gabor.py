# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Gabor wavelet queries against a prepared Session.

Each query builds a Gaussian bump directly in the frequency domain, centred on
the requested frequency, multiplies it with the prepared input spectrum and
inverse transforms the product. When the output resolution is lower than the
padded input length, the filtered spectrum is folded (aliased) into the
shorter output spectrum, which is equivalent to lowpass filtering followed by
decimation without ever building the long time-domain signal.

Frequencies are expressed in cycles over the unpadded input length.
"""

import logging
import math

import numpy as np
from typing import Optional, Union

from .errors import InvalidParameter

logger = logging.getLogger("ccwt.gabor")

# Minimum time-bandwidth product of a Gaussian window, sqrt(1 / (4 pi)).
HEISENBERG_GABOR_LIMIT = math.sqrt(1.0 / (4.0 * math.pi))

# The kernel only passes the positive-frequency lobe of a real signal.
ANALYTIC_GAIN = 2.0

_OUTPUT_DTYPES = (np.float32, np.float64)


def _finite(name, value):
    try:
        value = float(value)
    except (TypeError, ValueError):
        raise InvalidParameter(f"{name} must be a real number, got {value!r}")
    if not math.isfinite(value):
        raise InvalidParameter(f"{name} must be finite, got {value}")
    return value


def gabor_deviation(session, derivative: float) -> float:
    """Width coefficient of the Gaussian kernel for a scale ``derivative``

    The coefficient is inversely proportional to ``derivative``: larger
    derivatives give a wider kernel in frequency and a shorter wavelet in time.
    """
    derivative = _finite("derivative", derivative)
    if derivative == 0.0:
        raise InvalidParameter("derivative must be non-zero")
    return 1.0 / (
        derivative
        * session.padding_correction
        * session.padded_output_length
        * HEISENBERG_GABOR_LIMIT
    )


def wrapped_distance(
    index: Union[float, np.ndarray],
    center: float,
    half_width: float
) -> Union[float, np.ndarray]:
    """Distance from ``center`` to ``index`` on a circle of period ``2 * half_width``"""
    return half_width - np.abs(np.abs(index - center) - half_width)


def gabor_kernel(
    index: Union[float, np.ndarray],
    center: float,
    deviation: float,
    half_width: float
) -> Union[float, np.ndarray]:
    """Gaussian bump of peak 1 centred on ``center``, evaluated at spectral ``index``"""
    distance = wrapped_distance(index, center, half_width)
    return np.exp(-distance * distance * deviation)


def kernel_contribution(session, frequency: float, deviation: float, input_index: np.ndarray) -> np.ndarray:
    """Filtered, normalized spectrum values of the input bins ``input_index``

    Parameters
    ----------
    session : Session
        Prepared signal
    frequency : float
        Kernel centre in padded-spectrum bins
    deviation : float
        Kernel width coefficient from :func:`gabor_deviation`
    input_index : np.ndarray
        Integer bins of ``session.input_spectrum``

    Returns
    -------
    np.ndarray
        Complex contributions, one per index
    """
    kernel = gabor_kernel(input_index, frequency, deviation, session.half_width)
    return (ANALYTIC_GAIN * session.scale_normalizer) * kernel * session.input_spectrum[input_index]


def filtered_spectrum(session, frequency: float, derivative: float) -> np.ndarray:
    """Output spectrum of one query, before the inverse transform

    Parameters
    ----------
    session : Session
        Prepared signal
    frequency : float
        Target frequency in cycles over the unpadded input
    derivative : float
        Scale of the wavelet, must be non-zero

    Returns
    -------
    np.ndarray
        Complex spectrum of length ``session.padded_output_length``
    """
    frequency = _finite("frequency", frequency) * session.padding_correction
    deviation = gabor_deviation(session, derivative)

    output_length = session.padded_output_length
    input_length = session.padded_input_length

    output_spectrum = kernel_contribution(session, frequency, deviation, np.arange(output_length))
    if output_length < input_length:
        rest = input_length % output_length
        cut_index = input_length - rest
        for chunk_index in range(output_length, cut_index, output_length):
            output_spectrum += kernel_contribution(
                session, frequency, deviation, np.arange(chunk_index, chunk_index + output_length)
            )
        if rest:
            output_spectrum[:rest] += kernel_contribution(
                session, frequency, deviation, np.arange(cut_index, input_length)
            )

    return output_spectrum


def _check_output_buffer(session, out):
    if not isinstance(out, np.ndarray):
        raise InvalidParameter(f"out must be a numpy array, got {type(out).__name__}")
    if out.dtype.type not in _OUTPUT_DTYPES:
        raise InvalidParameter(f"out must be float32 or float64, got {out.dtype}")
    if out.shape != (2 * session.output_width,):
        raise InvalidParameter(
            f"out must have shape ({2 * session.output_width},), got {out.shape}"
        )
    if not out.flags.writeable:
        raise InvalidParameter("out must be writeable")


def query(session, frequency: float, derivative: float, out: Optional[np.ndarray] = None) -> np.ndarray:
    """Complex wavelet response of the prepared signal at one frequency

    The magnitude of each returned sample is the instantaneous amplitude of
    the signal around ``frequency``, its angle the instantaneous phase.

    Parameters
    ----------
    session : Session
        Prepared signal
    frequency : float
        Target frequency in cycles over the unpadded input
    derivative : float
        Scale of the wavelet, must be non-zero
    out : np.ndarray, optional
        Real float32/float64 buffer of ``2 * output_width`` values to receive
        the interleaved ``[re0, im0, re1, im1, ...]`` result

    Returns
    -------
    np.ndarray
        ``out`` when given, else a complex128 array of ``output_width`` samples

    Raises
    ------
    InvalidParameter
        If ``derivative`` is zero, an argument is not finite, or ``out`` is unusable
    """
    if out is not None:
        _check_output_buffer(session, out)

    output_spectrum = filtered_spectrum(session, frequency, derivative)
    output_time_signal = session.inverse_plan(output_spectrum)

    start = session.output_padding
    result = output_time_signal[start:start + session.output_width]
    logger.debug(f"Queried frequency={frequency} derivative={derivative}")

    if out is None:
        return result.copy()
    out[0::2] = result.real
    out[1::2] = result.imag
    return out


def interleave(values: np.ndarray, dtype=np.float32) -> np.ndarray:
    """Encode a complex series as interleaved ``[re0, im0, re1, im1, ...]`` reals"""
    values = np.asarray(values)
    encoded = np.empty(2 * values.size, dtype=dtype)
    encoded[0::2] = values.real.ravel()
    encoded[1::2] = values.imag.ravel()
    return encoded
