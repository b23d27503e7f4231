# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Frequency bands and scalograms.

A band is a (count, 2) array of ``(frequency, derivative)`` rows. Sweeping a
prepared session over a band gives a complex scalogram with one row per
frequency, highest frequency first.
"""

import logging
import math

import numpy as np
from typing import Optional, Tuple

from .errors import InvalidParameter
from .gabor import query

logger = logging.getLogger("ccwt.band")


def frequency_band(
    count: int,
    frequency_range: float = 0.0,
    frequency_offset: float = 0.0,
    frequency_basis: float = 0.0,
    deviation: float = 1.0
) -> np.ndarray:
    """Build a linear or exponential band of query frequencies

    Parameters
    ----------
    count : int
        Number of rows
    frequency_range : float, optional
        Span of the band, by default 0.0 (meaning ``count / 2``)
    frequency_offset : float, optional
        Lowest frequency (or exponent, for exponential bands), by default 0.0
    frequency_basis : float, optional
        Base of an exponential band, 0.0 for a linear band, by default 0.0
    deviation : float, optional
        Multiplier applied to every derivative, by default 1.0

    Returns
    -------
    np.ndarray
        Array of shape (count, 2) holding ``(frequency, derivative)`` rows
    """
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)) or count < 1:
        raise InvalidParameter(f"count must be a positive integer, got {count!r}")
    if frequency_basis == 1.0:
        raise InvalidParameter("frequency_basis of 1 collapses the band to a single frequency")
    if frequency_range == 0.0:
        frequency_range = count / 2

    rows = np.arange(count, dtype=np.float64)
    frequencies = frequency_range * (1.0 - rows / count) + frequency_offset
    derivatives = np.full(count, frequency_range / count)
    if frequency_basis > 0.0:
        frequencies = np.power(frequency_basis, frequencies)
        derivatives = derivatives * math.log(frequency_basis) * frequencies

    return np.column_stack((frequencies, derivatives * deviation))


def transform_band(session, band) -> np.ndarray:
    """Query a session at every ``(frequency, derivative)`` row of ``band``

    Returns
    -------
    np.ndarray
        Complex scalogram of shape (len(band), output_width)
    """
    band = np.asarray(band, dtype=np.float64)
    if band.ndim != 2 or band.shape[1] != 2:
        raise InvalidParameter(f"band must have shape (count, 2), got {band.shape}")

    scalogram = np.empty((band.shape[0], session.output_width), dtype=np.complex128)
    for row, (frequency, derivative) in enumerate(band):
        scalogram[row] = query(session, frequency, derivative)

    logger.debug(f"Transformed band of {band.shape[0]} frequencies")
    return scalogram


def get_magnitude(scalogram: np.ndarray, log_scale: bool = False) -> np.ndarray:
    """Magnitude of a complex scalogram, in dB when ``log_scale`` is set"""
    magnitude = np.abs(np.asarray(scalogram))
    if log_scale:
        magnitude = 20 * np.log10(np.maximum(magnitude, 1e-10))
    return magnitude


def get_phase(scalogram: np.ndarray) -> np.ndarray:
    """Phase of a complex scalogram in radians"""
    return np.angle(np.asarray(scalogram))


def get_power(scalogram: np.ndarray, log_scale: bool = False) -> np.ndarray:
    """Power of a complex scalogram, in dB when ``log_scale`` is set"""
    power = np.abs(np.asarray(scalogram)) ** 2
    if log_scale:
        power = 10 * np.log10(np.maximum(power, 1e-10))
    return power


def compute_scalogram(
    samples: np.ndarray,
    height: int,
    input_padding: int = 0,
    output_width: Optional[int] = None,
    frequency_range: float = 0.0,
    frequency_offset: float = 0.0,
    frequency_basis: float = 0.0,
    deviation: float = 1.0,
    log_scale: bool = False
) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the magnitude scalogram of a signal in one call

    Parameters
    ----------
    samples : np.ndarray
        Input signal
    height : int
        Number of frequencies in the band
    input_padding : int, optional
        Zero padding on each side of the signal, by default 0
    output_width : int, optional
        Samples per row, by default the signal length
    frequency_range, frequency_offset, frequency_basis, deviation : float, optional
        Band parameters, see :func:`frequency_band`
    log_scale : bool, optional
        Return magnitudes in dB, by default False

    Returns
    -------
    Tuple[np.ndarray, np.ndarray]
        Tuple containing:
        - Magnitude scalogram (shape: height x output_width)
        - The frequency band used (shape: height x 2)
    """
    from .session import prepare

    samples = np.asarray(samples)
    if output_width is None:
        output_width = samples.shape[0] if samples.ndim == 1 else 0

    session = prepare(samples, input_padding, output_width)
    band = frequency_band(height, frequency_range, frequency_offset, frequency_basis, deviation)
    return get_magnitude(transform_band(session, band), log_scale), band
