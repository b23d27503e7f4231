#!/usr/bin/env python3
# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
CCWT Example Script

Prepares a test signal once and sweeps it over a band of frequencies,
then reports where in the band and in time the strongest response sits.

Signals:
1. sine  - constant frequency, the band peak stays on one row
2. chirp - linearly rising frequency, the peak row climbs over time
"""

import argparse
import logging
import os
import sys
import time

import numpy as np

# Add parent directory to path to import the ccwt package
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))
from ccwt import prepare, frequency_band, get_magnitude

logger = logging.getLogger("ccwt.example")


def generate_signal(kind: str, length: int, f0: float, f1: float) -> np.ndarray:
    """Sine at ``f0`` or chirp from ``f0`` to ``f1``, in cycles over ``length``"""
    t = np.arange(length) / length
    if kind == "sine":
        return np.sin(2 * np.pi * f0 * t)
    return np.sin(2 * np.pi * (f0 * t + 0.5 * (f1 - f0) * t ** 2))


def main() -> None:
    parser = argparse.ArgumentParser(description="Continuous complex wavelet transform demo")

    parser.add_argument("--signal", choices=["sine", "chirp"], default="chirp",
                        help="Test signal to analyze")
    parser.add_argument("--length", type=int, default=4096,
                        help="Number of input samples")
    parser.add_argument("--f0", type=float, default=64.0,
                        help="Sine frequency, or chirp start frequency (cycles over the signal)")
    parser.add_argument("--f1", type=float, default=512.0,
                        help="Chirp end frequency (cycles over the signal)")
    parser.add_argument("--padding", type=int, default=512,
                        help="Zero padding on each side of the signal")
    parser.add_argument("--width", type=int, default=1024,
                        help="Output samples per frequency")
    parser.add_argument("--height", type=int, default=128,
                        help="Number of frequencies in the band")
    parser.add_argument("--range", dest="frequency_range", type=float, default=640.0,
                        help="Span of the frequency band")
    parser.add_argument("--offset", dest="frequency_offset", type=float, default=0.0,
                        help="Lowest frequency of the band")
    parser.add_argument("--deviation", type=float, default=1.0,
                        help="Multiplier on every wavelet derivative")
    parser.add_argument("--workers", type=int, default=None,
                        help="Parallel FFT workers")
    parser.add_argument("--verbose", action="store_true",
                        help="Log every query")

    args = parser.parse_args()

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s %(name)s %(levelname)s %(message)s"
    )

    signal = generate_signal(args.signal, args.length, args.f0, args.f1)

    start_time = time.time()
    session = prepare(signal, args.padding, args.width, workers=args.workers)
    logger.info(f"Prepared in {time.time() - start_time:.4f} s: {session!r}")

    band = frequency_band(args.height, args.frequency_range, args.frequency_offset,
                          deviation=args.deviation)

    start_time = time.time()
    magnitude = get_magnitude(session.transform_band(band))
    elapsed = time.time() - start_time
    logger.info(f"Transformed {args.height} frequencies in {elapsed:.4f} s "
                f"({1000 * elapsed / args.height:.3f} ms per frequency)")

    for column in np.linspace(0, args.width - 1, 5).astype(int):
        row = int(np.argmax(magnitude[:, column]))
        logger.info(f"Sample {column:5d}: peak at {band[row, 0]:8.2f} cycles, "
                    f"magnitude {magnitude[row, column]:.3f}")


if __name__ == "__main__":
    main()
