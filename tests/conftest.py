# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Global pytest configuration.
"""

import os
import sys
import pytest
import numpy as np

# Add the project root to the Python path so tests can import modules properly
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


def generate_test_signal(length=256, cycles=32.0, amplitude=1.0):
    """Sine with ``cycles`` full periods over ``length`` samples"""
    n = np.arange(length)
    return amplitude * np.sin(2 * np.pi * cycles * n / length)


@pytest.fixture
def quarter_sine():
    """Period-4 discrete sine of length 8"""
    return np.array([0.0, 1.0, 0.0, -1.0, 0.0, 1.0, 0.0, -1.0])


@pytest.fixture
def sine_signal():
    """256 samples, 32 cycles, unit amplitude"""
    return generate_test_signal()


@pytest.fixture
def noise_signal():
    """Reproducible white noise"""
    rng = np.random.RandomState(42)  # Fixed seed for reproducibility
    return rng.randn(100)
