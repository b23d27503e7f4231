# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

"""
Exceptions raised by the CCWT package.
"""


class InvalidConfiguration(ValueError):
    """Raised by prepare() when the signal/resolution pair cannot form a session."""


class InvalidParameter(ValueError):
    """Raised by a query when the frequency, derivative or output buffer is unusable."""
