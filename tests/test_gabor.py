# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Scott Friedman and Project Contributors

from concurrent.futures import ThreadPoolExecutor

import numpy as np
import pytest
from ccwt import (
    prepare,
    query,
    interleave,
    filtered_spectrum,
    kernel_contribution,
    gabor_deviation,
    gabor_kernel,
    wrapped_distance,
    HEISENBERG_GABOR_LIMIT,
    InvalidParameter
)
from conftest import generate_test_signal


def unfolded_spectrum(session, frequency, derivative):
    """Filtered spectrum over every input bin, without folding"""
    deviation = gabor_deviation(session, derivative)
    return kernel_contribution(
        session,
        frequency * session.padding_correction,
        deviation,
        np.arange(session.padded_input_length)
    )


class TestKernel:
    def test_heisenberg_gabor_limit(self):
        assert HEISENBERG_GABOR_LIMIT == pytest.approx(0.28209479177)

    def test_wrapped_distance(self):
        assert wrapped_distance(5.0, 5.0, 8.0) == 0.0
        assert wrapped_distance(15, 1.0, 8.0) == 2.0
        assert wrapped_distance(0, 12.0, 8.0) == 4.0
        assert wrapped_distance(9, 1.0, 8.0) == 8.0

    def test_kernel_peak(self):
        assert gabor_kernel(3.5, 3.5, 0.1, 8.0) == 1.0

    @pytest.mark.parametrize("center", [0.0, 8.0])
    def test_kernel_circular_symmetry(self, center):
        n = 16
        index = np.arange(1, n)
        kernel = gabor_kernel(index, center, 0.05, n / 2)
        mirrored = gabor_kernel(n - index, center, 0.05, n / 2)
        np.testing.assert_allclose(kernel, mirrored)

    def test_kernel_near_boundary_reaches_across(self):
        # A bump at bin 0.5 covers the top bins of the spectrum too
        kernel = gabor_kernel(np.arange(16), 0.5, 0.2, 8.0)
        assert kernel[15] == pytest.approx(kernel[2])
        assert kernel[15] > kernel[8]

    def test_deviation_follows_derivative(self, noise_signal):
        session = prepare(noise_signal, 10, 30)
        derivatives = [0.25, 0.5, 1.0, 2.0, 4.0]
        deviations = [gabor_deviation(session, d) for d in derivatives]
        half_maximum_widths = [2 * np.sqrt(np.log(2) / d) for d in deviations]

        assert all(a > b for a, b in zip(deviations, deviations[1:]))
        assert all(a < b for a, b in zip(half_maximum_widths, half_maximum_widths[1:]))

    def test_deviation_formula(self, quarter_sine):
        session = prepare(quarter_sine, 4, 8)
        expected = 1.0 / (1.0 * 2.0 * 16 * HEISENBERG_GABOR_LIMIT)
        assert gabor_deviation(session, 1.0) == pytest.approx(expected)


class TestQuery:
    def test_quarter_sine_scenario(self, quarter_sine):
        session = prepare(quarter_sine, input_padding=4, output_width=8)

        # Two cycles over the eight unpadded samples
        result = query(session, frequency=2.0, derivative=1.0)

        assert result.shape == (8,)
        assert result.dtype == np.complex128
        # Away from the edges the amplitude of the sine is recovered
        np.testing.assert_allclose(np.abs(result[2:6]), 1.0, atol=0.1)
        # Phase advances a quarter turn per sample
        steps = np.angle(result[1:] / result[:-1])
        np.testing.assert_allclose(steps, np.pi / 2, atol=1e-9)

    def test_flat_amplitude(self, sine_signal):
        session = prepare(sine_signal, input_padding=64, output_width=256)
        magnitude = np.abs(query(session, 32.0, 1.0))

        np.testing.assert_allclose(magnitude[64:192], 1.0, atol=0.01)

    def test_flat_amplitude_downsampled(self, sine_signal):
        session = prepare(sine_signal, input_padding=64, output_width=128)
        assert session.downsampled
        magnitude = np.abs(query(session, 32.0, 1.0))

        np.testing.assert_allclose(magnitude[32:96], 1.0, atol=0.01)

    def test_amplitude_scales_with_signal(self):
        weak = prepare(generate_test_signal(amplitude=0.5), 64, 256)
        strong = prepare(generate_test_signal(amplitude=3.0), 64, 256)

        ratio = np.abs(query(strong, 32.0, 1.0)) / np.abs(query(weak, 32.0, 1.0))
        np.testing.assert_allclose(ratio[64:192], 6.0, rtol=1e-9)

    def test_deterministic(self, noise_signal):
        session = prepare(noise_signal, 10, 30)
        first = query(session, 7.5, 0.8)
        second = query(session, 7.5, 0.8)
        assert np.array_equal(first, second)

    @pytest.mark.parametrize("frequency, derivative", [
        (0.0, 1.0),
        (3.0, 0.01),
        (49.0, 20.0),
        (500.0, 1.0),
        (-12.0, 2.0),
    ])
    def test_length_invariant(self, noise_signal, frequency, derivative):
        session = prepare(noise_signal, 10, 30)
        result = query(session, frequency, derivative)
        assert result.shape == (30,)
        assert np.all(np.isfinite(result))

    def test_session_method(self, noise_signal):
        session = prepare(noise_signal, 10, 30)
        assert np.array_equal(session.query(4.0, 1.0), query(session, 4.0, 1.0))

    def test_nan_samples_propagate(self, quarter_sine):
        samples = quarter_sine.copy()
        samples[3] = np.nan
        session = prepare(samples, 4, 8)
        assert np.all(np.isnan(query(session, 2.0, 1.0)))


class TestSpectralFold:
    def test_direct_branch(self, noise_signal):
        session = prepare(noise_signal, input_padding=0, output_width=100)
        assert session.padded_output_length == session.padded_input_length

        np.testing.assert_allclose(
            filtered_spectrum(session, 9.0, 1.5),
            unfolded_spectrum(session, 9.0, 1.5)
        )

    def test_fold_sums_strides(self, noise_signal):
        session = prepare(noise_signal, input_padding=10, output_width=30)
        n_out = session.padded_output_length
        n_in = session.padded_input_length
        # 120 bins fold into 36: three full blocks and a 12 bin tail
        assert n_in % n_out == 12

        unfolded = unfolded_spectrum(session, 9.0, 1.5)
        blocks = np.zeros(-(-n_in // n_out) * n_out, dtype=np.complex128)
        blocks[:n_in] = unfolded
        expected = blocks.reshape(-1, n_out).sum(axis=0)

        np.testing.assert_allclose(filtered_spectrum(session, 9.0, 1.5), expected, atol=1e-12)

    def test_fold_equals_decimation(self):
        rng = np.random.RandomState(7)
        samples = rng.randn(64)
        session = prepare(samples, input_padding=16, output_width=32)
        assert session.padded_input_length == 2 * session.padded_output_length

        # Full-length inverse transform of the unfolded spectrum, unnormalized
        full = np.fft.ifft(unfolded_spectrum(session, 11.0, 0.7)) * session.padded_input_length
        decimated = full[::2][session.output_padding:session.output_padding + session.output_width]

        np.testing.assert_allclose(query(session, 11.0, 0.7), decimated, atol=1e-10)

    def test_fold_leaves_input_spectrum_untouched(self, noise_signal):
        session = prepare(noise_signal, 10, 30)
        before = session.input_spectrum.copy()
        filtered_spectrum(session, 9.0, 1.5)
        assert np.array_equal(session.input_spectrum, before)


class TestQueryValidation:
    @pytest.mark.parametrize("derivative", [0.0, -0.0, np.nan, np.inf])
    def test_bad_derivative(self, quarter_sine, derivative):
        session = prepare(quarter_sine, 4, 8)
        with pytest.raises(InvalidParameter):
            query(session, 2.0, derivative)

    @pytest.mark.parametrize("frequency", [np.nan, np.inf, -np.inf, "high"])
    def test_bad_frequency(self, quarter_sine, frequency):
        session = prepare(quarter_sine, 4, 8)
        with pytest.raises(InvalidParameter):
            query(session, frequency, 1.0)


class TestOutputBuffer:
    @pytest.mark.parametrize("dtype", [np.float32, np.float64])
    def test_interleaved_output(self, noise_signal, dtype):
        session = prepare(noise_signal, 10, 30)
        out = np.zeros(60, dtype=dtype)

        returned = query(session, 5.0, 1.0, out=out)
        expected = query(session, 5.0, 1.0)

        assert returned is out
        tolerance = 1e-5 if dtype == np.float32 else 1e-12
        np.testing.assert_allclose(out[0::2], expected.real, atol=tolerance)
        np.testing.assert_allclose(out[1::2], expected.imag, atol=tolerance)

    @pytest.mark.parametrize("out", [
        np.zeros(59),
        np.zeros((30, 2)),
        np.zeros(60, dtype=np.int32),
        np.zeros(30, dtype=np.complex128),
        [0.0] * 60,
    ])
    def test_unusable_output(self, noise_signal, out):
        session = prepare(noise_signal, 10, 30)
        with pytest.raises(InvalidParameter):
            query(session, 5.0, 1.0, out=out)

    def test_read_only_output(self, noise_signal):
        session = prepare(noise_signal, 10, 30)
        out = np.zeros(60)
        out.setflags(write=False)
        with pytest.raises(InvalidParameter):
            query(session, 5.0, 1.0, out=out)

    def test_interleave(self):
        encoded = interleave(np.array([1 + 2j, 3 - 4j]))
        assert encoded.dtype == np.float32
        np.testing.assert_array_equal(encoded, [1.0, 2.0, 3.0, -4.0])

    def test_interleave_float64(self):
        encoded = interleave(np.array([0.5j]), dtype=np.float64)
        assert encoded.dtype == np.float64
        np.testing.assert_array_equal(encoded, [0.0, 0.5])


class TestConcurrentQueries:
    def test_shared_session(self, sine_signal):
        session = prepare(sine_signal, 64, 128)
        frequencies = np.linspace(1.0, 60.0, 24)
        serial = [query(session, f, 1.0) for f in frequencies]

        with ThreadPoolExecutor(max_workers=4) as executor:
            parallel = list(executor.map(lambda f: query(session, f, 1.0), frequencies))

        for a, b in zip(serial, parallel):
            assert np.array_equal(a, b)
