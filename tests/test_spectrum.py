"""
Unit Tests for Spectral Envelope Reconstruction

The reference spectra are computed independently of the recurrences: the
(mel-)generalized cepstrum is evaluated on the warped frequency axis and
the resulting log spectrum is re-sampled through a dense inverse DFT.

Test Coverage:
    - power_spectrum: flat spectra, output length, golden frame, gamma != 0
    - cepstrum_to_spectrum / mgc_to_spectrum: log spectrum layout
    - mcep_to_spectrum / power_spectrogram: convenience wrappers

Run:
    pytest tests/test_spectrum.py -v
"""

import sys
import os

# Add project root to path
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

import numpy as np
import pytest
from scipy.fft import ifft as scipy_ifft

from mgcspec.dsp_core import (
    power_spectrum,
    cepstrum_to_spectrum,
    mgc_to_spectrum,
    mcep_to_spectrum,
    power_spectrogram,
    Workspace,
    InvalidFFTLengthError,
    ContractViolationError,
)

GOLDEN_MCEP = np.array([0.1, -0.05, 0.02, -0.01, 0.005])
GOLDEN_ALPHA = 0.42
GOLDEN_FFT_LENGTH = 16
GOLDEN_SPECTRUM = np.array([
    1.1350927214279047, 1.149799153086511, 1.186072176887458,
    1.2199483032985117, 1.2827820100340062, 1.3485825779413261,
    1.4040140486799892, 1.4357509255761352, 1.4485535944799484,
])


def warped_axis(alpha: float, n: int) -> np.ndarray:
    """z~^-1 = (z^-1 - alpha) / (1 - alpha z^-1) on n points of the unit circle."""
    z1 = np.exp(-2j * np.pi * np.arange(n) / n)
    return (z1 - alpha) / (1 - alpha * z1)


def reference_power_spectrum(mcep, alpha, fft_length, n_dense=4096):
    """
    exp(2 * Re log H) for a mel-cepstrum, with the linear cepstrum truncated
    at order fft_length / 2 exactly like the FFT-based reconstruction.
    """
    log_h = np.polyval(np.asarray(mcep)[::-1], warped_axis(alpha, n_dense))
    ceps = scipy_ifft(log_h).real

    half = fft_length // 2
    k = np.arange(half + 1)
    basis = np.cos(2 * np.pi * np.outer(k, k) / fft_length)
    return np.exp(2 * basis @ ceps[:half + 1])


class TestPowerSpectrum:
    """Test suite for the top-level power spectrum."""

    @pytest.mark.parametrize("alpha", [0.0, 0.42, -0.3, 0.77])
    @pytest.mark.parametrize("fft_length", [4, 16, 256])
    def test_zero_cepstrum_is_flat(self, alpha, fft_length):
        sp = power_spectrum(np.zeros(13), alpha, 0.0, fft_length)
        np.testing.assert_array_equal(sp, np.ones(fft_length // 2 + 1))

    def test_zero_generalized_cepstrum_is_flat(self):
        sp = power_spectrum(np.zeros(8), 0.42, -0.5, 64)
        np.testing.assert_allclose(sp, np.ones(33), atol=1e-15)

    @pytest.mark.parametrize("fft_length", [4, 8, 16, 32, 64, 128, 256, 512, 1024, 2048])
    def test_output_length(self, fft_length):
        sp = power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, fft_length)
        assert sp.shape == (fft_length // 2 + 1,)
        assert np.all(sp > 0)

    def test_gain_only(self):
        """A pure gain term gives a flat spectrum of exp(2 c0)."""
        sp = power_spectrum([0.7, 0.0, 0.0], 0.42, 0.0, 32)
        np.testing.assert_allclose(sp, np.full(17, np.exp(1.4)), rtol=1e-14)

    def test_golden_frame(self):
        """m=4 mel-cepstrum, alpha=0.42, gamma=0, fft_length=16."""
        sp = power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, GOLDEN_FFT_LENGTH)
        expected = reference_power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, GOLDEN_FFT_LENGTH)

        print(f"\n[Golden Frame]")
        print(f"  Spectrum: {np.array2string(sp, precision=12)}")
        print(f"  Max rel error: {np.max(np.abs(sp / expected - 1)):.2e}")

        assert sp.shape == (9,)
        np.testing.assert_allclose(sp, expected, rtol=1e-12)
        np.testing.assert_allclose(sp, GOLDEN_SPECTRUM, rtol=1e-14, atol=0)

    def test_golden_frame_is_deterministic(self):
        ws = Workspace()
        first = power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, GOLDEN_FFT_LENGTH)
        for _ in range(3):
            again = power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, GOLDEN_FFT_LENGTH, workspace=ws)
            np.testing.assert_array_equal(again, first)

    def test_matches_warped_log_spectrum(self):
        """With a long FFT the truncation vanishes and exp(2 Re C(z~)) is reproduced."""
        mcep = np.array([0.5, 0.4, -0.2, 0.1, 0.05, -0.03, 0.01])
        fft_length = 512
        sp = power_spectrum(mcep, 0.55, 0.0, fft_length)

        w = warped_axis(0.55, fft_length)[:fft_length // 2 + 1]
        expected = np.exp(2 * np.polyval(mcep[::-1], w).real)
        np.testing.assert_allclose(sp, expected, rtol=1e-10)

    @pytest.mark.parametrize("alpha", [0.0, 0.35])
    def test_generalized_cepstrum(self, alpha):
        """For gamma != 0, |H|^2 = |1 + gamma C(z~)|^(2 / gamma)."""
        mgc = np.array([0.3, 0.2, -0.1, 0.05, 0.02])
        gamma = -0.5
        fft_length = 512
        sp = power_spectrum(mgc, alpha, gamma, fft_length)

        w = warped_axis(alpha, fft_length)[:fft_length // 2 + 1]
        expected = np.abs(1 + gamma * np.polyval(mgc[::-1], w)) ** (2 / gamma)
        np.testing.assert_allclose(sp, expected, rtol=1e-9)

    def test_all_pole_model(self):
        """gamma = -1 with alpha = 0 is an all-pole model K^2 / |A(e^jw)|^2."""
        # normalized form: K = 1/(1 - c0), a_m = -c_m / (1 - c0)
        mgc = np.array([0.2, 0.3, -0.1])
        fft_length = 256
        sp = power_spectrum(mgc, 0.0, -1.0, fft_length)

        k = 1 - mgc[0]
        a = np.concatenate([[1.0], -mgc[1:] / k])
        A = np.fft.rfft(a, fft_length)
        expected = (1 / k) ** 2 / np.abs(A) ** 2
        np.testing.assert_allclose(sp, expected, rtol=1e-9)

    @pytest.mark.parametrize("fft_length", [0, 2, 3, 6, 100, 1000])
    def test_invalid_fft_length(self, fft_length):
        with pytest.raises(InvalidFFTLengthError):
            power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, fft_length)

    def test_invalid_parameters(self):
        with pytest.raises(ContractViolationError):
            power_spectrum(GOLDEN_MCEP, 1.2, 0.0, 16)
        with pytest.raises(ContractViolationError):
            power_spectrum(GOLDEN_MCEP, 0.42, 0.3, 16)
        with pytest.raises(ContractViolationError):
            power_spectrum(np.zeros((3, 3)), 0.42, 0.0, 16)


class TestLogSpectrum:
    """Test suite for the complex log spectrum routines."""

    def test_cepstrum_to_spectrum_layout(self):
        c = np.array([0.5, 0.25, -0.125])
        x, y = cepstrum_to_spectrum(c, 8)

        padded = np.concatenate([c, np.zeros(5)])
        X = np.fft.fft(padded)
        np.testing.assert_allclose(x, X.real, atol=1e-14)
        np.testing.assert_allclose(y, X.imag, atol=1e-14)

    def test_cepstrum_does_not_fit(self):
        with pytest.raises(ContractViolationError):
            cepstrum_to_spectrum(np.zeros(9), 8)

    def test_mgc_to_spectrum_real_part_is_log_amplitude(self):
        x, y = mgc_to_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, 64)
        sp = power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, 64)

        assert x.shape == (64,) and y.shape == (64,)
        np.testing.assert_array_equal(np.exp(2 * x[:33]), sp)

    def test_input_not_modified(self):
        mgc = GOLDEN_MCEP.copy()
        mgc_to_spectrum(mgc, GOLDEN_ALPHA, -0.5, 32)
        np.testing.assert_array_equal(mgc, GOLDEN_MCEP)


class TestWrappers:
    """Test suite for mcep_to_spectrum and power_spectrogram."""

    @pytest.mark.parametrize("n_freq", [3, 9, 257, 513])
    def test_mcep_to_spectrum(self, n_freq):
        sp = mcep_to_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, n_freq)
        expected = power_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, 0.0, 2 * (n_freq - 1))

        assert sp.shape == (n_freq,)
        np.testing.assert_array_equal(sp, expected)

    @pytest.mark.parametrize("n_freq", [1, 2, 10, 100])
    def test_mcep_to_spectrum_invalid(self, n_freq):
        with pytest.raises(InvalidFFTLengthError):
            mcep_to_spectrum(GOLDEN_MCEP, GOLDEN_ALPHA, n_freq)

    def test_power_spectrogram(self):
        rng = np.random.default_rng(0)
        frames = rng.standard_normal((6, 10)) * 0.1
        ws = Workspace()
        spectra = power_spectrogram(frames, 0.42, 0.0, 128, workspace=ws)

        assert spectra.shape == (6, 65)
        for i, frame in enumerate(frames):
            np.testing.assert_array_equal(spectra[i], power_spectrum(frame, 0.42, 0.0, 128))
        assert ws.max_fft_size == 128

    def test_power_spectrogram_callback(self):
        done = []
        power_spectrogram(np.zeros((4, 3)), 0.42, 0.0, 16, callback=done.append)
        assert done == [0, 1, 2, 3]

    def test_power_spectrogram_requires_matrix(self):
        with pytest.raises(ContractViolationError):
            power_spectrogram(GOLDEN_MCEP, 0.42, 0.0, 16)
