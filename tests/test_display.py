"""Tests for the linear to sRGB conversion."""

import numpy as np
import pytest


class TestSrgb:
    """Tests for the sRGB transfer function."""

    def test_linear_segment(self):
        from bandtrace.preview.display import linear_value_to_srgb

        assert linear_value_to_srgb(0.0) == 0.0
        assert linear_value_to_srgb(0.002) == pytest.approx(0.002 * 12.92)

    def test_curved_segment(self):
        from bandtrace.preview.display import linear_value_to_srgb

        assert linear_value_to_srgb(1.0) == pytest.approx(1.0)
        assert linear_value_to_srgb(0.5) == pytest.approx(1.055 * 0.5 ** (1 / 2.4) - 0.055)

    def test_continuous_at_threshold(self):
        from bandtrace.preview.display import SRGB_LINEAR_THRESHOLD, linear_value_to_srgb

        below = linear_value_to_srgb(SRGB_LINEAR_THRESHOLD)
        above = linear_value_to_srgb(SRGB_LINEAR_THRESHOLD + 1e-9)
        assert above == pytest.approx(below, abs=1e-5)

    def test_array_matches_scalar(self):
        from bandtrace.preview.display import linear_to_srgb, linear_value_to_srgb

        values = np.array([0.0, 0.001, 0.0031308, 0.01, 0.2, 0.5, 0.9, 1.0], dtype=np.float32)
        expected = [linear_value_to_srgb(float(value)) for value in values]
        assert linear_to_srgb(values) == pytest.approx(expected, abs=1e-6)

    def test_monotonic(self):
        from bandtrace.preview.display import linear_to_srgb

        values = np.linspace(0.0, 1.0, 1001, dtype=np.float32)
        assert (np.diff(linear_to_srgb(values)) >= 0.0).all()

    def test_negative_values_stay_finite(self):
        from bandtrace.preview.display import linear_to_srgb

        assert np.isfinite(linear_to_srgb(np.array([-0.5], dtype=np.float32))).all()


class TestDisplayBytes:
    """Tests for linear_to_display_bytes."""

    def test_reference_values(self):
        from bandtrace.preview.display import linear_to_display_bytes

        image = np.array([[[0.0, 0.5, 1.0]]], dtype=np.float32)
        result = linear_to_display_bytes(image)
        assert result.dtype == np.uint8
        assert result.tolist() == [[[0, 188, 255]]]

    def test_clamps_out_of_range(self):
        from bandtrace.preview.display import linear_to_display_bytes

        image = np.array([[[-1.0, 2.0, 1e9]]], dtype=np.float32)
        assert linear_to_display_bytes(image).tolist() == [[[0, 255, 255]]]

    def test_nan_becomes_zero(self):
        from bandtrace.preview.display import linear_to_display_bytes

        image = np.array([[[np.nan, 1.0, np.inf]]], dtype=np.float32)
        assert linear_to_display_bytes(image).tolist() == [[[0, 255, 255]]]

    def test_shape_preserved(self):
        from bandtrace.preview.display import linear_to_display_bytes

        image = np.zeros((3, 5, 3), dtype=np.float32)
        assert linear_to_display_bytes(image).shape == (3, 5, 3)
