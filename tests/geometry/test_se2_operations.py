"""Unit tests for diffdrive_mcl.geometry.se2.

Covers the SE(2) primitives the motion model composes particle poses
with: composition, inversion, relative motion, point transformation and
the homogeneous-matrix form used as an independent reference.
"""

import numpy as np
import pytest

from diffdrive_mcl.geometry import (
    Pose2,
    se2_apply,
    se2_compose,
    se2_from_matrix,
    se2_inverse,
    se2_relative,
    se2_to_matrix,
)


class TestSE2Compose:
    """Test suite for se2_compose function."""

    def test_identity_is_neutral(self):
        """Test that identity ⊕ p = p ⊕ identity = p."""
        p = np.array([1.0, -2.0, 0.7])
        p_id = np.zeros(3)

        np.testing.assert_allclose(se2_compose(p_id, p), p, atol=1e-12)
        np.testing.assert_allclose(se2_compose(p, p_id), p, atol=1e-12)

    def test_forward_motion_after_quarter_turn(self):
        """Test that moving forward after a 90° turn moves along +y."""
        heading_north = np.array([0.0, 0.0, np.pi / 2])
        one_meter_forward = np.array([1.0, 0.0, 0.0])

        result = se2_compose(heading_north, one_meter_forward)
        np.testing.assert_allclose(result, [0.0, 1.0, np.pi / 2], atol=1e-12)

    def test_forward_motion_after_half_turn(self):
        """Test that moving forward after a 180° turn moves along -x."""
        result = se2_compose([0.0, 0.0, np.pi], [2.0, 0.0, 0.0])
        np.testing.assert_allclose(result[:2], [-2.0, 0.0], atol=1e-12)

    def test_composed_yaw_is_wrapped(self):
        """Test that 3π/4 + 3π/4 wraps to -π/2."""
        result = se2_compose([0.0, 0.0, 3 * np.pi / 4], [0.0, 0.0, 3 * np.pi / 4])
        assert np.isclose(result[2], -np.pi / 2, atol=1e-12)

    def test_not_commutative(self):
        """Test that p1 ⊕ p2 differs from p2 ⊕ p1 in general."""
        p1 = np.array([1.0, 0.0, np.pi / 2])
        p2 = np.array([2.0, 0.0, 0.0])

        assert not np.allclose(se2_compose(p1, p2), se2_compose(p2, p1))

    def test_associative(self):
        """Test that (p1 ⊕ p2) ⊕ p3 = p1 ⊕ (p2 ⊕ p3)."""
        p1 = np.array([1.0, 2.0, 0.3])
        p2 = np.array([-0.5, 1.5, 2.9])
        p3 = np.array([3.0, -1.0, -2.2])

        left = se2_compose(se2_compose(p1, p2), p3)
        right = se2_compose(p1, se2_compose(p2, p3))
        np.testing.assert_allclose(left, right, atol=1e-12)

    def test_matches_matrix_product(self):
        """Test composition against homogeneous matrix multiplication."""
        p1 = np.array([0.4, -1.2, 1.1])
        p2 = np.array([2.0, 0.5, -2.5])

        T = se2_to_matrix(p1) @ se2_to_matrix(p2)
        np.testing.assert_allclose(se2_compose(p1, p2), se2_from_matrix(T), atol=1e-12)

    def test_accepts_pose2_and_lists(self):
        """Test that Pose2 instances and plain lists are accepted."""
        result = se2_compose(Pose2(x=1.0, y=2.0, yaw=0.0), [3.0, 4.0, 0.0])
        np.testing.assert_allclose(result, [4.0, 6.0, 0.0], atol=1e-12)

    def test_invalid_shape(self):
        """Test that a pose without yaw raises ValueError."""
        with pytest.raises(ValueError, match="must have shape \\(3,\\)"):
            se2_compose(np.array([1.0, 2.0]), np.zeros(3))


class TestSE2Inverse:
    """Test suite for se2_inverse function."""

    def test_inverse_of_translation(self):
        """Test inverse of pure translation."""
        np.testing.assert_allclose(se2_inverse([1.0, 2.0, 0.0]), [-1.0, -2.0, 0.0], atol=1e-12)

    def test_compose_with_inverse_is_identity(self):
        """Test that p ⊕ p⁻¹ = p⁻¹ ⊕ p = identity."""
        p = np.array([1.0, 2.0, -2.4])
        p_inv = se2_inverse(p)

        np.testing.assert_allclose(se2_compose(p, p_inv), np.zeros(3), atol=1e-12)
        np.testing.assert_allclose(se2_compose(p_inv, p), np.zeros(3), atol=1e-12)

    def test_double_inverse(self):
        """Test that (p⁻¹)⁻¹ = p."""
        p = np.array([-3.0, 0.5, 1.2])
        np.testing.assert_allclose(se2_inverse(se2_inverse(p)), p, atol=1e-12)


class TestSE2Relative:
    """Test suite for se2_relative function."""

    def test_same_pose_gives_identity(self):
        """Test that the motion from p to p is identity."""
        p = np.array([1.0, 2.0, np.pi / 4])
        np.testing.assert_allclose(se2_relative(p, p), np.zeros(3), atol=1e-12)

    def test_forward_motion_in_robot_frame(self):
        """Test that driving 1 m north while facing north is 1 m forward."""
        p_from = np.array([5.0, 5.0, np.pi / 2])
        p_to = np.array([5.0, 6.0, np.pi / 2])

        np.testing.assert_allclose(se2_relative(p_from, p_to), [1.0, 0.0, 0.0], atol=1e-12)

    def test_compose_recovers_target(self):
        """Test that p_from ⊕ rel = p_to."""
        p_from = np.array([1.0, 2.0, np.pi / 6])
        p_to = np.array([3.0, 4.0, -3.0])

        recovered = se2_compose(p_from, se2_relative(p_from, p_to))
        np.testing.assert_allclose(recovered, p_to, atol=1e-12)


class TestSE2Apply:
    """Test suite for se2_apply function."""

    def test_rotation_and_translation(self):
        """Test that [1, 0] rotated by 90° and shifted by [1, 2] is [1, 3]."""
        result = se2_apply([1.0, 2.0, np.pi / 2], np.array([[1.0, 0.0]]))
        np.testing.assert_allclose(result, [[1.0, 3.0]], atol=1e-12)

    def test_matches_compose_on_positions(self):
        """Test that transforming a point equals composing a pose at it."""
        p = np.array([0.3, -0.7, 2.0])
        point = np.array([1.5, -0.5])

        via_apply = se2_apply(p, point[np.newaxis, :])[0]
        via_compose = se2_compose(p, [point[0], point[1], 0.0])[:2]
        np.testing.assert_allclose(via_apply, via_compose, atol=1e-12)

    def test_empty_points(self):
        """Test transforming an empty point set."""
        assert se2_apply([1.0, 2.0, 0.5], np.empty((0, 2))).shape == (0, 2)

    def test_invalid_points_shape(self):
        """Test that a 1D point array raises ValueError."""
        with pytest.raises(ValueError, match="must have shape \\(N, 2\\)"):
            se2_apply([0.0, 0.0, 0.0], np.array([1.0, 2.0]))


class TestSE2MatrixConversion:
    """Test suite for se2_to_matrix and se2_from_matrix functions."""

    def test_quarter_turn_matrix(self):
        """Test the matrix of a pure 90° rotation."""
        T = se2_to_matrix([0.0, 0.0, np.pi / 2])
        expected = np.array([[0.0, -1.0, 0.0], [1.0, 0.0, 0.0], [0.0, 0.0, 1.0]])
        np.testing.assert_allclose(T, expected, atol=1e-12)

    def test_roundtrip(self):
        """Test that from_matrix(to_matrix(p)) = p."""
        p = np.array([1.0, 2.0, -1.0])
        np.testing.assert_allclose(se2_from_matrix(se2_to_matrix(p)), p, atol=1e-12)

    def test_invalid_matrix_shape(self):
        """Test that a 2x2 matrix raises ValueError."""
        with pytest.raises(ValueError, match="must have shape \\(3, 3\\)"):
            se2_from_matrix(np.eye(2))
