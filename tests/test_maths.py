import math

import pytest

from lostsignal.maths import (
    Float2,
    Float2x2,
    Float3,
    Float4,
    apply_rotation,
    calculate_quaternion,
    cross_product,
    dot,
    dot3,
    matrix_mul,
    quat_mult,
    rotation_matrix,
    update_quat_angle,
)


def test_float2_magnitude_pythagorean():
    assert Float2(3.0, 4.0).magnitude() == pytest.approx(5.0)


def test_float2_normalized_has_unit_length():
    v = Float2(-7.5, 2.25).normalized()
    assert v.magnitude() == pytest.approx(1.0)


def test_float2_normalized_zero_raises():
    with pytest.raises(ValueError):
        Float2().normalized()


def test_float2_scale_matches_addition():
    v = Float2(1.5, -2.0)
    assert v.scale(2.0) == v + v


def test_float2_subtraction_inverts_addition():
    a = Float2(1.25, 3.5)
    b = Float2(-4.0, 0.5)
    assert (a + b) - b == a


def test_float3_normalized_has_unit_length():
    assert Float3(1.0, 2.0, 2.0).normalized().magnitude() == pytest.approx(1.0)


def test_float3_normalized_zero_raises():
    with pytest.raises(ValueError):
        Float3().normalized()


def test_float3_scale_matches_addition():
    v = Float3(1.0, -2.5, 4.0)
    assert v.scale(2.0) == v + v


def test_float3_fmin_fmax_elementwise():
    a = Float3(1.0, 5.0, -3.0)
    b = Float3(2.0, -1.0, -4.0)
    low = a.fmin(b)
    high = a.fmax(b)
    assert low == b.fmin(a)
    assert high == b.fmax(a)
    for i in range(3):
        assert low[i] == min(a[i], b[i])
        assert high[i] == max(a[i], b[i])


def test_float3_indexing_falls_back_to_first():
    v = Float3(1.0, 2.0, 3.0)
    assert (v[0], v[1], v[2]) == (v.x, v.y, v.z)
    assert v[7] == v.x


def test_float4_constructors():
    assert Float4.from_float2s(Float2(1.0, 2.0), Float2(3.0, 4.0)) == Float4(1.0, 2.0, 3.0, 4.0)
    assert Float4.from_float3(Float3(1.0, 2.0, 3.0), 4.0) == Float4(1.0, 2.0, 3.0, 4.0)


def test_dot_of_self_is_squared_magnitude():
    v = Float2(2.5, -1.5)
    assert dot(v, v) == pytest.approx(v.magnitude() ** 2)
    w = Float3(1.0, -2.0, 3.0)
    assert dot3(w, w) == pytest.approx(w.magnitude() ** 2)


def test_matrix_mul_identity():
    identity = Float2x2(Float2(1.0, 0.0), Float2(0.0, 1.0))
    v = Float2(3.25, -8.0)
    assert matrix_mul(v, identity) == v


def test_rotation_matrix_is_orthonormal():
    m = rotation_matrix(0.7)
    assert m.row1.magnitude() == pytest.approx(1.0)
    assert m.row2.magnitude() == pytest.approx(1.0)
    assert dot(m.row1, m.row2) == pytest.approx(0.0)


def test_rotation_quarter_turn():
    r = apply_rotation(Float2(1.0, 0.0), math.pi / 2)
    assert r.x == pytest.approx(0.0, abs=1e-12)
    assert r.y == pytest.approx(1.0)


@pytest.mark.parametrize("theta", [0.3, 1.0, -2.2, math.pi])
def test_rotation_round_trip_and_length(theta):
    v = Float2(4.0, -1.5)
    r = apply_rotation(v, theta)
    assert r.magnitude() == pytest.approx(v.magnitude())
    back = apply_rotation(r, -theta)
    assert back.x == pytest.approx(v.x)
    assert back.y == pytest.approx(v.y)


def test_cross_product_is_orthogonal_and_antisymmetric():
    a = Float3(1.0, 2.0, 3.0)
    b = Float3(-2.0, 0.5, 4.0)
    c = cross_product(a, b)
    assert dot3(c, a) == pytest.approx(0.0)
    assert dot3(c, b) == pytest.approx(0.0)
    assert cross_product(b, a) == c.scale(-1.0)


def test_calculate_quaternion_is_unit():
    q = calculate_quaternion(Float3(1.0, 0.5, 2.0))
    norm = math.sqrt(q.x**2 + q.y**2 + q.z**2 + q.w**2)
    assert norm == pytest.approx(1.0)


def test_calculate_quaternion_along_z_raises():
    with pytest.raises(ValueError):
        calculate_quaternion(Float3(0.0, 0.0, 5.0))


def test_update_quat_angle_keeps_unit_norm_and_axis():
    q = calculate_quaternion(Float3(1.0, 1.0, 1.0))
    updated = update_quat_angle(q, 0.4)
    norm = math.sqrt(updated.x**2 + updated.y**2 + updated.z**2 + updated.w**2)
    assert norm == pytest.approx(1.0)
    assert updated.w == pytest.approx(math.cos(0.4))
    axis_before = Float3(q.x, q.y, q.z).normalized()
    axis_after = Float3(updated.x, updated.y, updated.z).normalized()
    assert dot3(axis_before, axis_after) == pytest.approx(1.0)


def test_quat_mult_identity_leaves_vector():
    v = Float3(1.0, -2.0, 3.5)
    assert quat_mult(v, Float4(0.0, 0.0, 0.0, 1.0)) == v


def test_quat_mult_preserves_length():
    q = calculate_quaternion(Float3(1.0, 0.0, 1.0))
    v = Float3(1.0, 2.0, 3.0)
    assert quat_mult(v, q).magnitude() == pytest.approx(v.magnitude())