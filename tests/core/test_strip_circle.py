"""円ストリップ生成（half 対称）の頂点列と不変条件に関するテスト群。"""

from __future__ import annotations

import array
import math

import numpy as np
import pytest

from circlestrip.core.errors import InvalidArgumentError
from circlestrip.core.strip_circle import create_circle, generate

SENTINEL = 7.0


def _strip(n: int, *, clockwise: bool = True, dtype=np.float64) -> np.ndarray:
    buf = np.full((2 * n,), np.nan, dtype=dtype)
    written = create_circle(n, buf, clockwise)
    assert written == 2 * n
    return buf.reshape(-1, 2)


def _polygon_vertices(n: int) -> np.ndarray:
    """時計回りに並んだ正 N 角形の頂点（奇数は上端、偶数は右端が 0 番）。"""
    theta = 2.0 * math.pi / n
    k = np.arange(n, dtype=np.float64) * theta
    if n % 2 == 1:
        return np.stack([np.sin(k), np.cos(k)], axis=1)
    return np.stack([np.cos(k), -np.sin(k)], axis=1)


def _vertex_indices(points: np.ndarray, n: int) -> np.ndarray:
    expected = _polygon_vertices(n)
    dist = np.linalg.norm(points[:, None, :] - expected[None, :, :], axis=2)
    idx = np.argmin(dist, axis=1)
    assert np.max(dist[np.arange(points.shape[0]), idx]) < 1e-9
    return idx


@pytest.mark.parametrize("n", list(range(1, 41)))
def test_writes_exactly_2n_scalars(n: int) -> None:
    buf = np.full((2 * n + 3,), SENTINEL, dtype=np.float64)

    written = generate(n, buf)

    assert written == 2 * n
    assert not np.any(buf[: 2 * n] == SENTINEL)
    np.testing.assert_array_equal(buf[2 * n :], [SENTINEL] * 3)


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 7, 16, 33, 64, 10_001])
def test_points_lie_on_unit_circle(n: int) -> None:
    pts = _strip(n)
    np.testing.assert_allclose(np.hypot(pts[:, 0], pts[:, 1]), 1.0, rtol=0.0, atol=1e-9)


@pytest.mark.parametrize("n", list(range(1, 25)))
def test_each_polygon_vertex_is_emitted_once(n: int) -> None:
    idx = _vertex_indices(_strip(n), n)
    assert sorted(idx.tolist()) == list(range(n))


@pytest.mark.parametrize("n", [3, 4, 5, 6, 9, 12, 31, 64])
def test_strip_triangles_tile_the_polygon(n: int) -> None:
    """連続 3 点の三角形が重ならずに正多角形を覆う。"""
    pts = _strip(n)
    a = pts[:-2]
    b = pts[1:-1]
    c = pts[2:]
    ab = b - a
    ac = c - a
    areas = 0.5 * np.abs(ab[:, 0] * ac[:, 1] - ab[:, 1] * ac[:, 0])

    assert areas.shape[0] == n - 2
    assert np.all(areas > 1e-12)
    assert math.isclose(float(areas.sum()), 0.5 * n * math.sin(2.0 * math.pi / n), abs_tol=1e-9)


def test_n5_follows_rotation_from_top() -> None:
    theta = 2.0 * math.pi / 5
    pts = _strip(5)

    np.testing.assert_allclose(pts[0], [0.0, 1.0], rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(pts[1], [math.sin(theta), math.cos(theta)], rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(pts[2], [-math.sin(theta), math.cos(theta)], rtol=0.0, atol=1e-12)
    np.testing.assert_allclose(
        pts[3], [math.sin(2 * theta), math.cos(2 * theta)], rtol=0.0, atol=1e-12
    )
    np.testing.assert_allclose(
        pts[4], [-math.sin(2 * theta), math.cos(2 * theta)], rtol=0.0, atol=1e-12
    )
    # 最後の対は左下側にある。
    assert pts[4, 0] < 0.0 and pts[4, 1] < 0.0


def test_n4_is_right_bottom_top_left() -> None:
    pts = _strip(4)
    np.testing.assert_allclose(
        pts,
        [[1.0, 0.0], [0.0, -1.0], [0.0, 1.0], [-1.0, 0.0]],
        rtol=0.0,
        atol=1e-12,
    )


def test_degenerate_counts_write_only_their_slots() -> None:
    buf = np.full((6,), SENTINEL, dtype=np.float64)
    assert generate(1, buf) == 2
    np.testing.assert_array_equal(buf, [0.0, 1.0] + [SENTINEL] * 4)

    buf = np.full((6,), SENTINEL, dtype=np.float64)
    assert generate(2, buf) == 4
    np.testing.assert_array_equal(buf, [1.0, 0.0, -1.0, 0.0, SENTINEL, SENTINEL])


@pytest.mark.parametrize("n", [1, 2, 3, 4, 5, 8, 11, 20])
def test_counter_clockwise_mirrors_clockwise(n: int) -> None:
    cw = _strip(n, clockwise=True)
    ccw = _strip(n, clockwise=False)

    if n % 2 == 1:
        # 上端始まり: 左右が入れ替わる。
        np.testing.assert_allclose(ccw[:, 0], -cw[:, 0], rtol=0.0, atol=1e-12)
        np.testing.assert_allclose(ccw[:, 1], cw[:, 1], rtol=0.0, atol=1e-12)
    else:
        # 右端始まり: 上下が入れ替わる。
        np.testing.assert_allclose(ccw[:, 0], cw[:, 0], rtol=0.0, atol=1e-12)
        np.testing.assert_allclose(ccw[:, 1], -cw[:, 1], rtol=0.0, atol=1e-12)

    assert sorted(_vertex_indices(ccw, n).tolist()) == list(range(n))


def test_float32_buffer_rotates_in_float32() -> None:
    buf32 = np.empty((2 * 100,), dtype=np.float32)
    generate(100, buf32)

    assert buf32.dtype == np.float32
    np.testing.assert_allclose(buf32.reshape(-1, 2), _strip(100), rtol=0.0, atol=1e-4)


def test_two_dimensional_buffer_is_filled_in_place() -> None:
    buf = np.zeros((6, 2), dtype=np.float64)
    generate(6, buf)
    np.testing.assert_allclose(buf, _strip(6), rtol=0.0, atol=0.0)


def test_array_module_buffer_is_filled_in_place() -> None:
    buf = array.array("f", [SENTINEL] * 12)

    assert generate(5, buf) == 10

    expected = np.empty((10,), dtype=np.float32)
    generate(5, expected)
    np.testing.assert_array_equal(np.asarray(buf[:10], dtype=np.float32), expected)
    assert buf[10:] == array.array("f", [SENTINEL, SENTINEL])


def test_list_buffer_receives_python_floats() -> None:
    buf = [SENTINEL] * 9

    assert generate(4, buf) == 8

    assert all(type(v) is float for v in buf)
    np.testing.assert_allclose(np.asarray(buf[:8]).reshape(-1, 2), _strip(4), rtol=0.0, atol=0.0)
    assert buf[8] == SENTINEL


def test_none_buffer_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        generate(5, None)


@pytest.mark.parametrize("n", [0, -1, -8])
def test_non_positive_count_is_rejected_without_writes(n: int) -> None:
    buf = np.full((10,), SENTINEL, dtype=np.float64)
    with pytest.raises(InvalidArgumentError):
        generate(n, buf)
    np.testing.assert_array_equal(buf, [SENTINEL] * 10)


@pytest.mark.parametrize("n", [True, 3.0, "5", None])
def test_non_integer_count_is_rejected(n) -> None:
    with pytest.raises(InvalidArgumentError):
        generate(n, np.empty((10,), dtype=np.float64))


def test_numpy_integer_count_is_accepted() -> None:
    buf = np.empty((10,), dtype=np.float64)
    assert generate(np.int32(5), buf) == 10


def test_short_buffer_is_rejected_without_writes() -> None:
    buf = np.full((9,), SENTINEL, dtype=np.float64)
    with pytest.raises(InvalidArgumentError, match="長さが不足"):
        generate(5, buf)
    np.testing.assert_array_equal(buf, [SENTINEL] * 9)

    short_list = [SENTINEL] * 3
    with pytest.raises(InvalidArgumentError):
        generate(2, short_list)
    assert short_list == [SENTINEL] * 3


def test_unsupported_buffers_are_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        generate(3, np.zeros((6,), dtype=np.int32))

    readonly = np.zeros((6,), dtype=np.float64)
    readonly.setflags(write=False)
    with pytest.raises(InvalidArgumentError):
        generate(3, readonly)

    strided = np.zeros((12,), dtype=np.float64)[::2]
    with pytest.raises(InvalidArgumentError):
        generate(3, strided)

    with pytest.raises(InvalidArgumentError):
        generate(3, (0.0,) * 6)

    with pytest.raises(InvalidArgumentError):
        generate(3, bytes(48))


def test_unknown_symmetry_is_rejected() -> None:
    with pytest.raises(InvalidArgumentError):
        generate(4, np.empty((8,), dtype=np.float64), symmetry="eighth")
