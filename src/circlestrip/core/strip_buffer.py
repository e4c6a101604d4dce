# どこで: `src/circlestrip/core/strip_buffer.py`。
# 何を: 2N スカラーの出力バッファ確保と、確保 + 生成をまとめた StripPoints を提供する。
# なぜ: 生成コアはバッファを所有しないため、確保失敗の報告を呼び出し側の責務として切り出すため。

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any

import numpy as np

from circlestrip.core.errors import BufferAllocationError, InvalidArgumentError
from circlestrip.core.strip_circle import generate, validate_point_count

_logger = logging.getLogger(__name__)

DTYPES = {
    "float32": np.dtype(np.float32),
    "float64": np.dtype(np.float64),
}


def resolve_dtype(dtype: Any) -> np.dtype:
    """dtype 指定（名前 / numpy 型）を float32/float64 の np.dtype に正規化する。"""
    if isinstance(dtype, str):
        key = dtype.strip().lower()
        if key not in DTYPES:
            raise InvalidArgumentError(
                f"dtype は {', '.join(DTYPES)} のいずれかである必要がある: got={dtype!r}"
            )
        return DTYPES[key]
    try:
        resolved = np.dtype(dtype)
    except TypeError as exc:
        raise InvalidArgumentError(f"dtype を解釈できない: got={dtype!r}") from exc
    if resolved not in DTYPES.values():
        raise InvalidArgumentError(
            f"dtype は {', '.join(DTYPES)} のいずれかである必要がある: got={resolved}"
        )
    return resolved


def allocate_strip_buffer(n: int, dtype: Any = np.float32) -> np.ndarray:
    """N 頂点分（2N スカラー）の未初期化バッファを確保する。

    Raises
    ------
    InvalidArgumentError
        N が 1 未満、または dtype が float32/float64 でない場合。
    BufferAllocationError
        メモリ確保に失敗した場合。要求点数とバイト数を保持する。
    """
    count = validate_point_count(n)
    resolved = resolve_dtype(dtype)
    size = 2 * count
    try:
        return np.empty((size,), dtype=resolved)
    except (MemoryError, OverflowError, ValueError) as exc:
        _logger.error("バッファ確保に失敗: n=%d, dtype=%s", count, resolved.name)
        raise BufferAllocationError(count, size * resolved.itemsize) from exc


@dataclass(frozen=True, slots=True)
class StripPoints:
    """三角形ストリップ順の単位円頂点列。

    Parameters
    ----------
    points : np.ndarray
        shape (N, 2) の頂点配列。dtype は float32 または float64。
    clockwise : bool
        生成時の回転方向。
    symmetry : str
        生成に使った対称性（"half" / "quarter"）。

    Notes
    -----
    配列は writeable=False で保持する。
    """

    points: np.ndarray
    clockwise: bool = True
    symmetry: str = "half"

    def __post_init__(self) -> None:
        points = np.asarray(self.points)
        if points.ndim == 1 and points.shape[0] % 2 == 0:
            points = points.reshape(-1, 2)
        if points.ndim != 2 or points.shape[1] != 2:
            raise ValueError("points は shape (N,2) の 2 次元配列である必要がある")
        if points.dtype not in DTYPES.values():
            raise ValueError(f"points の dtype は float32/float64 である必要がある: got={points.dtype}")

        points.setflags(write=False)
        object.__setattr__(self, "points", points)

    @property
    def n(self) -> int:
        return int(self.points.shape[0])

    @property
    def flat(self) -> np.ndarray:
        """2N スカラーの 1 次元ビュー（x0, y0, x1, y1, ...）。"""
        return self.points.reshape(-1)


def circle_strip(
    n: int,
    *,
    clockwise: bool = True,
    symmetry: str = "half",
    dtype: Any = np.float32,
) -> StripPoints:
    """バッファを確保して円ストリップを生成し、StripPoints として返す。

    Parameters
    ----------
    n : int
        頂点数 N。
    clockwise : bool, default True
        回転方向。
    symmetry : {"half", "quarter"}, default "half"
        生成に使う対称性。
    dtype : str | np.dtype, default np.float32
        スカラーの精度。

    Returns
    -------
    StripPoints
        shape (N, 2) の読み取り専用頂点列。
    """
    buf = allocate_strip_buffer(n, dtype)
    generate(n, buf, clockwise, symmetry=symmetry)
    return StripPoints(points=buf.reshape(-1, 2), clockwise=bool(clockwise), symmetry=symmetry)


__all__ = [
    "DTYPES",
    "StripPoints",
    "allocate_strip_buffer",
    "circle_strip",
    "resolve_dtype",
]
