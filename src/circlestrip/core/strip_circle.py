"""
どこで: `src/circlestrip/core/strip_circle.py`。単位円ストリップ頂点生成の実体。
何を: 点数 N から、三角形ストリップ順に並んだ単位円上の (x, y) を呼び出し側のバッファへ書き込む。
なぜ: sin/cos を 1 回ずつしか評価せず、回転漸化式と鏡映対称で残りの点を得るため。

回転漸化式（角度 a で (x, y) を原点まわりに回す）:

    x' = cos(a) * x + sin(a) * y
    y' = sin(a) * -x + cos(a) * y

a > 0 で時計回りに進む。
"""

from __future__ import annotations

import math
import operator
from collections.abc import MutableSequence
from typing import Any

import numpy as np
from numba import njit  # type: ignore[import-untyped]

from circlestrip.core.errors import InvalidArgumentError

TWO_PI = 2.0 * math.pi
SYMMETRIES = ("half", "quarter")

_SUPPORTED_DTYPES = (np.dtype(np.float32), np.dtype(np.float64))


@njit(cache=True)
def _rotate(x, y, cos_incr, sin_incr):
    return cos_incr * x + sin_incr * y, sin_incr * -x + cos_incr * y


@njit(cache=True)
def _fill_odd_nb(n: int, out: np.ndarray, cos_incr, sin_incr) -> int:
    """奇数 N: 上端から右半円を下り、各点の左右鏡映を直後に置く。"""
    out[0] = 0.0
    out[1] = 1.0
    x = out[0]
    y = out[1]

    cursor = 2
    for _ in range(n // 2):
        x, y = _rotate(x, y, cos_incr, sin_incr)
        out[cursor] = x
        out[cursor + 1] = y
        out[cursor + 2] = -x
        out[cursor + 3] = y
        cursor += 4
    return cursor


@njit(cache=True)
def _fill_bottom_right_nb(steps: int, out: np.ndarray, cos_incr, sin_incr) -> int:
    """偶数 N の共通前半: 右端から下側を進み、各点の上下鏡映を直後に置く。"""
    out[0] = 1.0
    out[1] = 0.0
    x = out[0]
    y = out[1]

    cursor = 2
    for _ in range(steps):
        x, y = _rotate(x, y, cos_incr, sin_incr)
        out[cursor] = x
        out[cursor + 1] = y
        out[cursor + 2] = x
        out[cursor + 3] = -y
        cursor += 4
    return cursor


@njit(cache=True)
def _fill_half_nb(n: int, out: np.ndarray, cos_incr, sin_incr) -> int:
    if n % 2 == 1:
        return _fill_odd_nb(n, out, cos_incr, sin_incr)

    cursor = _fill_bottom_right_nb(n // 2 - 1, out, cos_incr, sin_incr)
    # 左端は上下で共有するので 1 回だけ置く。
    out[cursor] = -1.0
    out[cursor + 1] = 0.0
    return cursor + 2


@njit(cache=True)
def _fill_quarter_nb(n: int, out: np.ndarray, cos_incr, sin_incr) -> int:
    if n % 2 == 1:
        return _fill_odd_nb(n, out, cos_incr, sin_incr)

    half = n // 2
    cursor = _fill_bottom_right_nb(half // 2, out, cos_incr, sin_incr)

    # 左半分は書き込み済みの右半分を読み戻して作る。
    # 奇数番目の点が下側（y <= 0）の点で、その左右鏡映と原点対称点を順に置く。
    # half が偶数なら右半分の最後は下端 (0, -1) で、x=0 上なので鏡映しない。
    start = half - 2 if half % 2 == 1 else half - 3
    for i in range(start, 0, -2):
        x = out[i * 2]
        y = out[i * 2 + 1]
        out[cursor] = -x
        out[cursor + 1] = y
        out[cursor + 2] = -x
        out[cursor + 3] = -y
        cursor += 4

    out[cursor] = -1.0
    out[cursor + 1] = 0.0
    return cursor + 2


_KERNELS = {
    "half": _fill_half_nb,
    "quarter": _fill_quarter_nb,
}


def validate_point_count(n: Any) -> int:
    """点数 N を検証し、1 以上の int として返す。"""
    if n is None or isinstance(n, bool):
        raise InvalidArgumentError(f"点数は正の整数である必要がある: got={n!r}")
    try:
        count = operator.index(n)
    except TypeError as exc:
        raise InvalidArgumentError(f"点数は正の整数である必要がある: got={n!r}") from exc
    if count < 1:
        raise InvalidArgumentError(f"点数は 1 以上である必要がある: got={count}")
    return int(count)


def _flat_float_view(buffer: Any) -> np.ndarray | None:
    """バッファをコピーせずに 1 次元 float 配列として見る。

    buffer protocol を持たない Python シーケンスの場合は None を返す。
    """
    if isinstance(buffer, np.ndarray):
        arr = buffer
    else:
        try:
            view = memoryview(buffer)
        except TypeError:
            return None
        arr = np.asarray(view)

    if arr.dtype not in _SUPPORTED_DTYPES:
        raise InvalidArgumentError(
            f"出力バッファの dtype は float32/float64 である必要がある: got={arr.dtype}"
        )
    if not arr.flags.writeable:
        raise InvalidArgumentError("出力バッファが書き込み不可になっている")
    if not arr.flags.c_contiguous:
        raise InvalidArgumentError("出力バッファは連続メモリである必要がある")
    return arr.reshape(-1)


def _run_kernel(symmetry: str, count: int, out: np.ndarray, clockwise: bool) -> int:
    ftype = out.dtype.type
    angle = ftype(TWO_PI) / ftype(count)
    if not clockwise:
        angle = -angle
    cos_incr = np.cos(angle)
    sin_incr = np.sin(angle)

    written = int(_KERNELS[symmetry](count, out, cos_incr, sin_incr))
    if written != 2 * count:
        raise RuntimeError(
            f"書き込みスカラー数が 2N と一致しない: n={count}, written={written}, symmetry={symmetry}"
        )
    return written


def generate(
    n: int,
    buffer: Any,
    clockwise: bool = True,
    *,
    symmetry: str = "half",
) -> int:
    """単位円上の N 点を三角形ストリップ順でバッファへ書き込む。

    Parameters
    ----------
    n : int
        頂点数 N（1 以上）。奇数なら上端 (0, 1)、偶数なら右端 (1, 0) から始まる。
    buffer : np.ndarray | buffer protocol | MutableSequence[float]
        呼び出し側が所有する長さ 2N 以上のバッファ。
        ndarray と buffer protocol 対応オブジェクト（``array.array("f")`` 等）は
        コピーせずその場で書き込み、dtype（float32/float64）の精度で計算する。
        list 等の Python シーケンスは float64 で計算して要素ごとに代入する。
    clockwise : bool, default True
        True なら時計回り（回転角 +2π/N）、False なら反時計回り。
    symmetry : {"half", "quarter"}, default "half"
        "half" は左右（奇数）/上下（偶数）の鏡映で半周分だけ回転させる。
        "quarter" は偶数 N でさらに左右鏡映を使い、1/4 周分だけ回転させる。

    Returns
    -------
    int
        書き込んだスカラー数。常に 2N。

    Raises
    ------
    InvalidArgumentError
        buffer が None、長さ不足、非対応の型/dtype、書き込み不可、
        N が 1 未満または整数でない、symmetry が未知の場合。検証は書き込み前に行う。

    Notes
    -----
    buffer[2k], buffer[2k+1] に k 番目のストリップ頂点の x, y が入る（k ∈ [0, N)）。
    2N 以降の要素には触れない。
    """
    if buffer is None:
        raise InvalidArgumentError("出力バッファが None になっている")
    count = validate_point_count(n)
    if symmetry not in _KERNELS:
        raise InvalidArgumentError(
            f"symmetry は {', '.join(SYMMETRIES)} のいずれかである必要がある: got={symmetry!r}"
        )

    flat = _flat_float_view(buffer)
    if flat is None:
        if not isinstance(buffer, MutableSequence):
            raise InvalidArgumentError(
                f"出力バッファは可変シーケンスである必要がある: got={type(buffer).__name__}"
            )
        if len(buffer) < 2 * count:
            raise InvalidArgumentError(
                f"出力バッファの長さが不足している: need={2 * count}, got={len(buffer)}"
            )
        work = np.empty((2 * count,), dtype=np.float64)
        written = _run_kernel(symmetry, count, work, bool(clockwise))
        for i, value in enumerate(work.tolist()):
            buffer[i] = value
        return written

    if flat.shape[0] < 2 * count:
        raise InvalidArgumentError(
            f"出力バッファの長さが不足している: need={2 * count}, got={flat.shape[0]}"
        )
    return _run_kernel(symmetry, count, flat, bool(clockwise))


def create_circle(n: int, buffer: Any, clockwise: bool = True) -> int:
    """半周分の回転で円ストリップを生成する（`generate(..., symmetry="half")`）。"""
    return generate(n, buffer, clockwise, symmetry="half")


def create_circle_quarter(n: int, buffer: Any, clockwise: bool = True) -> int:
    """1/4 周分の回転で円ストリップを生成する（`generate(..., symmetry="quarter")`）。

    奇数 N は上端から始まり下端に点が無いため、"half" と同じ結果になる。
    """
    return generate(n, buffer, clockwise, symmetry="quarter")


__all__ = [
    "SYMMETRIES",
    "TWO_PI",
    "create_circle",
    "create_circle_quarter",
    "generate",
    "validate_point_count",
]
