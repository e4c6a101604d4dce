# どこで: `src/circlestrip/core/errors.py`。
# 何を: 円ストリップ生成で使う例外型を定義する。
# なぜ: 引数不正（core 側）と確保失敗（呼び出し側）を型で区別して扱うため。

from __future__ import annotations


class InvalidArgumentError(ValueError):
    """点数・出力バッファ・symmetry 指定が前提条件を満たさない場合の例外。

    Notes
    -----
    送出時点ではバッファへの書き込みは一切行われていない。
    """


class BufferAllocationError(MemoryError):
    """出力バッファの確保に失敗した場合の例外。

    Parameters
    ----------
    requested_points : int
        要求された頂点数 N。
    requested_bytes : int
        要求されたバイト数（2N スカラー分）。
    """

    def __init__(self, requested_points: int, requested_bytes: int) -> None:
        self.requested_points = int(requested_points)
        self.requested_bytes = int(requested_bytes)
        super().__init__(
            f"{self.requested_points} 点分のバッファを確保できません"
            f"（{self.requested_bytes} bytes）"
        )


__all__ = ["BufferAllocationError", "InvalidArgumentError"]
