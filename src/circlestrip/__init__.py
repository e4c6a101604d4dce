# どこで: `src/circlestrip/__init__.py`。
# 何を: ルート `circlestrip` パッケージを定義し、生成関数と例外型を再エクスポートする。
# なぜ: import 起点を `circlestrip` に統一するため。

from __future__ import annotations

from circlestrip.core.errors import BufferAllocationError, InvalidArgumentError
from circlestrip.core.strip_buffer import StripPoints, allocate_strip_buffer, circle_strip
from circlestrip.core.strip_circle import create_circle, create_circle_quarter, generate

__all__ = [
    "BufferAllocationError",
    "InvalidArgumentError",
    "StripPoints",
    "allocate_strip_buffer",
    "circle_strip",
    "create_circle",
    "create_circle_quarter",
    "generate",
]
