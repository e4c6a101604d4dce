"""
どこで: `src/circlestrip/cli.py`。`circlestrip` コマンド / `python -m circlestrip` の実体。
何を: 点数を受け取り、バッファを確保して円ストリップを生成し、`x,y` 行で出力する。
なぜ: 生成コアの外側（引数解釈・確保・表示）を 1 か所にまとめ、core を純粋に保つため。
"""

from __future__ import annotations

import argparse
import logging
import sys
from typing import TextIO

from circlestrip.core.errors import BufferAllocationError, InvalidArgumentError
from circlestrip.core.runtime_config import runtime_config, set_config_path
from circlestrip.core.strip_buffer import DTYPES, allocate_strip_buffer
from circlestrip.core.strip_circle import SYMMETRIES, generate

_logger = logging.getLogger(__name__)


def _parse_args(argv: list[str] | None) -> argparse.Namespace:
    p = argparse.ArgumentParser(
        prog="circlestrip",
        description="単位円の頂点を三角形ストリップ順で出力する。",
    )
    p.add_argument("n", nargs="?", type=int, default=None, help="頂点数（未指定なら config の strip.points）")
    winding = p.add_mutually_exclusive_group()
    winding.add_argument("--clockwise", dest="clockwise", action="store_true", default=None)
    winding.add_argument("--counter-clockwise", dest="clockwise", action="store_false")
    p.add_argument("--symmetry", choices=SYMMETRIES, default=None)
    p.add_argument(
        "--quarter",
        dest="symmetry",
        action="store_const",
        const="quarter",
        help="--symmetry quarter の短縮形",
    )
    p.add_argument("--dtype", choices=tuple(DTYPES), default=None)
    p.add_argument("--precision", type=int, default=None, help="出力の有効桁数")
    p.add_argument("--config", default=None, help="config.yaml のパス")
    p.add_argument("-v", "--verbose", action="store_true", help="DEBUG ログを出す")
    return p.parse_args(argv)


def format_points(flat, *, precision: int = 6) -> list[str]:
    """2N スカラー列を `x,y` 形式の行リストに整形する。"""
    values = [float(v) for v in flat]
    return [
        f"{values[i]:.{precision}g},{values[i + 1]:.{precision}g}"
        for i in range(0, len(values) - 1, 2)
    ]


def main(argv: list[str] | None = None, *, out: TextIO | None = None) -> int:
    args = _parse_args(argv)
    stream = sys.stdout if out is None else out

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

    try:
        if args.config is not None:
            set_config_path(args.config)
        cfg = runtime_config()
    except (FileNotFoundError, RuntimeError, ValueError) as exc:
        print(f"config の読み込みに失敗しました: {exc}", file=sys.stderr)  # noqa: T201
        return 2

    n = cfg.points if args.n is None else args.n
    clockwise = cfg.clockwise if args.clockwise is None else bool(args.clockwise)
    symmetry = cfg.symmetry if args.symmetry is None else args.symmetry
    dtype = cfg.dtype if args.dtype is None else args.dtype
    precision = cfg.precision if args.precision is None else args.precision
    if precision < 1:
        print(f"--precision は 1 以上である必要があります: got={precision}", file=sys.stderr)  # noqa: T201
        return 2

    try:
        buf = allocate_strip_buffer(n, dtype)
    except InvalidArgumentError as exc:
        print(str(exc), file=sys.stderr)  # noqa: T201
        return 2
    except BufferAllocationError as exc:
        print(  # noqa: T201
            f"Failed to allocate memory using {exc.requested_points} points; {exc}",
            file=sys.stderr,
        )
        return 1

    _logger.debug("generate: n=%d, clockwise=%s, symmetry=%s, dtype=%s", n, clockwise, symmetry, dtype)
    generate(n, buf, clockwise, symmetry=symmetry)

    print(f"Circle with {n} points:", file=stream)  # noqa: T201
    for line in format_points(buf, precision=precision):
        print(line, file=stream)  # noqa: T201
    return 0


__all__ = ["format_points", "main"]
