# どこで: `src/circlestrip/__main__.py`。
# 何を: `python -m circlestrip` を CLI に接続する。

from __future__ import annotations

from circlestrip.cli import main

if __name__ == "__main__":
    raise SystemExit(main())
