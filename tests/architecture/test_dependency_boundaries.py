"""依存境界（core と CLI）の破りを検出するテスト。"""

from __future__ import annotations

import ast
from pathlib import Path


def _repo_root() -> Path:
    path = Path(__file__).resolve()
    for parent in path.parents:
        if (parent / "src").is_dir() and (parent / "tests").is_dir():
            return parent
    raise RuntimeError("repo root が見つからない")


def _imported_modules(path: Path) -> set[str]:
    tree = ast.parse(path.read_text(encoding="utf-8"))
    modules: set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            modules.update(str(alias.name) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module is not None and node.level == 0:
            base = str(node.module)
            modules.add(base)
            modules.update(f"{base}.{alias.name}" for alias in node.names if alias.name != "*")
    return modules


def test_core_does_not_depend_on_cli() -> None:
    core = _repo_root() / "src" / "circlestrip" / "core"
    forbidden = ("circlestrip.cli", "circlestrip.__main__", "argparse")

    violations: list[str] = []
    for path in sorted(core.rglob("*.py")):
        bad = sorted(m for m in _imported_modules(path) if m.startswith(forbidden))
        if bad:
            violations.append(f"{path.name}: {', '.join(bad)}")

    if violations:
        joined = "\n".join(violations)
        raise AssertionError(f"依存境界違反の import を検出:\n{joined}")


def test_strip_kernels_only_import_numeric_stack() -> None:
    path = _repo_root() / "src" / "circlestrip" / "core" / "strip_circle.py"
    third_party = {m.split(".")[0] for m in _imported_modules(path)} - {
        "__future__",
        "circlestrip",
        "collections",
        "math",
        "operator",
        "typing",
    }
    assert third_party == {"numba", "numpy"}
