#!/usr/bin/env python3
from __future__ import annotations

import argparse
import ast
from dataclasses import dataclass
from pathlib import Path

LAYER_NAMES = ("api", "tasks", "application", "domain", "infrastructure", "core")

BANNED_EXTERNAL: dict[str, set[str]] = {
    "domain": {"sqlalchemy", "redis", "celery", "fastapi", "pydantic", "pydantic_settings", "httpx", "smtplib"},
    "application": {"sqlalchemy", "redis", "celery", "fastapi", "pydantic", "httpx", "smtplib"},
    "api": {"sqlalchemy", "redis", "celery", "httpx", "smtplib"},
    "tasks": {"sqlalchemy", "redis", "httpx"},
}

BANNED_INTERNAL: dict[str, set[str]] = {
    "domain": {"api", "tasks", "application", "infrastructure", "core"},
    "infrastructure": {"api", "tasks", "application"},
    "application": {"api", "tasks"},
    "api": {"infrastructure", "tasks"},
    "tasks": {"api", "infrastructure"},
}

NO_INTERFACE_IMPORTS = {
    ("typing", "Protocol"),
    ("typing_extensions", "Protocol"),
    ("abc", "ABC"),
    ("abc", "ABCMeta"),
    ("abc", "abstractmethod"),
}
NO_INTERFACE_BASES = {"Protocol", "ABC", "ABCMeta"}


@dataclass(frozen=True)
class ImportRef:
    module: str
    lineno: int


def check_package(pkg_root: Path, *, package: str = "app") -> list[str]:
    """Return one message per layering violation found under ``pkg_root``."""
    violations: list[str] = []
    for py_file in sorted(p for p in pkg_root.rglob("*.py") if p.is_file()):
        tree = ast.parse(py_file.read_text(encoding="utf-8"), filename=str(py_file))
        violations.extend(_interface_violations(py_file, tree))

        layer = _layer_of(py_file, pkg_root=pkg_root)
        if layer is None:
            continue
        for imp in _imports(tree):
            top = _strip_package(imp.module, package).split(".", 1)[0]
            if top in BANNED_EXTERNAL.get(layer, set()):
                violations.append(f"{py_file}:{imp.lineno} {layer} imports banned external module: {imp.module}")
            if top in BANNED_INTERNAL.get(layer, set()):
                violations.append(f"{py_file}:{imp.lineno} {layer} must not depend on {top}: {imp.module}")
    return violations


def _layer_of(py_file: Path, *, pkg_root: Path) -> str | None:
    parts = py_file.relative_to(pkg_root).parts
    if len(parts) < 2:
        return None
    return parts[0] if parts[0] in LAYER_NAMES else None


def _strip_package(module: str, package: str) -> str:
    if module.startswith(package + "."):
        return module[len(package) + 1 :]
    return module


def _imports(tree: ast.AST) -> list[ImportRef]:
    found: list[ImportRef] = []
    for node in ast.walk(tree):
        if isinstance(node, ast.Import):
            found.extend(ImportRef(module=alias.name, lineno=node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module and node.level == 0:
            found.append(ImportRef(module=node.module, lineno=node.lineno))
    return found


def _interface_violations(py_file: Path, tree: ast.AST) -> list[str]:
    violations: list[str] = []
    banned_bases = set(NO_INTERFACE_BASES)

    for node in ast.walk(tree):
        if isinstance(node, ast.ImportFrom) and node.module:
            for alias in node.names:
                if (node.module, alias.name) not in NO_INTERFACE_IMPORTS:
                    continue
                violations.append(
                    f"{py_file}:{node.lineno} no-interfaces rule: forbidden import '{node.module}.{alias.name}'"
                )
                if alias.name in NO_INTERFACE_BASES:
                    banned_bases.add(alias.asname or alias.name)

    for node in ast.walk(tree):
        if not isinstance(node, ast.ClassDef):
            continue
        for base in node.bases:
            symbol = _base_name(base)
            if symbol is not None and symbol in banned_bases:
                violations.append(
                    f"{py_file}:{node.lineno} no-interfaces rule: class '{node.name}' must not inherit from '{symbol}'"
                )
    return violations


def _base_name(node: ast.AST) -> str | None:
    if isinstance(node, ast.Name):
        return node.id
    if isinstance(node, ast.Attribute):
        return node.attr
    if isinstance(node, ast.Subscript):
        return _base_name(node.value)
    return None


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Check layering for api/tasks -> application -> infrastructure -> domain."
    )
    parser.add_argument("--root", default=".", help="Backend root containing the package (default: cwd).")
    parser.add_argument("--package", default="app", help="Package name (default: app).")
    args = parser.parse_args()

    pkg_root = Path(args.root).resolve() / args.package
    if not pkg_root.exists():
        raise SystemExit(f"Package root not found: {pkg_root}")

    violations = check_package(pkg_root, package=args.package)
    if violations:
        print("Boundary violations found:\n")
        for violation in violations:
            print("-", violation)
        return 1

    print(f"No boundary violations under {pkg_root}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
