"""Architectural tests for the wizard engine layout.

All checks use static AST inspection of the source tree so nothing is
imported or executed. They pin down where pages are registered, which
layers may talk to HTTP or the database, and that every page has
question text in the catalog.
"""

from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Set

import pytest


PROJECT_ROOT = Path(__file__).resolve().parents[2]
PACKAGE_DIR = PROJECT_ROOT / "intake"
LOGIC_DIR = PACKAGE_DIR / "logic"
PAGES_DIR = LOGIC_DIR / "pages"
ROUTES_DIR = PACKAGE_DIR / "routes"
REGISTRY_PATH = LOGIC_DIR / "registry.py"
QUESTIONS_PATH = LOGIC_DIR / "questions.py"


@dataclass
class ParsedModule:
    path: Path
    tree: ast.AST


def parse_module(path: Path) -> ParsedModule:
    assert path.exists(), f"Required module missing: {path}"
    try:
        return ParsedModule(path=path, tree=ast.parse(path.read_text(encoding="utf-8"), filename=str(path)))
    except SyntaxError as exc:  # pragma: no cover - explicit failure in test
        pytest.fail(f"Failed to parse {path}: {exc}")


def py_files_under(*roots: Path) -> List[Path]:
    files: List[Path] = []
    for root in roots:
        files.extend(sorted(p for p in root.rglob("*.py") if "__pycache__" not in p.parts))
    return files


def imported_modules(pm: ParsedModule) -> Set[str]:
    names: Set[str] = set()
    for node in ast.walk(pm.tree):
        if isinstance(node, ast.Import):
            names.update(alias.name.split(".")[0] for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.module:
            names.add(node.module.split(".")[0])
    return names


def _class_constant(node: ast.ClassDef, attr: str) -> Optional[str]:
    for stmt in node.body:
        if isinstance(stmt, ast.Assign) and isinstance(stmt.value, ast.Constant):
            for target in stmt.targets:
                if isinstance(target, ast.Name) and target.id == attr and isinstance(stmt.value.value, str):
                    return stmt.value.value
    return None


def page_classes() -> Dict[str, ast.ClassDef]:
    """Concrete page classes: every class in the pages package that declares a page `name`."""
    found: Dict[str, ast.ClassDef] = {}
    for path in py_files_under(PAGES_DIR):
        if path.name in {"__init__.py", "base.py"}:
            continue
        for node in parse_module(path).tree.body:  # type: ignore[attr-defined]
            if isinstance(node, ast.ClassDef) and _class_constant(node, "name"):
                found[node.name] = node
    return found


def _task_name_constants() -> Dict[str, str]:
    """Module-level string constants used as `task_name = TASK_NAME`."""
    constants: Dict[str, str] = {}
    for path in py_files_under(PAGES_DIR):
        for node in parse_module(path).tree.body:  # type: ignore[attr-defined]
            if isinstance(node, ast.Assign) and isinstance(node.value, ast.Constant):
                for target in node.targets:
                    if isinstance(target, ast.Name) and isinstance(node.value.value, str):
                        constants[target.id] = node.value.value
    return constants


def page_task_name(node: ast.ClassDef, classes: Dict[str, ast.ClassDef], constants: Dict[str, str]) -> Optional[str]:
    """Resolve `task_name` on the class or its in-package bases."""
    for stmt in node.body:
        if isinstance(stmt, ast.Assign):
            for target in stmt.targets:
                if isinstance(target, ast.Name) and target.id == "task_name":
                    if isinstance(stmt.value, ast.Constant):
                        return stmt.value.value
                    if isinstance(stmt.value, ast.Name):
                        return constants.get(stmt.value.id)
    for base in node.bases:
        if isinstance(base, ast.Name):
            parent = classes.get(base.id) or _all_classes().get(base.id)
            if parent is not None:
                return page_task_name(parent, classes, constants)
    return None


def _all_classes() -> Dict[str, ast.ClassDef]:
    found: Dict[str, ast.ClassDef] = {}
    for path in py_files_under(PAGES_DIR):
        for node in parse_module(path).tree.body:  # type: ignore[attr-defined]
            if isinstance(node, ast.ClassDef):
                found[node.name] = node
    return found


def dict_string_keys(tree: ast.AST) -> Set[str]:
    keys: Set[str] = set()
    for node in ast.walk(tree):
        if isinstance(node, ast.Dict):
            for key in node.keys:
                if isinstance(key, ast.Constant) and isinstance(key.value, str):
                    keys.add(key.value)
    return keys


def test_every_page_class_is_registered() -> None:
    registry = parse_module(REGISTRY_PATH)
    referenced = {node.id for node in ast.walk(registry.tree) if isinstance(node, ast.Name)}
    missing = sorted(set(page_classes()) - referenced)
    assert not missing, f"Page classes not registered in build_registry: {missing}"


def test_every_page_declares_a_task() -> None:
    classes = page_classes()
    constants = _task_name_constants()
    unresolved = sorted(name for name, node in classes.items() if not page_task_name(node, classes, constants))
    assert not unresolved, f"Page classes without a task_name: {unresolved}"


def test_page_names_are_unique_within_a_task() -> None:
    classes = page_classes()
    constants = _task_name_constants()
    seen: Dict[tuple, str] = {}
    for class_name, node in classes.items():
        key = (page_task_name(node, classes, constants), _class_constant(node, "name"))
        assert key not in seen, f"{class_name} and {seen[key]} share page {key}"
        seen[key] = class_name


def test_every_page_has_catalog_entries() -> None:
    keys = dict_string_keys(parse_module(QUESTIONS_PATH).tree)
    classes = page_classes()
    constants = _task_name_constants()
    missing = []
    for class_name, node in classes.items():
        task = page_task_name(node, classes, constants)
        page = _class_constant(node, "name")
        if task not in keys or page not in keys:
            missing.append(f"{class_name} ({task}/{page})")
    assert not missing, f"Pages missing from the question catalog: {missing}"


def test_registration_has_no_import_side_effects() -> None:
    """Pages are listed explicitly in the registry; no decorators register them."""
    for path in py_files_under(PAGES_DIR):
        for node in ast.walk(parse_module(path).tree):
            if isinstance(node, ast.ClassDef) and node.decorator_list:
                pytest.fail(f"{path.name}:{node.lineno} class {node.name} uses a decorator")


def _assert_no_imports(files: Iterable[Path], forbidden: Set[str]) -> None:
    offenders = []
    for path in files:
        bad = imported_modules(parse_module(path)) & forbidden
        if bad:
            offenders.append(f"{path.relative_to(PROJECT_ROOT)} imports {sorted(bad)}")
    assert not offenders, "; ".join(offenders)


def test_logic_layer_is_framework_free() -> None:
    _assert_no_imports(py_files_under(LOGIC_DIR), {"fastapi", "starlette", "sqlalchemy", "httpx"})


def test_routes_do_not_touch_persistence_directly() -> None:
    _assert_no_imports(py_files_under(ROUTES_DIR), {"sqlalchemy", "httpx"})
