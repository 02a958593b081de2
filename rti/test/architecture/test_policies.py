from __future__ import annotations

import ast
from dataclasses import dataclass
from pathlib import Path

import pytest


@dataclass(frozen=True, slots=True)
class ImportRef:
    module: str
    line: int


def rti_root() -> Path:
    return Path(__file__).resolve().parents[2]


def iter_python_files(base: Path) -> list[Path]:
    root = rti_root()
    files: list[Path] = []
    for path in sorted(base.rglob("*.py")):
        rel = path.relative_to(root)
        if rel.parts and rel.parts[0] == "test":
            continue
        if any(part == "__pycache__" for part in rel.parts):
            continue
        files.append(path)
    return files


def read_tree(path: Path) -> ast.AST:
    return ast.parse(path.read_text(encoding="utf-8"), filename=str(path))


def parse_imports(path: Path) -> list[ImportRef]:
    imports: list[ImportRef] = []
    for node in ast.walk(read_tree(path)):
        if isinstance(node, ast.Import):
            imports.extend(ImportRef(module=alias.name, line=node.lineno) for alias in node.names)
        elif isinstance(node, ast.ImportFrom) and node.level == 0 and node.module is not None:
            imports.append(ImportRef(module=node.module, line=node.lineno))
    return imports


def matches_prefix(module: str, prefix: str) -> bool:
    return module == prefix or module.startswith(f"{prefix}.")


# package -> packages it must not import
FORBIDDEN_LAYERS = {
    "core": ("rti.platform", "rti.output", "rti.runtimes", "rti.install", "rti.services", "rti.cli"),
    "platform": ("rti.output", "rti.runtimes", "rti.install", "rti.services", "rti.cli"),
    "output": ("rti.runtimes", "rti.install", "rti.services", "rti.cli"),
    "runtimes": ("rti.services", "rti.cli", "rti.output"),
    "install": ("rti.services", "rti.cli", "rti.output"),
    "services": ("rti.cli",),
}


@pytest.mark.parametrize("package", sorted(FORBIDDEN_LAYERS))
def test_import_layers(package: str) -> None:
    root = rti_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root / package):
        rel = file_path.relative_to(root)
        for item in parse_imports(file_path):
            if any(matches_prefix(item.module, p) for p in FORBIDDEN_LAYERS[package]):
                offenders.append(f"{rel}:{item.line}: forbidden import '{item.module}'")

    assert not offenders, f"{package} layering violations:\n" + "\n".join(offenders)


def test_direct_rich_imports_are_limited_to_console() -> None:
    root = rti_root()
    offenders = [
        f"{file_path.relative_to(root)}:{item.line}: direct rich import '{item.module}'"
        for file_path in iter_python_files(root)
        for item in parse_imports(file_path)
        if matches_prefix(item.module, "rich") and file_path.relative_to(root).as_posix() != "output/console.py"
    ]

    assert not offenders, "Direct rich usage policy violations:\n" + "\n".join(offenders)


def test_subprocess_is_limited_to_process_module() -> None:
    root = rti_root()
    offenders: list[str] = []
    for file_path in iter_python_files(root):
        if file_path.relative_to(root).as_posix() == "platform/process.py":
            continue
        for item in parse_imports(file_path):
            if item.module == "subprocess":
                offenders.append(f"{file_path.relative_to(root)}:{item.line}: subprocess import")

    assert not offenders, "Subprocess policy violations:\n" + "\n".join(offenders)
