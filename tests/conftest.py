"""
Shared fixtures: a fixed built-in module list and helpers to lay out
source trees and node_modules packages under tmp_path.
"""

import json
from pathlib import Path
from typing import Dict, Optional

import pytest

from specifier_resolver.resolvers import builtin_modules
from specifier_resolver.resolvers.builtin_modules import BuiltinModuleRegistry

NODE_BUILTINS = [
    'assert', 'buffer', 'child_process', 'crypto', 'events', 'fs', 'fs/promises',
    'http', 'https', 'module', 'net', 'os', 'path', 'stream', 'url', 'util', 'zlib',
]


@pytest.fixture(autouse=True)
def fixed_builtins(monkeypatch):
    """Never depend on a local `node` install."""
    registry = BuiltinModuleRegistry.from_names(NODE_BUILTINS)
    monkeypatch.setattr(builtin_modules, '_default_registry', registry)
    return registry


def write_files(root: Path, files: Dict[str, str]) -> Path:
    for relative, content in files.items():
        path = root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content, encoding='utf-8')
    return root


def install_package(
    modules_root: Path,
    name: str,
    manifest: Optional[dict] = None,
    files: Optional[Dict[str, str]] = None
) -> Path:
    """Create node_modules/<name> under modules_root."""
    package_dir = modules_root / 'node_modules' / name
    package_dir.mkdir(parents=True, exist_ok=True)
    if manifest is not None:
        (package_dir / 'package.json').write_text(json.dumps(manifest), encoding='utf-8')
    write_files(package_dir, files or {})
    return package_dir


@pytest.fixture
def project(tmp_path):
    """A project root with src/import.mjs as the importing file."""
    write_files(tmp_path, {'src/import.mjs': "import {foo} from './bar';\n"})
    return tmp_path


@pytest.fixture
def importer(project):
    return str(project / 'src' / 'import.mjs')
