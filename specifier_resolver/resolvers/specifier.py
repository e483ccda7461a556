"""
Specifier classification.

Decides whether an import source is a URL, a built-in module, a file path or
a bare package reference (optionally scoped, optionally with a sub-path).
"""

import re
from typing import Optional

from ..models import Specifier, SpecifierKind
from .builtin_modules import BuiltinModuleRegistry, get_default_registry

URL_PATTERN = re.compile(r'^[^/]+://')
FILE_PATTERN = re.compile(r'^\.?\.?/')
SCOPED_PACKAGE_PATTERN = re.compile(r'^(@[^/]+/[^/]+)([\s\S]*)$')
PACKAGE_PATTERN = re.compile(r'^([^/]+)([\s\S]*)$')


def is_url(text: str) -> bool:
    return bool(URL_PATTERN.match(text))


def is_file_path(text: str) -> bool:
    return text in ('.', '..') or bool(FILE_PATTERN.match(text))


def classify(text: str, registry: Optional[BuiltinModuleRegistry] = None) -> Specifier:
    """
    Classify an import/export specifier.

    URL and file checks are pure string tests and run before the built-in
    lookup, so relative imports never need the built-in module list.

    Args:
        text: The specifier as written in the source
        registry: Built-in module names (defaults to the process-wide registry)

    Returns:
        Specifier tagged with its kind; bare packages carry name and sub-path
    """
    if not text:
        return Specifier(text, SpecifierKind.UNRECOGNIZED)
    if is_url(text):
        return Specifier(text, SpecifierKind.URL)
    if is_file_path(text):
        return Specifier(text, SpecifierKind.FILE_PATH)

    registry = registry or get_default_registry()
    if registry.is_builtin(text):
        return Specifier(text, SpecifierKind.BUILTIN)

    match = SCOPED_PACKAGE_PATTERN.match(text) or PACKAGE_PATTERN.match(text)
    if not match:
        return Specifier(text, SpecifierKind.UNRECOGNIZED)
    return Specifier(
        text,
        SpecifierKind.BARE_PACKAGE,
        package_name=match.group(1),
        sub_path=match.group(2)
    )
