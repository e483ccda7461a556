"""
Package manifest (package.json) reading and entry point resolution.
"""

import os
import json
import logging
from typing import Any, Dict, Iterable, List, Optional

from ..exceptions import ConfigurationError, ManifestError
from ..models import EntryDescriptor, EntryKind, ResolutionMode
from .extensions import normalize_rules, resolve_extension

logger = logging.getLogger(__name__)

MANIFEST_FILE = 'package.json'
EXPORTS_KEY = 'exports'


def load_manifest(package_dir: str) -> Dict[str, Any]:
    """
    Read a package's package.json.

    Never cached: every call sees the filesystem as it is now.

    Raises:
        ManifestError: if the file is missing, unreadable or not a JSON object
    """
    manifest_path = os.path.join(package_dir, MANIFEST_FILE)
    try:
        with open(manifest_path, 'r', encoding='utf-8') as f:
            data = json.load(f)
    except FileNotFoundError as e:
        raise ManifestError(manifest_path, 'not found') from e
    except json.JSONDecodeError as e:
        raise ManifestError(manifest_path, f'invalid JSON ({e})') from e
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(manifest_path, str(e)) from e

    if not isinstance(data, dict):
        raise ManifestError(manifest_path, 'not a JSON object')
    return data


def has_exports_map(package_dir: str) -> bool:
    """True when the manifest declares an ``exports`` key, whatever its value."""
    return EXPORTS_KEY in load_manifest(package_dir)


def parse_entry_descriptors(raw: Optional[Iterable[Any]]) -> List[EntryDescriptor]:
    """
    Build entry descriptors from option dicts.

    Accepted shapes::

        {"kind": "manifestField", "field": "module", "extensions": [".mjs"]}
        {"kind": "literalPath", "path": "index", "extensions": [".js"]}

    Raises:
        ConfigurationError: for an unknown kind or a missing field/path
    """
    descriptors = []
    for item in raw or []:
        if isinstance(item, EntryDescriptor):
            descriptors.append(item)
            continue
        if not isinstance(item, dict):
            raise ConfigurationError(f"Invalid entry descriptor: {item!r}")

        kind_name = item.get('kind')
        try:
            kind = EntryKind(kind_name)
        except ValueError:
            raise ConfigurationError(f"Unknown entry descriptor kind: {kind_name!r}") from None

        key = 'field' if kind == EntryKind.MANIFEST_FIELD else 'path'
        value = item.get(key)
        if not isinstance(value, str) or not value:
            raise ConfigurationError(f"Entry descriptor {kind_name!r} needs a non-empty {key!r}")

        descriptors.append(EntryDescriptor(
            kind=kind,
            value=value,
            extensions=normalize_rules(item.get('extensions'))
        ))
    return descriptors


def _descriptor_path(package_dir: str, descriptor: EntryDescriptor) -> Optional[str]:
    if descriptor.kind == EntryKind.MANIFEST_FIELD:
        value = load_manifest(package_dir).get(descriptor.value)
        if not isinstance(value, str) or not value:
            logger.debug(f"Manifest field {descriptor.value!r} absent in {package_dir}")
            return None
        return value
    if descriptor.kind == EntryKind.LITERAL_PATH:
        return descriptor.value
    raise ConfigurationError(f"Unknown entry descriptor kind: {descriptor.kind!r}")


def _strip_dot_slash(path: str) -> str:
    while path.startswith('./'):
        path = path[2:]
    return path


def resolve_entry(
    package_dir: str,
    specifier: str,
    descriptors: Iterable[EntryDescriptor],
    ignore_exports: bool = False
) -> str:
    """
    Rewrite a bare package import to its entry file.

    Args:
        package_dir: Located package directory
        specifier: The bare specifier, e.g. "my-pkg" or "@scope/pkg"
        descriptors: Entry descriptors, tried in order
        ignore_exports: Leave the specifier alone when the package has an exports map

    Returns:
        "specifier/path+suffix" for the first descriptor that resolves,
        otherwise the specifier unchanged
    """
    if ignore_exports and has_exports_map(package_dir):
        logger.debug(f"{specifier} declares an exports map, leaving it to the runtime")
        return specifier

    for descriptor in descriptors:
        path = _descriptor_path(package_dir, descriptor)
        if path is None:
            continue

        relative = _strip_dot_slash(path)
        result = resolve_extension(
            os.path.join(package_dir, relative),
            descriptor.extensions,
            ResolutionMode.PROBE
        )
        if result.found:
            return result.apply(f"{specifier}/{relative}")

    logger.debug(f"No entry resolved for {specifier}")
    return specifier
