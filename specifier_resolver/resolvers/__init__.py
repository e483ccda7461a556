"""
Resolver package: the individual stages of specifier resolution.
"""

from .builtin_modules import BuiltinModuleRegistry, get_default_registry, query_node_builtins
from .specifier import classify
from .extensions import normalize_rules, flatten_rules, resolve_extension
from .packages import locate_package_dir
from .manifest import load_manifest, has_exports_map, parse_entry_descriptors, resolve_entry

__all__ = [
    'BuiltinModuleRegistry',
    'get_default_registry',
    'query_node_builtins',
    'classify',
    'normalize_rules',
    'flatten_rules',
    'resolve_extension',
    'locate_package_dir',
    'load_manifest',
    'has_exports_map',
    'parse_entry_descriptors',
    'resolve_entry',
]
