"""
Specifier Resolver Package

Rewrites ES module import/export specifiers to concrete, extension-qualified
paths using Node.js style node_modules resolution.
"""

from .models import (
    Declaration, DeclarationKind, EntryDescriptor, EntryKind, ExtensionResolution,
    ExtensionRule, ResolutionContext, ResolutionMode, ResolutionStatus, Specifier, SpecifierKind
)
from .exceptions import (
    ResolverError, UnresolvedPathError, UnresolvedModuleError,
    PackageNotFoundError, ConfigurationError, ManifestError
)
from .config_loader import ResolverOptions, ConfigLoader, load_config
from .rewriter import DeclarationRewriter, rewrite_specifier

__all__ = [
    'Declaration', 'DeclarationKind', 'EntryDescriptor', 'EntryKind', 'ExtensionResolution',
    'ExtensionRule', 'ResolutionContext', 'ResolutionMode', 'ResolutionStatus', 'Specifier',
    'SpecifierKind',
    'ResolverError', 'UnresolvedPathError', 'UnresolvedModuleError',
    'PackageNotFoundError', 'ConfigurationError', 'ManifestError',
    'ResolverOptions', 'ConfigLoader', 'load_config',
    'DeclarationRewriter', 'rewrite_specifier',
]
