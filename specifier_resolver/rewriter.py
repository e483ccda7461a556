"""
Declaration rewriting: route each specifier through classification,
package lookup and extension probing, and apply the unresolved policy.
"""

import os
import logging
from typing import Iterable, List, Optional

from .config_loader import ResolverOptions
from .exceptions import UnresolvedModuleError, UnresolvedPathError
from .models import Declaration, ResolutionMode, Specifier, SpecifierKind
from .resolvers.builtin_modules import BuiltinModuleRegistry, get_default_registry
from .resolvers.extensions import resolve_extension
from .resolvers.manifest import has_exports_map, resolve_entry
from .resolvers.packages import locate_package_dir
from .resolvers.specifier import classify

logger = logging.getLogger(__name__)


class DeclarationRewriter:
    """Rewrites import/export specifiers to extension-qualified paths."""

    def __init__(
        self,
        options: Optional[ResolverOptions] = None,
        registry: Optional[BuiltinModuleRegistry] = None,
        environ: Optional[dict] = None
    ):
        """
        Initialize the rewriter.

        Args:
            options: Resolver options (defaults to ResolverOptions())
            registry: Built-in module names; built from options.builtin_modules
                when given, otherwise the process-wide registry
            environ: Environment for global module folders (defaults to os.environ)
        """
        self.options = options or ResolverOptions()
        if registry is None:
            if self.options.builtin_modules is not None:
                registry = BuiltinModuleRegistry.from_names(self.options.builtin_modules)
            else:
                registry = get_default_registry()
        self.registry = registry
        self.environ = environ

    def rewrite(self, specifier: str, filename: str) -> str:
        """
        Compute the replacement for one specifier.

        Args:
            specifier: Source string of the import/export
            filename: Absolute path of the file containing it

        Returns:
            The rewritten specifier, or the original when nothing applies

        Raises:
            UnresolvedPathError: file specifier unmatched and ignore_unresolved is off
            UnresolvedModuleError: package sub-path unmatched and ignore_unresolved is off
            PackageNotFoundError: the named package is not installed anywhere reachable
            ManifestError: a package.json needed for the decision is missing or invalid
            ConfigurationError: the built-in module list is unavailable
        """
        parsed = classify(specifier, self.registry)

        if parsed.kind == SpecifierKind.FILE_PATH:
            resolved = self._rewrite_file_path(parsed, filename)
        elif parsed.kind == SpecifierKind.BARE_PACKAGE and parsed.sub_path:
            resolved = self._rewrite_submodule(parsed, filename)
        elif parsed.kind == SpecifierKind.BARE_PACKAGE:
            resolved = self._rewrite_module(parsed, filename)
        else:
            return specifier

        if resolved != specifier:
            logger.info(f"{filename}: {specifier} -> {resolved}")
        return resolved

    def _rewrite_file_path(self, parsed: Specifier, filename: str) -> str:
        context = self.options.file_context(filename)
        resolve_base = os.path.join(os.path.dirname(context.filename), parsed.text)

        result = resolve_extension(resolve_base, context.extensions, ResolutionMode.EXPAND)
        if not result.found:
            if not context.ignore_unresolved:
                raise UnresolvedPathError(resolve_base, parsed.text)
            logger.warning(f"{filename}: leaving unresolved path {parsed.text}")
            return parsed.text
        return result.apply(parsed.text)

    def _rewrite_submodule(self, parsed: Specifier, filename: str) -> str:
        context = self.options.submodule_context(filename)
        package_dir = locate_package_dir(parsed.package_name, context.filename, self.environ)

        if context.ignore_exports and has_exports_map(package_dir):
            logger.debug(f"{parsed.package_name} declares an exports map, leaving {parsed.text}")
            return parsed.text

        resolve_base = f"{package_dir}{parsed.sub_path}"
        result = resolve_extension(resolve_base, context.extensions, ResolutionMode.PROBE)
        if not result.found:
            if not context.ignore_unresolved:
                raise UnresolvedModuleError(parsed.text, filename, resolve_base)
            logger.warning(f"{filename}: leaving unresolved module {parsed.text}")
            return parsed.text
        return result.apply(parsed.text)

    def _rewrite_module(self, parsed: Specifier, filename: str) -> str:
        context = self.options.module_context(filename)
        package_dir = locate_package_dir(parsed.package_name, context.filename, self.environ)
        return resolve_entry(
            package_dir,
            parsed.text,
            self.options.module_entry,
            ignore_exports=context.ignore_exports
        )

    def rewrite_declaration(self, declaration: Declaration, filename: str) -> Declaration:
        """Return the declaration with its source rewritten; sourceless ones pass through."""
        if declaration.source is None:
            return declaration
        resolved = self.rewrite(declaration.source, filename)
        if resolved == declaration.source:
            return declaration
        return declaration.with_source(resolved)

    def rewrite_all(self, declarations: Iterable[Declaration], filename: str) -> List[Declaration]:
        return [self.rewrite_declaration(d, filename) for d in declarations]


def rewrite_specifier(specifier: str, filename: str, options: Optional[dict] = None) -> str:
    """One-shot helper taking a raw option dict."""
    return DeclarationRewriter(ResolverOptions.from_dict(options)).rewrite(specifier, filename)
