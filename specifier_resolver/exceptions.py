"""
Custom exceptions for the specifier resolver.

Every error carries a human readable message plus a details dict so callers
(the CLI, a build plugin) can report what was probed.
"""

from typing import Optional


class ResolverError(Exception):
    """Base exception for resolver errors."""

    def __init__(self, message: str, details: dict = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict:
        """Convert to an error report."""
        return {
            'type': self.__class__.__name__,
            'message': self.message,
            'details': self.details
        }


class UnresolvedPathError(ResolverError):
    """A relative or absolute file specifier matched nothing on disk."""

    def __init__(self, resolve_base: str, specifier: str = None):
        super().__init__(
            f"Failed to resolve path: {resolve_base}",
            details={
                'resolve_base': resolve_base,
                'specifier': specifier
            }
        )


class UnresolvedModuleError(ResolverError):
    """A bare package sub-path matched nothing inside the package."""

    def __init__(self, specifier: str, filename: str, resolve_base: str = None):
        super().__init__(
            f"Failed to resolve module: {specifier} (imported from {filename})",
            details={
                'specifier': specifier,
                'filename': filename,
                'resolve_base': resolve_base
            }
        )


class PackageNotFoundError(ResolverError):
    """No node_modules folder reachable from the importing file has the package."""

    def __init__(self, package_name: str, filename: str, searched: Optional[list] = None):
        super().__init__(
            f"Failed to locate package: {package_name} (imported from {filename})",
            details={
                'package_name': package_name,
                'filename': filename,
                'searched': searched or []
            }
        )


class ConfigurationError(ResolverError):
    """Invalid configuration, or the built-in module list is unavailable."""

    def __init__(self, message: str, config_file: str = None):
        super().__init__(
            message,
            details={'config_file': config_file}
        )


class ManifestError(ResolverError):
    """A package.json that had to be read is missing or malformed."""

    def __init__(self, manifest_path: str, reason: str):
        super().__init__(
            f"Failed to read manifest {manifest_path}: {reason}",
            details={
                'manifest_path': manifest_path,
                'reason': reason
            }
        )
