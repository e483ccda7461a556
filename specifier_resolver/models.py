"""
Data models for the specifier resolver.
"""

from enum import Enum
from dataclasses import dataclass, field, replace
from typing import Optional, Tuple


class SpecifierKind(Enum):
    """Classification of an import/export specifier."""
    URL = "url"
    BUILTIN = "builtin"
    FILE_PATH = "file_path"
    BARE_PACKAGE = "bare_package"
    UNRECOGNIZED = "unrecognized"


class ResolutionMode(Enum):
    """How the filesystem extension resolver treats its base path."""
    EXPAND = "expand"  # base may already be a complete path (relative imports)
    PROBE = "probe"    # base is known to be extensionless (package sub-paths, entries)


class ResolutionStatus(Enum):
    """Outcome of an extension search."""
    NOT_FOUND = "not_found"
    ALREADY_CORRECT = "already_correct"
    SUFFIX = "suffix"


class EntryKind(Enum):
    """Where a package entry descriptor takes its path from."""
    MANIFEST_FIELD = "manifestField"
    LITERAL_PATH = "literalPath"


class DeclarationKind(Enum):
    """Statements that carry a module source."""
    IMPORT = "import"
    EXPORT_ALL = "export_all"
    EXPORT_NAMED = "export_named"
    DYNAMIC_IMPORT = "dynamic_import"


@dataclass(frozen=True)
class Specifier:
    """A classified specifier string."""
    text: str
    kind: SpecifierKind
    package_name: Optional[str] = None  # "name" or "@scope/name"
    sub_path: str = ""  # remainder after the package name, e.g. "/lib/bar"

    @property
    def is_package_root(self) -> bool:
        return self.kind == SpecifierKind.BARE_PACKAGE and not self.sub_path


@dataclass(frozen=True)
class ExtensionRule:
    """
    One extension matching rule.

    ``sources`` are tried in order; ``destination`` replaces whichever source
    matched, or ``None`` to keep the matched source verbatim.
    """
    sources: Tuple[str, ...]
    destination: Optional[str] = None


@dataclass(frozen=True)
class EntryDescriptor:
    """A candidate package entry point, from a manifest field or a literal path."""
    kind: EntryKind
    value: str
    extensions: Tuple[ExtensionRule, ...] = ()


@dataclass(frozen=True)
class ExtensionResolution:
    """
    Tri-state result of :func:`resolve_extension`.

    NOT_FOUND means the search found nothing, ALREADY_CORRECT means the
    specifier needs no change, SUFFIX means ``replaces`` (possibly empty) is
    stripped from the end of the specifier and ``suffix`` appended.
    """
    status: ResolutionStatus
    suffix: str = ""
    replaces: str = ""

    @classmethod
    def not_found(cls) -> 'ExtensionResolution':
        return cls(ResolutionStatus.NOT_FOUND)

    @classmethod
    def already_correct(cls) -> 'ExtensionResolution':
        return cls(ResolutionStatus.ALREADY_CORRECT)

    @classmethod
    def with_suffix(cls, suffix: str, replaces: str = "") -> 'ExtensionResolution':
        return cls(ResolutionStatus.SUFFIX, suffix=suffix, replaces=replaces)

    @property
    def found(self) -> bool:
        return self.status != ResolutionStatus.NOT_FOUND

    def apply(self, specifier: str) -> str:
        """Return ``specifier`` rewritten by this result."""
        if self.status != ResolutionStatus.SUFFIX:
            return specifier
        if self.replaces and specifier.endswith(self.replaces):
            specifier = specifier[:-len(self.replaces)]
        return specifier + self.suffix


@dataclass(frozen=True)
class ResolutionContext:
    """Per-declaration bundle of the importing file and the active policy."""
    filename: str
    extensions: Tuple[ExtensionRule, ...] = ()
    ignore_unresolved: bool = False
    ignore_exports: bool = False


@dataclass
class Declaration:
    """An import/export statement as seen by the syntax-tree host."""
    kind: DeclarationKind
    source: Optional[str] = None  # None for `export { a }` without `from`
    line_number: int = 0
    metadata: dict = field(default_factory=dict)

    def with_source(self, source: str) -> 'Declaration':
        return replace(self, source=source)
