"""
Configuration loader for the specifier resolver.

Options use the camelCase keys a JavaScript build config would carry, either
nested (``{"submodule": {"extensions": [...]}}``) or dotted
(``{"submodule.extensions": [...]}``). They are loaded from a
.specresolverrc.json/.yaml/.yml file or a "specresolver" key in package.json.
"""

import json
import yaml
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union
from dataclasses import dataclass, field

from .exceptions import ConfigurationError
from .models import EntryDescriptor, EntryKind, ExtensionRule, ResolutionContext
from .resolvers.extensions import normalize_rules
from .resolvers.manifest import parse_entry_descriptors

logger = logging.getLogger(__name__)


def _lookup(data: Dict[str, Any], *keys: str) -> Any:
    """First present value among dotted keys, checking nested dicts too."""
    for key in keys:
        if key in data:
            return data[key]
        head, _, tail = key.partition('.')
        if tail and isinstance(data.get(head), dict) and tail in data[head]:
            return data[head][tail]
    return None


def _rule_to_raw(rule: ExtensionRule) -> Union[str, list]:
    if rule.destination is None and len(rule.sources) == 1:
        return rule.sources[0]
    source = rule.sources[0] if len(rule.sources) == 1 else list(rule.sources)
    return [source] if rule.destination is None else [source, rule.destination]


@dataclass
class ResolverOptions:
    """User options for specifier rewriting."""

    # Rules for relative/absolute file specifiers
    extensions: Tuple[ExtensionRule, ...] = ()

    # Rules for bare package sub-paths (falls back to `extensions`)
    submodule_extensions: Optional[Tuple[ExtensionRule, ...]] = None

    # Entry descriptors for bare package roots, tried in order
    module_entry: List[EntryDescriptor] = field(default_factory=list)

    ignore_unresolved: bool = False

    # Default for both call sites; each may override it
    ignore_exports: bool = False
    submodule_ignore_exports: Optional[bool] = None
    module_ignore_exports: Optional[bool] = None

    # Explicit built-in module names, instead of asking `node`
    builtin_modules: Optional[List[str]] = None

    def file_context(self, filename: str) -> ResolutionContext:
        return ResolutionContext(
            filename=filename,
            extensions=self.extensions,
            ignore_unresolved=self.ignore_unresolved,
            ignore_exports=self.ignore_exports
        )

    def submodule_context(self, filename: str) -> ResolutionContext:
        extensions = self.extensions if self.submodule_extensions is None else self.submodule_extensions
        ignore_exports = self.ignore_exports if self.submodule_ignore_exports is None else self.submodule_ignore_exports
        return ResolutionContext(
            filename=filename,
            extensions=extensions,
            ignore_unresolved=self.ignore_unresolved,
            ignore_exports=ignore_exports
        )

    def module_context(self, filename: str) -> ResolutionContext:
        ignore_exports = self.ignore_exports if self.module_ignore_exports is None else self.module_ignore_exports
        return ResolutionContext(
            filename=filename,
            ignore_unresolved=self.ignore_unresolved,
            ignore_exports=ignore_exports
        )

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase option dict accepted by from_dict."""
        data = {
            'extensions': [_rule_to_raw(r) for r in self.extensions],
            'ignoreUnresolved': self.ignore_unresolved,
            'ignoreExports': self.ignore_exports,
            'module': {
                'entry': [
                    {
                        'kind': d.kind.value,
                        ('field' if d.kind == EntryKind.MANIFEST_FIELD else 'path'): d.value,
                        'extensions': [_rule_to_raw(r) for r in d.extensions]
                    }
                    for d in self.module_entry
                ]
            },
            'submodule': {}
        }
        if self.submodule_extensions is not None:
            data['submodule']['extensions'] = [_rule_to_raw(r) for r in self.submodule_extensions]
        if self.submodule_ignore_exports is not None:
            data['submodule']['ignoreExports'] = self.submodule_ignore_exports
        if self.module_ignore_exports is not None:
            data['module']['ignoreExports'] = self.module_ignore_exports
        if self.builtin_modules is not None:
            data['builtinModules'] = list(self.builtin_modules)
        return data

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> 'ResolverOptions':
        """
        Create from an option dict, ignoring unknown keys.

        Raises:
            ConfigurationError: if a rule or entry descriptor is malformed
        """
        data = data or {}
        if not isinstance(data, dict):
            raise ConfigurationError(f"Options must be a mapping, got {type(data).__name__}")

        submodule_raw = _lookup(data, 'extensionsSubmodule', 'submodule.extensions')
        builtins_raw = data.get('builtinModules')
        return cls(
            extensions=normalize_rules(data.get('extensions')),
            submodule_extensions=None if submodule_raw is None else normalize_rules(submodule_raw),
            module_entry=parse_entry_descriptors(_lookup(data, 'module.entry')),
            ignore_unresolved=bool(data.get('ignoreUnresolved', False)),
            ignore_exports=bool(data.get('ignoreExports', False)),
            submodule_ignore_exports=_optional_bool(_lookup(data, 'submodule.ignoreExports')),
            module_ignore_exports=_optional_bool(_lookup(data, 'module.ignoreExports')),
            builtin_modules=None if builtins_raw is None else list(builtins_raw)
        )


def _optional_bool(value: Any) -> Optional[bool]:
    return None if value is None else bool(value)


class ConfigLoader:
    """Finds and loads resolver options for a project."""

    CONFIG_FILES = [
        '.specresolverrc.json',
        '.specresolverrc.yaml',
        '.specresolverrc.yml',
    ]

    PACKAGE_JSON_KEY = 'specresolver'

    @classmethod
    def load(cls, project_path: Union[str, Path]) -> ResolverOptions:
        """
        Load options from a project directory.

        Priority:
        1. .specresolverrc.json / .yaml / .yml
        2. "specresolver" key in package.json
        3. Defaults

        Args:
            project_path: Path to project root

        Returns:
            ResolverOptions
        """
        if isinstance(project_path, str):
            project_path = Path(project_path)

        for config_file in cls.CONFIG_FILES:
            config_path = project_path / config_file
            if config_path.exists():
                logger.info(f"Loading config from: {config_path}")
                return cls.load_file(config_path)

        package_json = project_path / 'package.json'
        if package_json.exists():
            data = cls._read(package_json)
            if isinstance(data, dict) and cls.PACKAGE_JSON_KEY in data:
                logger.info(f"Loading config from: {package_json} ({cls.PACKAGE_JSON_KEY})")
                return ResolverOptions.from_dict(data[cls.PACKAGE_JSON_KEY])

        logger.info("No config file found, using defaults")
        return ResolverOptions()

    @classmethod
    def load_file(cls, config_path: Union[str, Path]) -> ResolverOptions:
        """Load options from a JSON or YAML file."""
        config_path = Path(config_path)
        return ResolverOptions.from_dict(cls._read(config_path))

    @staticmethod
    def _read(config_path: Path) -> Any:
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if config_path.suffix in ['.yaml', '.yml']:
                    return yaml.safe_load(f) or {}
                return json.load(f)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ConfigurationError(f"Failed to parse config file: {e}", str(config_path)) from e
        except OSError as e:
            raise ConfigurationError(f"Failed to read config file: {e}", str(config_path)) from e


def load_config(project_path: Union[str, Path]) -> ResolverOptions:
    """Shorthand for ConfigLoader.load()"""
    return ConfigLoader.load(project_path)
