"""Tests for option parsing and config file discovery."""

import json

import pytest

from conftest import write_files
from specifier_resolver.config_loader import ConfigLoader, ResolverOptions, load_config
from specifier_resolver.exceptions import ConfigurationError
from specifier_resolver.models import EntryKind, ExtensionRule


def test_defaults():
    options = ResolverOptions.from_dict(None)
    assert options.extensions == ()
    assert options.submodule_extensions is None
    assert options.module_entry == []
    assert options.ignore_unresolved is False
    assert options.ignore_exports is False


def test_from_dict_nested_keys():
    options = ResolverOptions.from_dict({
        'extensions': ['.mjs'],
        'submodule': {'extensions': [['.ts', '.js']], 'ignoreExports': True},
        'module': {'entry': [{'kind': 'manifestField', 'field': 'module', 'extensions': ['.mjs']}]},
        'ignoreUnresolved': True,
        'somethingElse': 1,
    })
    assert options.extensions == (ExtensionRule(('.mjs',)),)
    assert options.submodule_extensions == (ExtensionRule(('.ts',), '.js'),)
    assert options.submodule_ignore_exports is True
    assert options.module_entry[0].kind == EntryKind.MANIFEST_FIELD
    assert options.ignore_unresolved is True


def test_extensions_submodule_alias():
    options = ResolverOptions.from_dict({'extensionsSubmodule': ['.cjs']})
    assert options.submodule_extensions == (ExtensionRule(('.cjs',)),)


def test_contexts_apply_call_site_overrides():
    options = ResolverOptions.from_dict({
        'extensions': ['.js'],
        'ignoreExports': True,
        'submodule': {'ignoreExports': False},
    })
    assert options.submodule_context('/x.mjs').ignore_exports is False
    assert options.submodule_context('/x.mjs').extensions == options.extensions
    assert options.module_context('/x.mjs').ignore_exports is True
    assert options.file_context('/x.mjs').filename == '/x.mjs'


def test_to_dict_round_trips():
    raw = {
        'extensions': ['.mjs', ['.ts', '.js'], [['.a', '.b'], '.c']],
        'module': {'entry': [{'kind': 'literalPath', 'path': 'index', 'extensions': ['.js']}]},
        'submodule': {'extensions': ['.cjs']},
        'builtinModules': ['fs'],
    }
    options = ResolverOptions.from_dict(raw)
    assert ResolverOptions.from_dict(options.to_dict()) == options


def test_invalid_options_raise():
    with pytest.raises(ConfigurationError):
        ResolverOptions.from_dict(['.js'])
    with pytest.raises(ConfigurationError):
        ResolverOptions.from_dict({'module': {'entry': [{'kind': 'bogus'}]}})


def test_loads_json_file(tmp_path):
    write_files(tmp_path, {'.specresolverrc.json': json.dumps({'extensions': ['.js']})})
    assert load_config(tmp_path).extensions == (ExtensionRule(('.js',)),)


def test_loads_yaml_file(tmp_path):
    write_files(tmp_path, {'.specresolverrc.yaml': "extensions:\n  - ['.ts', '.js']\nignoreUnresolved: true\n"})
    options = ConfigLoader.load(str(tmp_path))
    assert options.extensions == (ExtensionRule(('.ts',), '.js'),)
    assert options.ignore_unresolved is True


def test_empty_yaml_gives_defaults(tmp_path):
    write_files(tmp_path, {'.specresolverrc.yml': ''})
    assert ConfigLoader.load(tmp_path) == ResolverOptions()


def test_loads_package_json_key(tmp_path):
    write_files(tmp_path, {'package.json': json.dumps({'name': 'app', 'specresolver': {'extensions': ['.mjs']}})})
    assert ConfigLoader.load(tmp_path).extensions == (ExtensionRule(('.mjs',)),)


def test_rc_file_wins_over_package_json(tmp_path):
    write_files(tmp_path, {
        'package.json': json.dumps({'specresolver': {'extensions': ['.mjs']}}),
        '.specresolverrc.json': json.dumps({'extensions': ['.js']}),
    })
    assert ConfigLoader.load(tmp_path).extensions == (ExtensionRule(('.js',)),)


def test_no_config_gives_defaults(tmp_path):
    write_files(tmp_path, {'package.json': json.dumps({'name': 'app'})})
    assert ConfigLoader.load(tmp_path) == ResolverOptions()


def test_broken_config_raises(tmp_path):
    write_files(tmp_path, {'.specresolverrc.json': '{broken'})
    with pytest.raises(ConfigurationError) as excinfo:
        ConfigLoader.load(tmp_path)
    assert excinfo.value.details['config_file'].endswith('.specresolverrc.json')
