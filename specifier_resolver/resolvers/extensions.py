"""
Extension rules and filesystem extension probing.

Rules come from user options in three shapes:
- '.mjs'                     only accept .mjs
- ['.ts', '.js']             accept .ts, emit .js
- [['.mjs', '.js'], '.js']   accept .mjs then .js, emit .js for both
"""

import os
import stat
import logging
from typing import Any, Iterable, List, Optional, Tuple

from ..exceptions import ConfigurationError
from ..models import ExtensionRule, ExtensionResolution, ResolutionMode

logger = logging.getLogger(__name__)

SEPARATORS = tuple({'/', os.sep})


def _normalize_rule(raw: Any) -> ExtensionRule:
    if isinstance(raw, str):
        return ExtensionRule(sources=(raw,))

    if not isinstance(raw, (list, tuple)) or not 1 <= len(raw) <= 2:
        raise ConfigurationError(f"Invalid extension rule: {raw!r}")

    source = raw[0]
    destination = raw[1] if len(raw) > 1 else None
    if isinstance(source, str):
        sources = (source,)
    elif isinstance(source, (list, tuple)) and source and all(isinstance(s, str) for s in source):
        sources = tuple(source)
    else:
        raise ConfigurationError(f"Invalid extension rule source: {source!r}")
    if destination is not None and not isinstance(destination, str):
        raise ConfigurationError(f"Invalid extension rule destination: {destination!r}")

    return ExtensionRule(sources=sources, destination=destination)


def normalize_rules(raw_rules: Optional[Iterable[Any]]) -> Tuple[ExtensionRule, ...]:
    """
    Normalize user supplied extension rules.

    Args:
        raw_rules: List of strings or [source(s), destination?] pairs, or None

    Returns:
        Tuple of ExtensionRule in declared order

    Raises:
        ConfigurationError: if a rule has an unsupported shape
    """
    if raw_rules is None:
        return ()
    if isinstance(raw_rules, str):
        raise ConfigurationError(f"Extension rules must be a list, got {raw_rules!r}")
    return tuple(
        rule if isinstance(rule, ExtensionRule) else _normalize_rule(rule)
        for rule in raw_rules
    )


def flatten_rules(rules: Iterable[ExtensionRule]) -> List[Tuple[str, str]]:
    """Ordered (source, destination) pairs; destination defaults to the source."""
    pairs = []
    for rule in rules:
        for source in rule.sources:
            pairs.append((source, source if rule.destination is None else rule.destination))
    return pairs


def _stat(path: str) -> Optional[os.stat_result]:
    try:
        return os.stat(path)
    except (OSError, ValueError):
        return None


def _is_file(path: str) -> bool:
    st = _stat(path)
    return st is not None and not stat.S_ISDIR(st.st_mode)


def _search(base: str, pairs: List[Tuple[str, str]]) -> Optional[str]:
    for source, destination in pairs:
        candidate = f"{base}{source}"
        if _is_file(candidate):
            logger.debug(f"Matched {candidate}")
            return destination
    return None


def _search_directory(base: str, pairs: List[Tuple[str, str]]) -> Optional[str]:
    index = 'index' if base.endswith(SEPARATORS) else '/index'
    destination = _search(f"{base}{index}", pairs)
    if destination is None:
        return None
    return f"{index}{destination}"


def _found(suffix: Optional[str]) -> ExtensionResolution:
    if suffix is None:
        return ExtensionResolution.not_found()
    if not suffix:
        return ExtensionResolution.already_correct()
    return ExtensionResolution.with_suffix(suffix)


def resolve_extension(
    base: str,
    rules: Iterable[ExtensionRule],
    mode: ResolutionMode = ResolutionMode.EXPAND
) -> ExtensionResolution:
    """
    Find the extension that makes ``base`` point at an existing file.

    In EXPAND mode an existing file is accepted as is, unless one of the rule
    sources is a literal suffix of it, in which case that extension is
    rewritten to the rule destination. PROBE mode goes straight to the
    extension search.

    For a directory, sibling files (``{base}{ext}``) are tried before
    ``{base}/index{ext}``. A base ending in a separator only tries index.

    Args:
        base: Absolute path to probe, as joined from the specifier
        rules: Normalized extension rules
        mode: ResolutionMode.EXPAND or ResolutionMode.PROBE

    Returns:
        ExtensionResolution (NOT_FOUND, ALREADY_CORRECT or SUFFIX)
    """
    pairs = flatten_rules(rules)
    st = _stat(base)
    is_dir = st is not None and stat.S_ISDIR(st.st_mode)
    is_file = st is not None and not is_dir

    if mode == ResolutionMode.EXPAND and is_file:
        for source, destination in pairs:
            if source and base.endswith(source):
                if destination == source:
                    return ExtensionResolution.already_correct()
                logger.debug(f"Rewriting extension of {base}: {source} -> {destination}")
                return ExtensionResolution.with_suffix(destination, replaces=source)
        return ExtensionResolution.already_correct()

    if base.endswith(SEPARATORS):
        return _found(_search_directory(base, pairs))

    suffix = _search(base, pairs)
    if suffix is None and is_dir:
        suffix = _search_directory(base, pairs)
    if suffix is None and is_file:
        return ExtensionResolution.already_correct()

    if suffix is None:
        logger.debug(f"No extension match for {base}")
    return _found(suffix)
