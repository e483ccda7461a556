"""
Node.js built-in module names.

The name set comes from the runtime the rewritten code will run on: either
an explicit list from the options, or ``require('module').builtinModules``
queried from the ``node`` executable. It is computed once and then frozen.
"""

import os
import json
import logging
import subprocess
import threading
from typing import Callable, FrozenSet, Iterable, List, Optional

from ..exceptions import ConfigurationError

logger = logging.getLogger(__name__)

# Scheme reserved for built-ins (node:fs, node:test, ...)
BUILTIN_PREFIX = 'node:'

NODE_QUERY = "JSON.stringify(require('module').builtinModules)"


def query_node_builtins(node_binary: Optional[str] = None, timeout: float = 10.0) -> List[str]:
    """
    Ask a Node.js executable for its built-in module list.

    Args:
        node_binary: Executable to run (defaults to $NODE_BINARY or ``node``)
        timeout: Seconds to wait for the process

    Returns:
        List of built-in module names

    Raises:
        ConfigurationError: if the executable is missing or its output is unusable
    """
    binary = node_binary or os.environ.get('NODE_BINARY', 'node')
    try:
        completed = subprocess.run(
            [binary, '-p', NODE_QUERY],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=True
        )
    except FileNotFoundError as e:
        raise ConfigurationError(f"Built-in module list unavailable: {binary} not found") from e
    except (subprocess.CalledProcessError, subprocess.TimeoutExpired) as e:
        raise ConfigurationError(f"Built-in module list unavailable: {binary} failed ({e})") from e

    try:
        names = json.loads(completed.stdout)
    except json.JSONDecodeError as e:
        raise ConfigurationError(f"Built-in module list unavailable: bad output from {binary}") from e
    if not isinstance(names, list):
        raise ConfigurationError(f"Built-in module list unavailable: bad output from {binary}")

    logger.debug(f"Loaded {len(names)} built-in module names from {binary}")
    return names


class BuiltinModuleRegistry:
    """Compute-once holder for the built-in module name set."""

    def __init__(self, enumerate_names: Callable[[], Iterable[str]] = query_node_builtins):
        self._enumerate_names = enumerate_names
        self._names: Optional[FrozenSet[str]] = None
        self._lock = threading.Lock()

    @classmethod
    def from_names(cls, names: Iterable[str]) -> 'BuiltinModuleRegistry':
        """Registry over a fixed list (e.g. ``builtinModules`` from the options)."""
        fixed = list(names)
        return cls(lambda: fixed)

    def names(self) -> FrozenSet[str]:
        """Return the name set, enumerating it on first use."""
        if self._names is None:
            with self._lock:
                if self._names is None:
                    self._names = frozenset(self._enumerate_names())
        return self._names

    def is_builtin(self, text: str) -> bool:
        if text.startswith(BUILTIN_PREFIX):
            return True
        return text in self.names()


_default_registry = BuiltinModuleRegistry()


def get_default_registry() -> BuiltinModuleRegistry:
    """Process-wide registry backed by the local ``node`` executable."""
    return _default_registry
