"""
Package directory lookup through ancestor node_modules folders.
"""

import os
import logging
from pathlib import Path
from typing import List, Optional

from ..exceptions import PackageNotFoundError

logger = logging.getLogger(__name__)

MODULES_DIR = 'node_modules'


def global_module_dirs(environ: Optional[dict] = None) -> List[str]:
    """
    Global folders Node.js searches after the ancestor chain.

    Args:
        environ: Environment mapping (defaults to os.environ)

    Returns:
        NODE_PATH entries followed by $HOME/.node_modules and $HOME/.node_libraries
    """
    environ = os.environ if environ is None else environ
    dirs = [p for p in environ.get('NODE_PATH', '').split(os.pathsep) if p]

    home = environ.get('HOME') or environ.get('USERPROFILE')
    if home:
        dirs.append(os.path.join(home, '.node_modules'))
        dirs.append(os.path.join(home, '.node_libraries'))
    return dirs


def ancestor_module_dirs(from_file: str) -> List[str]:
    """node_modules folders from the importing file's directory up to the root."""
    dirs = []
    current_dir = Path(os.path.abspath(from_file)).parent

    while True:
        # node_modules/node_modules is never searched
        if current_dir.name != MODULES_DIR:
            dirs.append(str(current_dir / MODULES_DIR))

        parent = current_dir.parent
        if parent == current_dir:  # Reached root
            break
        current_dir = parent

    return dirs


def locate_package_dir(name: str, from_file: str, environ: Optional[dict] = None) -> str:
    """
    Find the installed directory of a package, closest ancestor first.

    Args:
        name: Package name, plain or scoped ("@scope/name")
        from_file: Absolute path of the importing file
        environ: Environment mapping used for the global folders

    Returns:
        Absolute path of the package directory

    Raises:
        PackageNotFoundError: if no searched folder contains the package
    """
    searched = ancestor_module_dirs(from_file) + global_module_dirs(environ)

    for modules_dir in searched:
        candidate = os.path.join(modules_dir, name)
        if os.path.isdir(candidate):
            logger.debug(f"Located package {name} at {candidate}")
            return candidate

    raise PackageNotFoundError(name, from_file, searched)
