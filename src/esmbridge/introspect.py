# src/esmbridge/introspect.py
"""Discover the exported symbols of a package for ``symbols: "auto"``.

Introspection loads the package in its own runtime, so the result is only as
good as what that runtime observes at build time (getters with side effects,
lazily attached exports and the like are invisible or misleading).
"""

import json
import subprocess
from collections.abc import Mapping
from pathlib import Path
from typing import Protocol

from .constants import DEFAULT_NODE_EXECUTABLE
from .logs import getAppLogger
from .types import SymbolSurface


# argv: [pkgName, basedir]; prints {"keys": [...], "esModule": bool}
NODE_INTROSPECT_SCRIPT = """\
const [pkgName, basedir] = process.argv.slice(1);
const m = require(require.resolve(pkgName, {paths: [basedir]}));
const isObject = m !== null && (typeof m === 'object' || typeof m === 'function');
process.stdout.write(JSON.stringify({
	keys: isObject ? Object.keys(m) : [],
	esModule: Boolean(isObject && m.__esModule),
}));
"""


class IntrospectionError(RuntimeError):
    """A package could not be loaded or its shape could not be read."""


class SymbolIntrospector(Protocol):
    def introspect(self, pkg_name: str) -> SymbolSurface: ...


class NodeSymbolIntrospector:
    """Load the package with Node.js and read its live export object."""

    def __init__(
        self,
        basedir: Path,
        *,
        node: str = DEFAULT_NODE_EXECUTABLE,
    ) -> None:
        self.basedir = basedir
        self.node = node

    def introspect(self, pkg_name: str) -> SymbolSurface:
        logger = getAppLogger()
        logger.trace("[introspect] loading %r from %s", pkg_name, self.basedir)

        try:
            result = subprocess.run(  # noqa: S603
                [self.node, "-e", NODE_INTROSPECT_SCRIPT, pkg_name, str(self.basedir)],
                cwd=self.basedir,
                capture_output=True,
                text=True,
                check=True,
            )
        except FileNotFoundError as e:
            xmsg = f"Node.js executable not found: {self.node}"
            raise IntrospectionError(xmsg) from e
        except subprocess.CalledProcessError as e:
            raise IntrospectionError(e.stderr.strip() or str(e)) from e

        try:
            shape = json.loads(result.stdout)
        except json.JSONDecodeError as e:
            xmsg = f"Unreadable introspection output: {result.stdout[:200]!r}"
            raise IntrospectionError(xmsg) from e

        surface = SymbolSurface(
            names=tuple(dict.fromkeys(shape.get("keys", []))),
            es_module=bool(shape.get("esModule", False)),
        )
        logger.debug(
            "Introspected %s: %d key(s), %s-shaped",
            pkg_name,
            len(surface.names),
            surface.interop_shape,
        )
        return surface


class StaticSymbolIntrospector:
    """Answer from known surfaces, e.g. read from published declaration metadata."""

    def __init__(self, surfaces: Mapping[str, SymbolSurface]) -> None:
        self.surfaces = dict(surfaces)

    def introspect(self, pkg_name: str) -> SymbolSurface:
        try:
            return self.surfaces[pkg_name]
        except KeyError:
            xmsg = f"Cannot find module '{pkg_name}'"
            raise IntrospectionError(xmsg) from None
