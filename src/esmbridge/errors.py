# src/esmbridge/errors.py
"""Exceptions raised while generating and running bundler builds.

All of them derive from RuntimeError so the CLI treats them as controlled
terminations rather than internal errors.
"""


class EsmBridgeError(RuntimeError):
    """Base class for errors raised by the bundling core."""

    code: int = 1


class SymbolResolutionError(EsmBridgeError):
    """A package exported with ``symbols: "auto"`` could not be loaded."""

    def __init__(self, pkg_name: str, cause: BaseException | str) -> None:
        self.pkg_name = pkg_name
        self.cause = cause
        xmsg = (
            f"Unable to require('{pkg_name}'): please consider specifying "
            "the exported symbols explicitly in your configuration file.\n"
            f"{cause}"
        )
        super().__init__(xmsg)


class BackendBuildError(EsmBridgeError):
    """The bundling backend failed for one entry."""

    def __init__(
        self,
        entry: str,
        returncode: int | None = None,
        output: str = "",
    ) -> None:
        self.entry = entry
        self.returncode = returncode
        self.output = output
        xmsg = f"Bundling failed for entry {entry!r}"
        if returncode is not None:
            xmsg += f" (exit code {returncode})"
        if output:
            xmsg += f":\n{output.rstrip()}"
        super().__init__(xmsg)
