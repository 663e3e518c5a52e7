"""Exception types raised by version_hooks."""


class HookError(RuntimeError):
    """A hook step failed and the git operation should be aborted."""


class ManifestError(HookError):
    """package.json could not be read or written."""


class ManifestNotFoundError(ManifestError):
    """package.json does not exist in the project directory."""
