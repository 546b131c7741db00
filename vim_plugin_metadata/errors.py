"""Errors raised by vim_plugin_metadata.

Parsing never raises: malformed vimscript just produces fewer nodes. Only
failures to read the input surface as exceptions.
"""


class Error(Exception):
    """Base class for vim_plugin_metadata errors."""


class ModuleReadError(Error):
    """A source file couldn't be read (or decoded)."""

    message = "Cannot read {path}: {reason}"

    def __init__(self, path, reason):
        self.path = path
        self.reason = reason
        super().__init__(self.message.format(path=path, reason=reason))


class PluginRootError(ModuleReadError):
    """The plugin root is missing or isn't a directory."""

    message = "Not a plugin directory: {path} ({reason})"
