from .schemas import (
    Command,
    Flag,
    Function,
    StandaloneDocComment,
    Variable,
    VimModule,
    VimNode,
    VimPlugin,
    node_doc,
)
from .errors import Error, ModuleReadError, PluginRootError
from .settings import ScanSettings
from .parser import VimParser, parse_module_from_file, parse_module_from_text, read_text
from .collector import DirEntry, iter_plugin_files, list_directory, parse_plugin_directory

__all__ = [
    "Command",
    "DirEntry",
    "Error",
    "Flag",
    "Function",
    "ModuleReadError",
    "PluginRootError",
    "ScanSettings",
    "StandaloneDocComment",
    "Variable",
    "VimModule",
    "VimNode",
    "VimParser",
    "VimPlugin",
    "iter_plugin_files",
    "list_directory",
    "node_doc",
    "parse_module_from_file",
    "parse_module_from_text",
    "parse_plugin_directory",
    "read_text",
]
