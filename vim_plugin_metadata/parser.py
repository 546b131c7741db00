import logging
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Tuple, Union

from .docblock import scan_doc_block
from .errors import ModuleReadError
from .lines import Statement, iter_statements
from .recognizer import recognize_declaration
from .schemas import StandaloneDocComment, VimModule, VimNode, VimPlugin

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def read_text(path: PathLike) -> str:
    with open(path, 'r', encoding='utf-8') as f:
        return f.read()


def _skip_blank(statements: Sequence[Statement], index: int) -> int:
    while index < len(statements) and statements[index].is_blank:
        index += 1
    return index


def parse_statements(statements: Sequence[Statement]) -> Tuple[Optional[str], List[VimNode]]:
    """Turn statements into (module doc, nodes).

    A doc block attaches to a declaration that follows it, with only blank
    lines allowed in between. Otherwise it's standalone, and the first
    standalone block seen before any node becomes the module doc.
    """
    module_doc: Optional[str] = None
    nodes: List[VimNode] = []

    def emit_standalone(text: str):
        nonlocal module_doc
        if module_doc is None and not nodes:
            module_doc = text
        else:
            nodes.append(StandaloneDocComment(doc=text))

    index = 0
    while index < len(statements):
        block = scan_doc_block(statements, index)
        if block is None:
            declaration = recognize_declaration(statements, index)
            if declaration is None:
                index += 1
            else:
                nodes.extend(declaration.nodes)
                index = declaration.end
            continue

        after = _skip_blank(statements, block.end)
        declaration = recognize_declaration(statements, after, doc=block.text)
        if declaration is None:
            emit_standalone(block.text)
            index = after
        else:
            nodes.extend(declaration.nodes)
            index = declaration.end
    return module_doc, nodes


def _parse(code: str, path: Optional[PathLike] = None) -> VimModule:
    doc, nodes = parse_statements(iter_statements(code))
    return VimModule(path=Path(path) if path is not None else None, doc=doc, nodes=nodes)


def parse_module_from_text(code: str) -> VimModule:
    """Parse vimscript source held in memory. The module has no path."""
    return _parse(code)


def parse_module_from_file(path: PathLike, read: Callable[[PathLike], str] = read_text) -> VimModule:
    """Parse one vimscript file.

    Raises ModuleReadError if read fails; parsing itself never does.
    """
    try:
        code = read(path)
    except (OSError, UnicodeDecodeError) as e:
        raise ModuleReadError(path, e) from e
    return _parse(code, path)


class VimParser:
    """Entry points for parsing vim plugins, modules and snippets."""

    @staticmethod
    def parse_module_str(code: str) -> VimModule:
        return parse_module_from_text(code)

    @staticmethod
    def parse_module_file(path: PathLike) -> VimModule:
        return parse_module_from_file(path)

    @staticmethod
    def parse_plugin_dir(path: PathLike, settings=None) -> VimPlugin:
        from .collector import parse_plugin_directory

        return parse_plugin_directory(path, settings=settings)
