"""Recognize the declarations that carry metadata.

Each recognizer looks at the statement at a given index and, if a declaration
starts there, returns the nodes it produces plus the index where scanning
should resume. Expressions (initializers, defaults) are kept as raw text.
"""
import logging
from typing import List, NamedTuple, Optional, Sequence

from . import regex
from .docblock import scan_doc_block
from .lines import Statement, call_arguments, split_top_level, unquote
from .schemas import Command, Flag, Function, Variable, VimNode

logger = logging.getLogger(__name__)


class Recognized(NamedTuple):
    nodes: List[VimNode]
    end: int


def recognize_declaration(
    statements: Sequence[Statement], index: int, doc: Optional[str] = None
) -> Optional[Recognized]:
    """Return the declaration starting at statements[index], if any.

    doc is attached to every node the declaration produces.
    """
    if index >= len(statements):
        return None
    statement = statements[index]
    if statement.is_blank or statement.is_comment:
        return None
    for recognizer in (_function, _command, _guarded_flag, _flag_call, _assignment):
        result = recognizer(statements, index, doc)
        if result is not None:
            return result
    return None


def _function(statements, index, doc):
    header = statements[index]
    match = regex.function_line.match(header.text)
    if not match:
        return None
    parsed = call_arguments(header.text, match.end() - 1)
    if parsed is None:
        return None
    params, close = parsed
    args = []
    for raw in params:
        arg = regex.function_arg.match(raw)
        if arg:
            args.append(arg.group(0))
    # Trailing keywords: range, dict, abort, closure.
    modifiers = ["!"] if match.group("bang") else []
    modifiers.extend(header.text[close + 1:].split())
    node = Function(name=match.group("name"), args=args, modifiers=modifiers, doc=doc)
    return Recognized([node], _function_end(statements, index))


def _function_end(statements: Sequence[Statement], index: int) -> int:
    """Index just past the endfunction closing the function at index.

    Body lines are skipped without being parsed. The first endfunction on the
    header's own line, or at the header's indentation or less, closes it.
    """
    header = statements[index]
    for position in range(index + 1, len(statements)):
        statement = statements[position]
        if statement.is_comment or not regex.endfunction.match(statement.text):
            continue
        if statement.lineno == header.lineno or statement.indent <= header.indent:
            return position + 1
    logger.debug(
        "No endfunction for function on line %d; consumed to end of input",
        header.lineno,
    )
    return len(statements)


def _command(statements, index, doc):
    match = regex.command_line.match(statements[index].text)
    if not match:
        return None
    node = Command(
        name=match.group("name"),
        modifiers=match.group("attributes").split(),
        doc=doc,
    )
    return Recognized([node], index + 1)


def _guarded_flag(statements, index, doc):
    """if !exists('g:foo') followed by let g:foo = default."""
    match = regex.exists_guard.match(statements[index].text)
    if not match:
        return None
    name = match.group("name") or "g:" + match.group("key")
    position = index + 1
    while position < len(statements):
        statement = statements[position]
        if statement.is_blank:
            position += 1
            continue
        if statement.is_comment:
            block = scan_doc_block(statements, position)
            if block is None:
                position += 1
                continue
            if doc is None:
                doc = block.text
            position = block.end
            continue
        break
    else:
        return None

    assignment = regex.let_line.match(statements[position].text)
    if not assignment or assignment.group("target") != name:
        return None
    value = assignment.group("value").strip()
    node = Flag(name=name, default_value_token=value or None, doc=doc)
    return Recognized([node], position + 1)


def _flag_call(statements, index, doc):
    """call Flag('name', default) and its s:plugin.Flag(...) variants."""
    text = statements[index].text
    call = regex.call_line.match(text)
    if not call:
        return None
    match = regex.flag_call.search(text, call.end())
    if not match:
        return None
    parsed = call_arguments(text, match.end() - 1)
    if parsed is None:
        return None
    args, close = parsed
    if text[close + 1:].strip() or not args:
        return None
    name = unquote(args[0])
    if name is None:
        logger.debug("Flag on line %d has a non-literal name", statements[index].lineno)
        return None
    default = args[1] if len(args) > 1 and args[1] else None
    return Recognized([Flag(name=name, default_value_token=default, doc=doc)], index + 1)


def _get_with_default(value: str) -> Optional[Flag]:
    """get(g:, 'name', default) as the whole right-hand side."""
    match = regex.get_call.match(value)
    if not match:
        return None
    parsed = call_arguments(value, match.end() - 1)
    if parsed is None:
        return None
    args, close = parsed
    if value[close + 1:].strip() or len(args) != 3 or args[0] != "g:":
        return None
    key = unquote(args[1])
    if not key:
        return None
    return Flag(name="g:" + key, default_value_token=args[2])


def _assignment(statements, index, doc):
    match = regex.let_line.match(statements[index].text)
    if not match:
        return None
    target = match.group("target")
    value = match.group("value").strip()
    if not value:
        return None

    if not target.startswith("["):
        flag = _get_with_default(value)
        if flag is not None:
            return Recognized([flag.model_copy(update={"doc": doc})], index + 1)
        return Recognized([Variable(name=target, init_value_token=value, doc=doc)], index + 1)

    names_part, _, rest = target[1:-1].partition(";")
    names = [name for name in split_top_level(names_part) if name]
    items = None
    if value.startswith("[") and not rest.strip():
        literal = call_arguments(value, 0)
        if literal is not None and literal[1] == len(value) - 1 and len(literal[0]) == len(names):
            items = literal[0]
    nodes: List[VimNode] = []
    for i, name in enumerate(names):
        token = items[i] if items is not None else f"{value}[{i}]"
        nodes.append(Variable(name=name, init_value_token=token, doc=doc))
    if rest.strip():
        nodes.append(Variable(name=rest.strip(), init_value_token=f"{value}[{len(names)}:]", doc=doc))
    return Recognized(nodes, index + 1) if nodes else None
