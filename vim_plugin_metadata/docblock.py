"""Doc comment blocks.

A block starts at a `""` line and runs over the following `"` lines at the
same indentation::

    ""
    " Does a thing.
    "
    " Call and enjoy.

Each line loses its leader and at most one space after it, so the block
above reads "Does a thing.\n\nCall and enjoy.".
"""
from typing import NamedTuple, Optional, Sequence

from . import regex
from .lines import Statement


class DocBlock(NamedTuple):
    text: str
    start: int
    end: int  # index of the first statement after the block


def _strip_leader(content: str) -> str:
    return content[1:] if content.startswith(" ") else content


def scan_doc_block(statements: Sequence[Statement], index: int) -> Optional[DocBlock]:
    """Scan the doc block starting at statements[index], if there is one."""
    if index >= len(statements) or not statements[index].is_comment:
        return None
    first = statements[index]
    match = regex.doc_leader.match(first.text)
    if not match:
        return None

    doc_lines = []
    if match.group("rest").strip():
        doc_lines.append(_strip_leader(match.group("rest")))
    end = index + 1
    while end < len(statements):
        statement = statements[end]
        if not statement.is_comment or statement.indent != first.indent:
            break
        doc_lines.append(_strip_leader(statement.text[1:]))
        end += 1
    return DocBlock("\n".join(doc_lines).rstrip(), index, end)
