"""Line-level normalization for vimscript source.

Vimscript lets one command span several physical lines (continuation lines
start with a backslash) and lets one line hold several commands separated by
``|``. Both are resolved here, before any recognition happens, so the
recognizers only ever look at one command at a time.
"""
from typing import Iterator, List, NamedTuple, Optional, Tuple

from . import regex

_BRACKETS = {"(": ")", "[": "]", "{": "}"}


class LogicalLine(NamedTuple):
    lineno: int  # 1-based number of the first physical line
    text: str


class Statement(NamedTuple):
    """One command (or a blank/comment line) with its position."""

    lineno: int
    indent: int
    text: str
    leading: bool  # first command on its line

    @property
    def is_blank(self) -> bool:
        return self.leading and not self.text

    @property
    def is_comment(self) -> bool:
        return self.leading and self.text.startswith('"')


def join_continuations(code: str) -> List[LogicalLine]:
    """Join backslash continuation lines onto the line they continue."""
    lines: List[LogicalLine] = []
    for lineno, raw in enumerate(code.splitlines(), start=1):
        if lines and regex.continuation_comment.match(raw):
            continue
        match = regex.line_continuation.match(raw)
        if match and lines:
            previous = lines[-1]
            lines[-1] = previous._replace(text=previous.text + raw[match.end():])
            continue
        lines.append(LogicalLine(lineno, raw))
    return lines


def _closing_quote(text: str, start: int) -> Optional[int]:
    """Index of the `"` ending the double-quoted string opened at start."""
    i = start + 1
    while i < len(text):
        if text[i] == "\\":
            i += 2
            continue
        if text[i] == '"':
            return i
        i += 1
    return None


def _opens_string(text: str, command_start: int, i: int) -> bool:
    """Whether the `"` at i is in operand position."""
    before = text[command_start:i].strip()
    if not before or not regex.operand_end.search(before):
        return True
    return bool(regex.command_word.match(before))


def strip_comment(text: str) -> str:
    """Drop a trailing `" comment`.

    A double quote starts a string where an operand is expected (after an
    operator, an opening bracket, a comma or the command name) and it's
    closed later on the line. Anywhere else it starts a comment, so
    `let x = 1 " set to "yes"` keeps only `let x = 1`.
    """
    quote = None
    command_start = 0
    i = 0
    while i < len(text):
        char = text[i]
        if quote == "'":
            if char == "'":
                quote = None
        elif quote == '"':
            if char == "\\":
                i += 1
            elif char == '"':
                quote = None
        elif char == "'":
            quote = "'"
        elif char == '"':
            if not _opens_string(text, command_start, i) or _closing_quote(text, i) is None:
                return text[:i].rstrip()
            quote = '"'
        elif char == "|":
            # Not `||` or `\|`.
            if text[i - 1:i] not in ("|", "\\") and text[i + 1:i + 2] != "|":
                command_start = i + 1
        i += 1
    return text


def _unquoted(text: str) -> Iterator[Tuple[int, str]]:
    """Yield (index, char) for every char outside a string literal."""
    quote = None
    i = 0
    while i < len(text):
        char = text[i]
        if quote is None:
            if char in "'\"":
                quote = char
            else:
                yield i, char
        elif char == quote:
            quote = None
        elif quote == '"' and char == "\\":
            i += 1
        i += 1


def split_commands(text: str) -> List[str]:
    """Split a line on `|` command separators.

    `||` (logical or) and `\\|` (escaped bar) don't separate commands.
    """
    text = strip_comment(text)
    commands = []
    start = 0
    skip_to = -1
    for i, char in _unquoted(text):
        if char != "|" or i <= skip_to:
            continue
        if text.startswith("||", i):
            skip_to = i + 1
        elif i and text[i - 1] == "\\":
            continue
        else:
            commands.append(text[start:i].strip())
            start = i + 1
    commands.append(text[start:].strip())
    return commands


def split_top_level(text: str, sep: str = ",") -> List[str]:
    """Split on sep where it's outside strings and brackets."""
    parts = []
    depth = 0
    start = 0
    for i, char in _unquoted(text):
        if char in _BRACKETS:
            depth += 1
        elif char in _BRACKETS.values():
            depth -= 1
        elif char == sep and depth == 0:
            parts.append(text[start:i].strip())
            start = i + 1
    tail = text[start:].strip()
    if tail or parts:
        parts.append(tail)
    return parts


def call_arguments(text: str, open_paren: int) -> Optional[Tuple[List[str], int]]:
    """Split the arguments of the call (or list) opened at open_paren.

    Returns the argument texts and the index of the closing bracket, or None
    if it's never closed.
    """
    depth = 0
    for i, char in _unquoted(text):
        if i < open_paren:
            continue
        if char in _BRACKETS:
            depth += 1
        elif char in _BRACKETS.values():
            depth -= 1
            if depth == 0:
                return split_top_level(text[open_paren + 1:i]), i
    return None


def unquote(literal: str) -> Optional[str]:
    """Value of a vimscript string literal, or None if it isn't one."""
    literal = literal.strip()
    if len(literal) < 2 or literal[0] != literal[-1] or literal[0] not in "'\"":
        return None
    body = literal[1:-1]
    if literal[0] == "'":
        if "'" in body.replace("''", ""):
            return None
        return body.replace("''", "'")
    if _closing_quote(literal, 0) != len(literal) - 1:
        return None
    # Handle \\ first so an escaped backslash can't start another escape.
    body = body.replace("\\\\", "\x00")
    body = body.replace('\\"', '"')
    body = body.replace("\\n", "\n")
    body = body.replace("\\r", "\r")
    body = body.replace("\\t", "\t")
    body = body.replace("\x00", "\\")
    return body


def iter_statements(code: str) -> List[Statement]:
    """Break source into statements, one per command."""
    statements: List[Statement] = []
    for line in join_continuations(code):
        body = line.text.lstrip()
        indent = len(line.text[:len(line.text) - len(body)].expandtabs())
        body = body.rstrip()
        if not body or body.startswith('"') or regex.command_line.match(body):
            statements.append(Statement(line.lineno, indent, body, True))
            continue
        commands = [command for command in split_commands(body) if command]
        for position, command in enumerate(commands):
            statements.append(Statement(line.lineno, indent, command, position == 0))
    return statements
