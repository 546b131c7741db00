"""Patterns for recognizing vimscript lines.

All patterns apply to a single command with its indentation already removed
(see lines.Statement), except the two continuation patterns which look at
raw physical lines and the operand patterns used by lines.strip_comment.
"""
import re

line_continuation = re.compile(r'^\s*\\')
# A `"\ ` line is a comment that's allowed in the middle of a continuation.
continuation_comment = re.compile(r'^\s*"\\ ')

# `""` introduces a doc block. Anything after it is the block's first line.
doc_leader = re.compile(r'^""(?P<rest>.*)$')

# A `"` right after a complete operand starts a comment, not a string...
operand_end = re.compile(r'''[\w)\]}'"]$''')
# ...unless that operand is just the command name, as in `echo "hi"`.
command_word = re.compile(r'^[A-Za-z]\w*!?$')

function_line = re.compile(r"""
  # fu[nction]
  ^fu(?:n|nc|nct|ncti|nctio|nction)?
  # Separation, with an optional bang.
  (?:\s*(?P<bang>!)\s*|\s+)
  # Plain, script-local, autoload (foo#bar#Baz) or dict (l:obj.Method) names.
  (?P<name>(?:<[sS][iI][dD]>)?[\w:\#.{}]+)
  # Opening paren of the parameter list. Defaults may hold nested calls, so
  # the closing paren is found by bracket matching, not here.
  \s*\(
""", re.VERBOSE)
function_arg = re.compile(r'\.\.\.|[a-zA-Z_]\w*')
endfunction = re.compile(r'^endf(?:u|un|unc|unct|uncti|unctio|unction)?(?!\w)')

command_line = re.compile(r"""
  # com[mand]
  ^com(?:m|ma|man|mand)?
  # Separation, with an optional bang.
  (?:\s*(?P<bang>!)\s*|\s+)
  # Attributes like -nargs=* or -bang, each followed by whitespace.
  (?P<attributes>(?:-\S+\s+)*)
  (?P<name>[A-Za-z]\w*)
  (?=\s|$)
""", re.VERBOSE)

let_line = re.compile(r"""
  ^(?:let|cons|const)\s+
  (?P<target>
    # Destructuring: [a, b; rest]
    \[[^\]]*\]
    # A single, possibly scoped, name with optional .key or [index] parts.
  | [\w:\#{}]+(?:\.[\w{}]+|\[[^\]]*\])*
  )
  # Plain assignment only; +=, .= and friends don't declare anything.
  \s*=(?![=~])
  (?P<value>.*)$
""", re.VERBOSE)

exists_guard = re.compile(r"""
  ^if\s*!\s*
  (?:
    exists\s*\(\s*(?P<q1>['"])(?P<name>g:[\w\#{}.]+)(?P=q1)
  | has_key\s*\(\s*g:\s*,\s*(?P<q2>['"])(?P<key>[\w\#{}.]+)(?P=q2)
  )
  \s*\)\s*$
""", re.VERBOSE)

call_line = re.compile(r'^cal(?:l)?\s+')
# Flag(, s:plugin.Flag(, Get('x').Flag( or ['Flag']( but not foo#Flag(.
flag_call = re.compile(r"""
  (?:(?<![\w\#])Flag|\[\s*(?P<quote>['"])Flag(?P=quote)\s*\])
  \s*\(
""", re.VERBOSE)
get_call = re.compile(r'^get\s*\(')
