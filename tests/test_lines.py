from vim_plugin_metadata.lines import (
    Statement,
    call_arguments,
    iter_statements,
    join_continuations,
    split_commands,
    split_top_level,
    strip_comment,
    unquote,
)


def test_join_continuations_appends_to_previous_line():
    code = "command -nargs=1\n      \\ -bar Foo\n      \\ call Foo()\necho 1"
    lines = join_continuations(code)
    assert [line.text for line in lines] == ["command -nargs=1 -bar Foo call Foo()", "echo 1"]
    assert [line.lineno for line in lines] == [1, 4]


def test_join_continuations_drops_continuation_comments():
    code = 'let x = [\n  "\\ first item\n  \\ 1,\n  \\ 2]'
    assert [line.text for line in join_continuations(code)] == ["let x = [ 1, 2]"]


def test_join_continuations_leading_backslash_stands_alone():
    assert [line.text for line in join_continuations("\\ orphan")] == ["\\ orphan"]


def test_split_commands_on_bars():
    assert split_commands("func F() | endfunc") == ["func F()", "endfunc"]
    assert split_commands("let a = 1 | let b = 2|echo a") == ["let a = 1", "let b = 2", "echo a"]


def test_split_commands_ignores_bars_in_strings_and_operators():
    assert split_commands("let x = 'a|b' || v:true") == ["let x = 'a|b' || v:true"]
    assert split_commands('echo "x | y" | echo 2') == ['echo "x | y"', "echo 2"]
    assert split_commands("nnoremap x a\\|b") == ["nnoremap x a\\|b"]


def test_strip_comment():
    assert strip_comment('let x = 1 " the answer') == "let x = 1"
    assert strip_comment('let x = "str" " comment') == 'let x = "str"'
    assert strip_comment("let x = 'it''s'") == "let x = 'it''s'"


def test_strip_comment_with_quoted_words_in_comment():
    assert strip_comment('let g:mode = 1  " Set to "yes" to enable') == "let g:mode = 1"
    assert strip_comment('let s:f = F(1) " see "help"') == "let s:f = F(1)"
    assert strip_comment('echo "a" | let x = y " a "b"') == 'echo "a" | let x = y'


def test_strip_comment_keeps_strings_in_operand_position():
    assert strip_comment('echo "hi"') == 'echo "hi"'
    assert strip_comment('let x = a . "b"') == 'let x = a . "b"'
    assert strip_comment('let d = {"k": "v"}') == 'let d = {"k": "v"}'
    assert strip_comment('let x = 1 | echo "done"') == 'let x = 1 | echo "done"'


def test_split_top_level_respects_nesting():
    assert split_top_level("'a', [1, 2], {'k': 'v,w'}, f(x, y)") == [
        "'a'",
        "[1, 2]",
        "{'k': 'v,w'}",
        "f(x, y)",
    ]
    assert split_top_level("") == []


def test_call_arguments_finds_closing_paren():
    text = "Flag('name', get(s:, 'x', ')'))"
    args, close = call_arguments(text, 4)
    assert args == ["'name'", "get(s:, 'x', ')')"]
    assert close == len(text) - 1
    assert call_arguments("Flag('unclosed'", 4) is None


def test_unquote():
    assert unquote("'it''s'") == "it's"
    assert unquote('"some\\"\'flag"') == "some\"'flag"
    assert unquote('"a\\\\n"') == "a\\n"
    assert unquote("s:name") is None
    assert unquote("'a' . 'b'") is None


def test_iter_statements_marks_comments_blanks_and_indent():
    code = '""\n" Doc\n\n  let x = 1 | let y = 2\n'
    assert iter_statements(code) == [
        Statement(1, 0, '""', True),
        Statement(2, 0, '" Doc', True),
        Statement(3, 0, "", True),
        Statement(4, 2, "let x = 1", True),
        Statement(4, 2, "let y = 2", False),
    ]


def test_iter_statements_keeps_command_definitions_whole():
    statements = iter_statements("command Foo echo 'a' | echo 'b'")
    assert [s.text for s in statements] == ["command Foo echo 'a' | echo 'b'"]
