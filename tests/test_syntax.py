import pytest

from jagaimo.syntax import (
    AliasScope,
    Flag,
    ParseError,
    Scope,
    TokenKind,
    TokenStream,
    tokenize,
)


def stream(text):
    return TokenStream(tokenize(text))


def test_tokenize_kinds_and_texts():
    tokens = tokenize("root_name = \"x\"")
    assert [t.kind for t in tokens] == [TokenKind.IDENT, TokenKind.PUNCT, TokenKind.LITERAL]
    assert [t.text for t in tokens] == ["root_name", "=", '"x"']


def test_tokenize_skips_comments():
    tokens = tokenize("a // comment here\n b /* block */ c")
    assert [t.text for t in tokens] == ["a", "b", "c"]


def test_tokenize_nests_groups():
    tokens = tokenize("c { s(history) [ verbose ] }")
    assert [t.kind for t in tokens] == [TokenKind.IDENT, TokenKind.GROUP]
    brace = tokens[1]
    assert brace.text == "{"
    assert [t.text for t in brace.children] == ["s", "(", "["]
    assert [t.text for t in brace.children[1].children] == ["history"]


@pytest.mark.parametrize("text", ["( ]", "(", ")", "{ [ }"])
def test_tokenize_rejects_bad_delimiters(text):
    with pytest.raises(ParseError):
        tokenize(text)


def test_tokenize_rejects_unknown_character():
    with pytest.raises(ParseError):
        tokenize("a ` b")


def test_string_value_plain_and_escaped():
    assert tokenize('"jagaimo_oishii_desu"')[0].string_value == "jagaimo_oishii_desu"
    assert tokenize('"a\\nb"')[0].string_value == "a\nb"


def test_string_value_raw():
    assert tokenize('r#"say "hi""#')[0].string_value == 'say "hi"'


def test_string_value_rejects_non_string():
    with pytest.raises(ParseError):
        tokenize("42")[0].string_value


def test_bool_flag():
    flag = Flag.parse(stream("colored"))
    assert flag == Flag("colored")
    assert not flag.is_parameterized
    assert str(flag) == "colored"


def test_bool_flag_leaves_following_flag():
    s = stream("filter query")
    assert Flag.parse(s) == Flag("filter")
    assert s.expect_ident() == "query"
    assert s.is_empty()


def test_parameterized_flag_display():
    flag = Flag.parse(stream("max<u8>"))
    assert flag.ident == "max"
    assert flag.ty == "u8"
    assert str(flag) == "max<>u8"


def test_nested_generic_flag():
    s = stream("tags<Vec<String>> verbose")
    flag = Flag.parse(s)
    assert flag.ty == "Vec < String >"
    assert Flag.parse(s) == Flag("verbose")
    assert s.is_empty()


def test_flag_without_type_fails():
    with pytest.raises(ParseError):
        Flag.parse(stream("x<>"))


@pytest.mark.parametrize(
    "text",
    ["(String, f64)", "&'a mut str", "[u8; 4]", "std::collections::HashMap<String, Vec<u8>>", "()", "Box<dyn Fn + 'static>"],
)
def test_parse_type_round_trip(text):
    s = stream(text)
    rendered = s.parse_type()
    assert s.is_empty()
    again = stream(rendered)
    assert again.parse_type() == rendered
    assert again.is_empty()


def test_parse_type_stops_before_following_tokens():
    s = stream("(String, f64) show_all")
    s.parse_type()
    assert s.expect_ident() == "show_all"


def test_parse_type_failure_restores_position():
    s = stream("> x")
    with pytest.raises(ParseError):
        s.parse_type()
    assert s.expect_punct(">").text == ">"
    assert s.expect_ident() == "x"


def test_expect_ident_rejects_keywords_but_peek_accepts():
    s = stream("type")
    assert s.peek_ident()
    with pytest.raises(ParseError):
        s.expect_ident()


def test_parse_terminated_idents():
    assert stream("Debug, Clone,").parse_terminated_idents() == ["Debug", "Clone"]
    assert stream("").parse_terminated_idents() == []


def test_parse_terminated_idents_requires_commas():
    with pytest.raises(ParseError):
        stream("Debug Clone").parse_terminated_idents()


def test_fork_is_independent():
    s = stream("a b")
    forked = s.fork()
    assert forked.expect_ident() == "a"
    assert forked.expect_ident() == "b"
    assert forked.is_empty()
    assert s.expect_ident() == "a"


def test_next_on_empty_raises():
    s = stream("x")
    assert s.next().text == "x"
    with pytest.raises(ParseError):
        s.next()


def test_group_contents_are_separate():
    inner = stream("( a , b )").group("(")
    assert inner.parse_terminated_idents() == ["a", "b"]


def test_group_wrong_delimiter_raises():
    with pytest.raises(ParseError):
        stream("( a )").group("[")


def test_expect_literal():
    s = stream('"v" x')
    assert s.expect_literal().string_value == "v"
    with pytest.raises(ParseError):
        s.expect_literal()


@pytest.mark.parametrize("ident,scope", [("s", AliasScope.S), ("o", AliasScope.O), ("f", AliasScope.F)])
def test_alias_scope_from_ident(ident, scope):
    assert AliasScope.from_ident(ident) is scope


def test_alias_scope_rejects_other():
    with pytest.raises(ParseError, match="s, o or f idents"):
        AliasScope.from_ident("c")


def test_scope_root_and_nested():
    assert Scope().is_root
    nested = Scope(space="history", op="view")
    assert not nested.is_root
    assert (nested.space, nested.op) == ("history", "view")