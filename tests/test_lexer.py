import pytest

from parteescript.lexer import Lexer, Token, TokenType, token_type_name


def kinds(source):
    return [token.type for token in Lexer(source).tokenize()]


def values(source):
    return [token.value for token in Lexer(source).tokenize()[:-1]]


def test_empty_source_yields_only_eof():
    tokens = Lexer("").tokenize()
    assert len(tokens) == 1
    assert tokens[0].type is TokenType.END_OF_FILE
    assert tokens[0].value == ""


def test_whitespace_and_comments_only_yield_eof():
    assert kinds("   # a comment\n\t# another\n  ") == [TokenType.END_OF_FILE]


@pytest.mark.parametrize(
    "word, expected",
    [
        ("use", TokenType.KW_USE),
        ("for", TokenType.KW_FOR),
        ("in", TokenType.KW_IN),
        ("if", TokenType.KW_IF),
        ("else", TokenType.KW_ELSE),
        ("elif", TokenType.KW_ELSE_IF),
        ("end", TokenType.KW_END),
        ("function", TokenType.KW_FUNCTION),
        ("while", TokenType.KW_WHILE),
        ("continue", TokenType.KW_CONTINUE),
        ("break", TokenType.KW_BREAK),
        ("return", TokenType.KW_RETURN),
        ("match", TokenType.KW_SWITCH),
        ("case", TokenType.KW_CASE),
        ("default", TokenType.KW_DEFAULT),
        ("on", TokenType.KW_ON),
        ("and", TokenType.KW_AND),
        ("or", TokenType.KW_OR),
        ("not", TokenType.KW_NOT),
        ("true", TokenType.KW_TRUE),
        ("false", TokenType.KW_FALSE),
        ("null", TokenType.KW_NULL),
    ],
)
def test_keywords(word, expected):
    token = Lexer(word).next_token()
    assert token.type is expected
    assert token.value == word


@pytest.mark.parametrize("word", ["switch", "useful", "_end", "End", "x1_y"])
def test_non_keywords_are_identifiers(word):
    token = Lexer(word).next_token()
    assert token.type is TokenType.IDENTIFIER
    assert token.value == word


@pytest.mark.parametrize(
    "text, expected",
    [
        ("=", TokenType.OP_ASSIGN),
        ("==", TokenType.OP_EQUAL),
        ("!=", TokenType.OP_NOT_EQUAL),
        ("<", TokenType.OP_LESS),
        ("<=", TokenType.OP_LESS_EQUAL),
        (">", TokenType.OP_GREATER),
        (">=", TokenType.OP_GREATER_EQUAL),
        ("+", TokenType.OP_PLUS),
        ("+=", TokenType.OP_PLUS_ASSIGN),
        ("++", TokenType.OP_INCREMENT),
        ("-", TokenType.OP_MINUS),
        ("-=", TokenType.OP_MINUS_ASSIGN),
        ("--", TokenType.OP_DECREMENT),
        ("*", TokenType.OP_STAR),
        ("**", TokenType.OP_POWER),
        ("/", TokenType.OP_SLASH),
        ("%", TokenType.OP_PERCENT),
        ("%=", TokenType.OP_PERCENT_ASSIGN),
        (".", TokenType.OP_DOT),
        (",", TokenType.OP_COMMA),
        (":", TokenType.OP_COLON),
        ("?", TokenType.OP_QUESTION),
        ("&", TokenType.OP_BITWISE_AND),
        ("|", TokenType.OP_BITWISE_OR),
        ("^", TokenType.OP_BITWISE_XOR),
        ("~", TokenType.OP_BITWISE_NOT),
        ("(", TokenType.DEL_LPAREN),
        (")", TokenType.DEL_RPAREN),
        ("{", TokenType.DEL_LBRACE),
        ("}", TokenType.DEL_RBRACE),
        ("[", TokenType.DEL_LBRACKET),
        ("]", TokenType.DEL_RBRACKET),
    ],
)
def test_operators(text, expected):
    tokens = Lexer(text).tokenize()
    assert [t.type for t in tokens] == [expected, TokenType.END_OF_FILE]
    assert tokens[0].value == text


def test_lone_bang_and_stray_characters_are_unknown():
    tokens = Lexer("! @").tokenize()
    assert [t.type for t in tokens] == [
        TokenType.UNKNOWN,
        TokenType.UNKNOWN,
        TokenType.END_OF_FILE,
    ]
    assert [t.value for t in tokens[:-1]] == ["!", "@"]


def test_shift_is_two_comparisons():
    assert kinds("<<") == [TokenType.OP_LESS, TokenType.OP_LESS, TokenType.END_OF_FILE]


@pytest.mark.parametrize("text", ["42", "3.14", "-7", "-0.5", "0"])
def test_numbers(text):
    tokens = Lexer(text).tokenize()
    assert tokens[0] == Token(TokenType.NUMBER, text, 1, 1)
    assert tokens[1].type is TokenType.END_OF_FILE


def test_trailing_dot_is_not_part_of_number():
    tokens = Lexer("3.x").tokenize()
    assert [t.type for t in tokens] == [
        TokenType.NUMBER,
        TokenType.OP_DOT,
        TokenType.IDENTIFIER,
        TokenType.END_OF_FILE,
    ]
    assert tokens[0].value == "3"


def test_minus_before_digit_joins_the_number():
    tokens = Lexer("a-1").tokenize()
    assert [t.type for t in tokens] == [
        TokenType.IDENTIFIER,
        TokenType.NUMBER,
        TokenType.END_OF_FILE,
    ]
    assert tokens[1].value == "-1"


def test_minus_with_space_is_operator():
    assert kinds("a - 1") == [
        TokenType.IDENTIFIER,
        TokenType.OP_MINUS,
        TokenType.NUMBER,
        TokenType.END_OF_FILE,
    ]


@pytest.mark.parametrize("quote", ['"', "'"])
def test_strings_with_either_quote(quote):
    tokens = Lexer(f"{quote}hello world{quote} x").tokenize()
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].value == "hello world"
    assert tokens[1].value == "x"


@pytest.mark.parametrize(
    "escape, expected",
    [("\\n", "\n"), ("\\t", "\t"), ("\\r", "\r"), ("\\\\", "\\"), ('\\"', '"'), ("\\q", "q")],
)
def test_string_escapes(escape, expected):
    token = Lexer(f'"a{escape}b"').next_token()
    assert token.type is TokenType.STRING
    assert token.value == f"a{expected}b"


def test_escaped_single_quote_inside_single_quoted_string():
    token = Lexer("'it\\'s'").next_token()
    assert token.value == "it's"


def test_unterminated_string_takes_rest_of_source():
    tokens = Lexer('"abc def').tokenize()
    assert tokens[0].type is TokenType.STRING
    assert tokens[0].value == "abc def"
    assert tokens[1].type is TokenType.END_OF_FILE


def test_backslash_at_end_of_unterminated_string():
    token = Lexer('"ab\\').next_token()
    assert token.type is TokenType.STRING
    assert token.value.startswith("ab")
    assert len(token.value) == 3


def test_comment_ends_at_newline():
    assert values("x # ignored y z\ny") == ["x", "y"]


def test_statement_sequence():
    source = 'use "physics"\nfunction f(a, b)\n  return a ** b\nend'
    assert kinds(source) == [
        TokenType.KW_USE,
        TokenType.STRING,
        TokenType.KW_FUNCTION,
        TokenType.IDENTIFIER,
        TokenType.DEL_LPAREN,
        TokenType.IDENTIFIER,
        TokenType.OP_COMMA,
        TokenType.IDENTIFIER,
        TokenType.DEL_RPAREN,
        TokenType.KW_RETURN,
        TokenType.IDENTIFIER,
        TokenType.OP_POWER,
        TokenType.IDENTIFIER,
        TokenType.KW_END,
        TokenType.END_OF_FILE,
    ]


def test_positions_point_at_lexemes():
    source = "speed = 10\n  if speed >= 2.5\n\tx += -3 # note\nend"
    lines = source.split("\n")
    tokens = Lexer(source).tokenize()
    for token in tokens[:-1]:
        text = lines[token.line - 1]
        assert text[token.column - 1 :].startswith(token.value)


def test_string_position_is_opening_quote():
    source = 'x =\n   "abc"'
    token = Lexer(source).tokenize()[2]
    lines = source.split("\n")
    assert lines[token.line - 1][token.column - 1] == '"'


def test_eof_position_after_last_line():
    source = "ab\ncd"
    eof = Lexer(source).tokenize()[-1]
    assert eof.line == source.count("\n") + 1
    assert eof.column == len(source.split("\n")[-1]) + 1


def test_first_token_at_line_one_column_one():
    token = Lexer("value").next_token()
    assert (token.line, token.column) == (1, 1)


def test_next_token_keeps_returning_eof():
    lexer = Lexer("a")
    assert lexer.next_token().type is TokenType.IDENTIFIER
    assert lexer.next_token().type is TokenType.END_OF_FILE
    assert lexer.next_token().type is TokenType.END_OF_FILE


def test_iteration_matches_tokenize():
    source = "on tick {dt}\n  x = x + dt\nend"
    assert list(Lexer(source)) == Lexer(source).tokenize()


def test_tokenize_ends_with_single_eof():
    tokens = Lexer("a b c").tokenize()
    eofs = [t for t in tokens if t.type is TokenType.END_OF_FILE]
    assert len(eofs) == 1
    assert tokens[-1] is eofs[0]


def test_non_ascii_letters_are_unknown():
    tokens = Lexer("é").tokenize()
    assert tokens[0].type is TokenType.UNKNOWN
    assert tokens[0].value == "é"


@pytest.mark.parametrize(
    "token_type, name",
    [
        (TokenType.IDENTIFIER, "Identifier"),
        (TokenType.KW_ELSE_IF, "KW_Elif"),
        (TokenType.KW_SWITCH, "KW_Switch"),
        (TokenType.OP_PLUS_ASSIGN, "OP_Plus_Assign"),
        (TokenType.DEL_LBRACKET, "DEL_LBracket"),
        (TokenType.END_OF_FILE, "EndOfFile"),
        (TokenType.UNKNOWN, "Unknown"),
    ],
)
def test_token_type_name(token_type, name):
    assert token_type_name(token_type) == name


def test_token_type_names_are_unique():
    names = [token_type_name(t) for t in TokenType]
    assert len(names) == len(set(names))


def test_token_is_immutable():
    token = Lexer("a").next_token()
    with pytest.raises(AttributeError):
        token.value = "b"
    assert token.value == "a"
    assert token == Token(TokenType.IDENTIFIER, "a", 1, 1)