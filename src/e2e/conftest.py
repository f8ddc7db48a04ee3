# src/e2e/conftest.py
"""
Small hand-built grammars shared by the tests.

Each fixture returns an AutomatonRecognizer whose automata have the shape a
grammar compiler would produce. Token kinds are plain ints; the character
automaton ends every token in a state without outgoing transitions.
"""

import pytest

from autosuggest import AutomatonBuilder, AutomatonRecognizer, TokenRule

LETTERS = [("a", "z"), ("A", "Z")]
ALNUM = [("a", "z"), ("A", "Z"), ("0", "9")]


def keyword(b: AutomatonBuilder, text: str):
    entry = b.new_state()
    b.literal(entry, text)
    return entry


def one_then_many(b: AutomatonBuilder, first, rest):
    """first rest* : a set, then a loop over another set."""
    entry = b.new_state()
    after_first = b.char_set(entry, first)
    loop = b.epsilon(after_first, b.new_state())
    body = b.char_set(loop, rest)
    b.epsilon(body, loop)
    b.epsilon(loop, b.new_state())
    return entry


def exactly(b: AutomatonBuilder, *sets):
    entry = cur = b.new_state()
    for s in sets:
        cur = b.char_set(cur, s)
    return entry


def sequence(p: AutomatonBuilder, *kinds):
    """Token automaton accepting exactly the given kinds in order."""
    start = cur = p.new_state()
    for k in kinds:
        cur = p.atomic(cur, k)
    return start


# ---------- grammars ----------

@pytest.fixture
def ab_or_ac():
    """S -> 'a' 'b' | 'a' 'c'"""
    A, B, C = 1, 2, 3
    b = AutomatonBuilder()
    rules = [
        TokenRule(A, "A", keyword(b, "a")),
        TokenRule(B, "B", keyword(b, "b")),
        TokenRule(C, "C", keyword(b, "c")),
    ]
    p = AutomatonBuilder()
    start = p.new_state()
    end = p.new_state()
    left = p.epsilon(start, p.new_state())
    p.atomic(p.atomic(left, A), B, end)
    right = p.epsilon(start, p.new_state())
    p.atomic(p.atomic(right, A), C, end)
    return AutomatonRecognizer(b.build(), p.build(), rules, initial_state=start)


@pytest.fixture
def id_semicolon():
    """ID -> [a-zA-Z][a-zA-Z0-9]* ; WS -> [ \\t]+ (hidden) ; S -> ID ';'"""
    ID, SEMI, WS = 1, 2, 3
    b = AutomatonBuilder()
    rules = [
        TokenRule(ID, "ID", one_then_many(b, LETTERS, ALNUM)),
        TokenRule(SEMI, "SEMI", keyword(b, ";")),
        TokenRule(WS, "WS", one_then_many(b, [" ", "\t"], [" ", "\t"]), channel=1),
    ]
    p = AutomatonBuilder()
    sequence(p, ID, SEMI)
    return AutomatonRecognizer(b.build(), p.build(), rules)


@pytest.fixture
def keyword_then_semicolon():
    """S -> 'ab' ';'"""
    AB, SEMI = 1, 2
    b = AutomatonBuilder()
    rules = [TokenRule(AB, "AB", keyword(b, "ab")), TokenRule(SEMI, "SEMI", keyword(b, ";"))]
    p = AutomatonBuilder()
    sequence(p, AB, SEMI)
    return AutomatonRecognizer(b.build(), p.build(), rules)


@pytest.fixture
def shadowing_keyword():
    """
    A = 'a', AB = 'ab', B = 'b' ; S -> A B
    Typing "a" then "b" lexes as the single token AB (maximal munch).
    """
    A, AB, B = 1, 2, 3
    b = AutomatonBuilder()
    rules = [
        TokenRule(A, "A", keyword(b, "a")),
        TokenRule(AB, "AB", keyword(b, "ab")),
        TokenRule(B, "B", keyword(b, "b")),
    ]
    p = AutomatonBuilder()
    sequence(p, A, B)
    return AutomatonRecognizer(b.build(), p.build(), rules)


@pytest.fixture
def keyword_vs_identifier():
    """IF = 'if' (listed first), ID = [a-z][a-z] ; S -> ID"""
    IF, ID = 1, 2
    b = AutomatonBuilder()
    rules = [
        TokenRule(IF, "IF", keyword(b, "if")),
        TokenRule(ID, "ID", exactly(b, [("a", "z")], [("a", "z")])),
    ]
    p = AutomatonBuilder()
    sequence(p, ID)
    return AutomatonRecognizer(b.build(), p.build(), rules)


@pytest.fixture
def comma_list():
    """S -> A (',' A)* with an extra zero-progress epsilon cycle at the start."""
    A, COMMA = 1, 2
    b = AutomatonBuilder()
    rules = [TokenRule(A, "A", keyword(b, "a")), TokenRule(COMMA, "COMMA", keyword(b, ","))]
    p = AutomatonBuilder()
    start = p.new_state()
    spin = p.epsilon(start, p.new_state())
    p.epsilon(spin, start)
    after_item = p.atomic(spin, A)
    loop = p.epsilon(after_item, p.new_state())
    sep = p.atomic(loop, COMMA)
    p.atomic(sep, A, after_item)
    p.epsilon(loop, p.new_state())
    return AutomatonRecognizer(b.build(), p.build(), rules, initial_state=start)
