# autosuggest/recognizer/antlr_recognizer.py
"""
Recognizer adapter for lexer/parser classes generated by ANTLR 4.

The lexer and parser ATNs are converted once, at construction, into the
engine's own automaton model. Every ANTLR transition that consumes no input
becomes an EpsilonTransition; atom, range and set transitions map directly;
negated sets and wildcards are expanded over a finite alphabet.
"""

from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from antlr4 import InputStream
from antlr4 import Token as AntlrToken
from antlr4.atn.Transition import Transition as AntlrTransition
from antlr4.error.ErrorListener import ErrorListener

from .. import config as CFG
from ..errors import AutomatonContractError, RecognizerConfigError
from ..models import (
    AtomicTransition,
    Automaton,
    EpsilonTransition,
    SetTransition,
    State,
    Token,
    Transition,
)

log = logging.getLogger(__name__)

Interval = Tuple[int, int]


class AntlrRecognizer:
    """
    Wraps a generated ANTLR Lexer class and Parser class.

    Parameters
    ----------
    lexer_cls, parser_cls :
        The generated classes. Both must carry the class-level ``atn`` that
        ANTLR 4.7.1+ emits; otherwise RecognizerConfigError is raised here,
        before any suggestion is requested.
    start_rule : str, optional
        Parser rule to start from. Defaults to the first rule of the grammar.
    """

    def __init__(self, lexer_cls: type, parser_cls: type, *, start_rule: Optional[str] = None) -> None:
        lexer_atn = _require_atn(lexer_cls, "lexer")
        parser_atn = _require_atn(parser_cls, "parser")

        self._lexer_cls = lexer_cls
        self._cached_lexer = None
        self.rule_names: List[str] = list(getattr(parser_cls, "ruleNames", []) or [])

        self.char_automaton, lexer_states = convert_atn(lexer_atn, CFG.CHAR_ALPHABET)
        self.token_automaton, parser_states = convert_atn(
            parser_atn, (1, int(getattr(parser_atn, "maxTokenType", 0)) + 1)
        )
        self.initial_state = _start_state(parser_atn, parser_states, self.rule_names, start_rule)

        # token kind -> lexer rule start state (first rule producing the kind wins)
        self._entry: Dict[int, State] = {}
        rule_to_type = getattr(lexer_atn, "ruleToTokenType", None) or []
        for rule_index, ttype in enumerate(rule_to_type):
            if ttype is None or ttype <= AntlrToken.INVALID_TYPE:
                continue  # fragment rule
            start = lexer_atn.ruleToStartState[rule_index]
            self._entry.setdefault(int(ttype), lexer_states[start.stateNumber])

        log.info(
            "ANTLR recognizer ready: lexer states=%d parser states=%d token kinds=%d",
            len(self.char_automaton), len(self.token_automaton), len(self._entry),
        )

    def create_scanner(self, text: str) -> "AntlrScanner":
        return AntlrScanner(self._lexer(), text)

    def find_state_by_token_kind(self, kind: int) -> Optional[State]:
        return self._entry.get(kind)

    def _lexer(self):
        # One lexer instance is reused; AntlrScanner resets it before each use.
        if self._cached_lexer is None:
            self._cached_lexer = self._lexer_cls(InputStream(""))
        return self._cached_lexer


class _StopAtFirstError(ErrorListener):
    """Records where the lexer first failed instead of printing to the console."""

    def __init__(self) -> None:
        super().__init__()
        self.offset: Optional[int] = None

    def syntaxError(self, recognizer, offendingSymbol, line, column, msg, e):
        if self.offset is not None:
            return
        start = getattr(e, "startIndex", None)
        if start is None:
            start = getattr(recognizer, "_tokenStartCharIndex", None)
        self.offset = int(start) if start is not None else int(column)


class AntlrScanner:
    """
    Pulls tokens from an ANTLR lexer and stops at the first lexer error.

    ANTLR lexers recover from errors by skipping characters; tokens produced
    after the first error are dropped so the untokenized remainder starts at
    the failure point.
    """

    def __init__(self, lexer, text: str) -> None:
        self._lexer = lexer
        self._text = text
        self._errors = _StopAtFirstError()
        lexer.removeErrorListeners()
        lexer.addErrorListener(self._errors)
        lexer.inputStream = InputStream(text)  # resets lexer state
        self.stop_offset: Optional[int] = None

    def next_token(self) -> Optional[Token]:
        if self.stop_offset is not None:
            return None
        tok = self._lexer.nextToken()
        if self._errors.offset is not None:
            self.stop_offset = self._errors.offset
            return None
        if tok is None or tok.type == AntlrToken.EOF:
            self.stop_offset = len(self._text)
            return None
        return Token(kind=tok.type, channel=tok.channel, text=tok.text, start=tok.start)

    def all_tokens(self) -> List[Token]:
        out: List[Token] = []
        while True:
            tok = self.next_token()
            if tok is None:
                return out
            out.append(tok)


# ---- ATN conversion ----

def convert_atn(atn, alphabet: Interval) -> Tuple[Automaton, Dict[int, State]]:
    """
    Convert an ANTLR ATN to an Automaton. Returns the automaton plus a map from
    ANTLR state number to the converted State.
    """
    states: Dict[int, State] = {}
    for s in atn.states:
        if s is None:
            continue  # removed by the ATN optimizer
        states[s.stateNumber] = State(id=s.stateNumber)

    for s in atn.states:
        if s is None:
            continue
        src = states[s.stateNumber]
        for t in s.transitions:
            src.transitions.append(convert_transition(t, states[t.target.stateNumber], alphabet))

    return Automaton(states=list(states.values())), states


def convert_transition(t, target: State, alphabet: Interval) -> Transition:
    stype = getattr(t, "serializationType", None)
    if getattr(t, "isEpsilon", False):
        return EpsilonTransition(target)
    if stype == AntlrTransition.ATOM:
        return AtomicTransition(int(t.label_), target)
    if stype == AntlrTransition.RANGE:
        return SetTransition(((int(t.start), int(t.stop) + 1),), target)
    if stype == AntlrTransition.SET:
        return SetTransition(interval_set(t.label), target)
    if stype == AntlrTransition.NOT_SET:
        return SetTransition(complement(interval_set(t.label), alphabet), target)
    if stype == AntlrTransition.WILDCARD:
        return SetTransition((alphabet,), target)
    raise AutomatonContractError(t, "ATN conversion")


def interval_set(label) -> Tuple[Interval, ...]:
    """ANTLR IntervalSet (a list of ``range`` objects) -> [start, stop) pairs."""
    return tuple((r.start, r.stop) for r in (label.intervals or []))


def complement(intervals: Tuple[Interval, ...], alphabet: Interval) -> Tuple[Interval, ...]:
    lo, hi = alphabet
    out: List[Interval] = []
    cur = lo
    for start, stop in sorted(intervals):
        if start > cur:
            out.append((cur, min(start, hi)))
        cur = max(cur, stop)
        if cur >= hi:
            break
    if cur < hi:
        out.append((cur, hi))
    return tuple((a, b) for a, b in out if a < b)


def _require_atn(cls: type, role: str):
    atn = getattr(cls, "atn", None)
    if atn is None:
        raise RecognizerConfigError(
            f"{role} class {getattr(cls, '__name__', cls)!r} has no ATN. "
            f"Please use ANTLR4 version 4.7.1 or above."
        )
    return atn


def _start_state(atn, states: Dict[int, State], rule_names: List[str], start_rule: Optional[str]) -> State:
    starts = getattr(atn, "ruleToStartState", None) or []
    if start_rule is not None:
        if start_rule not in rule_names:
            raise ValueError(f"unknown start rule: {start_rule!r}")
        return states[starts[rule_names.index(start_rule)].stateNumber]
    if starts:
        return states[starts[0].stateNumber]
    first = next((s for s in atn.states if s is not None), None)
    if first is None:
        raise RecognizerConfigError("parser ATN has no states")
    return states[first.stateNumber]
