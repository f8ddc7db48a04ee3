# autosuggest/recognizer/memory_recognizer.py
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, FrozenSet, Iterable, List, Optional, Sequence, Set

from ..errors import AutomatonContractError
from ..models import (
    AtomicTransition,
    Automaton,
    EpsilonTransition,
    SetTransition,
    State,
    Token,
)


@dataclass(frozen=True)
class TokenRule:
    kind: int
    name: str
    entry: State              # character-automaton state the rule starts from
    channel: int = 0


class AutomatonRecognizer:
    """
    Recognizer over automata held in memory (useful for tests, embedding, or
    grammars compiled by something other than ANTLR).

    Token rules are tried in the order given. The scanner picks the longest
    match at each position and the earliest rule on ties. A character-automaton
    state with no outgoing transitions ends a token.
    """

    def __init__(
        self,
        char_automaton: Automaton,
        token_automaton: Automaton,
        rules: Sequence[TokenRule],
        *,
        initial_state: Optional[State] = None,
    ) -> None:
        if not rules:
            raise ValueError("AutomatonRecognizer: at least one token rule is required")
        self.char_automaton = char_automaton
        self.token_automaton = token_automaton
        self.initial_state = initial_state if initial_state is not None else token_automaton.states[0]
        self.rules: List[TokenRule] = list(rules)
        self._entry: Dict[int, State] = {}
        for r in self.rules:
            self._entry.setdefault(r.kind, r.entry)

    def create_scanner(self, text: str) -> "MemoryScanner":
        return MemoryScanner(self.rules, text)

    def find_state_by_token_kind(self, kind: int) -> Optional[State]:
        return self._entry.get(kind)


class MemoryScanner:
    """Maximal-munch scanner; stops at the first position no rule can match."""

    def __init__(self, rules: Sequence[TokenRule], text: str) -> None:
        self._rules = rules
        self._text = text
        self._pos = 0
        self.stop_offset: Optional[int] = None

    def next_token(self) -> Optional[Token]:
        if self.stop_offset is not None:
            return None
        if self._pos >= len(self._text):
            self.stop_offset = len(self._text)
            return None

        best_rule: Optional[TokenRule] = None
        best_end = self._pos
        for rule in self._rules:
            end = self._longest_match(rule.entry, self._pos)
            if end > best_end:
                best_rule, best_end = rule, end

        if best_rule is None:
            self.stop_offset = self._pos
            return None

        tok = Token(
            kind=best_rule.kind,
            channel=best_rule.channel,
            text=self._text[self._pos:best_end],
            start=self._pos,
        )
        self._pos = best_end
        return tok

    def all_tokens(self) -> List[Token]:
        out: List[Token] = []
        while True:
            tok = self.next_token()
            if tok is None:
                return out
            out.append(tok)

    # ---- internals ----

    def _longest_match(self, entry: State, pos: int) -> int:
        """End offset of the longest non-empty match from pos, or pos if none."""
        best = pos
        current = _closure([entry])
        i = pos
        while current and i < len(self._text):
            current = _closure(_step(current, ord(self._text[i])))
            i += 1
            if any(not s.transitions for s in current):
                best = i
        return best


def _closure(states: Iterable[State]) -> FrozenSet[State]:
    seen: Set[State] = set()
    work = list(states)
    while work:
        s = work.pop()
        if s in seen:
            continue
        seen.add(s)
        for t in s.transitions:
            if isinstance(t, EpsilonTransition):
                work.append(t.target)
    return frozenset(seen)


def _step(states: Iterable[State], symbol: int) -> List[State]:
    out: List[State] = []
    for s in states:
        for t in s.transitions:
            if isinstance(t, EpsilonTransition):
                continue
            if isinstance(t, (AtomicTransition, SetTransition)):
                if t.matches(symbol):
                    out.append(t.target)
            else:
                raise AutomatonContractError(t, "scanning")
    return out
