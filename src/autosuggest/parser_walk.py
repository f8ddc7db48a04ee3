# autosuggest/parser_walk.py
"""
Walks the token automaton through the completed tokens of the input.

The walk is a depth-first search over (state, token index) pairs. A state may
be entered again on the same path only after at least one token has been
consumed since its last entry: recursive grammar rules still work, while
epsilon cycles that make no progress are cut. Marks are restored when the
search backs out, so sibling branches do not see each other's visits.

An explicit work stack replaces host recursion; deep grammars do not hit the
interpreter's recursion limit.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterator, List, Sequence, Set, Tuple

from .errors import AutomatonContractError
from .models import (
    AtomicTransition,
    EpsilonTransition,
    SetTransition,
    State,
    Token,
    transition_key,
)

log = logging.getLogger(__name__)

_ENTER = 0
_EXIT = 1
_UNSET = -1


class ParserWalker:
    """Finds the frontier states reached once every completed token is consumed."""

    def __init__(self, tokens: Sequence[Token]) -> None:
        self._tokens = tokens
        # state -> token index of its last entry on the active path
        self._last_visit: Dict[State, int] = {}

    def frontier_states(self, initial: State) -> Iterator[State]:
        """Yield each frontier state once, in the order the search reaches it."""
        reported: Set[State] = set()
        n = len(self._tokens)
        stack: List[Tuple[int, State, int]] = [(_ENTER, initial, 0)]

        while stack:
            op, state, value = stack.pop()
            if op == _EXIT:
                self._restore(state, value)
                continue

            index = value
            if self._last_visit.get(state, _UNSET) == index:
                continue  # epsilon cycle without progress
            previous = self._last_visit.get(state, _UNSET)
            self._last_visit[state] = index
            stack.append((_EXIT, state, previous))

            if index >= n:
                if state not in reported:
                    reported.add(state)
                    log.debug("frontier state %d", state.id)
                    yield state
                continue

            kind = self._tokens[index].kind
            children = list(_advance(state, index, kind))
            stack.extend((_ENTER, target, i) for target, i in reversed(children))

    def _restore(self, state: State, previous: int) -> None:
        if previous == _UNSET:
            self._last_visit.pop(state, None)
        else:
            self._last_visit[state] = previous


def _advance(state: State, index: int, kind: int) -> Iterator[Tuple[State, int]]:
    for trans in state.transitions:
        if isinstance(trans, EpsilonTransition):
            yield trans.target, index
        elif isinstance(trans, (AtomicTransition, SetTransition)):
            if trans.matches(kind):
                yield trans.target, index + 1
        else:
            raise AutomatonContractError(trans, f"token automaton, state {state.id}")


def collect_labels(state: State) -> List[int]:
    """
    Token kinds that may come next from ``state``: every Atomic label and Set
    member reachable through epsilon transitions. Duplicates collapse; order
    follows transition order.
    """
    result: Dict[int, None] = {}
    visited: Set[Tuple[int, str, int]] = set()
    stack = [(state, t) for t in reversed(state.transitions)]
    while stack:
        cur, trans = stack.pop()
        if isinstance(trans, EpsilonTransition):
            key = transition_key(cur, trans)
            if key in visited:
                continue
            visited.add(key)
            nxt = trans.target
            stack.extend((nxt, t) for t in reversed(nxt.transitions))
        elif isinstance(trans, AtomicTransition):
            result.setdefault(trans.label, None)
        elif isinstance(trans, SetTransition):
            for k in trans.symbols():
                result.setdefault(k, None)
        else:
            raise AutomatonContractError(trans, f"token automaton, state {cur.id}")
    return list(result)


def accepts_token_kind(state: State, kind: int) -> bool:
    """True if a token of ``kind`` can be consumed from ``state`` (epsilon closure included)."""
    visited: Set[Tuple[int, str, int]] = set()
    stack: List[State] = [state]
    while stack:
        cur = stack.pop()
        for trans in cur.transitions:
            if isinstance(trans, EpsilonTransition):
                key = transition_key(cur, trans)
                if key not in visited:
                    visited.add(key)
                    stack.append(trans.target)
            elif isinstance(trans, (AtomicTransition, SetTransition)):
                if trans.matches(kind):
                    return True
            else:
                raise AutomatonContractError(trans, f"token automaton, state {cur.id}")
    return False
