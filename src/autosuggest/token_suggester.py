# autosuggest/token_suggester.py
from __future__ import annotations

import logging
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from .errors import AutomatonContractError
from .models import AtomicTransition, EpsilonTransition, SetTransition, State
from .recognizer.api import Recognizer

log = logging.getLogger(__name__)

_ENTER = 0
_EXIT = 1

# (target, token so far, typed text not yet replayed)
_Step = Tuple[State, str, str]


class TokenSuggester:
    """
    Completes the trailing partial token by walking the character automaton.

    For every candidate token kind the walk starts at that kind's entry state.
    While the user's partial text is being replayed, only transitions that
    match it are followed; after that every label is explored. Set
    transitions honour the case preference in both phases. A state with no
    outgoing transitions ends a token, and the token built so far is recorded.

    States already on the current path are not entered again, so a loop in the
    automaton contributes its first iteration only.
    """

    def __init__(self, partial_token: str, recognizer: Recognizer, case_preference: Optional[str] = None) -> None:
        self._partial = partial_token
        self._recognizer = recognizer
        self._case_preference = case_preference
        self._suggestions: Dict[str, None] = {}
        self._path: Set[State] = set()

    def suggest(self, token_kinds: Iterable[int]) -> List[str]:
        """Completions (the untyped tail only) for the given kinds, deduplicated, in discovery order."""
        for kind in token_kinds:
            entry = self._recognizer.find_state_by_token_kind(kind)
            if entry is None:
                log.debug("no lexer entry state for token kind %d", kind)
                continue
            self._walk(entry)
        return list(self._suggestions)

    # ---- walk ----

    def _walk(self, entry: State) -> None:
        stack: List[tuple] = [(_ENTER, entry, "", self._partial)]
        while stack:
            frame = stack.pop()
            if frame[0] == _EXIT:
                self._path.discard(frame[1])
                continue

            _, state, so_far, remaining = frame
            if state in self._path:
                continue  # loop: abandon this branch
            self._path.add(state)
            stack.append((_EXIT, state))

            if so_far and not state.transitions:
                self._add(so_far)

            children = list(self._expand(state, so_far, remaining))
            stack.extend((_ENTER, t, s, r) for t, s, r in reversed(children))

    def _expand(self, state: State, so_far: str, remaining: str) -> Iterator[_Step]:
        for trans in state.transitions:
            if isinstance(trans, EpsilonTransition):
                yield trans.target, so_far, remaining
            elif isinstance(trans, AtomicTransition):
                if trans.label < 0:
                    continue  # EOF and other non-character labels
                ch = chr(trans.label)
                if not remaining or remaining[0] == ch:
                    yield trans.target, so_far + ch, remaining[1:]
            elif isinstance(trans, SetTransition):
                yield from self._expand_set(trans, so_far, remaining)
            else:
                raise AutomatonContractError(trans, f"character automaton, state {state.id}")

    def _expand_set(self, trans: SetTransition, so_far: str, remaining: str) -> Iterator[_Step]:
        if remaining:
            # replaying typed text: only its next character can match
            head = remaining[0]
            if trans.matches(ord(head)) and not self._should_ignore_case(head, trans):
                yield trans.target, so_far + head, remaining[1:]
            return

        for cp in trans.symbols():
            if cp < 0:
                continue
            ch = chr(cp)
            if self._should_ignore_case(ch, trans):
                continue
            yield trans.target, so_far + ch, ""

    # ---- helpers ----

    def _should_ignore_case(self, ch: str, trans: SetTransition) -> bool:
        """Skip one case of a letter when the same Set also offers the preferred case."""
        if self._case_preference == "LOWER":
            lower = ch.lower()
            return ch == ch.upper() and lower != ch and _offers(trans, lower)
        if self._case_preference == "UPPER":
            upper = ch.upper()
            return ch == ch.lower() and upper != ch and _offers(trans, upper)
        return False

    def _add(self, token: str) -> None:
        tail = chop_off_common_start(token, self._partial)
        if tail not in self._suggestions:
            log.debug("raw suggestion %r (token %r)", tail, token)
            self._suggestions[tail] = None


def chop_off_common_start(token: str, partial: str) -> str:
    """Drop the characters the user already typed from a completed token."""
    return token[min(len(token), len(partial)):]


def _offers(trans: SetTransition, ch: str) -> bool:
    # some case mappings expand to several characters
    return len(ch) == 1 and trans.matches(ord(ch))
