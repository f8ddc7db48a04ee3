# autosuggest/recognizer/api.py
from __future__ import annotations

from typing import List, Optional, Protocol

from ..errors import RecognizerConfigError
from ..models import Automaton, State, Token


class Scanner(Protocol):
    # offset where scanning stopped; None until next_token() has returned None
    stop_offset: Optional[int]

    def next_token(self) -> Optional[Token]: ...
    def all_tokens(self) -> List[Token]: ...


class Recognizer(Protocol):
    """
    What the engine needs from a grammar recognizer.

    The recognizer owns both automata. The engine only reads them and asks the
    recognizer to scan text.
    """
    char_automaton: Automaton
    token_automaton: Automaton
    initial_state: State

    def create_scanner(self, text: str) -> Scanner: ...
    def find_state_by_token_kind(self, kind: int) -> Optional[State]: ...


_REQUIRED = ("char_automaton", "token_automaton", "initial_state")


def check_recognizer(recognizer: object) -> None:
    """Fail fast when a recognizer does not expose automaton metadata."""
    missing = [name for name in _REQUIRED if getattr(recognizer, name, None) is None]
    if missing:
        raise RecognizerConfigError(
            f"{type(recognizer).__name__} does not expose {', '.join(missing)}; "
            f"the recognizer is incompatible with the autosuggest engine."
        )
    for name in ("create_scanner", "find_state_by_token_kind"):
        if not callable(getattr(recognizer, name, None)):
            raise RecognizerConfigError(f"{type(recognizer).__name__} is missing {name}()")


def make_recognizer(lexer: object, parser: object = None) -> Recognizer:
    """
    Factory:
      - recognizer object        -> returned as-is (after the precondition check)
      - (LexerClass, ParserClass) -> AntlrRecognizer over generated ANTLR classes
    """
    if parser is None:
        check_recognizer(lexer)
        return lexer  # type: ignore[return-value]

    # Lazy import so in-memory recognizers work without the ANTLR runtime loaded
    from .antlr_recognizer import AntlrRecognizer
    return AntlrRecognizer(lexer, parser)
