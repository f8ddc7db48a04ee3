# autosuggest/engine.py
from __future__ import annotations

import logging
from typing import Dict, List, Optional, Tuple

from . import config as CFG
from .models import State, Token
from .parser_walk import ParserWalker, accepts_token_kind, collect_labels
from .recognizer.api import Recognizer, check_recognizer, make_recognizer
from .token_suggester import TokenSuggester
from .tokenizer import Tokenizer

log = logging.getLogger(__name__)


class AutoSuggester:
    """
    Thin orchestration layer that glues together:
      - the tokenizer adapter (completed tokens + untokenized remainder),
      - the token-automaton walk (frontier states, candidate token kinds),
      - the character-automaton completer (raw completions),
      - validation of every completion against both automata.

    Public API:
      * suggest(text):   fresh, deterministic list of completions for ``text``
      * case_preference: "LOWER" | "UPPER" | "BOTH", fixed at construction

    The recognizer is checked here, so an incompatible one fails before the
    first request rather than on it.
    """

    # ------------- lifecycle -------------

    def __init__(
        self,
        recognizer: Recognizer,
        case_preference: Optional[str] = None,
        *,
        verbose: bool = False,
    ) -> None:
        if verbose or CFG.VERBOSE:
            logging.basicConfig(level=logging.INFO)

        check_recognizer(recognizer)
        self._recognizer = recognizer
        self._case_preference = normalize_case_preference(case_preference)
        self._tokenizer = Tokenizer(recognizer)
        log.info(
            "AutoSuggester configured: recognizer=%s case_preference=%s",
            type(recognizer).__name__, self._case_preference,
        )

    @property
    def case_preference(self) -> str:
        return self._case_preference

    # ------------- query -------------

    # /* ~~~ Compute completions for the text typed so far ~~~ */
    def suggest(self, text: str) -> List[str]:
        run = _SuggestionRun(self._recognizer, self._tokenizer, self._case_preference, text)
        return run.run()


class _SuggestionRun:
    """State for one suggest() call; discarded when the call returns."""

    def __init__(self, recognizer: Recognizer, tokenizer: Tokenizer, case_preference: str, text: str) -> None:
        self._recognizer = recognizer
        self._tokenizer = tokenizer
        self._case_preference = case_preference
        self._input = text
        self._tokens: Tuple[Token, ...] = ()
        self._untokenized = ""
        self._collected: Dict[str, None] = {}
        self._added_tokens: Dict[str, Optional[Token]] = {}

    def run(self) -> List[str]:
        result = self._tokenizer.tokenize_default_channel(self._input)
        self._tokens = result.tokens
        self._untokenized = result.untokenized_text
        log.debug("input %r: %d tokens, untokenized %r", self._input, len(self._tokens), self._untokenized)

        walker = ParserWalker(self._tokens)
        for frontier in walker.frontier_states(self._recognizer.initial_state):
            self._suggest_from(frontier)
        return list(self._collected)

    def _suggest_from(self, frontier: State) -> None:
        kinds = collect_labels(frontier)
        log.debug("frontier state %d: candidate token kinds %s", frontier.id, kinds)
        suggester = TokenSuggester(self._untokenized, self._recognizer, self._case_preference)
        for suggestion in suggester.suggest(kinds):
            if suggestion in self._collected:
                continue
            if self._is_valid(frontier, suggestion):
                self._collected[suggestion] = None

    # ------------- validation -------------

    def _is_valid(self, frontier: State, suggestion: str) -> bool:
        """A suggestion must complete a whole token that the parser accepts at ``frontier``."""
        new_token = self._added_token(suggestion)
        if new_token is None:
            log.debug("rejected %r: completes no whole token", suggestion)
            return False
        if not accepts_token_kind(frontier, new_token.kind):
            log.debug("rejected %r: token kind %d not accepted at state %d", suggestion, new_token.kind, frontier.id)
            return False
        return True

    def _added_token(self, suggestion: str) -> Optional[Token]:
        if suggestion not in self._added_tokens:
            tokens = self._tokenizer.tokenize_default_channel(self._input + suggestion).tokens
            # a fragment of a longer token leaves the count unchanged
            new = tokens[-1] if len(tokens) > len(self._tokens) else None
            self._added_tokens[suggestion] = new
        return self._added_tokens[suggestion]


def normalize_case_preference(value: Optional[str]) -> str:
    if value is None:
        return CFG.DEFAULT_CASE_PREFERENCE
    pref = str(value).strip().upper()
    if pref not in CFG.CASE_PREFERENCES:
        raise ValueError(f"Unsupported case preference: {value!r} (expected one of {CFG.CASE_PREFERENCES})")
    return pref


# /* ~~~ Public constructors ~~~ */

def configure(recognizer: Recognizer, case_preference: Optional[str] = None, *, verbose: bool = False) -> AutoSuggester:
    """Build an AutoSuggester over any object implementing the Recognizer protocol."""
    return AutoSuggester(make_recognizer(recognizer), case_preference, verbose=verbose)


def autosuggester(
    lexer_cls: type,
    parser_cls: type,
    case_preference: Optional[str] = None,
    *,
    start_rule: Optional[str] = None,
    verbose: bool = False,
) -> AutoSuggester:
    """Build an AutoSuggester over ANTLR-generated lexer and parser classes."""
    from .recognizer.antlr_recognizer import AntlrRecognizer
    return AutoSuggester(AntlrRecognizer(lexer_cls, parser_cls, start_rule=start_rule), case_preference, verbose=verbose)
