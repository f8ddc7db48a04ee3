# autosuggest/tokenizer.py
from __future__ import annotations

from . import config as CFG
from .models import TokenizationResult
from .recognizer.api import Recognizer


class Tokenizer:
    """
    Splits input into completed tokens plus the trailing text no token covers.

    Never raises on unrecognized input: scanning stops at the first position
    the recognizer cannot extend a token, and the rest becomes
    ``untokenized_text``.
    """

    def __init__(self, recognizer: Recognizer) -> None:
        self._recognizer = recognizer

    def tokenize(self, text: str) -> TokenizationResult:
        scanner = self._recognizer.create_scanner(text)
        tokens = scanner.all_tokens()
        stop = scanner.stop_offset if scanner.stop_offset is not None else len(text)
        return TokenizationResult(tokens=tuple(tokens), untokenized_text=text[stop:])

    def tokenize_default_channel(self, text: str) -> TokenizationResult:
        """Like tokenize(), keeping only tokens on the default channel."""
        result = self.tokenize(text)
        kept = tuple(t for t in result.tokens if t.channel == CFG.DEFAULT_CHANNEL)
        return TokenizationResult(tokens=kept, untokenized_text=result.untokenized_text)
