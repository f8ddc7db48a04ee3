from __future__ import annotations


class AutosuggestError(RuntimeError):
    """Base class for errors raised by the autosuggest engine."""


class RecognizerConfigError(AutosuggestError):
    """The supplied recognizer lacks the automaton metadata the engine needs."""


class AutomatonContractError(AutosuggestError):
    """An automaton contains a transition the traversal does not understand."""

    def __init__(self, transition: object, where: str = "") -> None:
        self.transition = transition
        msg = f"Unexpected transition: {transition!r}"
        if where:
            msg = f"{msg} ({where})"
        super().__init__(msg)
