import pytest

from autosuggest import AutomatonBuilder, AutomatonContractError
from autosuggest.models import EpsilonTransition
from autosuggest.token_suggester import TokenSuggester, chop_off_common_start


class FakeRecognizer:
    """Only what TokenSuggester needs: kind -> entry state."""

    def __init__(self, entries):
        self._entries = entries

    def find_state_by_token_kind(self, kind):
        return self._entries.get(kind)


def _keywords(*words):
    b = AutomatonBuilder()
    entries = {}
    for kind, w in enumerate(words, start=1):
        entries[kind] = b.new_state()
        b.literal(entries[kind], w)
    return FakeRecognizer(entries)


def test_chop_off_common_start():
    assert chop_off_common_start("select", "sel") == "ect"
    assert chop_off_common_start("ab", "") == "ab"
    assert chop_off_common_start("ab", "abc") == ""
    # only the typed head is dropped; the end of the token is kept
    assert chop_off_common_start("select", "s") == "elect"


def test_replays_typed_text_then_generates():
    rec = _keywords("select", "set", "from")
    assert TokenSuggester("se", rec).suggest([1, 2, 3]) == ["lect", "t"]


def test_mismatching_partial_text_prunes_branch():
    rec = _keywords("select")
    assert TokenSuggester("x", rec).suggest([1]) == []


def test_unknown_kind_is_skipped():
    rec = _keywords("a")
    assert TokenSuggester("", rec).suggest([99, 1, -1]) == ["a"]


def test_diverging_branches_from_shared_prefix():
    b = AutomatonBuilder()
    entry = b.new_state()
    mid = b.literal(entry, "in")
    b.literal(mid, "to")
    b.literal(mid, "ner")
    rec = FakeRecognizer({1: entry})
    assert TokenSuggester("i", rec).suggest([1]) == ["nto", "nner"]


def test_duplicates_across_kinds_are_collapsed():
    rec = _keywords("ab", "ab")
    assert TokenSuggester("", rec).suggest([1, 2]) == ["ab"]


def test_state_with_transitions_is_not_a_completion():
    b = AutomatonBuilder()
    entry = b.new_state()
    b.literal(b.literal(entry, "x"), "y")
    rec = FakeRecognizer({1: entry})
    assert TokenSuggester("", rec).suggest([1]) == ["xy"]


def test_unknown_transition_is_an_error():
    class Weird:
        kind = "weird"

        def __init__(self, target):
            self.target = target

    b = AutomatonBuilder()
    entry = b.new_state()
    entry.transitions.append(EpsilonTransition(b.new_state()))
    entry.transitions.append(Weird(b.new_state()))
    with pytest.raises(AutomatonContractError, match="character automaton"):
        TokenSuggester("", FakeRecognizer({1: entry})).suggest([1])
