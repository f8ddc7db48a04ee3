# autosuggest/models.py
"""
Data models for the autosuggest engine.

Two families of small containers live here:

- Automaton graph: State plus the three transition variants (Epsilon, Atomic,
  Set). The same types describe both the character automaton (labels are
  Unicode code points) and the token automaton (labels are token kinds).
- Tokenizer output: Token and TokenizationResult.

Automata are built once by a recognizer and then only read. Traversals keep
their own scratch state and never write to a State.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import ClassVar, Dict, Iterable, Iterator, List, Optional, Tuple, Union


@dataclass(eq=False, repr=False, slots=True)
class State:
    """
    One node of an automaton.

    Attributes
    ----------
    id : int
        Stable identifier, unique within the owning automaton.
    transitions : List[Transition]
        Outgoing transitions in grammar order. Traversal order (and therefore
        suggestion order) follows this list.

    States compare and hash by identity, so they can key per-call guard maps.
    """
    id: int
    transitions: List["Transition"] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"State({self.id})"


@dataclass(frozen=True, slots=True)
class EpsilonTransition:
    kind: ClassVar[str] = "epsilon"
    target: State


@dataclass(frozen=True, slots=True)
class AtomicTransition:
    kind: ClassVar[str] = "atomic"
    label: int
    target: State

    def matches(self, symbol: int) -> bool:
        return self.label == symbol


@dataclass(frozen=True, slots=True)
class SetTransition:
    """Matches any symbol inside one of the [start, stop) intervals."""
    kind: ClassVar[str] = "set"
    intervals: Tuple[Tuple[int, int], ...]
    target: State

    def matches(self, symbol: int) -> bool:
        return any(start <= symbol < stop for start, stop in self.intervals)

    def symbols(self) -> Iterator[int]:
        for start, stop in self.intervals:
            yield from range(start, stop)


Transition = Union[EpsilonTransition, AtomicTransition, SetTransition]


def transition_key(source: State, trans: Transition) -> Tuple[int, str, int]:
    """Identity of a transition: (source id, variant, target id)."""
    return (source.id, getattr(trans, "kind", type(trans).__name__), trans.target.id)


@dataclass(slots=True)
class Automaton:
    """All states of one automaton, indexed by State.id."""
    states: List[State]
    _by_id: Dict[int, State] = field(default_factory=dict, init=False)

    def __post_init__(self) -> None:
        self._by_id = {s.id: s for s in self.states}

    def state(self, sid: int) -> State:
        try:
            return self._by_id[int(sid)]
        except KeyError:
            raise KeyError(sid)

    def __len__(self) -> int:
        return len(self.states)


class AutomatonBuilder:
    """
    Assemble an Automaton by hand.

    Ids are handed out in creation order. Nothing here compiles grammars; it
    only wires states together so callers (and tests) can describe the
    automata a grammar compiler would have produced.
    """

    def __init__(self) -> None:
        self._states: List[State] = []

    def new_state(self) -> State:
        s = State(id=len(self._states))
        self._states.append(s)
        return s

    def epsilon(self, source: State, target: State) -> State:
        source.transitions.append(EpsilonTransition(target))
        return target

    def atomic(self, source: State, label: Union[int, str], target: Optional[State] = None) -> State:
        target = target if target is not None else self.new_state()
        source.transitions.append(AtomicTransition(_symbol(label), target))
        return target

    def char_set(
        self,
        source: State,
        intervals: Iterable[Union[Tuple[int, int], Tuple[str, str], str]],
        target: Optional[State] = None,
    ) -> State:
        """
        Add a Set transition. Intervals may be given as [start, stop) code point
        pairs, as inclusive character pairs like ("a", "z"), or as single
        characters.
        """
        target = target if target is not None else self.new_state()
        source.transitions.append(SetTransition(_intervals(intervals), target))
        return target

    def literal(self, source: State, text: str) -> State:
        """Chain one Atomic transition per character; returns the last state."""
        cur = source
        for ch in text:
            cur = self.atomic(cur, ch)
        return cur

    def build(self) -> Automaton:
        return Automaton(states=list(self._states))


def _symbol(label: Union[int, str]) -> int:
    if isinstance(label, str):
        if len(label) != 1:
            raise ValueError(f"character label must be a single character: {label!r}")
        return ord(label)
    return int(label)


def _intervals(items) -> Tuple[Tuple[int, int], ...]:
    out: List[Tuple[int, int]] = []
    for item in items:
        if isinstance(item, str):
            cp = _symbol(item)
            out.append((cp, cp + 1))
        elif isinstance(item[0], str):
            # inclusive character range
            out.append((_symbol(item[0]), _symbol(item[1]) + 1))
        else:
            start, stop = int(item[0]), int(item[1])
            if stop <= start:
                raise ValueError(f"empty interval: [{start}, {stop})")
            out.append((start, stop))
    return tuple(out)


@dataclass(frozen=True, slots=True)
class Token:
    kind: int
    channel: int
    text: str
    start: int                # offset of the first character in the input


@dataclass(frozen=True, slots=True)
class TokenizationResult:
    """
    Attributes
    ----------
    tokens : Tuple[Token, ...]
        Completed tokens in input order.
    untokenized_text : str
        The suffix of the input the scanner could not turn into a token. This is
        the partial token that completion works on; "" when all input was used.
    """
    tokens: Tuple[Token, ...]
    untokenized_text: str
