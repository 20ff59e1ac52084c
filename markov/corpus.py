"""
Corpus construction.

A build turns the corpus items into three read-only tables:

* ``corpus``: state key -> successor entries, one per distinct successor
* ``start_words``: the first state of every item
* ``end_words``: the last state of every item

Every entry keeps references to the items that produced it (``refs``) so a
generated sentence can report where its pieces came from.
"""

import logging
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Sequence, Tuple

from .data import item_text, join_words, tokenize

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class StateEntry:
    words: str
    refs: Tuple[Any, ...]

    @property
    def texts(self) -> List[str]:
        return [item_text(ref) for ref in self.refs]


@dataclass(frozen=True)
class MarkovCorpus:
    """Immutable result of one build, published to generators as a whole."""

    state_size: int
    corpus: Mapping[str, Tuple[StateEntry, ...]]
    start_words: Tuple[StateEntry, ...]
    end_words: Tuple[StateEntry, ...]

    def transitions(self, words: str) -> Tuple[StateEntry, ...]:
        return self.corpus.get(words, ())

    def is_end(self, words: str) -> bool:
        return any(entry.words == words for entry in self.end_words)

    @property
    def transition_count(self) -> int:
        return sum(len(entries) for entries in self.corpus.values())


class _Entry:
    # mutable twin of StateEntry used while building
    __slots__ = ("words", "refs")

    def __init__(self, words: str, item: Any):
        self.words = words
        self.refs = [item]

    def freeze(self) -> StateEntry:
        return StateEntry(self.words, tuple(self.refs))


def _add_boundary(entries: List[_Entry], words: str, item: Any) -> None:
    for entry in entries:
        if entry.words == words:
            if not any(ref is item for ref in entry.refs):
                entry.refs.append(item)
            return
    entries.append(_Entry(words, item))


def _add_transition(corpus: Dict[str, List[_Entry]], curr: str, nxt: str, item: Any) -> None:
    entries = corpus.get(curr)
    if entries is None:
        corpus[curr] = [_Entry(nxt, item)]
        return

    for entry in entries:
        if entry.words == nxt:
            # transition refs are not deduplicated, unlike start/end refs
            entry.refs.append(item)
            return
    entries.append(_Entry(nxt, item))


def build_corpus(items: Sequence[Any], state_size: int) -> MarkovCorpus:
    """Build the transition table and start/end indexes from scratch."""
    if state_size < 1:
        raise ValueError(f"state_size must be a positive integer, got {state_size}")

    corpus: Dict[str, List[_Entry]] = {}
    start_words: List[_Entry] = []
    end_words: List[_Entry] = []

    for item in items:
        words = tokenize(item_text(item))

        _add_boundary(start_words, join_words(words[:state_size]), item)
        _add_boundary(end_words, join_words(words[max(len(words) - state_size, 0):]), item)

        for i in range(len(words) - 1):
            curr = join_words(words[i:i + state_size])
            nxt_words = words[i + state_size:i + state_size * 2]
            nxt = join_words(nxt_words)
            if not nxt or len(nxt_words) != state_size:
                continue
            _add_transition(corpus, curr, nxt, item)

    built = MarkovCorpus(
        state_size=state_size,
        corpus=MappingProxyType(
            {key: tuple(e.freeze() for e in entries) for key, entries in corpus.items()}
        ),
        start_words=tuple(e.freeze() for e in start_words),
        end_words=tuple(e.freeze() for e in end_words),
    )
    logger.info(
        "Built corpus from %d items: %d states, %d transitions, %d start / %d end states",
        len(items),
        len(built.corpus),
        built.transition_count,
        len(built.start_words),
        len(built.end_words),
    )
    return built
