"""
Sentence generation by rejection sampling over random walks.

Each attempt starts from a random start state and follows random
transitions until it reaches an end state or runs out of transitions. The
candidate is then checked against the options; the first one that passes is
returned.
"""

import logging
import math
import random
from dataclasses import dataclass, field
from typing import Any, List, Optional, Protocol, Sequence

from .corpus import MarkovCorpus, StateEntry
from .data import item_text, join_words
from .errors import GenerationExhausted
from .options import MarkovOptions

logger = logging.getLogger(__name__)

_default_rng = random.Random()


class RandomSource(Protocol):
    def choice(self, seq: Sequence[Any]) -> Any: ...


@dataclass
class MarkovResult:
    string: str
    score: int
    score_per_word: int
    refs: List[Any] = field(default_factory=list)

    def to_dict(self) -> dict:
        return {
            "string": self.string,
            "score": self.score,
            "score_per_word": self.score_per_word,
            "refs": list(self.refs),
        }


def unique_refs(path: Sequence[StateEntry]) -> List[Any]:
    """Refs of every path element, deduplicated by item text in path order."""
    seen = set()
    refs = []
    for entry in path:
        for ref in entry.refs:
            text = item_text(ref)
            if text in seen:
                continue
            seen.add(text)
            refs.append(ref)
    return refs


def _walk(model: MarkovCorpus, rng: RandomSource, max_steps: int):
    path = [rng.choice(model.start_words)]
    score = 0
    ended = False

    for _ in range(max_steps):
        entries = model.transitions(path[-1].words)
        if not entries:
            break

        state = rng.choice(entries)
        path.append(state)
        # branching faced at this step, 0 when forced
        score += len(entries) - 1

        if model.is_end(state.words):
            ended = True
            break

    return path, score, ended


def _rejection(sentence: str, result: MarkovResult, options: MarkovOptions) -> Optional[str]:
    if options.checker is not None and not options.checker(sentence):
        return "checker"
    if options.filter is not None and not options.filter(result):
        return "filter"

    word_count = len(sentence.split(" "))
    if options.min_words > 0 and word_count < options.min_words:
        return "min_words"
    if options.max_words > 0 and word_count > options.max_words:
        return "max_words"
    if options.max_length > 0 and len(sentence) > options.max_length:
        return "max_length"
    if options.min_score and result.score < options.min_score:
        return "min_score"
    if options.min_score_per_word and result.score_per_word < options.min_score_per_word:
        return "min_score_per_word"
    return None


def generate_sentence(
    model: MarkovCorpus,
    options: Optional[MarkovOptions] = None,
    rng: Optional[RandomSource] = None,
) -> MarkovResult:
    """
    Generate one sentence accepted by ``options``.

    ``model`` is read once and never mutated, so a rebuild published while
    this runs does not affect it. Sampling is uniform over distinct entries;
    how many items share a transition only shows up in ``refs``.

    Raises GenerationExhausted when ``max_tries`` attempts are all rejected.
    """
    options = options or MarkovOptions()
    rng = rng or _default_rng
    max_tries = options.max_tries

    if not model.start_words:
        raise GenerationExhausted(max_tries)

    for attempt in range(max_tries):
        path, score, ended = _walk(model, rng, max_tries)

        if not ended:
            logger.debug("attempt %d rejected: walk did not reach an end state", attempt)
            continue

        sentence = join_words([entry.words for entry in path]).strip()
        result = MarkovResult(
            string=sentence,
            score=score,
            score_per_word=math.ceil(score / len(path)),
            refs=unique_refs(path),
        )

        reason = _rejection(sentence, result, options)
        if reason is not None:
            logger.debug("attempt %d rejected by %s: %r", attempt, reason, sentence)
            continue

        return result

    raise GenerationExhausted(max_tries)
