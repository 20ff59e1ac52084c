import pytest

from markov import Markov


class ScriptedRandom:
    """Picks the scripted index on each call, then the first element."""

    def __init__(self, *indices):
        self.indices = list(indices)
        self.calls = []

    def choice(self, seq):
        self.calls.append(len(seq))
        index = self.indices.pop(0) if self.indices else 0
        return seq[index]


CAT_DOG = ["the cat sat on the mat", "the dog sat on the rug"]


@pytest.fixture
def cat_dog():
    markov = Markov(CAT_DOG)
    markov.build_corpus_sync()
    return markov
