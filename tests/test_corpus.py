import pytest

from markov import build_corpus, normalize_items, tokenize
from markov.errors import InvalidCorpusItem

from conftest import CAT_DOG


def test_cat_dog_tables():
    items = normalize_items(CAT_DOG)
    model = build_corpus(items, 2)

    assert [(e.words, e.refs) for e in model.start_words] == [
        ("the cat", (items[0],)),
        ("the dog", (items[1],)),
    ]
    assert [(e.words, e.refs) for e in model.end_words] == [
        ("the mat", (items[0],)),
        ("the rug", (items[1],)),
    ]
    assert [e.words for e in model.corpus["the cat"]] == ["sat on"]
    assert [e.words for e in model.corpus["the dog"]] == ["sat on"]
    assert [(e.words, e.refs) for e in model.corpus["sat on"]] == [
        ("the mat", (items[0],)),
        ("the rug", (items[1],)),
    ]
    assert set(model.corpus) == {"the cat", "cat sat", "sat on", "the dog", "dog sat"}


@pytest.mark.parametrize("state_size", [1, 2, 3])
def test_every_state_has_state_size_words(state_size):
    items = normalize_items([
        "one two three four five six seven",
        "two three four one two",
        "seven six five four three two one zero",
    ])
    model = build_corpus(items, state_size)

    assert model.corpus
    for key, entries in model.corpus.items():
        assert len(key.split(" ")) == state_size
        for entry in entries:
            assert len(entry.words.split(" ")) == state_size


def test_short_lines_produce_no_transitions():
    items = normalize_items(["a b c", "d e", "f"])
    model = build_corpus(items, 2)

    assert len(model.corpus) == 0
    assert [e.words for e in model.start_words] == ["a b", "d e", "f"]
    # trailing partial windows still count as end states
    assert [e.words for e in model.end_words] == ["b c", "d e", "f"]


def test_start_and_end_refs_are_deduplicated_by_identity():
    item = {"string": "a b a b", "id": 1}
    twin = {"string": "a b a b", "id": 2}
    model = build_corpus(normalize_items([item, item, twin]), 1)

    assert len(model.start_words) == 1
    assert model.start_words[0].refs[0] is item
    assert model.start_words[0].refs[1] is twin
    assert len(model.start_words[0].refs) == 2
    assert len(model.end_words[0].refs) == 2


def test_transition_refs_are_not_deduplicated():
    item = {"string": "a b a b a b"}
    model = build_corpus([item], 1)

    (entry,) = model.corpus["a"]
    assert entry.words == "b"
    assert entry.refs == (item, item, item)


def test_irregular_whitespace_is_kept():
    assert tokenize("a  b") == ["a", "", "b"]
    model = build_corpus(normalize_items(["a  b c"]), 1)
    assert model.start_words[0].words == "a"
    # an empty successor window is never a transition
    assert "a" not in model.corpus
    assert [e.words for e in model.corpus[""]] == ["b"]


def test_rebuild_returns_new_tables():
    items = normalize_items(CAT_DOG)
    first = build_corpus(items, 2)
    second = build_corpus(items, 2)

    assert first is not second
    assert len(second.start_words) == 2
    assert first.corpus == second.corpus


def test_tables_are_read_only():
    model = build_corpus(normalize_items(CAT_DOG), 2)
    with pytest.raises(TypeError):
        model.corpus["new"] = ()


def test_invalid_state_size():
    with pytest.raises(ValueError):
        build_corpus(normalize_items(CAT_DOG), 0)


def test_normalize_items():
    class Record:
        def __init__(self, string):
            self.string = string

    record = Record("x y")
    mapping = {"string": "z", "source": "test"}
    items = normalize_items(["plain", record, mapping])

    assert items[0] == {"string": "plain"}
    assert items[1] is record
    assert items[2] is mapping


@pytest.mark.parametrize("bad", [{"text": "x"}, {"string": 3}, object(), None])
def test_normalize_rejects_items_without_string(bad):
    with pytest.raises(InvalidCorpusItem) as exc:
        normalize_items(["fine", bad])
    assert exc.value.index == 1
