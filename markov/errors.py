"""Error types raised by corpus normalization and sentence generation."""


class MarkovError(Exception):
    """Base class for every error raised by the markov package."""


class InvalidCorpusItem(MarkovError, ValueError):
    """A corpus item has no usable ``string`` field."""

    def __init__(self, index: int, item):
        self.index = index
        self.item = item
        super().__init__(
            f'Objects in your corpus must have a "string" property (item #{index}: {item!r})'
        )


class ModelNotBuilt(MarkovError, RuntimeError):
    """Generation was requested before the corpus was built."""

    def __init__(self):
        super().__init__("Corpus is not built. Call build_corpus() first.")


class GenerationExhausted(MarkovError):
    """No candidate sentence passed the constraints within ``max_tries`` attempts."""

    def __init__(self, max_tries: int):
        self.max_tries = max_tries
        super().__init__(
            f"Cannot build sentence with current corpus and options (tried {max_tries} times)"
        )
