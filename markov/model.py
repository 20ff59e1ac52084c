import logging
import warnings
from typing import Any, List, Optional, Sequence

from .corpus import MarkovCorpus, StateEntry, build_corpus
from .data import normalize_items
from .errors import ModelNotBuilt
from .generator import MarkovResult, RandomSource, generate_sentence
from .options import MarkovOptions, OptionsLike

logger = logging.getLogger(__name__)

CHECKER_DEPRECATION = (
    "You've passed options with 'checker' set to 'Markov.{method}'. "
    "'checker(sentence)' is deprecated and will be removed in a future version; "
    "use 'filter(result)' instead."
)


def _warn_checker(options: MarkovOptions, method: str) -> None:
    if "checker" not in options.model_fields_set:
        return
    message = CHECKER_DEPRECATION.format(method=method)
    logger.warning(message)
    warnings.warn(message, DeprecationWarning, stacklevel=3)


class Markov:
    """
    Markov chain sentence generator.

    data: list of strings, or of records carrying a ``string`` field
    (mappings or objects). Records are referenced, never copied, and come
    back in ``MarkovResult.refs``.
    options: constructor-level MarkovOptions (or a dict); keyword arguments
    are accepted too and win over ``options``.
    rng: random source with a ``choice`` method, for reproducible walks.
    """

    def __init__(
        self,
        data: Sequence[Any],
        options: OptionsLike = None,
        rng: Optional[RandomSource] = None,
        **option_kwargs,
    ):
        self._options = MarkovOptions.coerce(options, **option_kwargs)
        _warn_checker(self._options, "__init__")

        self._data = normalize_items(data)
        self._rng = rng
        self._model: Optional[MarkovCorpus] = None

    @property
    def data(self) -> List[Any]:
        return list(self._data)

    @property
    def options(self) -> MarkovOptions:
        return MarkovOptions.merge(self._options)

    @property
    def is_built(self) -> bool:
        return self._model is not None

    @property
    def model(self) -> MarkovCorpus:
        model = self._model
        if model is None:
            raise ModelNotBuilt()
        return model

    @property
    def corpus(self):
        return self.model.corpus

    @property
    def start_words(self) -> Sequence[StateEntry]:
        return self.model.start_words

    @property
    def end_words(self) -> Sequence[StateEntry]:
        return self.model.end_words

    def build_corpus_sync(self) -> MarkovCorpus:
        """Rebuild every table from the current data and publish it at once."""
        built = build_corpus(self._data, self._options.state_size)
        self._model = built
        return built

    async def build_corpus(self) -> MarkovCorpus:
        return self.build_corpus_sync()

    def generate_sentence_sync(self, options: OptionsLike = None, **option_kwargs) -> MarkovResult:
        call_options = MarkovOptions.coerce(options, **option_kwargs)
        _warn_checker(call_options, "generate_sentence_sync")

        # read the handle once; a concurrent rebuild swaps it, never edits it
        model = self._model
        if model is None:
            raise ModelNotBuilt()

        merged = MarkovOptions.merge(self._options, call_options)
        return generate_sentence(model, merged, self._rng)

    async def generate_sentence(self, options: OptionsLike = None, **option_kwargs) -> MarkovResult:
        return self.generate_sentence_sync(options, **option_kwargs)
