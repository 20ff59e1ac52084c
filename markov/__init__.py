from .corpus import MarkovCorpus, StateEntry, build_corpus
from .data import item_text, normalize_items, tokenize
from .errors import GenerationExhausted, InvalidCorpusItem, MarkovError, ModelNotBuilt
from .generator import MarkovResult, generate_sentence
from .model import Markov
from .options import MarkovOptions

__all__ = [
    "Markov", "MarkovOptions", "MarkovResult",
    "MarkovCorpus", "StateEntry", "build_corpus", "generate_sentence",
    "item_text", "normalize_items", "tokenize",
    "MarkovError", "InvalidCorpusItem", "ModelNotBuilt", "GenerationExhausted",
]
