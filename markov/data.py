from collections.abc import Mapping
from typing import Any, List, Sequence

from .errors import InvalidCorpusItem

DELIMITER = " "


def item_text(item: Any) -> str:
    """Return the source text of a corpus item (mapping key or attribute)."""
    if isinstance(item, Mapping):
        return item["string"]
    return item.string


def normalize_items(data: Sequence[Any]) -> List[Any]:
    """
    Plain strings become ``{"string": s}`` records; anything else must
    already carry a string ``string`` field and is kept by reference.
    """
    items = []
    for index, entry in enumerate(data):
        if isinstance(entry, str):
            items.append({"string": entry})
            continue

        try:
            text = item_text(entry)
        except (KeyError, AttributeError, TypeError):
            raise InvalidCorpusItem(index, entry) from None
        if not isinstance(text, str):
            raise InvalidCorpusItem(index, entry)
        items.append(entry)
    return items


def tokenize(text: str) -> List[str]:
    # no trimming or collapsing: "a  b" yields an empty token
    return text.split(DELIMITER)


def join_words(words: Sequence[str]) -> str:
    return DELIMITER.join(words)
