"""
Generation options and their precedence rules.

Values are resolved call-time > constructor-time > defaults. Only fields a
caller explicitly set take part in a merge, so an unset call-time field never
masks a constructor value with its default.
"""

from typing import Any, Callable, Dict, Mapping, Optional, Union

from pydantic import BaseModel, ConfigDict, Field

OptionsLike = Union["MarkovOptions", Mapping[str, Any], None]


class MarkovOptions(BaseModel):
    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    # n-gram order of every state key
    state_size: int = Field(2, ge=1)

    # 0 disables the corresponding bound
    max_length: int = Field(0, ge=0)
    min_words: int = Field(0, ge=0)
    max_words: int = Field(0, ge=0)
    min_score: int = 0
    min_score_per_word: int = 0

    # bounds both the retry loop and the length of a single walk
    max_tries: int = Field(10000, ge=1)

    # legacy predicate on the sentence text; prefer ``filter``
    checker: Optional[Callable[[str], bool]] = None
    # predicate on the whole MarkovResult
    filter: Optional[Callable[[Any], bool]] = None

    @classmethod
    def coerce(cls, options: OptionsLike = None, **overrides) -> "MarkovOptions":
        """Build an options layer from a model, a mapping or keyword arguments."""
        if options is None:
            values: Dict[str, Any] = {}
        elif isinstance(options, MarkovOptions):
            values = options.explicit()
        else:
            values = dict(options)
        values.update(overrides)
        return cls(**values)

    def explicit(self) -> Dict[str, Any]:
        """Fields the caller set explicitly, as a plain dict."""
        return {name: getattr(self, name) for name in self.model_fields_set}

    @classmethod
    def merge(cls, *layers: OptionsLike) -> "MarkovOptions":
        """Merge layers left to right; later layers win."""
        values: Dict[str, Any] = {}
        for layer in layers:
            if layer is None:
                continue
            values.update(cls.coerce(layer).explicit())
        return cls(**values)
