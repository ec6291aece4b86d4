from __future__ import annotations


class SplitterError(Exception):
    """base for every error raised by word_splitter"""


class VocabularyError(SplitterError, ValueError):
    pass


class DuplicateWordError(VocabularyError):
    def __init__(self, word: str, first_cost: float, second_cost: float) -> None:
        super().__init__(
            f"word {word!r} supplied twice with different costs ({first_cost} vs {second_cost})"
        )
        self.word = word
        self.first_cost = first_cost
        self.second_cost = second_cost


class EmptyVocabularyError(VocabularyError):
    def __init__(self) -> None:
        super().__init__("vocabulary is empty; pass allow_empty=True for unknown-only mode")


class InvalidWordError(VocabularyError):
    pass


class InvalidCostModelError(SplitterError, ValueError):
    pass
