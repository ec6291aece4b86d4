from __future__ import annotations
import math
from typing import Dict, Iterable, Iterator, List, Optional, Tuple, Union
from ..errors import DuplicateWordError, EmptyVocabularyError, InvalidWordError
from ..util import get_logger

log = get_logger(__name__)

Number = Union[int, float]


def _fold(ch: str) -> str:
    # casefold can widen a char ("ß" -> "ss"); callers walk every folded char
    return ch.casefold()


class Trie:
    """
    char trie stored as parallel arenas indexed by node id.
    node 0 is the root; children[n] maps a char to a child node id,
    costs[n] is the cost of the word ending at n (None if no word ends there)
    """
    __slots__ = ("children", "costs")

    def __init__(self) -> None:
        self.children: List[Dict[str, int]] = [{}]
        self.costs: List[Optional[float]] = [None]

    def insert(self, key: str, cost: float) -> Optional[float]:
        """insert key; returns the cost already stored for key, if any"""
        node = 0
        for ch in key:
            nxt = self.children[node].get(ch)
            if nxt is None:
                nxt = len(self.children)
                self.children.append({})
                self.costs.append(None)
                self.children[node][ch] = nxt
            node = nxt
        prev = self.costs[node]
        if prev is None:
            self.costs[node] = cost
        return prev

    def find(self, key: str) -> Optional[float]:
        node = 0
        for ch in key:
            nxt = self.children[node].get(ch)
            if nxt is None:
                return None
            node = nxt
        return self.costs[node]

    def common_prefix_search(
        self, text: str, start: int, max_len: int, fold: bool = False
    ) -> Iterator[Tuple[int, float]]:
        """yield (length, cost) for every stored word that prefixes text[start:]"""
        children = self.children
        costs = self.costs
        node = 0
        end = start
        n = len(text)
        while end < n and end - start < max_len:
            ch = text[end]
            if fold:
                for fc in _fold(ch):
                    node = children[node].get(fc, -1)
                    if node < 0:
                        return
            else:
                node = children[node].get(ch, -1)
                if node < 0:
                    return
            end += 1
            cost = costs[node]
            if cost is not None:
                yield end - start, cost


class Vocabulary:
    """
    immutable word -> cost lookup, built once via Vocabulary.build.
    safe to share across threads: nothing mutates it after build
    """
    __slots__ = ("_trie", "_entries", "_max_word_len", "_ignore_case")

    def __init__(self, trie: Trie, entries: Tuple[Tuple[str, float], ...], max_word_len: int, ignore_case: bool) -> None:
        self._trie = trie
        self._entries = entries
        self._max_word_len = max_word_len
        self._ignore_case = ignore_case

    @classmethod
    def build(
        cls,
        words: Iterable[Tuple[str, Number]],
        *,
        allow_empty: bool = False,
        ignore_case: bool = False,
    ) -> "Vocabulary":
        trie = Trie()
        entries: List[Tuple[str, float]] = []
        max_word_len = 0
        for word, cost in words:
            if not isinstance(word, str) or not word:
                raise InvalidWordError(f"vocabulary words must be non-empty strings, got {word!r}")
            cost = float(cost)
            if math.isnan(cost):
                raise InvalidWordError(f"cost for {word!r} is NaN")
            key = word.casefold() if ignore_case else word
            prev = trie.insert(key, cost)
            if prev is not None:
                if prev != cost:
                    raise DuplicateWordError(key, prev, cost)
                continue
            entries.append((key, cost))
            # every input char folds to at least one char, so len(key) bounds a match
            max_word_len = max(max_word_len, len(word), len(key))

        if not entries and not allow_empty:
            raise EmptyVocabularyError()

        log.debug("built vocabulary: %d words, max_word_len=%d, ignore_case=%s", len(entries), max_word_len, ignore_case)
        return cls(trie, tuple(entries), max_word_len, ignore_case)

    @property
    def max_word_len(self) -> int:
        return self._max_word_len

    @property
    def ignore_case(self) -> bool:
        return self._ignore_case

    def matches_starting_at(self, text: str, position: int) -> List[Tuple[int, float]]:
        """
        return (length, cost) for every word that is a prefix of text[position:],
        shortest first; bounded by max_word_len, not vocabulary size
        """
        if position < 0 or position >= len(text):
            return []
        return list(self._trie.common_prefix_search(text, position, self._max_word_len, fold=self._ignore_case))

    def get(self, word: str) -> Optional[float]:
        if self._ignore_case:
            word = word.casefold()
        return self._trie.find(word)

    def words(self) -> List[str]:
        return [w for w, _ in self._entries]

    def __contains__(self, word: object) -> bool:
        return isinstance(word, str) and bool(word) and self.get(word) is not None

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Tuple[str, float]]:
        return iter(self._entries)

    def __repr__(self) -> str:
        return f"Vocabulary(words={len(self._entries)}, max_word_len={self._max_word_len}, ignore_case={self._ignore_case})"
