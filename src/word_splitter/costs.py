from __future__ import annotations
import math
from typing import Callable, Dict, Optional, Protocol, runtime_checkable
from .errors import InvalidCostModelError
from .vocab.vocabulary import Vocabulary


@runtime_checkable
class CostModel(Protocol):
    """lower is better; unknown_unit_cost is charged per unmatched char"""

    @property
    def unknown_unit_cost(self) -> float: ...

    def cost(self, word: str) -> float: ...


def _resolve_unknown_cost(
    vocabulary: Vocabulary,
    cost_fn: Callable[[str], float],
    unknown_unit_cost: Optional[float],
) -> float:
    """
    check every word cost is finite and non-negative, then make sure
    one unknown char costs more than any real word does per char
    """
    max_unit = 0.0
    for word, _ in vocabulary:
        c = cost_fn(word)
        if not math.isfinite(c) or c < 0:
            raise InvalidCostModelError(f"cost for {word!r} must be finite and non-negative, got {c}")
        max_unit = max(max_unit, c / len(word))
    if unknown_unit_cost is None:
        return max_unit + 1.0
    unknown_unit_cost = float(unknown_unit_cost)
    if not math.isfinite(unknown_unit_cost) or unknown_unit_cost <= max_unit:
        raise InvalidCostModelError(
            f"unknown_unit_cost={unknown_unit_cost} must exceed the highest per-char word cost ({max_unit})"
        )
    return unknown_unit_cost


class UniformCost:
    """every word costs the same, so fewer tokens wins"""

    def __init__(self, vocabulary: Vocabulary, word_cost: float = 1.0, unknown_unit_cost: Optional[float] = None) -> None:
        self.word_cost = float(word_cost)
        self._unknown = _resolve_unknown_cost(vocabulary, self.cost, unknown_unit_cost)

    @property
    def unknown_unit_cost(self) -> float:
        return self._unknown

    def cost(self, word: str) -> float:
        return self.word_cost


class EntryCost:
    """the cost stored with each word at Vocabulary.build time"""

    def __init__(self, vocabulary: Vocabulary, unknown_unit_cost: Optional[float] = None) -> None:
        self.vocabulary = vocabulary
        self._unknown = _resolve_unknown_cost(vocabulary, self.cost, unknown_unit_cost)

    @property
    def unknown_unit_cost(self) -> float:
        return self._unknown

    def cost(self, word: str) -> float:
        c = self.vocabulary.get(word)
        if c is None:
            # not a dictionary word; price it as unknown chars
            return self._unknown * len(word)
        return c


class FrequencyCost:
    """
    stored values are occurrence counts; cost(word) = -log(count / total),
    so more probable words are cheaper
    """

    def __init__(self, vocabulary: Vocabulary, unknown_unit_cost: Optional[float] = None) -> None:
        self.vocabulary = vocabulary
        total = 0.0
        for word, count in vocabulary:
            if not math.isfinite(count) or count <= 0:
                raise InvalidCostModelError(f"count for {word!r} must be positive, got {count}")
            total += count
        self.total = total
        self._unknown = _resolve_unknown_cost(vocabulary, self.cost, unknown_unit_cost)

    @property
    def unknown_unit_cost(self) -> float:
        return self._unknown

    def cost(self, word: str) -> float:
        count = self.vocabulary.get(word)
        if count is None:
            return self._unknown * len(word)
        # max() keeps a single-word vocabulary at 0.0 rather than -0.0
        return max(0.0, -math.log(count / self.total))


class LengthCost:
    """cost(word) = scale / len(word); longer matches are cheaper"""

    def __init__(self, vocabulary: Vocabulary, scale: float = 1.0, unknown_unit_cost: Optional[float] = None) -> None:
        if not math.isfinite(scale) or scale <= 0:
            raise InvalidCostModelError(f"scale must be positive, got {scale}")
        self.scale = float(scale)
        self._unknown = _resolve_unknown_cost(vocabulary, self.cost, unknown_unit_cost)

    @property
    def unknown_unit_cost(self) -> float:
        return self._unknown

    def cost(self, word: str) -> float:
        return self.scale / len(word)


COST_MODELS: Dict[str, Callable[..., CostModel]] = {
    "entry": EntryCost,
    "uniform": UniformCost,
    "frequency": FrequencyCost,
    "length": LengthCost,
}


def make_cost_model(name: str, vocabulary: Vocabulary, unknown_unit_cost: Optional[float] = None, **kwargs) -> CostModel:
    try:
        factory = COST_MODELS[name]
    except KeyError:
        raise InvalidCostModelError(f"unknown cost model {name!r}; expected one of {sorted(COST_MODELS)}") from None
    return factory(vocabulary, unknown_unit_cost=unknown_unit_cost, **kwargs)
