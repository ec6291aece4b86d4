from __future__ import annotations
from dataclasses import dataclass, field
from functools import lru_cache
from typing import List, Tuple
from .config import SplitterConfig, VocabConfig
from .costs import CostModel, make_cost_model
from .engine import TieBreakPolicy, segment
from .types import Segmentation
from .util import get_logger
from .vocab import Vocabulary, bundled_word_list, ensure_word_list, load_word_list

log = get_logger(__name__)


def load_pairs(vocab_cfg: VocabConfig) -> List[Tuple[str, float]]:
    if vocab_cfg.source == "bundled":
        return bundled_word_list()
    if vocab_cfg.source == "file":
        if vocab_cfg.path is None:
            raise ValueError("VocabConfig(source='file') needs a path")
        return load_word_list(vocab_cfg.path, vocab_cfg.format)
    if vocab_cfg.source == "download":
        res = ensure_word_list(vocab_cfg)
        return load_word_list(res.installed_to, vocab_cfg.format)
    raise ValueError(f"unknown vocabulary source {vocab_cfg.source!r}")


@dataclass
class Splitter:
    """
    loads a vocabulary once and reuses it (and the cost model) for every call
    """
    vocab_cfg: VocabConfig = field(default_factory=VocabConfig)
    cfg: SplitterConfig = field(default_factory=SplitterConfig)

    def __post_init__(self) -> None:
        pairs = load_pairs(self.vocab_cfg)
        self.vocabulary = Vocabulary.build(pairs, ignore_case=self.cfg.ignore_case)
        self.cost_model: CostModel = make_cost_model(
            self.cfg.cost_model, self.vocabulary, unknown_unit_cost=self.cfg.unknown_unit_cost
        )
        self.tie_break = TieBreakPolicy(
            prefer_fewer_tokens=self.cfg.prefer_fewer_tokens,
            prefer_longest_first=self.cfg.prefer_longest_first,
        )
        log.info(
            "splitter ready: %d words, cost_model=%s, unknown_unit_cost=%.4f",
            len(self.vocabulary), self.cfg.cost_model, self.cost_model.unknown_unit_cost,
        )

    def segment(self, text: str) -> Segmentation:
        seg = segment(text, self.vocabulary, self.cost_model, self.tie_break)
        if self.cfg.collapse_unknown:
            seg = seg.collapse_unknown()
        return seg

    def split(self, text: str, sep: str = " ") -> str:
        return self.segment(text).join(sep)


@lru_cache(maxsize=1)
def default_splitter() -> Splitter:
    return Splitter()


def split(text: str, sep: str = " ") -> str:
    """split text with the bundled english word list, e.g. "rustisgreat" -> "rust is great" """
    return default_splitter().split(text, sep)
