from .errors import (
    SplitterError,
    VocabularyError,
    DuplicateWordError,
    EmptyVocabularyError,
    InvalidWordError,
    InvalidCostModelError,
)
from .types import Token, TokenStatus, Segmentation, collapse_unknown
from .vocab import Vocabulary
from .costs import CostModel, UniformCost, EntryCost, FrequencyCost, LengthCost, make_cost_model
from .engine import TieBreakPolicy, segment
from .splitter import Splitter, split

__all__ = [
    "SplitterError",
    "VocabularyError",
    "DuplicateWordError",
    "EmptyVocabularyError",
    "InvalidWordError",
    "InvalidCostModelError",
    "Token",
    "TokenStatus",
    "Segmentation",
    "collapse_unknown",
    "Vocabulary",
    "CostModel",
    "UniformCost",
    "EntryCost",
    "FrequencyCost",
    "LengthCost",
    "make_cost_model",
    "TieBreakPolicy",
    "segment",
    "Splitter",
    "split",
    "create_app",
]


def __getattr__(name: str):
    if name == "create_app":
        # fastapi only needed for serving
        from .api import create_app
        return create_app
    raise AttributeError(name)
