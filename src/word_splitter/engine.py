from __future__ import annotations
import math
from dataclasses import dataclass
from typing import List, Optional, Tuple
from .costs import CostModel, EntryCost
from .types import Segmentation, Token, TokenStatus
from .vocab.vocabulary import Vocabulary


@dataclass(frozen=True)
class TieBreakPolicy:
    """
    decides between candidates whose costs are numerically equal.
    default: fewer tokens wins, then the longer first token (leftmost longest)
    """
    prefer_fewer_tokens: bool = True
    prefer_longest_first: bool = True
    rel_tol: float = 1e-9
    abs_tol: float = 1e-12

    def same_cost(self, a: float, b: float) -> bool:
        return math.isclose(a, b, rel_tol=self.rel_tol, abs_tol=self.abs_tol)

    def prefers(self, cost: float, n_tokens: int, best_cost: float, best_tokens: int) -> bool:
        # only strict wins replace; the first candidate seen keeps a full tie
        if self.same_cost(cost, best_cost):
            return self.prefer_fewer_tokens and n_tokens < best_tokens
        return cost < best_cost


DEFAULT_TIE_BREAK = TieBreakPolicy()


def _candidates(vocabulary: Vocabulary, text: str, i: int, longest_first: bool) -> List[Tuple[int, bool]]:
    # (length, known); single char UNKNOWN is always a candidate
    cands = [(length, True) for length, _ in vocabulary.matches_starting_at(text, i)]
    if longest_first:
        cands.reverse()
        cands.append((1, False))
    else:
        cands.insert(0, (1, False))
    return cands


def segment(
    text: str,
    vocabulary: Vocabulary,
    cost_model: Optional[CostModel] = None,
    tie_break: Optional[TieBreakPolicy] = None,
) -> Segmentation:
    """
    minimum total cost segmentation of text.

    DP over suffixes: best[i] is the cheapest way to segment text[i:], filled
    right to left from best[n] = 0. Every position can emit one UNKNOWN char,
    so every suffix is segmentable and the search never fails. O(n * L) time,
    O(n) space; all tables are local to the call.
    """
    if cost_model is None:
        cost_model = EntryCost(vocabulary)
    policy = tie_break or DEFAULT_TIE_BREAK
    unk = float(cost_model.unknown_unit_cost)

    n = len(text)
    best: List[float] = [math.inf] * (n + 1)
    n_tokens: List[int] = [0] * (n + 1)
    nxt: List[int] = [-1] * (n + 1)
    known: List[bool] = [False] * (n + 1)
    step: List[float] = [0.0] * (n + 1)
    best[n] = 0.0

    for i in range(n - 1, -1, -1):
        best_i = math.inf
        tok_i = 0
        for length, is_known in _candidates(vocabulary, text, i, policy.prefer_longest_first):
            j = i + length
            c = float(cost_model.cost(text[i:j])) if is_known else unk
            total = c + best[j]
            t = n_tokens[j] + 1
            # first candidate always lands, even when totals overflow to inf
            if nxt[i] < 0 or policy.prefers(total, t, best_i, tok_i):
                best_i = total
                tok_i = t
                nxt[i] = j
                known[i] = is_known
                step[i] = c
        best[i] = best_i
        n_tokens[i] = tok_i

    # walk forward along the chosen next pointers
    toks: List[Token] = []
    i = 0
    while i < n:
        j = nxt[i]
        toks.append(Token(
            text=text[i:j],
            status=TokenStatus.KNOWN if known[i] else TokenStatus.UNKNOWN,
            start=i,
            end=j,
            cost=step[i],
        ))
        i = j

    return Segmentation(text=text, tokens=tuple(toks), total_cost=best[0])
