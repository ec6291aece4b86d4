from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import List, Tuple


class TokenStatus(str, Enum):
    KNOWN = "KNOWN"
    UNKNOWN = "UNKNOWN"


@dataclass(frozen=True)
class Token:
    text: str
    status: TokenStatus
    start: int
    end: int
    cost: float

    @property
    def known(self) -> bool:
        return self.status is TokenStatus.KNOWN


@dataclass(frozen=True)
class Segmentation:
    text: str
    tokens: Tuple[Token, ...]
    total_cost: float

    @property
    def words(self) -> List[str]:
        return [t.text for t in self.tokens]

    @property
    def unknown_ratio(self) -> float:
        # fraction of input chars covered by UNKNOWN tokens
        if not self.text:
            return 0.0
        unk = sum(t.end - t.start for t in self.tokens if not t.known)
        return unk / len(self.text)

    def join(self, sep: str = " ") -> str:
        return sep.join(t.text for t in self.tokens)

    def collapse_unknown(self) -> "Segmentation":
        return collapse_unknown(self)

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)


def collapse_unknown(seg: Segmentation) -> Segmentation:
    """
    merge runs of consecutive UNKNOWN tokens into one span each;
    token costs are summed so total_cost is unchanged
    """
    out: List[Token] = []
    run: List[Token] = []

    def flush() -> None:
        if not run:
            return
        start = run[0].start
        end = run[-1].end
        out.append(Token(
            text=seg.text[start:end],
            status=TokenStatus.UNKNOWN,
            start=start,
            end=end,
            cost=sum(t.cost for t in run),
        ))
        run.clear()

    for t in seg.tokens:
        if t.known:
            flush()
            out.append(t)
        else:
            run.append(t)
    flush()
    return Segmentation(text=seg.text, tokens=tuple(out), total_cost=seg.total_cost)
