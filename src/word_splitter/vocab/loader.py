from __future__ import annotations
import csv
import math
import warnings
from importlib import resources
from pathlib import Path
from typing import Iterable, List, Sequence, Tuple
from ..util import get_logger

log = get_logger(__name__)

WORD_LIST_FORMATS = ("auto", "ranked", "tsv")
BUNDLED_RESOURCE = "words.txt"


def rank_costs(words: Sequence[str]) -> List[Tuple[str, float]]:
    """
    zipf-style costs for a frequency ordered word list:
    cost(rank) = ln(rank * ln(N)), clamped at 0.
    later (rarer) words cost more, so they are less likely to be used
    """
    n = len(words)
    scale = math.log(max(n, 2))
    return [(w, max(0.0, math.log((idx + 1) * scale))) for idx, w in enumerate(words)]


def _read_ranked(lines: Iterable[str]) -> List[Tuple[str, float]]:
    seen = set()
    words: List[str] = []
    repeats = 0
    for line in lines:
        w = line.strip()
        if not w or w.startswith("#"):
            continue
        if w in seen:
            repeats += 1
            continue
        seen.add(w)
        words.append(w)
    if repeats:
        # rank costs would conflict; first (most frequent) rank wins
        warnings.warn(f"word list repeats {repeats} word(s); keeping first occurrence of each", UserWarning)
    return rank_costs(words)


def _read_tsv(lines: Iterable[str]) -> List[Tuple[str, float]]:
    out: List[Tuple[str, float]] = []
    skipped = 0
    reader = csv.reader(lines, delimiter="\t", quoting=csv.QUOTE_NONE)
    for row in reader:
        if not row or not row[0].strip() or row[0].startswith("#"):
            continue
        # word<TAB>cost
        if len(row) < 2:
            skipped += 1
            continue
        try:
            cost = float(row[1])
        except ValueError:
            skipped += 1
            continue
        out.append((row[0].strip(), cost))
    if skipped:
        log.warning("skipped %d malformed word list row(s)", skipped)
    return out


def read_word_list(lines: Sequence[str], fmt: str = "auto") -> List[Tuple[str, float]]:
    if fmt not in WORD_LIST_FORMATS:
        raise ValueError(f"unknown word list format {fmt!r}; expected one of {WORD_LIST_FORMATS}")
    if fmt == "auto":
        first = next((ln for ln in lines if ln.strip() and not ln.startswith("#")), "")
        fmt = "tsv" if "\t" in first else "ranked"
    if fmt == "tsv":
        return _read_tsv(lines)
    return _read_ranked(lines)


def load_word_list(path: Path, fmt: str = "auto", encoding: str = "utf-8") -> List[Tuple[str, float]]:
    """
    read (word, cost) pairs from a file.
    ranked: one word per line, most frequent first
    tsv: word<TAB>cost per line
    """
    path = Path(path)
    with path.open("r", encoding=encoding, newline="") as f:
        lines = f.read().splitlines()
    pairs = read_word_list(lines, fmt)
    log.info("loaded %d words from %s", len(pairs), path)
    return pairs


def bundled_word_list() -> List[Tuple[str, float]]:
    raw = (resources.files("word_splitter") / "data" / BUNDLED_RESOURCE).read_text(encoding="utf-8")
    return read_word_list(raw.splitlines(), "ranked")
