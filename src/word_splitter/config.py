from __future__ import annotations
from dataclasses import dataclass
from pathlib import Path
from typing import Optional
from platformdirs import user_data_dir

# frequency ordered english list (one word per line, gzip)
DEFAULT_WORDS_URL = "https://raw.githubusercontent.com/keredson/wordninja/master/wordninja/wordninja_words.txt.gz"


@dataclass(frozen=True)
class VocabConfig:
    # bundled | file | download
    source: str = "bundled"
    path: Optional[Path] = None
    format: str = "auto"
    name: str = "wordninja-words"
    url: str = DEFAULT_WORDS_URL
    root_dir: Path = Path(user_data_dir("word_splitter", "wsplit")) / "vocab"
    auto_download: bool = True

    @property
    def install_path(self) -> Path:
        return self.root_dir / f"{self.name}.txt"

    @property
    def resolved_path(self) -> Optional[Path]:
        if self.source == "file":
            return self.path
        if self.source == "download":
            return self.install_path
        return None


@dataclass(frozen=True)
class SplitterConfig:
    # entry | uniform | frequency | length
    cost_model: str = "entry"
    unknown_unit_cost: Optional[float] = None
    # lookups are lowercased, token text keeps input casing
    ignore_case: bool = True
    collapse_unknown: bool = False
    prefer_fewer_tokens: bool = True
    prefer_longest_first: bool = True
