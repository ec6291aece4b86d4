from __future__ import annotations
import gzip
import io
from dataclasses import dataclass
from pathlib import Path
import requests
from tqdm import tqdm
from ..config import VocabConfig
from ..util import get_logger

log = get_logger(__name__)

GZIP_MAGIC = b"\x1f\x8b"


@dataclass(frozen=True)
class DownloadResult:
    installed_to: Path
    url: str


def word_list_present(cfg: VocabConfig = VocabConfig()) -> bool:
    return cfg.install_path.exists()


def _download_bytes(url: str) -> bytes:
    r = requests.get(url, stream=True, timeout=60)
    r.raise_for_status()
    total = int(r.headers.get("Content-Length", "0") or "0")
    buf = io.BytesIO()
    with tqdm(total=total if total > 0 else None, unit="B", unit_scale=True, desc="downloading word list") as pbar:
        for chunk in r.iter_content(chunk_size=1024 * 1024):
            if not chunk:
                continue
            buf.write(chunk)
            pbar.update(len(chunk))
    return buf.getvalue()


def ensure_word_list(cfg: VocabConfig = VocabConfig()) -> DownloadResult:
    """
    Download the word list at cfg.url into cfg.install_path unless it is already there.
    gzip payloads are decompressed before writing.
    """
    path = cfg.install_path
    if word_list_present(cfg):
        return DownloadResult(installed_to=path, url=cfg.url)
    if not cfg.auto_download:
        raise FileNotFoundError(
            f"word list missing at {path}. "
            "Run `wsplit download-words` or set VocabConfig(auto_download=True)."
        )

    path.parent.mkdir(parents=True, exist_ok=True)
    log.info("downloading word list from %s", cfg.url)
    data = _download_bytes(cfg.url)
    if data[:2] == GZIP_MAGIC:
        data = gzip.decompress(data)

    # a partial file must never count as installed
    tmp = path.with_suffix(path.suffix + ".part")
    tmp.write_bytes(data)
    tmp.replace(path)
    log.info("installed word list to %s", path)
    return DownloadResult(installed_to=path, url=cfg.url)
