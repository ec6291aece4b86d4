from __future__ import annotations
import json
from pathlib import Path
from typing import Optional
import typer
from rich import print as rprint
from .config import DEFAULT_WORDS_URL, SplitterConfig, VocabConfig
from .splitter import Splitter
from .util import configure_logging
from .vocab.downloader import ensure_word_list


app = typer.Typer(add_completion=False)


@app.callback()
def main(
    log_level: Optional[str] = typer.Option(None, help="log level (default: $WSPLIT_LOG_LEVEL or WARNING)"),
) -> None:
    configure_logging(log_level)


@app.command("download-words")
def download_words(
    url: str = typer.Option(DEFAULT_WORDS_URL, help="word list url (plain or gzip)"),
    name: str = typer.Option("wordninja-words", help="name to install the list under"),
) -> None:
    cfg = VocabConfig(source="download", url=url, name=name)
    res = ensure_word_list(cfg)
    rprint(f"[green]OK[/green] installed word list to: {res.installed_to}")


@app.command("split")
def split(
    text: str,
    words: Optional[Path] = typer.Option(None, help="word list file (ranked or word<TAB>cost)"),
    downloaded: bool = typer.Option(False, help="use the downloaded word list"),
    cost_model: str = typer.Option("entry", help="entry | uniform | frequency | length"),
    unknown_cost: Optional[float] = typer.Option(None, help="cost per unknown char"),
    collapse: bool = typer.Option(False, help="merge runs of unknown chars"),
    case_sensitive: bool = typer.Option(False, help="match case exactly"),
    as_json: bool = typer.Option(False, "--json", help="print tokens as json"),
) -> None:
    if words is not None:
        vocab_cfg = VocabConfig(source="file", path=words)
    elif downloaded:
        vocab_cfg = VocabConfig(source="download")
    else:
        vocab_cfg = VocabConfig()
    cfg = SplitterConfig(
        cost_model=cost_model,
        unknown_unit_cost=unknown_cost,
        ignore_case=not case_sensitive,
        collapse_unknown=collapse,
    )
    seg = Splitter(vocab_cfg=vocab_cfg, cfg=cfg).segment(text)
    if as_json:
        typer.echo(json.dumps({
            "tokens": [
                {"text": t.text, "status": t.status.value, "start": t.start, "end": t.end, "cost": t.cost}
                for t in seg.tokens
            ],
            "total_cost": seg.total_cost,
        }, ensure_ascii=False))
        return
    for t in seg.tokens:
        color = "green" if t.known else "red"
        rprint(f"{t.start:>4}-{t.end:<4} [{color}]{t.status.value:<7}[/{color}] {t.cost:>8.3f} {t.text}")
    rprint(f"total cost: {seg.total_cost:.3f}")


@app.command("serve")
def serve(
    host: str = typer.Option("127.0.0.1"),
    port: int = typer.Option(8000),
) -> None:
    import uvicorn
    from .api import create_app
    uvicorn.run(create_app(), host=host, port=port)


if __name__ == "__main__":
    app()
