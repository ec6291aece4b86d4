from __future__ import annotations
from functools import lru_cache
from typing import List, Optional
from fastapi import FastAPI, HTTPException
from pydantic import BaseModel
from .config import SplitterConfig, VocabConfig
from .errors import InvalidCostModelError
from .splitter import Splitter


class TokenOut(BaseModel):
    text: str
    status: str
    start: int
    end: int
    cost: float


class SegmentRequest(BaseModel):
    text: str
    cost_model: str = "entry"
    unknown_unit_cost: Optional[float] = None
    ignore_case: bool = True
    collapse_unknown: bool = False


class SegmentResponse(BaseModel):
    tokens: List[TokenOut]
    total_cost: float
    joined: str


@lru_cache(maxsize=32)
def _splitter(cfg: SplitterConfig) -> Splitter:
    # one read-only Splitter per config
    return Splitter(vocab_cfg=VocabConfig(), cfg=cfg)


def create_app() -> FastAPI:
    app = FastAPI(title="Word Splitter", version="1.0.0")

    @app.get("/")
    def root() -> dict:
        return {
            "name": "Word Splitter",
            "docs": "/docs",
            "health": "/health",
            "segment": "/segment",
        }

    @app.get("/health")
    def health() -> dict:
        return {"ok": True}

    @app.post("/segment", response_model=SegmentResponse)
    def segment(req: SegmentRequest) -> SegmentResponse:
        cfg = SplitterConfig(
            cost_model=req.cost_model,
            unknown_unit_cost=req.unknown_unit_cost,
            ignore_case=req.ignore_case,
            collapse_unknown=req.collapse_unknown,
        )
        try:
            sp = _splitter(cfg)
        except InvalidCostModelError as e:
            raise HTTPException(status_code=422, detail=str(e)) from e
        seg = sp.segment(req.text)
        return SegmentResponse(
            tokens=[
                TokenOut(text=t.text, status=t.status.value, start=t.start, end=t.end, cost=t.cost)
                for t in seg.tokens
            ],
            total_cost=seg.total_cost,
            joined=seg.join(),
        )

    return app
