from fastapi.testclient import TestClient

from word_splitter.api import create_app

client = TestClient(create_app())


def test_health():
    assert client.get("/health").json() == {"ok": True}
    assert client.get("/").json()["segment"] == "/segment"


def test_segment():
    r = client.post("/segment", json={"text": "bankofjordan"})
    assert r.status_code == 200
    body = r.json()
    assert body["joined"] == "bank of jordan"
    assert [t["status"] for t in body["tokens"]] == ["KNOWN"] * 3
    assert body["tokens"][-1]["end"] == len("bankofjordan")


def test_segment_collapse_unknown():
    r = client.post("/segment", json={"text": "bankqqqq", "collapse_unknown": True})
    assert r.status_code == 200
    tokens = r.json()["tokens"]
    assert [(t["text"], t["status"]) for t in tokens] == [("bank", "KNOWN"), ("qqqq", "UNKNOWN")]


def test_segment_bad_cost_model():
    r = client.post("/segment", json={"text": "abc", "cost_model": "bogus"})
    assert r.status_code == 422
