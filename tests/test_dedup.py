import logging
from pathlib import Path

from endpoint_sift.config import DedupConfig
from endpoint_sift.core.comparer import Comparer
from endpoint_sift.core.dedup import DedupStore
from endpoint_sift.core.models import Request, Response


def _transcript(body: bytes, path: str = "/") -> bytes:
    request = Request(method="GET", host="http://a.test", path=path)
    response = Response(
        request=request,
        status="200 OK",
        status_code=200,
        headers=["Content-Type: text/html"],
        body=body,
    )
    return response.transcript()


def _store() -> DedupStore:
    return DedupStore(Comparer(DedupConfig()))


def test_admit_missing_bucket_accepts(tmp_path: Path):
    assert _store().admit(tmp_path / "a.test" / "200", b"anything") is True


def test_admit_rejects_empty_bodies_regardless_of_headers(tmp_path: Path):
    (tmp_path / "stored").write_bytes(_transcript(b"", path="/one"))
    assert _store().admit(tmp_path, _transcript(b"", path="/two")) is False


def test_admit_rejects_identical_body(tmp_path: Path):
    body = b'<div class="login"><form class="auth"><input></form></div>'
    (tmp_path / "stored").write_bytes(_transcript(body, path="/login"))
    assert _store().admit(tmp_path, _transcript(body, path="/signin")) is False


def test_admit_accepts_different_markup(tmp_path: Path):
    (tmp_path / "stored").write_bytes(_transcript(b'<div class="nav main"><p>hi</p></div>'))
    candidate = _transcript(b'<table class="grid"><tr><td>1</td></tr></table>')
    assert _store().admit(tmp_path, candidate) is True


def test_admit_stops_at_first_duplicate(tmp_path: Path):
    for name in ("a", "b", "c"):
        (tmp_path / name).write_bytes(b"stored " + name.encode())

    class CountingComparer:
        def __init__(self) -> None:
            self.calls: list[bytes] = []

        def is_duplicate(self, candidate: bytes, stored: bytes):
            self.calls.append(stored)
            return True, 1.0

    comparer = CountingComparer()
    assert DedupStore(comparer).admit(tmp_path, b"candidate") is False
    assert comparer.calls == [b"stored a"]


def test_admit_ignores_nested_directories(tmp_path: Path):
    (tmp_path / "nested").mkdir()
    assert _store().admit(tmp_path, b"candidate") is True


def test_admit_does_not_write(tmp_path: Path):
    _store().admit(tmp_path, b"candidate")
    assert list(tmp_path.iterdir()) == []


def test_admit_treats_file_as_bucket_as_empty(tmp_path: Path):
    bucket = tmp_path / "200"
    bucket.write_bytes(b"not a directory")
    assert _store().admit(bucket, b"candidate") is True


def test_admit_skips_unreadable_stored_file(tmp_path: Path, monkeypatch):
    body = b'<div class="login"><form class="auth"><input></form></div>'
    (tmp_path / "a-unreadable").write_bytes(b"ignored")
    (tmp_path / "b-stored").write_bytes(_transcript(body))
    original_read_bytes = Path.read_bytes

    def read_bytes(self: Path) -> bytes:
        if self.name == "a-unreadable":
            raise PermissionError(13, "Permission denied", str(self))
        return original_read_bytes(self)

    monkeypatch.setattr(Path, "read_bytes", read_bytes)
    assert _store().admit(tmp_path, _transcript(body, path="/other")) is False


def test_admit_logs_score_with_candidate_label(tmp_path: Path, caplog):
    (tmp_path / "stored").write_bytes(_transcript(b"<p>x</p>"))
    with caplog.at_level(logging.DEBUG, logger="endpoint_sift.core.dedup"):
        _store().admit(tmp_path, _transcript(b"<p>x</p>"), "http://a.test/admin")
    assert any(
        "http://a.test/admin" in record.getMessage() and "stored" in record.getMessage()
        for record in caplog.records
    )
