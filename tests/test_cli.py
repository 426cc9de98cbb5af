from pathlib import Path

import pytest

from endpoint_sift import cli
from endpoint_sift.core.models import Request, Response


class FakeFetcher:
    instances: list["FakeFetcher"] = []

    def __init__(self, config) -> None:
        self.config = config
        self.closed = False
        FakeFetcher.instances.append(self)

    def __call__(self, request: Request) -> Response:
        return Response(
            request=request,
            status="200 OK",
            status_code=200,
            headers=["Content-Type: text/plain"],
            body=f"body of {request.path}".encode(),
        )

    def close(self) -> None:
        self.closed = True


def test_build_parser_defaults():
    args = cli.build_parser().parse_args([])
    assert args.paths == "./paths"
    assert args.hosts == "./hosts"
    assert args.output == "./out"
    assert args.concurrency == 20
    assert args.timeout == 10000
    assert args.method == "GET"
    assert args.savestatus == []


def test_main_missing_default_inputs_exits_nonzero(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    monkeypatch.chdir(tmp_path)
    assert cli.main([]) == 1
    assert not (tmp_path / "out").exists()


def test_main_runs_with_literal_inputs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
    FakeFetcher.instances.clear()
    monkeypatch.setattr("endpoint_sift.runner.Fetcher", FakeFetcher)
    output = tmp_path / "out"

    exit_code = cli.main(
        [
            "/robots.txt",
            "http://a.test",
            str(output),
            "-c",
            "2",
            "-t",
            "2500",
            "-X",
            "HEAD",
            "-H",
            "X-Test: 1",
            "-s",
            "200",
            "-L",
            "--no-headers",
        ]
    )

    assert exit_code == 0
    (fetcher,) = FakeFetcher.instances
    assert fetcher.config.timeout == 2.5
    assert fetcher.config.method == "HEAD"
    assert fetcher.config.headers == ("X-Test: 1",)
    assert fetcher.config.follow_redirects is True
    assert fetcher.closed is True
    lines = (output / "index").read_text(encoding="utf-8").splitlines()
    assert len(lines) == 1
    assert lines[0].endswith(" http://a.test/robots.txt (200 OK)")
    saved = Path(lines[0].split(" ")[0])
    assert saved.read_bytes() == b"body of /robots.txt"
