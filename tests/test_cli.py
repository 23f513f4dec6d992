from __future__ import annotations

import pytest

from boardsearch.cli.main import build_parser, main


def test_perft_command(capsys, monkeypatch) -> None:
    monkeypatch.delenv("BOARDSEARCH_SEARCH_DEPTH", raising=False)
    main(["--config", "does-not-exist.toml", "perft", "--depth", "1"])
    out = capsys.readouterr().out
    assert out.startswith("nodes=188 depth=1 ")


def test_play_depth_flag() -> None:
    args = build_parser().parse_args(["play", "--depth", "2"])
    assert args.command == "play"
    assert args.depth == 2


def test_command_required() -> None:
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
