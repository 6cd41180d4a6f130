"""Tests for command line argument checks."""
import pytest

from main import build_arg_parser, check_args


def _check(argv):
    parser = build_arg_parser()
    args = parser.parse_args(argv)
    check_args(parser, args)
    return args


class TestCheckArgs:
    def test_watch_output_to_page_rejected(self, tmp_path) -> None:
        page = str(tmp_path / "bids.html")
        with pytest.raises(SystemExit):
            _check([page, "--watch", "--output", page])

    def test_relative_spelling_of_page_rejected(self, tmp_path, monkeypatch) -> None:
        monkeypatch.chdir(tmp_path)
        with pytest.raises(SystemExit):
            _check(["bids.html", "--watch", "--output", str(tmp_path / "bids.html")])

    def test_watch_with_other_output(self, tmp_path) -> None:
        args = _check([str(tmp_path / "bids.html"), "--watch", "--output", str(tmp_path / "sorted.html")])
        assert args.watch

    def test_output_to_page_without_watch(self, tmp_path) -> None:
        page = str(tmp_path / "bids.html")
        assert _check([page, "--action", "sort", "--output", page]).output == page
