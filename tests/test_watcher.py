"""Tests for change debouncing and the page watcher."""
import os

from gem_bid_filter.watcher import ChangeDebouncer, DocumentWatcher


class TestChangeDebouncer:
    def test_idle(self) -> None:
        debouncer = ChangeDebouncer(0.3)
        assert not debouncer.pending
        assert not debouncer.due(10.0)

    def test_burst_coalesces(self) -> None:
        debouncer = ChangeDebouncer(0.3)
        debouncer.notify(10.0)
        debouncer.notify(10.2)
        assert not debouncer.due(10.4)
        assert debouncer.due(10.5)

    def test_reset(self) -> None:
        debouncer = ChangeDebouncer(0.3)
        debouncer.notify(1.0)
        debouncer.reset()
        assert not debouncer.due(5.0)


class TestDocumentWatcher:
    def _touch(self, path, mtime):
        os.utime(path, (mtime, mtime))

    def test_one_callback_per_burst(self, tmp_path) -> None:
        page = tmp_path / "page.html"
        page.write_text("<html></html>", encoding="utf-8")
        self._touch(page, 1_000_000)
        calls = []
        watcher = DocumentWatcher(str(page), lambda: calls.append(1), debouncer=ChangeDebouncer(0.3))

        assert not watcher.poll_once(now=100.0)

        self._touch(page, 1_000_010)
        assert not watcher.poll_once(now=100.0)
        self._touch(page, 1_000_020)
        assert not watcher.poll_once(now=100.2)
        assert watcher.poll_once(now=100.6)
        assert not watcher.poll_once(now=101.0)
        assert calls == [1]

    def test_missing_file(self, tmp_path) -> None:
        calls = []
        watcher = DocumentWatcher(str(tmp_path / "gone.html"), lambda: calls.append(1))
        assert not watcher.poll_once(now=1.0)
        assert calls == []

    def test_run_bounded(self, tmp_path) -> None:
        page = tmp_path / "page.html"
        page.write_text("<html></html>", encoding="utf-8")
        watcher = DocumentWatcher(str(page), lambda: None, poll_interval=0)
        watcher.run(max_polls=2)
