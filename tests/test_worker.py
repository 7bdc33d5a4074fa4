"""Tests for background analysis and cancellation."""

import threading

import pytest

from sheet_analyzer.detection import worker as worker_module
from sheet_analyzer.detection.cancellation import CancellationToken
from sheet_analyzer.detection.frames import Frame
from sheet_analyzer.detection.options import DetectionOptions
from sheet_analyzer.detection.worker import AnalysisWorker
from sheet_analyzer.errors import AnalysisCancelled


class TestCancellationToken:
    """Tests for CancellationToken."""

    def test_starts_active(self):
        token = CancellationToken()
        assert not token.cancelled
        token.raise_if_cancelled()

    def test_cancel(self):
        token = CancellationToken()
        token.cancel()
        assert token.cancelled
        with pytest.raises(AnalysisCancelled):
            token.raise_if_cancelled()


class TestAnalysisWorker:
    """Tests for AnalysisWorker."""

    def test_runs_analysis(self, single_sprite_sheet):
        with AnalysisWorker() as worker:
            result = worker.submit(single_sprite_sheet).result(timeout=10)
        assert result.frames == (Frame(5, 7, 12, 10),)

    def test_latest_result(self, single_sprite_sheet):
        with AnalysisWorker() as worker:
            assert worker.latest_result() is None
            result = worker.submit(single_sprite_sheet).result(timeout=10)
            assert worker.latest_result() is result

    def test_newer_submit_supersedes_older(self, monkeypatch, single_sprite_sheet, strip_sheet):
        started = threading.Event()
        release = threading.Event()
        real_analyze = worker_module.analyze

        def slow_analyze(buffer, options, token):
            if buffer is single_sprite_sheet:
                started.set()
                release.wait(timeout=10)
            return real_analyze(buffer, options, token)

        monkeypatch.setattr(worker_module, "analyze", slow_analyze)

        with AnalysisWorker() as worker:
            first = worker.submit(single_sprite_sheet)
            assert started.wait(timeout=10)
            second = worker.submit(strip_sheet)
            release.set()

            with pytest.raises(AnalysisCancelled):
                first.result(timeout=10)
            result = second.result(timeout=10)

        assert result.frame_count == 4
        assert worker.latest_result() is result

    def test_same_inputs_are_memoized(self, monkeypatch, single_sprite_sheet):
        calls = []
        real_analyze = worker_module.analyze

        def counting_analyze(buffer, options, token):
            calls.append(buffer)
            return real_analyze(buffer, options, token)

        monkeypatch.setattr(worker_module, "analyze", counting_analyze)
        opts = DetectionOptions()

        with AnalysisWorker() as worker:
            first = worker.submit(single_sprite_sheet, opts).result(timeout=10)
            second = worker.submit(single_sprite_sheet, DetectionOptions()).result(timeout=10)

        assert first is second
        assert len(calls) == 1

    def test_cancel(self, monkeypatch, single_sprite_sheet):
        release = threading.Event()
        started = threading.Event()
        real_analyze = worker_module.analyze

        def blocking_analyze(buffer, options, token):
            started.set()
            release.wait(timeout=10)
            return real_analyze(buffer, options, token)

        monkeypatch.setattr(worker_module, "analyze", blocking_analyze)

        with AnalysisWorker() as worker:
            future = worker.submit(single_sprite_sheet)
            assert started.wait(timeout=10)
            worker.cancel()
            release.set()
            with pytest.raises(AnalysisCancelled):
                future.result(timeout=10)
            assert worker.latest_result() is None
