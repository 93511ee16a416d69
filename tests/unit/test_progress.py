"""
Unit tests for export progress reporting
"""

import json

import pytest

from core.pdf_export import ExportProgress, ExportStage, ProgressSink


class TestExportStage:
    def test_order(self):
        assert [s.order for s in ExportStage] == [0, 1, 2, 3]
        assert ExportStage.PREPARING.order < ExportStage.COMPLETE.order


class TestExportProgress:
    def test_to_json(self):
        update = ExportProgress(
            stage=ExportStage.RENDERING, pages_done=2, pages_total=4,
            percentage=45.0, message="Rendered batch 1 of 2",
        )
        data = json.loads(update.to_json())
        assert data["stage"] == "rendering"
        assert data["pages_done"] == 2
        assert data["percentage"] == 45.0
        assert "timestamp" in data


class TestProgressSink:
    @pytest.mark.asyncio
    async def test_no_callback(self):
        await ProgressSink().emit(ExportProgress(stage=ExportStage.PREPARING))

    @pytest.mark.asyncio
    async def test_sync_callback(self):
        received = []
        sink = ProgressSink(received.append)
        await sink.emit(ExportProgress(stage=ExportStage.PREPARING))
        assert [u.stage for u in received] == [ExportStage.PREPARING]

    @pytest.mark.asyncio
    async def test_async_callback(self):
        received = []

        async def callback(update):
            received.append(update)

        sink = ProgressSink(callback)
        await sink.emit(ExportProgress(stage=ExportStage.ENCODING))
        assert len(received) == 1

    @pytest.mark.asyncio
    async def test_failing_callback_logged(self, caplog):
        def callback(update):
            raise RuntimeError("boom")

        sink = ProgressSink(callback)
        await sink.emit(ExportProgress(stage=ExportStage.COMPLETE))
        assert "Progress callback error: boom" in caplog.text

    @pytest.mark.asyncio
    async def test_set_callback_replaces(self):
        first, second = [], []
        sink = ProgressSink(first.append)
        sink.set_callback(second.append)
        await sink.emit(ExportProgress(stage=ExportStage.PREPARING))
        assert first == []
        assert len(second) == 1
