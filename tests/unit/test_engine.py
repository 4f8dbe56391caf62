"""Tests for the SynthesisEngine pipeline."""

from __future__ import annotations

import json
from datetime import date
from pathlib import Path
from typing import Any

from fce_synthesis import SynthesisEngine
from fce_synthesis.core.config import AppSettings, StoreConfig
from fce_synthesis.crosschecks import CrosscheckId
from fce_synthesis.models import RecordKind, TestCategory
from fce_synthesis.persistence import MemoryRecordStore
from fce_synthesis.records import RecordStoreAdapter
from fce_synthesis.statistics import trial_stats


def _engine(records: dict[str, Any]) -> SynthesisEngine:
    store = MemoryRecordStore({k: json.dumps(v) for k, v in records.items()})
    return SynthesisEngine(RecordStoreAdapter(store))


class TestSynthesisEngine:
    def test_load_categorizes_every_test(self, stored_records: dict[str, Any]) -> None:
        snapshot = _engine(stored_records).load()
        assert {t.test_name: t.category for t in snapshot.tests} == {
            "Lumbar Flexion": TestCategory.ROM_SPINE_EXTREMITY,
            "Fingering": TestCategory.OCCUPATIONAL,
            "Bilateral Hand Grip": TestCategory.STRENGTH,
        }
        assert all(t.unit_measure for t in snapshot.tests)

    def test_run_from_stored_records(self, stored_records: dict[str, Any], today: date) -> None:
        result = _engine(stored_records).run(today=today)

        grip = next(t for t in result.snapshot.tests if t.test_name == "Bilateral Hand Grip")
        assert trial_stats(grip).deficiency == 16.7
        assert result.crosschecks.get(CrosscheckId.DIAGNOSIS).passed is False
        blocks = result.document.test_blocks()
        assert [b.attributes["category"] for b in blocks] == [
            "Strength",
            "ROM Total Spine/Extremity",
            "Occupational Tasks",
        ]

    def test_each_run_reads_current_records(self, stored_records: dict[str, Any], today: date) -> None:
        store = MemoryRecordStore({k: json.dumps(v) for k, v in stored_records.items()})
        engine = SynthesisEngine(RecordStoreAdapter(store))
        assert len(engine.synthesize(today).test_blocks()) == 3

        store.save(RecordKind.TESTS.value, json.dumps({"tests": [{"testName": "Key Pinch"}]}))
        assert [b.title for b in engine.synthesize(today).test_blocks()] == ["Key Pinch"]

    def test_from_settings_memory(self, today: date) -> None:
        engine = SynthesisEngine.from_settings(AppSettings(store=StoreConfig(backend="memory")))
        document = engine.synthesize(today)
        assert document.test_blocks() == []
        assert document.section("crosschecks").blocks[0].attributes["not_applicable_count"] == "10"

    def test_from_settings_file_store(self, tmp_path: Path, today: date) -> None:
        settings = AppSettings(
            store=StoreConfig(
                backend="file",
                store_path=tmp_path / "records",
                blob_path=tmp_path / "library",
            )
        )
        engine = SynthesisEngine.from_settings(settings, evaluation_id="eval-1")
        assert (tmp_path / "records" / "eval-1").is_dir()
        assert (tmp_path / "library" / "eval-1").is_dir()

        (tmp_path / "records" / "eval-1" / "testData.json").write_text(
            json.dumps({"tests": [{"testName": "Fingering", "measurements": {"trial1": 95}}]}),
            encoding="utf-8",
        )
        blocks = engine.synthesize(today).test_blocks()
        assert [b.attributes["template"] for b in blocks] == ["occupational"]
