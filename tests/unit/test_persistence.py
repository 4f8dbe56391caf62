"""Tests for record, blob, and profile stores."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from fce_synthesis.core.config import ProfileConfig, StoreConfig
from fce_synthesis.exceptions import ProfileStoreError
from fce_synthesis.models import BlobAsset
from fce_synthesis.persistence import (
    FileBlobStore,
    FileRecordStore,
    IBlobStore,
    IRecordStore,
    MemoryBlobStore,
    MemoryRecordStore,
    build_profile_store,
    build_record_store,
)
from fce_synthesis.persistence import dynamodb_profile_store
from fce_synthesis.persistence.dynamodb_profile_store import DynamoDBProfileStore
from fce_synthesis.persistence.s3_backend import S3RecordStore
from tests.fakes.fake_aws import BrokenDynamoDBClient, FakeDynamoDBClient, FakeS3Client


class TestFileRecordStore:
    def test_one_file_per_record(self, tmp_path: Path) -> None:
        store = FileRecordStore(tmp_path / "records")
        store.save("testData", '{"tests": []}')

        assert store.path_for("testData") == tmp_path / "records" / "testData.json"
        assert store.path_for("testData").read_text(encoding="utf-8") == '{"tests": []}'
        assert store.load("testData") == '{"tests": []}'

    def test_save_replaces(self, tmp_path: Path) -> None:
        store = FileRecordStore(tmp_path)
        store.save("claimantData", "{}")
        store.save("claimantData", '{"firstName": "Jane"}')
        assert json.loads(store.load("claimantData")) == {"firstName": "Jane"}

    def test_missing_key(self, tmp_path: Path) -> None:
        with pytest.raises(KeyError, match="testData"):
            FileRecordStore(tmp_path).load("testData")

    def test_path_separators_are_flattened(self, tmp_path: Path) -> None:
        store = FileRecordStore(tmp_path)
        store.save("../escape", "{}")
        assert (tmp_path / ".._escape.json").is_file()

    def test_satisfies_protocol(self, tmp_path: Path) -> None:
        assert isinstance(FileRecordStore(tmp_path), IRecordStore)


class TestMemoryRecordStore:
    def test_seeded_records(self) -> None:
        store = MemoryRecordStore({"testData": "{}"})
        store.save("claimantData", "[]")
        assert store.load("testData") == "{}"
        assert store.load("claimantData") == "[]"
        with pytest.raises(KeyError):
            store.load("evaluatorData")
        assert isinstance(store, IRecordStore)


class TestS3RecordStore:
    def _store(self, client: FakeS3Client, **kwargs: str) -> S3RecordStore:
        return S3RecordStore(bucket="fce", s3_client=client, **kwargs)

    def test_namespaced_keys(self) -> None:
        client = FakeS3Client()
        store = self._store(client, evaluation_id="eval-7")
        store.save("testData", "{}")
        assert ("fce", "records/eval-7/testData.json") in client.objects
        assert store.load("testData") == "{}"

    def test_missing_key(self) -> None:
        with pytest.raises(KeyError):
            self._store(FakeS3Client()).load("testData")

    def test_kms_encryption(self) -> None:
        client = FakeS3Client()
        self._store(client, kms_key_id="key-1").save("testData", "{}")
        assert client.put_calls[0]["ServerSideEncryption"] == "aws:kms"
        assert client.put_calls[0]["SSEKMSKeyId"] == "key-1"

    def test_plain_put_without_kms(self) -> None:
        client = FakeS3Client()
        self._store(client, prefix="fce/").save("claimantData", "{}")
        assert "ServerSideEncryption" not in client.put_calls[0]
        assert client.put_calls[0]["Key"] == "fce/claimantData.json"


class TestBlobStores:
    def test_file_store_round_trip(self, tmp_path: Path) -> None:
        store = FileBlobStore(tmp_path)
        store.put(BlobAsset(id="scan/1", name="Scan", mime_type="application/pdf", data=b"%PDF", category="Docs"))
        store.put(BlobAsset(id="a", name="First", data=b"x"))

        assets = store.list_assets()
        assert [a.id for a in assets] == ["a", "scan/1"]
        assert assets[1].data == b"%PDF"
        assert assets[1].mime_type == "application/pdf"
        assert assets[0].mime_type == "application/octet-stream"
        assert isinstance(store, IBlobStore)

    def test_file_store_skips_broken_entries(self, tmp_path: Path) -> None:
        store = FileBlobStore(tmp_path)
        store.put(BlobAsset(id="ok", name="Ok", data=b"1"))
        (tmp_path / "bad.meta.json").write_text("{oops", encoding="utf-8")
        (tmp_path / "orphan.meta.json").write_text(json.dumps({"id": "orphan"}), encoding="utf-8")
        (tmp_path / "listed.meta.json").write_text("[1, 2]", encoding="utf-8")
        (tmp_path / "listed.bin").write_bytes(b"2")
        assert [a.id for a in store.list_assets()] == ["ok"]

    def test_memory_store_replaces_by_id(self) -> None:
        store = MemoryBlobStore()
        store.put(BlobAsset(id="b", name="old"))
        store.put(BlobAsset(id="a", name="A"))
        store.put(BlobAsset(id="b", name="new"))
        assert [(a.id, a.name) for a in store.list_assets()] == [("a", "A"), ("b", "new")]


class TestDynamoDBProfileStore:
    def test_reads_and_caches(self) -> None:
        client = FakeDynamoDBClient()
        client.add_profile("ev-1", {"name": "A. Evaluator", "licenseNo": "PT-42"})
        store = DynamoDBProfileStore(table_name="profiles", boto3_client=client)

        assert store.get_profile("ev-1") == {"name": "A. Evaluator", "licenseNo": "PT-42"}
        store.get_profile("ev-1")
        assert client.get_calls == 1

        store.clear_cache()
        store.get_profile("ev-1")
        assert client.get_calls == 2

    def test_returned_profile_is_a_copy(self) -> None:
        client = FakeDynamoDBClient()
        client.add_profile("ev-1", {"name": "A"})
        store = DynamoDBProfileStore(table_name="profiles", boto3_client=client)
        store.get_profile("ev-1")["name"] = "changed"
        assert store.get_profile("ev-1") == {"name": "A"}

    def test_missing_profile(self) -> None:
        store = DynamoDBProfileStore(table_name="profiles", boto3_client=FakeDynamoDBClient())
        assert store.get_profile("ev-404") is None

    def test_malformed_profile(self) -> None:
        client = FakeDynamoDBClient()
        client.add_raw("ev-1", "{broken")
        store = DynamoDBProfileStore(table_name="profiles", boto3_client=client)
        with pytest.raises(ProfileStoreError):
            store.get_profile("ev-1")

    def test_unreachable(self) -> None:
        store = DynamoDBProfileStore(table_name="profiles", boto3_client=BrokenDynamoDBClient())
        with pytest.raises(ProfileStoreError, match="ev-1"):
            store.get_profile("ev-1")

    def test_cache_expiry(self, monkeypatch: pytest.MonkeyPatch) -> None:
        clock = [1000.0]
        monkeypatch.setattr(dynamodb_profile_store.time, "monotonic", lambda: clock[0])
        client = FakeDynamoDBClient()
        client.add_profile("ev-1", {"name": "A"})
        store = DynamoDBProfileStore(table_name="profiles", boto3_client=client, cache_ttl_seconds=5)
        store.get_profile("ev-1")
        clock[0] += 6
        store.get_profile("ev-1")
        assert client.get_calls == 2


class TestFactories:
    def test_memory_backend(self) -> None:
        assert isinstance(build_record_store(StoreConfig(backend="memory")), MemoryRecordStore)

    def test_file_backend_per_evaluation(self, tmp_path: Path) -> None:
        backend = build_record_store(StoreConfig(backend="file", store_path=tmp_path), "eval-1")
        assert isinstance(backend, FileRecordStore)
        assert (tmp_path / "eval-1").is_dir()

    def test_profile_store_disabled(self) -> None:
        assert build_profile_store(ProfileConfig(enabled=False)) is None
