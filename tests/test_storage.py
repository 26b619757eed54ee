"""Tests for the dataset and key-value store."""

import csv
import json

import pytest

from pageinsight.storage import Dataset, KeyValueStore, ContentType


class TestDataset:

    @pytest.mark.asyncio
    async def test_items_come_back_in_push_order(self, tmp_path):
        dataset = Dataset(tmp_path)
        await dataset.push_data({"url": "https://a.example"})
        await dataset.push_data([{"url": "https://b.example"}, {"url": "https://c.example"}])

        items = dataset.get_items()

        assert [item["url"] for item in items] == ["https://a.example", "https://b.example", "https://c.example"]
        assert dataset.item_count == 3
        assert (tmp_path / "datasets" / "default" / "000000001.json").exists()

    @pytest.mark.asyncio
    async def test_reopened_dataset_appends(self, tmp_path):
        await Dataset(tmp_path).push_data({"n": 1})
        reopened = Dataset(tmp_path)
        await reopened.push_data({"n": 2})

        assert [item["n"] for item in reopened.get_items()] == [1, 2]

    @pytest.mark.asyncio
    async def test_numbering_continues_after_highest_item(self, tmp_path):
        item_dir = tmp_path / "datasets" / "default"
        item_dir.mkdir(parents=True)
        (item_dir / "000000001.json").write_text(json.dumps({"n": 1}))
        (item_dir / "000000003.json").write_text(json.dumps({"n": 3}))

        dataset = Dataset(tmp_path)
        written = await dataset.push_data({"n": 4})

        assert written == [str(item_dir / "000000004.json")]
        assert json.loads((item_dir / "000000003.json").read_text()) == {"n": 3}
        assert [item["n"] for item in dataset.get_items()] == [1, 3, 4]

    @pytest.mark.asyncio
    async def test_export_json(self, tmp_path):
        dataset = Dataset(tmp_path)
        await dataset.push_data({"url": "https://a.example", "analytics": {"readingTime": 1}})

        destination = dataset.export(tmp_path / "out" / "items.json")

        assert json.loads(destination.read_text()) == [{"url": "https://a.example", "analytics": {"readingTime": 1}}]

    @pytest.mark.asyncio
    async def test_export_csv_flattens_nested_objects(self, tmp_path):
        dataset = Dataset(tmp_path)
        await dataset.push_data({"url": "https://a.example", "headings": ["A"], "analytics": {"readingTime": 1}})
        await dataset.push_data({"error": True, "url": "https://b.example"})

        destination = dataset.export(tmp_path / "items.csv", fmt="csv")
        with open(destination, newline="", encoding="utf-8") as f:
            rows = list(csv.DictReader(f))

        assert rows[0]["analytics.readingTime"] == "1"
        assert rows[0]["headings"] == '["A"]'
        assert rows[1]["error"] == "True"

    def test_export_rejects_unknown_format(self, tmp_path):
        with pytest.raises(ValueError):
            Dataset(tmp_path).export(tmp_path / "items.xml", fmt="xml")


class TestKeyValueStore:

    @pytest.mark.asyncio
    async def test_json_round_trip(self, tmp_path):
        store = KeyValueStore(tmp_path)
        await store.set_value("PERFORMANCE_REPORT", {"summary": {"totalProcessed": 1}})

        assert await store.get_value("PERFORMANCE_REPORT") == {"summary": {"totalProcessed": 1}}
        assert (tmp_path / "key_value_stores" / "default" / "PERFORMANCE_REPORT.json").exists()

    @pytest.mark.asyncio
    async def test_text_value(self, tmp_path):
        store = KeyValueStore(tmp_path)
        await store.set_value("NOTES", "plain text", content_type=ContentType.TEXT)

        assert await store.get_value("NOTES") == "plain text"

    @pytest.mark.asyncio
    async def test_missing_key_returns_default(self, tmp_path):
        assert await KeyValueStore(tmp_path).get_value("NOPE", default={}) == {}

    def test_rejects_path_keys(self, tmp_path):
        with pytest.raises(ValueError):
            KeyValueStore(tmp_path).get_file_path("../escape")
