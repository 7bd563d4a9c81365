"""Tests for common.local_io and common.aws modules."""

import json
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from unittest.mock import patch

from common.aws import build_s3_key, upload_jsonl_records_to_s3
from common.local_io import save_jsonl_records_local


@dataclass
class Record:
    id: str
    created_at: datetime


class TestSaveJsonlRecordsLocal:
    def test_writes_one_line_per_record(self, tmp_path: Path) -> None:
        records = [
            Record(id="a", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc)),
            Record(id="b", created_at=datetime(2024, 1, 2, tzinfo=timezone.utc)),
        ]
        filepath = save_jsonl_records_local(records, "headlines", output_dir=str(tmp_path / "out"))

        lines = filepath.read_text().splitlines()
        assert filepath.name.startswith("headlines_")
        assert [json.loads(line)["id"] for line in lines] == ["a", "b"]
        assert json.loads(lines[0])["created_at"] == "2024-01-01T00:00:00+00:00"


class TestS3:
    def test_build_s3_key_is_partitioned(self) -> None:
        ts = datetime(2024, 3, 7, tzinfo=timezone.utc)
        assert build_s3_key("headlines", ts, "f.jsonl") == "headlines/year=2024/month=03/day=07/f.jsonl"

    @patch("common.aws.upload_jsonl_to_s3")
    def test_upload_records_serializes_and_uploads(self, mock_upload, monkeypatch) -> None:
        monkeypatch.setenv("S3_BUCKET_NAME", "bucket")
        records = [Record(id="a", created_at=datetime(2024, 1, 1, tzinfo=timezone.utc))]

        key = upload_jsonl_records_to_s3(records, "headlines")

        serialized, bucket, uploaded_key = mock_upload.call_args[0]
        assert bucket == "bucket"
        assert uploaded_key == key
        assert key.startswith("headlines/year=")
        assert serialized == [{"id": "a", "created_at": "2024-01-01T00:00:00+00:00"}]
