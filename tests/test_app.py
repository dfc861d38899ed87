from pathlib import Path
from types import SimpleNamespace

import pytest

from app import _export_csv, _extract_upload
from schemas.extracted_job import ExtractedJobData


class RecordingAgent:
    def __init__(self, error=None):
        self.error = error
        self.seen = []

    async def extract(self, image_ref):
        path = Path(image_ref)
        self.seen.append((path, path.read_bytes()))
        if self.error:
            raise self.error
        return ExtractedJobData(company="Acme", source_image_url=image_ref)


def _upload():
    return SimpleNamespace(name="offer.jpg", getvalue=lambda: b"\xff\xd8 jpeg bytes")


def test_upload_temp_file_is_removed_after_extraction():
    agent = RecordingAgent()
    job = _extract_upload(_upload(), agent)
    path, data = agent.seen[0]
    assert job.company == "Acme"
    assert data == b"\xff\xd8 jpeg bytes"
    assert path.suffix == ".jpg"
    assert not path.exists()


def test_upload_temp_file_is_removed_when_extraction_raises():
    agent = RecordingAgent(error=RuntimeError("boom"))
    with pytest.raises(RuntimeError):
        _extract_upload(_upload(), agent)
    assert not agent.seen[0][0].exists()


def test_export_csv_uses_record_shape():
    record = ExtractedJobData(company="Acme", title="SWE", date="2024-01-01").to_record()
    lines = _export_csv(record).decode("utf-8").splitlines()
    assert lines[0] == "company,title,status,date,notes,sourceImageUrl"
    assert lines[1] == "Acme,SWE,applied,2024-01-01,,"
