from __future__ import annotations

from datetime import datetime

import pytest

from leave_system.common.clock import FixedClock
from leave_system.core.exceptions import ValidationError
from leave_system.files.storage import LocalAttachmentStore


@pytest.fixture
def store(tmp_path):
    return LocalAttachmentStore(tmp_path / "sick-letters", clock=FixedClock(datetime(2025, 1, 15, 9, 0, 0)), max_bytes=1024)


def test_stage_writes_file_with_employee_and_timestamp_prefix(store):
    ref = store.stage(employee_id=3, filename="doctor note.pdf", content=b"%PDF-1.4", mimetype="application/pdf")

    assert ref.startswith("3_")
    assert ref.endswith("_doctor_note.pdf")
    assert store.exists(ref)
    assert store.path_for(ref).read_bytes() == b"%PDF-1.4"


def test_only_pdf_is_accepted(store):
    with pytest.raises(ValidationError):
        store.stage(employee_id=3, filename="note.png", content=b"x", mimetype="image/png")


def test_oversized_upload_is_rejected(store):
    with pytest.raises(ValidationError):
        store.stage(employee_id=3, filename="big.pdf", content=b"x" * 2048, mimetype="application/pdf")


def test_delete_is_idempotent(store):
    ref = store.stage(employee_id=3, filename="note.pdf", content=b"%PDF", mimetype="application/pdf")

    assert store.delete(ref) is True
    assert store.delete(ref) is False
    assert not store.exists(ref)


def test_path_traversal_reference_is_rejected(store):
    with pytest.raises(ValidationError):
        store.path_for("../etc/passwd")
