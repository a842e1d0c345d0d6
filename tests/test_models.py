import re

from pdfrename.models import RenameRecord, RenameRequest, utc_timestamp


def test_utc_timestamp_format():
    assert re.fullmatch(r"\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z", utc_timestamp())


def test_record_accepts_camel_case_and_snake_case():
    by_alias = RenameRecord.model_validate(
        {"oldName": "a.pdf", "newName": "b.pdf", "success": True, "timestamp": "T", "needsRename": True}
    )
    by_name = RenameRecord(old_name="a.pdf", new_name="b.pdf", success=True, timestamp="T", needs_rename=True)
    assert by_alias == by_name


def test_record_json_omits_unset_optionals():
    record = RenameRecord(old_name="a.pdf", new_name="b.pdf", success=False, timestamp="T")
    assert record.to_json() == {"oldName": "a.pdf", "newName": "b.pdf", "success": False, "timestamp": "T"}


def test_record_without_timestamp_stays_without_one():
    record = RenameRecord.model_validate({"oldName": "a.pdf", "newName": "b.pdf", "success": True})
    assert record.timestamp is None
    assert "timestamp" not in record.to_json()


def test_rename_request_defaults():
    request = RenameRequest.model_validate({"oldName": "a.pdf", "newName": "b.pdf"})
    assert request.needs_rename is False
