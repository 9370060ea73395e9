from datetime import datetime, timedelta, timezone

from bson import ObjectId

from sucoi.src.utils.serialization import serialize_doc


def test_naive_datetime_is_treated_as_utc():
    doc = {"createdAt": datetime(2026, 10, 19, 3, 48, 24, 224000)}
    assert serialize_doc(doc) == {"createdAt": "2026-10-19T03:48:24.224Z"}


def test_aware_datetime_is_converted_to_utc():
    plus_two = timezone(timedelta(hours=2))
    doc = {"createdAt": datetime(2026, 10, 19, 5, 48, 24, 224000, tzinfo=plus_two)}
    assert serialize_doc(doc) == {"createdAt": "2026-10-19T03:48:24.224Z"}


def test_object_id_becomes_hex_and_other_fields_pass_through():
    oid = ObjectId()
    out = serialize_doc({"_id": oid, "username": "maya", "taskDone": False})
    assert out == {"_id": str(oid), "username": "maya", "taskDone": False}
