"""Unit tests for submission normalization."""

from datetime import datetime, timezone

import pytest

from practice_log.application.schemas import SubmissionPayload, coerce_counter
from practice_log.application.services import normalize_submission
from practice_log.domain.entities import CATEGORY_FIELDS

NOW = datetime(2024, 1, 1, 8, 30, tzinfo=timezone.utc)


def _normalize(payload: dict, **kwargs):
    return normalize_submission(
        payload, source_ip="10.0.0.1", source_device="pytest-agent", now=NOW, **kwargs
    )


def test_missing_counters_default_to_zero():
    record = _normalize({"submitterName": "A", "date": "2024-01-01"})
    assert record.counters() == {attr: 0 for attr, _ in CATEGORY_FIELDS}


def test_non_numeric_counters_become_zero():
    record = _normalize(
        {"diamond": "lots", "amitabha": None, "guanyin": [1, 2], "puxian": True, "dizang": {}}
    )
    assert (record.diamond, record.amitabha, record.guanyin, record.puxian, record.dizang) == (0, 0, 0, 0, 0)


@pytest.mark.parametrize(
    "raw, expected",
    [
        (3, 3),
        ("7", 7),
        (" 12abc", 12),
        ("3.9", 3),
        (4.9, 4),
        ("+5", 5),
        ("-2", -2),
        ("abc", 0),
        ("", 0),
        (float("nan"), 0),
        (False, 0),
        (2**63 - 1, 2**63 - 1),
        (-(2**63), -(2**63)),
        (2**63, 0),
        ("99999999999999999999", 0),
        (1e20, 0),
    ],
)
def test_coerce_counter_reads_leading_integer(raw, expected):
    assert coerce_counter(raw) == expected


def test_negative_counters_pass_through_by_default():
    record = _normalize({"diamond": -4})
    assert record.diamond == -4


def test_negative_counters_clamped_when_enabled():
    record = _normalize({"diamond": -4, "amitabha": "2"}, clamp_negative_counters=True)
    assert record.diamond == 0
    assert record.amitabha == 2


def test_remark_and_storage_mode_defaults():
    record = _normalize({"storageMode": ""})
    assert record.remark == ""
    assert record.storage_mode == "both"

    record = _normalize({"remark": "morning session", "storageMode": "cloud"})
    assert record.remark == "morning session"
    assert record.storage_mode == "cloud"


def test_timestamps_and_provenance_are_stamped():
    record = _normalize({"submitterName": "A"})
    assert record.submitted_at == record.created_at == record.updated_at == NOW
    assert record.source_ip == "10.0.0.1"
    assert record.source_device == "pytest-agent"


def test_id_is_left_for_the_store():
    record = _normalize({"id": "client-chosen", "submitterName": "A"})
    assert record.id is None


def test_legacy_name_key_maps_to_submitter_name():
    record = _normalize({"name": "Zhang", "date": "2024-01-01"})
    assert record.submitter_name == "Zhang"


def test_unknown_keys_kept_but_server_fields_dropped():
    record = _normalize(
        {
            "submitterName": "A",
            "location": "temple",
            "sourceIp": "6.6.6.6",
            "createdAt": "1999-01-01",
        }
    )
    assert record.extra == {"location": "temple"}
    assert record.source_ip == "10.0.0.1"
    assert record.created_at == NOW


def test_accepts_validated_payload_instance():
    payload = SubmissionPayload.model_validate({"submitterName": "B", "nineWord": "9"})
    record = _normalize(payload)
    assert record.submitter_name == "B"
    assert record.nine_word == 9
