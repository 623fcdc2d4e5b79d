"""Integration tests for the SQLAlchemy repositories against a real SQLite store."""

import asyncio
from datetime import datetime, timedelta, timezone

import pytest

from practice_log.domain.entities import PracticeRecord, SubmissionLog

BASE = datetime(2024, 3, 1, tzinfo=timezone.utc)


def _record(name: str, minutes: int, *, day: str = "2024-03-01", remark: str = "", **counters):
    stamp = BASE + timedelta(minutes=minutes)
    return PracticeRecord(
        submitter_name=name,
        date=day,
        remark=remark,
        submitted_at=stamp,
        created_at=stamp,
        updated_at=stamp,
        **counters,
    )


@pytest.mark.asyncio
async def test_create_assigns_id_and_round_trips_extras(connector):
    repo = connector.records_repository()

    saved = await repo.create(_record("Wang", 0, diamond=2, extra={"mood": "calm"}))

    assert saved.id is not None
    fetched = await repo.get_by_id(saved.id)
    assert fetched.submitter_name == "Wang"
    assert fetched.diamond == 2
    assert fetched.extra == {"mood": "calm"}


@pytest.mark.asyncio
async def test_search_is_case_insensitive_and_literal(connector):
    repo = connector.records_repository()
    await repo.create(_record("Alice", 0))
    await repo.create(_record("bob", 1, remark="practised with ALICE"))
    await repo.create(_record("Carol", 2, remark="100% done"))

    assert await repo.count(search="alice") == 2
    assert {r.submitter_name for r in await repo.find(search="ALI")} == {"Alice", "bob"}
    assert await repo.count(search="%") == 1
    assert await repo.count(search="_") == 0


@pytest.mark.asyncio
async def test_find_sorts_and_paginates(connector):
    repo = connector.records_repository()
    for minutes, name in enumerate(["A", "B", "C", "D", "E"]):
        await repo.create(_record(name, minutes, diamond=minutes))

    newest = await repo.find(sort_field="submitted_at", descending=True, limit=2)
    assert [r.submitter_name for r in newest] == ["E", "D"]

    second_page = await repo.find(sort_field="diamond", descending=False, skip=2, limit=2)
    assert [r.submitter_name for r in second_page] == ["C", "D"]

    assert await repo.find(skip=10, limit=2) == []


@pytest.mark.asyncio
async def test_find_rejects_unknown_sort_field(connector):
    repo = connector.records_repository()
    with pytest.raises(ValueError):
        await repo.find(sort_field="extra")


@pytest.mark.asyncio
async def test_update_fields_overwrites_and_refreshes_updated_at(connector):
    repo = connector.records_repository()
    saved = await repo.create(_record("Zhao", 0, amitabha=1, extra={"a": 1}))
    before = await repo.get_by_id(saved.id)
    await asyncio.sleep(0.01)

    modified = await repo.update_fields(
        saved.id, {"amitabha": 9, "remark": "edited", "source_ip": "6.6.6.6"}, {"b": 2}
    )

    after = await repo.get_by_id(saved.id)
    assert modified == 1
    assert after.amitabha == 9
    assert after.remark == "edited"
    assert after.source_ip == ""
    assert after.extra == {"a": 1, "b": 2}
    assert after.updated_at > before.updated_at
    assert after.created_at == before.created_at


@pytest.mark.asyncio
async def test_update_and_delete_missing_record(connector):
    repo = connector.records_repository()
    missing = "00000000-0000-4000-8000-000000000000"

    assert await repo.update_fields(missing, {"remark": "x"}) == 0
    assert await repo.delete(missing) == 0


@pytest.mark.asyncio
async def test_delete_removes_record(connector):
    repo = connector.records_repository()
    saved = await repo.create(_record("Qian", 0))

    assert await repo.delete(saved.id) == 1
    assert await repo.get_by_id(saved.id) is None
    assert await repo.delete(saved.id) == 0


@pytest.mark.asyncio
async def test_count_by_date(connector):
    repo = connector.records_repository()
    await repo.create(_record("A", 0, day="2024-03-01"))
    await repo.create(_record("B", 1, day="2024-03-02"))
    await repo.create(_record("C", 2, day="2024-03-02"))

    assert await repo.count() == 3
    assert await repo.count(date="2024-03-02") == 2
    assert await repo.count(date="2024-03-09") == 0


@pytest.mark.asyncio
async def test_name_statistics_and_category_totals(connector):
    repo = connector.records_repository()
    await repo.create(_record("Sun", 0, diamond=3, nine_word=5))
    await repo.create(_record("Li", 1, guanyin=2))
    await repo.create(_record("Sun", 2, dizang=1, active_zen=-4))

    stats = await repo.name_statistics()
    assert [(s.submitter_name, s.count) for s in stats] == [("Sun", 2), ("Li", 1)]
    assert stats[0].last_submit.replace(tzinfo=None) == (BASE + timedelta(minutes=2)).replace(tzinfo=None)

    totals = await repo.category_totals()
    assert totals["diamond"] == 3
    assert totals["nine_word"] == 5
    assert totals["guanyin"] == 2
    assert totals["dizang"] == 1
    assert totals["active_zen"] == -4
    assert totals["puxian"] == 0


@pytest.mark.asyncio
async def test_category_totals_on_empty_store_are_zero(connector):
    totals = await connector.records_repository().category_totals()
    assert set(totals.values()) == {0}


@pytest.mark.asyncio
async def test_submission_logs_are_appended(connector):
    logs = connector.logs_repository()

    await logs.create(SubmissionLog(record_id="r-1", submitter_name="A", date="2024-03-01"))
    await logs.create(SubmissionLog(record_id="r-2", submitter_name="B", date="2024-03-01"))

    entries = await logs.get_all()
    assert {entry.record_id for entry in entries} == {"r-1", "r-2"}
    assert all(entry.type == "homework_submit" for entry in entries)
    assert all(entry.id is not None for entry in entries)
