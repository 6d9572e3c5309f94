"""
Unit tests for the in-memory and SQLAlchemy incident stores.
"""

import asyncio
from concurrent.futures import ThreadPoolExecutor

import pytest

from src.config import IncidentStatus
from src.incidents.application import TriagePipeline
from src.incidents.infrastructure import IdAllocator, sample_incidents


@pytest.fixture(params=["memory", "sqlite"])
def repository(request, memory_repository, sqlite_repository):
    return memory_repository if request.param == "memory" else sqlite_repository


@pytest.fixture
def draft():
    return TriagePipeline().triage(
        "Database connection timeout",
        "Queries time out after 30 seconds",
        "user-dashboard",
    )


async def test_ids_strictly_increase(repository, draft):
    created = [await repository.create(draft) for _ in range(3)]
    assert [i.id for i in created] == [1, 2, 3]
    assert await repository.count() == 3


async def test_create_stamps_both_timestamps(repository, draft, base_time):
    incident = await repository.create(draft)

    assert incident.created_at == base_time
    assert incident.updated_at == incident.created_at
    assert incident.status == IncidentStatus.OPEN
    assert incident.ai_severity == draft.triage.severity
    assert incident.ai_category == draft.triage.category


async def test_create_keeps_supplied_timestamps(repository, base_time):
    seed = sample_incidents(now=base_time)[1]
    incident = await repository.create(seed)

    assert incident.created_at == seed.created_at
    assert incident.updated_at == seed.updated_at
    assert incident.status == IncidentStatus.IN_PROGRESS


async def test_get_by_id(repository, draft):
    incident = await repository.create(draft)

    assert await repository.get_by_id(incident.id) == incident
    assert await repository.get_by_id(999) is None


async def test_list_all_in_id_order(repository, draft):
    for _ in range(4):
        await repository.create(draft)
    assert [i.id for i in await repository.list_all()] == [1, 2, 3, 4]


async def test_update_status_touches_only_status_and_updated_at(repository, draft):
    incident = await repository.create(draft)

    updated = await repository.update_status(incident.id, IncidentStatus.RESOLVED)

    assert updated.status == IncidentStatus.RESOLVED
    assert updated.updated_at > incident.updated_at
    assert updated.created_at == incident.created_at
    assert updated.title == incident.title
    assert updated.ai_suggested_action == incident.ai_suggested_action
    assert updated.confidence_score == incident.confidence_score
    assert await repository.get_by_id(incident.id) == updated


async def test_update_unknown_id_returns_none(repository):
    assert await repository.update_status(42, IncidentStatus.CLOSED) is None


async def test_snapshot_isolated_from_later_writes(memory_repository, draft):
    first = await memory_repository.create(draft)
    snapshot = await memory_repository.list_all()

    await memory_repository.create(draft)
    await memory_repository.update_status(first.id, IncidentStatus.CLOSED)

    assert [i.id for i in snapshot] == [1]
    assert snapshot[0].status == IncidentStatus.OPEN


async def test_concurrent_creates_get_unique_ids(memory_repository, draft):
    created = await asyncio.gather(*(memory_repository.create(draft) for _ in range(50)))
    assert sorted(i.id for i in created) == list(range(1, 51))


def test_id_allocator_is_thread_safe():
    allocator = IdAllocator()
    with ThreadPoolExecutor(max_workers=8) as pool:
        allocated = list(pool.map(lambda _: allocator.next_id(), range(1000)))
    assert sorted(allocated) == list(range(1, 1001))


async def test_close_clears_memory_store(memory_repository, draft):
    await memory_repository.create(draft)
    await memory_repository.close()
    assert await memory_repository.count() == 0
