"""
Task Manager API - Task Service Tests

Service-level tests with a controllable clock.
"""

import pytest
from datetime import timedelta

from taskmanager.errors import NotFound, ValidationError
from taskmanager.tasks.enums import TaskStatus
from taskmanager.tasks.service import TaskService


@pytest.fixture
def service(task_repository, frozen_clock):
    return TaskService(task_repository, clock=frozen_clock)


class TestCreate:

    @pytest.mark.asyncio
    async def test_defaults(self, service, frozen_now):
        task = await service.create_task("owner-1", "Buy milk")
        assert task.title == "Buy milk"
        assert task.description == ""
        assert task.status == TaskStatus.PENDING
        assert task.owner_id == "owner-1"
        assert task.created_at == task.updated_at == frozen_now

    @pytest.mark.asyncio
    async def test_empty_status_defaults_to_pending(self, service):
        task = await service.create_task("owner-1", "T", status="")
        assert task.status == TaskStatus.PENDING

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", [None, "", "  \t "])
    async def test_blank_title_rejected(self, service, task_repository, title):
        with pytest.raises(ValidationError):
            await service.create_task("owner-1", title)
        assert await task_repository.list_by_owner("owner-1") == []

    @pytest.mark.asyncio
    async def test_unknown_status_rejected(self, service):
        with pytest.raises(ValidationError):
            await service.create_task("owner-1", "T", status="archived")


class TestList:

    @pytest.mark.asyncio
    async def test_newest_first(self, service, frozen_clock):
        first = await service.create_task("owner-1", "first")
        frozen_clock.advance(timedelta(minutes=1))
        second = await service.create_task("owner-1", "second")

        tasks = await service.list_tasks("owner-1")
        assert [t.id for t in tasks] == [second.id, first.id]

    @pytest.mark.asyncio
    async def test_scoped_to_owner(self, service):
        await service.create_task("owner-1", "mine")
        await service.create_task("owner-2", "theirs")

        assert [t.title for t in await service.list_tasks("owner-1")] == ["mine"]


class TestUpdate:

    @pytest.mark.asyncio
    async def test_status_only(self, service, frozen_clock, frozen_now):
        task = await service.create_task("owner-1", "Title", description="Desc")
        frozen_clock.advance(timedelta(hours=1))

        updated = await service.update_task("owner-1", task.id, {"status": "completed"})
        assert updated.status == TaskStatus.COMPLETED
        assert updated.title == "Title"
        assert updated.description == "Desc"
        assert updated.created_at == frozen_now
        assert updated.updated_at == frozen_now + timedelta(hours=1)

    @pytest.mark.asyncio
    async def test_no_fields_still_touches_timestamp(self, service, frozen_clock, frozen_now):
        task = await service.create_task("owner-1", "Title")
        frozen_clock.advance(timedelta(seconds=30))

        updated = await service.update_task("owner-1", task.id, {})
        assert updated.updated_at == frozen_now + timedelta(seconds=30)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("title", ["", "   ", None])
    async def test_empty_title_leaves_task_untouched(self, service, task_repository, frozen_clock, title):
        task = await service.create_task("owner-1", "Keep")
        frozen_clock.advance(timedelta(minutes=5))

        with pytest.raises(ValidationError, match="Title cannot be empty"):
            await service.update_task("owner-1", task.id, {"title": title, "status": "completed"})

        stored = await task_repository.get_by_id(task.id, "owner-1")
        assert stored == task

    @pytest.mark.asyncio
    async def test_null_description_becomes_empty(self, service):
        task = await service.create_task("owner-1", "T", description="x")
        updated = await service.update_task("owner-1", task.id, {"description": None})
        assert updated.description == ""

    @pytest.mark.asyncio
    async def test_other_owner_gets_not_found(self, service, task_repository):
        task = await service.create_task("owner-1", "Private")

        with pytest.raises(NotFound):
            await service.update_task("owner-2", task.id, {"title": "Stolen"})
        assert (await task_repository.get_by_id(task.id, "owner-1")).title == "Private"

    @pytest.mark.asyncio
    async def test_not_found_checked_before_validation(self, service):
        with pytest.raises(NotFound):
            await service.update_task("owner-1", "missing", {"title": ""})


class TestDelete:

    @pytest.mark.asyncio
    async def test_delete(self, service):
        task = await service.create_task("owner-1", "Gone")
        await service.delete_task("owner-1", task.id)
        assert await service.list_tasks("owner-1") == []

    @pytest.mark.asyncio
    async def test_other_owner_cannot_delete(self, service):
        task = await service.create_task("owner-1", "Mine")

        with pytest.raises(NotFound):
            await service.delete_task("owner-2", task.id)
        assert len(await service.list_tasks("owner-1")) == 1


class TestCount:

    @pytest.mark.asyncio
    async def test_counts_only_own_tasks(self, service):
        await service.create_task("owner-1", "A")
        await service.create_task("owner-1", "B")
        await service.create_task("owner-2", "C")

        assert await service.count_tasks("owner-1") == 2
        assert await service.count_tasks("owner-2") == 1
        assert await service.count_tasks("owner-3") == 0

    @pytest.mark.asyncio
    async def test_count_drops_after_delete(self, service):
        task = await service.create_task("owner-1", "A")
        await service.delete_task("owner-1", task.id)
        assert await service.count_tasks("owner-1") == 0


class TestTimestamps:

    @pytest.mark.asyncio
    async def test_timestamps_truncated_to_milliseconds(self, service, frozen_clock):
        frozen_clock.advance(timedelta(microseconds=123456))

        task = await service.create_task("owner-1", "Precise")
        assert task.created_at.microsecond == 123000
        assert task.updated_at == task.created_at

        frozen_clock.advance(timedelta(microseconds=999))
        updated = await service.update_task("owner-1", task.id, {})
        assert updated.updated_at.microsecond == 123000
