"""Contract tests run against every UserRepository implementation."""

import asyncio

import pytest

from userhub.repositories import InMemoryUserRepository, UserRepository
from userhub.utils.exceptions import ConflictError, ValidationError


@pytest.fixture(params=["memory", "sql"])
def repository(request, memory_repository, sql_repository) -> UserRepository:
    if request.param == "memory":
        return memory_repository
    return sql_repository


async def _create(repo: UserRepository, name: str, email: str):
    return await repo.create({"name": name, "email": email})


@pytest.mark.asyncio
async def test_create_then_find_by_id(repository):
    user = await _create(repository, "John Doe", "john@example.com")

    found = await repository.find_by_id(user.id)

    assert found is not None
    assert found.name == "John Doe"
    assert found.email == "john@example.com"
    assert found.created_at == found.updated_at


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "data",
    [
        {},
        {"name": "No Email"},
        {"email": "no-name@example.com"},
        {"name": "   ", "email": "blank@example.com"},
        {"name": "Blank Email", "email": ""},
    ],
)
async def test_create_requires_name_and_email(repository, data):
    with pytest.raises(ValidationError):
        await repository.create(data)
    assert await repository.count() == 0


@pytest.mark.asyncio
async def test_ids_are_unique(repository):
    first = await _create(repository, "A", "a@example.com")
    second = await _create(repository, "B", "b@example.com")

    assert first.id != second.id
    assert second.id > first.id


@pytest.mark.asyncio
async def test_find_by_id_miss_returns_none(repository):
    assert await repository.find_by_id(999999) is None


@pytest.mark.asyncio
async def test_find_by_email_ignores_case(repository):
    user = await _create(repository, "John Doe", "john@example.com")

    found = await repository.find_by_email("JOHN@Example.com")

    assert found is not None
    assert found.id == user.id
    assert await repository.find_by_email("nobody@example.com") is None


@pytest.mark.asyncio
async def test_find_all_and_count(repository):
    assert await repository.find_all() == []
    assert await repository.count() == 0

    await _create(repository, "A", "a@example.com")
    await _create(repository, "B", "b@example.com")

    users = await repository.find_all()
    assert [u.email for u in users] == ["a@example.com", "b@example.com"]
    assert await repository.count() == 2


@pytest.mark.asyncio
async def test_search_matches_name_or_email_case_insensitively(repository):
    john = await _create(repository, "John Doe", "jd@example.com")
    johnny = await _create(repository, "Someone", "JOHNNY@example.com")
    await _create(repository, "Jane Smith", "jane@example.com")

    results = await repository.search("john")

    assert {u.id for u in results} == {john.id, johnny.id}


@pytest.mark.asyncio
async def test_search_treats_wildcards_literally(repository):
    await _create(repository, "Percent 100%", "pct@example.com")
    await _create(repository, "Plain", "plain@example.com")

    results = await repository.search("%")

    assert [u.name for u in results] == ["Percent 100%"]


@pytest.mark.asyncio
async def test_update_changes_only_given_fields(repository):
    user = await _create(repository, "John Doe", "john@example.com")

    updated = await repository.update(user.id, {"name": "X"})

    assert updated is not None
    assert updated.id == user.id
    assert updated.name == "X"
    assert updated.email == "john@example.com"
    assert updated.created_at == user.created_at
    assert updated.updated_at > updated.created_at

    reloaded = await repository.find_by_id(user.id)
    assert reloaded is not None
    assert reloaded.name == "X"


@pytest.mark.asyncio
async def test_update_ignores_none_values(repository):
    user = await _create(repository, "John Doe", "john@example.com")

    updated = await repository.update(user.id, {"name": None, "email": "new@example.com"})

    assert updated is not None
    assert updated.name == "John Doe"
    assert updated.email == "new@example.com"
    assert await repository.find_by_email("john@example.com") is None


@pytest.mark.asyncio
async def test_update_unknown_id_returns_none(repository):
    assert await repository.update(424242, {"name": "Ghost"}) is None


@pytest.mark.asyncio
async def test_update_to_taken_email_conflicts(repository):
    await _create(repository, "A", "a@example.com")
    b = await _create(repository, "B", "b@example.com")

    with pytest.raises(ConflictError):
        await repository.update(b.id, {"email": "A@example.com"})

    unchanged = await repository.find_by_id(b.id)
    assert unchanged is not None
    assert unchanged.email == "b@example.com"


@pytest.mark.asyncio
async def test_store_rejects_duplicate_email(repository):
    await _create(repository, "A", "same@example.com")

    with pytest.raises(ConflictError):
        await _create(repository, "B", "SAME@example.com")

    assert await repository.count() == 1


@pytest.mark.asyncio
async def test_delete_then_find_and_second_delete(repository):
    user = await _create(repository, "John Doe", "john@example.com")

    assert await repository.delete(user.id) is True
    assert await repository.find_by_id(user.id) is None
    assert await repository.delete(user.id) is False
    assert await repository.exists(user.id) is False


@pytest.mark.asyncio
async def test_deleted_email_can_be_reused(repository):
    user = await _create(repository, "John Doe", "john@example.com")
    await repository.delete(user.id)

    again = await _create(repository, "John Again", "john@example.com")

    assert again.id != user.id


@pytest.mark.asyncio
async def test_exists(repository):
    user = await _create(repository, "John Doe", "john@example.com")

    assert await repository.exists(user.id) is True
    assert await repository.exists(user.id + 1) is False


class TestInMemoryUserRepository:
    """Behaviour specific to the in-process store."""

    @pytest.mark.asyncio
    async def test_ids_come_from_the_clock(self):
        repo = InMemoryUserRepository()
        user = await repo.create({"name": "A", "email": "a@example.com"})

        # milliseconds since the epoch, well past 2020-01-01
        assert user.id > 1_577_836_800_000

    @pytest.mark.asyncio
    async def test_concurrent_creates_with_same_email(self):
        repo = InMemoryUserRepository()

        results = await asyncio.gather(
            repo.create({"name": "A", "email": "race@example.com"}),
            repo.create({"name": "B", "email": "RACE@example.com"}),
            return_exceptions=True,
        )

        assert sum(not isinstance(r, Exception) for r in results) == 1
        assert sum(isinstance(r, ConflictError) for r in results) == 1
        assert await repo.count() == 1

    @pytest.mark.asyncio
    async def test_instances_do_not_share_state(self):
        first = InMemoryUserRepository()
        second = InMemoryUserRepository()

        await first.create({"name": "A", "email": "a@example.com"})

        assert await second.count() == 0
