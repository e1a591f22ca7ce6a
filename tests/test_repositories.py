"""
Tests for repository pattern.
"""

import pytest
from sqlalchemy.exc import IntegrityError

from coronatracker.database.errors import RecordNotFoundError
from coronatracker.database.repositories import CountryRepository
from coronatracker.model import CountryRecord


@pytest.mark.asyncio
async def test_country_add_and_get_by_code(db_session, canada):
    """Test country creation and retrieval by code."""
    repo = CountryRepository(db_session)

    await repo.add(canada)

    country = await repo.get_by_code("CA")

    assert country == canada
    assert isinstance(country, CountryRecord)


@pytest.mark.asyncio
async def test_country_get_by_code_normalizes(db_session, canada):
    repo = CountryRepository(db_session)
    await repo.add(canada)

    assert await repo.get_by_code(" ca ") == canada


@pytest.mark.asyncio
async def test_country_get_by_code_missing(db_session):
    repo = CountryRepository(db_session)

    assert await repo.get_by_code("ZZ") is None


@pytest.mark.asyncio
async def test_country_get_all_ordered(db_session, canada, denmark):
    """Test listing returns every country ordered by code."""
    repo = CountryRepository(db_session)

    await repo.add(denmark)
    await repo.add(canada)

    countries = await repo.get_all()

    assert [c.code for c in countries] == ["CA", "DK"]
    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_country_add_all(db_session, canada, denmark):
    repo = CountryRepository(db_session)

    count = await repo.add_all([canada, denmark])

    assert count == 2
    assert await repo.count() == 2


@pytest.mark.asyncio
async def test_country_add_duplicate_code(db_session, canada):
    repo = CountryRepository(db_session)
    await repo.add(canada)
    db_session.expunge_all()

    with pytest.raises(IntegrityError):
        await repo.add(canada.with_counts(1, 1))


@pytest.mark.asyncio
async def test_country_update(db_session, canada):
    """Test country update."""
    repo = CountryRepository(db_session)

    # Create
    await repo.add(canada)

    # Update
    await repo.update(canada.with_counts(150000, 9500))

    country = await repo.get_by_code("CA")

    assert country.confirmed == 150000
    assert country.deaths == 9500
    assert country.name == "Canada"


@pytest.mark.asyncio
async def test_country_update_missing(db_session, canada):
    repo = CountryRepository(db_session)

    with pytest.raises(RecordNotFoundError) as exc_info:
        await repo.update(canada)

    assert exc_info.value.code == "CA"


@pytest.mark.asyncio
async def test_country_delete(db_session, canada, denmark):
    """Test country deletion."""
    repo = CountryRepository(db_session)
    await repo.add_all([canada, denmark])

    await repo.delete(canada)

    assert await repo.get_by_code("CA") is None
    assert await repo.get_all() == [denmark]


@pytest.mark.asyncio
async def test_country_delete_missing(db_session, canada):
    repo = CountryRepository(db_session)

    with pytest.raises(RecordNotFoundError):
        await repo.delete(canada)
