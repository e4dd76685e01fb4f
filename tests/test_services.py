"""
Service tests on the in-memory repositories.
Covers the rules the HTTP layer relies on without going through FastAPI.
"""

import pytest

from petfinder.core.exceptions import DuplicateEmailError, NotFoundError, ValidationError
from petfinder.schemas.announcement import AnnouncementCreate
from petfinder.schemas.user import ProfileUpdate, UserCreate
from petfinder.services.announcement_service import AnnouncementService, normalize_status
from petfinder.services.comment_service import CommentService
from petfinder.services.geocoding import get_neighborhood_table
from petfinder.services.user_service import UserService


@pytest.fixture
def user_service(memory_repos) -> UserService:
    return UserService(memory_repos.users)


@pytest.fixture
def announcement_service(memory_repos) -> AnnouncementService:
    return AnnouncementService(memory_repos.announcements, get_neighborhood_table(), 1024 * 1024)


@pytest.fixture
def comment_service(memory_repos) -> CommentService:
    return CommentService(memory_repos.comments)


async def _register(user_service: UserService, email: str = "ana@email.com"):
    return await user_service.register(
        UserCreate(name="Ana", email=email, password="123456", phone="(71) 90000-0000")
    )


def _lost_dog(**overrides) -> AnnouncementCreate:
    data = {"pet_name": "Rex", "description": "Brown dog", "type": "lost", "neighborhood": "Barra"}
    data.update(overrides)
    return AnnouncementCreate(**data)


@pytest.mark.asyncio
async def test_register_hashes_password(user_service):
    user = await _register(user_service)
    assert user.id == 1
    assert user.password != "123456"
    assert await user_service.authenticate("ana@email.com", "123456") is not None
    assert await user_service.authenticate("ana@email.com", "654321") is None


@pytest.mark.asyncio
async def test_register_duplicate_email(user_service, memory_store):
    await _register(user_service)
    with pytest.raises(DuplicateEmailError):
        await _register(user_service)
    assert len(memory_store.users) == 1


@pytest.mark.asyncio
async def test_profile_update_changes_only_given_fields(user_service):
    user = await _register(user_service)
    updated = await user_service.update_profile(user, ProfileUpdate(phone="(71) 91111-1111"))
    assert updated.phone == "(71) 91111-1111"
    assert updated.name == "Ana"
    assert updated.email == "ana@email.com"


@pytest.mark.asyncio
async def test_profile_update_to_taken_email(user_service):
    user = await _register(user_service)
    await _register(user_service, email="bia@email.com")
    with pytest.raises(DuplicateEmailError):
        await user_service.update_profile(user, ProfileUpdate(email="bia@email.com"))
    assert user.email == "ana@email.com"


@pytest.mark.parametrize("value,expected", [("found", "found"), ("FOUND", "found"), (" Inactive ", "inactive")])
def test_normalize_status(value, expected):
    assert normalize_status(value) == expected


@pytest.mark.parametrize("value", ["", None, "adopted", "lost"])
def test_normalize_status_rejects_unknown(value):
    with pytest.raises(ValidationError):
        normalize_status(value)


@pytest.mark.asyncio
async def test_status_machine_keeps_found_date(user_service, announcement_service):
    owner = await _register(user_service)
    created = await announcement_service.create(owner.id, _lost_dog())
    assert created.status == "active"
    assert created.found_date is None

    found = await announcement_service.update_status(created.id, "found", owner.id)
    assert found.status == "found"
    assert found.found_date is not None

    inactive = await announcement_service.update_status(created.id, "inactive", owner.id)
    assert inactive.status == "inactive"
    assert inactive.found_date == found.found_date

    found_again = await announcement_service.update_status(created.id, "found", owner.id)
    assert found_again.found_date >= found.found_date
    assert found_again.type == "lost"
    assert found_again.user_id == owner.id


@pytest.mark.asyncio
async def test_non_owner_update_leaves_announcement_untouched(user_service, announcement_service):
    owner = await _register(user_service)
    stranger = await _register(user_service, email="bia@email.com")
    created = await announcement_service.create(owner.id, _lost_dog())

    assert await announcement_service.update_status(created.id, "found", stranger.id) is None
    assert await announcement_service.update_status(999, "found", owner.id) is None

    current = await announcement_service.get(created.id)
    assert current.status == "active"
    assert current.updated_at == created.updated_at


@pytest.mark.asyncio
async def test_listings_filter_and_order(user_service, announcement_service):
    owner = await _register(user_service)
    other = await _register(user_service, email="bia@email.com")
    first = await announcement_service.create(owner.id, _lost_dog(pet_name="First"))
    await announcement_service.create(other.id, _lost_dog(pet_name="Second", type="found"))
    await announcement_service.create(owner.id, _lost_dog(pet_name="Third"))
    await announcement_service.update_status(first.id, "found", owner.id)

    active = await announcement_service.list_all()
    assert [a.pet_name for a in active] == ["Third", "Second"]
    assert active[0].user.email == "ana@email.com"

    mine = await announcement_service.list_by_owner(owner.id)
    assert [a.pet_name for a in mine] == ["Third", "First"]
    mine_found = await announcement_service.list_by_owner(owner.id, "FOUND")
    assert [a.pet_name for a in mine_found] == ["First"]


@pytest.mark.asyncio
async def test_owner_projection_reflects_profile_changes(user_service, announcement_service):
    owner = await _register(user_service)
    created = await announcement_service.create(owner.id, _lost_dog())
    await user_service.update_profile(owner, ProfileUpdate(phone="(71) 92222-2222"))
    current = await announcement_service.get(created.id)
    assert current.user.phone == "(71) 92222-2222"


@pytest.mark.asyncio
async def test_comment_on_missing_announcement(user_service, comment_service):
    author = await _register(user_service)
    with pytest.raises(NotFoundError):
        await comment_service.create(42, author.id, "Seen him?")


@pytest.mark.asyncio
async def test_comment_content_is_trimmed_and_required(user_service, announcement_service, comment_service):
    author = await _register(user_service)
    created = await announcement_service.create(author.id, _lost_dog())

    with pytest.raises(ValidationError):
        await comment_service.create(created.id, author.id, " \n ")

    comment = await comment_service.create(created.id, author.id, "  Seen near the lighthouse ")
    assert comment.content == "Seen near the lighthouse"
    assert comment.user.name == "Ana"

    thread = await comment_service.list_by_announcement(created.id)
    assert [c.id for c in thread] == [comment.id]
