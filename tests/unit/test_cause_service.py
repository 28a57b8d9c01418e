"""Unit tests for cause management and the cause detail view."""

from unittest.mock import AsyncMock

import pytest
from bson import ObjectId

from errors import ForbiddenError, NotFoundError, ValidationError
from schemas.dto.requests.cause import CreateCauseRequest, UpdateCauseRequest
from schemas.models.cause import CauseDoc
from schemas.models.user import UserDoc
from services.availability_service import CauseAvailability
from services.cause_service import CauseService

OWNER_ID = ObjectId()


def _user(role="user", user_id=None) -> UserDoc:
    return UserDoc(
        _id=user_id or ObjectId(), email=f"{role}@x.test", password_hash="h", role=role
    )


def _cause(**overrides) -> CauseDoc:
    base = dict(
        _id=ObjectId(),
        title="Clean beaches",
        description="d",
        target_amount=1000,
        creator=OWNER_ID,
        category="environment",
    )
    base.update(overrides)
    return CauseDoc(**base)


@pytest.fixture
def cause_repo():
    repo = AsyncMock()
    repo.find_by_id.return_value = _cause()

    async def _insert(doc):
        doc.id = ObjectId()
        return doc

    async def _update(doc_id, fields):
        return _cause(_id=doc_id, **fields)

    repo.insert.side_effect = _insert
    repo.update_fields.side_effect = _update
    return repo


@pytest.fixture
def sponsorship_repo():
    repo = AsyncMock()
    repo.list_by_cause.return_value = []
    return repo


@pytest.fixture
def availability():
    svc = AsyncMock()
    svc.get_cause_availability.return_value = CauseAvailability(50, 3)
    return svc


@pytest.fixture
def service(cause_repo, sponsorship_repo, availability):
    return CauseService(cause_repo, sponsorship_repo, availability)


def _create_request() -> CreateCauseRequest:
    return CreateCauseRequest(
        title="Clean beaches",
        description="Totes for volunteers",
        target_amount=1000,
        category="environment",
    )


class TestCreateCause:
    @pytest.mark.parametrize("role, status", [("admin", "approved"), ("sponsor", "pending")])
    async def test_status_depends_on_creator(self, service, role, status):
        actor = _user(role)
        cause = await service.create_cause(_create_request(), actor)
        assert cause.status == status
        assert cause.creator == actor.id
        assert cause.current_amount == 0


class TestCauseDetail:
    async def test_includes_availability(self, service, sponsorship_repo):
        detail = await service.get_cause_detail(str(ObjectId()))
        assert detail.availability.available_totes == 47
        assert detail.sponsorships is None
        sponsorship_repo.list_by_cause.assert_not_awaited()

    async def test_optionally_includes_sponsorships(self, service, sponsorship_repo):
        detail = await service.get_cause_detail(str(ObjectId()), include_sponsorships=True)
        assert detail.sponsorships == []
        sponsorship_repo.list_by_cause.assert_awaited_once()

    async def test_missing(self, service, cause_repo):
        cause_repo.find_by_id.return_value = None
        with pytest.raises(NotFoundError):
            await service.get_cause_detail(str(ObjectId()))


class TestUpdateCause:
    async def test_owner_can_update(self, service, cause_repo):
        updated = await service.update_cause(
            str(ObjectId()), UpdateCauseRequest(title="New"), _user(user_id=OWNER_ID)
        )
        assert updated.title == "New"

    async def test_stranger_forbidden(self, service, cause_repo):
        with pytest.raises(ForbiddenError):
            await service.update_cause(
                str(ObjectId()), UpdateCauseRequest(title="New"), _user()
            )
        cause_repo.update_fields.assert_not_awaited()

    async def test_owner_status_change_dropped(self, service, cause_repo):
        await service.update_cause(
            str(ObjectId()),
            UpdateCauseRequest(title="New", status="approved"),
            _user(user_id=OWNER_ID),
        )
        fields = cause_repo.update_fields.await_args.args[1]
        assert fields == {"title": "New"}

    async def test_admin_status_change_applied(self, service, cause_repo):
        await service.update_cause(
            str(ObjectId()), UpdateCauseRequest(status="completed"), _user("admin")
        )
        assert cause_repo.update_fields.await_args.args[1] == {"status": "completed"}

    async def test_admin_invalid_status(self, service):
        with pytest.raises(ValidationError):
            await service.update_cause(
                str(ObjectId()), UpdateCauseRequest(status="archived"), _user("admin")
            )


class TestStatusAndDelete:
    async def test_update_status(self, service):
        cause = await service.update_cause_status(str(ObjectId()), "approved")
        assert cause.status == "approved"

    async def test_update_status_invalid(self, service, cause_repo):
        with pytest.raises(ValidationError):
            await service.update_cause_status(str(ObjectId()), "bogus")
        cause_repo.find_by_id.assert_not_awaited()

    async def test_delete_by_owner(self, service, cause_repo):
        await service.delete_cause(str(ObjectId()), _user(user_id=OWNER_ID))
        cause_repo.delete_by_id.assert_awaited_once()

    async def test_delete_by_stranger_forbidden(self, service, cause_repo):
        with pytest.raises(ForbiddenError):
            await service.delete_cause(str(ObjectId()), _user())
        cause_repo.delete_by_id.assert_not_awaited()
