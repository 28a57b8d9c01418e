"""Unit tests for MongoDB document models."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from schemas.models.base import MongoBaseModel, PyObjectId
from schemas.models.cause import CauseDoc
from schemas.models.claim import (
    CLAIM_STATUSES,
    CLAIM_TRANSITIONS,
    ClaimDoc,
)
from schemas.models.distribution import (
    DistributionLocationDoc,
    LocationAllocation,
    PhysicalDistributionDoc,
)
from schemas.models.otp import OTPVerificationDoc
from schemas.models.sponsorship import SponsorshipDoc
from schemas.models.user import UserDoc


# ── Helpers ───────────────────────────────────────────────────────────────────

def now():
    return datetime.now(timezone.utc)


def oid():
    return ObjectId()


# ── PyObjectId ────────────────────────────────────────────────────────────────

class TestPyObjectId:
    def test_accepts_objectid_instance(self):
        o = oid()
        assert PyObjectId._validate(o) == o

    def test_accepts_valid_string(self):
        s = str(oid())
        result = PyObjectId._validate(s)
        assert isinstance(result, ObjectId)
        assert str(result) == s

    def test_rejects_invalid_string(self):
        with pytest.raises(ValueError):
            PyObjectId._validate("not-an-objectid")

    def test_rejects_none(self):
        with pytest.raises((ValueError, TypeError)):
            PyObjectId._validate(None)


# ── MongoBaseModel ─────────────────────────────────────────────────────────────

class TestMongoBaseModel:
    def test_from_mongo_returns_none_for_none(self):
        assert MongoBaseModel.from_mongo(None) is None

    def test_id_alias(self):
        o = oid()
        m = MongoBaseModel.model_validate({"_id": o})
        assert m.id == o

    def test_to_mongo_drops_none_id(self):
        assert "_id" not in MongoBaseModel().to_mongo()

    def test_to_mongo_keeps_set_id(self):
        o = oid()
        d = MongoBaseModel.model_validate({"_id": o}).to_mongo()
        assert d["_id"] == o

    def test_json_dump_stringifies_object_ids(self):
        cause = oid()
        claim = _claim(cause_id=cause)
        assert claim.model_dump(mode="json")["cause_id"] == str(cause)


# ── UserDoc ───────────────────────────────────────────────────────────────────

class TestUserDoc:
    @pytest.mark.parametrize(
        "role, expected", [("admin", True), ("sponsor", False), ("user", False)]
    )
    def test_is_admin(self, role, expected):
        user = UserDoc(email="a@b.c", password_hash="x", role=role)
        assert user.is_admin is expected

    def test_rejects_unknown_role(self):
        with pytest.raises(PydanticValidationError):
            UserDoc(email="a@b.c", password_hash="x", role="superuser")


# ── CauseDoc ──────────────────────────────────────────────────────────────────

class TestCauseDoc:
    def test_defaults(self):
        cause = CauseDoc(
            title="Clean beaches",
            description="Reusable totes for volunteers",
            target_amount=1000,
            creator=oid(),
            category="environment",
        )
        assert cause.status == "pending"
        assert cause.current_amount == 0
        assert cause.is_online is False

    def test_negative_target_rejected(self):
        with pytest.raises(PydanticValidationError):
            CauseDoc(
                title="t", description="d", target_amount=-1, creator=oid(), category="c"
            )


# ── SponsorshipDoc ────────────────────────────────────────────────────────────

def _sponsorship(**overrides) -> SponsorshipDoc:
    base = dict(
        cause=oid(),
        organization_name="Acme",
        contact_name="Sam",
        email="sam@acme.test",
        phone="555-0100",
    )
    base.update(overrides)
    return SponsorshipDoc(**base)


class TestSponsorshipDoc:
    def test_total_amount_defaults_to_quantity_times_price(self):
        s = _sponsorship(tote_quantity=30, unit_price=12.5)
        assert s.total_amount == 375

    def test_explicit_total_amount_kept(self):
        s = _sponsorship(tote_quantity=30, unit_price=12.5, total_amount=300)
        assert s.total_amount == 300

    def test_default_quantity_and_status(self):
        s = _sponsorship()
        assert s.tote_quantity == 50
        assert s.status == "pending"
        assert s.distribution_type == "online"

    def test_zero_quantity_rejected(self):
        with pytest.raises(PydanticValidationError):
            _sponsorship(tote_quantity=0)


# ── ClaimDoc ──────────────────────────────────────────────────────────────────

def _claim(**overrides) -> ClaimDoc:
    base = dict(
        cause_id=oid(),
        cause_title="Clean beaches",
        full_name="Jo Doe",
        email="jo@example.com",
        phone="555-0101",
        purpose="groceries",
        address="1 Main St",
        city="Springfield",
        state="IL",
        zip_code="62701",
    )
    base.update(overrides)
    return ClaimDoc(**base)


class TestClaimDoc:
    @pytest.mark.parametrize(
        "status, counted",
        [
            ("pending", False),
            ("verified", True),
            ("shipped", True),
            ("delivered", True),
            ("cancelled", False),
        ],
    )
    def test_counts_against_pool(self, status, counted):
        assert _claim(status=status).counts_against_pool is counted

    def test_every_status_has_transition_entry(self):
        assert set(CLAIM_TRANSITIONS) == set(CLAIM_STATUSES)

    @pytest.mark.parametrize("terminal", ["delivered", "cancelled"])
    def test_terminal_states(self, terminal):
        assert CLAIM_TRANSITIONS[terminal] == frozenset()

    def test_shipped_cannot_be_cancelled(self):
        assert "cancelled" not in CLAIM_TRANSITIONS["shipped"]


# ── OTPVerificationDoc ────────────────────────────────────────────────────────

def test_otp_doc_defaults():
    t = now()
    doc = OTPVerificationDoc(
        email="a@b.c", otp_hash="0" * 64, expires_at=t, created_at=t
    )
    assert doc.verified is False
    assert doc.type == "email"
    assert "otp" not in doc.to_mongo()


# ── Distribution models ───────────────────────────────────────────────────────

class TestDistributionModels:
    def test_location_totes_count_non_negative(self):
        with pytest.raises(PydanticValidationError):
            DistributionLocationDoc(name="Mall", type="mall", totes_count=-1)

    def test_location_type_restricted(self):
        with pytest.raises(PydanticValidationError):
            DistributionLocationDoc(name="Pier", type="harbour")

    def test_allocation_quantity_at_least_one(self):
        with pytest.raises(PydanticValidationError):
            LocationAllocation(location=oid(), quantity=0)

    def test_allocated_total(self):
        dist = PhysicalDistributionDoc(
            sponsorship=oid(),
            shipping_address="1 Dock Rd",
            shipping_city="Springfield",
            shipping_state="IL",
            shipping_zip_code="62701",
            shipping_contact_name="Sam",
            shipping_phone="555-0100",
            distribution_locations=[
                LocationAllocation(location=oid(), quantity=30),
                LocationAllocation(location=oid(), quantity=20),
            ],
        )
        assert dist.allocated_total == 50
        assert dist.status == "pending"
