"""Unit tests for request/response DTOs (camelCase wire format)."""

from datetime import datetime, timezone

import pytest
from bson import ObjectId
from pydantic import ValidationError as PydanticValidationError

from schemas.dto.requests.auth import RegisterRequest
from schemas.dto.requests.distribution import (
    CreateDistributionRequest,
    UpdateDistributionRequest,
)
from schemas.dto.requests.sponsorship import CreateSponsorshipRequest
from schemas.dto.responses.cause import CauseDetailResponse
from schemas.dto.responses.sponsorship import SponsorshipSummary
from schemas.models.cause import CauseDoc
from schemas.models.sponsorship import SponsorshipDoc


def _shipping() -> dict:
    return {
        "shippingAddress": "1 Dock Rd",
        "shippingCity": "Springfield",
        "shippingState": "IL",
        "shippingZipCode": "62701",
        "shippingContactName": "Sam",
        "shippingPhone": "555-0100",
    }


class TestRegisterRequest:
    def test_admin_role_not_allowed(self):
        with pytest.raises(PydanticValidationError):
            RegisterRequest(email="a@b.co", password="longenough", role="admin")

    def test_short_password_rejected(self):
        with pytest.raises(PydanticValidationError):
            RegisterRequest(email="a@b.co", password="short")

    def test_default_role(self):
        assert RegisterRequest(email="a@b.co", password="longenough").role == "user"


class TestCreateSponsorshipRequest:
    def test_accepts_camel_case(self):
        req = CreateSponsorshipRequest.model_validate(
            {
                "cause": str(ObjectId()),
                "organizationName": "Acme",
                "contactName": "Sam",
                "email": "sam@acme.test",
                "phone": "555",
                "toteQuantity": 20,
            }
        )
        assert req.organization_name == "Acme"
        assert req.tote_quantity == 20
        assert req.total_amount is None


class TestCreateDistributionRequest:
    def test_parses_allocations(self):
        req = CreateDistributionRequest.model_validate(
            {
                "sponsorshipId": str(ObjectId()),
                **_shipping(),
                "distributionLocations": [
                    {"location": str(ObjectId()), "quantity": 30},
                    {"location": str(ObjectId()), "quantity": 20, "notes": "dock B"},
                ],
            }
        )
        assert [a.quantity for a in req.distribution_locations] == [30, 20]
        assert req.distribution_locations[1].notes == "dock B"

    def test_empty_allocation_list_rejected(self):
        with pytest.raises(PydanticValidationError):
            CreateDistributionRequest.model_validate(
                {
                    "sponsorshipId": str(ObjectId()),
                    **_shipping(),
                    "distributionLocations": [],
                }
            )

    def test_zero_quantity_rejected(self):
        with pytest.raises(PydanticValidationError):
            CreateDistributionRequest.model_validate(
                {
                    "sponsorshipId": str(ObjectId()),
                    **_shipping(),
                    "distributionLocations": [
                        {"location": str(ObjectId()), "quantity": 0}
                    ],
                }
            )


def test_update_distribution_tracks_unset_fields():
    req = UpdateDistributionRequest.model_validate({"trackingNumber": "1Z999"})
    assert req.model_dump(exclude_unset=True) == {"tracking_number": "1Z999"}


class TestCauseDetailResponse:
    def test_merges_availability_and_serializes_camel_case(self):
        cause = CauseDoc(
            _id=ObjectId(),
            title="Clean beaches",
            description="d",
            target_amount=1000,
            current_amount=250,
            creator=ObjectId(),
            category="environment",
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc),
        )
        sponsorship = SponsorshipDoc(
            _id=ObjectId(),
            cause=cause.id,
            organization_name="Acme",
            contact_name="Sam",
            email="s@a.test",
            phone="555",
            tote_quantity=25,
            total_amount=250,
            status="approved",
        )
        resp = CauseDetailResponse.from_doc(
            cause,
            total_totes=25,
            claimed_totes=5,
            available_totes=20,
            sponsorships=[SponsorshipSummary.from_doc(sponsorship)],
        )
        body = resp.model_dump(mode="json", by_alias=True)
        assert body["_id"] == str(cause.id)
        assert body["availableTotes"] == 20
        assert body["currentAmount"] == 250
        assert body["sponsorships"][0]["amount"] == 250
        assert body["sponsorships"][0]["toteQuantity"] == 25
        assert "current_amount" not in body
