"""Tests for conversion between store records and transport shapes."""

import pytest

from src.user_api.api.http.schemas import UserDTO, from_dto, to_dto
from src.user_api.entities.user import User


@pytest.fixture
def record() -> User:
    return User(id=7, name="Ann", email="a@x.com", phone="555", address="1 Rd")


class TestToDto:
    def test_copies_every_field(self, record: User):
        dto = to_dto(record)

        assert dto == UserDTO(id=7, name="Ann", email="a@x.com", phone="555", address="1 Rd")

    def test_none_maps_to_none(self):
        assert to_dto(None) is None

    def test_null_fields_stay_null(self):
        dto = to_dto(User(id=1))

        assert dto.model_dump() == {
            "id": 1,
            "name": None,
            "email": None,
            "phone": None,
            "address": None,
        }

    def test_serialized_keys(self, record: User):
        assert set(to_dto(record).model_dump(mode="json")) == {
            "id",
            "name",
            "email",
            "phone",
            "address",
        }


class TestFromDto:
    def test_copies_every_field(self):
        dto = UserDTO(id=3, name="Bob", email="b@x.com", phone="1", address="2 Ave")

        assert from_dto(dto) == User(
            id=3, name="Bob", email="b@x.com", phone="1", address="2 Ave"
        )

    def test_none_maps_to_none(self):
        assert from_dto(None) is None

    def test_record_survives_round_trip(self, record: User):
        assert from_dto(to_dto(record)) == record

    def test_conversion_does_not_alias_inputs(self, record: User):
        dto = to_dto(record)
        dto.name = "Changed"

        assert record.name == "Ann"
