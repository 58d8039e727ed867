"""Unit tests for the ``Address`` value object and ``BaseEntity``."""

from __future__ import annotations

from dataclasses import FrozenInstanceError
from uuid import uuid4

import pytest

from shared.domain.entity import BaseEntity
from shared.domain.exceptions import ValidationError
from shared.domain.value_objects import Address

pytestmark = pytest.mark.unit


def _address(**overrides) -> Address:
    fields = {
        "street": "1 Main St",
        "city": "Springfield",
        "state": "IL",
        "zip_code": "62701",
        "country": "USA",
    }
    fields.update(overrides)
    return Address(**fields)


class TestAddress:
    def test_full_address_format(self):
        assert _address().full_address == "1 Main St, Springfield, IL 62701, USA"

    def test_str_is_full_address(self):
        address = _address()
        assert str(address) == address.full_address

    def test_equal_by_value(self):
        assert _address() == _address()
        assert hash(_address()) == hash(_address())
        assert _address() != _address(zip_code="62702")

    @pytest.mark.parametrize(
        "field, message",
        [
            ("street", "Street cannot be empty."),
            ("city", "City cannot be empty."),
            ("state", "State cannot be empty."),
            ("zip_code", "Zip code cannot be empty."),
            ("country", "Country cannot be empty."),
        ],
    )
    def test_blank_part_rejected(self, field, message):
        with pytest.raises(ValidationError, match=message):
            _address(**{field: "   "})

    def test_is_immutable(self):
        address = _address()
        with pytest.raises(FrozenInstanceError):
            address.city = "Shelbyville"


class TestBaseEntity:
    def test_new_entity_gets_uuid7(self):
        entity = BaseEntity()
        assert entity.id.version == 7
        assert entity.updated_at is None

    def test_explicit_id_kept(self):
        uid = uuid4()
        assert BaseEntity(uid).id == uid

    def test_equality_by_type_and_id(self):
        uid = uuid4()
        assert BaseEntity(uid) == BaseEntity(uid)
        assert BaseEntity(uid) != BaseEntity(uuid4())

    def test_touch_sets_updated_at(self):
        entity = BaseEntity()
        entity._touch()
        assert entity.updated_at is not None
        assert entity.updated_at >= entity.created_at
