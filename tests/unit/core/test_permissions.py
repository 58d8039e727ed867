"""Unit tests for ``IsStaffOrReadOnly``."""

from __future__ import annotations

from types import SimpleNamespace

import pytest
from django.contrib.auth.models import AnonymousUser
from rest_framework.test import APIRequestFactory

from modules.core.permissions import IsStaffOrReadOnly

pytestmark = pytest.mark.unit

factory = APIRequestFactory()


def _request(method, user):
    request = getattr(factory, method)("/")
    request.user = user
    return request


@pytest.fixture()
def reader():
    return SimpleNamespace(is_authenticated=True, is_staff=False)


@pytest.fixture()
def staff():
    return SimpleNamespace(is_authenticated=True, is_staff=True)


class TestIsStaffOrReadOnly:
    def test_anonymous_denied_even_for_reads(self):
        view = SimpleNamespace(action="list")
        assert not IsStaffOrReadOnly().has_permission(_request("get", AnonymousUser()), view)

    def test_reader_can_read(self, reader):
        view = SimpleNamespace(action="list")
        assert IsStaffOrReadOnly().has_permission(_request("get", reader), view)

    def test_reader_cannot_write(self, reader):
        view = SimpleNamespace(action="create")
        assert not IsStaffOrReadOnly().has_permission(_request("post", reader), view)

    def test_staff_can_write(self, staff):
        view = SimpleNamespace(action="destroy")
        assert IsStaffOrReadOnly().has_permission(_request("delete", staff), view)

    def test_open_write_action_allowed_for_reader(self, reader):
        view = SimpleNamespace(action="items", open_write_actions=("items",))
        assert IsStaffOrReadOnly().has_permission(_request("post", reader), view)
