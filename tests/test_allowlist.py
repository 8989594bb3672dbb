# Tests for security/allowlist.py
# Created: 2026-10-12

import pytest

from repogate.github.models import Identity
from repogate.security.allowlist import AllowList


def _identity(login: str = "", name: str | None = None) -> Identity:
    return Identity(id=1, login=login, name=name)


class TestFromConfig:
    def test_parses_and_casefolds(self):
        allow = AllowList.from_config(" Alice, BOB ,carol")
        assert allow.members == ["alice", "bob", "carol"]
        assert allow.enabled is True

    def test_drops_blank_entries(self):
        allow = AllowList.from_config("alice,, ,bob,")
        assert allow.members == ["alice", "bob"]

    @pytest.mark.parametrize("raw", ["", None, " , ,"])
    def test_empty_disables_gate(self, raw):
        allow = AllowList.from_config(raw)
        assert allow.enabled is False
        assert allow.members == []

    def test_is_immutable(self):
        allow = AllowList.from_config("alice")
        with pytest.raises(AttributeError):
            allow.names = frozenset({"mallory"})


class TestIsAllowed:
    def test_empty_list_admits_everyone(self):
        assert AllowList().is_allowed(_identity("anyone")) is True

    def test_member_admitted(self):
        assert AllowList.from_config("alice,bob").is_allowed(_identity("bob")) is True

    def test_non_member_rejected(self):
        assert AllowList.from_config("alice").is_allowed(_identity("mallory")) is False

    @pytest.mark.parametrize(
        "configured,login",
        [("ALICE", "alice"), ("alice", "ALICE"), ("AlIcE", "aLiCe")],
    )
    def test_case_insensitive(self, configured, login):
        assert AllowList.from_config(configured).is_allowed(_identity(login)) is True

    def test_no_partial_match(self):
        allow = AllowList.from_config("alice")
        assert allow.is_allowed(_identity("alice2")) is False
        assert allow.is_allowed(_identity("ali")) is False

    def test_falls_back_to_display_name(self):
        allow = AllowList.from_config("Alice Example")
        assert allow.is_allowed(_identity(login="", name="alice example")) is True

    def test_nameless_identity_never_admitted(self):
        # An empty entry cannot be configured, so even a crafted set must not match "".
        allow = AllowList(frozenset({"", "alice"}))
        assert allow.is_allowed(_identity(login="", name=None)) is False
