import json

import pytest

from placement.core.exceptions import IdentityUnavailable
from placement.core.validators import is_valid_client_uuid
from placement.services.identity import (
    CLIENT_UUID_KEY,
    IdentityProvider,
    IdentityResolver,
    InMemoryIdentityProvider,
    LocalFileIdentityProvider,
    RequestIdentityProvider,
)


def test_in_memory_provider_generates_once():
    storage = {}
    provider = InMemoryIdentityProvider(storage)

    first = provider.resolve()

    assert is_valid_client_uuid(first)
    assert storage[CLIENT_UUID_KEY] == first
    assert provider.resolve() == first


def test_in_memory_provider_keeps_existing_token():
    provider = InMemoryIdentityProvider({CLIENT_UUID_KEY: "existing-token"})
    assert provider.resolve() == "existing-token"


def test_local_file_provider_persists_across_instances(tmp_path):
    path = tmp_path / "profile" / "identity.json"

    first = LocalFileIdentityProvider(path).resolve()
    second = LocalFileIdentityProvider(path).resolve()

    assert first == second
    assert json.loads(path.read_text()) == {CLIENT_UUID_KEY: first}


def test_local_file_provider_keeps_other_keys(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text(json.dumps({"theme": "dark"}))

    token = LocalFileIdentityProvider(path).resolve()

    assert json.loads(path.read_text()) == {"theme": "dark", CLIENT_UUID_KEY: token}


def test_local_file_provider_never_regenerates(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text(json.dumps({CLIENT_UUID_KEY: "6f1c1a2e-8a4b-4c55-9d7e-0b8f3f2a9c11"}))

    assert LocalFileIdentityProvider(path).resolve() == "6f1c1a2e-8a4b-4c55-9d7e-0b8f3f2a9c11"


def test_local_file_provider_unreadable_store(tmp_path):
    # A directory where the file should be cannot be opened for reading
    with pytest.raises(IdentityUnavailable):
        LocalFileIdentityProvider(tmp_path).resolve()


def test_local_file_provider_corrupt_store(tmp_path):
    path = tmp_path / "identity.json"
    path.write_text("{not json")

    with pytest.raises(IdentityUnavailable) as exc_info:
        LocalFileIdentityProvider(path).resolve()

    assert exc_info.value.status_code == 500
    assert exc_info.value.to_dict()["error"]["code"] == "IDENTITY_UNAVAILABLE"


def test_request_provider_reuses_presented_token():
    provider = RequestIdentityProvider("6F1C1A2E-8A4B-4C55-9D7E-0B8F3F2A9C11")

    assert provider.resolve() == "6f1c1a2e-8a4b-4c55-9d7e-0b8f3f2a9c11"
    assert provider.issued is False


@pytest.mark.parametrize("presented", [None, "", "garbage"])
def test_request_provider_issues_when_missing_or_malformed(presented):
    provider = RequestIdentityProvider(presented)

    token = provider.resolve()

    assert is_valid_client_uuid(token)
    assert provider.issued is True
    assert provider.resolve() == token


class CountingProvider(IdentityProvider):
    def __init__(self):
        self.calls = 0

    def resolve(self):
        self.calls += 1
        return f"token-{self.calls}"


def test_resolver_resolves_once_per_session():
    provider = CountingProvider()
    resolver = IdentityResolver(provider)

    assert resolver.resolve() == "token-1"
    assert resolver.resolve() == "token-1"
    assert provider.calls == 1


def test_default_provider_uses_configured_path(tmp_path, monkeypatch):
    from placement.services.identity import default_identity_provider
    from placement.services.identity import resolver

    path = tmp_path / "identity.json"
    monkeypatch.setattr(resolver.settings, "IDENTITY_STORE_PATH", str(path))

    provider = default_identity_provider()

    assert isinstance(provider, LocalFileIdentityProvider)
    assert provider.path == path
