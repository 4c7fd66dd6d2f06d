
import requests

from conftest import CONTRACT_ADDRESS, REPO_URL, fake_response
from userdoc.metadata_client import MetadataClient
from userdoc.models import ContractNotFound, MetadataFound, TransportError


def test_url_uses_checksummed_address(client, session):
    client.fetch(5, CONTRACT_ADDRESS.lower())
    session.get.assert_called_once_with(
        f"{REPO_URL}5/{CONTRACT_ADDRESS}/metadata.json",
        timeout=5,
    )


def test_url_from_address_bytes(client):
    raw = bytes.fromhex(CONTRACT_ADDRESS[2:])
    assert client.metadata_url(1, raw) == f"{REPO_URL}1/{CONTRACT_ADDRESS}/metadata.json"


def test_only_first_repository_is_used(session):
    client = MetadataClient(base_urls=[REPO_URL, "https://mirror.example/"], session=session)
    assert client.metadata_url(1, CONTRACT_ADDRESS).startswith(REPO_URL)


def test_found(client, session):
    session.get.return_value = fake_response(200, "{}")
    assert client.fetch(1, CONTRACT_ADDRESS) == MetadataFound("{}")


def test_not_found(client, session):
    session.get.return_value = fake_response(404, "", "Not Found")
    assert client.fetch(1, CONTRACT_ADDRESS) == ContractNotFound()


def test_other_status(client, session):
    session.get.return_value = fake_response(500, "", "Internal Server Error")
    assert client.fetch(1, CONTRACT_ADDRESS) == TransportError("Error: 500 Internal Server Error")


def test_network_failure(client, session):
    session.get.side_effect = requests.ConnectionError("connection refused")
    result = client.fetch(1, CONTRACT_ADDRESS)
    assert isinstance(result, TransportError)
    assert "connection refused" in result.message


def test_single_request_per_fetch(client, session):
    session.get.return_value = fake_response(503, "", "Service Unavailable")
    client.fetch(1, CONTRACT_ADDRESS)
    assert session.get.call_count == 1


def test_default_session_created():
    client = MetadataClient()
    assert isinstance(client.session, requests.Session)
    assert client.base_urls[0].endswith("/byChainId/")
