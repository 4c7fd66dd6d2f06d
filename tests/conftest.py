import json
from typing import Any, Dict, List, Optional
from unittest.mock import MagicMock

import pytest
import requests

from userdoc.config import Config
from userdoc.metadata_client import MetadataClient
from userdoc.service import UserDocService

CONTRACT_ADDRESS = "0x5aAeb6053F3E94C9b9A09f33669435E7Ef1BeAed"
RECIPIENT = "0xfB6916095ca1df60bB79Ce92cE3Ea74c37c5d359"
REPO_URL = "https://repo.example/contract/byChainId/"

TOKEN_ABI: List[Dict[str, Any]] = [
    {"type": "constructor", "inputs": [{"name": "supply", "type": "uint256"}]},
    {
        "type": "event",
        "name": "Transfer",
        "inputs": [
            {"name": "from", "type": "address", "indexed": True},
            {"name": "to", "type": "address", "indexed": True},
            {"name": "value", "type": "uint256", "indexed": False},
        ],
    },
    {
        "type": "function",
        "name": "transfer",
        "inputs": [{"name": "to", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "approve",
        "inputs": [{"name": "spender", "type": "address"}, {"name": "amount", "type": "uint256"}],
        "outputs": [{"name": "", "type": "bool"}],
    },
    {
        "type": "function",
        "name": "rename",
        "inputs": [{"name": "label", "type": "string"}, {"name": "version", "type": "uint8"}],
        "outputs": [],
    },
]

TOKEN_NOTICES: Dict[str, Any] = {
    "transfer(address,uint256)": {"notice": "Transfers `amount` tokens to `to`"},
    "rename(string,uint8)": {"notice": "Renames the token to `label` (v`version`)"},
    "approve(address,uint256)": {},
}


def build_metadata(abi: Optional[List[Dict[str, Any]]] = None, methods: Optional[Dict[str, Any]] = None) -> str:
    return json.dumps(
        {
            "compiler": {"version": "0.8.21+commit.d9974bed"},
            "language": "Solidity",
            "output": {
                "abi": TOKEN_ABI if abi is None else abi,
                "devdoc": {"kind": "dev", "methods": {}, "version": 1},
                "userdoc": {"kind": "user", "methods": TOKEN_NOTICES if methods is None else methods, "version": 1},
            },
            "settings": {},
            "sources": {},
            "version": 1,
        }
    )


def fake_response(status_code: int = 200, text: str = "", reason: str = "OK") -> MagicMock:
    response = MagicMock()
    response.status_code = status_code
    response.text = text
    response.reason = reason
    return response


@pytest.fixture
def session():
    sess = MagicMock(spec=requests.Session)
    sess.get.return_value = fake_response(200, build_metadata())
    return sess


@pytest.fixture
def client(session):
    return MetadataClient(base_urls=[REPO_URL], timeout=5, session=session)


@pytest.fixture
def service(client):
    return UserDocService(Config(metadata_repo_urls=[REPO_URL]), client=client)
