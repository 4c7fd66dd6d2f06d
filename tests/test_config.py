import pytest

from userdoc.config import DEFAULT_METADATA_REPO_URLS, Config, load_config, resolve_chain_id


def test_defaults(monkeypatch):
    for name in ("METADATA_REPO_URLS", "NETWORK", "CHAIN_ID", "REQUEST_TIMEOUT", "LOG_LEVEL"):
        monkeypatch.delenv(name, raising=False)
    cfg = load_config()
    assert cfg.metadata_repo_urls == DEFAULT_METADATA_REPO_URLS
    assert cfg.chain_id == 1
    assert cfg.request_timeout == 10
    assert cfg.log_level == "WARNING"


def test_env_overrides(monkeypatch):
    monkeypatch.setenv("METADATA_REPO_URLS", "https://a.example/repo, https://b.example/repo/")
    monkeypatch.setenv("NETWORK", "sepolia")
    monkeypatch.setenv("REQUEST_TIMEOUT", "3")
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.delenv("CHAIN_ID", raising=False)
    cfg = load_config()
    assert cfg.metadata_repo_urls == ["https://a.example/repo/", "https://b.example/repo/"]
    assert cfg.chain_id == 11155111
    assert cfg.request_timeout == 3
    assert cfg.log_level == "DEBUG"


def test_chain_id_env_wins(monkeypatch):
    monkeypatch.setenv("NETWORK", "mainnet")
    monkeypatch.setenv("CHAIN_ID", "42161")
    assert load_config().chain_id == 42161


def test_empty_repo_list(monkeypatch):
    monkeypatch.setenv("METADATA_REPO_URLS", " , ")
    with pytest.raises(ValueError):
        load_config()


def test_resolve_chain_id():
    assert resolve_chain_id("Mainnet") == 1
    assert resolve_chain_id("100") == 100
    assert resolve_chain_id("anything", "5") == 5
    with pytest.raises(ValueError):
        resolve_chain_id("unknown-net")


def test_config_instances_do_not_share_urls():
    first = Config()
    first.metadata_repo_urls.append("https://other.example/")
    assert Config().metadata_repo_urls == DEFAULT_METADATA_REPO_URLS
