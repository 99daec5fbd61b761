import pytest

from forkast_keygen.config import KeygenConfig, parse_flag
from forkast_keygen.endpoints import endpoint_url, resolve_endpoints
from forkast_keygen.errors import ConfigurationError


def test_resolve_deduplicates_preserving_order():
    assert resolve_endpoints(
        ["https://a.example", "https://a.example", "https://b.example"]
    ) == ["https://a.example", "https://b.example"]


def test_resolve_trims_and_drops_empties():
    assert resolve_endpoints(
        [None, "  ", " https://b.example ", "https://a.example", "https://b.example"]
    ) == ["https://b.example", "https://a.example"]


def test_resolve_empty_raises_configuration_error():
    with pytest.raises(ConfigurationError):
        resolve_endpoints([None, "", "   "])


def test_endpoint_url_replaces_base_path():
    assert endpoint_url("https://a.example", "/auth/api-key") == "https://a.example/auth/api-key"
    assert (
        endpoint_url("https://a.example/v1/", "/auth/api-key?apiKey=k1")
        == "https://a.example/auth/api-key?apiKey=k1"
    )


def test_config_from_env_orders_clob_then_relayer_then_extras():
    config = KeygenConfig.from_env(
        {
            "CLOB_URL": "https://clob.example",
            "RELAYER_URL": "https://relayer.example",
            "FORKAST_ENDPOINTS": "https://extra.example, https://clob.example",
        }
    )
    assert config.resolve_endpoints() == [
        "https://clob.example",
        "https://relayer.example",
        "https://extra.example",
    ]


def test_config_from_env_without_endpoints_fails_fast():
    config = KeygenConfig.from_env({})
    with pytest.raises(ConfigurationError):
        config.resolve_endpoints()


def test_config_defaults_and_overrides():
    config = KeygenConfig.from_env({"CLOB_URL": "https://clob.example"})
    assert config.timeout == 5.0
    assert config.chain_id == 137
    assert config.debug_errors is False

    config = KeygenConfig.from_env(
        {"FORKAST_TIMEOUT": "2.5", "FORKAST_CHAIN_ID": "80002", "FORKAST_DEBUG_ERRORS": " YES "}
    )
    assert config.timeout == 2.5
    assert config.chain_id == 80002
    assert config.debug_errors is True


def test_config_rejects_bad_numbers():
    with pytest.raises(ConfigurationError):
        KeygenConfig.from_env({"FORKAST_TIMEOUT": "soon"})
    with pytest.raises(ConfigurationError):
        KeygenConfig.from_env({"FORKAST_CHAIN_ID": "polygon"})


@pytest.mark.parametrize("value", ["1", "true", "TRUE", "yes", "on", " On "])
def test_parse_flag_truthy(value):
    assert parse_flag(value) is True


@pytest.mark.parametrize("value", [None, "", "0", "false", "off", "nope"])
def test_parse_flag_falsy(value):
    assert parse_flag(value) is False
