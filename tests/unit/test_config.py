"""
Unit Tests for Configuration Module

These tests verify that the configuration system works correctly:
- Default values are applied when needed
- RPC endpoints and dYdX credentials are parsed from their string forms
- Validation catches invalid configurations

Run with:
    pytest tests/unit/test_config.py -v
"""

import pytest
from core.config import Settings, settings, validate_configuration


class TestConfigurationLoading:
    """Test that configuration loads with sane values"""

    def test_app_port_is_valid_integer(self):
        """Verify app port is a valid integer"""
        assert isinstance(settings.app_port, int)
        assert 1 <= settings.app_port <= 65535

    def test_log_level_is_set(self):
        """Verify log level is configured"""
        assert isinstance(settings.log_level, str)
        assert len(settings.log_level) > 0

    def test_fan_out_settings_are_positive(self):
        """Verify concurrency and timeouts are usable"""
        assert settings.fetch_concurrency >= 1
        assert settings.fetch_timeout > 0
        assert settings.request_timeout > 0

    def test_only_used_settings_are_declared(self):
        """Fields nothing reads are not carried"""
        assert "debug" not in Settings.model_fields

    def test_api_urls_are_http(self):
        """Verify every L2 API base URL is an HTTP(S) URL"""
        for url in (
            settings.zksync_api_url,
            settings.loopring_api_url,
            settings.starknet_mainnet_rpc_url,
            settings.imx_api_url,
            settings.dydx_api_url,
        ):
            assert url.startswith("http")


class TestRpcEndpointsParsing:
    """Test that node RPC endpoints are parsed from chainName=url pairs"""

    def test_empty_endpoints(self):
        s = Settings(_env_file=None, rpc_endpoints="")
        assert s.rpc_endpoints_map == {}

    def test_pairs_are_parsed_and_lowercased(self):
        s = Settings(_env_file=None, rpc_endpoints="Mainnet=https://eth.example, metis = https://metis.example ")
        assert s.rpc_endpoints_map == {
            "mainnet": "https://eth.example",
            "metis": "https://metis.example",
        }

    def test_url_may_contain_equals_sign(self):
        """Only the first '=' separates name from URL"""
        s = Settings(_env_file=None, rpc_endpoints="metis=https://andromeda.metis.io/?owner=1088")
        assert s.rpc_endpoints_map["metis"] == "https://andromeda.metis.io/?owner=1088"

    def test_get_rpc_endpoint_is_case_insensitive(self):
        s = Settings(_env_file=None, rpc_endpoints="arbitrum=https://arb.example")
        assert s.get_rpc_endpoint("Arbitrum") == "https://arb.example"
        assert s.get_rpc_endpoint("optimism") is None
        assert s.get_rpc_endpoint("") is None

    def test_malformed_entry_raises(self):
        s = Settings(_env_file=None, rpc_endpoints="mainnet")
        with pytest.raises(ValueError):
            _ = s.rpc_endpoints_map


class TestDydxCredentialsParsing:
    """Test that dYdX credentials are parsed from JSON"""

    def test_empty_credentials(self):
        s = Settings(_env_file=None, dydx_api_credentials="")
        assert s.dydx_credentials_map == {}

    def test_keys_are_lowercased(self):
        s = Settings(
            _env_file=None,
            dydx_api_credentials='{"0xABC": {"key": "k", "secret": "s", "passphrase": "p"}}'
        )
        assert s.dydx_credentials_map == {"0xabc": {"key": "k", "secret": "s", "passphrase": "p"}}

    def test_non_object_raises(self):
        s = Settings(_env_file=None, dydx_api_credentials='["0xabc"]')
        with pytest.raises(ValueError):
            _ = s.dydx_credentials_map


class TestConfigurationValidation:
    """Test configuration validation function"""

    def test_validate_configuration_succeeds(self, monkeypatch):
        """Verify validation passes with default configuration"""
        monkeypatch.setattr("core.config.settings", Settings(_env_file=None))
        try:
            validate_configuration()
        except ValueError as e:
            pytest.fail(f"Configuration validation failed: {e}")

    def test_invalid_log_level_rejected(self, monkeypatch):
        monkeypatch.setattr("core.config.settings", Settings(_env_file=None, log_level="LOUD"))
        with pytest.raises(ValueError, match="LOG_LEVEL"):
            validate_configuration()

    def test_zero_concurrency_rejected(self, monkeypatch):
        monkeypatch.setattr("core.config.settings", Settings(_env_file=None, fetch_concurrency=0))
        with pytest.raises(ValueError, match="FETCH_CONCURRENCY"):
            validate_configuration()

    def test_bad_credentials_json_rejected(self, monkeypatch):
        monkeypatch.setattr("core.config.settings", Settings(_env_file=None, dydx_api_credentials="{nope"))
        with pytest.raises(ValueError, match="DYDX_API_CREDENTIALS"):
            validate_configuration()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
