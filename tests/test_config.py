"""Tests for TransportConfig and Request."""

import pytest

from fetchtask import HttpMethod, ParameterEncoding, Request, TransportConfig


class TestTransportConfig:
    """Test configuration defaults, validation and loaders."""

    def test_defaults(self):
        config = TransportConfig()
        assert config.timeout == 60.0
        assert config.connect_timeout is None
        assert config.follow_redirects is True
        assert dict(config.headers) == {}

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"timeout": 0}, "timeout"),
            ({"connect_timeout": -1}, "connect_timeout"),
            ({"max_connections": 0}, "max_connections"),
            ({"max_connections": 2, "max_keepalive_connections": 3}, "max_keepalive_connections"),
            ({"max_redirects": -1}, "max_redirects"),
            ({"chunk_size": 0}, "chunk_size"),
        ],
    )
    def test_invalid_values_rejected(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            TransportConfig(**kwargs)

    def test_timeout_can_be_disabled(self):
        assert TransportConfig(timeout=None).timeout is None

    def test_from_mapping(self):
        config = TransportConfig.from_mapping({"timeout": 5, "headers": {"X-App": "t"}})
        assert config.timeout == 5
        assert config.headers == {"X-App": "t"}

    def test_from_mapping_rejects_unknown_keys(self):
        with pytest.raises(ValueError, match="retries"):
            TransportConfig.from_mapping({"retries": 3})

    def test_from_env(self):
        environ = {
            "FETCHTASK_TIMEOUT": "2.5",
            "FETCHTASK_MAX_CONNECTIONS": "4",
            "FETCHTASK_MAX_KEEPALIVE_CONNECTIONS": "2",
            "FETCHTASK_FOLLOW_REDIRECTS": "false",
            "FETCHTASK_CONNECT_TIMEOUT": "none",
            "UNRELATED": "1",
        }
        config = TransportConfig.from_env(environ=environ)

        assert config.timeout == 2.5
        assert config.max_connections == 4
        assert config.max_keepalive_connections == 2
        assert config.follow_redirects is False
        assert config.connect_timeout is None

    def test_from_env_custom_prefix(self):
        config = TransportConfig.from_env(prefix="APP_HTTP_", environ={"APP_HTTP_MAX_REDIRECTS": "3"})
        assert config.max_redirects == 3

    def test_from_env_reads_process_environment(self, monkeypatch):
        monkeypatch.setenv("FETCHTASK_CHUNK_SIZE", "1024")
        assert TransportConfig.from_env().chunk_size == 1024


class TestRequest:
    """Test request argument encoding."""

    def test_defaults(self):
        request = Request("http://example.test/")
        assert request.method is HttpMethod.GET
        assert request.rejected_status_codes == frozenset()
        assert isinstance(request.config, TransportConfig)

    def test_empty_url_rejected(self):
        with pytest.raises(ValueError):
            Request("")

    def test_rejected_status_codes_frozen(self):
        request = Request("http://example.test/", rejected_status_codes=[401, 403])
        assert request.rejected_status_codes == frozenset({401, 403})
        assert request.is_rejected(403)
        assert not request.is_rejected(200)

    @pytest.mark.parametrize("method", [HttpMethod.GET, HttpMethod.DELETE])
    def test_url_encoding_uses_query_for_get_and_delete(self, method):
        request = Request("http://example.test/", method=method, parameters={"q": "x"})
        kwargs = request.httpx_arguments()
        assert kwargs["method"] == method.value
        assert kwargs["params"] == {"q": "x"}
        assert "data" not in kwargs

    @pytest.mark.parametrize("method", [HttpMethod.POST, HttpMethod.PUT, HttpMethod.PATCH])
    def test_url_encoding_uses_form_body_otherwise(self, method):
        request = Request("http://example.test/", method=method, parameters={"q": "x"})
        kwargs = request.httpx_arguments()
        assert kwargs["data"] == {"q": "x"}
        assert "params" not in kwargs

    def test_json_encoding(self):
        request = Request(
            "http://example.test/",
            method=HttpMethod.POST,
            parameters={"a": [1, 2]},
            encoding=ParameterEncoding.JSON,
            headers={"X-Req": "1"},
        )
        kwargs = request.httpx_arguments()
        assert kwargs["json"] == {"a": [1, 2]}
        assert kwargs["headers"] == {"X-Req": "1"}

    def test_no_parameters(self):
        kwargs = Request("http://example.test/", method=HttpMethod.POST).httpx_arguments()
        assert set(kwargs) == {"method", "url", "headers"}
