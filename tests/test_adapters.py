"""Tests for logging, configuration and plan loading adapters."""
import io
import json

import httpx
import pytest

from incapsula_manager.adapters.inbound.plan_loader import load_planned_resources, parse_plan
from incapsula_manager.adapters.outbound import ConsoleLogger, HttpxIncapsulaClient, JsonLogger
from incapsula_manager.application import create_association_resource, create_http_client, create_site_client
from incapsula_manager.config import DEFAULT_BASE_URL, DEFAULT_BASE_URL_API, IncapsulaConfig
from incapsula_manager.domain.exceptions import ConfigurationError, DecodeError, TransportError


class TestConsoleLogger:
    """Test the console logger."""

    def test_respects_level(self, capsys):
        logger = ConsoleLogger(level="WARNING", use_colors=False)

        logger.info("hidden")
        logger.warning("shown", site_id=42)

        err = capsys.readouterr().err
        assert "hidden" not in err
        assert "WARNING: shown (site_id=42)" in err

    def test_error_includes_exception_type(self, capsys):
        logger = ConsoleLogger(level="DEBUG", use_colors=False)

        logger.error("failed", exception=ValueError("bad"))

        assert "error_type=ValueError" in capsys.readouterr().err

    def test_long_bodies_are_shortened(self, capsys):
        logger = ConsoleLogger(level="DEBUG", use_colors=False)

        logger.debug("response", body="x" * 5000)

        err = capsys.readouterr().err
        assert "(5000 chars)" in err
        assert "x" * 2001 not in err

    def test_set_level(self, capsys):
        logger = ConsoleLogger(level="ERROR", use_colors=False)
        logger.set_level("debug")

        logger.debug("now visible")

        assert "now visible" in capsys.readouterr().err


class TestJsonLogger:
    """Test the JSON logger."""

    def test_writes_json_with_context(self):
        stream = io.StringIO()
        logger = JsonLogger(level="INFO", context={"account_id": 777}, stream=stream)
        logger.set_context(command="site status")

        logger.info("site read", site_id=42)
        logger.debug("ignored")

        lines = stream.getvalue().strip().splitlines()
        assert len(lines) == 1
        entry = json.loads(lines[0])
        assert entry["level"] == "INFO"
        assert entry["message"] == "site read"
        assert entry["account_id"] == 777
        assert entry["command"] == "site status"
        assert entry["site_id"] == 42

    def test_error_fields(self):
        stream = io.StringIO()
        logger = JsonLogger(stream=stream)

        logger.error("failed", exception=TransportError("refused"))

        entry = json.loads(stream.getvalue())
        assert entry["error"] == "refused"
        assert entry["error_type"] == "TransportError"

    def test_long_values_shortened_and_none_dropped(self):
        stream = io.StringIO()
        logger = JsonLogger(level="DEBUG", stream=stream)

        logger.debug("response", body="x" * 5000, account_id=None)

        entry = json.loads(stream.getvalue())
        assert entry["body"].endswith("(5000 chars)")
        assert "account_id" not in entry

    def test_fields_cannot_replace_core_keys(self):
        stream = io.StringIO()
        logger = JsonLogger(context={"level": "bogus"}, stream=stream)

        logger.info("kept", message="other")

        entry = json.loads(stream.getvalue())
        assert entry["level"] == "INFO"
        assert entry["message"] == "kept"

    def test_unbind_context(self):
        stream = io.StringIO()
        logger = JsonLogger(context={"command": "site"}, stream=stream)
        logger.set_context(command=None)

        logger.info("done")

        assert "command" not in json.loads(stream.getvalue())

    def test_error_cause(self):
        stream = io.StringIO()
        logger = JsonLogger(stream=stream)
        try:
            try:
                raise ValueError("bad json")
            except ValueError as e:
                raise DecodeError("cannot parse") from e
        except DecodeError as e:
            logger.error("failed", exception=e)

        entry = json.loads(stream.getvalue())
        assert entry["error_type"] == "DecodeError"
        assert entry["error_cause"] == "ValueError"


class TestIncapsulaConfig:
    """Test configuration loading."""

    def test_defaults(self):
        config = IncapsulaConfig.from_env({})

        assert config.base_url == DEFAULT_BASE_URL
        assert config.base_url_api == DEFAULT_BASE_URL_API
        assert config.timeout == 30.0
        assert config.log_level == "INFO"

    def test_from_env(self):
        config = IncapsulaConfig.from_env(
            {
                "INCAPSULA_API_ID": "id",
                "INCAPSULA_API_KEY": "key",
                "INCAPSULA_BASE_URL": "https://example.test/api/prov/v1/",
                "INCAPSULA_TIMEOUT": "5",
                "LOG_LEVEL": "debug",
            }
        )

        assert config.api_id == "id"
        assert config.base_url == "https://example.test/api/prov/v1"
        assert config.timeout == 5.0
        assert config.log_level == "DEBUG"

    def test_bad_timeout(self):
        with pytest.raises(ConfigurationError):
            IncapsulaConfig.from_env({"INCAPSULA_TIMEOUT": "soon"})

    def test_overrides_skip_empty_values(self):
        config = IncapsulaConfig(api_id="id", api_key="key").with_overrides(
            api_id=None, api_key="", base_url_api="https://api.example.test/"
        )

        assert config.api_id == "id"
        assert config.api_key == "key"
        assert config.base_url_api == "https://api.example.test"

    def test_validate_requires_credentials(self):
        with pytest.raises(ConfigurationError) as exc_info:
            IncapsulaConfig(api_id="id").validate()

        assert "api_key" in str(exc_info.value)

    def test_repr_hides_key(self):
        assert "secret" not in repr(IncapsulaConfig(api_id="id", api_key="secret"))


class TestHttpxIncapsulaClient:
    """Test the HTTP transport."""

    def test_json_request_with_params(self, api_mock, http_client, config):
        route = api_mock.put(f"{config.base_url_api}/things/1").mock(return_value=httpx.Response(201))

        response = http_client.do_json_request_with_headers(
            "PUT", f"{config.base_url_api}/things/1", {"a": 1}, "UpdateThing", params={"caid": "7"}
        )

        assert response.status_code == 201
        request = route.calls.last.request
        assert json.loads(request.content) == {"a": 1}
        assert request.url.params["caid"] == "7"
        assert request.headers["x-tf-operation"] == "UpdateThing"

    def test_transport_error(self, api_mock, http_client, config):
        api_mock.get(f"{config.base_url_api}/things").mock(side_effect=httpx.ConnectTimeout("slow"))

        with pytest.raises(TransportError):
            http_client.get_with_headers(f"{config.base_url_api}/things", {}, "ReadThing")

    def test_uses_injected_client(self, config, logger):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, text=request.url.path))
        client = HttpxIncapsulaClient(config=config, logger=logger, client=httpx.Client(transport=transport))

        response = client.get_with_headers(f"{config.base_url_api}/ping", {}, "Ping")

        assert response.text == "/ping"
        client.close()


class TestFactories:
    """Test adapter wiring."""

    def test_http_client_requires_credentials(self, logger):
        with pytest.raises(ConfigurationError):
            create_http_client(IncapsulaConfig(), logger)

    def test_clients_borrow_caller_owned_transport(self, config, logger):
        with create_http_client(config, logger) as http:
            site_client = create_site_client(http, logger)
            resource = create_association_resource(http, logger)
            assert not http._client.is_closed

        assert http._client.is_closed
        assert site_client is not None
        assert resource is not None


class TestPlanLoader:
    """Test reading JSON plans."""

    PLAN = {
        "format_version": "1.2",
        "planned_values": {
            "root_module": {
                "resources": [
                    {
                        "address": "incapsula_policy_asset_association.a",
                        "type": "incapsula_policy_asset_association",
                        "name": "a",
                        "values": {"policy_id": "1", "asset_id": "42", "asset_type": "WEBSITE"},
                    },
                    {"address": "incapsula_site.www", "type": "incapsula_site", "name": "www", "values": {}},
                ],
                "child_modules": [
                    {
                        "address": "module.waf",
                        "resources": [
                            {
                                "address": "module.waf.incapsula_policy_asset_association.b",
                                "type": "incapsula_policy_asset_association",
                                "name": "b",
                                "values": {"policy_id": "2", "asset_id": "42", "asset_type": "WEBSITE"},
                            }
                        ],
                    }
                ],
            }
        },
    }

    def test_parse_plan_walks_child_modules(self):
        resources = parse_plan(self.PLAN)

        assert [r.address for r in resources] == [
            "incapsula_policy_asset_association.a",
            "incapsula_site.www",
            "module.waf.incapsula_policy_asset_association.b",
        ]
        assert resources[2].get("policy_id") == "2"

    def test_plan_without_planned_values(self):
        assert parse_plan({"format_version": "1.2"}) is None

    def test_load_from_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text(json.dumps(self.PLAN))

        resources = load_planned_resources(path)

        assert len(resources) == 3

    def test_load_invalid_file(self, tmp_path):
        path = tmp_path / "plan.json"
        path.write_text("not json")

        with pytest.raises(DecodeError):
            load_planned_resources(path)
