"""Tests for the CLI adapter."""
import json

import httpx
import pytest
import respx
from click.testing import CliRunner

from incapsula_manager.adapters.inbound.cli_adapter import cli

API = "https://api.incapsula.test"
PROV = "https://my.incapsula.test/api/prov/v1"

ENV = {
    "INCAPSULA_API_ID": "12345",
    "INCAPSULA_API_KEY": "secret-key",
    "INCAPSULA_BASE_URL": PROV,
    "INCAPSULA_BASE_URL_API": API,
}


def write_plan(tmp_path, associations: list[tuple[str, str]]) -> str:
    resources = [
        {
            "address": f"incapsula_policy_asset_association.a{index}",
            "type": "incapsula_policy_asset_association",
            "name": f"a{index}",
            "values": {"policy_id": policy_id, "asset_id": asset_id, "asset_type": "WEBSITE"},
        }
        for index, (policy_id, asset_id) in enumerate(associations)
    ]
    path = tmp_path / "plan.json"
    path.write_text(json.dumps({"planned_values": {"root_module": {"resources": resources}}}))
    return str(path)


def mock_policy(mock, policy_id: str, policy_type: str) -> None:
    mock.get(f"{API}/policies/v2/policies/{policy_id}").mock(
        return_value=httpx.Response(200, json={"value": {"id": int(policy_id), "policyType": policy_type}})
    )


class TestCLI:
    """Test the CLI interface."""

    def test_cli_help(self):
        """CLI should show help text."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--help"])
        assert result.exit_code == 0
        assert "Incapsula Manager" in result.output
        assert "site" in result.output
        assert "validate-plan" in result.output

    def test_cli_version(self):
        """CLI should show version."""
        runner = CliRunner()
        result = runner.invoke(cli, ["--version"])
        assert result.exit_code == 0
        assert "0.1.0" in result.output

    def test_site_help(self):
        runner = CliRunner()
        result = runner.invoke(cli, ["site", "add", "--help"])
        assert result.exit_code == 0
        assert "--site-ip" in result.output
        assert "--account-id" in result.output

    def test_list_asset_types(self):
        """Should list supported asset types."""
        runner = CliRunner()
        result = runner.invoke(cli, ["list-asset-types"])
        assert result.exit_code == 0
        assert "WEBSITE" in result.output

    def test_missing_credentials_fails(self):
        runner = CliRunner()
        result = runner.invoke(
            cli, ["site", "status", "www.example.com", "42"],
            env={"INCAPSULA_API_ID": "", "INCAPSULA_API_KEY": ""},
        )
        assert result.exit_code == 1


class TestSiteCommands:
    """Test site commands against a mocked API."""

    def test_site_status(self):
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock.post(f"{PROV}/sites/status").mock(
                return_value=httpx.Response(
                    200, json={"res": "0", "site_id": 42, "domain": "www.example.com", "status": "fully_configured"}
                )
            )
            result = runner.invoke(cli, ["site", "status", "www.example.com", "42"], env=ENV)

        assert result.exit_code == 0
        assert "domain: www.example.com" in result.output
        assert "status: fully_configured" in result.output

    def test_site_add_rejected(self):
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock.post(f"{PROV}/sites/add").mock(return_value=httpx.Response(200, json={"res": 1}))
            result = runner.invoke(cli, ["site", "add", "www.example.com"], env=ENV)

        assert result.exit_code == 1

    def test_status_shows_activity(self):
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock.post(f"{PROV}/sites/status").mock(
                return_value=httpx.Response(
                    200,
                    json={
                        "res": 0,
                        "site_id": 42,
                        "domain": "www.example.com",
                        "active": "active",
                        "security": {"waf": {"rules": [{"id": "api.threats.ddos", "ddos_traffic_threshold": 1000}]}},
                    },
                )
            )
            result = runner.invoke(cli, ["site", "status", "www.example.com", "42"], env=ENV)

        assert result.exit_code == 0
        assert "active: True" in result.output
        assert "ddos_traffic_threshold: 1000" in result.output

    def test_json_logs_carry_command(self):
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock.post(f"{PROV}/sites/status").mock(
                return_value=httpx.Response(200, json={"res": 0, "site_id": 42, "domain": "www.example.com"})
            )
            result = runner.invoke(cli, ["--json-logs", "site", "status", "www.example.com", "42"], env=ENV)

        assert result.exit_code == 0
        entries = [json.loads(line) for line in result.output.splitlines() if line.startswith("{")]
        assert entries
        assert all(entry["command"] == "site" for entry in entries)


class TestAssociationCommands:
    """Test association commands against a mocked API."""

    def test_read_missing_association(self):
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock.get(f"{API}/policies/v2/assets/WEBSITE/42/policies/1001").mock(
                return_value=httpx.Response(404)
            )
            result = runner.invoke(cli, ["association", "read", "1001", "42"], env=ENV)

        assert result.exit_code == 0
        assert "Association not found" in result.output

    def test_create_association(self):
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock.post(f"{API}/policies/v2/assets/WEBSITE/42/policies/1001").mock(
                return_value=httpx.Response(200, json={})
            )
            mock.get(f"{API}/policies/v2/assets/WEBSITE/42/policies/1001").mock(
                return_value=httpx.Response(200, json={})
            )
            result = runner.invoke(cli, ["association", "create", "1001", "42"], env=ENV)

        assert result.exit_code == 0
        assert "id: 1001/42/WEBSITE" in result.output


class TestValidatePlan:
    """Test plan validation from the CLI."""

    def test_conflicting_plan_fails(self, tmp_path):
        plan = write_plan(tmp_path, [("1", "42"), ("2", "42")])
        runner = CliRunner()
        with respx.mock(assert_all_called=False) as mock:
            mock_policy(mock, "1", "WAF_RULES")
            mock_policy(mock, "2", "WAF_RULES")
            result = runner.invoke(cli, ["validate-plan", plan], env=ENV)

        assert result.exit_code == 1

    @pytest.mark.parametrize("second_type", ["ACL", "WHITELIST"])
    def test_mixed_policy_types_pass(self, tmp_path, second_type):
        plan = write_plan(tmp_path, [("1", "42"), ("2", "42")])
        runner = CliRunner()
        with respx.mock(assert_all_called=True) as mock:
            mock_policy(mock, "1", "WAF_RULES")
            mock_policy(mock, "2", second_type)
            result = runner.invoke(cli, ["validate-plan", plan], env=ENV)

        assert result.exit_code == 0
        assert "Plan OK" in result.output
