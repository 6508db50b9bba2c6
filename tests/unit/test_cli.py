"""
Unit tests for the management commands that talk to the API.
"""

from datetime import date
from decimal import Decimal
from unittest.mock import Mock, patch

import pytest
from click.testing import CliRunner

import manage
from portfolio.client import ApiError
from portfolio.domain.entities import Sale


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def api(sample_domains):
    client = Mock()
    client.list_domains.return_value = sample_domains
    return client


@pytest.fixture(autouse=True)
def patched_client(api):
    with patch.object(manage, "_client", return_value=api):
        yield


@pytest.mark.client
class TestListCommand:
    def test_filters_and_sorts_locally(self, runner):
        result = runner.invoke(
            manage.cli, ["list", "--registrar", "OVH", "--sort", "-name"]
        )

        assert result.exit_code == 0, result.output
        lines = result.output.splitlines()
        assert "gamma.io" in lines[0]
        assert "alpha.com" in lines[1]
        assert lines[-1] == "2 of 4 domains"

    def test_french_status_is_accepted(self, runner):
        result = runner.invoke(manage.cli, ["list", "--status", "vendu"])

        assert result.exit_code == 0, result.output
        assert "Beta-Shop.fr" in result.output
        assert result.output.splitlines()[-1] == "1 of 4 domains"

    def test_unknown_sort_field(self, runner):
        result = runner.invoke(manage.cli, ["list", "--sort", "password"])

        assert result.exit_code == 2

    def test_purchase_date_range(self, runner):
        result = runner.invoke(
            manage.cli,
            ["list", "--purchased-from", "2022-01-01", "--purchased-to", "2022-12-31"],
        )

        assert result.exit_code == 0, result.output
        assert "Beta-Shop.fr" in result.output
        assert result.output.splitlines()[-1] == "1 of 4 domains"

    @pytest.mark.parametrize("option", ["--purchased-from", "--expires-to"])
    def test_malformed_date_is_a_usage_error(self, runner, api, option):
        result = runner.invoke(manage.cli, ["list", option, "2024/01/01"])

        assert result.exit_code == 2
        assert option in result.output
        api.list_domains.assert_not_called()

    def test_api_error_is_reported(self, runner, api):
        api.list_domains.side_effect = ApiError("Could not reach server")

        result = runner.invoke(manage.cli, ["list"])

        assert result.exit_code == 1
        assert "Could not reach server" in result.output


@pytest.mark.client
class TestBulkCommands:
    def test_bulk_delete_sends_selected_visible_ids(self, runner, api):
        api.bulk_delete.return_value = {
            "results": [{"id": 1, "success": True}, {"id": 3, "success": True}]
        }

        result = runner.invoke(
            manage.cli, ["bulk-delete", "--registrar", "OVH", "--all", "--yes"]
        )

        assert result.exit_code == 0, result.output
        api.bulk_delete.assert_called_once_with([1, 3])
        assert "2 succeeded, 0 failed" in result.output

    def test_bulk_delete_asks_for_confirmation(self, runner, api):
        result = runner.invoke(manage.cli, ["bulk-delete", "--id", "1"], input="n\n")

        assert result.exit_code == 1
        api.bulk_delete.assert_not_called()

    def test_bulk_update_reports_failures(self, runner, api):
        api.bulk_update.return_value = {
            "results": [
                {"id": 2, "success": True},
                {"id": 4, "success": False, "error": "Domain not found"},
            ]
        }

        result = runner.invoke(
            manage.cli,
            ["bulk-update", "--id", "2", "--id", "4", "--set-category", "Tech"],
        )

        assert result.exit_code == 1
        api.bulk_update.assert_called_once_with([2, 4], {"category": "Tech"})
        assert "#4: Domain not found" in result.output

    def test_bulk_update_requires_a_change(self, runner, api):
        result = runner.invoke(manage.cli, ["bulk-update", "--all"])

        assert result.exit_code == 2
        api.bulk_update.assert_not_called()

    def test_nothing_selected(self, runner, api):
        result = runner.invoke(manage.cli, ["bulk-delete", "--search", "zzz", "--all"])

        assert result.exit_code == 0
        assert "Nothing selected." in result.output
        api.bulk_delete.assert_not_called()


@pytest.mark.client
def test_stats_command(runner, api):
    api.list_sales.return_value = [
        Sale(domain_id=2, sale_date=date(2024, 6, 1), selling_price=Decimal("101.00"))
    ]

    result = runner.invoke(manage.cli, ["stats"])

    assert result.exit_code == 0, result.output
    assert "Total purchased: 50.50" in result.output
    assert "Total sold:      101.00" in result.output
    assert "ROI:             100.00%" in result.output
