"""Test the entry scripts' argument handling and reporting."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest

import az_create_spn
import az_get_spn
from spn_scripts.errors import AssignmentError, EmptyInputError, InputFileError
from spn_scripts.models import BatchOutcome, CreatedPrincipal, CreationFailure


class TestResolveNames:

    def test_command_line_names_win(self, tmp_path):
        args = az_create_spn.parse_args(["--name", "a", "--name", "b"])

        assert az_create_spn.resolve_names(args, {"SP_NAME": "ignored"}) == ["a", "b"]

    def test_input_file(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_text("x\ny\n")
        args = az_create_spn.parse_args(["--input-file", str(path)])

        assert az_create_spn.resolve_names(args, {}) == ["x", "y"]

    def test_config_names_file(self, tmp_path):
        path = tmp_path / "names.txt"
        path.write_text("x\n")
        args = az_create_spn.parse_args([])

        assert az_create_spn.resolve_names(args, {"SP_NAMES_FILE": str(path)}) == ["x"]

    def test_config_single_and_list(self):
        args = az_create_spn.parse_args([])

        assert az_create_spn.resolve_names(args, {"SP_NAME": "one"}) == ["one"]
        assert az_create_spn.resolve_names(args, {"SP_NAME": ["one", "two"]}) == ["one", "two"]

    def test_nothing_supplied(self):
        with pytest.raises(EmptyInputError):
            az_create_spn.resolve_names(az_create_spn.parse_args([]), {})

    def test_missing_input_file(self, tmp_path):
        args = az_create_spn.parse_args(["--input-file", str(tmp_path / "missing.txt")])

        with pytest.raises(InputFileError):
            az_create_spn.resolve_names(args, {})

    def test_name_and_file_are_exclusive(self):
        with pytest.raises(SystemExit):
            az_create_spn.parse_args(["--name", "a", "--input-file", "f.txt"])


class TestCreateMain:

    async def test_setup_failure_exits_before_login(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("SUBSCRIPTION: sub-1\n")

        with patch.object(az_create_spn.az_login, "azure_login") as login:
            code = await az_create_spn.async_main(["--config", str(config)])

        assert code == 1
        login.assert_not_called()
        assert "EmptyInputError" in capsys.readouterr().out

    async def test_bad_expiry_fails_before_login(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("SUBSCRIPTION: sub-1\nSECRET_END_DATE: \"2020-01-01\"\n")

        with patch.object(az_create_spn.az_login, "azure_login") as login:
            code = await az_create_spn.async_main(["--config", str(config), "--name", "a"])

        assert code == 1
        login.assert_not_called()
        assert "ConfigError" in capsys.readouterr().out

    async def test_partial_failure_still_succeeds(self, tmp_path, capsys):
        config = tmp_path / "config.yaml"
        config.write_text("SUBSCRIPTION: sub-1\nTENANT_ID: t-1\n")
        outcome = BatchOutcome()
        outcome.record_created(CreatedPrincipal(display_name="a", app_id="app-1", object_id="sp-1", secret="hidden"))
        outcome.record_failure(CreationFailure(display_name="b", message="denied"))
        creator = SimpleNamespace(create_batch=AsyncMock(return_value=outcome))

        with patch.object(az_create_spn.az_login, "azure_login"), \
                patch.object(az_create_spn, "GraphServiceClient"), \
                patch.object(az_create_spn, "build_creator", return_value=creator):
            code = await az_create_spn.async_main(["--config", str(config), "--name", "a", "--name", "b"])

        out = capsys.readouterr().out
        assert code == 0
        creator.create_batch.assert_awaited_once_with(["a", "b"])
        assert "1 service principal object created" in out
        assert "b: denied" in out
        assert "hidden" not in out


def test_report_shows_secrets_only_on_request(capsys):
    outcome = BatchOutcome()
    outcome.record_created(CreatedPrincipal(display_name="a", app_id="app-1", object_id="sp-1", secret="s3cret"))
    outcome.assignment_error = AssignmentError("Role 'Contributor' not found", failed_names=["a"])

    az_create_spn.print_report(outcome, show_secrets=True)
    out = capsys.readouterr().out

    assert "Secret: s3cret" in out
    assert "Default role assignment failed" in out


class TestGetDispatch:

    @pytest.fixture
    def provider(self):
        return SimpleNamespace(
            lookup_by_name=AsyncMock(return_value=["by-name"]),
            lookup_by_app_id=AsyncMock(return_value="by-app-id"),
            lookup_by_wildcard=AsyncMock(return_value=["w1", "w2"]),
        )

    async def test_name(self, provider):
        args = az_get_spn.parse_args(["--name", "ci"])
        assert await az_get_spn.find_service_principals(provider, args) == ["by-name"]
        provider.lookup_by_name.assert_awaited_once_with("ci")

    async def test_app_id(self, provider):
        args = az_get_spn.parse_args(["--app-id", "1234"])
        assert await az_get_spn.find_service_principals(provider, args) == ["by-app-id"]

    async def test_app_id_not_found(self, provider):
        provider.lookup_by_app_id.return_value = None
        args = az_get_spn.parse_args(["--app-id", "1234"])
        assert await az_get_spn.find_service_principals(provider, args) == []

    async def test_wildcard(self, provider):
        args = az_get_spn.parse_args(["--wildcard", "ci-*"])
        assert await az_get_spn.find_service_principals(provider, args) == ["w1", "w2"]

    def test_switches_are_exclusive_and_required(self):
        with pytest.raises(SystemExit):
            az_get_spn.parse_args([])
        with pytest.raises(SystemExit):
            az_get_spn.parse_args(["--name", "a", "--wildcard", "b*"])
