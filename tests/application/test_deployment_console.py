"""Tests for the DeploymentConsole use case."""

import pytest
from unittest.mock import AsyncMock

from deployconsole.application.dtos.deployment_dtos import DeploymentForm
from deployconsole.application.use_cases.deployment_console import DeploymentConsole
from deployconsole.domain.entities.deployment import Deployment
from deployconsole.domain.entities.notification import Severity
from deployconsole.domain.services.row_rendering import DeploymentRow
from deployconsole.domain.value_objects.outcome import Failure, Success

INITIAL = (Deployment("web", 2), Deployment("api", 0))


def _make_client(calls=None, listing=INITIAL):
    """AsyncMock client whose calls are appended to *calls* in order."""
    calls = calls if calls is not None else []
    client = AsyncMock()

    def _recorder(name, result):
        async def _call(*args):
            calls.append((name,) + args)
            return result
        return _call

    client.list_deployments = AsyncMock(side_effect=_recorder("list", Success(listing)))
    client.scale_deployment = AsyncMock(side_effect=_recorder("scale", Success()))
    client.delete_deployment = AsyncMock(side_effect=_recorder("delete", Success()))
    client.create_deployment = AsyncMock(
        side_effect=_recorder("create", Success({"name": "web"}))
    )
    return client, calls


async def _initialized(client, view, notifications):
    console = DeploymentConsole(client, view, notifications, namespace="default")
    await console.initialize()
    client.list_deployments.reset_mock()
    return console


class TestRefresh:
    @pytest.mark.asyncio
    async def test_initialize_renders_list(self, fake_view, notifications):
        client, _ = _make_client()
        console = DeploymentConsole(client, fake_view, notifications, namespace="default")

        await console.initialize()

        client.list_deployments.assert_awaited_once_with("default")
        assert fake_view.displayed == [DeploymentRow("web", 2), DeploymentRow("api", 0)]
        assert console.rows == tuple(fake_view.displayed)

    @pytest.mark.asyncio
    async def test_refresh_replaces_rows(self, fake_view, notifications):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        client.list_deployments.side_effect = None
        client.list_deployments.return_value = Success((Deployment("solo", 1),))

        assert await console.refresh_deployments() is True
        assert fake_view.displayed == [DeploymentRow("solo", 1)]

    @pytest.mark.asyncio
    async def test_refresh_failure_keeps_stale_rows(
        self, fake_view, notifications, surface
    ):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        client.list_deployments.side_effect = None
        client.list_deployments.return_value = Failure("Failed to fetch deployments")

        assert await console.refresh_deployments() is False

        assert len(fake_view.renders) == 1
        assert [r.name for r in console.rows] == ["web", "api"]
        assert surface.messages(Severity.ERROR) == ["Failed to fetch deployments"]
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_find_row(self, fake_view, notifications):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)

        assert console.find_row("api") == DeploymentRow("api", 0)
        assert console.find_row("missing") is None


class TestScale:
    @pytest.mark.asyncio
    async def test_scale_up_requests_plus_one_then_refreshes(
        self, fake_view, notifications, surface
    ):
        client, calls = _make_client()
        console = await _initialized(client, fake_view, notifications)
        calls.clear()

        assert await console.scale_up(console.find_row("web")) is True

        assert calls == [("scale", "default", "web", 3), ("list", "default")]
        assert surface.messages(Severity.SUCCESS) == [
            "Scaled deployment web to 3 replicas"
        ]
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_scale_down_from_zero_requests_minus_one(
        self, fake_view, notifications
    ):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)

        await console.scale_down(console.find_row("api"))

        client.scale_deployment.assert_awaited_once_with("default", "api", -1)
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_scale_uses_render_time_replicas(self, fake_view, notifications):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        stale_row = console.find_row("web")
        client.list_deployments.side_effect = None
        client.list_deployments.return_value = Success((Deployment("web", 7),))
        await console.refresh_deployments()

        await console.scale_up(stale_row)

        client.scale_deployment.assert_awaited_once_with("default", "web", 3)
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_rendered_rows_equal_server_list_after_scale(
        self, fake_view, notifications
    ):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        client.list_deployments.side_effect = None
        client.list_deployments.return_value = Success(
            (Deployment("web", 3), Deployment("api", 0))
        )

        await console.scale_up(console.find_row("web"))

        client.list_deployments.assert_awaited_once()
        assert fake_view.displayed == [DeploymentRow("web", 3), DeploymentRow("api", 0)]
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_scale_failure_does_not_refresh(
        self, fake_view, notifications, surface
    ):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        client.scale_deployment.side_effect = None
        client.scale_deployment.return_value = Failure("Failed to scale deployment")

        assert await console.scale_down(console.find_row("api")) is False

        client.list_deployments.assert_not_awaited()
        assert len(fake_view.renders) == 1
        assert len(surface.notifications) == 1
        assert surface.messages(Severity.ERROR) == ["Failed to scale deployment"]
        await notifications.wait_idle()


class TestDelete:
    @pytest.mark.asyncio
    async def test_declined_confirmation_issues_no_request(
        self, fake_view, notifications, surface
    ):
        client, calls = _make_client()
        console = await _initialized(client, fake_view, notifications)
        calls.clear()
        fake_view.confirm_answer = False

        assert await console.delete(console.find_row("web")) is False

        assert calls == []
        assert fake_view.prompts == ["Are you sure you want to delete deployment web?"]
        assert surface.notifications == []
        assert len(fake_view.renders) == 1

    @pytest.mark.asyncio
    async def test_confirmed_delete_then_refresh(self, fake_view, notifications, surface):
        client, calls = _make_client()
        console = await _initialized(client, fake_view, notifications)
        calls.clear()

        assert await console.delete(console.find_row("web")) is True

        assert calls == [("delete", "default", "web"), ("list", "default")]
        assert surface.messages(Severity.SUCCESS) == ["Deleted deployment web"]
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_delete_failure(self, fake_view, notifications, surface):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        client.delete_deployment.side_effect = None
        client.delete_deployment.return_value = Failure("Failed to delete deployment")

        assert await console.delete(console.find_row("web")) is False

        client.list_deployments.assert_not_awaited()
        assert surface.messages(Severity.ERROR) == ["Failed to delete deployment"]
        await notifications.wait_idle()


class TestCreate:
    FORM = DeploymentForm(
        name="web",
        image="nginx:latest",
        replicas="3",
        cpu_request="250m",
        memory_request="128Mi",
    )

    @pytest.mark.asyncio
    async def test_create_success_clears_form_and_refreshes(
        self, fake_view, notifications, surface
    ):
        client, calls = _make_client()
        console = await _initialized(client, fake_view, notifications)
        calls.clear()
        fake_view.form = self.FORM

        assert await console.create_deployment() is True

        assert [c[0] for c in calls] == ["create", "list"]
        spec = calls[0][2]
        assert spec.name == "web"
        assert spec.replicas == 3
        assert fake_view.cleared == 1
        assert surface.messages(Severity.SUCCESS) == ["Deployment created successfully"]
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_create_failure_keeps_form(self, fake_view, notifications, surface):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        client.create_deployment.side_effect = None
        client.create_deployment.return_value = Failure('deployments "web" already exists')
        fake_view.form = self.FORM

        assert await console.create_deployment() is False

        assert fake_view.cleared == 0
        assert fake_view.form == self.FORM
        client.list_deployments.assert_not_awaited()
        assert surface.messages(Severity.ERROR) == ['deployments "web" already exists']
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_invalid_form_issues_no_request(self, fake_view, notifications, surface):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)

        ok = await console.create_deployment(DeploymentForm(name="web", replicas="x"))

        assert ok is False
        client.create_deployment.assert_not_awaited()
        assert len(surface.messages(Severity.ERROR)) == 1
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_explicit_form_overrides_view(self, fake_view, notifications):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)

        await console.create_deployment(self.FORM)

        spec = client.create_deployment.await_args.args[1]
        assert spec.image == "nginx:latest"
        await notifications.wait_idle()

    @pytest.mark.asyncio
    async def test_view_form_read_as_plain_mapping(self, fake_view, notifications):
        client, _ = _make_client()
        console = await _initialized(client, fake_view, notifications)
        fake_view.read_form = lambda: {
            "name": "cache",
            "image": "redis:7",
            "replicas": "1",
        }

        assert await console.create_deployment() is True

        spec = client.create_deployment.await_args.args[1]
        assert (spec.name, spec.image, spec.replicas) == ("cache", "redis:7", 1)
        await notifications.wait_idle()
