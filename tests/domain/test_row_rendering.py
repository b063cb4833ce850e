"""Tests for the row rendering service."""

from deployconsole.domain.entities.deployment import Deployment
from deployconsole.domain.services.row_rendering import DeploymentRow, build_rows


class TestBuildRows:
    def test_preserves_server_order(self):
        deployments = [
            Deployment("zeta", 1),
            Deployment("alpha", 2),
            Deployment("mid", 0),
        ]
        assert [r.name for r in build_rows(deployments)] == ["zeta", "alpha", "mid"]

    def test_empty_list(self):
        assert build_rows([]) == []

    def test_scale_targets(self):
        row = build_rows([Deployment("web", 3)])[0]
        assert row.scale_up_target == 4
        assert row.scale_down_target == 2

    def test_scale_down_from_zero_goes_negative(self):
        assert DeploymentRow("web", 0).scale_down_target == -1

    def test_summary(self):
        assert DeploymentRow("web", 5).summary == "Replicas: 5"
