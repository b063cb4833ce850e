"""Tests for the create-form DTO."""

import pytest

from deployconsole.application.dtos.deployment_dtos import DeploymentForm


def _form(**overrides):
    fields = dict(
        name="web",
        image="nginx:latest",
        replicas="3",
        cpu_request="250m",
        memory_request="128Mi",
    )
    fields.update(overrides)
    return DeploymentForm(**fields)


class TestDeploymentForm:
    def test_valid_form(self):
        spec = _form().to_spec()
        assert spec.name == "web"
        assert spec.replicas == 3
        assert spec.cpu_request == "250m"
        assert spec.memory_request == "128Mi"

    def test_whitespace_stripped(self):
        spec = _form(name="  web ", replicas=" 2 ").to_spec()
        assert spec.name == "web"
        assert spec.replicas == 2

    @pytest.mark.parametrize("replicas", ["", "abc", "1.5"])
    def test_non_integer_replicas_rejected(self, replicas):
        with pytest.raises(ValueError, match="replicas"):
            _form(replicas=replicas).to_spec()

    def test_negative_replicas_rejected(self):
        with pytest.raises(ValueError, match="replicas"):
            _form(replicas="-1").to_spec()

    def test_missing_image_rejected(self):
        with pytest.raises(ValueError, match="image"):
            _form(image="   ").to_spec()

    def test_empty_form_rejected(self):
        with pytest.raises(ValueError):
            DeploymentForm().to_spec()


class TestFromFields:
    def test_builds_from_widget_mapping(self):
        form = DeploymentForm.from_fields(
            {
                "name": "web",
                "image": "nginx:latest",
                "replicas": "3",
                "cpu_request": "250m",
                "memory_request": "128Mi",
            }
        )
        assert form == _form()

    def test_missing_keys_default_to_empty_and_extras_ignored(self):
        form = DeploymentForm.from_fields({"name": "web", "submit": "Create"})
        assert form == DeploymentForm(name="web")
