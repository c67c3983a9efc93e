import pytest

from devrecipe.convert.content import FileContentSource
from devrecipe.convert.devfile import DevfileConverter, parse_devfile
from devrecipe.core.errors import ContentFetchError, DevfileFormatError, MissingContentProviderError
from devrecipe.core.models import (
    EDITOR_WORKSPACE_ATTRIBUTE,
    MACHINE_NAME_ATTRIBUTE,
    PLUGINS_WORKSPACE_ATTRIBUTE,
    TOOL_NAME_COMMAND_ATTRIBUTE,
    WORKING_DIRECTORY_ATTRIBUTE,
)
from conftest import read_fixture

TWO_TOOLS = """
name: two-tools
tools:
  - name: broken
    type: kubernetes
    local: missing.yaml
  - name: web
    type: kubernetes
    local: petclinic.yaml
    selector:
      app.kubernetes.io/component: webapp
"""


def test_end_to_end_conversion(fixtures_dir):
    converter = DevfileConverter()
    report = converter.convert_text(read_fixture("devfile.yaml"), FileContentSource(fixtures_dir))
    config = report.config

    assert report.success
    assert config.name == "petclinic-dev-environment"
    assert config.default_env == "petclinic-web"
    assert config.environments["petclinic-web"].recipe.type == "openshift"
    assert config.attributes[EDITOR_WORKSPACE_ATTRIBUTE] == "org.eclipse.che.editor.theia:1.0.0"
    assert config.attributes[PLUGINS_WORKSPACE_ATTRIBUTE] == "che-machine-exec-plugin:0.0.1"

    build, hello = config.commands
    assert build.command_line == "mvn package"
    assert build.attributes[TOOL_NAME_COMMAND_ATTRIBUTE] == "petclinic-web"
    assert build.attributes[WORKING_DIRECTORY_ATTRIBUTE] == "/projects/spring-petclinic"
    assert build.attributes[MACHINE_NAME_ATTRIBUTE] == "petclinic/server"
    # Commands of non-recipe tools are left alone
    assert MACHINE_NAME_ATTRIBUTE not in hello.attributes


def test_bare_api_rejects_recipe_tools():
    with pytest.raises(MissingContentProviderError):
        DevfileConverter().convert_text(read_fixture("devfile.yaml"))


def test_fail_fast_propagates_first_tool_error(fixtures_dir):
    with pytest.raises(ContentFetchError) as exc_info:
        DevfileConverter().convert_text(TWO_TOOLS, FileContentSource(fixtures_dir))
    assert exc_info.value.tool_name == "broken"


def test_keep_going_records_failure_and_applies_other_tools(fixtures_dir):
    report = DevfileConverter(fail_fast=False).convert_text(TWO_TOOLS, FileContentSource(fixtures_dir))

    assert not report.success
    assert [e.tool_name for e in report.errors] == ["broken"]
    assert list(report.config.environments) == ["web"]
    assert report.config.default_env == "web"
    assert [a.tool_name for a in report.applied] == ["web"]


@pytest.mark.parametrize("text", [
    "just a string",
    "tools: []\n",
    "name: x\ntools: {}\n",
    "name: x\ntools:\n  - type: kubernetes\n",
    "name: x\ntools:\n  - name: t\n",
    "name: x\ntools:\n  - name: t\n    type: dockerimage\n",
    "name: x\ntools:\n  - name: t\n    type: cheEditor\n  - name: t\n    type: chePlugin\n",
    "name: [unclosed",
])
def test_malformed_devfiles(text):
    with pytest.raises(DevfileFormatError):
        DevfileConverter().convert_text(text)


def test_parse_devfile_keeps_fields():
    data = parse_devfile(read_fixture("devfile.yaml"))
    assert data["name"] == "petclinic-dev-environment"
    assert len(data["tools"]) == 3


@pytest.mark.parametrize("tool_type", ["kubernetes", "openshift"])
def test_recipe_tool_without_local_reference(tool_type):
    text = f"name: x\ntools:\n  - name: web\n    type: {tool_type}\n"
    with pytest.raises(DevfileFormatError) as exc_info:
        DevfileConverter().convert_text(text, lambda ref: "kind: Pod\n")
    assert "'local' or 'localContent'" in str(exc_info.value)


def test_boolean_selector_in_devfile_matches_boolean_label():
    text = (
        "name: x\n"
        "tools:\n"
        "  - name: web\n"
        "    type: kubernetes\n"
        "    selector:\n"
        "      dev: true\n"
        "    localContent: |\n"
        "      apiVersion: v1\n"
        "      kind: Pod\n"
        "      metadata:\n"
        "        name: debug\n"
        "        labels:\n"
        "          dev: true\n"
    )
    report = DevfileConverter().convert_text(text)
    assert report.applied[0].object_count == 1
