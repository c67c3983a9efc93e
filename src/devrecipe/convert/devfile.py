#!/usr/bin/env python3
"""
DEVRECIPE DEVFILE CONVERTER - The Orchestrator
----------------------------------------------
Converts a whole devfile document into a WorkspaceConfig:
  1. Commands are copied first, tagged with the tool their action targets
  2. Editor and plugin tools become workspace attributes
  3. Recipe tools go through the ToolToRecipeApplier, one at a time

Author: DevRecipe Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from ruamel.yaml import YAML, YAMLError

from devrecipe.convert.applier import ToolApplication, ToolToRecipeApplier
from devrecipe.convert.content import NO_CONTENT_SOURCE
from devrecipe.core.errors import DevfileError, DevfileFormatError
from devrecipe.core.models import (
    EDITOR_TOOL_TYPE,
    EDITOR_WORKSPACE_ATTRIBUTE,
    PLUGIN_TOOL_TYPE,
    PLUGINS_WORKSPACE_ATTRIBUTE,
    TOOL_NAME_COMMAND_ATTRIBUTE,
    WORKING_DIRECTORY_ATTRIBUTE,
    Command,
    Tool,
    WorkspaceConfig,
)
from devrecipe.manifest.objects import label_value

logger = logging.getLogger("devrecipe.devfile")


def parse_devfile(text: str) -> Dict[str, Any]:
    """Loads devfile YAML. Only the top-level shape is checked here."""
    yaml = YAML(typ='safe')
    try:
        data = yaml.load(text)
    except YAMLError as e:
        raise DevfileFormatError(f"Devfile is not valid YAML: {e}") from e

    if not isinstance(data, dict):
        raise DevfileFormatError("Devfile must be a mapping")
    if not data.get("name"):
        raise DevfileFormatError("Devfile is missing required field 'name'")
    for section in ("tools", "commands"):
        if data.get(section) is not None and not isinstance(data[section], list):
            raise DevfileFormatError(f"Devfile field '{section}' must be a list")
    return data


def tool_from_dict(data: Dict[str, Any]) -> Tool:
    if not isinstance(data, dict):
        raise DevfileFormatError(f"Tool entry must be a mapping, got {data!r}")
    name = data.get("name")
    tool_type = data.get("type")
    if not name:
        raise DevfileFormatError("Tool is missing required field 'name'")
    if not tool_type:
        raise DevfileFormatError(f"Tool '{name}' is missing required field 'type'")

    selector = data.get("selector") or {}
    if not isinstance(selector, dict):
        raise DevfileFormatError(f"Selector of tool '{name}' must be a mapping")

    tool = Tool(
        name=str(name),
        type=str(tool_type),
        local=data.get("local"),
        local_content=data.get("localContent"),
        selector={str(k): label_value(v) for k, v in selector.items()},
        id=data.get("id"),
    )
    if tool.is_recipe_tool and not tool.local and not tool.local_content:
        raise DevfileFormatError(
            f"Tool '{tool.name}' of type '{tool.type}' must declare either 'local' or 'localContent'"
        )
    return tool


def command_from_dict(data: Dict[str, Any]) -> Command:
    if not isinstance(data, dict) or not data.get("name"):
        raise DevfileFormatError(f"Command entry must be a mapping with a 'name': {data!r}")

    command = Command(name=str(data["name"]))
    for key, value in (data.get("attributes") or {}).items():
        command.attributes[str(key)] = str(value)

    actions = data.get("actions") or []
    if actions:
        # Only the first action is executable in a workspace command
        action = actions[0]
        if not isinstance(action, dict):
            raise DevfileFormatError(f"Action of command '{command.name}' must be a mapping")
        command.type = str(action.get("type") or command.type)
        command.command_line = str(action.get("command") or "")
        if action.get("tool"):
            command.attributes[TOOL_NAME_COMMAND_ATTRIBUTE] = str(action["tool"])
        if action.get("workdir"):
            command.attributes[WORKING_DIRECTORY_ATTRIBUTE] = str(action["workdir"])
    return command


@dataclass
class ConversionReport:
    config: WorkspaceConfig
    applied: List[ToolApplication] = field(default_factory=list)
    errors: List[DevfileError] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return not self.errors


class DevfileConverter:
    """
    Principal orchestrator for devfile -> workspace conversion.

    With fail_fast (the default) the first failing tool aborts the conversion;
    otherwise the failure is recorded and the remaining tools still apply.
    """

    def __init__(self, applier: Optional[ToolToRecipeApplier] = None, fail_fast: bool = True):
        self.applier = applier or ToolToRecipeApplier()
        self.fail_fast = fail_fast

    def convert(self, devfile: Dict[str, Any], content_source: Any = NO_CONTENT_SOURCE) -> ConversionReport:
        config = WorkspaceConfig(name=str(devfile.get("name") or ""))
        report = ConversionReport(config=config)

        for entry in devfile.get("commands") or []:
            config.commands.append(command_from_dict(entry))

        tools = [tool_from_dict(entry) for entry in devfile.get("tools") or []]
        self._check_unique_names(tools)

        plugins: List[str] = []
        for tool in tools:
            if tool.type == EDITOR_TOOL_TYPE:
                config.attributes[EDITOR_WORKSPACE_ATTRIBUTE] = tool.id or tool.name
            elif tool.type == PLUGIN_TOOL_TYPE:
                plugins.append(tool.id or tool.name)
            elif tool.is_recipe_tool:
                self._apply_recipe_tool(config, tool, content_source, report)
            else:
                raise DevfileFormatError(f"Tool '{tool.name}' has unsupported type '{tool.type}'")

        if plugins:
            config.attributes[PLUGINS_WORKSPACE_ATTRIBUTE] = ",".join(plugins)

        return report

    def convert_text(self, text: str, content_source: Any = NO_CONTENT_SOURCE) -> ConversionReport:
        return self.convert(parse_devfile(text), content_source)

    def _apply_recipe_tool(self, config: WorkspaceConfig, tool: Tool,
                           content_source: Any, report: ConversionReport) -> None:
        try:
            report.applied.append(self.applier.apply(config, tool, content_source))
        except DevfileError as e:
            if self.fail_fast:
                raise
            logger.error(f"Skipping tool '{tool.name}': {e}")
            report.errors.append(e)

    def _check_unique_names(self, tools: List[Tool]) -> None:
        seen = set()
        for tool in tools:
            if tool.name in seen:
                raise DevfileFormatError(f"Duplicate tool name '{tool.name}' in devfile")
            seen.add(tool.name)
