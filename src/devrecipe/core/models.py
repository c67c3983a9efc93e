#!/usr/bin/env python3
"""
DEVRECIPE CORE MODELS
---------------------
Defines the workspace data structures that devfile tools are converted into.
A WorkspaceConfig is the long-lived aggregate; Environments and Recipes are
owned by it once registered.

Author: DevRecipe Team
Date: 2026-10-18
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

# Tool types that are backed by a manifest list recipe
KUBERNETES_TOOL_TYPE = "kubernetes"
OPENSHIFT_TOOL_TYPE = "openshift"
RECIPE_TOOL_TYPES = (KUBERNETES_TOOL_TYPE, OPENSHIFT_TOOL_TYPE)

# Tooling types that only annotate the workspace
EDITOR_TOOL_TYPE = "cheEditor"
PLUGIN_TOOL_TYPE = "chePlugin"

YAML_CONTENT_TYPE = "application/x-yaml"

# Command attribute keys
TOOL_NAME_COMMAND_ATTRIBUTE = "toolName"
MACHINE_NAME_ATTRIBUTE = "machineName"
WORKING_DIRECTORY_ATTRIBUTE = "workingDir"

# Workspace attribute keys
EDITOR_WORKSPACE_ATTRIBUTE = "editor"
PLUGINS_WORKSPACE_ATTRIBUTE = "plugins"


@dataclass
class Tool:
    """
    One tool declared in a devfile.

    For recipe tools `local` is the reference handed to the content source,
    unless `local_content` already carries the manifest text inline.
    """
    name: str
    type: str
    local: Optional[str] = None
    local_content: Optional[str] = None
    selector: Dict[str, str] = field(default_factory=dict)
    id: Optional[str] = None   # Registry id for editor/plugin tools

    @property
    def is_recipe_tool(self) -> bool:
        return self.type in RECIPE_TOOL_TYPES


@dataclass
class Recipe:
    type: str               # Same tag as the tool type that produced it
    content_type: str       # Always YAML_CONTENT_TYPE for manifest lists
    content: str            # Serialized (filtered) manifest list

    def to_dict(self) -> Dict[str, Any]:
        return {"type": self.type, "contentType": self.content_type, "content": self.content}


@dataclass
class Environment:
    recipe: Recipe
    machines: Dict[str, Dict[str, Any]] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {"recipe": self.recipe.to_dict(), "machines": dict(self.machines)}


@dataclass
class Command:
    """A runnable action. Tool conversion may only touch its machine name attribute."""
    name: str
    command_line: str = ""
    type: str = "exec"
    attributes: Dict[str, str] = field(default_factory=dict)

    @property
    def tool_name(self) -> Optional[str]:
        return self.attributes.get(TOOL_NAME_COMMAND_ATTRIBUTE)

    @property
    def machine_name(self) -> Optional[str]:
        return self.attributes.get(MACHINE_NAME_ATTRIBUTE)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "commandLine": self.command_line,
            "type": self.type,
            "attributes": dict(self.attributes),
        }


@dataclass
class WorkspaceConfig:
    """
    The aggregate being built from a devfile.

    `default_env` points at the first environment registered, unless the
    caller already set one.
    """
    name: str = ""
    environments: Dict[str, Environment] = field(default_factory=dict)
    default_env: Optional[str] = None
    commands: List[Command] = field(default_factory=list)
    attributes: Dict[str, str] = field(default_factory=dict)

    def commands_for_tool(self, tool_name: str) -> List[int]:
        """Indices of commands tagged with the given tool name, in config order."""
        return [
            i for i, command in enumerate(self.commands)
            if command.tool_name == tool_name
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "defaultEnv": self.default_env,
            "environments": {name: env.to_dict() for name, env in self.environments.items()},
            "commands": [command.to_dict() for command in self.commands],
            "attributes": dict(self.attributes),
        }
