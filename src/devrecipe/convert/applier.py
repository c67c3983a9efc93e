#!/usr/bin/env python3
"""
DEVRECIPE APPLIER - Tool to Workspace Recipe
--------------------------------------------
Turns one recipe-type devfile tool (kubernetes/openshift) into a workspace
environment and binds the tool's commands to a machine where possible.

The work is split in two:
  plan()   - pure: resolves content, parses, filters, builds the recipe and
             computes command updates. Never touches the config.
  commit() - writes a planned ToolApplication into the config.
apply() runs both, so a failing tool never leaves a partial environment.

Author: DevRecipe Team
Date: 2026-10-18
"""

import logging
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from devrecipe.convert.content import ContentSource, NO_CONTENT_SOURCE, as_content_source
from devrecipe.core.errors import (
    ContentFetchError,
    ContentParseError,
    DuplicateEnvironmentError,
    MissingContentProviderError,
)
from devrecipe.core.models import (
    MACHINE_NAME_ATTRIBUTE,
    YAML_CONTENT_TYPE,
    Environment,
    Recipe,
    Tool,
    WorkspaceConfig,
)
from devrecipe.manifest.codec import ManifestListCodec, ManifestParseError
from devrecipe.manifest.machine import resolve_machine_name
from devrecipe.manifest.selector import filter_by_selector

logger = logging.getLogger("devrecipe.applier")


@dataclass
class ToolApplication:
    """Everything apply() is about to write for one tool."""
    tool_name: str
    environment_name: str
    environment: Environment
    object_count: int = 0
    machine_name: Optional[str] = None
    # (index into config.commands, machine name to set)
    command_updates: List[Tuple[int, str]] = field(default_factory=list)


class ToolToRecipeApplier:
    """
    Stateless between calls; safe to reuse for every tool of a devfile.
    Not safe to run concurrently against the same WorkspaceConfig.
    """

    def __init__(self, codec: Optional[ManifestListCodec] = None):
        self.codec = codec or ManifestListCodec()

    def apply(self, config: WorkspaceConfig, tool: Tool,
              content_source: Any = NO_CONTENT_SOURCE) -> ToolApplication:
        """Plans and commits `tool` into `config`. Raises a DevfileError subclass on failure."""
        application = self.plan(config, tool, content_source)
        self.commit(config, application)
        return application

    def plan(self, config: WorkspaceConfig, tool: Tool,
             content_source: Any = NO_CONTENT_SOURCE) -> ToolApplication:
        environment_name = tool.name
        if environment_name in config.environments:
            raise DuplicateEnvironmentError(tool.name)

        # --- PHASE 1: CONTENT ACQUISITION ---
        text = self._retrieve_content(tool, as_content_source(content_source))

        # --- PHASE 2: PARSING ---
        try:
            objects = self.codec.parse(text)
        except ManifestParseError as e:
            raise ContentParseError(tool.name, tool.local, str(e)) from e

        # --- PHASE 3: SELECTOR FILTERING ---
        selected = filter_by_selector(objects, tool.selector)
        if tool.selector and not selected:
            logger.warning(
                f"Selector {dict(tool.selector)} of tool '{tool.name}' matched none of "
                f"{len(objects)} object(s); the recipe will be empty"
            )

        # --- PHASE 4: RECIPE CONSTRUCTION ---
        recipe = Recipe(
            type=tool.type,
            content_type=YAML_CONTENT_TYPE,
            content=self.codec.serialize(selected),
        )

        application = ToolApplication(
            tool_name=tool.name,
            environment_name=environment_name,
            environment=Environment(recipe=recipe),
            object_count=len(selected),
        )

        # --- PHASE 5: COMMAND ANNOTATION ---
        command_indices = config.commands_for_tool(tool.name)
        if command_indices:
            application.machine_name = resolve_machine_name(selected)
            if application.machine_name is None:
                logger.debug(
                    f"Tool '{tool.name}' has no single container; "
                    f"{len(command_indices)} command(s) keep their machine name"
                )
            else:
                application.command_updates = [
                    (i, application.machine_name) for i in command_indices
                ]

        return application

    def commit(self, config: WorkspaceConfig, application: ToolApplication) -> None:
        config.environments[application.environment_name] = application.environment
        if config.default_env is None:
            config.default_env = application.environment_name

        for index, name in application.command_updates:
            config.commands[index].attributes[MACHINE_NAME_ATTRIBUTE] = name

        logger.info(
            f"Registered environment '{application.environment_name}' "
            f"({application.environment.recipe.type}, {application.object_count} object(s))"
        )

    def _retrieve_content(self, tool: Tool, content_source: ContentSource) -> str:
        # Empty inline content counts as absent
        if tool.local_content:
            return tool.local_content

        if not content_source.available:
            raise MissingContentProviderError(tool.name, tool.type)

        result = content_source.resolve(tool.local)
        if not result.ok:
            raise ContentFetchError(tool.name, result.error)
        if not isinstance(result.content, str):
            raise ContentFetchError(tool.name, "content source returned no content")
        return result.content
