#!/usr/bin/env python3
"""
DEVRECIPE ERRORS
----------------
Typed failures raised while converting devfile tools into workspace recipes.
The string form of every error is part of the public contract: API consumers
match on it, so messages are built here and nowhere else.

Author: DevRecipe Team
Date: 2026-10-18
"""

from typing import Optional


class DevfileError(Exception):
    """Base class for every conversion failure. Carries the offending tool, if any."""

    def __init__(self, message: str, tool_name: Optional[str] = None):
        super().__init__(message)
        self.tool_name = tool_name


class MissingContentProviderError(DevfileError):
    def __init__(self, tool_name: str, tool_type: str):
        super().__init__(
            f"Unable to process tool '{tool_name}' of type '{tool_type}' since there is no "
            "recipe content provider supplied. That means you're trying to submit an devfile "
            "with recipe-type tools to the bare devfile API or used factory URL does not "
            "support this feature.",
            tool_name=tool_name,
        )
        self.tool_type = tool_type


class ContentFetchError(DevfileError):
    def __init__(self, tool_name: str, cause: str):
        super().__init__(
            f"Error during recipe content retrieval for tool '{tool_name}': {cause}",
            tool_name=tool_name,
        )
        self.cause = cause


class ContentParseError(DevfileError):
    def __init__(self, tool_name: str, local: Optional[str], cause: str):
        super().__init__(
            f"Error occurred during parsing list from file {local} for tool '{tool_name}': {cause}",
            tool_name=tool_name,
        )
        self.local = local
        self.cause = cause


class DuplicateEnvironmentError(DevfileError):
    def __init__(self, tool_name: str):
        super().__init__(
            f"Environment '{tool_name}' already exists in workspace config; "
            f"tool '{tool_name}' cannot be applied twice",
            tool_name=tool_name,
        )


class DevfileFormatError(DevfileError):
    """Raised by the devfile converter when the document itself is malformed."""
