#!/usr/bin/env python3
"""
DEVRECIPE MACHINE NAME RESOLVER
-------------------------------
Binds tool commands to a container. Only an unambiguous layout (exactly one
container across the whole object list) produces a machine name; anything
else is a silent skip, never a guess.

Author: DevRecipe Team
Date: 2026-10-18
"""

from typing import List, Optional, Sequence, Tuple

from devrecipe.manifest.objects import ManifestObject


def machine_name(object_name: str, container_name: str) -> str:
    return f"{object_name}/{container_name}"


def resolve_machine_name(objects: Sequence[ManifestObject]) -> Optional[str]:
    """Returns "<objectName>/<containerName>" if exactly one container exists, else None."""
    found: List[Tuple[str, str]] = []
    for obj in objects:
        for container in obj.containers:
            found.append((obj.name, container))
            if len(found) > 1:
                return None

    if len(found) != 1:
        return None
    return machine_name(*found[0])
