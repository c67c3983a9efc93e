#!/usr/bin/env python3
"""
DEVRECIPE SELECTOR FILTER
-------------------------
Narrows a manifest list down to the objects a tool actually owns.

Author: DevRecipe Team
Date: 2026-10-18
"""

from typing import Dict, List, Mapping, Sequence

from devrecipe.manifest.objects import ManifestObject, label_value


def matches_selector(labels: Mapping[str, str], selector: Mapping[str, str]) -> bool:
    """True when every selector entry is present in `labels` with the same value."""
    for key, value in selector.items():
        if key not in labels or labels[key] != label_value(value):
            return False
    return True


def filter_by_selector(objects: Sequence[ManifestObject],
                       selector: Dict[str, str]) -> List[ManifestObject]:
    """
    Stable filter over `objects`. An empty selector keeps everything;
    no match at all is a valid, empty result.
    """
    if not selector:
        return list(objects)
    return [obj for obj in objects if matches_selector(obj.labels, selector)]
