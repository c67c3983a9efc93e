#!/usr/bin/env python3
"""
DEVRECIPE MANIFEST OBJECTS
--------------------------
A read-only view over one entry of a parsed manifest list. The underlying
CommentedMap is kept untouched so that serialization stays lossless; the view
only exposes what filtering and machine-name inference need.

Author: DevRecipe Team
Date: 2026-10-18
"""

from typing import Any, Dict, List

from ruamel.yaml.comments import CommentedMap

# Workloads whose containers live under spec.template.spec
POD_TEMPLATE_KINDS = [
    "Deployment", "DeploymentConfig", "StatefulSet", "DaemonSet",
    "ReplicaSet", "ReplicationController", "Job",
]


def label_value(value: Any) -> str:
    """Label values are strings on the wire; YAML booleans keep their lowercase spelling."""
    if isinstance(value, bool):
        return "true" if value else "false"
    return str(value)


def to_plain(data: Any) -> Any:
    """Recursively strips ruamel round-trip types down to dicts and lists."""
    if isinstance(data, dict):
        return {str(k): to_plain(v) for k, v in data.items()}
    if isinstance(data, list):
        return [to_plain(item) for item in data]
    return data


class ManifestObject:
    """One Kubernetes/OpenShift object: kind, metadata and, for workloads, containers."""

    def __init__(self, raw: Any):
        self.raw = raw if isinstance(raw, CommentedMap) else CommentedMap(raw)

    @property
    def kind(self) -> str:
        return str(self.raw.get("kind") or "")

    @property
    def metadata(self) -> Dict[str, Any]:
        metadata = self.raw.get("metadata")
        return metadata if isinstance(metadata, dict) else {}

    @property
    def name(self) -> str:
        return str(self.metadata.get("name") or "")

    @property
    def labels(self) -> Dict[str, str]:
        labels = self.metadata.get("labels")
        if not isinstance(labels, dict):
            return {}
        return {str(k): label_value(v) for k, v in labels.items()}

    def _pod_spec(self) -> Dict[str, Any]:
        spec = self.raw.get("spec")
        if not isinstance(spec, dict):
            return {}
        if self.kind == "Pod":
            return spec
        if self.kind in POD_TEMPLATE_KINDS:
            template = spec.get("template")
            if isinstance(template, dict) and isinstance(template.get("spec"), dict):
                return template["spec"]
        return {}

    @property
    def containers(self) -> List[str]:
        """Container names in declaration order. Empty for non-workload kinds."""
        containers = self._pod_spec().get("containers")
        if not isinstance(containers, list):
            return []
        return [
            str(c.get("name") or "") for c in containers
            if isinstance(c, dict)
        ]

    def to_dict(self) -> Dict[str, Any]:
        return to_plain(self.raw)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManifestObject):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    def __repr__(self) -> str:
        return f"ManifestObject(kind={self.kind!r}, name={self.name!r})"
