#!/usr/bin/env python3
"""
DEVRECIPE CODEC - Manifest List Round-Trip
------------------------------------------
Parses manifest-list text into ManifestObjects and serializes a (filtered)
selection back into a single `kind: List` document.

Three input shapes are accepted, all producing the same flat object list:
  1. A `kind: List` (or any `*List` kind) mapping carrying `items`
  2. A single object mapping
  3. A multi-document stream of object mappings

Author: DevRecipe Team
Date: 2026-10-18
"""

import io
import logging
from typing import Any, Iterable, List

from ruamel.yaml import YAML, YAMLError
from ruamel.yaml.comments import CommentedMap, CommentedSeq

from devrecipe.manifest.objects import ManifestObject

logger = logging.getLogger("devrecipe.codec")


class ManifestParseError(ValueError):
    """The text is not a manifest list. Message is the underlying parser detail."""


class ManifestListCodec:
    """
    The Translator: text <-> ordered ManifestObject list.
    Round-trip mode keeps comments and key order of the retained objects.
    """

    def __init__(self, mapping_indent: int = 2, sequence_indent: int = 4,
                 sequence_offset: int = 2, width: int = 4096):
        self.yaml = YAML(typ='rt')
        self.yaml.preserve_quotes = True
        # Standard K8s: 2 spaces, sequences indented 4 (offset 2)
        self.yaml.indent(mapping=mapping_indent, sequence=sequence_indent, offset=sequence_offset)
        self.yaml.width = width

    def parse(self, text: str) -> List[ManifestObject]:
        """
        Loads every document in `text` and flattens List kinds into their items.
        Raises ManifestParseError on any syntax or shape problem.
        """
        try:
            documents = [doc for doc in self.yaml.load_all(text) if doc is not None]
        except YAMLError as e:
            raise ManifestParseError(str(e)) from e

        if not documents:
            raise ManifestParseError("content does not contain any document")

        objects: List[ManifestObject] = []
        for index, doc in enumerate(documents):
            objects.extend(self._unpack_document(doc, index))

        logger.debug(f"Parsed {len(objects)} object(s) from {len(documents)} document(s)")
        return objects

    def _unpack_document(self, doc: Any, index: int) -> List[ManifestObject]:
        if not isinstance(doc, dict):
            raise ManifestParseError(
                f"document {index} must be a mapping, got {type(doc).__name__}: {str(doc)[:80]!r}"
            )

        kind = doc.get("kind")
        if isinstance(kind, str) and kind.endswith("List") and "items" in doc:
            items = doc.get("items")
            if items is None:
                return []
            if not isinstance(items, list):
                raise ManifestParseError(f"'items' of document {index} must be a sequence")
            return [self._to_object(item, f"items[{i}] of document {index}")
                    for i, item in enumerate(items)]

        return [self._to_object(doc, f"document {index}")]

    def _to_object(self, item: Any, where: str) -> ManifestObject:
        if not isinstance(item, dict):
            raise ManifestParseError(f"{where} must be a mapping, got {type(item).__name__}")
        if not item.get("kind"):
            raise ManifestParseError(f"{where} is missing required field 'kind'")
        return ManifestObject(item)

    def serialize(self, objects: Iterable[ManifestObject]) -> str:
        """Dumps the objects, in order, as one `v1/List` document."""
        items = CommentedSeq(obj.raw for obj in objects)

        document = CommentedMap()
        document["apiVersion"] = "v1"
        document["kind"] = "List"
        document["items"] = items

        stream = io.StringIO()
        self.yaml.dump(document, stream)
        return stream.getvalue()
