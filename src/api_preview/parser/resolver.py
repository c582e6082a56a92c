"""``$ref`` dereferencing for API documents.

Internal pointers (``#/definitions/Pet``) and relative file references
(``common.yaml#/definitions/Error``) are replaced by deep copies of their
targets. Keys written next to a ``$ref`` are merged over the target.
"""

import logging
from copy import deepcopy
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from api_preview.errors import DocumentError, ResolutionError
from api_preview.parser.loader import load_file

log = logging.getLogger(__name__)


def _split_ref(ref: str) -> tuple[str, str]:
    """Split a ``$ref`` into (file part, pointer without '#')."""
    if "#" not in ref:
        return ref, ""
    path, frag = ref.split("#", 1)
    return path, frag


def _decode_pointer_token(token: str) -> str:
    # RFC 6901 escaping
    return token.replace("~1", "/").replace("~0", "~")


def _pointer_get(doc: Any, pointer: str, ref: str) -> Any:
    if pointer == "":
        return doc
    if not pointer.startswith("/"):
        raise ResolutionError(ref, f"unsupported pointer fragment '{pointer}'")

    cur = doc
    for raw_token in pointer[1:].split("/"):
        token = _decode_pointer_token(raw_token)
        if isinstance(cur, list):
            try:
                cur = cur[int(token)]
            except (ValueError, IndexError) as e:
                raise ResolutionError(ref, f"no list element '{token}'") from e
        elif isinstance(cur, dict):
            if token not in cur:
                raise ResolutionError(ref, f"key '{token}' not found")
            cur = cur[token]
        else:
            raise ResolutionError(ref, f"cannot descend into scalar at '{token}'")
    return cur


@dataclass(frozen=True)
class RefKey:
    source: str  # absolute file path, or "" for the in-memory root document
    pointer: str


class RefResolver:
    """Resolves every ``$ref`` in a document.

    ``base_path`` is the file the root document came from; relative file
    references are looked up next to it. Without it only internal
    references can be resolved.
    """

    def __init__(self, base_path: Path | None = None):
        self.base_path = base_path.resolve() if base_path else None
        self._cache: dict[str, Any] = {}

    def resolve(self, doc: dict) -> dict:
        root_key = str(self.base_path) if self.base_path else ""
        self._cache[root_key] = doc
        return self._resolve_node(doc, source=root_key, stack=())

    def _load(self, source: str) -> Any:
        if source not in self._cache:
            log.debug("Loading referenced document %s", source)
            try:
                self._cache[source] = load_file(Path(source))
            except (OSError, DocumentError) as e:
                raise ResolutionError(source, str(e)) from e
        return self._cache[source]

    def _target_source(self, file_part: str, source: str, ref: str) -> str:
        if file_part == "":
            return source
        if "://" in file_part:
            raise ResolutionError(ref, "remote references are not supported")
        if not source:
            raise ResolutionError(ref, "file references need a base path")
        return str((Path(source).parent / file_part).resolve())

    def _resolve_node(self, node: Any, source: str, stack: tuple[RefKey, ...]) -> Any:
        if isinstance(node, dict):
            ref = node.get("$ref")
            if isinstance(ref, str):
                resolved = self._follow(ref, source, stack)
                siblings = {k: v for k, v in node.items() if k != "$ref"}
                if not siblings:
                    return resolved
                siblings = self._resolve_node(siblings, source, stack)
                if isinstance(resolved, dict):
                    return {**resolved, **siblings}
                return siblings
            return {k: self._resolve_node(v, source, stack) for k, v in node.items()}

        if isinstance(node, list):
            return [self._resolve_node(v, source, stack) for v in node]

        return node

    def _follow(self, ref: str, source: str, stack: tuple[RefKey, ...]) -> Any:
        file_part, pointer = _split_ref(ref)
        target_source = self._target_source(file_part, source, ref)
        key = RefKey(target_source, pointer)
        if key in stack:
            raise ResolutionError(ref, "circular reference")

        target = _pointer_get(self._load(target_source), pointer, ref)
        resolved = self._resolve_node(deepcopy(target), target_source, stack + (key,))
        return resolved


def resolve_refs(doc: dict, base_path: Path | None = None) -> dict:
    """Return a copy of ``doc`` with no remaining ``$ref`` pointers."""
    return RefResolver(base_path).resolve(doc)
