"""
Loading schemas and documents from disk.

Turns SDL files, introspection results and .graphql operation files into
graphql-core objects. Parsing only: documents are not validated against
the schema here.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from pathlib import Path

import structlog
from graphql import GraphQLError, GraphQLSchema, Source, build_client_schema, build_schema, parse

from ..errors import DocumentLoadError, SchemaLoadError
from .nodes import SourceDocument

log = structlog.get_logger()

SDL_EXTENSIONS = (".graphql", ".graphqls", ".gql")


def load_schema(path: str | Path) -> GraphQLSchema:
    """
    Load a schema from SDL, an introspection result, or a directory of SDL files.

    Args:
        path: A .json introspection file, an SDL file, or a directory

    Returns:
        The built GraphQLSchema

    Raises:
        SchemaLoadError: If the file cannot be read or the schema cannot be built
    """
    path = Path(path)
    if not path.exists():
        raise SchemaLoadError(f"Schema not found: {path}")

    if path.is_dir():
        files = sorted(p for p in path.rglob("*") if p.suffix in SDL_EXTENSIONS)
        if not files:
            raise SchemaLoadError(f"No schema files found in {path}")
        sdl = "\n".join(p.read_text(encoding="utf-8") for p in files)
        return schema_from_sdl(sdl, str(path))

    text = path.read_text(encoding="utf-8")
    if path.suffix == ".json":
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise SchemaLoadError(f"Invalid introspection JSON in {path}: {e}") from e
        return schema_from_introspection(data, str(path))
    return schema_from_sdl(text, str(path))


def schema_from_sdl(sdl: str, name: str = "schema") -> GraphQLSchema:
    """Build a schema from SDL text."""
    try:
        schema = build_schema(Source(sdl, name))
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Cannot build schema from {name}: {e}") from e
    log.debug("schema_loaded", source=name, types=len(schema.type_map))
    return schema


def schema_from_introspection(data: dict, name: str = "schema") -> GraphQLSchema:
    """Build a schema from an introspection result.

    Accepts both {"__schema": {...}} and {"data": {"__schema": {...}}}.
    """
    if "__schema" not in data and "__schema" in data.get("data", {}):
        data = data["data"]
    try:
        schema = build_client_schema(data)
    except (GraphQLError, TypeError) as e:
        raise SchemaLoadError(f"Cannot build schema from introspection {name}: {e}") from e
    log.debug("schema_loaded", source=name, types=len(schema.type_map))
    return schema


def parse_source(text: str, path: str = "") -> SourceDocument:
    """
    Parse one document text.

    Args:
        text: GraphQL document text
        path: Path the text was read from, used as the source name

    Raises:
        DocumentLoadError: If the text is not syntactically valid
    """
    try:
        document = parse(Source(text, path) if path else text)
    except GraphQLError as e:
        raise DocumentLoadError(f"Cannot parse {path or 'document'}: {e.message}", path) from e
    return SourceDocument(path=path, document=document)


def expand_patterns(patterns: Iterable[str], base_dir: str | Path = ".") -> list[Path]:
    """Expand glob patterns (and plain paths) relative to base_dir, without duplicates."""
    base = Path(base_dir)
    seen: set[Path] = set()
    files: list[Path] = []
    for pattern in patterns:
        raw = Path(pattern)
        candidate = raw if raw.is_absolute() else base / raw
        if candidate.is_file():
            matches = [candidate]
        elif candidate.is_dir():
            matches = sorted(p for p in candidate.rglob("*") if p.suffix in SDL_EXTENSIONS)
        elif raw.is_absolute():
            # Path.glob only takes relative patterns
            anchor = Path(raw.anchor)
            matches = sorted(p for p in anchor.glob(str(raw.relative_to(anchor))) if p.is_file())
        else:
            matches = sorted(p for p in base.glob(pattern) if p.is_file())
        if not matches:
            log.warning("pattern_matched_nothing", pattern=pattern)
        for match in matches:
            if match not in seen:
                seen.add(match)
                files.append(match)
    return files


def load_documents(patterns: Iterable[str], base_dir: str | Path = ".") -> tuple[list[SourceDocument], list[DocumentLoadError]]:
    """
    Load and parse every document matched by the patterns.

    A file that fails to parse is reported in the error list and does not
    stop the remaining files from loading.

    Returns:
        (documents, errors)
    """
    documents: list[SourceDocument] = []
    errors: list[DocumentLoadError] = []
    for file_path in expand_patterns(patterns, base_dir):
        try:
            text = file_path.read_text(encoding="utf-8")
            documents.append(parse_source(text, str(file_path)))
        except DocumentLoadError as e:
            log.warning("document_load_failed", path=str(file_path), error=str(e))
            errors.append(e)
        except OSError as e:
            log.warning("document_load_failed", path=str(file_path), error=str(e))
            errors.append(DocumentLoadError(f"Cannot read {file_path}: {e}", str(file_path)))
    log.debug("documents_loaded", count=len(documents), failed=len(errors))
    return documents, errors
