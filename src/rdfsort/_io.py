import logging
import tomllib
from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w
from pydantic import BaseModel, ConfigDict, ValidationError

from ._terms import Node, NodeArena, NodeKind, Triple

logger = logging.getLogger(__name__)


class DocumentError(Exception):
    """Error in a triple document."""


class TripleRecord(BaseModel):
    """One ``[[triples]]`` entry of a triple document, before interning."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    subject: str
    predicate: str
    object: str


class DocumentModel(BaseModel):
    """Schema of a triple document."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    namespaces: dict[str, str] = {}
    triples: list[TripleRecord] = []


@dataclass(slots=True)
class TripleDocument:
    """Triples loaded from a document, with the arena owning their nodes."""

    triples: list[Triple]
    namespaces: dict[str, str] = field(default_factory=dict)
    arena: NodeArena = field(default_factory=NodeArena)


def parse_term(label: str, arena: NodeArena) -> Node:
    """Intern a term label into ``arena``.

    ``_:name`` is a blank node, a label wrapped in double quotes is a literal
    and anything else is an IRI.
    """
    if label.startswith("_:"):
        return arena.intern(NodeKind.BLANK, label[2:])
    if len(label) >= 2 and label.startswith('"') and label.endswith('"'):  # noqa: PLR2004
        return arena.intern(NodeKind.LITERAL, label[1:-1])
    return arena.intern(NodeKind.IRI, label)


def toml_to_document(toml_contents: Mapping[str, Any]) -> TripleDocument:
    """Validate parsed TOML contents and intern their terms.

    This is a pure function: every label of the document maps to exactly one
    node of a fresh arena.

    Raises:
        DocumentError: If the contents don't match the document schema.

    """
    try:
        model = DocumentModel.model_validate(toml_contents)
    except ValidationError as e:
        msg = f"Invalid triple document: {e}"
        raise DocumentError(msg) from e

    arena = NodeArena()
    triples = [
        Triple(
            parse_term(record.subject, arena),
            parse_term(record.predicate, arena),
            parse_term(record.object, arena),
        )
        for record in model.triples
    ]
    return TripleDocument(triples=triples, namespaces=dict(model.namespaces), arena=arena)


def load_document(input_path: Path | str) -> TripleDocument:
    """Load a triple document from a TOML file.

    Raises:
        DocumentError: If the file is not valid TOML or not a valid document.

    """
    input_path = Path(input_path)
    with input_path.open("rb") as f:
        try:
            toml_contents = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            msg = f"Invalid TOML in {input_path}: {e}"
            raise DocumentError(msg) from e

    document = toml_to_document(toml_contents)
    logger.debug(f"Loaded {len(document.triples)} triples from {input_path}")
    return document


def _blank_labels(triples: Iterable[Triple]) -> dict[Node, str]:
    """Assign a label to every blank node, unique within one document.

    The first node carrying a label keeps it; later distinct nodes with the
    same label get their arena index appended (``b``, ``b.1``).
    """
    labels: dict[Node, str] = {}
    used: set[str] = set()
    for triple in triples:
        for node in triple:
            if node.kind is not NodeKind.BLANK or node in labels:
                continue
            label = node.value
            if label in used:
                label = f"{node.value}.{node.index}"
                suffix = 1
                while label in used:
                    label = f"{node.value}.{node.index}.{suffix}"
                    suffix += 1
            used.add(label)
            labels[node] = label
    return labels


def document_to_dict(triples: Iterable[Triple], namespaces: Mapping[str, str] | None = None) -> dict[str, Any]:
    """Convert triples back into the TOML document layout, keeping their order.

    Distinct blank nodes always get distinct labels, so loading the result
    back yields the same graph.
    """
    triples = list(triples)
    blank_labels = _blank_labels(triples)

    def label(node: Node) -> str:
        if node in blank_labels:
            return f"_:{blank_labels[node]}"
        return str(node)

    toml_data: dict[str, Any] = {}
    if namespaces:
        toml_data["namespaces"] = dict(namespaces)
    toml_data["triples"] = [
        {"subject": label(t.subject), "predicate": label(t.predicate), "object": label(t.object)} for t in triples
    ]
    return toml_data


def export_to_toml(
    triples: Iterable[Triple],
    output_path: Path | str,
    namespaces: Mapping[str, str] | None = None,
) -> None:
    """Write triples to a TOML document in the given order."""
    toml_data = document_to_dict(triples, namespaces)

    output_path = Path(output_path)
    with output_path.open("wb") as f:
        tomli_w.dump(toml_data, f)

    logger.debug(f"Exported {len(toml_data['triples'])} triples to {output_path}")
