"""Namespace abbreviation tables."""

from collections.abc import Mapping


def invert_schema_definition(schema: Mapping[str, str]) -> dict[str, str]:
    """Invert an ``abbreviation -> URI`` table into ``URI -> abbreviation``.

    The schema definition is what the ``xmlns:`` attributes of a root tag
    declare. Surrounding ``#`` characters are trimmed from each URI.

    Example:
        >>> invert_schema_definition({"rdf": "http://www.w3.org/1999/02/22-rdf-syntax-ns#"})
        {'http://www.w3.org/1999/02/22-rdf-syntax-ns': 'rdf'}

    """
    return {str(uri).strip("#"): abbreviation for abbreviation, uri in schema.items()}


def split_uri(uri: str) -> tuple[str, str]:
    """Split an IRI into its namespace and local name at the last ``#`` or ``/``.

    The separator belongs to neither part. An IRI without separator is all
    local name.
    """
    cut = max(uri.rfind("#"), uri.rfind("/"))
    if cut < 0:
        return "", uri
    return uri[:cut], uri[cut + 1 :]


def abbreviate(uri: str, inverted: Mapping[str, str]) -> str:
    """Render ``uri`` as ``prefix:local`` if its namespace is in ``inverted``."""
    namespace, local = split_uri(uri)
    # Slash namespaces keep their trailing "/" after inversion.
    prefix = inverted.get(namespace, inverted.get(f"{namespace}/"))
    if prefix is None or not local:
        return uri
    return f"{prefix}:{local}"
