"""
Query parameterization.

Replaces `@@name` tokens in a query template with values looked up by name.
Unresolved tokens are left in place.
"""

import logging
from collections.abc import Callable

PARAMETER_MARKER = "@@"

logger = logging.getLogger(__name__)


def _is_name_char(char: str) -> bool:
    return char == "_" or char.isalnum()


def parameter_name_at(template: str, index: int) -> str:
    """
    Read the parameter name starting at `index`.

    Args:
        template: Query template
        index: Position right after a marker

    Returns:
        The maximal run of letters, digits and underscores (may be empty)
    """
    end = index
    while end < len(template) and _is_name_char(template[end]):
        end += 1
    return template[index:end]


def find_parameters(template: str) -> list[str]:
    """List the parameter names referenced in a template, in order of appearance."""
    names = []
    position = template.find(PARAMETER_MARKER)
    while position != -1:
        name = parameter_name_at(template, position + len(PARAMETER_MARKER))
        if name:
            names.append(name)
        position = template.find(PARAMETER_MARKER, position + len(PARAMETER_MARKER) + len(name))
    return names


def substitute(template: str, lookup: Callable[[str], str | None]) -> str:
    """
    Substitute `@@name` tokens in a query template.

    Scanning resumes after each replacement, so substituted text is never
    re-scanned for markers.

    Args:
        template: Query template with `@@name` tokens
        lookup: Returns the value for a name, or None if unknown

    Returns:
        The query with every resolvable token replaced
    """
    pieces = []
    position = 0
    while True:
        index = template.find(PARAMETER_MARKER, position)
        if index == -1:
            pieces.append(template[position:])
            break

        name_start = index + len(PARAMETER_MARKER)
        name = parameter_name_at(template, name_start)
        end = name_start + len(name)
        pieces.append(template[position:index])

        value = lookup(name) if name else None
        if value is None:
            if name:
                logger.warning(f"Query parameter '{name}' could not be resolved, leaving it unchanged")
            pieces.append(template[index:end])
        else:
            logger.debug(f"Source parameter name: {name}")
            pieces.append(value)
        position = end

    return "".join(pieces)
