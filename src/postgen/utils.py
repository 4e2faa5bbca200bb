"""Shared utility functions for postgen."""

import re

CONTROLLER_TOKEN = "Controller"

_CONTROLLER_PATTERN = re.compile(re.escape(CONTROLLER_TOKEN), re.IGNORECASE)


def to_camel_case(name: str) -> str:
    """Convert snake_case to lowerCamelCase.

    Args:
        name: snake_case name to convert

    Returns:
        lowerCamelCase name
    """
    head, *rest = name.split("_")
    return head + "".join(word.capitalize() for word in rest)


def strip_controller_token(identifier: str) -> str | None:
    """Remove the first case-insensitive occurrence of ``Controller``.

    Args:
        identifier: Class identifier, e.g. "UsersController"

    Returns:
        The identifier without the token, or None if the token is absent
    """
    match = _CONTROLLER_PATTERN.search(identifier)
    if match is None:
        return None
    return identifier[: match.start()] + identifier[match.end() :]


def module_name_for(relative_parts: tuple[str, ...]) -> str:
    """Build a dotted module name from path parts relative to a source root.

    Args:
        relative_parts: Path parts, e.g. ("mvc", "routing.py")

    Returns:
        Dotted module name ("mvc.routing"); packages drop their __init__
    """
    parts = list(relative_parts)
    parts[-1] = parts[-1].removesuffix(".py")
    if parts[-1] == "__init__":
        parts.pop()
    return ".".join(parts)
