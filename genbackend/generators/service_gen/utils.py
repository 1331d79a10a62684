"""Naming helpers for service code generation."""
import keyword
import re
from typing import Set

_PATH_PARAM = re.compile(r"{([^}/]+)}")


def to_snake_case(name: str) -> str:
    """Convert PascalCase, camelCase or kebab-case to snake_case."""
    s1 = re.sub('(.)([A-Z][a-z]+)', r'\1_\2', name)
    s2 = re.sub('([a-z0-9])([A-Z])', r'\1_\2', s1)
    return re.sub(r'[^0-9a-zA-Z]+', '_', s2).strip('_').lower()


def to_identifier(name: str, prefix: str = "n") -> str:
    """Turn an arbitrary name into a valid Python identifier."""
    ident = to_snake_case(name) or prefix
    if ident[0].isdigit() or keyword.iskeyword(ident):
        ident = f"{prefix}_{ident}"
    return ident


def to_pascal_case(name: str) -> str:
    """Convert any name to PascalCase."""
    parts = to_snake_case(name).split("_")
    pascal = "".join(p[:1].upper() + p[1:] for p in parts if p)
    if not pascal or pascal[0].isdigit():
        pascal = "N" + pascal
    return pascal


def unique_name(base: str, used: Set[str]) -> str:
    """Return base, or base with a numeric suffix, that is not in used, and record it."""
    candidate = base
    counter = 2
    while candidate in used:
        candidate = f"{base}_{counter}"
        counter += 1
    used.add(candidate)
    return candidate


def handler_name(method: str, path: str) -> str:
    """Build a handler function name like get_movies_by_id from a method and path."""
    segments = []
    for segment in path.strip("/").split("/"):
        if not segment:
            continue
        match = _PATH_PARAM.fullmatch(segment)
        segments.append(f"by_{match.group(1)}" if match else segment)
    return to_identifier("_".join([method.lower()] + segments), prefix="route")
