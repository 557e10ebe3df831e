"""
Recursive traversal of parsed YAML documents.
"""
from typing import Any, Callable, Mapping


def walk_map(data: Any, visit: Callable[[Mapping], None]) -> None:
    """
    Calls ``visit`` on every mapping found in ``data``, depth-first and pre-order.

    Mappings are visited and then their values are walked whatever the key.
    Sequences are walked element by element but never visited themselves.
    Scalars are ignored.

    :param data: A value produced by a YAML loader (mapping, list or scalar).
    :param visit: Callback receiving each mapping node, the root included.
    """
    if isinstance(data, Mapping):
        visit(data)
        for value in data.values():
            walk_map(value, visit)
    elif isinstance(data, (list, tuple)):
        for element in data:
            walk_map(element, visit)
