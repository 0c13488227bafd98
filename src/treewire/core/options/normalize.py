"""Normalization of shorthand option forms.

Runs on a copy of the descendant options before merging, so every strategy
sees one canonical shape per key.
"""

from __future__ import annotations

import re
import warnings
from collections.abc import Mapping
from functools import cache
from typing import Any

from treewire.errors import OptionsError

_CAMELIZE_RE = re.compile(r"-(\w)")
_COMPONENT_NAME_RE = re.compile(r"^[a-zA-Z][\w.\-]*$")
_RESERVED_TAGS = frozenset({"slot", "component"})


@cache
def camelize(name: str) -> str:
    """Turn ``my-prop`` into ``myProp``."""
    return _CAMELIZE_RE.sub(lambda m: m.group(1).upper(), name)


def validate_component_name(name: str) -> None:
    """Warn about component names that cannot be used as tags."""
    if not _COMPONENT_NAME_RE.match(name):
        warnings.warn(
            f'Invalid component name: "{name}". Component names should start with a '
            "letter and contain only alphanumerics, dots, underscores and hyphens.",
            stacklevel=3,
        )
    if name.lower() in _RESERVED_TAGS:
        warnings.warn(
            f"Do not use built-in or reserved tags as component id: {name}",
            stacklevel=3,
        )


def normalize_props(options: dict[str, Any]) -> None:
    """Canonicalize ``props`` to ``{name: {"type": ...}}`` in place.

    Raises:
        OptionsError: If props is neither a list of names nor a mapping.
    """
    props = options.get("props")
    if not props:
        return
    normalized: dict[str, dict[str, Any]] = {}
    if isinstance(props, list | tuple):
        for name in props:
            if not isinstance(name, str):
                raise OptionsError("props must be strings when using list syntax.")
            normalized[camelize(name)] = {"type": None}
    elif isinstance(props, Mapping):
        for name, value in props.items():
            normalized[camelize(name)] = (
                dict(value) if isinstance(value, Mapping) else {"type": value}
            )
    else:
        raise OptionsError(
            f'Invalid value for option "props": expected a list or a mapping, '
            f"got {type(props).__name__}"
        )
    options["props"] = normalized


def normalize_inject(options: dict[str, Any]) -> None:
    """Canonicalize ``inject`` to ``{key: {"from": ..., ...}}`` in place.

    Raises:
        OptionsError: If inject is neither a list of keys nor a mapping.
    """
    inject = options.get("inject")
    if not inject:
        return
    normalized: dict[str, dict[str, Any]] = {}
    if isinstance(inject, list | tuple):
        for key in inject:
            normalized[key] = {"from": key}
    elif isinstance(inject, Mapping):
        for key, value in inject.items():
            normalized[key] = (
                {"from": key, **value} if isinstance(value, Mapping) else {"from": value}
            )
    else:
        raise OptionsError(
            f'Invalid value for option "inject": expected a list or a mapping, '
            f"got {type(inject).__name__}"
        )
    options["inject"] = normalized


def normalize_directives(options: dict[str, Any]) -> None:
    """Expand function-shorthand directives to ``{"bind": fn, "update": fn}``."""
    directives = options.get("directives")
    if not directives or not isinstance(directives, Mapping):
        return
    options["directives"] = {
        name: {"bind": value, "update": value} if callable(value) else value
        for name, value in directives.items()
    }
