"""Capability interfaces a proxy can pose as.

A capability set is a named collection of method signatures. The two sets
shipped here describe the data source and delegate roles a table view
expects from its controller; the proxy itself never depends on their
contents, they only document what a host is likely to call and let callers
check conformance.
"""

from __future__ import annotations

import inspect
import types
from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, Iterator, Optional, Tuple


# ---------------------------------------------------------------------------
# Signatures
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class MethodSpec:
    """One method of a capability interface."""

    name: str
    params: Tuple[str, ...] = ()
    returns: str = "None"
    optional: bool = True


def implements(obj: Any, name: str) -> bool:
    """Return whether ``obj`` has a callable attribute ``name``.

    The lookup is static first so that properties and ``__getattr__`` hooks
    on the object are not triggered for names that exist on its type. Slot
    and builtin getset descriptors hold plain values and are resolved.
    """

    try:
        attr = inspect.getattr_static(obj, name)
    except AttributeError:
        if not hasattr(obj, name):
            return False
        attr = getattr(obj, name)
    if isinstance(attr, (types.MemberDescriptorType, types.GetSetDescriptorType)):
        try:
            attr = getattr(obj, name)
        except AttributeError:
            return False
    if isinstance(attr, (staticmethod, classmethod)):
        return True
    return callable(attr)


@dataclass(frozen=True)
class CapabilitySet:
    """A named interface: the methods an implementing object may provide."""

    name: str
    methods: Tuple[MethodSpec, ...] = field(default_factory=tuple)

    def __post_init__(self) -> None:
        seen: Dict[str, MethodSpec] = {}
        for spec in self.methods:
            seen.setdefault(spec.name, spec)
        object.__setattr__(self, "methods", tuple(seen.values()))

    def __contains__(self, name: object) -> bool:
        return any(spec.name == name for spec in self.methods)

    def __iter__(self) -> Iterator[MethodSpec]:
        return iter(self.methods)

    def __len__(self) -> int:
        return len(self.methods)

    def names(self) -> Tuple[str, ...]:
        return tuple(spec.name for spec in self.methods)

    def get(self, name: str) -> Optional[MethodSpec]:
        for spec in self.methods:
            if spec.name == name:
                return spec
        return None

    def required(self) -> Tuple[MethodSpec, ...]:
        return tuple(spec for spec in self.methods if not spec.optional)

    def union(self, other: "CapabilitySet", name: Optional[str] = None) -> "CapabilitySet":
        """Combine two interfaces; on a name clash our entry wins."""

        return CapabilitySet(
            name=name or f"{self.name}+{other.name}",
            methods=self.methods + other.methods,
        )

    def missing(self, obj: Any) -> Tuple[str, ...]:
        """Names of required methods ``obj`` does not implement."""

        return tuple(spec.name for spec in self.required() if not implements(obj, spec.name))

    def is_satisfied_by(self, obj: Any) -> bool:
        return not self.missing(obj)


# ---------------------------------------------------------------------------
# Table view roles
# ---------------------------------------------------------------------------


DATA_SOURCE = CapabilitySet(
    "data_source",
    (
        MethodSpec("number_of_sections", ("TableView",), "int"),
        MethodSpec("number_of_rows", ("TableView", "int"), "int", optional=False),
        MethodSpec("cell_for_row", ("TableView", "IndexPath"), "Cell", optional=False),
        MethodSpec("title_for_header", ("TableView", "int"), "str | None"),
        MethodSpec("title_for_footer", ("TableView", "int"), "str | None"),
        MethodSpec("section_index_titles", ("TableView",), "list[str]"),
        MethodSpec("section_for_index_title", ("TableView", "str", "int"), "int"),
        MethodSpec("can_edit_row", ("TableView", "IndexPath"), "bool"),
        MethodSpec("can_move_row", ("TableView", "IndexPath"), "bool"),
        MethodSpec("commit_editing", ("TableView", "EditingStyle", "IndexPath")),
        MethodSpec("move_row", ("TableView", "IndexPath", "IndexPath")),
    ),
)

DELEGATE = CapabilitySet(
    "delegate",
    (
        MethodSpec("height_for_row", ("TableView", "IndexPath"), "float"),
        MethodSpec("height_for_header", ("TableView", "int"), "float"),
        MethodSpec("height_for_footer", ("TableView", "int"), "float"),
        MethodSpec("view_for_header", ("TableView", "int"), "object | None"),
        MethodSpec("view_for_footer", ("TableView", "int"), "object | None"),
        MethodSpec("will_display_cell", ("TableView", "Cell", "IndexPath")),
        MethodSpec("will_select_row", ("TableView", "IndexPath"), "IndexPath | None"),
        MethodSpec("did_select_row", ("TableView", "IndexPath")),
        MethodSpec("will_deselect_row", ("TableView", "IndexPath"), "IndexPath | None"),
        MethodSpec("did_deselect_row", ("TableView", "IndexPath")),
        MethodSpec("accessory_button_tapped", ("TableView", "IndexPath")),
        MethodSpec("editing_style_for_row", ("TableView", "IndexPath"), "EditingStyle"),
        MethodSpec("title_for_delete_confirmation", ("TableView", "IndexPath"), "str"),
        MethodSpec("should_indent_while_editing", ("TableView", "IndexPath"), "bool"),
        MethodSpec("indentation_level_for_row", ("TableView", "IndexPath"), "int"),
        MethodSpec("will_begin_editing_row", ("TableView", "IndexPath")),
        MethodSpec("did_end_editing_row", ("TableView", "IndexPath")),
        MethodSpec(
            "target_index_path_for_move",
            ("TableView", "IndexPath", "IndexPath"),
            "IndexPath",
        ),
    ),
)

TABLE_VIEW = DATA_SOURCE.union(DELEGATE, name="table_view")


# ---------------------------------------------------------------------------
# Registry
# ---------------------------------------------------------------------------


class CapabilityRegistry:
    """Capability sets addressable by name."""

    def __init__(self, sets: Iterable[CapabilitySet] = ()) -> None:
        self._by_name: Dict[str, CapabilitySet] = {}
        for capabilities in sets:
            self.register(capabilities)

    def register(self, capabilities: CapabilitySet) -> None:
        self._by_name[capabilities.name] = capabilities

    def unregister(self, name: str) -> None:
        self._by_name.pop(name, None)

    def get(self, name: str) -> Optional[CapabilitySet]:
        return self._by_name.get(name)

    def names(self) -> Tuple[str, ...]:
        return tuple(sorted(self._by_name))


# Global registry instance used by default lookups.
GLOBAL_CAPABILITIES = CapabilityRegistry((DATA_SOURCE, DELEGATE, TABLE_VIEW))
