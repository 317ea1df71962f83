"""
Symbols — Module symbol tables and documentation nodes

A module's docs.json entry carries four symbol tables:

    values   {name, comment, type}
    binops   {name, comment, type}
    unions   {name, comment, args, tags}
    aliases  {name, comment, args, type}

A reconstructed documentation body is a sequence of DocNodes. Each node
carries an explicit `kind` discriminant so consumers dispatch on data,
never on the Python class:

    prose       {markup}
    value       {name, comment, type}
    binop       {name, comment, type}
    union       {name, comment, args, tags}
    alias       {name, comment, args, type}
    unresolved  {name}

Usage:
    resolver = SymbolResolver(render=MarkdownRenderer())
    node = resolver.resolve(module_info, "map")   # SymbolNode or None
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, ClassVar, Dict, List, Optional, Tuple, Union

from ..errors import MalformedMetadataError


# Pure text -> markup function (Markdown renderer or a test double)
ProseRenderer = Callable[[str], str]


class NodeKind(Enum):
    """Discriminant of a documentation node."""
    PROSE = "prose"
    VALUE = "value"
    BINOP = "binop"
    UNION = "union"
    ALIAS = "alias"
    UNRESOLVED = "unresolved"


# Lookup order when resolving a name: first match wins
SYMBOL_TABLES: Tuple[Tuple[NodeKind, str], ...] = (
    (NodeKind.VALUE, "values"),
    (NodeKind.BINOP, "binops"),
    (NodeKind.UNION, "unions"),
    (NodeKind.ALIAS, "aliases"),
)

# Kind-specific fields, in serialization order
SYMBOL_FIELDS: Dict[NodeKind, Tuple[str, ...]] = {
    NodeKind.VALUE: ("type",),
    NodeKind.BINOP: ("type",),
    NodeKind.UNION: ("args", "tags"),
    NodeKind.ALIAS: ("args", "type"),
}


# =============================================================================
# Documentation nodes
# =============================================================================

@dataclass(frozen=True)
class ProseNode:
    """Rendered prose between symbol references."""
    markup: str
    text: str = ""  # Raw source, kept for plain-text output

    kind: ClassVar[NodeKind] = NodeKind.PROSE

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "markup": self.markup}


@dataclass(frozen=True)
class SymbolNode:
    """A documented symbol with its comment rendered to markup."""
    kind: NodeKind
    name: str
    comment: str
    type: Optional[str] = None
    args: List[str] = field(default_factory=list)
    tags: List[Any] = field(default_factory=list)
    source_comment: str = ""  # Raw comment, kept for plain-text output

    def __post_init__(self):
        if self.kind not in SYMBOL_FIELDS:
            raise ValueError(f"Not a symbol kind: {self.kind}")

    def to_dict(self) -> dict:
        data = {"kind": self.kind.value, "name": self.name, "comment": self.comment}
        for key in SYMBOL_FIELDS[self.kind]:
            data[key] = getattr(self, key)
        return data


@dataclass(frozen=True)
class UnresolvedNode:
    """Placeholder for a @docs name that matches no symbol."""
    name: str

    kind: ClassVar[NodeKind] = NodeKind.UNRESOLVED

    def to_dict(self) -> dict:
        return {"kind": self.kind.value, "name": self.name}


DocNode = Union[ProseNode, SymbolNode, UnresolvedNode]


# =============================================================================
# Module records
# =============================================================================

@dataclass
class ModuleInfo:
    """One module entry from a package's docs.json."""
    name: str
    comment: str = ""
    values: List[dict] = field(default_factory=list)
    binops: List[dict] = field(default_factory=list)
    unions: List[dict] = field(default_factory=list)
    aliases: List[dict] = field(default_factory=list)
    raw: Dict[str, Any] = field(default_factory=dict)

    def table(self, table_name: str) -> List[dict]:
        return getattr(self, table_name)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'ModuleInfo':
        """
        Build from a docs.json module entry.

        Missing symbol tables read as empty.

        Raises:
            MalformedMetadataError: If the entry is not an object with a name
        """
        if not isinstance(data, dict) or "name" not in data:
            raise MalformedMetadataError("Module docs entry must be an object with a 'name'")
        return cls(
            name=data["name"],
            comment=data.get("comment") or "",
            values=data.get("values", []),
            binops=data.get("binops", []),
            unions=data.get("unions", []),
            aliases=data.get("aliases", []),
            raw=data,
        )


def find_by_name(records: List[dict], name: str) -> Optional[dict]:
    """First record whose name equals `name` exactly."""
    for record in records:
        if record.get("name") == name:
            return record
    return None


# =============================================================================
# Resolution
# =============================================================================

class SymbolResolver:
    """
    Looks up a symbol name across a module's four tables.

    Search order is values, binops, unions, aliases; the first exact,
    case-sensitive match wins. Callers trim the name beforehand.
    """

    def __init__(self, render: ProseRenderer):
        self.render = render

    def resolve(self, module: ModuleInfo, name: str) -> Optional[SymbolNode]:
        """
        Resolve a name to a documentation node.

        Args:
            module: Module whose tables are searched
            name: Exact symbol name

        Returns:
            SymbolNode of the matching kind, or None if no table has the name
        """
        for kind, table_name in SYMBOL_TABLES:
            record = find_by_name(module.table(table_name), name)
            if record is not None:
                return self._build(kind, name, record)
        return None

    def _build(self, kind: NodeKind, name: str, record: dict) -> SymbolNode:
        source = record.get("comment") or ""
        fields: Dict[str, Any] = {}
        if kind in (NodeKind.VALUE, NodeKind.BINOP, NodeKind.ALIAS):
            fields["type"] = record.get("type")
        if kind in (NodeKind.UNION, NodeKind.ALIAS):
            fields["args"] = record.get("args", [])
        if kind == NodeKind.UNION:
            # Elm 0.19 docs.json calls union tags "cases"
            fields["tags"] = record.get("tags", record.get("cases", []))

        return SymbolNode(
            kind=kind,
            name=name,
            comment=self.render(source),
            source_comment=source,
            **fields,
        )
