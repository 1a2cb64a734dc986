from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple, Union

NAMED_EXPORT = "named"
DEFAULT_EXPORT = "default"


@dataclass(frozen=True)
class PropMetadata:
    name: str
    type: str
    required: bool
    default_value: Optional[str] = None
    description: Optional[str] = None
    examples: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"name": self.name, "type": self.type, "required": self.required}
        if self.default_value is not None:
            data["defaultValue"] = self.default_value
        if self.description:
            data["description"] = self.description
        if self.examples:
            data["examples"] = list(self.examples)
        return data


@dataclass(frozen=True)
class ComponentMetadata:
    name: str
    file_path: str
    export_kind: str = NAMED_EXPORT
    props: Tuple[PropMetadata, ...] = ()
    description: Optional[str] = None
    deprecated: Union[bool, str, None] = None
    returns: Optional[str] = None
    links: Optional[Tuple[str, ...]] = None
    since: Optional[str] = None
    examples: Optional[Tuple[str, ...]] = None
    extends: Optional[Tuple[str, ...]] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "name": self.name,
            "filePath": self.file_path,
            "exportKind": self.export_kind,
            "props": [p.to_dict() for p in self.props],
        }
        if self.description:
            data["description"] = self.description
        if self.deprecated is not None:
            data["deprecated"] = self.deprecated
        if self.returns:
            data["returns"] = self.returns
        if self.links:
            data["links"] = list(self.links)
        if self.since:
            data["since"] = self.since
        if self.examples:
            data["examples"] = list(self.examples)
        if self.extends:
            data["extends"] = list(self.extends)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ComponentMetadata":
        props = tuple(
            PropMetadata(
                name=p["name"],
                type=p["type"],
                required=p["required"],
                default_value=p.get("defaultValue"),
                description=p.get("description"),
                examples=tuple(p["examples"]) if p.get("examples") else None,
            )
            for p in data.get("props", [])
        )
        return cls(
            name=data["name"],
            file_path=data["filePath"],
            export_kind=data.get("exportKind", NAMED_EXPORT),
            props=props,
            description=data.get("description"),
            deprecated=data.get("deprecated"),
            returns=data.get("returns"),
            links=tuple(data["links"]) if data.get("links") else None,
            since=data.get("since"),
            examples=tuple(data["examples"]) if data.get("examples") else None,
            extends=tuple(data["extends"]) if data.get("extends") else None,
        )


@dataclass
class ExtractError:
    file_path: str
    message: str
    line: Optional[int] = None
    column: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {"filePath": self.file_path, "message": self.message}
        if self.line is not None:
            data["line"] = self.line
        if self.column is not None:
            data["column"] = self.column
        return data


@dataclass
class ExtractResult:
    metadata: List[ComponentMetadata] = field(default_factory=list)
    errors: List[ExtractError] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)
