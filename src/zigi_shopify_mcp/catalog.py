"""Read-only catalog of Shopify REST operations.

Each operation is described by plain data (HTTP method, URI template, root
key, parameter schema) bundled in ``data/operations.json``. The dispatcher
never branches on an operation's identity; it only reads these fields.
"""

import json
import logging
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterator, Mapping, Optional, Union

from .constants import SUPPORTED_METHODS
from .exceptions import UnknownOperationError

logger = logging.getLogger(__name__)

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "operations.json"


@dataclass(frozen=True)
class OperationDescriptor:
    """Specification of a single Shopify operation."""

    name: str
    http_method: str
    # Relative path, without base URL. May contain ``{placeholders}`` for
    # path parameters.
    path_template: str
    root_key: Optional[str] = None
    parameter_schema: Mapping[str, Mapping[str, Any]] = field(default_factory=lambda: MappingProxyType({}))

    @classmethod
    def from_dict(cls, name: str, data: Mapping[str, Any]) -> "OperationDescriptor":
        http_method = str(data["httpMethod"]).upper()
        if http_method not in SUPPORTED_METHODS:
            raise ValueError(f'Operation "{name}" uses unsupported HTTP method {http_method}')

        parameters = {
            param: MappingProxyType(dict(spec)) for param, spec in (data.get("parameters") or {}).items()
        }
        return cls(
            name=name,
            http_method=http_method,
            path_template=data["uri"],
            root_key=data.get("rootKey"),
            parameter_schema=MappingProxyType(parameters),
        )

    def parameter_location(self, param: str) -> Optional[str]:
        spec = self.parameter_schema.get(param)
        return spec.get("location") if spec else None

    def wire_name(self, param: str) -> str:
        spec = self.parameter_schema.get(param)
        return spec.get("sentAs", param) if spec else param

    @property
    def required_parameters(self) -> list[str]:
        return [param for param, spec in self.parameter_schema.items() if spec.get("required")]


def internal_name(operation: str) -> str:
    """Map a lower camel-case alias ("getProducts") to its catalog name ("GetProducts")."""
    return operation[:1].upper() + operation[1:]


class OperationCatalog(Mapping[str, OperationDescriptor]):
    """Immutable lookup from operation name to descriptor."""

    def __init__(self, descriptors: Mapping[str, OperationDescriptor]) -> None:
        self._descriptors = MappingProxyType(dict(descriptors))

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "OperationCatalog":
        return cls({name: OperationDescriptor.from_dict(name, spec) for name, spec in data.items()})

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "OperationCatalog":
        with open(path, encoding="utf-8") as f:
            data = json.load(f)

        catalog = cls.from_dict(data)
        logger.debug(f"Loaded {len(catalog)} operations from {path}")
        return catalog

    @classmethod
    def load(cls) -> "OperationCatalog":
        """Load the catalog bundled with the package."""
        return cls.from_file(DEFAULT_CATALOG_PATH)

    def resolve(self, operation: str) -> OperationDescriptor:
        """Find the descriptor for an operation name or its camel-case alias.

        Raises:
            UnknownOperationError: If no such operation exists
        """
        descriptor = self._descriptors.get(internal_name(operation)) if operation else None
        if descriptor is None:
            raise UnknownOperationError(operation)
        return descriptor

    def __getitem__(self, name: str) -> OperationDescriptor:
        return self._descriptors[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self._descriptors)

    def __len__(self) -> int:
        return len(self._descriptors)
