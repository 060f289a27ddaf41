"""Endpoint registry built on Pydantic v2 models."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from concept_insights.endpoints.params import EndpointParams
from concept_insights.types import RequestSpec


class EndpointSpec(BaseModel):
    """Declarative description of one API operation."""

    model_config = ConfigDict(arbitrary_types_allowed=True, frozen=True)

    name: str
    method: Literal["GET", "PUT", "POST", "DELETE"]
    description: str
    params_schema: type[EndpointParams]
    sub_resource: str | None = None
    result_type: type[BaseModel] | None = None
    tags: list[str] = Field(default_factory=list)

    def parse_params(self, payload: Mapping[str, Any] | EndpointParams) -> EndpointParams:
        if isinstance(payload, self.params_schema):
            return payload
        return self.params_schema.model_validate(payload)

    def build_request(self, payload: Mapping[str, Any] | EndpointParams) -> RequestSpec:
        """Validate ``payload`` and assemble the request it describes."""
        params = self.parse_params(payload)
        resource = params.resource()
        if self.sub_resource:
            resource = resource.child(self.sub_resource)

        content = params.content()
        return RequestSpec(
            method=self.method,
            path=resource.path,
            query=params.query_params(),
            content=content[0] if content else None,
            content_type=content[1] if content else None,
        )


class EndpointRegistry:
    """Stores endpoint specs by name."""

    def __init__(self) -> None:
        self._endpoints: dict[str, EndpointSpec] = {}

    def register(self, spec: EndpointSpec) -> None:
        if spec.name in self._endpoints:
            raise ValueError(f"Endpoint already registered: {spec.name}")
        self._endpoints[spec.name] = spec

    def get(self, name: str) -> EndpointSpec:
        spec = self._endpoints.get(name)
        if spec is None:
            raise KeyError(f"Unknown endpoint: {name}")
        return spec

    def build_request(
        self, name: str, payload: Mapping[str, Any] | EndpointParams
    ) -> tuple[EndpointSpec, RequestSpec]:
        spec = self.get(name)
        return spec, spec.build_request(payload)

    def specs(self, tag: str | None = None) -> list[EndpointSpec]:
        """Registered specs in registration order, optionally only those tagged ``tag``."""
        if tag is None:
            return list(self._endpoints.values())
        return [spec for spec in self._endpoints.values() if tag in spec.tags]

    def __contains__(self, name: object) -> bool:
        return name in self._endpoints

    def __len__(self) -> int:
        return len(self._endpoints)
