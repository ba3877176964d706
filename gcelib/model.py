"""Read-only views of compute resources used for classification.

Each dataclass mirrors the subset of a compute API resource that gcelib
needs. The from_dict constructors accept the API's camelCase field names so
that JSON or YAML dumps of real resources can be loaded directly.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class TargetProxyType(Enum):
    HTTP = "HTTP"
    HTTPS = "HTTPS"
    SSL = "SSL"


class ServerGroupType(Enum):
    REGIONAL = "REGIONAL"
    ZONAL = "ZONAL"


# Keys of the load balancing metadata recorded on a server group
GLOBAL_LOAD_BALANCER_NAMES = "globalLoadBalancerNames"
REGIONAL_LOAD_BALANCER_NAMES = "regionalLoadBalancerNames"
BACKEND_SERVICE_NAMES = "backendServiceNames"


@dataclass(frozen=True)
class LoadBalancedBackend:
    server_group_url: Optional[str] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "LoadBalancedBackend":
        return cls(server_group_url=data.get("serverGroupUrl") or data.get("group"))


@dataclass(frozen=True)
class BackendService:
    name: str
    backends: List[LoadBalancedBackend] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["BackendService"]:
        if data is None:
            return None
        return cls(
            name=data.get("name", ""),
            backends=[LoadBalancedBackend.from_dict(b) for b in data.get("backends") or []],
        )


@dataclass(frozen=True)
class PathRule:
    backend_service: Optional[BackendService] = None
    paths: List[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "PathRule":
        return cls(
            backend_service=BackendService.from_dict(data.get("backendService")),
            paths=list(data.get("paths") or []),
        )


@dataclass(frozen=True)
class PathMatcher:
    name: Optional[str] = None
    default_service: Optional[BackendService] = None
    path_rules: List[PathRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Optional[Dict[str, Any]]) -> Optional["PathMatcher"]:
        if data is None:
            return None
        return cls(
            name=data.get("name"),
            default_service=BackendService.from_dict(data.get("defaultService")),
            path_rules=[PathRule.from_dict(r) for r in data.get("pathRules") or []],
        )


@dataclass(frozen=True)
class HostRule:
    host_patterns: List[str] = field(default_factory=list)
    path_matcher: Optional[PathMatcher] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HostRule":
        return cls(
            host_patterns=list(data.get("hostPatterns") or []),
            path_matcher=PathMatcher.from_dict(data.get("pathMatcher")),
        )


@dataclass(frozen=True)
class HttpLoadBalancer:
    """Global URL-map based balancer (HTTP or HTTPS target proxy)."""

    name: str
    default_service: Optional[BackendService] = None
    host_rules: List[HostRule] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HttpLoadBalancer":
        return cls(
            name=data["name"],
            default_service=BackendService.from_dict(data.get("defaultService")),
            host_rules=[HostRule.from_dict(h) for h in data.get("hostRules") or []],
        )


@dataclass(frozen=True)
class InternalLoadBalancer:
    """Regional balancer fronting a single backend service."""

    name: str
    region: Optional[str] = None
    backend_service: Optional[BackendService] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "InternalLoadBalancer":
        return cls(
            name=data["name"],
            region=data.get("region"),
            backend_service=BackendService.from_dict(data.get("backendService")),
        )


@dataclass(frozen=True)
class SslLoadBalancer:
    """Global SSL proxy balancer fronting a single backend service."""

    name: str
    backend_service: Optional[BackendService] = None

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SslLoadBalancer":
        return cls(
            name=data["name"],
            backend_service=BackendService.from_dict(data.get("backendService")),
        )


@dataclass(frozen=True)
class ServerGroup:
    """A managed instance group together with its load balancing metadata.

    Attributes:
        name: Server group name
        region: Region the group lives in (for zonal groups, the zone's region)
        zone: Zone for zonal groups, None for regional ones
        regional: Whether the group is regional
        asg: Recorded metadata, e.g. {"globalLoadBalancerNames": [...]}
    """

    name: str
    region: str
    zone: Optional[str] = None
    regional: bool = False
    asg: Dict[str, Any] = field(default_factory=dict)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ServerGroup":
        return cls(
            name=data["name"],
            region=data["region"],
            zone=data.get("zone"),
            regional=bool(data.get("regional", False)),
            asg=dict(data.get("asg") or {}),
        )

    def recorded_names(self, key: str) -> List[str]:
        """Return a metadata name list, or an empty list when unrecorded."""
        return list(self.asg.get(key) or [])
