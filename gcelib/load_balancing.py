"""Load balancer membership resolution for server groups.

A load balancer is "disabled" relative to a server group when the server
group's recorded metadata says it was placed behind that balancer, but the
balancer's live backend graph no longer contains the group. Both facts are
needed to tell "never attached" apart from "attached, then detached".

The check runs in three flat steps so each can be tested on its own:
gather backend services, flatten them to backends, then collapse backends in
the server group's region to their local names.
"""

import logging
from typing import Iterable, List, Optional, Union

from gcelib.exceptions import UnsupportedLoadBalancerError
from gcelib.model import (
    BACKEND_SERVICE_NAMES,
    GLOBAL_LOAD_BALANCER_NAMES,
    REGIONAL_LOAD_BALANCER_NAMES,
    BackendService,
    HttpLoadBalancer,
    InternalLoadBalancer,
    LoadBalancedBackend,
    ServerGroup,
    SslLoadBalancer,
)
from gcelib.utils.url_utils import local_name, region_from_group_url

logger = logging.getLogger(__name__)

LoadBalancer = Union[HttpLoadBalancer, InternalLoadBalancer, SslLoadBalancer]


def backend_services_from_http_load_balancer(
    load_balancer: HttpLoadBalancer,
) -> List[BackendService]:
    """Collect every backend service reachable from a URL-map balancer.

    Order: the balancer's default service, then for each host rule its path
    matcher's default service followed by that matcher's path rule services.
    Missing references are skipped.
    """
    backend_services = [load_balancer.default_service]
    for host_rule in load_balancer.host_rules:
        path_matcher = host_rule.path_matcher
        if path_matcher is None:
            continue
        backend_services.append(path_matcher.default_service)
        for path_rule in path_matcher.path_rules:
            backend_services.append(path_rule.backend_service)
    return [service for service in backend_services if service is not None]


def backend_services_for(load_balancer: LoadBalancer) -> List[BackendService]:
    """Return the backend services of any supported balancer type."""
    if isinstance(load_balancer, HttpLoadBalancer):
        return backend_services_from_http_load_balancer(load_balancer)
    if isinstance(load_balancer, (InternalLoadBalancer, SslLoadBalancer)):
        service = load_balancer.backend_service
        return [service] if service is not None else []
    raise UnsupportedLoadBalancerError(
        "Unsupported load balancer type",
        context={"type": type(load_balancer).__name__},
    )


def flatten_backends(backend_services: Iterable[BackendService]) -> List[LoadBalancedBackend]:
    return [backend for service in backend_services for backend in service.backends]


def backend_group_names(backends: Iterable[LoadBalancedBackend], region: str) -> List[str]:
    """Local names of the backends whose server group lives in region.

    Raises:
        MalformedIdentifierError: If a backend's server group URL is malformed
    """
    return [
        local_name(backend.server_group_url)
        for backend in backends
        if backend.server_group_url
        and region_from_group_url(backend.server_group_url) == region
    ]


def _disabled_state(
    load_balancer_name: str,
    recorded_names: List[str],
    backend_services: List[BackendService],
    server_group: ServerGroup,
) -> bool:
    group_names = backend_group_names(flatten_backends(backend_services), server_group.region)
    disabled = load_balancer_name in recorded_names and server_group.name not in group_names
    logger.debug(
        f"Load balancer {load_balancer_name} recorded={load_balancer_name in recorded_names} "
        f"backends={group_names} server group {server_group.name} disabled={disabled}"
    )
    return disabled


def determine_http_load_balancer_disabled_state(
    load_balancer: HttpLoadBalancer, server_group: ServerGroup
) -> bool:
    """Check whether an HTTP(S) balancer no longer targets a server group.

    When the server group records which backend services it was added to,
    only those services are inspected.
    """
    backend_services = backend_services_from_http_load_balancer(load_balancer)
    if BACKEND_SERVICE_NAMES in server_group.asg:
        recorded_services = server_group.recorded_names(BACKEND_SERVICE_NAMES)
        backend_services = [s for s in backend_services if s.name in recorded_services]
    return _disabled_state(
        load_balancer.name,
        server_group.recorded_names(GLOBAL_LOAD_BALANCER_NAMES),
        backend_services,
        server_group,
    )


def determine_internal_load_balancer_disabled_state(
    load_balancer: InternalLoadBalancer, server_group: ServerGroup
) -> bool:
    return _disabled_state(
        load_balancer.name,
        server_group.recorded_names(REGIONAL_LOAD_BALANCER_NAMES),
        backend_services_for(load_balancer),
        server_group,
    )


def determine_ssl_load_balancer_disabled_state(
    load_balancer: SslLoadBalancer, server_group: ServerGroup
) -> bool:
    return _disabled_state(
        load_balancer.name,
        server_group.recorded_names(GLOBAL_LOAD_BALANCER_NAMES),
        backend_services_for(load_balancer),
        server_group,
    )


def is_load_balancer_disabled(
    load_balancer: Optional[LoadBalancer], server_group: ServerGroup
) -> bool:
    """Dispatch to the disabled-state rule for the balancer's type.

    Raises:
        UnsupportedLoadBalancerError: If the balancer type has no rule
    """
    if isinstance(load_balancer, HttpLoadBalancer):
        return determine_http_load_balancer_disabled_state(load_balancer, server_group)
    if isinstance(load_balancer, InternalLoadBalancer):
        return determine_internal_load_balancer_disabled_state(load_balancer, server_group)
    if isinstance(load_balancer, SslLoadBalancer):
        return determine_ssl_load_balancer_disabled_state(load_balancer, server_group)
    raise UnsupportedLoadBalancerError(
        "Unsupported load balancer type",
        context={"type": type(load_balancer).__name__},
    )
