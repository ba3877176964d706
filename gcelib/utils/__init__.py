"""Utility modules for gcelib.

This package contains resource URL parsing and compute API metadata helpers.
"""

from .url_utils import (
    local_name,
    target_proxy_type,
    zone_from_instance_url,
    health_check_type,
    region_from_group_url,
    zone_from_group_url,
    server_group_placement_type,
    port_range_collapse,
)
from .metadata_utils import (
    time_from_timestamp,
    build_map_from_metadata,
    derive_network_load_balancer_names_from_target_pool_urls,
    backend_service_names_from_url_map,
    network_name_from_instance_template,
)

__all__ = [
    # URL utilities
    "local_name",
    "target_proxy_type",
    "zone_from_instance_url",
    "health_check_type",
    "region_from_group_url",
    "zone_from_group_url",
    "server_group_placement_type",
    "port_range_collapse",
    # Metadata utilities
    "time_from_timestamp",
    "build_map_from_metadata",
    "derive_network_load_balancer_names_from_target_pool_urls",
    "backend_service_names_from_url_map",
    "network_name_from_instance_template",
]
