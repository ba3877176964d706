"""Helpers for compute API metadata, timestamps and related resource links."""

import time
from datetime import datetime
from typing import Any, Dict, List, Optional

from gcelib.exceptions import MalformedIdentifierError
from gcelib.utils.url_utils import local_name

TARGET_POOL_NAME_PREFIX = "tp"
TIMESTAMP_FORMAT = "%Y-%m-%dT%H:%M:%S.%f%z"


def time_from_timestamp(timestamp: Optional[str]) -> int:
    """Convert an API creation timestamp to epoch milliseconds.

    Args:
        timestamp: e.g. '2016-05-24T15:10:24.183-07:00' or '...183Z'

    Returns:
        Milliseconds since the epoch; the current time when timestamp is empty

    Raises:
        MalformedIdentifierError: If the timestamp cannot be parsed
    """
    if not timestamp:
        return int(time.time() * 1000)
    try:
        parsed = datetime.strptime(timestamp, TIMESTAMP_FORMAT)
    except ValueError as e:
        raise MalformedIdentifierError(
            f"Timestamp {timestamp} malformed.",
            context={"timestamp": timestamp, "expected": TIMESTAMP_FORMAT},
        ) from e
    return int(parsed.timestamp() * 1000)


def build_map_from_metadata(metadata: Optional[Dict[str, Any]]) -> Dict[str, Any]:
    """Flatten API metadata {'items': [{'key': k, 'value': v}]} into {k: v}."""
    if not metadata:
        return {}
    return {item["key"]: item.get("value") for item in metadata.get("items") or []}


def derive_network_load_balancer_names_from_target_pool_urls(
    target_pool_urls: Optional[List[str]],
) -> List[str]:
    """Recover network load balancer names from their target pool links.

    Target pools are named '<load balancer>-tp-<suffix>'.
    """
    if not target_pool_urls:
        return []
    separator = f"-{TARGET_POOL_NAME_PREFIX}-"
    return [local_name(url).split(separator)[0] for url in target_pool_urls]


def backend_service_names_from_url_map(url_map: Dict[str, Any]) -> List[str]:
    """List the backend services a raw API url map points at, by local name.

    Order: default service, then each path matcher's default service
    followed by its path rule services.
    """
    backend_services = [local_name(url_map.get("defaultService"))]
    for path_matcher in url_map.get("pathMatchers") or []:
        backend_services.append(local_name(path_matcher.get("defaultService")))
        for path_rule in path_matcher.get("pathRules") or []:
            backend_services.append(local_name(path_rule.get("service")))
    return backend_services


def network_name_from_instance_template(instance_template: Optional[Dict[str, Any]]) -> Optional[str]:
    properties = (instance_template or {}).get("properties") or {}
    interfaces = properties.get("networkInterfaces") or []
    if not interfaces:
        return None
    return local_name(interfaces[0].get("network"))
