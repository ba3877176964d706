"""Resource URL parsing utilities for gcelib.

The compute API identifies every resource with a self link of the form:

    https://www.googleapis.com/compute/v1/projects/$project/zones/$zone/instanceGroups/$name
    https://www.googleapis.com/compute/v1/projects/$project/regions/$region/instanceGroups/$name
    https://www.googleapis.com/compute/v1/projects/$project/global/targetHttpProxies/$name

These helpers derive facts from those links by position rather than by
general URL parsing. Anything that does not have the expected shape raises
MalformedIdentifierError instead of returning a guess.
"""

from typing import List, Optional

from gcelib.exceptions import MalformedIdentifierError
from gcelib.model import ServerGroupType, TargetProxyType

REGIONS = "regions"
ZONES = "zones"

TARGET_PROXY_COLLECTIONS = {
    "targetHttpProxies": TargetProxyType.HTTP,
    "targetHttpsProxies": TargetProxyType.HTTPS,
    "targetSslProxies": TargetProxyType.SSL,
}


def _malformed(message: str, url: Optional[str], expected: str):
    return MalformedIdentifierError(message, context={"url": url, "expected": expected})


def _split_segments(url: str) -> List[str]:
    # Trailing empty segments are dropped so "a/b/" indexes like "a/b".
    parts = url.split("/")
    while parts and not parts[-1]:
        parts.pop()
    return parts


def _placement_segments(url: str, kind: str) -> List[str]:
    parts = _split_segments(url)
    if len(parts) < 4:
        raise _malformed(
            f"{kind} url {url} malformed.", url, "at least 4 '/'-delimited segments"
        )
    return parts


def _collection_name(url: Optional[str], kind: str) -> str:
    """Return the collection segment that precedes the resource name."""
    if not url:
        raise _malformed(f"{kind} url {url} malformed.", url, "non-empty url")
    last_index = url.rfind("/")
    if last_index == -1:
        raise _malformed(f"{kind} url {url} malformed.", url, "at least one '/'")
    collection = local_name(url[:last_index])
    if not collection:
        raise _malformed(f"{kind} url {url} malformed.", url, "non-empty collection segment")
    return collection


def local_name(full_url: Optional[str]) -> Optional[str]:
    """Return the last path segment of a resource URL.

    Args:
        full_url: Resource self link or bare name

    Returns:
        The segment after the final '/', the input itself when it has no '/',
        or the input unchanged when it is None or empty
    """
    if not full_url:
        return full_url
    return full_url[full_url.rfind("/") + 1 :]


def target_proxy_type(full_url: Optional[str]) -> TargetProxyType:
    """Classify a target proxy URL as HTTP, HTTPS or SSL.

    Raises:
        MalformedIdentifierError: If the url is empty, has no '/', or its
            collection is not one of the known proxy collections
    """
    collection = _collection_name(full_url, "Target proxy")
    try:
        return TARGET_PROXY_COLLECTIONS[collection]
    except KeyError:
        raise _malformed(
            f"Target proxy url {full_url} has unknown type.",
            full_url,
            f"one of {sorted(TARGET_PROXY_COLLECTIONS)}",
        ) from None


def zone_from_instance_url(full_url: Optional[str]) -> str:
    """Return the zone embedded in an instance URL.

    Raises:
        MalformedIdentifierError: If the url is empty or 'zones/' or 'instances/'
            is absent
    """
    zones = "zones/"
    start = full_url.find(zones) if full_url else -1
    end = full_url.find("instances/", start) if start != -1 else -1
    if start == -1 or end == -1:
        raise _malformed(
            f"Instance url {full_url} malformed.", full_url, "'zones/<zone>/instances/'"
        )
    return full_url[start + len(zones) : end - 1]


def health_check_type(full_url: Optional[str]) -> str:
    """Return the health check collection, e.g. 'httpHealthChecks'.

    The set of health check collections is open, so no validation beyond
    shape is applied.
    """
    return _collection_name(full_url, "Health check")


def region_from_group_url(full_url: Optional[str]) -> Optional[str]:
    """Parse the region from a full server group URL.

    Zonal groups map to the region that contains their zone by dropping
    the last hyphen-delimited token ('us-central1-f' -> 'us-central1').

    Args:
        full_url: Server group self link

    Returns:
        Region name, or the input unchanged when it is None or empty

    Raises:
        MalformedIdentifierError: If the url does not have the
            '.../(regions|zones)/<location>/<collection>/<name>' shape
    """
    if not full_url:
        return full_url

    parts = _placement_segments(full_url, "Server group")
    regions_or_zones = parts[-4]
    if regions_or_zones == REGIONS:
        return parts[-3]
    if regions_or_zones == ZONES:
        zone = parts[-3]
        last_dash = zone.rfind("-")
        if last_dash == -1:
            raise _malformed(
                f"Server group url {full_url} malformed.",
                full_url,
                "zone of the form <region>-<suffix>",
            )
        return zone[:last_dash]
    raise _malformed(
        f"Server group url {full_url} malformed.", full_url, "'regions' or 'zones' segment"
    )


def zone_from_group_url(full_url: Optional[str]) -> Optional[str]:
    """Parse the zone from a zonal server group URL.

    Raises:
        MalformedIdentifierError: If the url is regional or malformed
    """
    if not full_url:
        return full_url

    parts = _placement_segments(full_url, "Server group")
    regions_or_zones = parts[-4]
    if regions_or_zones == ZONES:
        return parts[-3]
    if regions_or_zones == REGIONS:
        raise _malformed(
            f"Can't parse a zone from regional group url {full_url}.",
            full_url,
            "'zones' segment",
        )
    raise _malformed(
        f"Server group url {full_url} malformed.", full_url, "'regions' or 'zones' segment"
    )


def server_group_placement_type(full_url: Optional[str]) -> ServerGroupType:
    """Determine if a server group is regional or zonal from its URL."""
    if not full_url:
        raise _malformed(f"Server group url {full_url} malformed.", full_url, "non-empty url")

    regions_or_zones = _placement_segments(full_url, "Server group")[-4]
    if regions_or_zones == REGIONS:
        return ServerGroupType.REGIONAL
    if regions_or_zones == ZONES:
        return ServerGroupType.ZONAL
    raise _malformed(
        f"Server group url {full_url} malformed.", full_url, "'regions' or 'zones' segment"
    )


def port_range_collapse(port_range: Optional[str]) -> Optional[str]:
    """Return a single port if a port range refers to one port (e.g. 80-80).

    Args:
        port_range: Port or port range, e.g. '80', '80-80', '8080-8090'

    Returns:
        '80' for '80-80'; any other input unchanged

    Raises:
        MalformedIdentifierError: If the range contains more than one '-'
    """
    if not port_range or "-" not in port_range:
        return port_range

    tokens = port_range.split("-")
    if len(tokens) != 2:
        raise _malformed(
            f"Port range {port_range} formatted improperly.", port_range, "<port>-<port>"
        )
    return port_range if tokens[0] != tokens[1] else tokens[0]
