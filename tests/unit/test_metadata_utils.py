"""Unit tests for gcelib/utils/metadata_utils.py"""

import sys
import unittest
from pathlib import Path
from unittest.mock import patch

# Add project root to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent.parent))

from gcelib.exceptions import MalformedIdentifierError
from gcelib.utils.metadata_utils import (
    backend_service_names_from_url_map,
    build_map_from_metadata,
    derive_network_load_balancer_names_from_target_pool_urls,
    network_name_from_instance_template,
    time_from_timestamp,
)

BASE = "https://www.googleapis.com/compute/v1/projects/my-project"


class TestTimeFromTimestamp(unittest.TestCase):
    def test_utc_timestamp(self):
        self.assertEqual(time_from_timestamp("1970-01-01T00:00:01.500Z"), 1500)

    def test_offset_timestamp(self):
        self.assertEqual(time_from_timestamp("1970-01-01T00:00:00.000-01:00"), 3600 * 1000)

    def test_empty_timestamp_uses_current_time(self):
        with patch("gcelib.utils.metadata_utils.time.time", return_value=42.0):
            self.assertEqual(time_from_timestamp(""), 42000)
            self.assertEqual(time_from_timestamp(None), 42000)

    def test_unparsable_timestamp_raises(self):
        with self.assertRaises(MalformedIdentifierError):
            time_from_timestamp("yesterday")


class TestBuildMapFromMetadata(unittest.TestCase):
    def test_flattens_items(self):
        metadata = {"items": [{"key": "load-balancer-names", "value": "web-lb"}, {"key": "empty"}]}
        self.assertEqual(build_map_from_metadata(metadata), {"load-balancer-names": "web-lb", "empty": None})

    def test_missing_items(self):
        self.assertEqual(build_map_from_metadata(None), {})
        self.assertEqual(build_map_from_metadata({"fingerprint": "abc"}), {})


class TestNetworkLoadBalancerNames(unittest.TestCase):
    def test_strips_target_pool_suffix(self):
        urls = [
            f"{BASE}/regions/us-central1/targetPools/web-lb-tp-1466529960538",
            f"{BASE}/regions/us-central1/targetPools/api-tp-1",
        ]
        self.assertEqual(derive_network_load_balancer_names_from_target_pool_urls(urls), ["web-lb", "api"])

    def test_no_urls(self):
        self.assertEqual(derive_network_load_balancer_names_from_target_pool_urls(None), [])
        self.assertEqual(derive_network_load_balancer_names_from_target_pool_urls([]), [])


class TestBackendServiceNamesFromUrlMap(unittest.TestCase):
    def test_collects_local_names_in_order(self):
        url_map = {
            "defaultService": f"{BASE}/global/backendServices/default-bs",
            "pathMatchers": [
                {
                    "defaultService": f"{BASE}/global/backendServices/pm-bs",
                    "pathRules": [{"service": f"{BASE}/global/backendServices/rule-bs", "paths": ["/a"]}],
                }
            ],
        }
        self.assertEqual(backend_service_names_from_url_map(url_map), ["default-bs", "pm-bs", "rule-bs"])

    def test_url_map_without_path_matchers(self):
        url_map = {"defaultService": f"{BASE}/global/backendServices/default-bs"}
        self.assertEqual(backend_service_names_from_url_map(url_map), ["default-bs"])


class TestNetworkNameFromInstanceTemplate(unittest.TestCase):
    def test_first_interface_network(self):
        template = {
            "properties": {
                "networkInterfaces": [
                    {"network": f"{BASE}/global/networks/default"},
                    {"network": f"{BASE}/global/networks/other"},
                ]
            }
        }
        self.assertEqual(network_name_from_instance_template(template), "default")

    def test_missing_interfaces(self):
        self.assertIsNone(network_name_from_instance_template(None))
        self.assertIsNone(network_name_from_instance_template({"properties": {}}))


if __name__ == "__main__":
    unittest.main()
