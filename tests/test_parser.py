#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

import logging
import unittest

from zoneplayer_discovery import extract_devices, DiscoveredDevice, ZONE_PLAYER_SEARCH_TARGET
from zoneplayer_discovery.parser import iter_announcements

from replies import reply, player, MEDIA_RENDERER

class TestExtractDevices(unittest.TestCase):
    def test_matching_and_non_matching_block(self):
        raw = reply() + MEDIA_RENDERER
        devices = extract_devices(raw)
        self.assertEqual([ d.host for d in devices ], ["192.168.1.50"])
        self.assertEqual(devices[0].usn, "uuid:RINCON_000E58000001::urn:schemas-upnp-org:device:ZonePlayer:1")

    def test_hosts_in_announcement_order(self):
        ips = ["10.0.0.7", "10.0.0.3", "10.0.0.5"]
        raw = "".join(player(i, ip) for i, ip in enumerate(ips))
        self.assertEqual([ d.host for d in extract_devices(raw) ], ips)

    def test_duplicate_usn_keeps_first(self):
        raw = player(1, "10.0.0.1") + player(2, "10.0.0.2") + player(1, "10.0.0.99")
        self.assertEqual([ d.host for d in extract_devices(raw) ], ["10.0.0.1", "10.0.0.2"])

    def test_search_target_elsewhere_in_block_is_rejected(self):
        raw = reply(st="urn:schemas-upnp-org:device:MediaRenderer:1")
        self.assertIn(ZONE_PLAYER_SEARCH_TARGET, raw)
        self.assertEqual(extract_devices(raw), [])

    def test_st_must_match_exactly(self):
        raw = reply(st=ZONE_PLAYER_SEARCH_TARGET + "0")
        self.assertEqual(extract_devices(raw), [])

    def test_missing_location_yields_empty_host(self):
        raw = reply(location=None) + player(2, "10.0.0.2")
        self.assertEqual([ d.host for d in extract_devices(raw) ], ["", "10.0.0.2"])

    def test_unparseable_location_yields_empty_host(self):
        raw = reply(location="http://[not-an-ipv6/xml") + player(2, "10.0.0.2")
        self.assertEqual([ d.host for d in extract_devices(raw) ], ["", "10.0.0.2"])

    def test_location_without_host_yields_empty_host(self):
        raw = reply(location="/xml/device_description.xml")
        self.assertEqual(extract_devices(raw), [ DiscoveredDevice("", usn="uuid:RINCON_000E58000001::urn:schemas-upnp-org:device:ZonePlayer:1") ])

    def test_missing_st_or_usn_does_not_match(self):
        raw = (
            reply(st=None, usn="uuid:x::" + ZONE_PLAYER_SEARCH_TARGET) +
            reply(usn=None) +
            player(3, "10.0.0.3")
          )
        self.assertEqual([ d.host for d in extract_devices(raw) ], ["10.0.0.3"])

    def test_header_names_are_case_insensitive(self):
        raw = (
            "HTTP/1.1 200 OK\r\n"
            "location: http://10.1.1.1:1400/xml/device_description.xml\r\n"
            "St: urn:schemas-upnp-org:device:ZonePlayer:1\r\n"
            "uSN: uuid:RINCON_A\r\n"
            "\r\n"
          )
        self.assertEqual([ d.host for d in extract_devices(raw) ], ["10.1.1.1"])

    def test_empty_input(self):
        self.assertEqual(extract_devices(""), [])
        self.assertEqual(extract_devices("\r\n\r\n\r\n\r\n"), [])

    def test_ipv6_location(self):
        raw = reply(location="http://[fe80::1]:1400/xml/device_description.xml")
        self.assertEqual([ d.host for d in extract_devices(raw) ], ["fe80::1"])

    def test_found_devices_are_logged(self):
        logger = logging.getLogger("test_parser.found")
        raw = player(1, "10.0.0.1") + player(2, "10.0.0.2")
        with self.assertLogs(logger, level="INFO") as cm:
            extract_devices(raw, logger=logger)
        self.assertEqual(len(cm.records), 2)
        self.assertIn("uuid:RINCON_000E58000001", cm.output[0])
        self.assertEqual(cm.records[1].usn, "uuid:RINCON_000E58000002::urn:schemas-upnp-org:device:ZonePlayer:1")

    def test_custom_search_target(self):
        raw = reply() + MEDIA_RENDERER
        devices = extract_devices(raw, search_target="urn:schemas-upnp-org:device:MediaRenderer:1")
        self.assertEqual([ d.host for d in devices ], ["192.168.1.99"])

class TestIterAnnouncements(unittest.TestCase):
    def test_substring_prefilter(self):
        raw = reply() + "HTTP/1.1 200 OK\r\nST: upnp:rootdevice\r\nUSN: uuid:other\r\n\r\n"
        blocks = list(iter_announcements(raw))
        self.assertEqual(len(blocks), 1)
        self.assertEqual(blocks[0].st, ZONE_PLAYER_SEARCH_TARGET)

if __name__ == '__main__':
    unittest.main()
