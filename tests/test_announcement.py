#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

import unittest

from zoneplayer_discovery import AnnouncementHeaders, DiscoveredDevice

class TestAnnouncementHeaders(unittest.TestCase):
    def test_parse(self):
        headers = AnnouncementHeaders.parse(
            "HTTP/1.1 200 OK\r\n"
            "LOCATION:   http://10.0.0.4:1400/xml/device_description.xml  \r\n"
            "ST: urn:schemas-upnp-org:device:ZonePlayer:1\r\n"
            "USN: uuid:RINCON_B::urn:schemas-upnp-org:device:ZonePlayer:1\r\n"
            "X-RINCON-HOUSEHOLD: Sonos_abc\r\n"
          )
        self.assertEqual(headers.location, "http://10.0.0.4:1400/xml/device_description.xml")
        self.assertEqual(headers.st, "urn:schemas-upnp-org:device:ZonePlayer:1")
        self.assertEqual(headers.usn, "uuid:RINCON_B::urn:schemas-upnp-org:device:ZonePlayer:1")
        self.assertEqual(headers["X-Rincon-Household"], "Sonos_abc")
        self.assertEqual(
            sorted(headers.to_dict().keys()),
            ["location", "st", "usn", "x-rincon-household"]
          )

    def test_value_split_on_first_colon_only(self):
        headers = AnnouncementHeaders.parse("USN: uuid:RINCON_C::urn:x:1")
        self.assertEqual(headers.usn, "uuid:RINCON_C::urn:x:1")

    def test_lines_without_colon_or_leading_colon_are_dropped(self):
        headers = AnnouncementHeaders.parse("NOTIFY * HTTP/1.1\r\n: orphan\r\ngarbage\r\nST: a")
        self.assertEqual(headers.to_dict(), { "st": "a" })

    def test_later_duplicate_wins(self):
        headers = AnnouncementHeaders.parse("ST: first\r\nst: second")
        self.assertEqual(headers.st, "second")
        self.assertEqual(len(headers), 1)

    def test_missing_keys_are_none(self):
        headers = AnnouncementHeaders.parse("HTTP/1.1 200 OK")
        self.assertIsNone(headers.st)
        self.assertIsNone(headers.usn)
        self.assertIsNone(headers.location)

class TestDiscoveredDevice(unittest.TestCase):
    def test_from_headers(self):
        headers = AnnouncementHeaders.parse("LOCATION: http://192.168.1.50:1400/x.xml\r\nUSN: uuid:A")
        self.assertEqual(DiscoveredDevice.from_headers(headers), DiscoveredDevice("192.168.1.50", usn="uuid:A"))

    def test_from_headers_without_location(self):
        headers = AnnouncementHeaders.parse("USN: uuid:A")
        self.assertEqual(DiscoveredDevice.from_headers(headers).host, "")

if __name__ == '__main__':
    unittest.main()
