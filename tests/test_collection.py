#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

import logging
import unittest

from zoneplayer_discovery import Collection, Device
from zoneplayer_discovery.pkg_logging import logger as pkg_logger

class SpeakerDevice(Device):
    pass

class TestCollection(unittest.TestCase):
    def test_add_ip_and_device(self):
        collection = Collection()
        collection.add_ip("10.0.0.1").add_device(Device("10.0.0.2"))
        self.assertEqual(collection.get_devices(), [ Device("10.0.0.1"), Device("10.0.0.2") ])
        self.assertEqual(len(collection), 2)
        self.assertIn("10.0.0.2", collection)
        self.assertEqual([ d.ip for d in collection ], ["10.0.0.1", "10.0.0.2"])

    def test_readding_ip_keeps_position(self):
        collection = Collection()
        collection.add_ip("10.0.0.1").add_ip("10.0.0.2")
        replacement = SpeakerDevice("10.0.0.1")
        collection.add_device(replacement)
        devices = collection.get_devices()
        self.assertEqual([ d.ip for d in devices ], ["10.0.0.1", "10.0.0.2"])
        self.assertIs(devices[0], replacement)

    def test_clear(self):
        collection = Collection().add_ip("10.0.0.1")
        collection.clear()
        self.assertEqual(collection.get_devices(), [])

    def test_device_factory(self):
        collection = Collection(device_factory=SpeakerDevice)
        collection.add_ip("10.0.0.5")
        self.assertIsInstance(collection.get_devices()[0], SpeakerDevice)

    def test_logger(self):
        collection = Collection()
        self.assertIs(collection.get_logger(), pkg_logger)
        logger = logging.getLogger("test_collection")
        collection.set_logger(logger)
        self.assertIs(collection.get_logger(), logger)

if __name__ == '__main__':
    unittest.main()
