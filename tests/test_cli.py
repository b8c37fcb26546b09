#
# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

import contextlib
import io
import json
import os
import tempfile
import unittest
from unittest import mock

import requests

from zoneplayer_discovery import __version__
from zoneplayer_discovery import transport as transport_module
from zoneplayer_discovery.__main__ import arun

from replies import player

class FakeResponse:
    def __init__(self, text="", status_code=200):
        self.text = text
        self.status_code = status_code

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")

    def close(self):
        pass

class TestCommandLine(unittest.IsolatedAsyncioTestCase):
    async def run_cli(self, *argv):
        stdout = io.StringIO()
        stderr = io.StringIO()
        with contextlib.redirect_stdout(stdout), contextlib.redirect_stderr(stderr):
            rc = await arun(list(argv))
        return rc, stdout.getvalue(), stderr.getvalue()

    async def test_version(self):
        rc, out, _ = await self.run_cli("version")
        self.assertEqual(rc, 0)
        self.assertEqual(out.strip(), __version__)

    async def test_no_command(self):
        rc, _, err = await self.run_cli()
        self.assertEqual(rc, 1)
        self.assertIn("A command is required", err)

    async def test_discover_via_proxy(self):
        body = player(1, "10.0.0.1") + player(2, "10.0.0.2")
        with mock.patch.object(transport_module.requests, "get", return_value=FakeResponse(body)) as get:
            rc, out, _ = await self.run_cli("discover", "-u", "http://proxy.local/discover", "-a", "10.0.0.9")
        self.assertEqual(rc, 0)
        get.assert_called_once()
        self.assertEqual(json.loads(out), [ { "ip": "10.0.0.9" }, { "ip": "10.0.0.1" }, { "ip": "10.0.0.2" } ])

    async def test_discover_with_config_file(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            pathname = os.path.join(tmpdir, "discovery.json")
            with open(pathname, "w", encoding="utf-8") as f:
                json.dump({ "discovery_url": "http://proxy.local/from-config", "proxy_timeout": 4 }, f)
            with mock.patch.object(transport_module.requests, "get", return_value=FakeResponse(player(1, "10.0.0.1"))) as get:
                rc, out, _ = await self.run_cli("discover", "--config", pathname)
        self.assertEqual(rc, 0)
        get.assert_called_once_with("http://proxy.local/from-config", timeout=4.0)
        self.assertEqual(json.loads(out), [ { "ip": "10.0.0.1" } ])

    async def test_discover_proxy_failure(self):
        with mock.patch.object(transport_module.requests, "get", side_effect=requests.ConnectionError("refused")):
            rc, out, err = await self.run_cli("discover", "-u", "http://proxy.local/discover")
        self.assertEqual(rc, 1)
        self.assertEqual(out, "")
        self.assertIn("zoneplayer-discovery: error: proxy unreachable: http://proxy.local/discover", err)

if __name__ == '__main__':
    unittest.main()
