#!/usr/bin/env python3

# Copyright (c) 2023 Samuel J. McKelvie
#
# MIT License - See LICENSE file accompanying this package.
#

from __future__ import annotations

import sys
import argparse
import json
import asyncio
import logging

from zoneplayer_discovery.internal_types import *

from zoneplayer_discovery import (
    __version__ as pkg_version,
    Discovery,
    DiscoveryConfig,
  )

class CmdExitError(RuntimeError):
    exit_code: int

    def __init__(self, exit_code: int, msg: Optional[str]=None):
        if msg is None:
            msg = f"Command exited with return code {exit_code}"
        super().__init__(msg)
        self.exit_code = exit_code

class ArgparseExitError(CmdExitError):
    pass

class NoExitArgumentParser(argparse.ArgumentParser):
    def exit(self, status=0, message=None):
        if message:
            self._print_message(message, sys.stderr)
        raise ArgparseExitError(status, message)

class CommandHandler:
    _argv: Optional[Sequence[str]]
    _parser: argparse.ArgumentParser
    _args: argparse.Namespace
    _provide_traceback: bool = True

    def __init__(self, argv: Optional[Sequence[str]]=None):
        self._argv = argv

    async def cmd_bare(self) -> int:
        print("A command is required", file=sys.stderr)
        return 1

    def _get_config(self) -> DiscoveryConfig:
        """Builds the discovery config from --config, then applies explicit command-line overrides."""
        config_file: Optional[str] = self._args.config_file
        config = DiscoveryConfig() if config_file is None else DiscoveryConfig.from_file(config_file)
        if not self._args.network_interface is None:
            config.network_interface = self._args.network_interface
        if not self._args.multicast_address is None:
            config.multicast_address = self._args.multicast_address
        if not self._args.multicast_port is None:
            config.multicast_port = self._args.multicast_port
        if not self._args.discovery_url is None:
            config.discovery_url = self._args.discovery_url if self._args.discovery_url else None
        if not self._args.wait_time is None:
            config.response_wait_time = self._args.wait_time
        return config

    async def cmd_discover(self) -> int:
        discovery = Discovery(config=self._get_config())
        manual_ips: List[str] = self._args.manual_ips
        for ip in manual_ips:
            discovery.add_ip(ip)
        devices = await discovery.get_devices()
        results: List[JsonableDict] = [ { "ip": device.ip } for device in devices ]
        print(json.dumps(results, indent=2))
        sys.stdout.flush()
        return 0

    async def cmd_version(self) -> int:
        print(pkg_version)
        return 0

    async def arun(self) -> int:
        """Run the zoneplayer-discovery command-line tool with provided arguments

        Args:
            argv (Optional[Sequence[str]], optional):
                A list of commandline arguments (NOT including the program as argv[0]!),
                or None to use sys.argv[1:]. Defaults to None.

        Returns:
            int: The exit code that would be returned if this were run as a standalone command.
        """
        parser = NoExitArgumentParser(prog="zoneplayer-discovery", description="Find ZonePlayer media devices on the local network.")


        # ======================= Main command

        self._parser = parser
        parser.add_argument('--traceback', "--tb", action='store_true', default=False,
                            help='Display detailed exception information')
        parser.add_argument('--log-level', dest='log_level', default='warning',
                            choices=['debug', 'info', 'warning', 'error', 'critical'],
                            help='''The logging level to use. Default: warning''')
        parser.set_defaults(func=self.cmd_bare)

        subparsers = parser.add_subparsers(
                            title='Commands',
                            description='Valid commands',
                            help='Additional help available with "<command-name> -h"')


        # ======================= discover

        parser_discover = subparsers.add_parser('discover', description="Discover ZonePlayer devices and print their IP addresses as JSON")
        parser_discover.add_argument('-c', '--config', dest='config_file', default=None,
                            help='''A JSON file with discovery configuration. Command-line options override it.''')
        parser_discover.add_argument('-i', '--interface', dest='network_interface', default=None,
                            help='''The network interface (IPv4 address, name, or index) to send multicast on. Default: chosen by the OS''')
        parser_discover.add_argument('-m', '--multicast-address', dest='multicast_address', default=None,
                            help='''The multicast address to send the search to. Default: 239.255.255.250''')
        parser_discover.add_argument('-p', '--port', dest='multicast_port', type=int, default=None,
                            help='''The UDP port to send the search to. Default: 1900''')
        parser_discover.add_argument('-u', '--discovery-url', dest='discovery_url', default=None,
                            help='''The URL of a discovery proxy to use instead of multicast. Default: none''')
        parser_discover.add_argument('--wait-time', dest='wait_time', type=float, default=None,
                            help='''The amount of time to wait for replies, in seconds. Default: 1.0''')
        parser_discover.add_argument('-a', '--add-ip', dest='manual_ips', action='append', default=[],
                            help='''The IP address of a device to include without discovering it. May be repeated.''')
        parser_discover.set_defaults(func=self.cmd_discover)

        # ======================= version

        parser_version = subparsers.add_parser('version',
                                description='''Display version information.''')
        parser_version.set_defaults(func=self.cmd_version)

        # =========================================================

        try:
            args = parser.parse_args(self._argv)
        except ArgparseExitError as ex:
            return ex.exit_code
        traceback: bool = args.traceback
        self._provide_traceback = traceback

        try:
            logging.basicConfig(
                level=logging.getLevelName(args.log_level.upper()),
            )
            self._args = args
            func: Callable[[], Awaitable[int]] = args.func
            logging.debug(f"Running command {func.__name__}, tb = {traceback}")
            rc = await func()
            logging.debug(f"Command {func.__name__} returned {rc}")
        except Exception as ex:
            if isinstance(ex, CmdExitError):
                rc = ex.exit_code
            else:
                rc = 1
            if rc != 0:
                if traceback:
                    raise
            print(f"zoneplayer-discovery: error: {ex}", file=sys.stderr)
        except BaseException as ex:
            print(f"zoneplayer-discovery: Unhandled exception: {ex}", file=sys.stderr)
            raise

        return rc

    def run(self) -> int:
        loop = asyncio.new_event_loop()
        try:
            asyncio.set_event_loop(loop)
            rc = loop.run_until_complete(self.arun())
        finally:
            loop.close()
        return rc

def run(argv: Optional[Sequence[str]]=None) -> int:
    try:
        rc = CommandHandler(argv).run()
    except CmdExitError as ex:
        rc = ex.exit_code
    return rc

async def arun(argv: Optional[Sequence[str]]=None) -> int:
    try:
        rc = await CommandHandler(argv).arun()
    except CmdExitError as ex:
        rc = ex.exit_code
    return rc

def main() -> None:
    sys.exit(run())

# allow running with "python3 -m", or as a standalone script
if __name__ == "__main__":
    main()
