"""Command-line interface for draftsync."""

from __future__ import annotations

import asyncio as asyncio
import logging as logging

from draftsync import DraftSync as DraftSync
from draftsync import load_config as load_config
from draftsync.cli.app import main as main
from draftsync.cli.commands import sync as sync_command
from draftsync.cli.parser import _package_version as _parser_package_version
from draftsync.cli.parser import build_parser as build_parser

_format_summary = sync_command.format_sync_summary
_run_sync = sync_command.run_sync

_package_version = _parser_package_version
