#!/usr/bin/env python
# -*- coding: utf-8 -*-
"""
cli.py — Command-line interface and configuration parser for plocarkit
======================================================================
Defines the argument parser and the optional `plocar.inp` control file.
Values from the control file replace the built-in defaults; explicit
command-line flags win over both.

Key functions
--------------
- parse_arguments(argv)           : Central parser returning a validated args object.
- _extract_input_file_from_argv() : Detects the control file named on the CLI.
- read_input_file(path, defaults) : Applies the `[PLOCAR]` section to the defaults.

Typical usage
--------------
    from plocarkit.cli import parse_arguments
    args = parse_arguments(sys.argv[1:])

License:
    MIT License (see LICENSE file)

Version:
    1.0.0
"""


from __future__ import annotations

import os
import argparse
import configparser
import logging

from .constants import DEFAULT_PLOCAR, DEFAULT_MAX_BYTES

logger = logging.getLogger(__name__)

DEFAULT_PARAMS = {
    'plocar': DEFAULT_PLOCAR,
    'input_file': 'plocar.inp',
    'output_prefix': 'plocar',
    'output_dir': None,
    'verbose': False,
    'save_npz': True,
    'save_csv': True,
    'plot': False,
    'max_gib': DEFAULT_MAX_BYTES / 1024**3,
}


def _extract_input_file_from_argv(argv, default_name="plocar.inp"):
    """
    Return the input file path given on the command line,
    supporting both '--input_file foo' and '--input_file=foo'.
    """
    for i, tok in enumerate(argv or []):
        if tok.startswith("--input_file="):
            return tok.split("=", 1)[1]
        if tok == "--input_file" and i + 1 < len(argv):
            return argv[i + 1]
    return default_name


def read_input_file(input_file: str, defaults: dict) -> dict:
    """
    Return a copy of `defaults` updated from the `[PLOCAR]` section.
    Blank or malformed values keep the default.
    """
    params = dict(defaults)
    cfg = configparser.ConfigParser(
        inline_comment_prefixes=('#', ';'),
        allow_no_value=True,
    )
    cfg.read(input_file, encoding="utf-8")

    if 'PLOCAR' not in cfg:
        raise ValueError(f"The input file {input_file} must contain a [PLOCAR] section.")
    section = cfg['PLOCAR']

    def _get_clean(key):
        val = section.get(key) if key in section else None
        if val is None:
            return None
        val = val.strip()
        return val if val != "" else None

    for key in ('plocar', 'output_prefix', 'output_dir'):
        val = _get_clean(key)
        if val is not None:
            params[key] = val

    for key in ('verbose', 'save_npz', 'save_csv', 'plot'):
        if _get_clean(key) is None:
            continue
        try:
            params[key] = section.getboolean(key)
        except ValueError:
            logger.warning(f"[{input_file}] ignoring non-boolean value for '{key}': {section.get(key)!r}")

    mg = _get_clean('max_gib')
    if mg is not None:
        try:
            params['max_gib'] = float(mg)
        except ValueError:
            logger.warning(f"[{input_file}] ignoring non-numeric max_gib: {mg!r}")

    return params


def build_parser(defaults: dict) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="plocarkit",
        description="Decode a binary PLOCAR file (projected local orbitals) into numpy arrays.",
    )
    parser.add_argument('plocar_pos', nargs='?', metavar='PLOCAR', default=None,
                        help=f"PLOCAR file to read (default: {defaults['plocar']})")
    parser.add_argument('--plocar', type=str, default=defaults['plocar'], help='Path to PLOCAR')
    parser.add_argument('--input_file', type=str, default=defaults['input_file'],
                        help='Control file with a [PLOCAR] section')
    parser.add_argument('--output_prefix', type=str, default=defaults['output_prefix'], help='Output prefix')
    parser.add_argument('--output_dir', type=str, default=defaults['output_dir'],
                        help='Collect output files into this folder')
    parser.add_argument('-v', '--verbose', action='store_true', default=defaults['verbose'],
                        help='Echo precision and header fields while reading')
    parser.add_argument('-q', '--quiet', action='store_true', help='Hide the tqdm progress bar')
    parser.add_argument('--no_npz', dest='save_npz', action='store_false', default=defaults['save_npz'],
                        help='Do not write <prefix>.npz')
    parser.add_argument('--no_csv', dest='save_csv', action='store_false', default=defaults['save_csv'],
                        help='Do not write <prefix>_occupations.csv')
    parser.add_argument('--plot', action='store_true', default=defaults['plot'],
                        help='Write <prefix>_occupations.png')
    parser.add_argument('--max_gib', type=float, default=defaults['max_gib'],
                        help='Allocation ceiling (GiB) for the decoded arrays')
    parser.add_argument('--no_log_file', dest='log_file', action='store_false',
                        help='Log to the console only (no run_*.log)')
    parser.add_argument('--template', '-T', action='store_true',
                        help='Generate a template plocar.inp in the current folder and exit.')
    return parser


def parse_arguments(argv: list[str] | None = None):
    argv = list(argv or [])
    input_file = _extract_input_file_from_argv(argv, DEFAULT_PARAMS['input_file'])

    defaults = dict(DEFAULT_PARAMS, input_file=input_file)
    if os.path.exists(input_file):
        defaults = read_input_file(input_file, defaults)

    args = build_parser(defaults).parse_args(argv)

    # positional PLOCAR wins over --plocar / control file
    if args.plocar_pos is not None:
        args.plocar = args.plocar_pos
    del args.plocar_pos

    if args.max_gib <= 0:
        logger.warning(f"max_gib={args.max_gib} is not positive; using {DEFAULT_PARAMS['max_gib']:.1f}")
        args.max_gib = DEFAULT_PARAMS['max_gib']

    return args
