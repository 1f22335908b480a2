"""Generate the plugin's entry.tp manifest.

A version number is required.  By default it is read from ``version.json``
in the current directory (written by the build system); ``-v`` overrides it.

Usage:
    dse-gen-entry -v 1.2.0.1                # write dist/Release/<os>/entry.tp
    dse-gen-entry -v 1.2.0.1 -o -           # print to stdout
    dse-gen-entry -d                        # dev mode, dist/Debug/entry.tp

Dev mode leaves out the host start commands so the plugin binary can be run
separately, and exits with status 1 even on success so the result is never
picked up as a release artifact.
"""

import argparse
import os
import sys

from dse.entry import build_entry
from dse.framework.build_info import (
    DEFAULT_BUILD_INFO_FILE,
    load_build_info_file,
    resolve_build_info,
)
from dse.framework.entry_validate import validate_manifest
from dse.framework.errors import DSEError
from dse.framework.logging import setup_logging
from dse.framework.plugin_config import load_plugin_config

ENTRY_FILENAME = "entry.tp"


def default_output_dir(dev_mode, platform_os=""):
    """``dist/Debug`` for dev builds, ``dist/Release/<os>`` otherwise."""
    if dev_mode:
        return os.path.join("dist", "Debug")
    return os.path.join("dist", "Release", platform_os or "")


def write_entry(document, output_dir):
    """Write ``entry.tp`` into ``output_dir`` and return its path."""
    os.makedirs(output_dir, exist_ok=True)
    path = os.path.join(output_dir, ENTRY_FILENAME)
    with open(path, "w", encoding="utf-8") as f:
        f.write(document.to_json())
    return path


def build_parser():
    parser = argparse.ArgumentParser(
        prog="dse-gen-entry",
        description="Generate the entry.tp plugin manifest")
    parser.add_argument(
        "-v", "--version", dest="version", default=None,
        help="Plugin version, dotted (overrides the build-info file)")
    parser.add_argument(
        "-o", "--output", default="",
        help="Output directory, or - to print to stdout")
    parser.add_argument(
        "-d", "--dev", action="store_true",
        help="Dev mode: no start commands, debug output dir, exit status 1")
    parser.add_argument(
        "-b", "--build-info", default=DEFAULT_BUILD_INFO_FILE,
        help="Build-info JSON file (default: %(default)s)")
    parser.add_argument(
        "-c", "--config", default=None,
        help="plugin.yaml to use instead of the bundled one")
    parser.add_argument(
        "--strict-version", action="store_true",
        help="Reject version parts that are not plain numbers")
    parser.add_argument(
        "--check", action="store_true",
        help="Check placeholders and ids before writing")
    parser.add_argument(
        "--log-level", default="WARNING",
        help="Logging level (default: %(default)s)")
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    try:
        config = load_plugin_config(args.config)
        raw = load_build_info_file(args.build_info)
        info = resolve_build_info(raw, version=args.version,
                                  identity=config.identity,
                                  strict=args.strict_version)
        document = build_entry(info, config, dev_mode=args.dev)
    except DSEError as e:
        print("ERROR: %s" % e, file=sys.stderr)
        return 1

    if args.check:
        problems = validate_manifest(document)
        if problems:
            for problem in problems:
                print("ERROR: %s" % problem, file=sys.stderr)
            return 1

    if args.output == "-":
        print(document.to_json())
        return 0

    output_dir = args.output or default_output_dir(args.dev, info.platform_os)
    try:
        path = write_entry(document, output_dir)
    except OSError as e:
        print("ERROR: Cannot write %s: %s" % (output_dir, e), file=sys.stderr)
        return 1
    print("Wrote version %x output to file: %s" % (info.version_num, path))

    if args.dev:
        print("!!!=== Generated DEV MODE entry.tp file ===!!!", file=sys.stderr)
        return 1
    return 0


def cli():
    sys.exit(main())


if __name__ == "__main__":
    cli()
