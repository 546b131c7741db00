#!/usr/bin/env python3
"""
Vim Plugin Metadata Collector

Parses a vim plugin directory (or a single vimscript file) and writes the
functions, commands, variables and flags it declares, with their doc
comments, into a single JSON file.
"""

import argparse
import json
import logging
import os
import sys
from collections import Counter
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from vim_plugin_metadata import (
    Error,
    ScanSettings,
    VimModule,
    parse_module_from_file,
    parse_plugin_directory,
)

logger = logging.getLogger("collect_plugin_metadata")


def count_nodes(modules: List[VimModule]) -> Counter:
    """Count nodes per kind across modules."""
    counts: Counter = Counter()
    for module in modules:
        for node in module.nodes:
            counts[node.kind] += 1
    return counts


def export_json(modules: List[VimModule], output_path: Path, source: Path):
    """Write parsed modules to JSON."""
    output: Dict[str, Any] = {
        'generated_at': datetime.now().isoformat(),
        'source': str(source),
        'total_modules': len(modules),
        'node_counts': dict(count_nodes(modules)),
        'modules': [module.model_dump(mode='json') for module in modules],
    }
    with open(output_path, 'w', encoding='utf-8') as f:
        json.dump(output, f, indent=2, ensure_ascii=False)

    print(f"\nExported {len(modules)} modules")
    print(f"Output file: {output_path}")


def print_summary(modules: List[VimModule]):
    """Print a summary of parsed modules."""
    counts = count_nodes(modules)
    print(f"\n{'='*60}")
    print(f"Total modules: {len(modules)}")
    for kind in ('function', 'command', 'variable', 'flag', 'standalone_doc'):
        print(f"  {kind}: {counts.get(kind, 0)}")
    print(f"{'='*60}")


def cmd_plugin(args) -> int:
    """Handle the plugin subcommand."""
    print("Vim Plugin Metadata Collector")
    print(f"{'='*60}")
    print(f"Plugin root: {args.root}")
    print(f"Output file: {args.output}")
    print(f"{'='*60}")

    skipped = []
    plugin = parse_plugin_directory(args.root, settings=ScanSettings.from_env(), onerror=skipped.append)
    for error in skipped:
        print(f"  Skipped {error.path}: {error.reason}")
    print_summary(plugin.content)
    export_json(plugin.content, args.output, args.root)
    return 0


def cmd_module(args) -> int:
    """Handle the module subcommand."""
    module = parse_module_from_file(args.file)
    print_summary([module])
    export_json([module], args.output, args.file)
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description='Extract metadata from vim plugins',
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        '--log-level',
        default=os.getenv('VIM_PLUGIN_METADATA_LOG_LEVEL', 'WARNING'),
        help='Logging level (default: from VIM_PLUGIN_METADATA_LOG_LEVEL or WARNING)'
    )
    subparsers = parser.add_subparsers(dest='command', required=True)

    plugin_parser = subparsers.add_parser(
        'plugin',
        help='Parse a whole plugin directory',
        description='Parse every vimscript file under the standard plugin subdirectories',
        epilog='''
Examples:
  %(prog)s ~/.vim/pack/plugins/start/vim-fugitive
  %(prog)s ./my-plugin --output my-plugin.json

Settings:
  VIM_PLUGIN_METADATA_SECTIONS, VIM_PLUGIN_METADATA_EXTENSIONS,
  VIM_PLUGIN_METADATA_EXCLUDED_DIRS (comma-separated) and
  VIM_PLUGIN_METADATA_MAX_DEPTH override the traversal defaults.
        ''',
        formatter_class=argparse.RawDescriptionHelpFormatter
    )
    plugin_parser.add_argument('root', type=Path, help='Plugin root directory')
    plugin_parser.add_argument(
        '--output',
        type=Path,
        default=Path('plugin-metadata.json'),
        help='Output JSON file path (default: plugin-metadata.json)'
    )
    plugin_parser.set_defaults(func=cmd_plugin)

    module_parser = subparsers.add_parser('module', help='Parse a single vimscript file')
    module_parser.add_argument('file', type=Path, help='Vimscript file')
    module_parser.add_argument(
        '--output',
        type=Path,
        default=Path('module-metadata.json'),
        help='Output JSON file path (default: module-metadata.json)'
    )
    module_parser.set_defaults(func=cmd_module)
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level.upper(),
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )
    try:
        return args.func(args)
    except Error as e:
        logger.error("%s", e)
        return 1


if __name__ == '__main__':
    sys.exit(main())
