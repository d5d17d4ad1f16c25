#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
CncBuilder - command line
Nests a JSON job on the sheet and writes the G-code program.

Usage:
    cncbuilder generate job.json                 # writes job.nc
    cncbuilder generate job.json -o out.nc --minify
    cncbuilder validate job.json                 # errors, warnings, preview
    cncbuilder estimate job.json                 # machining time only
"""

import sys
import json
import argparse
import logging
from pathlib import Path

from cncbuilder.config import load_config, settings
from cncbuilder.core.exceptions import CncBuilderError
from cncbuilder.nesting import resolve_method
from cncbuilder.services import GCodeJobService
from cncbuilder.toolpath import estimate

logger = logging.getLogger(__name__)


def setup_logging(debug: bool = False):
    logging.basicConfig(
        level=logging.DEBUG if debug else getattr(logging, settings.LOG_LEVEL, logging.INFO),
        format=settings.LOG_FORMAT
    )
    if debug:
        logging.getLogger().setLevel(logging.DEBUG)


def read_job(path: str) -> dict:
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="cncbuilder", description="CNC router nesting and G-code generator")
    parser.add_argument('--debug', action='store_true', help='Debug logging')
    parser.add_argument('--config', help='Machining defaults JSON (overrides CNCBUILDER_CONFIG)')

    commands = parser.add_subparsers(dest='command', required=True)

    generate = commands.add_parser('generate', help='Nest pieces and write the G-code program')
    generate.add_argument('job', help='Job JSON file')
    generate.add_argument('-o', '--output', help='Output file (default: job name with .nc)')
    generate.add_argument('--method', choices=['greedy', 'shelf', 'guillotine'], help='Nesting method')
    generate.add_argument('--no-comments', action='store_true', help='Do not write annotations')
    generate.add_argument('--minify', action='store_true', help='Strip comments and blank lines')

    validate = commands.add_parser('validate', help='Check a job and preview nesting and time')
    validate.add_argument('job', help='Job JSON file')

    est = commands.add_parser('estimate', help='Print the estimated machining time')
    est.add_argument('job', help='Job JSON file')
    est.add_argument('--method', choices=['greedy', 'shelf', 'guillotine'], help='Nesting method')

    return parser


def cmd_generate(service: GCodeJobService, args) -> int:
    request = service.build_request(read_job(args.job))
    if args.method:
        request.method = resolve_method(args.method)
    if args.no_comments:
        request.include_comments = False

    result = service.generate(request, minify=args.minify)

    if not result.ok:
        print(f"Job failed ({result.status}):", file=sys.stderr)
        for error in result.errors:
            print(f"  - {error}", file=sys.stderr)
        return 1

    output = Path(args.output) if args.output else Path(args.job).with_suffix(settings.OUTPUT_EXTENSION)
    output.write_text(result.gcode, encoding='utf-8')

    meta = result.metadata
    print(f"Written {output} ({meta['linhas']} lines, {meta['tamanhoBytes']} bytes)")
    print(f"Pieces: {meta['configuracoes']['nesting']['pecasPosicionadas']}, "
          f"efficiency: {meta['metricas']['eficiencia']}%, "
          f"time: {meta['tempoEstimado']['tempoFormatado']}")
    return 0


def cmd_validate(service: GCodeJobService, args) -> int:
    request = service.build_request(read_job(args.job))
    report = service.validate(request)
    print(json.dumps(report.to_dict(), indent=2, ensure_ascii=False))
    return 0 if report.valid else 1


def cmd_estimate(service: GCodeJobService, args) -> int:
    request = service.build_request(read_job(args.job))
    if args.method:
        request.method = resolve_method(args.method)

    nesting = service.nest(request)
    time_estimate = estimate(nesting.placed, request.sheet, request.cut)

    print(f"Estimated time: {time_estimate.formatted}")
    print(json.dumps(time_estimate.to_dict(), indent=2))
    if nesting.unplaced:
        print(f"Warning: {len(nesting.unplaced)} pieces do not fit and are not included", file=sys.stderr)
    return 0


COMMANDS = {
    'generate': cmd_generate,
    'validate': cmd_validate,
    'estimate': cmd_estimate,
}


def main(argv=None) -> int:
    """Entry point"""
    parser = build_parser()
    args = parser.parse_args(argv)

    setup_logging(args.debug)

    try:
        settings.validate_config()
    except ValueError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 1

    try:
        config = load_config(args.config) if args.config else None
        service = GCodeJobService(config=config)
        return COMMANDS[args.command](service, args)
    except (OSError, json.JSONDecodeError) as e:
        logger.error(f"Cannot read job: {e}")
        print(f"Cannot read job: {e}", file=sys.stderr)
        return 1
    except CncBuilderError as e:
        logger.error(str(e))
        print(f"Error: {e}", file=sys.stderr)
        return 1


if __name__ == "__main__":
    sys.exit(main())
