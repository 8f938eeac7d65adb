#!/usr/bin/env python3
"""
IGC to CSV Converter

This script converts IGC flight logs to CSV tables: one for position
fixes (B records) and, when the logger recorded any, one for sensor
fixes (K records).

Usage:
    python igc2csv.py [-c config] [-o outputFolder] [-s] file.igc [file2.igc ...]
"""

import os
import argparse
import sys
import logging
from pathlib import Path
from typing import List

# Add the current directory to the Python path
current_dir = os.path.dirname(os.path.abspath(__file__))
sys.path.append(current_dir)

from igc_config import Config
from igc_parser import convertIgc, getFiletype, splitLines
from igc_summary import buildFlightSummary, flightSummary
from igc_model import FileType, NoDateFoundError

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(levelname)s - %(message)s',
    datefmt='%Y-%m-%d %H:%M:%S'
)
logger = logging.getLogger('igc2csv')


def write_csv(config: Config, out_path: Path, content: bytes) -> bool:
    """Write CSV bytes, honouring the overwrite setting"""
    if out_path.exists() and not config.overwrite:
        logger.warning(f"{out_path} already exists, skipping (Overwrite = no)")
        return False

    out_path.parent.mkdir(parents=True, exist_ok=True)
    with open(out_path, 'wb') as csvFile:
        csvFile.write(content)
    logger.info(f"Successfully generated: {out_path}")
    return True


def process_file(config: Config, inPath: str, summary_only: bool = False) -> bool:
    """Inspect and convert a single IGC file. Returns True on success."""
    logger.info(f"Processing {inPath}...")
    try:
        with open(inPath, 'r', encoding=config.encoding, errors='ignore') as trackFile:
            content = trackFile.read()
    except OSError as e:
        logger.error(f"Failed to read {inPath}: {e}")
        return False

    if not content.strip():
        logger.error(f"{inPath}: The selected file is empty")
        return False

    lines = splitLines(content)
    if getFiletype(lines) != FileType.IGC:
        logger.error(f"{inPath} doesn't appear to be a valid IGC file")
        return False

    summary = buildFlightSummary(lines)
    logger.info("Flight summary:\n" + flightSummary(summary))
    if summary_only:
        return True

    try:
        outcome = convertIgc(lines)
    except NoDateFoundError:
        logger.error(f"{inPath}: Could not find flight date in file. The file may be corrupted.")
        return False

    if outcome.position_fix_count == 0:
        logger.warning(f"{inPath}: No position records (B-records) found in file")
        return False

    written = write_csv(config, config.output.position_path(inPath), outcome.position_csv)
    if outcome.has_sensor_csv:
        written = write_csv(config, config.output.sensor_path(inPath), outcome.sensor_csv) and written

    logger.info(f"Converted {outcome.position_fix_count} B records and {outcome.sensor_fix_count} K records")
    return written


def process_files(config: Config, paths: List[str], summary_only: bool = False) -> int:
    """Process several files; one failure does not stop the batch. Returns the failure count."""
    failures = 0
    for inPath in paths:
        try:
            if not process_file(config, inPath, summary_only):
                failures += 1
        except Exception as e:
            logger.error(f"Error processing {inPath}: {e}", exc_info=logger.isEnabledFor(logging.DEBUG))
            failures += 1
    return failures


def main(argv=None):
    parser = argparse.ArgumentParser(
        description='Convert IGC flight logs into CSV files',
        epilog='Example: python igc2csv.py -o out vuelo.igc'
    )

    parser.add_argument('-c', '--config', default=None, help='Path to config file')
    parser.add_argument('-o', '--outputFolder', dest='output', default=None, help='Folder to write CSV files to (default: next to each input file)')
    parser.add_argument('-k', '--sensorSuffix', dest='sensor_suffix', default=None, help='Suffix of the K record CSV file name (default: _k)')
    parser.add_argument('-s', '--summary', action='store_true', help='Only print the flight summary, do not convert')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable verbose output')
    parser.add_argument('trackfile', default=None, nargs='+', help='Path to one or more IGC files')
    args = parser.parse_args(argv)

    # Set log level based on verbose flag
    if args.verbose:
        logging.getLogger().setLevel(logging.DEBUG)
        logger.setLevel(logging.DEBUG)

    config = Config(args)
    failures = process_files(config, args.trackfile, args.summary)

    logger.info("Processing complete.")
    return 1 if failures else 0


if __name__ == "__main__":
    try:
        sys.exit(main())
    except FileNotFoundError as e:
        logger.critical(f"File not found: {e.filename}")
        sys.exit(3)
    except ValueError as e:
        logger.critical(f"Invalid input: {e}")
        sys.exit(2)
    except Exception as e:
        logger.critical(f"Unexpected error: {e}", exc_info=True)
        sys.exit(1)
