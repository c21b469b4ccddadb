"""
Command line interface for minorephem.

Computes the apparent place and magnitude of a minor planet at one or two
instants from its MPCORB orbit record.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import (
    AVAILABLE_EPHEMERIS_SOURCES,
    DEFAULT_CATALOG_PATH,
    DEFAULT_EPHEMERIS_SOURCE,
    DEFAULT_LOG_FORMAT,
    DEFAULT_LOG_LEVEL,
    DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD,
    DEFAULT_OBSCODES_PATH,
    DEFAULT_SKYFIELD_KERNEL
)
from ..core.ephemeris import EphemerisGenerator
from ..core.types import EphemerisSample, PositionProvider
from ..data.mpcorb import load_record
from ..data.obscodes import load_obscodes, lookup_site
from ..exceptions import ConfigurationError, MinorEphemError
from ..utils.formatting import EPHEMERIS_HEADER, format_sample_line
from ..utils.io import load_job_file, save_samples_to_csv
from ..utils.timescales import datetime_to_jde, parse_timestamp

log = logging.getLogger(__name__)


def create_argument_parser():
    """Create command line argument parser with proper defaults from config."""
    parser = argparse.ArgumentParser(
        description='Minor planet ephemeris from MPCORB orbital elements',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s 00001 2019-10-04T00:00:00Z
  %(prog)s 00433 2019-10-04T00:00:00Z 2019-10-05T00:00:00Z --catalog MPCORB.DAT
  %(prog)s --job ceres.json --ephemeris keplerian --output ceres.csv
        """
    )

    parser.add_argument('designation', nargs='?', default=None,
                        help='Packed or readable designation (e.g. 00001 or Ceres). Omit if using --job.')
    parser.add_argument('start', nargs='?', default=None,
                        help='First instant, UTC, as YYYY-MM-DDTHH:MM:SSZ')
    parser.add_argument('end', nargs='?', default=None,
                        help='Optional second instant, UTC, as YYYY-MM-DDTHH:MM:SSZ')

    parser.add_argument('--job',
                        help='JSON job file with designation, start and optional end, site, catalog, magnitude_threshold')

    parser.add_argument('--catalog',
                        default=None,
                        help=f'MPCORB.DAT orbit catalog (default: {DEFAULT_CATALOG_PATH})')

    ephem_group = parser.add_argument_group('Earth/Sun Ephemeris Options')
    ephem_group.add_argument('--ephemeris',
                             choices=AVAILABLE_EPHEMERIS_SOURCES,
                             default=DEFAULT_EPHEMERIS_SOURCE,
                             help=f'Source of Sun positions: skyfield (JPL kernel) or keplerian '
                                  f'(mean elements, no file needed) (default: {DEFAULT_EPHEMERIS_SOURCE})')
    ephem_group.add_argument('--bsp',
                             default=DEFAULT_SKYFIELD_KERNEL,
                             help=f'Skyfield kernel file (default: {DEFAULT_SKYFIELD_KERNEL})')

    site_group = parser.add_argument_group('Observing Site Options')
    site_group.add_argument('--site',
                            help='MPC observatory code, reported with the output (positions stay geocentric)')
    site_group.add_argument('--obscodes',
                            default=DEFAULT_OBSCODES_PATH,
                            help=f'Observatory code list (default: {DEFAULT_OBSCODES_PATH})')

    parser.add_argument('--mag-threshold',
                        type=float,
                        default=None,
                        help=f'Show V only when V >= this value (default: {DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD})')

    parser.add_argument('--output', '-o',
                        help='Output CSV file for the samples')

    parser.add_argument('--debug',
                        action='store_true',
                        help='Enable debug logging.')

    return parser


def _merge_job(args: argparse.Namespace) -> argparse.Namespace:
    """Fills arguments not given on the command line from the job file."""
    if not args.job:
        return args

    job = load_job_file(args.job)
    log.info(f"Loaded job file {args.job}")
    args.designation = args.designation or job['designation']
    args.start = args.start or job['start']
    args.end = args.end or job['end']
    args.site = args.site or job['site']
    args.catalog = args.catalog or job['catalog']
    if args.mag_threshold is None and job['magnitude_threshold'] is not None:
        try:
            args.mag_threshold = float(job['magnitude_threshold'])
        except (TypeError, ValueError) as e:
            raise ConfigurationError(
                f"Invalid magnitude_threshold in job file: {job['magnitude_threshold']!r}") from e
    return args


def _create_sun_provider(args: argparse.Namespace) -> PositionProvider:
    if args.ephemeris == 'keplerian':
        from ..data.sun_position import KeplerianSunPosition
        log.info("Using Keplerian mean elements for the Earth (low precision)")
        return KeplerianSunPosition()

    from ..data.sun_position import SkyfieldSunPosition
    return SkyfieldSunPosition.load(args.bsp)


def compute_ephemeris(args: argparse.Namespace) -> List[EphemerisSample]:
    """
    Runs one ephemeris request described by parsed arguments.

    Raises:
        MinorEphemError: On any input problem (missing fields, unknown object,
                         malformed records or timestamps, unknown site).
    """
    args = _merge_job(args)

    if not args.designation or not args.start:
        raise ConfigurationError("A designation and a start time are required (or use --job).")

    catalog = args.catalog or DEFAULT_CATALOG_PATH
    record = load_record(catalog, args.designation)

    instants = [parse_timestamp(args.start)]
    if args.end:
        instants.append(parse_timestamp(args.end))

    if args.site:
        site = lookup_site(load_obscodes(args.obscodes), args.site)
        log.info(f"Observing site {site.code} {site.name}: positions are geocentric, "
                 f"no parallax correction applied")

    generator = EphemerisGenerator(record.to_elements(), _create_sun_provider(args),
                                   record.magnitude_params())
    return generator.samples([datetime_to_jde(t) for t in instants])


def main(args_list: Optional[List[str]] = None) -> int:
    """Main entry point for the ephemeris CLI.

    Args:
        args_list: Optional list of command line arguments.
                  If None, will parse from sys.argv

    Returns:
        Process exit status.
    """
    parser = create_argument_parser()
    args = parser.parse_args(args_list)

    logging.basicConfig(level=logging.DEBUG if args.debug else DEFAULT_LOG_LEVEL,
                        format=DEFAULT_LOG_FORMAT)

    try:
        samples = compute_ephemeris(args)
    except MinorEphemError as e:
        log.error(str(e))
        return 1
    except KeyboardInterrupt:
        log.warning("Interrupted by user")
        return 130

    threshold = args.mag_threshold if args.mag_threshold is not None else DEFAULT_MAGNITUDE_DISPLAY_THRESHOLD
    print(EPHEMERIS_HEADER)
    for sample in samples:
        print(format_sample_line(sample, threshold))

    if args.output:
        try:
            save_samples_to_csv(samples, args.output)
        except MinorEphemError as e:
            log.error(str(e))
            return 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
