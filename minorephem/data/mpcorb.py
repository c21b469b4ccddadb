"""
Reader for orbit records in the Minor Planet Center MPCORB.DAT export format.

Each record is one fixed-width line. Only the fields needed to compute an
ephemeris are decoded; column positions are kept in config.MPCORB_COLSPECS.
"""

import calendar
import logging
import math
from dataclasses import dataclass
from typing import Optional, Tuple

from ..config import (
    MPCORB_COLSPECS,
    MPCORB_MIN_RECORD_LENGTH,
    PACKED_CENTURY_CODES,
    PACKED_DIGITS
)
from ..exceptions import (
    CatalogFileError,
    CatalogParsingError,
    InvalidEpochError,
    RecordNotFoundError
)
from ..physics.orbit import OrbitalElementSet
from ..physics.photometry import AbsoluteMagnitudeParams
from ..utils.timescales import calendar_to_jd

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class MpcOrbRecord:
    """
    Decoded MPCORB fields. Angles in degrees as published, a in AU.
    H and G are None when the catalog leaves them blank.
    """
    designation: str
    epoch: str
    mean_anomaly: float
    peri: float
    node: float
    incl: float
    e: float
    a: float
    H: Optional[float] = None
    G: Optional[float] = None
    readable_designation: str = ''

    @property
    def epoch_jde(self) -> float:
        return calendar_to_jd(*unpack_epoch(self.epoch))

    def to_elements(self) -> OrbitalElementSet:
        return OrbitalElementSet.from_mean_anomaly(
            semimajor_axis=self.a,
            eccentricity=self.e,
            inclination=math.radians(self.incl),
            arg_perihelion=math.radians(self.peri),
            ascending_node=math.radians(self.node),
            mean_anomaly=math.radians(self.mean_anomaly),
            epoch_jde=self.epoch_jde,
        )

    def magnitude_params(self) -> AbsoluteMagnitudeParams:
        return AbsoluteMagnitudeParams(H=self.H, G=self.G)


def _field(line: str, name: str) -> str:
    start, end = MPCORB_COLSPECS[name]
    return line[start:end].strip()


def _required_float(line: str, name: str) -> float:
    text = _field(line, name)
    try:
        return float(text)
    except ValueError as e:
        raise CatalogParsingError(f"Field '{name}' is not a number: '{text}'") from e


def _optional_float(line: str, name: str) -> Optional[float]:
    text = _field(line, name)
    if not text:
        return None
    try:
        return float(text)
    except ValueError as e:
        raise CatalogParsingError(f"Field '{name}' is not a number: '{text}'") from e


def unpack_epoch(packed: str) -> Tuple[int, int, int]:
    """
    Decodes an MPC packed date such as 'K205V' (2020 May 31).

    Returns:
        (year, month, day)

    Raises:
        InvalidEpochError: If the string is not a valid packed date.
    """
    if packed is None or len(packed) != 5:
        raise InvalidEpochError(f"Packed epoch must have 5 characters, got '{packed}'")

    century = PACKED_CENTURY_CODES.get(packed[0])
    if century is None:
        raise InvalidEpochError(f"Unknown century code '{packed[0]}' in epoch '{packed}'")
    if not packed[1:3].isdigit():
        raise InvalidEpochError(f"Invalid year digits in epoch '{packed}'")

    month = PACKED_DIGITS.find(packed[3])
    day = PACKED_DIGITS.find(packed[4])
    if not 1 <= month <= 12:
        raise InvalidEpochError(f"Invalid month code '{packed[3]}' in epoch '{packed}'")
    if not 1 <= day <= 31:
        raise InvalidEpochError(f"Invalid day code '{packed[4]}' in epoch '{packed}'")

    year = century + int(packed[1:3])
    if day > calendar.monthrange(year, month)[1]:
        raise InvalidEpochError(f"Day {day} out of range for month {month} in epoch '{packed}'")

    return year, month, day


def parse_record(line: str) -> MpcOrbRecord:
    """
    Parses one MPCORB.DAT line.

    Raises:
        CatalogParsingError: If the line is too short or a required field is malformed.
    """
    line = line.rstrip('\r\n')
    if len(line) < MPCORB_MIN_RECORD_LENGTH:
        raise CatalogParsingError(
            f"Record too short ({len(line)} characters, need {MPCORB_MIN_RECORD_LENGTH})"
        )

    return MpcOrbRecord(
        designation=_field(line, 'designation'),
        epoch=_field(line, 'epoch'),
        mean_anomaly=_required_float(line, 'mean_anomaly'),
        peri=_required_float(line, 'peri'),
        node=_required_float(line, 'node'),
        incl=_required_float(line, 'incl'),
        e=_required_float(line, 'e'),
        a=_required_float(line, 'a'),
        H=_optional_float(line, 'H'),
        G=_optional_float(line, 'G'),
        readable_designation=_field(line, 'readable_designation'),
    )


def _matches(line: str, designation: str) -> bool:
    if line.startswith(designation):
        return True
    readable = _field(line, 'readable_designation')
    if not readable:
        return False
    # '(1) Ceres' matches both '(1) Ceres' and 'Ceres'
    return readable == designation or readable.split(') ', 1)[-1] == designation


def find_record(filepath: str, designation: str) -> str:
    """
    Returns the first catalog line for a designation.

    A line matches when its packed designation starts with the requested one
    (as in '00001') or its readable designation equals it.

    Raises:
        CatalogFileError: If the file cannot be read.
        RecordNotFoundError: If no line matches.
    """
    designation = designation.strip()
    if not designation:
        raise RecordNotFoundError("Empty designation")

    log.info(f"Searching {filepath} for '{designation}'")
    try:
        with open(filepath, 'r', encoding='ascii', errors='replace') as f:
            for line in f:
                if len(line.rstrip('\r\n')) < MPCORB_MIN_RECORD_LENGTH:
                    continue
                if _matches(line, designation):
                    return line.rstrip('\r\n')
    except FileNotFoundError as e:
        raise CatalogFileError(f"Catalog file not found: {filepath}") from e
    except OSError as e:
        raise CatalogFileError(f"Could not read catalog file {filepath}: {e}") from e

    raise RecordNotFoundError(f"{designation} not found in {filepath}")


def load_record(filepath: str, designation: str) -> MpcOrbRecord:
    """Finds and parses the record for a designation."""
    record = parse_record(find_record(filepath, designation))
    log.info(f"Loaded orbit of {record.readable_designation or record.designation} "
             f"(epoch {record.epoch}, a={record.a:.6f} AU, e={record.e:.6f})")
    return record
