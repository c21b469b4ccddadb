"""
Reader for the MPC list of observatory codes (ObsCodes.html).

Sites carry the parallax constants rho*cos(phi') and rho*sin(phi'). Space
based observatories have no constants and are returned with None values.
"""

import io
import logging
from dataclasses import dataclass
from typing import Dict, Optional

import pandas as pd

from ..config import OBSCODES_COLSPECS, OBSCODES_COLUMN_NAMES
from ..exceptions import CatalogFileError, SiteNotFoundError

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class ObservingSite:
    code: str
    longitude_deg: Optional[float]
    rho_cos_phi: Optional[float]
    rho_sin_phi: Optional[float]
    name: str


def _optional(value) -> Optional[float]:
    return None if pd.isna(value) else float(value)


def _table_lines(text: str):
    lines = []
    in_table = False
    for line in text.splitlines():
        if line.startswith('Code'):
            in_table = True
            continue
        if not in_table or line.startswith('<') or len(line) < 3:
            continue
        lines.append(line)
    return lines


def load_obscodes(filepath: str) -> Dict[str, ObservingSite]:
    """
    Loads observatory codes into a dictionary keyed by code.

    Raises:
        CatalogFileError: If the file cannot be read or has no code table.
    """
    try:
        with open(filepath, 'r', encoding='utf-8', errors='replace') as f:
            lines = _table_lines(f.read())
    except OSError as e:
        raise CatalogFileError(f"Could not read observatory code file {filepath}: {e}") from e

    if not lines:
        raise CatalogFileError(f"No observatory code table found in {filepath}")

    df = pd.read_fwf(io.StringIO('\n'.join(lines)), colspecs=OBSCODES_COLSPECS,
                     names=OBSCODES_COLUMN_NAMES, dtype={'code': str, 'name': str}, header=None)

    sites = {}
    for row in df.itertuples(index=False):
        sites[row.code] = ObservingSite(
            code=row.code,
            longitude_deg=_optional(row.longitude_deg),
            rho_cos_phi=_optional(row.rho_cos_phi),
            rho_sin_phi=_optional(row.rho_sin_phi),
            name='' if pd.isna(row.name) else str(row.name).strip(),
        )

    log.info(f"Loaded {len(sites)} observatory codes from {filepath}")
    return sites


def lookup_site(sites: Dict[str, ObservingSite], code: str) -> ObservingSite:
    try:
        return sites[code.strip().upper()]
    except KeyError:
        raise SiteNotFoundError(f"Observatory code '{code}' not found")
