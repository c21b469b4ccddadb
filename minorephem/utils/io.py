import json
import logging
import math
from typing import Any, Dict, List

import pandas as pd

from ..config import (
    CSV_ANGLE_PRECISION,
    ENCODING_FALLBACK_ORDER,
    JOB_OPTIONAL_KEYS,
    JOB_REQUIRED_KEYS
)
from ..core.types import EphemerisSample
from ..exceptions import DataSaveError, JobFileError
from .timescales import jde_to_datetime

log = logging.getLogger(__name__)


def load_job_file(filepath: str) -> Dict[str, Any]:
    """Loads ephemeris job parameters from a JSON file.

    The file holds one JSON object. 'designation' and 'start' are required;
    'end', 'site', 'catalog' and 'magnitude_threshold' are optional.

    Args:
        filepath: Path to the job file.

    Returns:
        Dictionary with every known key; absent optional keys map to None.

    Raises:
        JobFileError: If the file cannot be read or decoded, is not an object,
                      or lacks a required key.
    """
    for encoding in ENCODING_FALLBACK_ORDER:
        try:
            with open(filepath, 'r', encoding=encoding) as f:
                job = json.load(f)
            break
        except UnicodeDecodeError:
            log.debug(f"Encoding {encoding} failed, trying next...")
            continue
        except FileNotFoundError:
            raise JobFileError(f"Job file not found: {filepath}")
        except PermissionError:
            raise JobFileError(f"Permission denied accessing job file: {filepath}")
        except json.JSONDecodeError as e:
            raise JobFileError(f"Invalid JSON in job file {filepath}: {e}")
    else:
        raise JobFileError(f"Could not decode job file '{filepath}' with any supported encoding")

    if not isinstance(job, dict):
        raise JobFileError(f"Job file {filepath} must contain a JSON object")

    missing = [key for key in JOB_REQUIRED_KEYS if not job.get(key)]
    if missing:
        raise JobFileError(f"Job file {filepath} is missing required fields: {', '.join(missing)}")

    unknown = set(job) - set(JOB_REQUIRED_KEYS) - set(JOB_OPTIONAL_KEYS)
    if unknown:
        log.warning(f"Ignoring unknown job file fields: {', '.join(sorted(unknown))}")

    return {key: job.get(key) for key in JOB_REQUIRED_KEYS + JOB_OPTIONAL_KEYS}


def samples_to_dataframe(samples: List[EphemerisSample]) -> pd.DataFrame:
    """Tabulates samples with angles in degrees and UTC timestamps."""
    rows = []
    for s in samples:
        rows.append({
            'utc': jde_to_datetime(s.jde).strftime('%Y-%m-%dT%H:%M:%SZ'),
            'jde': s.jde,
            'ra_deg': round(math.degrees(s.ra), CSV_ANGLE_PRECISION),
            'dec_deg': round(math.degrees(s.dec), CSV_ANGLE_PRECISION),
            'elongation_deg': round(math.degrees(s.elongation), CSV_ANGLE_PRECISION),
            'phase_angle_deg': round(math.degrees(s.phase_angle), CSV_ANGLE_PRECISION),
            'r_au': s.r,
            'delta_au': s.delta,
            'v_mag': s.magnitude,
        })
    return pd.DataFrame(rows)


def save_samples_to_csv(samples: List[EphemerisSample], filepath: str) -> None:
    """Saves ephemeris samples to a CSV file.

    Unknown magnitudes are written as empty fields.

    Args:
        samples: Samples in the order they should appear.
        filepath: Output path (created or overwritten).

    Raises:
        DataSaveError: If there is nothing to save or the file cannot be written.
    """
    if not samples:
        raise DataSaveError("No ephemeris samples to save")

    try:
        samples_to_dataframe(samples).to_csv(filepath, index=False, na_rep='')
        log.info(f"Saved {len(samples)} samples to {filepath}")
    except (OSError, PermissionError) as e:
        log.error(f"Failed to write {filepath}: {e}")
        raise DataSaveError(f"Could not write results to {filepath}: {e}") from e
