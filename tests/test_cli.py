# tests/test_cli.py
import json
import pandas as pd
import pytest
from unittest.mock import patch

from conftest import MPCORB_HEADER, make_mpcorb_line
from minorephem.cli.main import create_argument_parser, compute_ephemeris, main
from minorephem.config import DEFAULT_EPHEMERIS_SOURCE, DEFAULT_SKYFIELD_KERNEL
from minorephem.data.sun_position import KeplerianSunPosition
from minorephem.exceptions import ConfigurationError, RecordNotFoundError

START = '2020-05-31T00:00:00Z'
END = '2020-06-30T00:00:00Z'


def _run(args, capsys):
    status = main(args)
    return status, capsys.readouterr().out.strip().splitlines()


# --- Argument Parser Tests ---

def test_parser_default_arguments():
    args = create_argument_parser().parse_args(['00001', START])

    assert args.designation == '00001'
    assert args.start == START
    assert args.end is None
    assert args.catalog is None
    assert args.ephemeris == DEFAULT_EPHEMERIS_SOURCE
    assert args.bsp == DEFAULT_SKYFIELD_KERNEL
    assert args.mag_threshold is None
    assert not args.debug


def test_parser_custom_arguments():
    args = create_argument_parser().parse_args([
        'Ceres', START, END, '--catalog', 'orbits.dat', '--ephemeris', 'keplerian',
        '--site', '568', '--mag-threshold', '7.5', '-o', 'out.csv'
    ])
    assert args.end == END
    assert args.catalog == 'orbits.dat'
    assert args.ephemeris == 'keplerian'
    assert args.site == '568'
    assert args.mag_threshold == 7.5
    assert args.output == 'out.csv'


# --- End-to-end runs with the offline Sun provider ---

def test_single_instant(mpcorb_file, capsys):
    status, lines = _run(['00001', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian'], capsys)

    assert status == 0
    assert len(lines) == 2
    assert 'RA' in lines[0]
    assert 'h' in lines[1] and 'd' in lines[1] and ',' in lines[1]


def test_two_instants(mpcorb_file, capsys):
    status, lines = _run(['Ceres', START, END, '--catalog', mpcorb_file, '--ephemeris', 'keplerian'], capsys)
    assert status == 0
    assert len(lines) == 3
    assert lines[1] != lines[2]


def test_magnitude_shown_and_hidden(mpcorb_file, capsys):
    _, shown = _run(['00001', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian'], capsys)
    _, hidden = _run(['00001', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian',
                      '--mag-threshold', '20'], capsys)
    assert shown[1] != hidden[1]
    assert '    ,' in hidden[1]


def test_unknown_h_never_shows_magnitude(mpcorb_file, capsys):
    status, lines = _run(['2019 SY99', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian',
                          '--mag-threshold', '-99'], capsys)
    assert status == 0
    assert '    ,' in lines[1]


def test_unknown_designation(mpcorb_file, capsys):
    status, lines = _run(['99999', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian'], capsys)
    assert status == 1
    assert lines == []


def test_bad_timestamp(mpcorb_file, capsys):
    status, _ = _run(['00001', '2020-05-31', '--catalog', mpcorb_file, '--ephemeris', 'keplerian'], capsys)
    assert status == 1


def test_missing_designation(capsys):
    status, _ = _run([], capsys)
    assert status == 1


def test_job_file(mpcorb_file, tmp_path, capsys):
    job = tmp_path / 'job.json'
    job.write_text(json.dumps({'designation': '00002', 'start': START, 'end': END,
                               'catalog': mpcorb_file, 'magnitude_threshold': 30}))

    status, lines = _run(['--job', str(job), '--ephemeris', 'keplerian'], capsys)

    assert status == 0
    assert len(lines) == 3
    assert all('    ,' in line for line in lines[1:])


def test_command_line_overrides_job_file(mpcorb_file, tmp_path):
    job = tmp_path / 'job.json'
    job.write_text(json.dumps({'designation': '99999', 'start': START, 'catalog': mpcorb_file}))

    args = create_argument_parser().parse_args(['00001', '--job', str(job), '--ephemeris', 'keplerian'])
    samples = compute_ephemeris(args)
    assert len(samples) == 1

    args = create_argument_parser().parse_args(['--job', str(job), '--ephemeris', 'keplerian'])
    with pytest.raises(RecordNotFoundError):
        compute_ephemeris(args)


def test_bad_threshold_in_job_file(mpcorb_file, tmp_path):
    job = tmp_path / 'job.json'
    job.write_text(json.dumps({'designation': '00001', 'start': START, 'catalog': mpcorb_file,
                               'magnitude_threshold': 'bright'}))
    args = create_argument_parser().parse_args(['--job', str(job), '--ephemeris', 'keplerian'])
    with pytest.raises(ConfigurationError):
        compute_ephemeris(args)


def test_site_lookup(mpcorb_file, obscodes_file, capsys):
    status, _ = _run(['00001', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian',
                      '--site', '568', '--obscodes', obscodes_file], capsys)
    assert status == 0

    status, _ = _run(['00001', START, '--catalog', mpcorb_file, '--ephemeris', 'keplerian',
                      '--site', 'ZZZ', '--obscodes', obscodes_file], capsys)
    assert status == 1


def test_csv_output(mpcorb_file, tmp_path, capsys):
    out = tmp_path / 'ceres.csv'
    status, _ = _run(['00001', START, END, '--catalog', mpcorb_file, '--ephemeris', 'keplerian',
                      '--output', str(out)], capsys)
    assert status == 0
    df = pd.read_csv(out)
    assert len(df) == 2
    assert df['v_mag'].notna().all()


def test_skyfield_provider_loaded_once(mpcorb_file, capsys):
    with patch('minorephem.data.sun_position.SkyfieldSunPosition.load',
               return_value=KeplerianSunPosition()) as load:
        status, lines = _run(['00001', START, END, '--catalog', mpcorb_file, '--bsp', 'de440s.bsp'], capsys)

    assert status == 0
    assert len(lines) == 3
    load.assert_called_once_with('de440s.bsp')


def test_impossible_epoch_date_in_catalog(tmp_path, capsys):
    catalog = tmp_path / 'MPCORB.DAT'
    catalog.write_text(MPCORB_HEADER + make_mpcorb_line(epoch='K202V') + '\n')

    status, lines = _run(['00001', START, '--catalog', str(catalog), '--ephemeris', 'keplerian'], capsys)

    assert status == 1
    assert lines == []


def test_corrupt_planetary_kernel(mpcorb_file, tmp_path, capsys):
    kernel = tmp_path / 'broken.bsp'
    kernel.write_bytes(b'NOT A KERNEL' * 100)

    status, lines = _run(['00001', START, '--catalog', mpcorb_file, '--bsp', str(kernel)], capsys)

    assert status == 1
    assert lines == []


def test_keyboard_interrupt_exit_status(mpcorb_file, capsys):
    with patch('minorephem.cli.main.compute_ephemeris', side_effect=KeyboardInterrupt):
        status, lines = _run(['00001', START, '--catalog', mpcorb_file], capsys)

    assert status == 130
    assert lines == []
