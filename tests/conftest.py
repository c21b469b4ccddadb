# tests/conftest.py
"""Shared fixtures: synthetic MPCORB and ObsCodes files."""

import pytest

from minorephem.config import MPCORB_COLSPECS

MPCORB_HEADER = """MINOR PLANET CENTER ORBIT DATABASE (MPCORB)

Des'n     H     G   Epoch     M        Peri.      Node       Incl.       e            n           a        Reference #Obs #Opp    Arc    rms  Perts   Computer
----------------------------------------------------------------------------------------------------------------------------------------------------------------
"""


def make_mpcorb_line(designation='00001', H=3.53, G=0.12, epoch='K205V', M=77.37209,
                     peri=73.59764, node=80.30553, incl=10.59407, e=0.0765760,
                     n=0.21424745, a=2.7691652, readable='(1) Ceres'):
    """Builds one fixed-width MPCORB record; H or G of None leaves the field blank."""
    chars = [' '] * 202

    def put(name, text, left=False):
        start, end = MPCORB_COLSPECS[name]
        width = end - start
        text = text.ljust(width) if left else text.rjust(width)
        chars[start:end] = list(text[:width])

    put('designation', designation, left=True)
    put('H', '' if H is None else f"{H:5.2f}")
    put('G', '' if G is None else f"{G:5.2f}")
    put('epoch', epoch)
    put('mean_anomaly', f"{M:9.5f}")
    put('peri', f"{peri:9.5f}")
    put('node', f"{node:9.5f}")
    put('incl', f"{incl:9.5f}")
    put('e', f"{e:9.7f}")
    put('n', f"{n:11.8f}")
    put('a', f"{a:11.7f}")
    put('readable_designation', readable, left=True)
    return ''.join(chars).rstrip()


CERES_LINE = make_mpcorb_line()
PALLAS_LINE = make_mpcorb_line(designation='00002', H=4.22, G=0.11, epoch='K205V', M=59.69912,
                               peri=310.20239, node=173.02474, incl=34.83293, e=0.2299723,
                               n=0.21378563, a=2.7730015, readable='(2) Pallas')
NO_H_LINE = make_mpcorb_line(designation='K19S99Y', H=None, G=None, epoch='K19A1',
                             M=12.5, peri=100.0, node=200.0, incl=5.0, e=0.3, n=0.3, a=2.2,
                             readable='2019 SY99')


@pytest.fixture
def mpcorb_file(tmp_path):
    path = tmp_path / 'MPCORB.DAT'
    path.write_text(MPCORB_HEADER + '\n'.join([CERES_LINE, PALLAS_LINE, NO_H_LINE]) + '\n')
    return str(path)


def make_obscode_line(code, longitude=None, rho_cos=None, rho_sin=None, name=''):
    if longitude is None:
        return f"{code:3s}{'':27s} {name}"
    return f"{code:3s} {longitude:9.4f}{rho_cos:8.5f}{rho_sin:+9.5f} {name}"


@pytest.fixture
def obscodes_file(tmp_path):
    lines = [
        '<html><body><pre>',
        'Code  Long.   cos      sin    Name',
        make_obscode_line('000', 0.0, 0.62411, 0.77873, 'Greenwich'),
        make_obscode_line('568', 204.5278, 0.94171, 0.33725, 'Mauna Kea'),
        make_obscode_line('C51', name='WISE'),
        '</pre></body></html>',
    ]
    path = tmp_path / 'ObsCodes.html'
    path.write_text('\n'.join(lines) + '\n')
    return str(path)
