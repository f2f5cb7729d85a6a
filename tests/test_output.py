"""Tests for point tables, naming and contour export."""

import numpy as np
import pytest
from mlnozzle.design import minimum_length_nozzle
from mlnozzle.moc import Point, PointType, throat_point
from mlnozzle.output import (
    COLUMNS, as_csv_degrees, csv_header, point_names, wall_points,
    write_contour_csv, write_points_csv,
)


class TestAsCSVDegrees:

    def test_throat_row(self, air_table):
        p = throat_point(air_table, np.radians(10.0))
        fields = as_csv_degrees(p).split(',')
        assert len(fields) == len(COLUMNS) == 10
        assert fields[0] == '0.0000'
        # invariants are not converted
        assert fields[1] == '0.3491'
        assert fields[2] == '10.0000'
        assert fields[3] == '10.0000'
        assert float(fields[4]) == pytest.approx(p.M, abs=1e-4)
        assert float(fields[5]) == pytest.approx(np.degrees(p.mu), abs=1e-4)
        assert float(fields[6]) == pytest.approx(10.0 + np.degrees(p.mu), abs=1e-4)
        assert float(fields[7]) == pytest.approx(10.0 - np.degrees(p.mu), abs=1e-4)
        assert fields[8:] == ['0.0000', '1.0000']

    def test_invariants_in_radians(self, mach2_params):
        p = minimum_length_nozzle(mach2_params).points[-2]
        fields = as_csv_degrees(p).split(',')
        assert float(fields[0]) == pytest.approx(p.R_minus, abs=1e-4)
        assert float(fields[1]) == pytest.approx(p.R_plus, abs=1e-4)
        assert float(fields[3]) == pytest.approx(np.degrees(p.nu), abs=1e-4)

    def test_decimal_places(self, air_table):
        p = throat_point(air_table, 0.1)
        assert all(len(f.split('.')[1]) == 2 for f in as_csv_degrees(p, 2).split(','))

    def test_small_values_clamped(self):
        p = Point(R_minus=0.0, R_plus=0.0, M=2.0, mu=np.radians(30.0),
                  theta=-1e-12, nu=0.0, x=3.0, y=-1e-9, kind=PointType.FLOW)
        fields = as_csv_degrees(p).split(',')
        assert fields[2] == '0.0000'
        assert fields[9] == '0.0000'

    def test_no_negative_zero(self):
        p = Point(R_minus=0.0, R_plus=0.0, M=2.0, mu=np.radians(30.0),
                  theta=0.0, nu=0.0, x=3.0, y=-1e-6, kind=PointType.FLOW)
        assert as_csv_degrees(p).split(',')[9] == '0.0000'


class TestNames:

    def test_letters_then_numbers(self):
        assert point_names(3, 12) == ['a', 'b', 'c'] + [str(i) for i in range(1, 10)]

    def test_letters_only(self):
        assert point_names(4) == ['a', 'b', 'c', 'd']

    def test_too_many_throat_points(self):
        with pytest.raises(ValueError, match="26"):
            point_names(27)


class TestWallPoints:

    def test_filter(self, mach2_params):
        mesh = minimum_length_nozzle(mach2_params)
        wall = wall_points(mesh.points)
        assert len(wall) == 3
        assert all(p.is_wall for p in wall)
        assert wall[-1] is mesh.points[-1]


class TestWriters:

    def test_points_csv(self, tmp_path, mach2_params):
        mesh = minimum_length_nozzle(mach2_params)
        names = point_names(3, len(mesh.points))
        path = write_points_csv(tmp_path / 'points.csv', mesh.points, names=names,
                                title='mach2')
        lines = path.read_text().splitlines()
        assert lines[0] == '# mach2'
        assert lines[1] == csv_header(named=True)
        assert len(lines) == 2 + len(mesh.points)
        assert lines[2].startswith('a,0.0000,')
        assert lines[-1].startswith('9,')

    def test_points_csv_unnamed(self, tmp_path, mach2_params):
        mesh = minimum_length_nozzle(mach2_params)
        path = write_points_csv(tmp_path / 'points.csv', mesh.points)
        data = np.loadtxt(path, delimiter=',', skiprows=1)
        assert data.shape == (len(mesh.points), len(COLUMNS))

    def test_contour_csv(self, tmp_path, mach2_params):
        mesh = minimum_length_nozzle(mach2_params)
        path = write_contour_csv(tmp_path / 'contour.csv', mesh.points)
        data = np.loadtxt(path, delimiter=',', comments='#')
        assert data.shape == (4, 2)
        np.testing.assert_allclose(data[0], [0.0, 1.0])
        assert data[-1, 0] == pytest.approx(mesh.points[-1].x, abs=1e-7)

    def test_contour_csv_dimensional(self, tmp_path, mach2_params):
        mesh = minimum_length_nozzle(mach2_params)
        path = write_contour_csv(tmp_path / 'contour.csv', mesh.points,
                                 throat_radius_m=0.01)
        data = np.loadtxt(path, delimiter=',', comments='#')
        assert data.shape == (4, 4)
        np.testing.assert_allclose(data[:, 2], data[:, 0] * 10.0, atol=1e-5)
        assert data[0, 3] == pytest.approx(10.0)
