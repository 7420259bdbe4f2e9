"""Tests for the confidence and simple plotting scripts"""

import math

import numpy as np
import pandas as pd
import pytest
import yaml
from confidence import main as confidence_main
from confidence import random_data, read_data, write_params_file
from ellipse import EllipseParams, InvalidDataError
from simple import main as simple_main
from simple import read_params_file


def test_random_data_is_reproducible():
    first = random_data(50, 2.0, seed=3)
    second = random_data(50, 2.0, seed=3)
    assert first.shape == (50, 2)
    np.testing.assert_array_equal(first, second)


def test_read_data(tmp_path):
    path = tmp_path / 'points.csv'
    pd.DataFrame({'frame': [0, 1, 2], 'x0': [1.0, 2.0, 3.0], 'y0': [4.0, 5.0, 7.0]}).to_csv(path, index=False)
    data = read_data(path, 'x0', 'y0')
    np.testing.assert_array_equal(data, [[1.0, 4.0], [2.0, 5.0], [3.0, 7.0]])


def test_params_file_round_trip(tmp_path):
    path = tmp_path / 'ellipse.yaml'
    ellipse = EllipseParams.from_axes(3.0, 1.0, 0.5, center=(2.0, -1.0))
    write_params_file(ellipse, 0.95, path)

    content = yaml.safe_load(path.read_text())
    assert content['confidence'] == 0.95

    params = read_params_file(path)
    assert params == {'x': 2.0, 'y': -1.0, 'a': 3.0, 'b': 1.0, 'angle': 0.5}


def test_read_params_file_missing_keys(tmp_path):
    path = tmp_path / 'ellipse.yaml'
    path.write_text('x: 1.0\ny: 2.0\na: 3.0\n')
    with pytest.raises(InvalidDataError, match='b, angle'):
        read_params_file(path)


def test_read_params_file_not_yaml(tmp_path):
    path = tmp_path / 'ellipse.yaml'
    path.write_text('x: [1.0\n')
    with pytest.raises(InvalidDataError):
        read_params_file(path)


def test_confidence_random(tmp_path):
    image = tmp_path / 'confidence.png'
    params = tmp_path / 'ellipse.yaml'
    confidence_main(['--seed', '1', '--size', '300', '--image-file', str(image), '--params-file', str(params), '-v'])

    assert image.stat().st_size > 0
    content = yaml.safe_load(params.read_text())
    assert content['a'] >= content['b'] > 0
    assert 0 <= content['angle'] < 2 * math.pi
    assert content['confidence'] == 0.95


def test_confidence_data_file(tmp_path):
    data = tmp_path / 'points.csv'
    rng = np.random.default_rng(5)
    pd.DataFrame(rng.normal(size=(100, 2)) + [10.0, 20.0], columns=['x', 'y']).to_csv(data, index=False)
    image = tmp_path / 'confidence.png'
    params = tmp_path / 'ellipse.yaml'

    confidence_main(['--data-file', str(data), '--confidence', '0.5', '--points', '20', '--image-file', str(image), '--params-file', str(params)])

    assert image.exists()
    content = yaml.safe_load(params.read_text())
    assert content['x'] == pytest.approx(10.0, abs=0.5)
    assert content['y'] == pytest.approx(20.0, abs=0.5)


def test_confidence_degenerate_data(tmp_path):
    data = tmp_path / 'points.csv'
    pd.DataFrame({'x': [1.0, 1.0, 1.0], 'y': [2.0, 2.0, 2.0]}).to_csv(data, index=False)

    with pytest.raises(SystemExit):
        confidence_main(['--data-file', str(data), '--image-file', str(tmp_path / 'confidence.png')])
    assert not (tmp_path / 'confidence.png').exists()


def test_confidence_invalid_confidence(tmp_path):
    with pytest.raises(SystemExit):
        confidence_main(['--confidence', '1.5', '--image-file', str(tmp_path / 'confidence.png')])


def test_simple(tmp_path):
    image = tmp_path / 'simple.png'
    simple_main(['--points', '50', '--image-file', str(image)])
    assert image.stat().st_size > 0


def test_simple_from_params_file(tmp_path):
    params = tmp_path / 'ellipse.yaml'
    image = tmp_path / 'simple.png'
    confidence_main(['--seed', '2', '--params-file', str(params), '--image-file', str(tmp_path / 'confidence.png')])

    simple_main(['--params-file', str(params), '--image-file', str(image)])
    assert image.exists()


def test_simple_invalid_axis(tmp_path):
    with pytest.raises(SystemExit):
        simple_main(['--a', '0', '--image-file', str(tmp_path / 'simple.png')])
    assert not (tmp_path / 'simple.png').exists()
