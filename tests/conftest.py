"""PyTest fixtures for the confidence ellipse scripts."""

import matplotlib

# scripts save figures to files, no display is needed
matplotlib.use("Agg")

import numpy as np
import pytest


@pytest.fixture
def gaussian_data():
	"""Correlated Gaussian samples with a known mean."""
	rng = np.random.default_rng(1)
	covariance = np.array([[9.0, 4.0], [4.0, 3.0]])
	return rng.multivariate_normal([2.0, -1.0], covariance, size=2000)


@pytest.fixture
def symmetric_data():
	"""Samples mirrored around (3, -2), so their mean is exactly that point."""
	rng = np.random.default_rng(2)
	offsets = rng.normal(size=(100, 2)) * [4.0, 1.0]
	return np.vstack((offsets, -offsets)) + [3.0, -2.0]
