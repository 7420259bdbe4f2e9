import logging
import os

import numpy as np

X_TAG = "x"
Y_TAG = "y"
A_TAG = "a"
B_TAG = "b"
ANGLE_TAG = "angle"
CONFIDENCE_TAG = "confidence"
PARAMS_TAGS = [X_TAG, Y_TAG, A_TAG, B_TAG, ANGLE_TAG]

DEFAULT_CONFIDENCE = 0.95
DEFAULT_CURVE_POINTS = 100

logger = logging.getLogger(__name__)


class EllipseError(Exception):
	"""Base class of all ellipse errors"""


class InvalidAxisError(EllipseError, ValueError):
	pass


class InvalidConfidenceError(EllipseError, ValueError):
	pass


class InvalidDataError(EllipseError, ValueError):
	"""Empty, mismatched or malformed coordinates; raised before any computation"""


class InvalidSizeError(EllipseError, ValueError):
	pass


class DegenerateDataError(EllipseError, ArithmeticError):
	"""The data has no 2D spread to compute principal components from"""


class NonFiniteResultError(EllipseError, ArithmeticError):
	pass


# https://stackoverflow.com/a/11541450/1644554
def is_valid_file(parser, arg):
	if not os.path.exists(arg):
		parser.error("The file %s does not exist!" % arg)
	else:
		return arg


def is_valid_confidence(parser, arg):
	try:
		confidence = float(arg)
	except ValueError:
		parser.error(f"Invalid value {arg}, is not a number")
	if not 0 < confidence <= 1:
		parser.error(f"Invalid confidence {confidence}, must be in (0, 1]")
	else:
		return confidence


def is_valid_size(parser, arg):
	if not arg.isnumeric():
		parser.error(f"Invalid value {arg}, is not a positive integer")
	size = int(arg)
	if size < 1:
		parser.error(f"Invalid size {size}, must be at least 1")
	else:
		return size


def check_finite(values, error, message):
	"""Raise `error` with `message` if any of the values is NaN or infinite."""

	if not np.all(np.isfinite(values)):
		raise error(message)


def xy_from_matrix(m):
	"""
	Takes:
		m: matrix-like (numpy array, pandas DataFrame, list of pairs) storing X and Y coordinates in its 1st and 2nd column
	Returns:
		a fresh (N, 2) float array with the X and Y columns

	Raises InvalidDataError if m is None, is not two-dimensional or has fewer than 2 columns.
	"""

	if m is None:
		raise InvalidDataError("Missing data matrix")

	try:
		matrix = np.array(m, dtype=float)
	except (TypeError, ValueError) as exception:
		raise InvalidDataError(f"Data is not a numeric matrix: {exception}") from exception

	if matrix.ndim != 2 or matrix.shape[1] < 2:
		raise InvalidDataError(f"Data matrix must have shape (N, 2), got {matrix.shape}")

	return matrix[:, :2].copy()


def as_dataset(x, y):
	"""
	Stack two coordinate sequences into an (N, 2) matrix.

	Both sequences must be one-dimensional, non-empty and of the same length.
	"""

	try:
		xs = np.array(x, dtype=float)
		ys = np.array(y, dtype=float)
	except (TypeError, ValueError) as exception:
		raise InvalidDataError(f"Coordinates are not numeric: {exception}") from exception

	if xs.ndim != 1 or ys.ndim != 1:
		raise InvalidDataError("X and Y coordinates must be one-dimensional sequences")
	if len(xs) == 0 or len(ys) == 0:
		raise InvalidDataError(f"Empty coordinates (x: {len(xs)}, y: {len(ys)})")
	if len(xs) != len(ys):
		raise InvalidDataError(f"Mismatched coordinates length (x: {len(xs)}, y: {len(ys)})")

	return np.column_stack((xs, ys))
