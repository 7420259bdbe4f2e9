# confidence ellipse of a 2D Gaussian point cloud, see
# https://en.wikipedia.org/wiki/Ellipse and https://en.wikipedia.org/wiki/Chi-squared_distribution
import math
from dataclasses import dataclass

import numpy as np
from scipy import stats

from utility import (
    EllipseError,
    InvalidAxisError,
    InvalidConfidenceError,
    InvalidDataError,
    InvalidSizeError,
    DegenerateDataError,
    NonFiniteResultError,
    as_dataset,
    check_finite,
    logger,
    xy_from_matrix,
)

__all__ = [
    "EllipseParams",
    "EllipseError",
    "InvalidAxisError",
    "InvalidConfidenceError",
    "InvalidDataError",
    "InvalidSizeError",
    "DegenerateDataError",
    "NonFiniteResultError",
    "chi2_quantile",
    "generate_curve",
]

# degrees of freedom of the squared Mahalanobis distance of a 2D Gaussian
DEGREES_OF_FREEDOM = 2


def _validate_confidence(confidence):
    # written as a negation so that NaN is rejected too
    if not 0 < confidence <= 1:
        raise InvalidConfidenceError(f"Invalid confidence level: {confidence:.2f}")


def chi2_quantile(confidence, df=DEGREES_OF_FREEDOM):
    """
    Inverse of the chi-squared CDF: the squared radius that holds `confidence` of the mass.

    For df=2 this equals -2 * ln(1 - confidence); confidence of 1 maps to infinity.
    """
    _validate_confidence(confidence)
    return float(stats.chi2.ppf(confidence, df))


@dataclass(frozen=True)
class EllipseParams:
    """
    2D ellipse with center (x, y), semi-axes a, b and rotation angle in radians.

    `a` lies along the local X axis and `b` along the local Y axis before the rotation.
    Ellipses derived from data always have a >= b, i.e. `a` is the semi-major axis.
    """

    x: float
    y: float
    a: float
    b: float
    angle: float

    @classmethod
    def from_axes(cls, a, b, angle, center=(0.0, 0.0)):
        """
        Ellipse from explicit semi-axis lengths, rotation (radians) and center.

        Raises InvalidAxisError if either axis is not strictly positive.
        """
        if not (a > 0 and b > 0):
            raise InvalidAxisError(f"Invalid ellipse axis: (a: {a:.2f}, b: {b:.2f})")

        x, y = center
        return cls(x=x, y=y, a=a, b=b, angle=angle)

    @classmethod
    def from_xy(cls, x, y, confidence):
        """Same as `from_confidence`, with the coordinates given as two sequences."""
        return cls.from_confidence(as_dataset(x, y), confidence)

    @classmethod
    def from_confidence(cls, data, confidence):
        """
        Confidence ellipse of data, assumed to be Normally distributed.

        Takes:
            data: (N, 2) matrix-like, X coordinates in the 1st column and Y in the 2nd
            confidence: probability mass the ellipse should hold, in (0, 1]
        Returns:
            EllipseParams centered at the data mean, rotated along the first principal component

        Raises InvalidDataError and InvalidConfidenceError (in this order) before computing anything,
        DegenerateDataError if the principal components could not be determined.
        """
        points = xy_from_matrix(data)
        if len(points) < 2:
            raise InvalidDataError(f"At least 2 samples are required, got {len(points)}")
        check_finite(points, InvalidDataError, "Data contains NaN or infinite values")

        _validate_confidence(confidence)

        # the ellipse is centered at the data mean
        x_mean, y_mean = points.mean(axis=0)

        eig_vals, eig_vecs = _principal_components(points)

        # rotation angle from the largest eigenvector, shifted from <-pi, pi> to <0, 2*pi)
        angle = math.atan2(eig_vecs[1, 0], eig_vecs[0, 0])
        if angle < 0:
            angle = angle + 2 * math.pi

        # the sum of squared Gaussians is distributed according to the Chi-squared distribution
        quantile = chi2_quantile(confidence)
        a = math.sqrt(quantile * eig_vals[0])
        b = math.sqrt(quantile * eig_vals[1])

        ellipse = cls(x=float(x_mean), y=float(y_mean), a=a, b=b, angle=angle)
        logger.debug(f"{ellipse} from {len(points)} samples at {confidence:.2f} confidence")
        return ellipse

    @property
    def center(self):
        return (self.x, self.y)

    @property
    def eccentricity(self):
        # shorter over longer axis, whichever of a and b that is
        minor, major = sorted((self.a, self.b))
        return math.sqrt(1 - (minor * minor) / (major * major))

    @property
    def area(self):
        return math.pi * self.a * self.b

    def line_points(self, size):
        return generate_curve(self, size)

    def contains(self, data):
        """
        Returns a boolean array telling which rows of the (N, 2) data lie inside or on the ellipse.
        """
        points = xy_from_matrix(data) - np.array(self.center)

        # rotate the points back into the ellipse frame (inverse of the curve rotation)
        local = points @ _rotation_matrix(self.angle).T
        return (local[:, 0] / self.a) ** 2 + (local[:, 1] / self.b) ** 2 <= 1

    def __str__(self):
        return f"Ellipse{{x: {self.x:.2f}, y: {self.y:.2f}, a: {self.a:.2f}, b: {self.b:.2f}, angle: {self.angle:.2f}}}"


def _principal_components(points):
    """
    Eigenvalues (descending) and eigenvectors (as columns) of the sample covariance of points.
    """
    covariance = np.cov(points, rowvar=False)

    try:
        eig_vals, eig_vecs = np.linalg.eigh(covariance)
    except np.linalg.LinAlgError as exception:
        raise DegenerateDataError(f"Could not determine principal components: {exception}") from exception

    if not (np.all(np.isfinite(eig_vals)) and np.all(np.isfinite(eig_vecs))):
        raise DegenerateDataError("Could not determine principal components: non-finite covariance")

    # eigh returns eigenvalues in ascending order
    order = np.argsort(eig_vals)[::-1]
    eig_vals = eig_vals[order]
    eig_vecs = eig_vecs[:, order]

    if eig_vals[0] <= 0:
        raise DegenerateDataError("Could not determine principal components: data has no spread")

    # collinear data leaves the minor variance at (or, by round-off, below) zero
    floor = eig_vals[0] * np.finfo(float).eps
    if eig_vals[1] < floor:
        logger.warning(f"Data is collinear, minor variance {eig_vals[1]:.2e} raised to {floor:.2e}")
        eig_vals[1] = floor

    return eig_vals, eig_vecs


def _rotation_matrix(angle):
    # right-multiplying row vectors by this rotates them counter-clockwise by angle
    return np.array([
        [np.cos(angle), np.sin(angle)],
        [-np.sin(angle), np.cos(angle)],
    ])


def generate_curve(params, size):
    """
    Points on the boundary of the ellipse, ready to be plotted.

    Takes:
        params: EllipseParams
        size: number of points, at least 1; the first and last point coincide so that the line closes
    Returns:
        (line, points): an ordered (size, 2) array and a read-only view of it for scatter plots

    Raises NonFiniteResultError if any of the points contains a NaN or infinity.
    """
    if isinstance(size, bool) or not isinstance(size, (int, np.integer)) or size < 1:
        raise InvalidSizeError(f"Invalid number of curve points: {size}")

    # parametric representation of the ellipse: (a*cos(t), b*sin(t)), where t is <0, 2*pi>
    t = np.linspace(0, 2 * math.pi, size)

    # non-finite parameters are reported below, not as numpy warnings
    with np.errstate(invalid="ignore", over="ignore"):
        ellipse = np.column_stack((params.a * np.cos(t), params.b * np.sin(t)))
        # rotate by angle radians, then shift by the center
        line = ellipse @ _rotation_matrix(params.angle) + np.array(params.center)

    check_finite(line, NonFiniteResultError, f"{params} produced NaN or infinite curve points")

    points = line.view()
    points.flags.writeable = False

    logger.debug(f"Generated {size} curve points for {params}")
    return line, points
