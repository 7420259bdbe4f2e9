#!/usr/bin/env python3
"""
Plot an ellipse given by its parameters, either on the command line or in a YAML file written by confidence.py.
"""

import argparse
import coloredlogs, logging
import math
from pathlib import Path
import matplotlib.pyplot as plt
import yaml
from ellipse import EllipseParams, EllipseError, InvalidDataError
from utility import PARAMS_TAGS, X_TAG, Y_TAG, A_TAG, B_TAG, ANGLE_TAG, DEFAULT_CURVE_POINTS, logger, is_valid_file, is_valid_size


def parse_cli(argv=None):

	# All input that is needed
	parser = argparse.ArgumentParser(description="Simple -- plot an ellipse from its center, semi-axes and rotation")
	parser.add_argument("--params-file", dest="params_file", type=lambda x: is_valid_file(parser, x), required=False, help="path to a YAML parameters file to read; overrides the values below")
	parser.add_argument("--x", dest="x", type=float, default=10.0, help="X coordinate of the center")
	parser.add_argument("--y", dest="y", type=float, default=10.0, help="Y coordinate of the center")
	parser.add_argument("--a", dest="a", type=float, default=50.0, help="semi-axis length along the rotated X axis")
	parser.add_argument("--b", dest="b", type=float, default=10.0, help="semi-axis length along the rotated Y axis")
	parser.add_argument("--angle", dest="angle", type=float, default=math.pi / 2, help="rotation in radians")
	parser.add_argument("--points", dest="points", type=lambda x: is_valid_size(parser, x), default=DEFAULT_CURVE_POINTS, help="number of curve points")
	parser.add_argument("--image-file", dest="image_file", type=str, default="simple.png", help="path to the image to write")
	parser.add_argument("-v", dest="verbose", default=False, help="increase output verbosity", action="store_true")

	args = parser.parse_args(argv)

	# enable colored logs
	coloredlogs.install(level=logging.DEBUG if args.verbose else logging.INFO, logger=logger)

	return args


def read_params_file(params_file_path):
	"""
	Read ellipse parameters from the YAML file given by the path.

	Returns a dictionary with x, y, a, b and angle keys.
	"""

	content = None
	with open(Path(params_file_path), "r") as params_file:
		try:
			content = yaml.safe_load(params_file)
		except yaml.YAMLError as exception:
			logger.critical(exception)

	if not isinstance(content, dict):
		raise InvalidDataError(f"No ellipse parameters in {params_file_path}")

	missing = [tag for tag in PARAMS_TAGS if tag not in content]
	if missing:
		raise InvalidDataError(f"Missing ellipse parameters in {params_file_path}: {', '.join(missing)}")

	return {tag: float(content[tag]) for tag in PARAMS_TAGS}


def main(argv=None):
	args = parse_cli(argv)

	try:
		if args.params_file:
			params = read_params_file(args.params_file)
			logger.info(f"Read ellipse parameters from {args.params_file}")
		else:
			params = {X_TAG: args.x, Y_TAG: args.y, A_TAG: args.a, B_TAG: args.b, ANGLE_TAG: args.angle}

		ellipse = EllipseParams.from_axes(params[A_TAG], params[B_TAG], params[ANGLE_TAG], center=(params[X_TAG], params[Y_TAG]))
		line, _ = ellipse.line_points(args.points)
	except EllipseError as exception:
		logger.critical(f"Failed to compute ellipse curve points: {exception}")
		exit(1)

	logger.info(f"{ellipse}, eccentricity {ellipse.eccentricity:.2f}, area {ellipse.area:.2f}")

	plt.figure(figsize=[4, 4])
	plt.plot(line[:, 0], line[:, 1], color="mediumblue", label=f"a={ellipse.a:g}\nb={ellipse.b:g}\nangle={ellipse.angle:.2f}")
	plt.title("Ellipse Example")
	plt.xlabel("X")
	plt.ylabel("Y")
	plt.legend(loc="upper right")

	plt.savefig(args.image_file)
	plt.close()
	logger.info(f"Saved to image file: {args.image_file}")


if __name__ == "__main__":
	main()
