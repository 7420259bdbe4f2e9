#!/usr/bin/env python3
"""
Confidence ellipse of a 2D point cloud.

Inputs:
	1. CSV file with X and Y columns, or the number of random Gaussian samples to generate;
	2. Confidence level, the probability mass the ellipse should hold;
	3. Number of curve points.

Output:
	1. Image with the data, its mean and the ellipse (confidence.png by default);
	2. Optionally, a YAML file with the ellipse parameters (can be read by simple.py).
"""

import argparse
import coloredlogs, logging
import textwrap
from pathlib import Path
import numpy as np
import pandas as pd
import matplotlib.pyplot as plt
import yaml
from ellipse import EllipseParams, EllipseError
from utility import X_TAG, Y_TAG, A_TAG, B_TAG, ANGLE_TAG, CONFIDENCE_TAG, DEFAULT_CONFIDENCE, logger, is_valid_file, is_valid_confidence, is_valid_size

DEFAULT_SAMPLES = 200
DEFAULT_SIGMA = 5.0


def parse_cli(argv=None):
	"""Parse command line arguments and return them as values"""

	parser = argparse.ArgumentParser(
		description="Confidence -- compute and plot the confidence ellipse of 2D data",
		formatter_class=argparse.RawDescriptionHelpFormatter,
		epilog=textwrap.dedent("""\
			Example:
				./confidence.py --confidence 0.95 -v
				./confidence.py --data-file ./points.csv --x-column x0 --y-column y0 --params-file ./ellipse.yaml
		"""),
	)
	parser.add_argument("--data-file", dest="data_file", type=lambda x: is_valid_file(parser, x), required=False, help="path to a CSV data file to read; random Gaussian data is generated if not given")
	parser.add_argument("--x-column", dest="x_column", type=str, default=X_TAG, help="name of the X column in the data file")
	parser.add_argument("--y-column", dest="y_column", type=str, default=Y_TAG, help="name of the Y column in the data file")
	parser.add_argument("--size", dest="size", type=lambda x: is_valid_size(parser, x), default=DEFAULT_SAMPLES, help="number of random samples to generate")
	parser.add_argument("--sigma", dest="sigma", type=float, default=DEFAULT_SIGMA, help="standard deviation of the random samples")
	parser.add_argument("--seed", dest="seed", type=int, default=None, help="seed of the random samples")
	parser.add_argument("--confidence", dest="confidence", type=lambda x: is_valid_confidence(parser, x), default=DEFAULT_CONFIDENCE, help="probability mass the ellipse should hold, in (0, 1]")
	parser.add_argument("--points", dest="points", type=lambda x: is_valid_size(parser, x), default=None, help="number of curve points (default is the number of samples)")
	parser.add_argument("--params-file", dest="params_file", type=str, default=None, help="path to a YAML file to write the ellipse parameters to")
	parser.add_argument("--image-file", dest="image_file", type=str, default="confidence.png", help="path to the image to write")
	parser.add_argument("-v", dest="verbose", default=False, help="increase output verbosity", action="store_true")

	args = parser.parse_args(argv)

	# enable colored logs
	coloredlogs.install(level=logging.DEBUG if args.verbose else logging.INFO, logger=logger)

	return args


def read_data(data_file, x_column, y_column):
	frame = pd.read_csv(data_file, usecols=[x_column, y_column])
	logger.info(f"Read {len(frame.index)} samples from {data_file}")

	return frame[[x_column, y_column]].to_numpy()


def random_data(size, sigma, seed=None):
	rng = np.random.default_rng(seed)
	return sigma * rng.standard_normal((size, 2))


def write_params_file(ellipse, confidence, params_file_path):
	"""
	Write the ellipse parameters to the file given by the path.
	Will overwrite the file if exists.
	"""

	params = {
		X_TAG: ellipse.x,
		Y_TAG: ellipse.y,
		A_TAG: ellipse.a,
		B_TAG: ellipse.b,
		ANGLE_TAG: ellipse.angle,
		CONFIDENCE_TAG: confidence,
	}

	with open(Path(params_file_path), "w", encoding="utf8") as params_file:
		yaml.dump(params, params_file, default_flow_style=False, allow_unicode=True)


def plot(data, ellipse, confidence, points, image_file):
	line, _ = ellipse.line_points(points)

	plt.figure(figsize=[4, 4])
	plt.scatter(data[:, 0], data[:, 1], s=1, color="mediumvioletred", label="Data")
	plt.plot(*ellipse.center, "^", color="green", alpha=0.5, label="Mean")
	plt.plot(line[:, 0], line[:, 1], color="mediumblue", label=f"{100 * confidence:.2f}%")

	plt.title("Ellipse Example")
	plt.xlabel("X")
	plt.ylabel("Y")
	plt.legend()

	plt.savefig(image_file)
	plt.close()
	logger.info(f"Saved to image file: {image_file}")


def main(argv=None):
	args = parse_cli(argv)

	if args.data_file:
		data = read_data(args.data_file, args.x_column, args.y_column)
	else:
		data = random_data(args.size, args.sigma, args.seed)
		logger.info(f"Generated {len(data)} random samples (sigma = {args.sigma})")

	try:
		ellipse = EllipseParams.from_confidence(data, args.confidence)
		logger.info(f"{ellipse}, eccentricity {ellipse.eccentricity:.2f}")
		logger.info(f"{np.count_nonzero(ellipse.contains(data))} of {len(data)} samples are inside")

		plot(data, ellipse, args.confidence, args.points or len(data), args.image_file)
	except EllipseError as exception:
		logger.critical(f"Failed to compute the confidence ellipse: {exception}")
		exit(1)

	if args.params_file:
		write_params_file(ellipse, args.confidence, args.params_file)
		logger.info(f"Written to YAML file: {args.params_file}")


if __name__ == "__main__":
	main()
