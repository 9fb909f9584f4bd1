#!/usr/bin/env python

from cuemeta import cue
from cuemeta.cue import TrackFlag
from cuemeta.tools import *

import argparse
import codecs

import signal
import sys
import os

try:
	from cuemeta import config
	settings = config.load()
except Exception as err:
	fatal("load config failed: %s", err)

def print_cue(cuesheet, frames = False):
	if cuesheet.cdtextfile:
		printf("CDTEXTFILE %s\n", quote(cuesheet.cdtextfile))
	if cuesheet.catalog is not None:
		printf("CATALOG %013d\n", cuesheet.catalog)

	for attr in ("title", "performer", "songwriter"):
		value = getattr(cuesheet, attr)
		if value:
			printf("%s %s\n", attr.upper(), quote(value))

	for file in cuesheet.files:
		printf("FILE %s %s\n", quote(file.name), file.type)

		for track in file.tracks:
			printf("\tTRACK %02d %s\n", track.number, track.type)

			for attr in ("title", "performer", "songwriter"):
				value = getattr(track, attr)
				if value:
					printf("\t\t%s %s\n", attr.upper(), quote(value))

			if track.isrc is not None:
				printf("\t\tISRC %s\n", track.isrc)
			if track.flags:
				printf("\t\tFLAGS %s\n", " ".join(TrackFlag.names(track.flags)))
			if track.pregap is not None:
				printf("\t\tPREGAP %s\n", msf(track.pregap, frames))
			for index in track.indexes:
				printf("\t\tINDEX %02d %s\n", index.number, msf(index.length, frames))
			if track.postgap is not None:
				printf("\t\tPOSTGAP %s\n", msf(track.postgap, frames))

	for comment in cuesheet.comments:
		printf("REM %s %s\n", comment.tag, quote(comment.value))

def find_cuefile(path):
	for file in sorted(os.listdir(path)):
		fullname = os.path.join(path, file)
		if os.path.isfile(fullname) and file.lower().endswith(".cue"):
			return os.path.normpath(fullname)

	fatal("no cue file in %s", quote(path))

def parse_args():
	defaults = {
		"coding": settings.CODING,
		"verbose": settings.VERBOSE,
		"frames": settings.FRAMES,
	}

	parser = argparse.ArgumentParser(
		usage="%(prog)s cuefile [options]",
		description="cue sheet dump tool")

	parser.add_argument("cuefile")

	parser.add_argument("--coding", help="encoding of the cue file")

	parser.add_argument("-v", "--verbose", action="store_true",
		help="report skipped lines")

	parser.add_argument("--frames", action="store_true",
		help="print positions as frame counts")

	parser.set_defaults(**defaults)

	return parser.parse_args()

def sigint_handler(sig, frame):
	fatal("\n")

def main():
	options = parse_args()

	if options.coding:
		try:
			codecs.lookup(options.coding)
		except LookupError:
			fatal("unknown encoding %s", quote(options.coding))

	cuepath = options.cuefile
	if os.path.isdir(cuepath):
		cuepath = find_cuefile(cuepath)
		if options.verbose:
			debug("use cue file %s", quote(cuepath))

	on_skip = None
	if options.verbose:
		on_skip = lambda cmd, msg: debug("skip %s: %s", cmd, msg)

	try:
		cuesheet = cue.parse_file(cuepath, options.coding, on_skip)
	except IOError as err:
		fatal("open %s: %s", err.filename or cuepath, err.strerror or err)

	print_cue(cuesheet, options.frames)
	return 0

if __name__ == '__main__':
	signal.signal(signal.SIGINT, sigint_handler)
	sys.exit(main())
