#!/usr/bin/env python

from setuptools import setup

import shutil
import os

shutil.copyfile("cuedump.py", "cuemeta/cuedump")

setup(name="cuemeta",
	version="0.1.0",
	description="Cue sheet parser",
	packages=["cuemeta"],
	scripts=["cuemeta/cuedump"],
	install_requires=["faust-cchardet"],
	extras_require={"test": ["pytest"]},
	python_requires=">=3.6",
)

try:
	os.remove("cuemeta/cuedump")
except OSError:
	pass

if os.path.exists("build/"):
	shutil.rmtree("build", ignore_errors=True)
