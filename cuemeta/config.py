import configparser
import os

CONFIG_FILE_PATH = os.path.expanduser("~/.cuemeta.cfg")

ConfigParserClass = configparser.RawConfigParser

def __create_default(name):
	with open(name, "w") as fp:
		fp.write(
"""[input]
# encoding of cue files, autodetect when empty
# coding = cp1251

[output]
# report lines that were skipped
verbose = false

# print positions as frame counts instead of mm:ss:ff
frames = false
""")

def with_default(func, msg = None):
	def method(cls, section, option, default = None):
		try:
			return func(cls.parser, section, option)
		except configparser.NoSectionError:
			return default
		except configparser.NoOptionError:
			return default
		except ValueError as err:
			raise Exception("%s::%s: %s" % (section, option, msg or err))
	return method

class CfgParser:
	def __init__(self):
		self.parser = ConfigParserClass()

	get = with_default(ConfigParserClass.get)
	getbool = with_default(ConfigParserClass.getboolean, "invalid bool")

	def __getattr__(self, attr):
		return getattr(self.parser, attr)

class Config:
	def __init__(self, cfg):
		self.CODING	= cfg.get("input", "coding") or None
		self.VERBOSE	= cfg.getbool("output", "verbose", False)
		self.FRAMES	= cfg.getbool("output", "frames", False)

def load(path = CONFIG_FILE_PATH, create = True):
	cfg = CfgParser()
	if not cfg.read(path) and create:
		__create_default(path)

	return Config(cfg)
