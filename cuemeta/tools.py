import sys
import os

progname = os.path.basename(sys.argv[0])

def quote(s, ch = '"'):
	return s if s and " " not in s else ch + s + ch

def line(fmt, args):
	msg = fmt % args
	return msg if msg.endswith("\n") else msg + "\n"

def printf(fmt, *args):
	sys.stdout.write(fmt % args)

def fatal(fmt, *args):
	sys.stderr.write("** %s: %s" % (progname, line(fmt, args)))
	sys.exit(1)

def debug(fmt, *args):
	sys.stderr.write("-- " + line(fmt, args))

def msf(length, frames = False):
	if frames:
		return "%d" % length.frames
	return str(length)
