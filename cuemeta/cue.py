from . tokens import Tokenizer

from collections import namedtuple

import os
import re

from cchardet import detect as encoding_detect

UINT32_MAX = 2 ** 32 - 1
UINT64_MAX = 2 ** 64 - 1

FRAMES_PER_SECOND = 75

class Length(namedtuple("Length", "mm ss ff")):
	__slots__ = ()

	@property
	def frames(self):
		return (self.mm * 60 + self.ss) * FRAMES_PER_SECOND + self.ff

	def __str__(self):
		return "%02d:%02d:%02d" % self

Index = namedtuple("Index", "number length")

Comment = namedtuple("Comment", "tag value")

class ISRC(namedtuple("ISRC", "country owner year serial")):
	__slots__ = ()

	def __str__(self):
		return "%s%s%s%05d" % self

class FileType:
	BINARY		= "BINARY"
	MOTOROLA	= "MOTOROLA"
	AIFF		= "AIFF"
	WAVE		= "WAVE"
	MP3		= "MP3"

	# lookup order
	ALL = (BINARY, WAVE, MP3, AIFF, MOTOROLA)

class TrackType:
	AUDIO		= "AUDIO"
	CDG		= "CDG"
	MODE1_2048	= "MODE1/2048"
	MODE1_2352	= "MODE1/2352"
	MODE2_2048	= "MODE2/2048"
	MODE2_2324	= "MODE2/2324"
	MODE2_2336	= "MODE2/2336"
	MODE2_2352	= "MODE2/2352"
	CDI_2336	= "CDI/2336"
	CDI_2352	= "CDI/2352"

	ALL = (
		AUDIO,
		MODE1_2048, MODE1_2352,
		MODE2_2048, MODE2_2324, MODE2_2336, MODE2_2352,
		CDG,
		CDI_2336, CDI_2352
	)

class TrackFlag:
	DCP	= 0x1
	CH4	= 0x2
	PRE	= 0x4
	SCMS	= 0x8

	NAMES = (
		("DCP", DCP),
		("4CH", CH4),
		("PRE", PRE),
		("SCMS", SCMS),
	)

	@staticmethod
	def names(flags):
		return [name for name, bit in TrackFlag.NAMES if flags & bit]

class Track:
	def __init__(self, number, datatype):
		self.number = number
		self.type = datatype
		self.flags = 0

		self.pregap = None
		self.indexes = []
		self.postgap = None

		self.title = ""
		self.performer = ""
		self.songwriter = ""
		self.isrc = None

	def isaudio(self):
		return self.type == TrackType.AUDIO

	def has_flag(self, flag):
		return self.flags & flag != 0

	def index(self, number):
		for index in self.indexes:
			if index.number == number:
				return index
		return None

	@property
	def begin(self):
		lengths = [index.length for index in self.indexes if index.number != 0]
		if not lengths:
			return None
		return min(lengths, key = lambda length: length.frames)

	def __repr__(self):
		return "Track(%d, %s)" % (self.number, self.type)

class File:
	def __init__(self, name, filetype):
		self.name = name
		self.type = filetype
		self.tracks = []

	def isaudio(self):
		return self.type in (FileType.WAVE, FileType.MP3, FileType.AIFF)

	def __repr__(self):
		return self.name

class CueSheet:
	def __init__(self):
		self.files = []
		self.catalog = None
		self.cdtextfile = ""

		self.title = ""
		self.performer = ""
		self.songwriter = ""

		self.comments = []

	def tracks(self):
		for file in self.files:
			for track in file.tracks:
				yield track

	def comment(self, tag):
		tag = tag.upper()
		for comment in self.comments:
			if comment.tag == tag:
				return comment.value
		return None

	def seal(self):
		for file in self.files:
			for track in file.tracks:
				track.indexes = tuple(track.indexes)
			file.tracks = tuple(file.tracks)

		self.files = tuple(self.files)
		self.comments = tuple(self.comments)

class CueParserError(Exception):
	pass

class UnknownCommand(CueParserError):
	pass

class InvalidCommand(CueParserError):
	pass

class InvalidContext(CueParserError):
	pass

class Context:
	(
		GENERAL,
		FILE,
		TRACK
	) = range(3)

# leading C whitespace, optional sign, decimal digits
re_digits = re.compile("[ \t\n\v\f\r]*([+-]?)([0-9]+)")

def scan_number(value, pos = 0):
	"""Reads an unsigned 64-bit number at value[pos:] the way strtoull does.

	Returns (number, end). Without digits the number is 0 and end is pos.
	Negative values wrap around, values too large saturate.
	"""
	m = re_digits.match(value, pos)
	if not m:
		return 0, pos

	sign, digits = m.groups()
	digits = digits.lstrip("0") or "0"
	if len(digits) > 20:
		return UINT64_MAX, m.end()

	number = int(digits)
	if number > UINT64_MAX:
		return UINT64_MAX, m.end()
	if sign == "-":
		number = -number & UINT64_MAX

	return number, m.end()

def parse_number(value, mask = UINT32_MAX):
	number, end = scan_number(value)
	if end != len(value):
		raise InvalidCommand("invalid number '%s'" % value)

	return number & mask

def parse_timestamp(value):
	fields = []
	pos = 0
	for sep in (":", ":", ""):
		number, pos = scan_number(value, pos)
		if number >= 100:
			raise InvalidCommand("timestamp '%s' out of range" % value)

		if sep:
			if value[pos:pos + 1] != sep:
				raise InvalidCommand("invalid timestamp '%s'" % value)
			pos += 1
		elif pos != len(value):
			raise InvalidCommand("invalid timestamp '%s'" % value)

		fields.append(number)

	return Length(*fields)

def parse_isrc(value):
	if len(value) != 12:
		raise InvalidCommand("invalid ISRC '%s'" % value)

	serial, end = scan_number(value, 7)
	if end != len(value):
		raise InvalidCommand("invalid ISRC serial '%s'" % value[7:])

	return ISRC(value[0:2], value[2:5], value[5:7], serial & UINT32_MAX)

def lookup_type(value, types, what):
	upper = value.upper()
	for name in types:
		if upper.startswith(name):
			return name

	raise InvalidCommand("unknown %s type '%s'" % (what, value))

def file_type(value):
	return lookup_type(value, FileType.ALL, "file")

def track_type(value):
	return lookup_type(value, TrackType.ALL, "track")

def parse_flags(names):
	flags = 0
	for name in names:
		upper = name.upper()
		for prefix, bit in TrackFlag.NAMES:
			if upper.startswith(prefix):
				flags |= bit
				break

	return flags

def check(count = 0, context = None, exact = False):
	def deco(func):
		def method(cls, *args):
			n = len(args)
			if n < count or (exact and n != count):
				raise InvalidCommand(
					"%d arg%s expected, got %d" %
					(count, "s" if count > 1 else "", n)
				)
			if context is not None:
				if type(context) in (list, tuple):
					if cls.context not in context:
						raise InvalidContext
				elif cls.context != context:
					raise InvalidContext
			func(cls, *args)
		method.__name__ = func.__name__
		return method
	return deco

class CueParser:
	def __init__(self, on_skip = None):
		def do_set_text(name):
			def func(*args):
				n = len(args)
				if n < 1:
					raise InvalidCommand("1 arg expected, got %d" % n)

				obj = self.track if self.context == Context.TRACK else self.cue
				setattr(obj, name, args[0])
			return func

		self.cue = CueSheet()
		self.on_skip = on_skip

		# matched by prefix, in this order
		self.commands = (
			("FILE",	self.parse_file),
			("TRACK",	self.parse_track),
			("INDEX",	self.parse_index),
			("PREGAP",	self.parse_pregap),
			("POSTGAP",	self.parse_postgap),
			("REM",		self.parse_rem),
			("TITLE",	do_set_text("title")),
			("PERFORMER",	do_set_text("performer")),
			("SONGWRITER",	do_set_text("songwriter")),
			("ISRC",	self.parse_isrc),
			("FLAGS",	self.parse_flags),
			("CATALOG",	self.parse_catalog),
			("CDTEXTFILE",	self.parse_cdtextfile),
		)

	@property
	def file(self):
		return self.cue.files[-1] if self.cue.files else None

	@property
	def track(self):
		file = self.file
		if file is None or not file.tracks:
			return None
		return file.tracks[-1]

	@property
	def context(self):
		if not self.cue.files:
			return Context.GENERAL
		if not self.cue.files[-1].tracks:
			return Context.FILE
		return Context.TRACK

	def get_cue(self):
		cue, self.cue = self.cue, CueSheet()
		cue.seal()
		return cue

	@check(2)
	def parse_file(self, name, filetype, *args):
		self.cue.files.append(File(name, file_type(filetype)))

	@check(2, (Context.FILE, Context.TRACK))
	def parse_track(self, number, datatype, *args):
		track = Track(parse_number(number), track_type(datatype))
		self.file.tracks.append(track)

	@check(2, Context.TRACK)
	def parse_index(self, number, time, *args):
		index = Index(parse_number(number), parse_timestamp(time))
		self.track.indexes.append(index)

	@check(1, Context.TRACK)
	def parse_pregap(self, time, *args):
		self.track.pregap = parse_timestamp(time)

	@check(1, Context.TRACK)
	def parse_postgap(self, time, *args):
		self.track.postgap = parse_timestamp(time)

	@check(2, exact = True)
	def parse_rem(self, tag, value):
		self.cue.comments.append(Comment(tag.upper(), value))

	@check(1, Context.TRACK)
	def parse_isrc(self, code, *args):
		self.track.isrc = parse_isrc(code)

	@check(0, Context.TRACK)
	def parse_flags(self, *names):
		self.track.flags = parse_flags(names)

	@check(1)
	def parse_catalog(self, number, *args):
		self.cue.catalog = parse_number(number, UINT64_MAX)

	@check(1)
	def parse_cdtextfile(self, name, *args):
		self.cue.cdtextfile = name

	def lookup(self, cmd):
		upper = cmd.upper()
		for name, handler in self.commands:
			if upper.startswith(name):
				return handler

		raise UnknownCommand

	def parse(self, cmd, *args):
		self.lookup(cmd)(*args)

	def feed(self, data):
		def report(fmt, *args):
			if self.on_skip:
				self.on_skip(cmd, fmt % args)

		for tokens in Tokenizer(data):
			if not tokens:
				continue

			cmd = tokens[0]
			try:
				self.parse(*tokens)
			except UnknownCommand:
				report("unknown command")
			except InvalidContext:
				report("invalid context")
			except InvalidCommand as err:
				report("invalid command: %s", err)

def decode(content, coding = None):
	if isinstance(content, str):
		text = content
	else:
		text = None
		if coding:
			try:
				text = content.decode(coding, "replace")
			except LookupError:
				text = None

		if text is None:
			try:
				text = content.decode("utf-8-sig")
			except UnicodeDecodeError:
				encoding = encoding_detect(content).get("encoding")
				if encoding:
					try:
						text = content.decode(encoding)
					except (UnicodeDecodeError, LookupError):
						text = None

		if text is None:
			text = content.decode("latin-1")

	if text.startswith("\ufeff"):
		text = text[1:]

	return text

def parse(content, coding = None, on_skip = None):
	parser = CueParser(on_skip)
	parser.feed(decode(content, coding))
	return parser.get_cue()

def parse_file(filename, coding = None, on_skip = None):
	with open(filename, "rb") as fp:
		size = os.fstat(fp.fileno()).st_size
		data = fp.read(size)

	if len(data) != size:
		raise IOError("%s: short read, %d of %d bytes" % (filename, len(data), size))

	return parse(data, coding, on_skip)
