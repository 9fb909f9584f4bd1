MAX_TOKENS = 5

WHITESPACE = frozenset(" \t\n\v\f\r\0")

class Tokenizer:
	"""Walks a cue sheet buffer line by line.

	Every line is cut into at most MAX_TOKENS tokens, stored as
	(start, end) spans into the buffer. A token that starts with a
	double quote runs to the closing quote and keeps its inner
	whitespace; the quotes themselves are not part of the token, and
	the character following the closing quote is consumed with them.
	"""

	def __init__(self, data, limit = MAX_TOKENS):
		self.data = data
		self.limit = limit
		self.offset = 0
		self.spans = []

	def __iter__(self):
		while self.next_line():
			yield self.tokens()

	def next_line(self):
		size = len(self.data)
		if self.offset >= size:
			return False

		start = self.offset
		end = self.data.find("\n", start)
		if end < 0:
			end = size

		self.offset = end + 1
		self.spans = self.split(start, end)
		return True

	def split(self, pos, end):
		data = self.data
		spans = []

		while len(spans) < self.limit:
			while pos < end and data[pos] in WHITESPACE:
				pos += 1
			if pos >= end:
				break

			if data[pos] == '"':
				close = data.find('"', pos + 1, end)
				if close < 0:
					break
				spans.append((pos + 1, close))
				# the character after the closing quote is a separator
				pos = close + 2
			else:
				start = pos
				while pos < end and data[pos] not in WHITESPACE:
					pos += 1
				spans.append((start, pos))

		return spans

	def ntokens(self):
		return len(self.spans)

	def token(self, n):
		if n >= len(self.spans):
			return None

		start, end = self.spans[n]
		return self.data[start:end]

	def tokens(self):
		return [self.data[start:end] for start, end in self.spans]
