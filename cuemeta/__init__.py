from . cue import (
	parse, parse_file,
	CueSheet, File, Track, Index, Length, ISRC, Comment,
	FileType, TrackType, TrackFlag
)
from . tokens import Tokenizer, MAX_TOKENS
