"""Tests for cue sheet line tokenization."""

from cuemeta.tokens import Tokenizer, MAX_TOKENS


def lines(data):
	return list(Tokenizer(data))


def test_splits_on_whitespace():
	assert lines("TRACK 01   AUDIO\n") == [["TRACK", "01", "AUDIO"]]


def test_tabs_are_whitespace():
	assert lines("\tINDEX\t01\t00:00:00") == [["INDEX", "01", "00:00:00"]]


def test_quoted_token_keeps_spaces():
	assert lines('FILE "A B C" WAVE\n') == [["FILE", "A B C", "WAVE"]]


def test_quoted_empty_token():
	assert lines('TITLE ""\n') == [["TITLE", ""]]


def test_quote_inside_token_is_literal():
	assert lines('TITLE ab"cd\n') == [["TITLE", 'ab"cd']]


def test_character_after_closing_quote_is_consumed():
	assert lines('TITLE "A B"C D\n') == [["TITLE", "A B", "D"]]
	assert lines('FILE "a"b WAVE\n') == [["FILE", "a", "WAVE"]]


def test_unterminated_quote_stops_line():
	assert lines('FILE "broken WAVE\nTRACK 01 AUDIO\n') == [
		["FILE"],
		["TRACK", "01", "AUDIO"],
	]


def test_empty_and_blank_lines_have_no_tokens():
	assert lines("\n   \t\nREM A B\n") == [[], [], ["REM", "A", "B"]]


def test_last_line_without_newline():
	assert lines("CATALOG 1\nCDTEXTFILE x") == [["CATALOG", "1"], ["CDTEXTFILE", "x"]]


def test_single_character_last_line():
	assert lines("A\nB") == [["A"], ["B"]]


def test_empty_buffer():
	assert lines("") == []


def test_carriage_return_is_not_part_of_token():
	assert lines('TITLE "X Y"\r\nTRACK 01 AUDIO\r\n') == [
		["TITLE", "X Y"],
		["TRACK", "01", "AUDIO"],
	]


def test_token_cap():
	tokens = lines("FLAGS A B C D E F G\n")[0]
	assert len(tokens) == MAX_TOKENS
	assert tokens == ["FLAGS", "A", "B", "C", "D"]


def test_token_accessors():
	tokenizer = Tokenizer('FILE "x.bin" BINARY\n')
	assert tokenizer.next_line()
	assert tokenizer.ntokens() == 3
	assert tokenizer.token(1) == "x.bin"
	assert tokenizer.token(3) is None
	assert not tokenizer.next_line()


def test_buffer_is_not_modified():
	data = 'FILE "a b" WAVE\nTRACK 1 AUDIO\n'
	copy = str(data)
	lines(data)
	assert data == copy
