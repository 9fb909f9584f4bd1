"""Tests for the configuration file and console helpers."""

import pytest

from cuemeta import config
from cuemeta.cue import Length
from cuemeta.tools import quote, msf, fatal, debug, printf


def test_default_file_is_created(tmp_path):
	path = tmp_path / "cuemeta.cfg"
	settings = config.load(str(path))

	assert path.exists()
	assert settings.CODING is None
	assert settings.VERBOSE is False
	assert settings.FRAMES is False

	reloaded = config.load(str(path))
	assert reloaded.VERBOSE is False


def test_values_are_read(tmp_path):
	path = tmp_path / "cuemeta.cfg"
	path.write_text("[input]\ncoding = cp1251\n\n[output]\nverbose = yes\nframes = true\n")
	settings = config.load(str(path))

	assert settings.CODING == "cp1251"
	assert settings.VERBOSE is True
	assert settings.FRAMES is True


def test_missing_file_without_create(tmp_path):
	path = tmp_path / "absent.cfg"
	settings = config.load(str(path), create = False)

	assert not path.exists()
	assert settings.CODING is None


def test_invalid_bool(tmp_path):
	path = tmp_path / "cuemeta.cfg"
	path.write_text("[output]\nverbose = maybe\n")
	with pytest.raises(Exception, match = "output::verbose: invalid bool"):
		config.load(str(path))


def test_quote():
	assert quote("abc") == "abc"
	assert quote("a b") == '"a b"'
	assert quote("") == '""'


def test_msf():
	length = Length(1, 2, 3)
	assert msf(length) == "01:02:03"
	assert msf(length, frames = True) == "4653"


def test_fatal_exits_with_message(capsys):
	with pytest.raises(SystemExit) as exc:
		fatal("no cue file in %s", "dir")
	assert exc.value.code == 1
	assert capsys.readouterr().err.endswith(": no cue file in dir\n")


def test_debug_and_printf(capsys):
	debug("skip %s: %s", "FOO", "unknown command")
	printf("TRACK %02d %s\n", 1, "AUDIO")
	out, err = capsys.readouterr()
	assert err == "-- skip FOO: unknown command\n"
	assert out == "TRACK 01 AUDIO\n"
