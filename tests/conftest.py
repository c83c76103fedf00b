import pytest

from pyinifile import IniFile

SAMPLE = """\
; loose pairs
name = demo

# database settings
# second line
[database]
host = localhost
; the port
port = 3306

[network]
ip=127.0.0.1
timeout = 30
"""


@pytest.fixture
def sample_text():
    return SAMPLE


@pytest.fixture
def sample_ini():
    return IniFile().from_string(SAMPLE)
