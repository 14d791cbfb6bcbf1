import pytest

from pngfix.config import Config, IDATPolicy, MAX_CHUNKS, BUFSIZE
from pngfix.enum import Compliant


def test_defaults():
    config = Config()

    assert config.max_chunks == MAX_CHUNKS
    assert config.bufsize == BUFSIZE
    assert config.idat_policy == IDATPolicy.FIRST
    assert config.compliant == Compliant.NONE
    assert not config.verify


@pytest.mark.parametrize('kwargs', [
    {'max_chunks': 0},
    {'bufsize': -1},
    {'bufsize': '1024'},
])
def test_invalid(kwargs):
    with pytest.raises(ValueError):
        Config(**kwargs)


def test_policy_from_string():
    assert Config(idat_policy='merge').idat_policy == IDATPolicy.MERGE

    with pytest.raises(ValueError):
        Config(idat_policy='all')


def test_from_environ():
    config = Config.from_environ({
        'PNGFIX_MAX_CHUNKS': '5',
        'PNGFIX_BUFSIZE': '4096',
        'PNGFIX_IDAT': 'MERGE',
        'PNGFIX_CHECK_CRC': 'yes',
        'PNGFIX_VERIFY': '1',
    })

    assert config.max_chunks == 5
    assert config.bufsize == 4096
    assert config.idat_policy == IDATPolicy.MERGE
    assert config.compliant & Compliant.CRC
    assert config.verify


def test_from_empty_environ():
    config = Config.from_environ({})

    assert config.max_chunks == MAX_CHUNKS
    assert not config.compliant & Compliant.CRC
    assert not config.verify
