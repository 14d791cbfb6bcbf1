import pytest

from pngfix.cli import main

from pngbuilder import PNG_MAGIC


@pytest.fixture(autouse=True)
def clean_environ(monkeypatch):
    for name in ('PNGFIX_MAX_CHUNKS', 'PNGFIX_BUFSIZE', 'PNGFIX_IDAT', 'PNGFIX_CHECK_CRC', 'PNGFIX_VERIFY'):
        monkeypatch.delenv(name, raising=False)


@pytest.mark.parametrize('argv', [
    ['fixpng'],
    ['fixpng', 'in.png'],
    ['fixpng', 'in.png', 'out.png', 'extra'],
])
def test_usage(argv, capsys):
    with pytest.raises(SystemExit) as e:
        main(argv)

    assert e.value.code == 1
    assert 'Usage: fixpng <input> <output>' in capsys.readouterr().out


def test_success(tmp_path, cgbi_png):
    input_path = tmp_path / 'in.png'
    output_path = tmp_path / 'out.png'
    input_path.write_bytes(cgbi_png)

    assert main(['fixpng', str(input_path), str(output_path)]) == 0
    assert output_path.read_bytes().startswith(PNG_MAGIC)


def test_not_a_png(tmp_path, capsys):
    input_path = tmp_path / 'in.png'
    input_path.write_bytes(b'GIF89a' + b'\x00' * 0x20)

    with pytest.raises(SystemExit) as e:
        main(['fixpng', str(input_path), str(tmp_path / 'out.png')])

    assert e.value.code == 1
    assert 'This is not a PNG file' in capsys.readouterr().out
    assert not (tmp_path / 'out.png').exists()


def test_missing_input(tmp_path, capsys):
    with pytest.raises(SystemExit) as e:
        main(['fixpng', str(tmp_path / 'nope.png'), str(tmp_path / 'out.png')])

    assert e.value.code == 1
    assert 'Couldn\'t read file' in capsys.readouterr().out


def test_conversion_error(tmp_path, cgbi_png, capsys, monkeypatch):
    input_path = tmp_path / 'in.png'
    input_path.write_bytes(cgbi_png)
    monkeypatch.setenv('PNGFIX_MAX_CHUNKS', '2')

    with pytest.raises(SystemExit) as e:
        main(['fixpng', str(input_path), str(tmp_path / 'out.png')])

    assert e.value.code == 1
    assert 'StructuralException' in capsys.readouterr().out


def test_invalid_configuration(tmp_path, cgbi_png, capsys, monkeypatch):
    input_path = tmp_path / 'in.png'
    input_path.write_bytes(cgbi_png)
    monkeypatch.setenv('PNGFIX_BUFSIZE', '0')

    with pytest.raises(SystemExit) as e:
        main(['fixpng', str(input_path), str(tmp_path / 'out.png')])

    assert e.value.code == 1
    assert 'invalid configuration' in capsys.readouterr().out
