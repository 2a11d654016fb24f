import json
from pathlib import Path

import pytest

from bft import __version__
from bft.__main__ import main
from bft.parser import load_program
from bft.program_json import program_to_obj

EXAMPLES = Path(__file__).resolve().parent.parent / 'examples'


def test_cli_hello_world(capsysbinary):
    main([str(EXAMPLES / 'hello_world.bf')])
    assert capsysbinary.readouterr().out == b"Hello World!\n"


def test_cli_small_extensible_tape(capsysbinary):
    main(['--cells', '1', '--extensible', str(EXAMPLES / 'hello_world.bf')])
    assert capsysbinary.readouterr().out == b"Hello World!\n"


def test_cli_small_fixed_tape(capsysbinary):
    with pytest.raises(SystemExit) as excinfo:
        main(['-c', '1', str(EXAMPLES / 'hello_world.bf')])
    assert excinfo.value.code == 1
    captured = capsysbinary.readouterr()
    assert captured.out == b"\n"
    assert b"Head falling off edge by 2:10 Increment current pointer" in captured.err


def test_cli_left_edge(capsysbinary):
    with pytest.raises(SystemExit) as excinfo:
        main([str(EXAMPLES / 'left_edge.bf')])
    assert excinfo.value.code == 1
    captured = capsysbinary.readouterr()
    assert captured.out == b"\x01\n"
    assert b"Error: Head falling off edge by 2:3 Decrement current pointer" in captured.err


def test_cli_unmatched_bracket(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(EXAMPLES / 'unmatched_open.bf')])
    assert excinfo.value.code == 1
    assert "line 2 column 2" in capsys.readouterr().err


def test_cli_missing_file(tmp_path, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([str(tmp_path / 'missing.bf')])
    assert excinfo.value.code == 1
    assert "not found" in capsys.readouterr().err


@pytest.mark.parametrize('cells', ['0', '-3', 'many'])
def test_cli_rejects_bad_cell_count(cells, capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['--cells', cells, str(EXAMPLES / 'hello_world.bf')])
    assert excinfo.value.code == 2
    assert "cell count" in capsys.readouterr().err


def test_cli_requires_program(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main([])
    assert excinfo.value.code == 2


def test_cli_version(capsys):
    with pytest.raises(SystemExit) as excinfo:
        main(['--version'])
    assert excinfo.value.code == 0
    assert capsys.readouterr().out.strip() == f"bft {__version__}"


def test_cli_list(capsys):
    path = EXAMPLES / 'countdown.bf'
    main(['--list', str(path)])
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == f"{path}: 2:1 Type into current data"
    assert lines[-1] == f"{path}: 2:5 End looping"
    assert len(lines) == 5


def test_cli_emit_json(tmp_path, capsys):
    source = tmp_path / 'countdown.bf'
    source.write_text((EXAMPLES / 'countdown.bf').read_text(encoding='utf-8'), encoding='utf-8')
    main(['--emit-json', str(source)])
    out_path = Path(capsys.readouterr().out.strip())
    assert out_path == tmp_path / 'countdown.bf.json'
    data = json.loads(out_path.read_text(encoding='utf-8'))
    assert data == program_to_obj(load_program(source))


def test_cli_run_json(tmp_path, capsysbinary):
    json_path = tmp_path / 'hello.json'
    json_path.write_text(json.dumps(program_to_obj(load_program(EXAMPLES / 'hello_world.bf'))), encoding='utf-8')
    main(['--json', str(json_path)])
    assert capsysbinary.readouterr().out == b"Hello World!\n"


def test_cli_debug_file(tmp_path, monkeypatch, capsysbinary):
    monkeypatch.chdir(tmp_path)
    main(['-vv', str(EXAMPLES / 'hello_world.bf')])
    assert capsysbinary.readouterr().out == b"Hello World!\n"
    trace = (tmp_path / 'debug.txt').read_text()
    assert "2:1 Increment current data" in trace
    assert "finished" in trace


@pytest.mark.parametrize('content', ['[1, 2]', '{"type": "Program", "instructions": [5]}', '{not json'])
def test_cli_malformed_json(tmp_path, capsys, content):
    json_path = tmp_path / 'bad.json'
    json_path.write_text(content, encoding='utf-8')
    with pytest.raises(SystemExit) as excinfo:
        main(['--json', str(json_path)])
    assert excinfo.value.code == 1
    assert capsys.readouterr().err.startswith("Error: ")


@pytest.mark.parametrize('flag', ['--json', '--emit-json'])
def test_cli_rejects_program_with_json_flag(tmp_path, capsys, flag):
    with pytest.raises(SystemExit) as excinfo:
        main([flag, str(tmp_path / 'prog.json'), str(EXAMPLES / 'hello_world.bf')])
    assert excinfo.value.code == 2
    assert "cannot be combined" in capsys.readouterr().err
