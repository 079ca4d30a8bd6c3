import json
import sys
from pathlib import Path

import pytest

from jsxtree import cli


def run_cli(argv: list[str]) -> None:
  original_argv = sys.argv
  try:
    sys.argv = ["jsxtree"] + argv
    cli.main()
  finally:
    sys.argv = original_argv


def test_cli_prints_normalized_markup(tmp_path: Path, capsys) -> None:
  path = tmp_path / "App.jsx"
  path.write_text("export default function App() {\n  return <div className='app'><p>Hi</p></div>;\n}\n", encoding="utf-8")
  run_cli([str(path)])
  out = capsys.readouterr().out
  assert out == '<div className="app">\n  <p>Hi</p>\n</div>\n'


def test_cli_indent(tmp_path: Path, capsys) -> None:
  path = tmp_path / "list.jsx"
  path.write_text("<ul><li>A</li></ul>", encoding="utf-8")
  run_cli([str(path), "--indent", "4"])
  assert capsys.readouterr().out == "<ul>\n    <li>A</li>\n</ul>\n"


def test_cli_json(tmp_path: Path, capsys) -> None:
  path = tmp_path / "Card.tsx"
  path.write_text("<section>{title}</section>", encoding="utf-8")
  run_cli([str(path), "--json"])
  data = json.loads(capsys.readouterr().out)
  assert data["name"] == "Card"
  assert data["serializedComponent"]["type"] == "section"
  assert data["serializedComponent"]["children"] == [{"$expression": "title"}]


def test_cli_reports_failure(tmp_path: Path, capsys) -> None:
  path = tmp_path / "broken.jsx"
  path.write_text("just words", encoding="utf-8")
  with pytest.raises(SystemExit) as exc:
    run_cli([str(path)])
  assert exc.value.code == 1
  assert capsys.readouterr().out.startswith(f"{path}:1:1: ")
