import argparse
import json
import sys
from pathlib import Path
from .document import Document
from .formatter import serialize
from .tree_models import NoTree

def main() -> None:
  ap = argparse.ArgumentParser(prog="jsxtree", description="Normalize JSX markup or dump its tree")
  ap.add_argument("input", help="component or markup source file")
  ap.add_argument("--json", action="store_true", help="print the document record as JSON")
  ap.add_argument("--indent", type=int, default=2, help="spaces per nesting level")
  args = ap.parse_args()

  path = Path(args.input)
  document = Document.from_code(path.read_text(encoding="utf-8"), name=path.stem)
  if isinstance(document, NoTree):
    print(f"{args.input}:{document.message}")
    sys.exit(1)
  if args.json:
    print(json.dumps(document.to_dict(), indent=args.indent, ensure_ascii=False))
  else:
    print(serialize(document.tree, indent=args.indent))

if __name__ == "__main__":
  main()
