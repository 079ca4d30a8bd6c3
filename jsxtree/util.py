import random
import re
import string
from lark import Tree, Token

ID_ALPHABET = string.digits + string.ascii_lowercase
ID_LENGTH = 9

ESCAPE = re.compile(r"\\(u\{[0-9a-fA-F]+\}|u[0-9a-fA-F]{4}|x[0-9a-fA-F]{2}|\r\n|[\s\S])")
SIMPLE_ESCAPES = {
  "n": "\n",
  "t": "\t",
  "r": "\r",
  "b": "\b",
  "f": "\f",
  "v": "\v",
  "0": "\0",
  "\n": "",
  "\r": "",
  "\r\n": "",
  "\u2028": "",
  "\u2029": "",
}
DECIMAL = re.compile(r"\d+")
MAX_SAFE_INTEGER = 2 ** 53

def generate_id() -> str:
  return "".join(random.choices(ID_ALPHABET, k=ID_LENGTH))

def get_loc(tree) -> str:
  if isinstance(tree, Token):
    return f"{tree.line or 0}:{tree.column or 0}"
  if isinstance(tree, Tree):
    if tree.meta.empty:
      if tree.children:
        return get_loc(tree.children[0])
      return "0:0"
    return f"{tree.meta.line}:{tree.meta.column}"
  return "0:0"

def get_span(tree) -> tuple[int, int]:
  if isinstance(tree, Token):
    return tree.start_pos, tree.end_pos
  return tree.meta.start_pos, tree.meta.end_pos

def source_text(tree, source: str) -> str:
  start, end = get_span(tree)
  return source[start:end]

def decode_string(literal: str) -> str:
  def unescape(match):
    escape = match.group(1)
    if len(escape) > 1 and escape[0] in "ux":
      return chr(int(escape.strip("ux{}"), 16))
    return SIMPLE_ESCAPES.get(escape, escape)
  return ESCAPE.sub(unescape, literal[1:-1])

def decode_number(literal: str) -> 'int | float | None':
  # BigInt literals have no plain number value
  if literal.endswith("n"):
    return None
  digits = literal.replace("_", "")
  if digits[:2].lower() in ("0x", "0o", "0b"):
    return int(digits, 0)
  if DECIMAL.fullmatch(digits):
    return int(digits)
  number = float(digits)
  if number.is_integer() and abs(number) < MAX_SAFE_INTEGER:
    return int(number)
  return number

def format_number(number: 'int | float') -> str:
  if isinstance(number, float):
    if number != number:
      return "NaN"
    if number in (float("inf"), float("-inf")):
      return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < 1e21:
      return str(int(number))
    return repr(number)
  return str(number)
