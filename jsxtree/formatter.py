import json
import re
from .tree_models import *
from .util import format_number

IDENTIFIER = re.compile(r"[A-Za-z_$][\w$]*")
# text that would be read back as markup, a comment or trimmed whitespace
UNSAFE_TEXT = re.compile(r"[{}<>]|\A\s|\s\Z|\A/[/*]")

def serialize(node: Node, indent: int = 2) -> str:
  return format_node(node, 0, indent)

def format_node(node: Node, depth: int, indent: int) -> str:
  pad = " " * indent * depth
  if isinstance(node.tag, Fragment):
    if not node.children:
      return pad + "<></>"
    children = format_children(node.children, depth + 1, indent)
    return f"{pad}<>\n{children}\n{pad}</>"
  open_tag = f"<{node.tag}{format_attributes(node.attributes)}"
  if not node.children:
    return f"{pad}{open_tag} />"
  if len(node.children) == 1 and isinstance(node.children[0], Text):
    return f"{pad}{open_tag}>{format_text(node.children[0].value)}</{node.tag}>"
  children = format_children(node.children, depth + 1, indent)
  return f"{pad}{open_tag}>\n{children}\n{pad}</{node.tag}>"

def format_children(children, depth: int, indent: int) -> str:
  pad = " " * indent * depth
  lines = []
  previous = None
  for child in children:
    if isinstance(child, Node):
      lines.append(format_node(child, depth, indent))
    elif isinstance(child, Text):
      # adjacent texts would merge into one when read back
      if isinstance(previous, Text):
        lines.append(pad + "{" + js_string(child.value) + "}")
      else:
        lines.append(pad + format_text(child.value))
    else:
      lines.append(pad + "{" + child.source + "}")
    previous = child
  return "\n".join(lines)

def format_text(value: str) -> str:
  if UNSAFE_TEXT.search(value):
    return "{" + js_string(value) + "}"
  return value

def format_attributes(attributes: dict) -> str:
  parts = (format_attribute(key, value) for key, value in attributes.items())
  return "".join(" " + part for part in parts if part)

def format_attribute(key: str, value: AttributeValue) -> str:
  return globals()["attribute_" + type(value).__name__](key, value)

def attribute_String(key, value) -> str:
  if '"' not in value.value:
    return f'{key}="{value.value}"'
  if "'" not in value.value:
    return f"{key}='{value.value}'"
  return f"{key}={{{js_string(value.value)}}}"

def attribute_Number(key, value) -> str:
  return f"{key}={{{format_number(value.value)}}}"

def attribute_Boolean(key, value) -> str:
  return key if value.value else ""

def attribute_Mapping(key, value) -> str:
  return f"{key}={{{js_literal(value)}}}"

def attribute_Expression(key, value) -> str:
  return f"{key}={{{value.source}}}"

def js_literal(value: AttributeValue) -> str:
  return globals()["literal_" + type(value).__name__](value)

def literal_String(value) -> str:
  return js_string(value.value)

def literal_Number(value) -> str:
  return format_number(value.value)

def literal_Boolean(value) -> str:
  return "true" if value.value else "false"

def literal_Mapping(value) -> str:
  if not value.entries:
    return "{}"
  entries = ", ".join(f"{js_key(k)}: {js_literal(v)}" for k, v in value.entries.items())
  return "{" + entries + "}"

def literal_Expression(value) -> str:
  return value.source

def js_key(key: str) -> str:
  return key if IDENTIFIER.fullmatch(key) else js_string(key)

def js_string(value: str) -> str:
  return json.dumps(value, ensure_ascii=False)
