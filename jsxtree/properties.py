import math
import re
from dataclasses import dataclass
from typing import Any
from .edit import find_by_id, update_by_id
from .tree_models import *

STYLE_PREFIX = "style."
TEXT_CONTENT = "textContent"
LEADING_DIGIT = re.compile(r"\d")
LITERALS = (String, Number, Boolean, Mapping, Expression)

@dataclass
class EditableProperty:
  key: str
  value: Any
  kind: str

def editable_properties(node: Node) -> list[EditableProperty]:
  """Lists the literal properties of a node an inspector can edit.

  Style entries are flattened to `style.<name>` keys and the first text child
  is offered as `textContent`. Opaque expressions are not editable.
  """
  properties = []
  for key, value in node.attributes.items():
    if key == "style" and isinstance(value, Mapping):
      for name, entry in value.entries.items():
        kind = style_kind(name, entry)
        if kind is not None:
          properties.append(EditableProperty(STYLE_PREFIX + name, entry.value, kind))
      continue
    kind = value_kind(value)
    if kind is not None:
      properties.append(EditableProperty(key, value.value, kind))
  for child in node.children:
    if isinstance(child, Text):
      properties.append(EditableProperty(TEXT_CONTENT, child.value, "text"))
      break
  return properties

def value_kind(value: AttributeValue) -> str | None:
  if isinstance(value, String):
    return "text"
  if isinstance(value, Number):
    return "number"
  if isinstance(value, Boolean):
    return "boolean"
  return None

def style_kind(name: str, value: AttributeValue) -> str | None:
  if not isinstance(value, (String, Number, Boolean)):
    return None
  if "color" in name.lower():
    return "color"
  if isinstance(value, Number):
    return "number"
  if isinstance(value, String) and LEADING_DIGIT.match(value.value):
    return "number"
  return value_kind(value)

def to_attribute_value(value) -> AttributeValue:
  # only finite numbers have a literal form
  if isinstance(value, Number) and isinstance(value.value, float) and not math.isfinite(value.value):
    raise ValueError(f"Cannot use {value.value} as a number attribute value")
  if isinstance(value, LITERALS):
    return value
  if isinstance(value, bool):
    return Boolean(value)
  if isinstance(value, (int, float)):
    return to_attribute_value(Number(value))
  if isinstance(value, str):
    return String(value)
  if isinstance(value, dict):
    return Mapping({k: to_attribute_value(v) for k, v in value.items()})
  raise TypeError(f"Cannot use {type(value).__name__} as an attribute value")

def set_property(tree: Node, id: str, key: str, value) -> Node:
  """Applies one inspector edit to the node labelled `id`.

  `style.<name>` merges into the style mapping, `textContent` replaces all
  children with one text, and any other key sets the attribute.
  """
  node = find_by_id(tree, id)
  if node is None:
    return tree
  if key.startswith(STYLE_PREFIX):
    style = node.attributes.get("style")
    entries = dict(style.entries) if isinstance(style, Mapping) else {}
    entries[key[len(STYLE_PREFIX):]] = to_attribute_value(value)
    return update_by_id(tree, id, attributes={**node.attributes, "style": Mapping(entries)})
  if key == TEXT_CONTENT:
    return update_by_id(tree, id, children=(Text(str(value)),))
  return update_by_id(tree, id, attributes={**node.attributes, key: to_attribute_value(value)})

def replace_class(class_name: str, prefix: str, new_class: str) -> str:
  classes = [c for c in class_name.split() if not c.startswith(prefix)]
  return " ".join(classes + [new_class])
