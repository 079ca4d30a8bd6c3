from dataclasses import dataclass, replace
from datetime import datetime, timezone
from .edit import update_by_id
from .formatter import serialize
from .reader import parse
from .tree_models import *
from .util import generate_id

FRAGMENT_TYPE = "Fragment"
EXPRESSION_KEY = "$expression"

def timestamp() -> str:
  now = datetime.now(timezone.utc)
  return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")

@dataclass
class Document:
  name: str
  code: str
  tree: Node
  id: str | None = None
  created_at: str | None = None
  updated_at: str | None = None

  @classmethod
  def from_code(cls, code: str, name: str = "Untitled Component") -> 'Document | NoTree':
    tree = parse(code)
    if isinstance(tree, NoTree):
      return tree
    now = timestamp()
    return cls(name, code, tree, created_at=now, updated_at=now)

  def edit(self, id: str, **fields) -> 'Document':
    tree = update_by_id(self.tree, id, **fields)
    if tree is self.tree:
      return self
    return replace(self, code=serialize(tree), tree=tree, updated_at=timestamp())

  def recode(self, code: str) -> 'Document | NoTree':
    tree = parse(code)
    if isinstance(tree, NoTree):
      return tree
    return replace(self, code=code, tree=tree, updated_at=timestamp())

  def to_dict(self) -> dict:
    data = {
      "name": self.name,
      "code": self.code,
      "serializedComponent": node_to_dict(self.tree),
    }
    if self.id is not None:
      data["id"] = self.id
    if self.created_at is not None:
      data["createdAt"] = self.created_at
    if self.updated_at is not None:
      data["updatedAt"] = self.updated_at
    return data

  @classmethod
  def from_dict(cls, data: dict) -> 'Document':
    return cls(
      data["name"],
      data["code"],
      node_from_dict(data["serializedComponent"]),
      id=data.get("id"),
      created_at=data.get("createdAt"),
      updated_at=data.get("updatedAt"),
    )

def node_to_dict(node: Node) -> dict:
  return {
    "type": FRAGMENT_TYPE if isinstance(node.tag, Fragment) else node.tag,
    "props": {key: value_to_json(value) for key, value in node.attributes.items()},
    "children": [child_to_json(child) for child in node.children],
    "id": node.id,
  }

def value_to_json(value: AttributeValue):
  if isinstance(value, Mapping):
    return {key: value_to_json(entry) for key, entry in value.entries.items()}
  if isinstance(value, Expression):
    return {EXPRESSION_KEY: value.source}
  return value.value

def child_to_json(child: ChildValue):
  if isinstance(child, Node):
    return node_to_dict(child)
  if isinstance(child, Expression):
    return {EXPRESSION_KEY: child.source}
  return child.value

def node_from_dict(data: dict) -> Node:
  tag = FRAGMENT if data["type"] == FRAGMENT_TYPE else data["type"]
  return Node(
    tag,
    {key: value_from_json(value) for key, value in data.get("props", {}).items()},
    tuple(child_from_json(child) for child in data.get("children", [])),
    id=data.get("id") or generate_id(),
  )

def value_from_json(value) -> AttributeValue:
  if isinstance(value, bool):
    return Boolean(value)
  if isinstance(value, (int, float)):
    return Number(value)
  if isinstance(value, str):
    return String(value)
  if isinstance(value, dict):
    if set(value) == {EXPRESSION_KEY}:
      return Expression(value[EXPRESSION_KEY])
    return Mapping({key: value_from_json(entry) for key, entry in value.items()})
  raise ValueError(f"Unsupported attribute value: {value!r}")

def child_from_json(child) -> ChildValue:
  if isinstance(child, str):
    return Text(child)
  if isinstance(child, dict):
    if EXPRESSION_KEY in child:
      return Expression(child[EXPRESSION_KEY])
    return node_from_dict(child)
  raise ValueError(f"Unsupported child: {child!r}")
