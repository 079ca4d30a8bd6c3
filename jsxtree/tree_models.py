from dataclasses import dataclass, field
from types import MappingProxyType
from typing import TypeAlias
from .util import generate_id

Tag: TypeAlias = 'str | Fragment'
AttributeValue: TypeAlias = 'String | Number | Boolean | Mapping | Expression'
ChildValue: TypeAlias = 'Text | Node | Expression'

@dataclass(frozen=True)
class Fragment:
  def __repr__(self):
    return "Fragment"

FRAGMENT = Fragment()

@dataclass(frozen=True)
class String:
  value: str

@dataclass(frozen=True)
class Number:
  value: int | float

@dataclass(frozen=True)
class Boolean:
  value: bool

@dataclass(frozen=True)
class Mapping:
  entries: dict[str, AttributeValue]

  def __post_init__(self):
    object.__setattr__(self, "entries", MappingProxyType(dict(self.entries)))

  def __hash__(self):
    return hash(frozenset(self.entries.items()))

@dataclass(frozen=True)
class Expression:
  source: str

@dataclass(frozen=True)
class Text:
  value: str

@dataclass(frozen=True)
class Node:
  """One markup element or fragment.

  The id is left out of comparisons, so `==` tells whether two trees have the
  same structure regardless of how their nodes were labelled. Attributes are
  kept in a read-only mapping, so snapshots that share them stay unchanged.
  """
  tag: Tag
  attributes: dict[str, AttributeValue] = field(default_factory=dict)
  children: tuple[ChildValue, ...] = ()
  id: str = field(default_factory=generate_id, compare=False)

  def __post_init__(self):
    if isinstance(self.tag, Fragment) and self.attributes:
      raise ValueError("Fragment nodes cannot have attributes")
    object.__setattr__(self, "attributes", MappingProxyType(dict(self.attributes)))
    children = tuple(c for c in self.children if not (isinstance(c, Text) and not c.value.strip()))
    object.__setattr__(self, "children", children)

  def __hash__(self):
    return hash((self.tag, frozenset(self.attributes.items()), self.children))

@dataclass(frozen=True)
class NoTree:
  message: str
  def __bool__(self):
    return False
