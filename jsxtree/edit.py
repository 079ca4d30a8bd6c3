from dataclasses import replace
from typing import Iterator
from .tree_models import *

def iter_nodes(tree: Node) -> Iterator[Node]:
  yield tree
  for child in tree.children:
    if isinstance(child, Node):
      yield from iter_nodes(child)

def find_by_id(tree: Node, id: str) -> Node | None:
  for node in iter_nodes(tree):
    if node.id == id:
      return node
  return None

def find_path(tree: Node, id: str, path: tuple = ()) -> list[int] | None:
  if tree.id == id:
    return list(path)
  for index, child in enumerate(tree.children):
    if not isinstance(child, Node):
      continue
    found = find_path(child, id, path + (index,))
    if found is not None:
      return found
  return None

def update_by_id(tree: Node, id: str, **fields) -> Node:
  """Returns a tree with `fields` replaced on the node labelled `id`.

  Only the nodes on the path to the target are rebuilt, every other subtree is
  shared with the input. An unknown id gives back the input itself.
  """
  if tree.id == id:
    return replace(tree, **fields)
  for index, child in enumerate(tree.children):
    if not isinstance(child, Node):
      continue
    updated = update_by_id(child, id, **fields)
    if updated is not child:
      children = tree.children[:index] + (updated,) + tree.children[index + 1:]
      return replace(tree, children=children)
  return tree

def reconcile(previous: Node, current: Node) -> Node:
  # ids carry over to nodes with the same tag at the same child position
  if previous.tag != current.tag:
    return current
  children = []
  for index, child in enumerate(current.children):
    if index < len(previous.children) and isinstance(child, Node) and isinstance(previous.children[index], Node):
      child = reconcile(previous.children[index], child)
    children.append(child)
  return replace(current, children=tuple(children), id=previous.id)
