import re
from lark import Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken
from .parser import markup_parser, module_parser
from .tree_models import *
from .util import decode_number, decode_string, format_number, get_loc, source_text

FUNCTION_HINT = re.compile(r"\b(?:function|const|let|var|class|export|import)\b|=>")
FUNCTIONS = ("func_decl", "func_expr", "arrow_func", "method")
MARKUP = ("jsx_element", "jsx_fragment")
# member and namespaced tag names have no single identifier to keep
GENERIC_TAG = "div"

def parse(text: str) -> 'Node | NoTree':
  """Turns component source or bare markup into a Node tree.

  Source that looks like a module is searched for the markup returned by its
  first function, or failing that the first element anywhere. Anything else
  is read as one markup expression, retried inside a fragment when it has
  several top level siblings.
  """
  try:
    return read_source(text.strip())
  except RecursionError:
    return NoTree("1:1: Markup nested too deeply")

def read_source(code: str) -> 'Node | NoTree':
  errors = []
  if FUNCTION_HINT.search(code):
    tree = syntax_tree(module_parser, code)
    if isinstance(tree, Tree):
      return find_markup(tree, source=code)
    errors.append(tree)
  if not code.startswith("<"):
    if errors:
      return NoTree(errors[0])
    return NoTree("1:1: Expected markup or a component definition")
  for source in (code, f"<>{code}</>"):
    tree = syntax_tree(markup_parser, source)
    if isinstance(tree, Tree):
      return find_markup(tree, source=source)
    errors.append(tree)
  return NoTree(errors[0])

def syntax_tree(parser, source: str) -> 'Tree | str':
  try:
    tree = parser.parse(source)
  except UnexpectedInput as e:
    return describe_error(e, source)
  for subtree in tree.iter_subtrees_topdown():
    error = check_markup(subtree)
    if error is not None:
      return error
  return tree

def check_markup(tree: Tree) -> str | None:
  if tree.data == "jsx_element" and len(tree.children) == 4:
    opening, closing = tag_name(tree.children[0]), tag_name(tree.children[3])
    if opening != closing:
      return f"{get_loc(tree.children[3])}: Expected corresponding closing tag for <{opening}>"
  if tree.data == "jsx_attribute" and len(tree.children) == 2:
    value = tree.children[1]
    if isinstance(value, Tree) and value.data == "jsx_container" and not value.children:
      return f"{get_loc(value)}: Attribute values must be non-empty expressions"
  return None

def tag_name(name) -> str:
  if isinstance(name, Token):
    return name.value
  separator = "." if name.data == "jsx_member_name" else ":"
  return separator.join(part.value for part in name.children)

def describe_error(e: UnexpectedInput, source: str) -> str:
  if isinstance(e, UnexpectedEOF):
    line = source.count("\n") + 1
    column = len(source) - source.rfind("\n")
    return f"{line}:{column}: Unexpected end of input"
  if isinstance(e, UnexpectedCharacters):
    return f"{e.line}:{e.column}: Unexpected character {e.char!r}"
  if isinstance(e, UnexpectedToken):
    return f"{e.line}:{e.column}: Unexpected token {e.token.value!r}"
  return f"{e.line}:{e.column}: {e}"

def find_markup(tree: Tree, **kw) -> 'Node | NoTree':
  for subtree in tree.iter_subtrees_topdown():
    if subtree.data in FUNCTIONS:
      markup = returned_markup(subtree)
    elif subtree.data in MARKUP:
      markup = subtree
    else:
      continue
    if markup is not None:
      return read(markup, **kw)
  return NoTree("1:1: No markup element found")

def returned_markup(function: Tree) -> Tree | None:
  body = unparen(function.children[-1])
  if isinstance(body, Tree) and body.data == "block":
    returns = [s for s in body.children if isinstance(s, Tree) and s.data == "return_stmt"]
    if not returns or not returns[0].children:
      return None
    body = unparen(returns[0].children[0])
  if isinstance(body, Tree) and body.data in MARKUP:
    return body
  return None

def unparen(tree):
  while isinstance(tree, Tree) and tree.data == "paren":
    tree = tree.children[0]
  return tree

# Markup

def read_jsx_element(name, attributes, children=None, closing=None, **kw) -> Node:
  tag = name.value if isinstance(name, Token) else GENERIC_TAG
  props = {}
  # spread and namespaced attributes have no literal key to keep
  for attribute in attributes.children:
    if attribute.data != "jsx_attribute":
      continue
    key, *value = attribute.children
    props[key.value] = read_value(value[0], **kw) if value else Boolean(True)
  if children is None:
    return Node(tag, props)
  return Node(tag, props, read_children(children, **kw))

def read_jsx_fragment(children, **kw) -> Node:
  return Node(FRAGMENT, {}, read_children(children, **kw))

def read_children(children: Tree, **kw) -> tuple:
  values = (read_child(child, **kw) for child in children.children)
  return tuple(value for value in values if value is not None)

def read(tree: Tree, **kw) -> Node:
  kw["this"] = tree
  return globals()["read_" + tree.data](*tree.children, **kw)

# Attribute values

def value_JSX_STRING(value, **kw) -> String:
  return String(value[1:-1])

def value_STRING(value, **kw) -> String:
  return String(decode_string(value))

def value_NUMBER(value, **kw) -> 'Number | Expression':
  number = decode_number(value)
  if number is None:
    return value_expression(**kw)
  return Number(number)

def value_BOOLEAN(value, **kw) -> Boolean:
  return Boolean(value == "true")

def value_paren(expr, **kw) -> AttributeValue:
  value = read_value(expr, **kw)
  if isinstance(value, Expression):
    # the parentheses may hold a sequence, which reads differently bare
    return value_expression(**kw)
  return value

def value_jsx_container(expr, **kw) -> AttributeValue:
  return read_value(expr, **kw)

def value_unary_expr(op, operand, **kw) -> 'Number | Expression':
  if op.value in ("-", "+") and isinstance(operand, Token) and operand.type == "NUMBER":
    number = decode_number(operand.value)
    if number is not None:
      return Number(-number if op.value == "-" else number)
  return value_expression(**kw)

def value_object(*members, **kw) -> 'Mapping | Expression':
  entries = {}
  for member in members:
    if member.data != "property":
      return value_expression(**kw)
    key, value = member.children
    if not isinstance(key, Token) or key.type not in ("RAW_NAME", "STRING"):
      return value_expression(**kw)
    key = key.value if key.type == "RAW_NAME" else decode_string(key.value)
    entries[key] = read_value(value, **kw)
  return Mapping(entries)

def value_expression(*_, **kw) -> Expression:
  return Expression(source_text(kw["this"], kw["source"]))

def read_value(tree, **kw) -> AttributeValue:
  kw["this"] = tree
  if isinstance(tree, Token):
    return globals().get("value_" + tree.type, value_expression)(tree.value, **kw)
  return globals().get("value_" + tree.data, value_expression)(*tree.children, **kw)

# Children

def child_JSX_TEXT(value, **kw) -> Text | None:
  value = value.strip()
  return Text(value) if value else None

def child_jsx_element(*_, **kw) -> Node:
  return read(kw["this"], **kw)

def child_jsx_fragment(*_, **kw) -> Node:
  return read(kw["this"], **kw)

def child_jsx_container(expr=None, **kw) -> 'Text | Expression | None':
  if expr is None:
    return None
  expr = unparen(expr)
  value = read_value(expr, **kw)
  if isinstance(value, String):
    return Text(value.value)
  if isinstance(value, Number):
    return Text(format_number(value.value))
  if isinstance(value, Boolean):
    return Text("true" if value.value else "false")
  return Expression(source_text(expr, kw["source"]))

def child_jsx_spread_child(expr, **kw) -> Expression:
  return Expression("..." + source_text(expr, kw["source"]))

def read_child(tree, **kw) -> 'ChildValue | None':
  kw["this"] = tree
  if isinstance(tree, Token):
    return globals()["child_" + tree.type](tree.value, **kw)
  return globals()["child_" + tree.data](*tree.children, **kw)
