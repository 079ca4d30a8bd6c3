import pytest

from jsxtree import Node, Text, parse, serialize

SOURCES = [
  '<div className="a">Hi</div>',
  "<button disabled>Click</button>",
  "<div style={{color: 'red', fontSize: 12}}>X</div>",
  "<p>A</p><p>B</p>",
  "<></>",
  "<a title='say \"hi\"' href=\"#\" />",
  '<input value={"it\'s \\"x\\""} tabIndex={-1} step={0.25} />',
  "<p>Hello {\"world\"} and {42}</p>",
  "<p>{\"a < b\"}</p>",
  "<ul>{items.map((item) => <li key={item.id}>{item.name}</li>)}</ul>",
  "<List render={(row) => <Row {...row} />} icon=<Icon /> />",
  '<div style={{border: {width: 1, "border-style": "solid"}, hidden: false}} />',
  "<section>\n  <h1>Title</h1>\n  {children}\n  {...rest}\n  <footer />\n</section>",
  "<my-element data-id=\"7\"><Foo.Bar /></my-element>",
  "<div style={{x: (a, b), y: (1)}} pair={(a, b)} />",
]


@pytest.mark.parametrize("source", SOURCES)
def test_serialized_tree_parses_back_to_same_structure(source: str) -> None:
  tree = parse(source)
  assert isinstance(tree, Node)
  assert parse(serialize(tree)) == tree


@pytest.mark.parametrize("source", SOURCES)
def test_serialize_is_stable(source: str) -> None:
  text = serialize(parse(source))
  assert serialize(parse(text)) == text


def test_built_tree_with_awkward_text_round_trips() -> None:
  tree = Node("p", {}, (Text("{braces}"), Node("br"), Text("/* star */"), Text("two\nlines")))
  assert parse(serialize(tree)) == tree
