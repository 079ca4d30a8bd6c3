import os
from lark import Lark

script_path = os.path.abspath(__file__)
path = os.path.dirname(script_path)

module_parser = Lark.open(path + "/jsx.lark", start="module", propagate_positions=True)
markup_parser = Lark.open(path + "/jsx.lark", start="markup", propagate_positions=True)
