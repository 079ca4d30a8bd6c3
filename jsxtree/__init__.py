from .tree_models import *
from .reader import parse
from .formatter import serialize
from .edit import find_by_id, find_path, iter_nodes, reconcile, update_by_id
from .properties import EditableProperty, editable_properties, replace_class, set_property
from .document import Document
