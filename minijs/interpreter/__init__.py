from .value import Value, ValueType
from .scope import Scope
from .interpreter import Interpreter, is_truthy
