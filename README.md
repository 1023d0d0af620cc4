# stencilkit

The core pieces of a Jinja-style text template engine, as plain Python objects:

- `stencilkit.context`: `Context`, the mapping of names to JSON-like values used when
  rendering. `into_json()` returns its data as a dict with keys in sorted order. The
  module also has value helpers (`render_value`, `is_truthy`, `to_number`) and
  dotted-path lookup (`dotted_pointer`, `iter_pointer_segments`, `get_json_pointer`).
- `stencilkit.ast`: the template syntax tree. It covers expressions (`Expr`, `Ident`,
  `Array`, `MathExpr`, `LogicExpr`, `In`, `Test`, `FunctionCall`, `MacroCall`,
  `StringConcat`) and nodes (`Text`, `VariableBlock`, `ForloopNode`, `IfNode`,
  `BlockNode`, `Raw`, `Comment` and others). The `WS` markers record `{%-` / `-%}`
  whitespace control.
- `stencilkit.whitespace`: `remove_whitespace`, which trims text nodes according to
  those markers and drops text left empty.
- `stencilkit.for_loop`: `ForLoop`, the state of a loop over an array, a string or an
  object. A loop over a string yields grapheme clusters; a loop over an object yields
  its keys in sorted order.
- `stencilkit.filter_utils`: the sort and unique strategies used by filters
  (`get_sort_strategy_for_type`, `get_unique_strategy_for_type`, `SortPairs`,
  `UniqueSet`, `total_order_key`), plus `try_get_value` for checking filter arguments.
- `stencilkit.errors`: `TemplateError` and its subclasses.

## Installation

```
pip install .
```

## Usage

Build a context and look up values:

```python
from stencilkit.context import Context, dotted_pointer, render_value

ctx = Context()
ctx.insert("user", {"name": "bob", "tags": ["a", "b"]})
ctx.insert("count", 3)

data = ctx.into_json()
dotted_pointer(data, "user.name")      # "bob"
dotted_pointer(data, "user.tags.1")    # "b"
render_value([1, True, None, "x"])     # "[1, true, , x]"
"count" in ctx                         # True
```

Trim whitespace in a node list:

```python
from stencilkit.ast import WS, Text, Expr, Ident, VariableBlock
from stencilkit.whitespace import remove_whitespace

nodes = [
    Text("hello  "),
    VariableBlock(WS(left=True, right=True), Expr(Ident("name"))),
    Text("  world"),
]
remove_whitespace(nodes, None)
# [Text("hello"), VariableBlock(...), Text("world")]
```

Step through a loop:

```python
from stencilkit.for_loop import ForLoop

loop = ForLoop.from_array("item", [10, 20, 30])
loop.current_value()   # 10
loop.increment()
loop.current_value()   # 20
len(loop)              # 3
```

Sort values by keys of one type:

```python
from stencilkit.filter_utils import get_sort_strategy_for_type

sorter = get_sort_strategy_for_type(0)
sorter.try_add_pair("b", 2)
sorter.try_add_pair("a", 1)
sorter.sort()          # ["a", "b"]
```

Errors are raised as subclasses of `stencilkit.errors.TemplateError`. For example,
`Context.from_value` raises one when it is given anything that is not a dict, and
`Context.insert` raises `JsonError` for values that cannot be represented as JSON.

## What it does not do

stencilkit has no template parser, no renderer and no template loader. It does not
turn template text into a syntax tree, does not evaluate expressions, filters or
macros, and does not produce rendered output; the trees in `stencilkit.ast` are built
by hand or by code of your own.

## Running the tests

```
pip install -e ".[test]"
pytest
```