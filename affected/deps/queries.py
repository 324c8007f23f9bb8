"""
Tree-sitter query definitions for dependency statements.
"""

from __future__ import annotations

_ECMASCRIPT_IMPORTS = """
    (import_statement
      source: (string) @source)

    (export_statement
      source: (string) @source)

    (call_expression
      function: (identifier) @require_fn
      arguments: (arguments . (string) @source))

    (call_expression
      function: (import)
      arguments: (arguments . (string) @source))
"""

JAVASCRIPT_QUERIES = {
    # import/export ... from, require("x"), import("x")
    "imports": _ECMASCRIPT_IMPORTS,
}

TYPESCRIPT_QUERIES = {
    # plus `import x = require("x")`
    "imports": _ECMASCRIPT_IMPORTS + """
    (import_require_clause
      (string) @source)
    """,
}

PYTHON_QUERIES = {
    "imports": """
    (import_statement) @import

    (import_from_statement) @import_from
    """,
}
