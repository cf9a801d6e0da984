"""Language grammars.

Each module exposes the tree-sitter `LANGUAGE` plus the tables that turn its
concrete tree into tokens and errors: `ATOMIC` node types read as one token,
`SPLIT` leaves broken on whitespace, `GAP_KIND` for text between leaves,
`DELIMITERS` that must be closed, and `ERROR_NODES` the grammar accepts but
guidelint rejects.
"""

from . import css, html, javascript

__all__ = ["css", "html", "javascript"]
