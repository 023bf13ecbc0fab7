"""The Lox execution pipeline: scanner, parser, AST, environments and the tree-walking interpreter."""
