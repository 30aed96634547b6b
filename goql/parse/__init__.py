"""Lexer, item stack, syntax tree and parser for a limited SQL SELECT dialect."""