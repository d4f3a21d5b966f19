"""Markdown AST contract shared with the upstream markdown parser.

Submodules:
  nodes  -- frozen pydantic node models and the mdast dict loader
"""
