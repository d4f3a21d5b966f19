"""Document-to-model compiler for the OpenAPI specification markdown.

Submodules:
  errors       -- CompileError taxonomy
  naming       -- camel-case and identifier helpers
  text         -- inline text renderer
  types        -- TypeExpr tagged union
  type_parser  -- type-cell parser (ordered rule table)
  models       -- FieldSpec, ObjectDescriptor, Section, CompileReport
  tables       -- field table extraction
  sections     -- object section segmentation
  objects      -- per-section object compilation
  pipeline     -- compile_document() entry point
"""
