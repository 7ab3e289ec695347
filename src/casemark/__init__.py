"""Test case records from markdown documents.

The `casemark` package converts the token tree of a markdown document,
as produced by an external tokenizer, into structured test cases.

Key features:
- instructions taken from plain paragraphs;
- inline decorators for bug and user story references and execution states;
- variables taken from tables, one mapping per row;
- non-fatal error reporting, so one malformed section never aborts a document.
"""
