"""Core test case parsing.

The primary public entry point is `TestcaseParser`, which turns section
tokens produced by a markdown tokenizer into `Testcase` records and
reports malformed content to an error sink.
"""

from .parser import ErrorSink, TestcaseParser

__all__ = (
    'ErrorSink',
    'TestcaseParser',
)
