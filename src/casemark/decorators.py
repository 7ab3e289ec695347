"""Decorator grammar.

Decorators are short directives written between backticks inside a
paragraph of a test case section, for example:

    `bug 1234` `story 42` `xfail`

A decorator is either a keyword followed by exactly one space and a value,
or a single word naming an execution state. Keywords are lowercase and
matched exactly.
"""

from re import compile as regexp

#: Character delimiting decorators inside paragraph text.
DECORATOR_MARKER = '`'

#: A single word, optionally followed by one space and a second word.
DECORATOR_PATTERN = regexp(r'^(?P<keyword>\S+)(?: (?P<value>\S+))?$')

#: Keyword decorators and the test case fields they assign.
KEYWORDS = {
    'bug': 'bug',
    'story': 'user_story',
}
