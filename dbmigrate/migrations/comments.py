"""
Comment filter for migration SQL.

Only ``#`` line comments are removed. The filter is purely lexical: it
knows nothing about string literals, block comments or ``--`` comments,
so a ``#`` inside a quoted string is treated as a comment too.
"""

COMMENT_CHAR = '#'


def without_comments(text: str) -> str:
    """
    Remove ``#`` comments from text.

    Everything from ``#`` up to (not including) the next newline is
    dropped. Newlines are always kept, so line numbers are preserved.

    Example:
        >>> without_comments("a#comment\\nb")
        'a\\nb'
    """
    result = []
    omit = False

    for char in text:
        if char == COMMENT_CHAR:
            omit = True
        elif char == '\n':
            omit = False

        if not omit:
            result.append(char)

    return ''.join(result)
