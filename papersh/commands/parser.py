"""Command line tokenizer.

Arguments are separated by whitespace and can be grouped with single
quotes; ``\\'`` is a literal single quote, inside or outside quotes.
Commands are chained with ``|``. Inside quotes, whitespace and pipes are
ordinary characters, which keeps regex alternation usable in filters::

    ls 'shadow|tutor' by Chung | open
"""

from papersh.errors import ParseError

LEADING_PIPE = "Command cannot start with a pipe."
DANGLING_PIPE = "Command cannot end with a dangling pipe."
DOUBLE_PIPE = "Invalid use of pipes."


def parse_command_line(line: str) -> list[list[str]]:
    """Split *line* into one argument vector per pipe segment.

    An empty line gives ``[[]]``.

    >>> parse_command_line("ls 'shadow tutor' by Chung | open")
    [['ls', 'shadow tutor', 'by', 'Chung'], ['open']]

    Raises:
        ParseError: On a leading, trailing, or doubled pipe
    """
    word: list[str] = []
    argv: list[str] = []
    segments: list[list[str]] = []
    inside_quotes = False

    i = 0
    n = len(line)
    while i < n and line[i].isspace():
        i += 1
    if i < n and line[i] == "|":
        raise ParseError(LEADING_PIPE)

    while i < n:
        c = line[i]
        i += 1
        if c == "\\" and i < n and line[i] == "'":
            word.append("'")
            i += 1
        elif c == "'":
            inside_quotes = not inside_quotes
        elif inside_quotes:
            word.append(c)
        elif c == "|":
            if word:
                argv.append("".join(word))
                word = []
            if not argv:
                raise ParseError(DOUBLE_PIPE)
            segments.append(argv)
            argv = []
        elif c.isspace():
            while i < n and line[i].isspace():
                i += 1
            if word:
                argv.append("".join(word))
                word = []
        else:
            word.append(c)

    if word:
        argv.append("".join(word))
    if not argv and segments:
        raise ParseError(DANGLING_PIPE)
    segments.append(argv)
    return segments
