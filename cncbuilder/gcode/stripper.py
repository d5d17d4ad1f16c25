"""
Comment Stripper - minified G-code.

Removes ``;`` comments up to end of line, ``(...)`` comments (an unclosed
one runs to end of line), stray ``)`` characters, trailing whitespace and
blank lines. Commands keep their order and content.
"""


def strip_line(line: str) -> str:
    """Remove comments from a single line."""
    out = []
    in_paren = False
    for ch in line:
        if in_paren:
            if ch == ')':
                in_paren = False
            continue
        if ch == ';':
            break
        if ch == '(':
            in_paren = True
            continue
        if ch == ')':
            continue
        out.append(ch)
    return "".join(out).rstrip()


def strip_comments(program: str) -> str:
    """
    Strip every comment and blank line from a program.

    Returns:
        Remaining lines joined by newline with a trailing newline,
        or an empty string when nothing but comments was present
    """
    lines = []
    for raw in program.splitlines():
        line = strip_line(raw)
        if line.strip():
            lines.append(line)
    if not lines:
        return ""
    return "\n".join(lines) + "\n"
