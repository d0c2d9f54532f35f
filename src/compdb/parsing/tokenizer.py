from typing import List, Optional

# "Arguments may be shell quoted and escaped following platform conventions,
# with '"' and '\' being the only special characters. Shell expansion is not
# supported."
ESCAPES = (
    ("\\\\", "\\"),
    ("\\\"", "\""),
)


def unescape_command(command: str) -> str:
    """Trims the command and collapses the two recognized escape sequences."""
    text = command.strip()
    for escaped, literal in ESCAPES:
        text = text.replace(escaped, literal)
    return text


def split_command(command: Optional[str]) -> Optional[List[str]]:
    """
    Splits a shell-escaped `command` field into argv.

    Returns None when there is no command at all, and an empty list when the
    command is empty. Whitespace separates tokens unless it sits between
    double quotes; the quotes themselves are kept in the token text.
    An unterminated quote is not an error, the rest of the string simply
    becomes the last token.
    """
    if command is None:
        return None

    args: List[str] = []
    current: List[str] = []
    in_quotes = False

    for char in unescape_command(command):
        if char == '"':
            in_quotes = not in_quotes
            current.append(char)
        elif char.isspace() and not in_quotes:
            if current:
                args.append("".join(current))
                current = []
        else:
            current.append(char)

    if current:
        args.append("".join(current))

    return args
