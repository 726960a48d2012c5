"""Derive the HipChat background color from a message severity."""

RED = "red"
YELLOW = "yellow"
GREEN = "green"
GRAY = "gray"


def severity_color(severity: int) -> str:
    """
    Map a syslog-style severity to a message color.

    Returns:
        'red' for 0-3 (emergency to error), 'yellow' for 4 (warning),
        'green' for 5-6 (notice, info) and 'gray' for everything else.
    """
    if 0 <= severity <= 3:
        return RED

    if severity == 4:
        return YELLOW

    if severity in (5, 6):
        return GREEN

    # Debug and anything out of range
    return GRAY
