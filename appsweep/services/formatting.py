from __future__ import annotations

# Finder reports sizes in powers of 1000; match it so numbers line up.
UNITS = ["bytes", "KB", "MB", "GB", "TB"]
STEP = 1000


def format_bytes(size: int) -> str:
    if size <= 0:
        return "Zero KB"
    value = float(size)
    unit = 0
    while value >= STEP and unit < len(UNITS) - 1:
        value /= STEP
        unit += 1
    if unit == 0:
        return f"{int(value)} {UNITS[unit]}"
    return f"{value:.1f} {UNITS[unit]}"


def shorten_home(path: str, home: str) -> str:
    home = home.rstrip("/")
    if path == home:
        return "~"
    if path.startswith(home + "/"):
        return "~" + path[len(home) :]
    return path
