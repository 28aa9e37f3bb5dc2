"""Customer name helpers."""


def compose_full_name(first_name: str | None, middle_name: str | None, last_name: str | None) -> str:
    parts = [part.strip() for part in (first_name, middle_name, last_name) if part and part.strip()]
    return " ".join(parts)


def split_full_name(name: str | None) -> tuple[str, str, str]:
    """Guess (first, middle, last) from a legacy single-field name."""
    parts = (name or "").split()
    if not parts:
        return "", "", ""
    if len(parts) == 1:
        return parts[0], "", ""
    if len(parts) == 2:
        return parts[0], "", parts[1]
    return parts[0], " ".join(parts[1:-1]), parts[-1]
