"""Path display helpers."""


def short_path(path: str, depth: int = 3) -> str:
    """Shorten a directory path to its last ``depth`` components.

    Windows separators are normalised to ``/`` first.

    Examples:
        short_path("/home/user/code/project/src") -> "code/project/src"
        short_path("C:\\\\Users\\\\me") -> "C:/Users/me"
    """
    if not path:
        return ""
    parts = [p for p in path.replace("\\", "/").split("/") if p]
    if len(parts) <= depth:
        return "/".join(parts)
    return "/".join(parts[-depth:])
