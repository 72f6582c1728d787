import os

# suffix -> icon name used by the code viewer tabs
_ICONS = {
    ".R": "file-code",
    ".sh": "file-terminal",
    ".md": "file-text",
}
_DEFAULT_ICON = "file"


def file_icon(filename: str) -> str:
    """Display-only hint from the filename suffix. Case-sensitive: `.r` is not `.R`."""
    if not isinstance(filename, str):
        return _DEFAULT_ICON
    _, ext = os.path.splitext(filename)
    return _ICONS.get(ext, _DEFAULT_ICON)
