"""NSIS include-file syntax.

Everything that ends up in a `.nsh` artifact is rendered here so identifier
transliteration and path conversion are the same in every file.
"""

from __future__ import annotations

import re
from typing import List

_ILLEGAL_IDENT_CHARS = re.compile(r"[^A-Za-z0-9_]")


def nsis_ident(name: str) -> str:
    """Package name -> NSIS identifier fragment (conf-g++ -> conf_g__)."""
    return _ILLEGAL_IDENT_CHARS.sub("_", name)


def nsis_string(text: str) -> str:
    """Escape text for use inside a double-quoted NSIS string."""
    text = " ".join(text.split())
    return text.replace("$", "$$").replace('"', '$\\"')


def windows_path(path: str) -> str:
    return path.replace("/", "\\")


def manifest_filename(package: str) -> str:
    return f"files_{package}.nsh"


def set_out_path(directory: str) -> str:
    rel = windows_path(directory.strip("/"))
    return f"SetOutPath $INSTDIR\\{rel}" if rel else "SetOutPath $INSTDIR"


def file_line(source: str) -> str:
    return f"FILE {windows_path(source)}"


def section_lines(package: str, *, visible: bool) -> List[str]:
    # A leading '-' makes the section hidden; it is then selected by dependency only.
    title = package if visible else f"-{package}"
    return [
        f'Section "{title}" Sec_{nsis_ident(package)}',
        'SetOutPath "$INSTDIR\\"',
        f'!include "{manifest_filename(package)}"',
        "SectionEnd",
    ]


def description_string(package: str, description: str) -> str:
    return f'LangString DESC_{nsis_ident(package)} ${{LANG_ENGLISH}} "{nsis_string(description)}"'


def description_binding(package: str) -> str:
    ident = nsis_ident(package)
    return f"!insertmacro MUI_DESCRIPTION_TEXT ${{Sec_{ident}}} $(DESC_{ident})"


def edge_line(dependent: str, dependency: str) -> str:
    return f"{nsis_ident(dependent)} {nsis_ident(dependency)}"
