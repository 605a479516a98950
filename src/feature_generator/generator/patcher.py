"""Text patching for append mode.

Inserts imports and members into previously generated Dart files using
plain text anchors (last import line, last closing brace, a class's own
closing brace). Nothing here parses Dart: when an anchor is missing the
functions raise AnchorNotFound and the caller skips that file.
"""

import re

from feature_generator.errors import AnchorNotFound
from feature_generator.templates.shared import IMPORT_TOKEN

FACTORY_MARKERS = ("@freezed", "const factory")


def insert_imports(content: str, imports: list[str]) -> str:
    """Add ``import '<path>';`` lines after the last existing import.

    Imports already present verbatim are skipped. A file without imports
    gets them at the top.
    """
    missing = [i for i in dict.fromkeys(imports) if i not in content]
    if not missing:
        return content

    block = "".join(f"{IMPORT_TOKEN}{i}';\n" for i in missing)
    last_import = content.rfind(IMPORT_TOKEN)
    if last_import == -1:
        return block + ("\n" if not content.startswith("\n") else "") + content

    line_end = content.find("\n", last_import)
    if line_end == -1:
        return content + "\n" + block
    return content[: line_end + 1] + block + content[line_end + 1:]


def insert_before_last_brace(content: str, members: list[str], separator: str = "\n\n") -> str:
    """Insert members just before the final ``}`` of the file."""
    index = content.rfind("}")
    if index == -1:
        raise AnchorNotFound("no closing brace found")
    return content[:index] + f"\n{separator.join(members)}\n" + content[index:]


def find_class_end(content: str, class_name: str) -> int:
    """Index of the closing brace of ``class <class_name>``."""
    match = re.search(rf"\bclass {re.escape(class_name)}\b", content)
    if match is None:
        raise AnchorNotFound(f"class {class_name} not found")

    depth = 0
    opened = False
    for i in range(match.start(), len(content)):
        char = content[i]
        if char == "{":
            depth += 1
            opened = True
        elif char == "}":
            depth -= 1
            if opened and depth == 0:
                return i
    raise AnchorNotFound(f"closing brace of class {class_name} not found")


def insert_into_class(content: str, class_name: str, members: list[str], separator: str = "\n\n") -> str:
    """Insert members before the closing brace of one named class.

    Unlike insert_before_last_brace this works when other declarations
    follow the class in the same file.
    """
    index = find_class_end(content, class_name)
    return content[:index] + f"\n{separator.join(members)}\n" + content[index:]


def insert_after_last_match(content: str, pattern: str | re.Pattern, addition: str, flags: int = 0) -> str:
    matches = list(re.finditer(pattern, content, flags))
    if not matches:
        raise AnchorNotFound(f"pattern {getattr(pattern, 'pattern', pattern)!r} not found")
    end = matches[-1].end()
    return content[:end] + addition + content[end:]


def append_declarations(content: str, declarations: list[str]) -> str:
    """Add top-level declarations after the final closing brace."""
    index = content.rfind("}")
    if index == -1:
        raise AnchorNotFound("no closing brace found")
    return content[: index + 1] + "\n\n" + "\n\n".join(declarations) + content[index + 1:]


def uses_factory_pattern(content: str) -> bool:
    """True for freezed unions (``const factory`` variants)."""
    return all(marker in content for marker in FACTORY_MARKERS)


def has_member(content: str, name: str) -> bool:
    """Whether a method or field called ``name`` is already declared or called."""
    return re.search(rf"\b{re.escape(name)}\b\s*[(:,]", content) is not None
