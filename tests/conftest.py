import sys
from pathlib import Path

# Ensure the repo root is on sys.path for test imports without installing the package
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

BANNER = "This is a Blockland save file.  You probably shouldn't modify it cause you'll screw it up."


def build_save(
    *,
    marker: str = BANNER,
    description: tuple[str, ...] = ("Test House",),
    colors: tuple[str, ...] = ("1.000000 0.000000 0.000000 1.000000",),
    linecount: str | None = "Linecount 1",
    body: tuple[str, ...] = (),
    newline: str = "\r\n",
) -> bytes:
    lines = [marker, str(len(description)), *description, *colors]
    if linecount is not None:
        lines.append(linecount)
    lines.extend(body)
    return (newline.join(lines) + newline).encode("cp1252")
