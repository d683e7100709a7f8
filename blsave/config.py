from dataclasses import dataclass


@dataclass(frozen=True)
class ReaderOptions:
    """Knobs for the tolerant reader.

    Limits are counted in lines. The defaults match what the game itself
    writes and accepts.
    """

    # Body lines that fail to decode with this codec become per-record errors.
    encoding: str = "cp1252"

    # Body lines whose first non-blank text starts with this are ignored.
    comment_prefix: str = "//"

    # Larger declared description counts are clamped to this.
    max_description_lines: int = 1000

    # Palette scan stops after this many lines even without a Linecount line.
    max_palette_lines: int = 256

    # Records holding NUL bytes are reported as errors instead of decoded.
    reject_nul_bytes: bool = True


DEFAULT_OPTIONS = ReaderOptions()
