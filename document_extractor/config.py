"""Configuration classes for document extractor."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LayoutConfig:
    """Spatial heuristics used to rebuild reading order on a PDF page.

    All distances are in page units (see ``ExtractorConfig.points_per_unit``).
    There is no access to real glyph metrics, so fragment widths are
    estimated from the character count.
    """

    line_decimals: int = 2
    """Fragments whose ``y`` rounds to the same value at this precision share
    a line. 2 means a tolerance of 0.01 units."""

    glyph_width: float = 0.6
    """Average glyph width used to estimate a fragment's right edge."""

    space_gap_threshold: float = 1.0
    """A gap wider than this between two fragments on a line becomes a space."""


@dataclass
class ExtractorConfig:
    """Configuration for document extraction.

    Examples:
        >>> # Defaults: 20 MiB input cap, 30 s parse timeout
        >>> config = ExtractorConfig()

        >>> # Small uploads only, fail fast
        >>> config = ExtractorConfig(max_file_size_bytes=2_000_000, parse_timeout_seconds=5)
    """

    max_file_size_bytes: int = 20 * 1024 * 1024
    """Inputs larger than this are rejected before decoding."""

    parse_timeout_seconds: float = 30.0
    """How long the caller waits for a single decode before ExtractionError is
    raised. This bounds the wait, not the work: a timed-out parse keeps running
    on its worker thread until it finishes."""

    percent_decode_fragments: bool = False
    """Percent-decode PDF fragment text, for sources that escape glyph runs.
    PyMuPDF text is already literal, so this is off by default. Fragments that
    fail to decode are kept as-is."""

    points_per_unit: float = 16.0
    """PDF points per page unit. Fragment coordinates are divided by this
    before layout reconstruction; a US Letter page is 38.25 units wide."""

    layout: LayoutConfig = field(default_factory=LayoutConfig)


@dataclass(frozen=True)
class RenderOptions:
    """Options for turning extracted text into preview HTML."""

    heading_max_length: int = 35
    """Upper-case lines up to this many characters render as headings."""

    keep_blank_lines: bool = True
    """Render blank lines as spacers instead of dropping them."""

    heading_style: str = "margin:14px 0 6px;font-size:16px;font-weight:700;"
    paragraph_style: str = "margin:6px 0; line-height:1.7;"
    list_style: str = "margin:6px 0 6px 18px; padding:0;"
    list_item_style: str = "margin:6px 0; line-height:1.6;"
    spacer_style: str = "height:10px;"


UPLOAD_PREVIEW = RenderOptions(
    heading_max_length=30,
    keep_blank_lines=False,
    heading_style="margin:18px 0 8px;font-size:16px;font-weight:700;",
    paragraph_style="margin:8px 0; line-height:1.6;",
    list_style="margin:8px 0 8px 18px; padding:0;",
    list_item_style="margin:6px 0;",
)
"""Preview shown right after an upload."""

DOCUMENT_VIEWER = RenderOptions()
"""Re-render of stored text in the document viewer."""
