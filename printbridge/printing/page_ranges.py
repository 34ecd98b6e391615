"""Page range parsing and mono/color partitioning."""


def parse_page_range(ranges: str, max_pages: int) -> set[int]:
    """Parse "1-3,5" style text into 1-indexed page numbers.

    Tokens are single integers or inclusive dash ranges. Tokens that do not
    parse, reversed ranges and pages outside [1, max_pages] are dropped.
    """
    pages: set[int] = set()
    for token in ranges.split(","):
        token = token.strip()
        if not token:
            continue
        if "-" in token:
            start_text, _, end_text = token.partition("-")
            try:
                start, end = int(start_text), int(end_text)
            except ValueError:
                continue
            if start > end:
                continue
            pages.update(range(max(start, 1), min(end, max_pages) + 1))
        else:
            try:
                page = int(token)
            except ValueError:
                continue
            if 1 <= page <= max_pages:
                pages.add(page)
    return pages


def split_mono_color(ranges: str, total_pages: int) -> tuple[set[int], set[int]]:
    """Partition [1, total_pages] into (mono, color) using a mono range list."""
    mono = parse_page_range(ranges, total_pages)
    color = set(range(1, total_pages + 1)) - mono
    return mono, color


def format_page_ranges(pages: set[int]) -> str:
    """Compress page numbers back into "1-3,5" form."""
    parts: list[str] = []
    ordered = sorted(pages)
    i = 0
    while i < len(ordered):
        start = end = ordered[i]
        while i + 1 < len(ordered) and ordered[i + 1] == end + 1:
            i += 1
            end = ordered[i]
        parts.append(str(start) if start == end else f"{start}-{end}")
        i += 1
    return ",".join(parts)
