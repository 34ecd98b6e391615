from dataclasses import dataclass, replace
from typing import Any, Mapping

from printbridge.printing.exceptions import InvalidPrintOptionError

ORIENTATIONS = frozenset({"portrait", "landscape"})
SCALES = frozenset({"noscale", "shrink", "fit"})
SIDES = frozenset({"simplex", "duplex", "duplexshort", "duplexlong"})

_TRUTHY = frozenset({"true", "1", "on"})


def parse_bool(value: Any) -> bool | None:
    """Interpret loose form/query values. Missing or empty gives None."""
    if isinstance(value, bool):
        return value
    if value is None or value == "":
        return None
    return str(value).lower() in _TRUTHY


@dataclass(frozen=True)
class PrintOptions:
    """Settings shared by every submission derived from one document."""

    printer: str | None = None
    paper_size: str | None = None
    copies: int | None = None
    orientation: str | None = None
    scale: str | None = None
    side: str | None = None
    monochrome: bool = False
    pages: str | None = None
    mono_pages: str | None = None

    def __post_init__(self) -> None:
        if self.copies is not None and self.copies < 1:
            raise InvalidPrintOptionError(f"copies must be >= 1, got {self.copies}")
        _check_choice("orientation", self.orientation, ORIENTATIONS)
        _check_choice("scale", self.scale, SCALES)
        _check_choice("side", self.side, SIDES)

    @classmethod
    def from_params(cls, params: Mapping[str, Any]) -> "PrintOptions":
        """Build options from loosely typed request parameters.

        `portrait` wins over `landscape` when both are set.
        """
        orientation = None
        if parse_bool(params.get("landscape")):
            orientation = "landscape"
        if parse_bool(params.get("portrait")):
            orientation = "portrait"
        copies = params.get("copies")
        try:
            copies_value = int(copies) if copies not in (None, "") else None
        except (TypeError, ValueError) as exc:
            raise InvalidPrintOptionError(f"copies must be an integer, got {copies!r}") from exc
        return cls(
            printer=params.get("printer") or None,
            paper_size=params.get("paperSize") or None,
            copies=copies_value,
            orientation=orientation,
            scale=params.get("scale") or None,
            side=params.get("side") or None,
            monochrome=bool(parse_bool(params.get("monochrome"))),
            pages=str(params["pages"]) if params.get("pages") else None,
            mono_pages=str(params["mono_pages"]) if params.get("mono_pages") else None,
        )

    def for_partition(self, pages: str, monochrome: bool) -> "PrintOptions":
        """Copy for one split submission: own page filter and color mode."""
        return replace(self, pages=pages, monochrome=monochrome, mono_pages=None)


def _check_choice(name: str, value: str | None, allowed: frozenset[str]) -> None:
    if value is not None and value not in allowed:
        raise InvalidPrintOptionError(
            f"{name} must be one of {sorted(allowed)}, got {value!r}"
        )
