import os
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

STYLE_ENV_VAR = "TR33DR4W_STYLE"


@dataclass(frozen=True)
class Style:
    branch: str  # connector for a child that has later siblings
    end: str  # connector for the last child
    pipe: str  # continuation under an ancestor with later siblings
    empty: str  # continuation under a last-child ancestor


class BranchStyle(str, Enum):
    THIN = "thin"
    THICK = "thick"
    DOUBLE = "double"
    ASCII = "ascii"

    @property
    def glyphs(self) -> Style:
        return _STYLES[self]


_STYLES = {
    BranchStyle.THIN: Style(branch="├── ", end="└── ", pipe="│   ", empty="    "),
    BranchStyle.THICK: Style(branch="┣━━ ", end="┗━━ ", pipe="┃   ", empty="    "),
    BranchStyle.DOUBLE: Style(branch="╠══ ", end="╚══ ", pipe="║   ", empty="    "),
    BranchStyle.ASCII: Style(branch="|-- ", end="`-- ", pipe="|   ", empty="    "),
}
_ALIASES = {"plain": BranchStyle.THIN}

DEFAULT_STYLE = BranchStyle.THICK
AVAILABLE_STYLES = [style.value for style in BranchStyle]

StyleLike = Union[Style, BranchStyle, str, None]


def resolve_style_name(name: Optional[str]) -> BranchStyle:
    """Map a user-supplied name to a registered style, defaulting quietly."""
    if not name:
        return DEFAULT_STYLE
    key = name.strip().lower()
    if key in _ALIASES:
        return _ALIASES[key]
    try:
        return BranchStyle(key)
    except ValueError:
        return DEFAULT_STYLE


def get_style(style: StyleLike = None) -> Style:
    if isinstance(style, Style):
        return style
    if isinstance(style, BranchStyle):
        return style.glyphs
    if style is None:
        return DEFAULT_STYLE.glyphs
    return resolve_style_name(style).glyphs


def get_active_style() -> BranchStyle:
    return resolve_style_name(os.getenv(STYLE_ENV_VAR))


def set_active_style(name: Union[BranchStyle, str]) -> BranchStyle:
    style = name if isinstance(name, BranchStyle) else resolve_style_name(name)
    os.environ[STYLE_ENV_VAR] = style.value
    return style
