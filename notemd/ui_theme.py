"""UI theme definitions and selection helpers.

Themes are ANSI palettes for the picker chrome: borders, titles, the search
prompt and the highlighted result row.
"""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class UITheme:
    """Semantic ANSI palette used by the renderer."""

    name: str
    reset: str
    border: str
    border_active: str
    title: str
    prompt: str
    result: str
    result_selected: str
    empty_hint: str


DEFAULT_THEME = UITheme(
    name="default",
    reset="\033[0m",
    border="\033[2m",
    border_active="\033[33m",
    title="\033[1m",
    prompt="\033[1;38;5;81m",
    result="\033[38;5;252m",
    result_selected="\033[1;92m",
    empty_hint="\033[2;38;5;250m",
)

OCEAN_THEME = UITheme(
    name="ocean",
    reset="\033[0m",
    border="\033[2;38;5;31m",
    border_active="\033[38;5;45m",
    title="\033[1;38;5;45m",
    prompt="\033[1;38;5;45m",
    result="\033[38;5;153m",
    result_selected="\033[1;38;5;117m",
    empty_hint="\033[2;38;5;110m",
)

PLAIN_THEME = UITheme(
    name="plain",
    reset="",
    border="",
    border_active="",
    title="",
    prompt="",
    result="",
    result_selected="",
    empty_hint="",
)

_THEMES: dict[str, UITheme] = {
    theme.name: theme for theme in (DEFAULT_THEME, OCEAN_THEME, PLAIN_THEME)
}


def available_theme_names() -> tuple[str, ...]:
    """Return selectable theme names in stable order."""
    return tuple(_THEMES)


def resolve_theme(name: str | None) -> UITheme:
    """Return the theme called ``name``, falling back to the default."""
    if name is None:
        return DEFAULT_THEME
    return _THEMES.get(name.strip().lower(), DEFAULT_THEME)
