"""
Interactive selection — pick one item from a list in the terminal.

Items are shown numbered, sorted by label.  The user answers with a
number, or with text that narrows the list (substring match first, then
closest matches by ``difflib``).  An empty answer or ``q`` cancels.
Everything is written to stderr so stdout stays usable.
"""

from __future__ import annotations

import difflib

import click

from proxylaunch.core.models.game import Choice

_CANCEL = ("", "q")


def filter_choices(choices: list[Choice], query: str) -> list[Choice]:
    """Choices whose label matches ``query``.

    Case-insensitive substring matches win; if there are none, the
    closest labels by similarity are returned instead.
    """
    needle = query.lower()
    hits = [c for c in choices if needle in c[0].lower()]
    if hits:
        return hits

    by_label = {c[0].lower(): c for c in choices}
    close = difflib.get_close_matches(needle, list(by_label), n=10, cutoff=0.5)
    return [by_label[label] for label in close]


def select(choices: list[Choice], prompt: str) -> str | None:
    """Let the user pick one choice; return its value or None."""
    if not choices:
        return None

    items = sorted(choices, key=lambda c: c[0].lower())

    while True:
        click.echo(err=True)
        for i, (label, _) in enumerate(items, 1):
            click.echo(f"  {i:>3}. {label}", err=True)

        answer = click.prompt(
            f"{prompt} (number or filter, empty to cancel)",
            default="",
            show_default=False,
            err=True,
        ).strip()

        if answer.lower() in _CANCEL:
            return None

        if answer.isdigit():
            index = int(answer)
            if 1 <= index <= len(items):
                return items[index - 1][1]
            click.secho(f"No item {index}", fg="yellow", err=True)
            continue

        hits = filter_choices(items, answer)
        if len(hits) == 1:
            return hits[0][1]
        if not hits:
            click.secho(f"Nothing matches '{answer}'", fg="yellow", err=True)
            continue
        items = hits
