"""
Argosy help rendering.

render_help(command) prints, through rich:
- a usage line built from the command route, its options and operands;
- the command description;
- a table of visible child commands;
- option and operand sections (own options, then inherited ones).

Palette keys
- usage-label, program-name, description-section
- group-label, argument-description
- option-name, metavar, multiple-metavar
- children-title, children-table, children, children-description

Define a mapping named __styles__ in __main__ to override any palette entry;
colorful=False drops every style.
"""
from collections import defaultdict, deque

from rich.box import ROUNDED
from rich.console import Console, Group
from rich.containers import Lines
from rich.table import Table
from rich.text import Text

from .arguments import Arity
from .utils import Unset, coalesce, pluralize


def render_help(command, /, *, console=Unset, colorful=True):
    """
    Render help for `command` and return the printed renderable.
    """
    console = coalesce(console, Console())
    styles = defaultdict(str, {
        "usage-label": "bold #00E6FF",
        "program-name": "bold #FF4D94",
        "description-section": "italic #A3A3A3",

        "group-label": "bold #FFFFFF",
        "argument-description": "#9CA3AF",

        "option-name": "bold #00E6FF",
        "metavar": "bold #FFD600",
        "multiple-metavar": "bold italic #FFD600",

        "children-title": "bold #FFFFFF",
        "children-table": "#4B5563",
        "children": "bold #36C5F0",
        "children-description": "#9CA3AF",
    } | getattr(__import__("__main__"), "__styles__", {}))

    def styler(style):
        return styles[style] if colorful else ""

    def text(fragment, style=""):
        if not fragment:
            return Text("")
        if isinstance(fragment, Text):
            return fragment.copy() if colorful else Text(fragment.plain)
        return Text(str(fragment), styler(style))

    def metavar(argument):
        label = (argument.metavar or "value").upper()
        if argument.arity is Arity.MULTIPLE:
            return Text.assemble(text(label, "multiple-metavar"), " ...")
        return text(label, "metavar")

    def names(option):
        rendered = Text(", ").join(text(name, "option-name") for name in reversed(option.names))
        if option.arity is not Arity.NONE:
            rendered.append(" ").append(metavar(option))
        return rendered

    width = console.width
    options = [option for option in command.available_options() if not option.hidden]
    operands = [operand for operand in command.operands if not operand.hidden]
    children = [child for child in command.children.values() if not child.hidden]
    renders = []

    # usage: route, bracketed options, operands, then a command placeholder
    usage = Text()
    usage.append("usage", styler("usage-label")).append(": ")
    usage.append(text(" ".join(command.route), "program-name")).append(" ")
    offset = len(usage)

    inputs = deque(
        Text.assemble("[", names(option), "]") if not option.required else names(option)
        for option in options
    )
    for operand in operands:
        label = metavar(operand)
        inputs.append(label if operand.required else Text.assemble("[", label, "]"))
    if children:
        inputs.append(Text("<command>"))

    try:
        lines = Lines([inputs.popleft()])
    except IndexError:
        lines = Lines()
    while inputs:
        if len(lines[-1]) + 1 + len(input := inputs.popleft()) > width - offset:
            lines.append(input)
        else:
            lines[-1].append(Text(" ") + input)
    try:
        usage.append(lines.pop(0))
    except IndexError:
        pass
    for line in lines:
        usage.append("\n").append(" " * offset).append(line)
    renders.append(usage.append("\n"))

    if command.descr:
        renders.append(text(command.descr, "description-section").append("\n"))

    if children:
        table = Table(
            "name", "help",
            title=text(pluralize("subcommand" if command.parent else "command"), "children-title"),
            box=ROUNDED,
            style=styler("children-table"),
            header_style=styler("children-title"),
        )
        for child in children:
            spelled = ", ".join((child.name, *child.aliases))
            table.add_row(
                text(spelled, "children"),
                text(child.descr or "no description", "children-description"),
            )
        renders.append(table)

    padding, indent = 2, 24
    for label, arguments, render in (
        ("operand", operands, metavar),
        ("option", options, names),
    ):
        if not arguments:
            continue
        section = Text()
        section.append(text(pluralize(label), "group-label")).append(":\n")
        for argument in arguments:
            line = Text(" " * padding).append(render(argument))
            if descr := text(argument.descr, "argument-description"):
                if len(line) >= indent:
                    line.append("\n").append(" " * indent)
                else:
                    line.append(" " * (indent - len(line)))
                wrapped = descr.wrap(console, max(width - indent, 16))
                line.append(wrapped[0])
                for segment in wrapped[1:]:
                    line.append("\n").append(" " * indent).append(segment)
            section.append(line).append("\n")
        renders.append(section)

    if isinstance(renders[-1], Text):
        renders[-1].rstrip()
    renderable = Group(*renders)
    console.print(renderable)
    return renderable


__all__ = (
    "render_help",
)
