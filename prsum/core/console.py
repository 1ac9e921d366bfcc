"""Shared rich console and colored status output.

Colors follow one convention across the tool: red for errors, yellow for
warnings, blue for instructions and progress, green for confirmations.
Messages are printed with markup disabled so text coming from git, GitHub or
exceptions is shown verbatim.
"""
from rich.console import Console

console = Console(highlight=False)


def error(message: str) -> None:
    console.print(message, style="red", markup=False)


def warn(message: str) -> None:
    console.print(message, style="yellow", markup=False)


def info(message: str) -> None:
    console.print(message, style="blue", markup=False)


def success(message: str) -> None:
    console.print(message, style="green", markup=False)
