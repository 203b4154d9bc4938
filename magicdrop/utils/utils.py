import json
from typing import Any, Callable, Optional

from termcolor import cprint


def read_json(path, encoding: Optional[str] = None) -> list | dict:
    with open(path, encoding=encoding) as file:
        return json.load(file)


def short_address(address):
    return address[:6] + '...' + address[-4:]


def show_text(text: str, subtext: str = '', color: str = 'green'):
    cprint(f'\n{text}', color, attrs=['bold'])
    if subtext:
        cprint(subtext, 'white')


def confirm(message: str, default: bool = True) -> bool:
    hint = 'Y/n' if default else 'y/N'
    answer = input(f'{message} ({hint}): ').strip().lower()
    if not answer:
        return default
    return answer in ('y', 'yes')


def prompt_text(message: str, default: Any = None, cast: Callable[[str], Any] = str) -> Any:
    """Ask until the answer converts with ``cast``; an empty answer returns ``default`` when there is one."""
    suffix = f' [{default}]' if default is not None else ''
    while True:
        answer = input(f'{message}{suffix}: ').strip()
        if not answer and default is not None:
            return default
        try:
            return cast(answer)
        except ValueError as err:
            cprint(f'Invalid value: {err}', 'red')
