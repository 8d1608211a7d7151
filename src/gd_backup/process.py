"""Blocking check that the game is not running."""

import logging
from typing import Callable, Iterable

import psutil

from .constants import GAME_PROCESS_NAMES

log = logging.getLogger("gd_backup")


def running_processes(names: Iterable[str]) -> list[str]:
    """Return names of live processes matching *names* (case-insensitive)."""
    wanted = {n.lower() for n in names}
    found: list[str] = []
    for proc in psutil.process_iter(["name"]):
        # process_iter leaves "name" as None when access is denied
        name = proc.info.get("name") or ""
        if name.lower() in wanted:
            found.append(name)
    return found


def wait_for_process_exit(
    names: Iterable[str] = GAME_PROCESS_NAMES,
    *,
    prompt: Callable[[str], str] = input,
) -> int:
    """Block until no process in *names* is running.

    Asks the operator to close the game and waits on *prompt* between
    checks.  Returns how many times the operator was prompted.
    """
    names = tuple(names)
    prompts = 0
    while True:
        running = running_processes(names)
        if not running:
            return prompts
        log.warning(
            "%s is running - please close it, then press Enter...", running[0],
        )
        prompt("")
        prompts += 1
