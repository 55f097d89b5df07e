"""
Interactive console front end for the task list.

Usage:
    tasklist-console            (talks to TASKLIST_API_URL)
"""
from __future__ import annotations

import asyncio
import logging
from typing import List, Optional

import httpx

from .client import TaskListClient
from .logging_setup import setup_logging
from .settings import get_settings

logger = logging.getLogger(__name__)

HELP = "commands: ls | add <text> | toggle <id> | rm <id> | help | quit"
EMPTY = "(no tasks)"


def _listing(client: TaskListClient) -> List[str]:
    return client.render() or [EMPTY]


async def handle_command(client: TaskListClient, line: str) -> Optional[List[str]]:
    """
    Run one console command against ``client``.

    Returns the lines to print, or None when the user asked to quit.
    """
    cmd, _, arg = line.strip().partition(" ")
    cmd = cmd.lower()
    arg = arg.strip()

    if not cmd:
        return []
    if cmd in {"quit", "exit", "q"}:
        return None
    if cmd in {"help", "?"}:
        return [HELP]
    if cmd in {"ls", "list"}:
        return _listing(client)

    if cmd == "add":
        client.pending_text = arg
        task = await client.submit()
        if task is None:
            return ["nothing added"]
        return _listing(client)

    if cmd in {"toggle", "rm"}:
        try:
            task_id = int(arg)
        except ValueError:
            return [f"usage: {cmd} <id>"]
        if cmd == "toggle":
            ok = await client.toggle(task_id)
        else:
            ok = await client.delete(task_id)
        if not ok:
            return [f"{cmd} {task_id} did not apply"]
        return _listing(client)

    return [f"unknown command: {cmd}", HELP]


async def run_console(api_url: str, transport: Optional[httpx.AsyncBaseTransport] = None) -> None:
    """Load the list once, then read commands until quit or end of input."""
    async with httpx.AsyncClient(base_url=api_url, transport=transport) as http:
        client = TaskListClient(http)
        await client.load()
        print("\n".join(_listing(client)))
        while True:
            try:
                line = await asyncio.to_thread(input, "> ")
            except EOFError:
                break
            output = await handle_command(client, line)
            if output is None:
                break
            for out in output:
                print(out)


# PUBLIC_INTERFACE
def main() -> None:
    """Entry point for ``tasklist-console``."""
    settings = get_settings()
    setup_logging(settings.log_level)
    logger.debug("Using API at %s", settings.api_url)
    try:
        asyncio.run(run_console(settings.api_url))
    except KeyboardInterrupt:
        pass


if __name__ == "__main__":
    main()
