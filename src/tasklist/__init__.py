"""
Task List package.

- ``tasklist.main``: the FastAPI task store service (``app``, ``create_app``)
- ``tasklist.client``: the task list client holding local state over httpx
- ``tasklist.console``: an interactive console front end for the client

The service app is not imported here so that using the client does not open
a database.
"""

__version__ = "0.1.0"
