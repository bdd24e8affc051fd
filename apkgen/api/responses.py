"""Response types for the build API."""

from typing import Callable

import anyio
from fastapi.responses import FileResponse
from starlette.types import Receive, Scope, Send


class OneShotFileResponse(FileResponse):
    """File response that runs ``on_complete`` once streaming ends.

    ``on_complete`` runs even when the client disconnects mid-stream.
    """

    def __init__(self, path, on_complete: Callable[[], object], **kwargs):
        super().__init__(path, **kwargs)
        self.on_complete = on_complete

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        try:
            await super().__call__(scope, receive, send)
        finally:
            with anyio.CancelScope(shield=True):
                await anyio.to_thread.run_sync(self.on_complete)
