"""Handler for the / endpoint."""

import logging

from fastapi import APIRouter
from fastapi.responses import HTMLResponse

logger = logging.getLogger(__name__)
router = APIRouter(tags=["root"])

index_page = """
<html>
    <head>
        <title>AnyCoder service</title>
    </head>
    <body style='font-family: sans-serif;text-align:center;'>
        <h1>AnyCoder service</h1>
        <p>Generate code in any language with AI models</p>
        <div><a href="docs">Swagger UI</a></div>
        <div><a href="redoc">ReDoc</a></div>
    </body>
</html>
"""


@router.get("/", response_class=HTMLResponse)
def root_endpoint_handler() -> HTMLResponse:
    """Handle request to the / endpoint."""
    logger.info("Response to / endpoint")
    return HTMLResponse(index_page)
