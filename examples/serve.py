# /// script
# requires-python = ">=3.9"
# dependencies = [
#     "revalidate[server]",
# ]
#
# [tool.uv.sources]
# revalidate = { path = "../", editable = true }
# ///

import logging

import uvicorn

from revalidate import ServerOptions, ValidationServer
from revalidate.asgi import ValidationApp

logging.basicConfig(level=logging.INFO)

app = ValidationApp(ValidationServer(ServerOptions(granularity=10)))

if __name__ == "__main__":
    # Point the harness at it with: revalidate check --target http://localhost:20752 --granularity 10
    uvicorn.run(app, host="localhost", port=20752)
