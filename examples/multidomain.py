"""
Serve several hostnames from one process.

Run with:
    uvicorn multidomain:app --host 127.0.0.1 --port 8000

Then try:
    curl -H "Host: api.example.com" http://127.0.0.1:8000/
    curl -H "Host: acme.example.com" http://127.0.0.1:8000/
"""

import logging
import re

from vhost import Logger, VHostApp, json_response, text_response

logger = Logger(name="vhost", json_logs=False, level=logging.DEBUG)
app = VHostApp(logger=logger)


@app.vhost("api.example.com")
async def api(request, call_next):
    return json_response({"host": request.vhost.host, "path": request.path})


@app.vhost(re.compile(r"(?:www\.)?example\.com"))
async def site(request, call_next):
    return text_response("Welcome to example.com")


# Tenants: the wildcard label is available as request.vhost[0]
@app.vhost("*.example.com")
async def tenant(request, call_next):
    return text_response(f"Hello, {request.vhost[0]}")


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(app, host="127.0.0.1", port=8000)
