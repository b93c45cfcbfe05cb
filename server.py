import logging

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import HTMLResponse, JSONResponse, Response

from sapling.errors import ParseError, locate
from sapling.parser import parse
from sapling.serializer import serialize, to_json

logger = logging.getLogger(__name__)

app = FastAPI(title="Sapling Parser Testbed")

# Allow cross-origin requests from any origin so frontends can hit this test server freely.
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["*"],
    allow_headers=["*"],
)


class UndecodableBody(Exception):
    def __init__(self, error: UnicodeDecodeError) -> None:
        super().__init__(str(error))
        self.error = error


async def read_source(request: Request) -> str:
    body = await request.body()
    try:
        return body.decode("utf-8")
    except UnicodeDecodeError as error:
        raise UndecodableBody(error) from error


@app.exception_handler(UndecodableBody)
async def undecodable_body_handler(
    request: Request, exc: UndecodableBody
) -> JSONResponse:
    logger.info("rejected %s: body is not UTF-8", request.url.path)
    return JSONResponse(
        {
            "kind": "UnicodeDecodeError",
            "message": str(exc.error),
            "offset": exc.error.start,
        },
        status_code=400,
    )


def error_response(error: ParseError, source: str) -> JSONResponse:
    line, column = locate(source, error.offset)
    logger.info("rejected document: %s", error.message)
    return JSONResponse(
        {
            "kind": error.kind,
            "message": error.message,
            "offset": error.offset,
            "line": line,
            "column": column,
            "literal": getattr(error, "literal", None),
        },
        status_code=422,
    )


@app.post("/parse")
async def parse_endpoint(request: Request) -> Response:
    source = await read_source(request)
    try:
        root = parse(source)
    except ParseError as error:
        return error_response(error, source)
    # JSONResponse goes through json.dumps, which can't encode deep trees
    return Response(to_json(root), media_type="application/json")


@app.post("/canonical")
async def canonical_endpoint(request: Request) -> Response:
    source = await read_source(request)
    try:
        root = parse(source)
    except ParseError as error:
        return error_response(error, source)
    return HTMLResponse(serialize(root))


@app.get("/health")
async def health_endpoint() -> JSONResponse:
    return JSONResponse({"status": "ok"})

if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

# Usage:
# uv run server.py
