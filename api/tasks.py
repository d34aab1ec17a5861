"""Task CRUD endpoint for Vercel.

Routes:
    GET    /api/tasks          list tasks, newest first
    POST   /api/tasks          create a task
    GET    /api/tasks/{id}     fetch one task
    PUT    /api/tasks/{id}     partially update a task
    DELETE /api/tasks/{id}     delete a task

vercel.json rewrites /api/tasks/{id} to /api/tasks?id={id}; both forms are
accepted.
"""

from http.server import BaseHTTPRequestHandler, HTTPServer
from typing import Optional
from urllib.parse import parse_qs, unquote, urlsplit

from src.services import task_api
from src.services.app_context import AppContext, create_app_context
from src.utils.config import AppConfig
from src.utils.logging import correlation_context, get_structured_logger
from src.utils.logging_config import LoggingConfig

LoggingConfig.setup_logging()
logger = get_structured_logger(__name__)

COLLECTION_PATH = "/api/tasks"

# Sentinel route results
_COLLECTION = object()
_UNKNOWN = object()


def resolve_route(path: str):
    """
    Map a request path to the collection, a task id, or an unknown route.

    Returns ``_COLLECTION``, the task id string, or ``_UNKNOWN``.
    """
    parts = urlsplit(path)
    route = parts.path.rstrip("/")
    query_id = parse_qs(parts.query).get("id", [None])[0]

    if route == COLLECTION_PATH:
        return query_id if query_id else _COLLECTION
    if route.startswith(COLLECTION_PATH + "/"):
        task_id = unquote(route[len(COLLECTION_PATH) + 1:])
        if task_id and "/" not in task_id:
            return task_id
    return _UNKNOWN


class handler(BaseHTTPRequestHandler):
    """Vercel serverless function handler for tasks."""

    # Built once per process; tests swap in their own context
    context: AppContext = create_app_context()

    def _read_body(self) -> bytes:
        """Raw request body; decoding happens inside the endpoint logic."""
        content_length = int(self.headers.get('Content-Length', 0) or 0)
        if content_length <= 0:
            return b""
        return self.rfile.read(content_length)

    def _send(self, response: dict, correlation_id: Optional[str] = None) -> None:
        self.send_response(response["statusCode"])
        for name, value in response["headers"].items():
            self.send_header(name, value)
        if correlation_id:
            self.send_header(LoggingConfig.LOG_CORRELATION_ID_HEADER, correlation_id)
        self.end_headers()
        self.wfile.write(response["body"].encode('utf-8'))

    def _route(self, method: str) -> dict:
        route = resolve_route(self.path)
        store = self.context.store

        if route is _UNKNOWN:
            return task_api.json_response(404, {"error": "Not found"})
        if route is _COLLECTION and method == "GET":
            return task_api.list_tasks(store)
        if route is _COLLECTION and method == "POST":
            return task_api.create_task(store, self._read_body())
        if route is not _COLLECTION and method == "GET":
            return task_api.get_task(store, route)
        if route is not _COLLECTION and method == "PUT":
            return task_api.update_task(store, route, self._read_body())
        if route is not _COLLECTION and method == "DELETE":
            return task_api.delete_task(store, route)

        allowed = "GET, POST" if route is _COLLECTION else "GET, PUT, DELETE"
        return task_api.json_response(
            405, {"error": "Method not allowed"}, headers={"Allow": allowed}
        )

    def _dispatch(self, method: str) -> None:
        incoming_id = self.headers.get(LoggingConfig.LOG_CORRELATION_ID_HEADER)
        with correlation_context(incoming_id) as correlation_id:
            try:
                response = self._route(method)
            except Exception:
                # e.g. a non-numeric Content-Length header
                logger.exception("Error handling request", http_method=method)
                response = task_api.internal_error()

            logger.info(
                f"{method} {self.path}",
                http_method=method,
                status_code=response["statusCode"],
            )
            self._send(response, correlation_id)

    def do_GET(self):
        self._dispatch("GET")

    def do_POST(self):
        self._dispatch("POST")

    def do_PUT(self):
        self._dispatch("PUT")

    def do_DELETE(self):
        self._dispatch("DELETE")

    def log_message(self, format, *args):
        """Route http.server access logs through the structured logger."""
        logger.debug(format % args)


def run(host: str = AppConfig.DEV_SERVER_HOST, port: int = AppConfig.DEV_SERVER_PORT) -> None:
    """Serve the tasks endpoint locally, one request at a time."""
    server = HTTPServer((host, port), handler)
    logger.info("Development server listening", host=host, port=port)
    try:
        server.serve_forever()
    except KeyboardInterrupt:
        logger.info("Development server stopped")
    finally:
        server.server_close()


if __name__ == "__main__":
    run()
