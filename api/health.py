"""Health check endpoint."""

from http.server import BaseHTTPRequestHandler
import json

from src.utils.config import AppConfig
from src.utils.dates import to_iso, utc_now
from src.utils.logging import get_structured_logger

logger = get_structured_logger(__name__)


class handler(BaseHTTPRequestHandler):
    """Health check handler for Vercel serverless function."""

    def do_GET(self):
        """Report liveness with the service name and version."""
        self.send_response(200)
        self.send_header('Content-Type', 'application/json')
        self.end_headers()
        response = json.dumps({
            "status": "ok",
            "service": AppConfig.SERVICE_NAME,
            "version": AppConfig.SERVICE_VERSION,
            "timestamp": to_iso(utc_now()),
        })
        self.wfile.write(response.encode('utf-8'))

    def do_POST(self):
        self.do_GET()

    def log_message(self, format, *args):
        """Route http.server access logs through the structured logger."""
        logger.debug(format % args)
