"""
Local preview server for the site root (data/, assets/, resume.pdf).

Used when no deployment base path is configured: the content loaders then
fetch from this server exactly as they would from the real deployment.
It listens on 127.0.0.1, so the URLs it hands out only work on this machine.
"""
import functools
import logging
import socket
import threading
from http.server import SimpleHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

logger = logging.getLogger(__name__)


class _QuietHandler(SimpleHTTPRequestHandler):
    def log_message(self, format, *args):
        logger.debug("%s - %s", self.address_string(), format % args)


class SiteServer:
    def __init__(self):
        self.server = None
        self.server_thread = None
        self.root = None
        self.port = None
        self.is_running = False

    def start_server(self, root: Path, host: str = "127.0.0.1") -> str:
        """
        Serve `root` on a free port in a background thread and return its base URL.
        Any server already running is stopped first.
        """
        if self.is_running:
            self.stop_server()

        self.root = Path(root)
        self.port = self._find_free_port()
        handler = functools.partial(_QuietHandler, directory=str(self.root))
        self.server = ThreadingHTTPServer((host, self.port), handler)

        self.server_thread = threading.Thread(target=self.server.serve_forever, daemon=True)
        self.server_thread.start()
        self.is_running = True
        logger.info("Serving %s at %s", self.root, self.base_url)
        return self.base_url

    def stop_server(self):
        """Stop the server and release the port"""
        if self.server:
            self.server.shutdown()
            self.server.server_close()
            self.server = None

        if self.server_thread:
            self.server_thread.join(timeout=2)  # Wait up to 2 seconds
            self.server_thread = None

        self.is_running = False

    @property
    def base_url(self) -> str | None:
        if self.is_server_running():
            return f"http://127.0.0.1:{self.port}"
        return None

    def is_server_running(self) -> bool:
        return self.is_running and self.server is not None

    def _find_free_port(self) -> int:
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            s.bind(("", 0))
            s.listen(1)
            port = s.getsockname()[1]
        return port


# Global instance for the streamlit app
_site_server = SiteServer()


def serve_site(root: Path) -> str:
    """Base URL of the running preview server, starting it on first use."""
    if _site_server.is_server_running() and _site_server.root == Path(root):
        return _site_server.base_url
    return _site_server.start_server(root)


def cleanup_site_server():
    """Stop the preview server"""
    _site_server.stop_server()


def get_server_status() -> dict:
    return {
        "is_running": _site_server.is_server_running(),
        "url": _site_server.base_url,
        "root": str(_site_server.root) if _site_server.root else None,
    }
