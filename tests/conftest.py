import http.server
import pathlib
import socket
import threading
import time

import pytest


class Route:
    def __init__(self, status=200, body=b"", delay_s=0, trickle_s=0):
        self.status = status
        self.body = body
        self.delay_s = delay_s
        # Pause between each two-byte write of the body.
        self.trickle_s = trickle_s


class ConfigServer:
    """Serves canned responses, or the current contents of a file, by path."""
    def __init__(self):
        self.routes = {}
        self.requests = []
        self.httpd = None

    def url(self, path):
        host, port = self.httpd.server_address[:2]
        return "http://%s:%d%s" % (host, port, path)

    def serve(self, path, body=b"", status=200, delay_s=0, trickle_s=0):
        self.routes[path] = Route(status=status, body=body, delay_s=delay_s, trickle_s=trickle_s)
        return self.url(path)


def _handler(server):
    class Handler(http.server.BaseHTTPRequestHandler):
        def do_GET(self):
            server.requests.append(self.path)
            route = server.routes.get(self.path)
            if route is None:
                route = Route(status=404, body=b"not found")
            if route.delay_s:
                time.sleep(route.delay_s)
            body = route.body
            if isinstance(body, pathlib.Path):
                body = body.read_bytes()
            self.send_response(route.status)
            self.send_header("Content-Length", str(len(body)))
            self.end_headers()
            if not route.trickle_s:
                self.wfile.write(body)
                return
            try:
                for i in range(0, len(body), 2):
                    self.wfile.write(body[i:i + 2])
                    time.sleep(route.trickle_s)
            except OSError:
                pass

        def log_message(self, format, *args):
            pass

    return Handler


@pytest.fixture
def config_server():
    server = ConfigServer()
    server.httpd = http.server.ThreadingHTTPServer(("127.0.0.1", 0), _handler(server))
    thread = threading.Thread(target=server.httpd.serve_forever, daemon=True)
    thread.start()
    try:
        yield server
    finally:
        server.httpd.shutdown()
        server.httpd.server_close()


@pytest.fixture
def closed_port_url():
    s = socket.socket()
    s.bind(("127.0.0.1", 0))
    port = s.getsockname()[1]
    s.close()
    return "http://127.0.0.1:%d/rclone.conf" % port


@pytest.fixture(autouse=True)
def no_proxies(monkeypatch):
    for name in ["HTTP_PROXY", "HTTPS_PROXY", "ALL_PROXY", "http_proxy", "https_proxy", "all_proxy"]:
        monkeypatch.delenv(name, raising=False)
