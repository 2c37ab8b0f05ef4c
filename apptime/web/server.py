"""
Flask server exposing usage data, with the tracker running alongside.
"""
from flask import Flask
import socket
from ..config import log, settings
from ..services import QueryService
from .routes import register_routes


def find_free_port(preferred: int = 5050) -> int:
    """Try preferred port, fall back if unavailable."""
    for port in (preferred, 8080, 5000):
        with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
            try:
                s.bind(("127.0.0.1", port))
                return port
            except OSError:
                continue
    raise RuntimeError(f"No free port found ({preferred}/8080/5000 busy)")


def create_app(queries: QueryService) -> Flask:
    """Create Flask app serving the query API."""
    app = Flask(__name__)
    register_routes(app, queries)
    return app


def main() -> None:
    """Run tracker in the background and serve the API until interrupted."""
    from ..tracker import create_tracker, interrupt_on_sigterm

    loop = create_tracker()
    queries = QueryService(loop.store)
    app = create_app(queries)
    interrupt_on_sigterm()

    loop.start()
    try:
        port = find_free_port(settings.web_port)
        log(f"Serving usage API on http://127.0.0.1:{port}")
        app.run(host="127.0.0.1", port=port, debug=False, use_reloader=False)
    except KeyboardInterrupt:
        print("\nServer stopping.")
    finally:
        loop.stop()
        queries.close()
        log("tracker_stop")


if __name__ == "__main__":
    main()
