"""Run the calculator with Flask's development server."""

import os

from app import create_app
from common.logging import get_logger


def _resolve_port() -> int:
    value = os.getenv("PHYSICS_CALC_PORT") or os.getenv("PORT") or "5001"
    try:
        return int(value)
    except ValueError as exc:
        raise SystemExit(f"Invalid port '{value}'. Set PHYSICS_CALC_PORT to a number.") from exc


def main() -> None:
    host = os.getenv("PHYSICS_CALC_HOST", "127.0.0.1")
    port = _resolve_port()
    get_logger().info("serving on http://%s:%d", host, port)
    create_app().run(host=host, port=port, debug=False)


if __name__ == "__main__":
    main()
