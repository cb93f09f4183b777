"""Run the development server: ``python -m finmind``."""

from __future__ import annotations

from . import create_app


def main() -> None:
    app = create_app("development")
    config = app.config["FINMIND_CONFIG"]
    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
