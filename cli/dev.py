"""Run the Jobly API locally.

Usage:
    uv run dev          # uvicorn with reload when APP_ENV=local
"""


def main() -> None:
    """Serve `jobly.main:create_app` with the configured host and port."""
    from jobly.main import run

    run()


if __name__ == "__main__":
    main()
