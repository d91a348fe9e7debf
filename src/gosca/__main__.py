"""Allow running gosca as ``python -m gosca``."""

from .cli import app

if __name__ == "__main__":
    app()
