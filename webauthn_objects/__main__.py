"""Allow ``python -m webauthn_objects``."""
from .cli import run

if __name__ == "__main__":  # pragma: no cover - convenience entry point.
    run()
