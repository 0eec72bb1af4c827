"""Backend entrypoint. Starts uvicorn with host and port from env."""
import os
import uvicorn

# Import app directly so frozen or zipped builds don't depend on uvicorn's
# string-based import.
from captable.main import app


def main() -> None:
    host = os.environ.get("CAPTABLE_HOST", "127.0.0.1")
    port = int(os.environ.get("CAPTABLE_PORT", "8001"))
    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
