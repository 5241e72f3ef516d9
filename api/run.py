# api/run.py
# Launcher for the FastAPI app.
# - Prints a short banner on start
# - Builds the app through api.main:create_app (factory) and starts Uvicorn
# - If import/start fails, prints the full traceback before exiting non-zero

import os
import sys
import traceback


def main():
    print("============================================================")
    print("Starting Multi-LLM Proxy (api.run)")
    print("CWD       :", os.getcwd())
    print("============================================================", flush=True)

    try:
        import uvicorn
        host = os.getenv("HOST", "0.0.0.0")
        port = int(os.getenv("PORT", "3000"))
        print(f"Uvicorn serving on http://{host}:{port}", flush=True)
        uvicorn.run("api.main:create_app", factory=True, host=host, port=port, log_level="info")
    except Exception:
        print("api.run: FAILED to start the server", flush=True)
        traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
