"""
Run the Verified ID verifier API server

Reads its configuration from the environment (see
verified_id_verifier.config.loader). Without VERIFIER_AUTHORITY set the
server starts with a local test configuration.
"""

import os

import uvicorn

from verified_id_verifier.api import app

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    print("=" * 60)
    print("Starting Verified ID Verifier API Server")
    print("=" * 60)
    print("\nEndpoints:")
    print(f"  - Docs: http://localhost:{port}/docs")
    print(f"  - Health: http://localhost:{port}/health")
    print("\nVerifier endpoints:")
    print("  - GET /api/verifier/presentation-request")
    print("  - POST /api/verifier/presentation-request-callback")
    print("  - GET /api/verifier/presentation-response?id=...")
    print("  - GET /api/verifier/qrcode?url=...")
    print("\n" + "=" * 60)

    uvicorn.run(
        app,
        host="0.0.0.0",
        port=port,
        log_level="info",
        access_log=True,
    )
