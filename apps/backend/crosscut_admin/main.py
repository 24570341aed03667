"""
Name: Backend ASGI Entrypoint (crosscut_admin.main)

Responsibilities:
  - Re-export the FastAPI app for ASGI servers and tooling
  - Preserve the import path used by uvicorn and tests
  - Keep this module side-effect free beyond importing crosscut_admin.api.main

Collaborators:
  - crosscut_admin.api.main: module that constructs and exposes the FastAPI app
  - ASGI servers (uvicorn) configured to import crosscut_admin.main:app

Notes/Constraints:
  - No configuration or IO should live here; keep it thin and predictable
  - Changing this path is a deployment-breaking change for infra scripts
"""

from crosscut_admin.api.main import app

__all__ = ["app"]
