#!/usr/bin/env python3
# backend/run.py
"""
Development server runner for the SkillBridge API.
Creates missing tables on startup and reloads on code changes.
"""
import os
import sys
from pathlib import Path

# Add backend to path
backend_dir = Path(__file__).parent
sys.path.insert(0, str(backend_dir))
os.chdir(backend_dir)

import uvicorn

from app.core.config import settings

if __name__ == "__main__":
    port = int(os.getenv("PORT", "8000"))
    print(f"🚀 Starting SkillBridge API ({settings.environment})")
    print(f"🌐 Access at: http://localhost:{port}")
    print(f"📚 API Docs: http://localhost:{port}/docs")

    uvicorn.run("app.main:app", host="0.0.0.0", port=port, reload=True, log_level=settings.log_level.lower())
