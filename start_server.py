"""
Server start script
"""
import uvicorn
import sys
from pathlib import Path

# Project root on the import path
project_root = Path(__file__).parent
sys.path.insert(0, str(project_root))

from config.settings import settings


if __name__ == "__main__":
    print("=" * 70)
    print(f"Starting ImmiDraft API on {settings.api_host}:{settings.api_port} ({settings.environment})")
    print("=" * 70)
    try:
        uvicorn.run(
            "immidraft.api.main:app",
            host=settings.api_host,
            port=settings.api_port,
            reload=settings.environment == "development",
            log_level=settings.log_level.lower()
        )
    except KeyboardInterrupt:
        print("\nServer stopped")
