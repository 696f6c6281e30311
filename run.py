#!/usr/bin/env python3
"""
Script para iniciar a API do interpretador BASIC
"""
import sys

import uvicorn

from config import configure_logging, load_settings


def main():
    settings = load_settings()
    configure_logging(settings.log_level)

    print("🚀 BASIC Interpreter API")
    print("=" * 50)
    print(f"🔄 Iniciando servidor FastAPI em http://{settings.host}:{settings.port} ...")

    try:
        uvicorn.run(
            "main:app",
            host=settings.host,
            port=settings.port,
            reload=settings.reload,
            log_level=settings.log_level.lower(),
        )
    except KeyboardInterrupt:
        print("\n👋 Servidor interrompido. Até logo!")
    return 0


if __name__ == "__main__":
    sys.exit(main())
